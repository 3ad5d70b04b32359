"""
Tests for the DigiKey collector: URL building, page parsing and recording.
"""
import pytest
from unittest.mock import Mock
import sys
import os

sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from src.digikey import DigiKeyCollector, SITE_CONFIG
from src.digikey.parser import DigiKeyParser
from src.digikey.search import DigiKeySearcher
from src.models import Part, ScrapeResults, ScanEvent, FIELD, ROW_START, ROW_END


PRODUCT_PAGE = """
<html><body>
<table class="product-details">
  <tr><th>Quantity Available</th><td id=quantityavailable>1,234<br><a href="#">Ships today</a></td></tr>
</table>
<table id=pricing>
  <tr><th>Price Break</th><th>Unit Price</th><th>Extended Price</th></tr>
  <tr><td>1</td><td>0,452</td><td>0,45</td></tr>
  <tr><td>10</td><td>0,381</td><td>3,81</td></tr>
  <tr><td>1.000</td><td>0,1875</td><td>187,50</td></tr>
</table>
<table class="related">
  <tr><td>5</td><td>9,99</td><td>49,95</td></tr>
</table>
</body></html>
"""


def _response(text, status_code=200):
    r = Mock()
    r.status_code = status_code
    r.text = text
    return r


def _session_factory(*responses):
    session = Mock()
    session.get.side_effect = list(responses)
    return Mock(return_value=session), session


class TestDigiKeySearcher:
    """Test product URL construction."""

    def test_eur_uses_german_site(self):
        """Should select the German regional page for EUR"""
        searcher = DigiKeySearcher(SITE_CONFIG)
        url = searcher.product_url("296-1395-5-ND", "EUR")
        assert url == (
            "http://search.digikey.de/scripts/DkSearch/dksus.dll"
            "?Detail&site=de;lang=de&name=296-1395-5-ND"
        )

    def test_usd_uses_default_page(self):
        searcher = DigiKeySearcher(SITE_CONFIG)
        url = searcher.product_url("296-1395-5-ND", "USD")
        assert url.endswith("?Detail&name=296-1395-5-ND")

    def test_unknown_currency_falls_back(self):
        searcher = DigiKeySearcher(SITE_CONFIG)
        assert searcher.product_url("X", "GBP") == searcher.product_url("X", "USD")

    def test_order_code_is_quoted(self):
        """Should URL-quote order codes"""
        searcher = DigiKeySearcher(SITE_CONFIG)
        assert searcher.product_url("A B/C", "USD").endswith("name=A%20B%2FC")


class TestDigiKeyParser:
    """Test scan event extraction."""

    def test_availability_event(self):
        """Should take the text before the first child tag"""
        events = DigiKeyParser(SITE_CONFIG).scan(PRODUCT_PAGE)
        assert events[0] == ScanEvent(FIELD, "availability", "1,234")

    def test_pricing_rows(self):
        """Should emit one row per two-cell pricing row, skipping headers"""
        events = DigiKeyParser(SITE_CONFIG).scan(PRODUCT_PAGE)
        rows = [e for e in events if e.kind == ROW_START]
        assert len(rows) == 3
        assert events[1:5] == [
            ScanEvent(ROW_START),
            ScanEvent(FIELD, "quantity", "1"),
            ScanEvent(FIELD, "price", "0,452"),
            ScanEvent(ROW_END),
        ]

    def test_rows_outside_pricing_table_ignored(self):
        """Should not read price data after the pricing table closes"""
        events = DigiKeyParser(SITE_CONFIG).scan(PRODUCT_PAGE)
        values = [e.value for e in events if e.name == "quantity"]
        assert "5" not in values

    def test_id_case_insensitive(self):
        html = '<td ID="QuantityAvailable">7</td>'
        assert DigiKeyParser(SITE_CONFIG).scan(html) == [ScanEvent(FIELD, "availability", "7")]

    def test_empty_page(self):
        assert DigiKeyParser(SITE_CONFIG).scan("") == []
        assert DigiKeyParser(SITE_CONFIG).scan("<html><p>No results</p></html>") == []


class TestDigiKeyCollector:
    """Test collect()."""

    def test_records_availability_and_breaks(self):
        """Should strip thousands separators and normalise prices"""
        factory, session = _session_factory(_response(PRODUCT_PAGE))
        collector = DigiKeyCollector(session_factory=factory)
        part = Part(index=0, key="R1", order_codes={"DigiKey": "ABC123"})
        results = ScrapeResults()

        collector.collect(part, "EUR", results)

        assert results.availability(part, "DigiKey") == 1234
        assert results.sorted_breaks("DigiKey") == [1, 10, 1000]
        assert results.price(part, "DigiKey", 1) == "0.452"
        assert results.price(part, "DigiKey", 1000) == "0.1875"
        session.close.assert_called_once()

    def test_requests_regional_url(self):
        factory, session = _session_factory(_response(PRODUCT_PAGE))
        collector = DigiKeyCollector({"timeout": 5}, session_factory=factory)
        part = Part(index=0, key="R1", order_codes={"DigiKey": "ABC123"})

        collector.collect(part, "EUR", ScrapeResults())

        args, kwargs = session.get.call_args
        assert args[0].endswith("site=de;lang=de&name=ABC123")
        assert kwargs["timeout"] == 5

    def test_empty_order_code_skips_fetch(self):
        """Should not create a session for parts without a DigiKey code"""
        factory, session = _session_factory()
        collector = DigiKeyCollector(session_factory=factory)
        part = Part(index=0, key="R2", order_codes={"DigiKey": ""})
        results = ScrapeResults()

        collector.collect(part, "EUR", results)

        factory.assert_not_called()
        assert results.availability(part, "DigiKey") is None

    def test_failed_fetch_leaves_part_empty(self):
        """Should treat HTTP errors as missing data"""
        factory, session = _session_factory(_response("Server Error", status_code=500))
        collector = DigiKeyCollector(session_factory=factory)
        part = Part(index=0, key="R1", order_codes={"DigiKey": "ABC123"})
        results = ScrapeResults()

        collector.collect(part, "USD", results)

        assert results.availability(part, "DigiKey") is None
        assert results.sorted_breaks("DigiKey") == []
        session.close.assert_called_once()

    def test_session_closed_when_fetch_raises(self):
        session = Mock()
        session.get.side_effect = RuntimeError("unexpected")
        collector = DigiKeyCollector(session_factory=Mock(return_value=session))
        part = Part(index=0, key="R1", order_codes={"DigiKey": "ABC123"})

        with pytest.raises(RuntimeError):
            collector.collect(part, "EUR", ScrapeResults())
        session.close.assert_called_once()

    def test_unreadable_availability_ignored(self):
        collector = DigiKeyCollector(session_factory=Mock())
        part = Part(index=0, key="R1", order_codes={"DigiKey": "ABC123"})
        results = ScrapeResults()

        collector.apply_events(part, '<td id="quantityavailable">Call</td>', results)

        assert results.availability(part, "DigiKey") is None
