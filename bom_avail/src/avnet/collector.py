#!/usr/bin/env python3
"""
Avnet Collector

Searches Avnet Express for one order code, walks the subcategories the search
offers, and records availability and price breaks from the first results row
whose part number matches.
"""

import logging
import re
from typing import Any, Callable, Dict, List, Optional, Tuple

import requests
import os
import sys

sys.path.insert(0, os.path.join(os.path.dirname(__file__), '../../..'))

from shared.src import (
    RateLimiter,
    build_browser_headers,
    close_quietly,
    fetch_text,
    first_count,
    normalize_price,
    parse_count,
)

from ..models import Part, ScrapeResults, FIELD, ROW_START, ROW_END
from .search import AvnetSearcher
from .parser import AvnetParser


# Site Configuration
SITE_CONFIG = {
    "name": "Avnet",
    "origin": "https://avnetexpress.avnet.com",
    "search": {
        "path": "/store/em/EMController",
        "param": "term",
        "params": {
            "action": "products",
            "langId": "-1",
            "storeId": "500201",
            "catalogId": "500201",
            "N": "0",
        },
    },
    "currency_param": "currency",
    "results_table_id": "searchResultsTable",
    "subcategory_class": "medium",
    "part_number_class": "partNumber",
    "region_marker": "not available in this region",
    "no_stock_text": "no stock",
    "price_cell": {"align": "right", "style": "white-space: nowrap"},
    "availability_cell": {"align": "center", "style": "white-space: nowrap"},
    "timeout": 30,
    "request_delay": 0.0,
    "user_agent": "",
}

# "1-9 0,452 €", "10+ 0,40 €", "100 - 249: 0,35€", "1–9 0,45 €"
PRICE_ENTRY_RE = re.compile(r"^\s*(\d[\d,.]*)\s*(?:[-–]\s*\d[\d,.]*|\+)\s*:?\s*(.*)$")


def parse_price_entry(entry: str) -> Optional[Tuple[int, str]]:
    """
    Split one line of an Avnet price cell into break quantity and price.

    A line without a quantity range is a single price for quantity 1.

    Args:
        entry: One <br>-separated line of the price cell

    Returns:
        (quantity, price) or None if the line holds no usable price
    """
    m = PRICE_ENTRY_RE.match(entry or "")
    if m:
        quantity = parse_count(m.group(1))
        price = normalize_price(m.group(2))
    else:
        quantity = 1
        price = normalize_price(entry)
    if not quantity or not price:
        return None
    return quantity, price


class AvnetCollector:
    """Avnet Express availability and price-break collector."""

    name = "Avnet"

    def __init__(
        self,
        config: Optional[Dict[str, Any]] = None,
        session_factory: Callable[[], requests.Session] = requests.Session,
    ):
        """
        Initialize collector.

        Args:
            config: Optional overrides merged over SITE_CONFIG
            session_factory: Creates the cookie-carrying session used for one part
        """
        self.config = SITE_CONFIG.copy()
        if config:
            self.config.update(config)

        self.searcher = AvnetSearcher(self.config)
        self.parser = AvnetParser(self.config)
        self.session_factory = session_factory
        self.limiter = RateLimiter(self.config.get("request_delay", 0.0))
        self.no_stock_text = self.config.get("no_stock_text", "no stock").lower()

    def _fetch(self, session: requests.Session, url: str, params: Optional[dict] = None) -> str:
        headers = build_browser_headers(
            self.config["origin"], user_agent=self.config.get("user_agent")
        )
        return fetch_text(
            session,
            url,
            params=params,
            headers=headers,
            timeout=self.config.get("timeout"),
            limiter=self.limiter,
        )

    def collect(self, part: Part, currency: str, results: ScrapeResults) -> None:
        """
        Scrape availability and price breaks for one part.

        The session (and its cookies) lives for exactly this call and is
        closed on every path.

        Args:
            part: Part to look up
            currency: Currency unit
            results: Scrape results to fill
        """
        code = part.order_code(self.name)
        if not code:
            return

        session = self.session_factory()
        try:
            found = self._collect(session, part, code.strip(), currency, results)
        finally:
            close_quietly(session)

        if not found:
            logging.info(f"Avnet: no matching offer for {part.key} ({code})")

    def _collect(
        self,
        session: requests.Session,
        part: Part,
        code: str,
        currency: str,
        results: ScrapeResults,
    ) -> bool:
        search_url = self.searcher.search_url(code)
        logging.debug(f"Avnet search for {part.key}: {search_url}")

        html_text = self._fetch(session, search_url)
        subcategories = self.searcher.find_subcategories(search_url, html_text)
        if not subcategories:
            return False

        currency_param = self.config.get("currency_param", "currency")
        for url in subcategories:
            page = self._fetch(session, url, params={currency_param: currency})
            if self.apply_events(part, code, page, results):
                return True
        return False

    def parse_availability(self, text: str) -> Optional[int]:
        """
        Read the availability cell.

        Args:
            text: Cell text

        Returns:
            0 for "No Stock", the stock count, or None if unreadable
        """
        if self.no_stock_text and self.no_stock_text in (text or "").lower():
            return 0
        return first_count(text)

    def apply_events(self, part: Part, code: str, html_text: str, results: ScrapeResults) -> bool:
        """
        Record the first matching row of a results page.

        Rows whose part number differs or that are blocked for this region
        are abandoned; a matching row only counts once its availability has
        been read, and then no further rows are looked at.

        Args:
            part: Part being looked up
            code: Order code to match
            html_text: HTML content of the results page
            results: Scrape results to fill

        Returns:
            True if a matching row was recorded
        """
        active = False
        matched = False
        availability: Optional[int] = None
        breaks: List[Tuple[int, str]] = []

        for event in self.parser.scan(html_text):
            if event.kind == ROW_START:
                active, matched, availability, breaks = True, False, None, []
            elif event.kind == ROW_END:
                if active and matched and availability is not None:
                    self._commit(part, availability, breaks, results)
                    return True
                active = False
            elif event.kind == FIELD and active:
                if event.name == "region_blocked":
                    active = False
                elif event.name == "part_number":
                    matched = event.value.strip() == code
                    active = matched
                elif event.name == "price":
                    entry = parse_price_entry(event.value)
                    if entry:
                        breaks.append(entry)
                elif event.name == "availability" and availability is None:
                    availability = self.parse_availability(event.value)

        return False

    def _commit(
        self,
        part: Part,
        availability: int,
        breaks: List[Tuple[int, str]],
        results: ScrapeResults,
    ) -> None:
        results.set_availability(part, self.name, availability)
        for quantity, price in breaks:
            results.set_price(part, self.name, quantity, price)
        logging.debug(
            f"Avnet: {part.key} avail={availability} breaks={[q for q, _ in breaks]}"
        )
