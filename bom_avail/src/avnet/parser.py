"""
Page parsing for the Avnet collector.

Turns a subcategory results page into scan events, one group per table row:
ROW_START, the fields found in the row in document order, ROW_END.

Field names:
    region_blocked  row is marked as not available in this region
    part_number     text of the part-number cell
    price           one entry of the price cell (one event per <br> line)
    availability    text of the availability cell
"""

from typing import List

from bs4 import BeautifulSoup, Tag
import os
import sys

sys.path.insert(0, os.path.join(os.path.dirname(__file__), '../../..'))

from shared.src import compact_style, normalize_whitespace

from ..models import ScanEvent, ROW_START, FIELD, ROW_END


class AvnetParser:
    """Parses Avnet Express results tables."""

    def __init__(self, config: dict):
        """
        Initialize parser.

        Args:
            config: Site configuration dict
        """
        self.results_table_id = config.get("results_table_id", "searchResultsTable")
        self.part_number_class = config.get("part_number_class", "partNumber")
        self.region_marker = config.get("region_marker", "not available in this region").lower()
        self.price_cell = config.get("price_cell", {"align": "right", "style": "white-space: nowrap"})
        self.availability_cell = config.get(
            "availability_cell", {"align": "center", "style": "white-space: nowrap"}
        )

    @staticmethod
    def _matches(cell: Tag, expected: dict) -> bool:
        """True if a cell carries the alignment and inline style given in the site config."""
        align = (cell.get("align") or "").strip().lower()
        if align != expected.get("align", "").lower():
            return False
        return compact_style(cell.get("style")) == compact_style(expected.get("style"))

    @staticmethod
    def _lines(cell: Tag) -> List[str]:
        """Text of a cell split on <br>, blank lines dropped."""
        for br in cell.find_all("br"):
            br.replace_with("\n")
        lines = (normalize_whitespace(line) for line in cell.get_text().split("\n"))
        return [line for line in lines if line]

    def scan(self, html_text: str) -> List[ScanEvent]:
        """
        Extract scan events from a results page.

        Args:
            html_text: HTML content of the page

        Returns:
            Events for every row of the results table
        """
        events: List[ScanEvent] = []
        if not html_text:
            return events

        soup = BeautifulSoup(html_text, "html.parser")
        table = soup.find("table", id=self.results_table_id)
        if table is None:
            return events

        for tr in table.find_all("tr"):
            if tr.find_parent("table") is not table:
                continue
            cells = tr.find_all("td", recursive=False)
            if not cells:
                continue

            events.append(ScanEvent(ROW_START))
            if self.region_marker and self.region_marker in normalize_whitespace(tr.get_text(" ")).lower():
                events.append(ScanEvent(FIELD, "region_blocked", "1"))

            for cell in cells:
                if self.part_number_class in (cell.get("class") or []):
                    events.append(ScanEvent(FIELD, "part_number", normalize_whitespace(cell.get_text())))
                elif self._matches(cell, self.price_cell):
                    for line in self._lines(cell):
                        events.append(ScanEvent(FIELD, "price", line))
                elif self._matches(cell, self.availability_cell):
                    events.append(ScanEvent(FIELD, "availability", normalize_whitespace(cell.get_text(" "))))

            events.append(ScanEvent(ROW_END))

        return events
