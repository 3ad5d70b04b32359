"""
Page parsing for the DigiKey collector.

Turns a product detail page into scan events: one "availability" field for
the quantity-available cell, then one row per line of the pricing table.
"""

import re
from typing import List, Optional

from bs4 import BeautifulSoup, NavigableString, Tag
import os
import sys

sys.path.insert(0, os.path.join(os.path.dirname(__file__), '../../..'))

from shared.src import normalize_whitespace

from ..models import ScanEvent, ROW_START, FIELD, ROW_END


class DigiKeyParser:
    """Parses DigiKey product detail pages."""

    def __init__(self, config: dict):
        """
        Initialize parser.

        Args:
            config: Site configuration dict
        """
        self.availability_id = config.get("availability_id", "quantityavailable")
        self.pricing_table_id = config.get("pricing_table_id", "pricing")

    def _by_id(self, soup: BeautifulSoup, tag: str, element_id: str) -> Optional[Tag]:
        """First element of a tag type whose id matches case-insensitively."""
        pattern = re.compile(rf"^{re.escape(element_id)}$", re.I)
        return soup.find(tag, id=pattern)

    @staticmethod
    def _leading_text(cell: Tag) -> str:
        """Text directly inside a cell, up to its first child tag."""
        parts = []
        for child in cell.children:
            if not isinstance(child, NavigableString):
                break
            parts.append(str(child))
        return normalize_whitespace("".join(parts))

    def scan(self, html_text: str) -> List[ScanEvent]:
        """
        Extract scan events from a product page.

        Args:
            html_text: HTML content of the product page

        Returns:
            Availability field event (if present) followed by
            ROW_START / quantity / price / ROW_END per pricing row
        """
        events: List[ScanEvent] = []
        if not html_text:
            return events

        soup = BeautifulSoup(html_text, "html.parser")

        cell = self._by_id(soup, "td", self.availability_id)
        if cell is not None:
            events.append(ScanEvent(FIELD, "availability", self._leading_text(cell)))

        table = self._by_id(soup, "table", self.pricing_table_id)
        if table is None:
            return events

        for tr in table.find_all("tr"):
            # Rows of tables nested inside the pricing table are not breaks
            if tr.find_parent("table") is not table:
                continue
            cells = tr.find_all("td", recursive=False)
            if len(cells) < 2:
                continue
            events.append(ScanEvent(ROW_START))
            events.append(ScanEvent(FIELD, "quantity", normalize_whitespace(cells[0].get_text())))
            events.append(ScanEvent(FIELD, "price", normalize_whitespace(cells[1].get_text())))
            events.append(ScanEvent(ROW_END))

        return events
