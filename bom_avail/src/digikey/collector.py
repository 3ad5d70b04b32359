#!/usr/bin/env python3
"""
DigiKey Collector

Looks up one order code on the DigiKey product detail page and records the
quantity available and the price breaks.
"""

import logging
from typing import Any, Callable, Dict, Optional

import requests
import os
import sys

sys.path.insert(0, os.path.join(os.path.dirname(__file__), '../../..'))

from shared.src import (
    RateLimiter,
    build_browser_headers,
    close_quietly,
    fetch_text,
    normalize_price,
    parse_count,
)

from ..models import Part, ScrapeResults, FIELD, ROW_START, ROW_END
from .search import DigiKeySearcher
from .parser import DigiKeyParser


# Site Configuration
SITE_CONFIG = {
    "name": "DigiKey",
    "origin": "http://search.digikey.de",
    "url_templates": {
        "EUR": "http://search.digikey.de/scripts/DkSearch/dksus.dll?Detail&site=de;lang=de&name={CODE}",
        "USD": "http://search.digikey.de/scripts/DkSearch/dksus.dll?Detail&name={CODE}",
    },
    "default_url_template": "http://search.digikey.de/scripts/DkSearch/dksus.dll?Detail&name={CODE}",
    "availability_id": "quantityavailable",
    "pricing_table_id": "pricing",
    "timeout": 30,
    "request_delay": 0.0,
    "user_agent": "",
}


class DigiKeyCollector:
    """DigiKey availability and price-break collector."""

    name = "DigiKey"

    def __init__(
        self,
        config: Optional[Dict[str, Any]] = None,
        session_factory: Callable[[], requests.Session] = requests.Session,
    ):
        """
        Initialize collector.

        Args:
            config: Optional overrides merged over SITE_CONFIG
            session_factory: Creates the HTTP session used for one lookup
        """
        self.config = SITE_CONFIG.copy()
        if config:
            self.config.update(config)

        self.searcher = DigiKeySearcher(self.config)
        self.parser = DigiKeyParser(self.config)
        self.session_factory = session_factory
        self.limiter = RateLimiter(self.config.get("request_delay", 0.0))

    def collect(self, part: Part, currency: str, results: ScrapeResults) -> None:
        """
        Scrape availability and price breaks for one part.

        A part without a DigiKey order code is skipped without fetching.
        Pages that cannot be fetched or carry no matching markup leave the
        part's cells empty.

        Args:
            part: Part to look up
            currency: Currency unit
            results: Scrape results to fill
        """
        code = part.order_code(self.name)
        if not code:
            return

        url = self.searcher.product_url(code, currency)
        logging.debug(f"DigiKey lookup for {part.key}: {url}")

        session = self.session_factory()
        try:
            headers = build_browser_headers(
                self.config["origin"], user_agent=self.config.get("user_agent")
            )
            html_text = fetch_text(
                session,
                url,
                headers=headers,
                timeout=self.config.get("timeout"),
                limiter=self.limiter,
            )
        finally:
            close_quietly(session)

        if not html_text:
            logging.info(f"DigiKey: no page for {part.key} ({code})")
            return

        self.apply_events(part, html_text, results)

    def apply_events(self, part: Part, html_text: str, results: ScrapeResults) -> None:
        """
        Record the fields of a product page.

        Args:
            part: Part the page belongs to
            html_text: HTML content of the product page
            results: Scrape results to fill
        """
        row: Dict[str, str] = {}
        in_row = False

        for event in self.parser.scan(html_text):
            if event.kind == ROW_START:
                row = {}
                in_row = True
            elif event.kind == ROW_END:
                self._record_break(part, row, results)
                in_row = False
            elif event.kind == FIELD and in_row:
                row[event.name] = event.value
            elif event.kind == FIELD and event.name == "availability":
                count = parse_count(event.value)
                if count is None:
                    logging.debug(f"DigiKey: unreadable availability {event.value!r} for {part.key}")
                    continue
                results.set_availability(part, self.name, count)

    def _record_break(self, part: Part, row: Dict[str, str], results: ScrapeResults) -> None:
        quantity = parse_count(row.get("quantity"))
        price = normalize_price(row.get("price"))
        # Header rows and empty cells
        if not quantity or not price:
            return
        results.set_price(part, self.name, quantity, price)
