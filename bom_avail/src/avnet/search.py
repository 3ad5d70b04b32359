"""
Search functionality for the Avnet collector.

Avnet answers a part number search either with a results table directly or
with a list of subcategories, each of which has to be opened separately.
"""

import logging
from typing import Dict, List
from urllib.parse import urlencode, urljoin

from bs4 import BeautifulSoup


class AvnetSearcher:
    """Handles order code search for Avnet Express."""

    def __init__(self, config: dict):
        """
        Initialize searcher.

        Args:
            config: Site configuration dict
        """
        self.origin = config.get("origin", "").rstrip("/")
        search_config = config.get("search", {})
        self.search_path = search_config.get("path", "")
        self.search_param = search_config.get("param", "term")
        self.search_params: Dict[str, str] = search_config.get("params", {})
        self.results_table_id = config.get("results_table_id", "searchResultsTable")
        self.subcategory_class = config.get("subcategory_class", "medium")

    def search_url(self, order_code: str) -> str:
        """
        Build the search URL for an order code.

        Args:
            order_code: Avnet order code

        Returns:
            Absolute search URL
        """
        params = dict(self.search_params)
        params[self.search_param] = order_code.strip()
        return f"{self.origin}{self.search_path}?{urlencode(params)}"

    def find_subcategories(self, search_url: str, html_text: str) -> List[str]:
        """
        List the pages to scan for an order code.

        Args:
            search_url: URL the search page was fetched from
            html_text: HTML content of the search page

        Returns:
            Absolute subcategory URLs in discovery order; the search URL
            itself when the page already holds a results table
        """
        if not html_text:
            return []

        soup = BeautifulSoup(html_text, "html.parser")
        if soup.find("table", id=self.results_table_id) is not None:
            return [search_url]

        urls: List[str] = []
        for a in soup.find_all("a", class_=self.subcategory_class, href=True):
            url = urljoin(search_url, a["href"].strip())
            if url not in urls:
                urls.append(url)

        logging.debug(f"Avnet: {len(urls)} subcategories on {search_url}")
        return urls
