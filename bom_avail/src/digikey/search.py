"""
Lookup URL construction for the DigiKey collector.

DigiKey serves one detail page per order code; the currency selects the
regional variant of the page.
"""

from typing import Dict
from urllib.parse import quote


class DigiKeySearcher:
    """Builds DigiKey product detail URLs."""

    def __init__(self, config: dict):
        """
        Initialize searcher.

        Args:
            config: Site configuration dict
        """
        self.url_templates: Dict[str, str] = config.get("url_templates", {})
        self.default_template = config.get("default_url_template", "")

    def product_url(self, order_code: str, currency: str) -> str:
        """
        Build the detail page URL for an order code.

        Args:
            order_code: DigiKey order code
            currency: Currency unit (e.g. "EUR", "USD")

        Returns:
            Product detail URL
        """
        template = self.url_templates.get((currency or "").upper(), self.default_template)
        return template.format(CODE=quote(order_code.strip(), safe=""))
