"""DigiKey product page scraper."""

from .collector import DigiKeyCollector, SITE_CONFIG

__all__ = ["DigiKeyCollector", "SITE_CONFIG"]
