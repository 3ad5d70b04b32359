"""Avnet Express search-and-browse scraper."""

from .collector import AvnetCollector, SITE_CONFIG

__all__ = ["AvnetCollector", "SITE_CONFIG"]
