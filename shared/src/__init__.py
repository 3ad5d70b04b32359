"""Shared utilities for distributor scrapers."""

from .text_utils import normalize_whitespace, compact_style
from .number_utils import (
    strip_thousands,
    parse_count,
    first_count,
    strip_currency,
    normalize_price,
)
from .http_utils import build_browser_headers, RateLimiter, fetch_text, close_quietly

__all__ = [
    "normalize_whitespace",
    "compact_style",
    "strip_thousands",
    "parse_count",
    "first_count",
    "strip_currency",
    "normalize_price",
    "build_browser_headers",
    "RateLimiter",
    "fetch_text",
    "close_quietly",
]
