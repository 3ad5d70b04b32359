"""
Text processing utilities for distributor scrapers.

Whitespace and inline-style normalization for comparing scraped markup.
"""

import re
from typing import Optional


def normalize_whitespace(s: Optional[str]) -> str:
    """
    Collapse multiple whitespace characters into single spaces.

    Args:
        s: String to normalize

    Returns:
        String with collapsed whitespace
    """
    return re.sub(r"\s+", " ", (s or "").strip())


def compact_style(style: Optional[str]) -> str:
    """
    Canonical form of an inline style attribute for comparisons.

    Removes all whitespace, lowercases and drops a trailing semicolon, so
    that "White-Space: nowrap;" and "white-space:nowrap" compare equal.

    Args:
        style: Raw style attribute value

    Returns:
        Compacted style string
    """
    return re.sub(r"\s+", "", style or "").lower().rstrip(";")
