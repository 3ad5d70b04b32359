"""
Number processing utilities for distributor scrapers.

Distributor pages print stock counts and prices in the locale of the
regional site, so "1,234", "1.234" and "1 234" all mean the same count
and "0,452" / "0.452" the same price.
"""

import re
from typing import Optional

CURRENCY_MARKERS = ("EUR", "USD", "GBP", "US$", "€", "$", "£")

_PRICE_RE = re.compile(r"^\d+(?:\.\d+)?$")

_CURRENCY_RE = re.compile(
    r"^(?:\s|" + "|".join(re.escape(m) for m in CURRENCY_MARKERS) + r")+"
    r"|(?:\s|" + "|".join(re.escape(m) for m in CURRENCY_MARKERS) + r")+$",
    re.I,
)


def strip_thousands(s: Optional[str]) -> str:
    """
    Remove thousands separators and whitespace from a count.

    Args:
        s: Count as printed on the page (e.g. "1,234")

    Returns:
        Count with only the remaining characters (e.g. "1234")
    """
    if not s:
        return ""
    return re.sub(r"[,.\s ']", "", str(s))


def parse_count(s: Optional[str]) -> Optional[int]:
    """
    Parse a stock count or break quantity.

    Args:
        s: Count as printed on the page

    Returns:
        Integer value, or None if the text is not a plain count
    """
    clean = strip_thousands(s)
    if not clean.isdigit():
        return None
    return int(clean)


def first_count(s: Optional[str]) -> Optional[int]:
    """
    Parse the first number embedded in free text.

    Used for availability cells that wrap the count in words or markup
    noise ("1,250 In Stock").

    Args:
        s: Free text

    Returns:
        Integer value of the first number, or None if there is none
    """
    m = re.search(r"\d[\d,. ']*", s or "")
    if not m:
        return None
    return parse_count(m.group(0))


def strip_currency(s: Optional[str]) -> str:
    """
    Remove leading and trailing currency symbols and whitespace.

    Args:
        s: Price text (e.g. "0,452 €")

    Returns:
        Price text without currency markers (e.g. "0,452")
    """
    return _CURRENCY_RE.sub("", s or "").strip()


def normalize_price(s: Optional[str]) -> str:
    """
    Normalize a price to use "." as the decimal separator.

    The last "," or "." is taken as the decimal separator and every other
    separator is dropped as a thousands separator.

    Args:
        s: Price text (e.g. "1.234,50")

    Returns:
        Decimal string (e.g. "1234.50"), or "" if the text is not a price
    """
    clean = re.sub(r"[\s ']", "", strip_currency(s))
    pos = max(clean.rfind(","), clean.rfind("."))
    if pos >= 0:
        whole = re.sub(r"[,.]", "", clean[:pos])
        clean = f"{whole}.{clean[pos + 1:]}"
    return clean if _PRICE_RE.match(clean) else ""
