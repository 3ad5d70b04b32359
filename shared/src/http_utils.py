"""
HTTP request utilities for distributor scrapers.

Provides header building, request pacing, and the single blocking page fetch
every scraper goes through.
"""

from typing import Optional, Dict, Any
import logging
import time

import requests


DEFAULT_USER_AGENT = (
    "Mozilla/5.0 (Macintosh; Intel Mac OS X 10_15_7) "
    "AppleWebKit/605.1.15 (KHTML, like Gecko) "
    "Version/18.6 Safari/605.1.15"
)


def build_browser_headers(
    origin: str,
    referer: Optional[str] = None,
    user_agent: Optional[str] = None
) -> Dict[str, str]:
    """
    Build browser-like HTTP headers.

    Args:
        origin: Origin URL (e.g., "https://example.com")
        referer: Referer URL (defaults to origin + "/")
        user_agent: User agent string (defaults to Safari on macOS)

    Returns:
        Dictionary of HTTP headers
    """
    if not user_agent:
        user_agent = DEFAULT_USER_AGENT

    if referer is None:
        referer = origin.rstrip("/") + "/"

    return {
        "User-Agent": user_agent,
        "Referer": referer,
        "Accept": "text/html,application/xhtml+xml,application/xml;q=0.9,*/*;q=0.8",
        "Accept-Language": "en-US,en;q=0.9",
        "Cache-Control": "no-cache",
        "Pragma": "no-cache",
        "Upgrade-Insecure-Requests": "1",
    }


class RateLimiter:
    """
    Simple rate limiter for HTTP requests.

    Ensures minimum time between requests to respect server resources.
    """

    def __init__(self, min_delay_seconds: float = 1.0):
        """
        Initialize rate limiter.

        Args:
            min_delay_seconds: Minimum seconds between requests
        """
        self.min_delay = min_delay_seconds
        self.last_request_time: Optional[float] = None

    def wait(self) -> None:
        """
        Wait if necessary to respect rate limit.

        Call before making an HTTP request.
        """
        if self.min_delay > 0 and self.last_request_time is not None:
            elapsed = time.time() - self.last_request_time
            if elapsed < self.min_delay:
                time.sleep(self.min_delay - elapsed)

        self.last_request_time = time.time()


def fetch_text(
    session: requests.Session,
    url: str,
    params: Optional[Dict[str, Any]] = None,
    headers: Optional[Dict[str, str]] = None,
    timeout: Optional[float] = 30,
    limiter: Optional[RateLimiter] = None,
) -> str:
    """
    Fetch one page and return its body as text.

    Network errors and non-200 responses are reported as a warning and
    yield an empty string; callers treat that as "no data".

    Args:
        session: Requests session (carries cookies between calls)
        url: Page URL
        params: Extra query parameters
        headers: Request headers
        timeout: Request timeout in seconds
        limiter: Optional rate limiter to wait on before the request

    Returns:
        Response body, or "" on failure
    """
    if limiter is not None:
        limiter.wait()

    try:
        r = session.get(url, params=params, headers=headers, timeout=timeout)
    except requests.RequestException as e:
        logging.warning(f"Fetch failed: {url} | {type(e).__name__}: {e}")
        return ""

    if r.status_code != 200:
        logging.warning(f"Fetch failed: {url} | HTTP {r.status_code}")
        return ""

    return r.text or ""


def close_quietly(session: requests.Session) -> None:
    """Close a session; failures are logged and otherwise ignored."""
    try:
        session.close()
    except Exception as e:
        logging.debug(f"Session close failed: {e}")
