"""
Unit tests for HTTP utilities.

Tests:
- Browser header defaults
- Page fetch success and failure handling
- Session cleanup
"""

import unittest
from pathlib import Path
from unittest.mock import Mock, patch

import requests

# Add repository root to path for imports
import sys
sys.path.insert(0, str(Path(__file__).parent.parent.parent))

from shared.src.http_utils import (
    DEFAULT_USER_AGENT,
    RateLimiter,
    build_browser_headers,
    close_quietly,
    fetch_text,
)


def _response(status_code=200, text="<html></html>"):
    r = Mock()
    r.status_code = status_code
    r.text = text
    return r


class TestBrowserHeaders(unittest.TestCase):
    """Test suite for build_browser_headers."""

    def test_defaults(self):
        headers = build_browser_headers("https://example.com")
        self.assertEqual(headers["Referer"], "https://example.com/")
        self.assertEqual(headers["User-Agent"], DEFAULT_USER_AGENT)

    def test_blank_user_agent_uses_default(self):
        headers = build_browser_headers("https://example.com", user_agent="")
        self.assertEqual(headers["User-Agent"], DEFAULT_USER_AGENT)

    def test_custom_values(self):
        headers = build_browser_headers("https://example.com", referer="https://r/", user_agent="UA")
        self.assertEqual(headers["Referer"], "https://r/")
        self.assertEqual(headers["User-Agent"], "UA")


class TestFetchText(unittest.TestCase):
    """Test suite for fetch_text."""

    def test_returns_body(self):
        session = Mock()
        session.get.return_value = _response(text="<p>ok</p>")

        self.assertEqual(fetch_text(session, "https://x/", params={"a": "1"}, timeout=5), "<p>ok</p>")
        session.get.assert_called_once_with("https://x/", params={"a": "1"}, headers=None, timeout=5)

    def test_http_error_yields_empty(self):
        session = Mock()
        session.get.return_value = _response(status_code=404, text="missing")

        self.assertEqual(fetch_text(session, "https://x/"), "")

    def test_network_error_yields_empty(self):
        session = Mock()
        session.get.side_effect = requests.ConnectionError("refused")

        self.assertEqual(fetch_text(session, "https://x/"), "")

    def test_waits_on_limiter(self):
        session = Mock()
        session.get.return_value = _response()
        limiter = Mock()

        fetch_text(session, "https://x/", limiter=limiter)
        limiter.wait.assert_called_once()


class TestRateLimiter(unittest.TestCase):
    """Test suite for RateLimiter."""

    @patch("shared.src.http_utils.time")
    def test_sleeps_for_remaining_delay(self, mock_time):
        mock_time.time.side_effect = [100.0, 100.25, 100.25]
        limiter = RateLimiter(1.0)

        limiter.wait()
        limiter.wait()
        mock_time.sleep.assert_called_once_with(0.75)

    @patch("shared.src.http_utils.time")
    def test_zero_delay_never_sleeps(self, mock_time):
        mock_time.time.return_value = 5.0
        limiter = RateLimiter(0.0)

        limiter.wait()
        limiter.wait()
        mock_time.sleep.assert_not_called()


class TestCloseQuietly(unittest.TestCase):
    """Test suite for close_quietly."""

    def test_closes(self):
        session = Mock()
        close_quietly(session)
        session.close.assert_called_once()

    def test_swallows_close_errors(self):
        session = Mock()
        session.close.side_effect = RuntimeError("boom")
        close_quietly(session)


if __name__ == "__main__":
    unittest.main()
