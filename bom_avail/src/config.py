"""
Configuration management for the BOM availability enricher.

Handles loading configuration from an optional JSON file merged over the
built-in defaults.
"""

import json
import os
import logging
from typing import Dict, Any, Optional


# Project root directory
APP_DIR = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
CONFIG_FILE = os.path.join(APP_DIR, "config.json")

CURRENCIES = ("EUR", "USD")


# Default configuration
DEFAULT_CONFIG = {
    "_USER_SETTINGS": "# Application Settings",
    "currency": "EUR",
    "log_file": "",

    "_HTTP_SETTINGS": "# Distributor Requests",
    "timeout": 30,
    "request_delay": 0.0,  # seconds between requests, 0 = no pause
    "user_agent": "",      # blank = built-in browser user agent

    "_SITE_CONFIG": "# Per-distributor overrides (see each collector's SITE_CONFIG)",
    "digikey": {},
    "avnet": {},
}


def load_config(path: Optional[str] = None) -> Dict[str, Any]:
    """
    Load configuration from file merged over the defaults.

    A missing file yields the defaults. An unreadable file is logged and
    also yields the defaults.

    Args:
        path: Config file path (defaults to config.json next to the project)

    Returns:
        Configuration dictionary
    """
    path = path or CONFIG_FILE
    merged = json.loads(json.dumps(DEFAULT_CONFIG))

    if not os.path.exists(path):
        logging.debug(f"Config file not found, using defaults: {path}")
        return merged

    try:
        with open(path, "r", encoding="utf-8") as f:
            config = json.load(f)
    except (OSError, ValueError) as e:
        logging.error(f"Failed to load config {path}: {e}")
        return merged

    if not isinstance(config, dict):
        logging.error(f"Ignoring config {path}: top level must be an object")
        return merged

    merged.update(config)
    merged["currency"] = str(merged.get("currency") or "EUR").upper()
    return merged
