"""
Registry of supported distributors.

The set is closed: a header column is a distributor column only if its name
appears here, and each name maps to the collector that scrapes it.
"""

from typing import Any, Callable, Dict, Iterable, Optional

import requests

from .digikey import DigiKeyCollector
from .avnet import AvnetCollector


# Header name -> collector class, in the order distributors are documented
DISTRIBUTORS = {
    DigiKeyCollector.name: DigiKeyCollector,
    AvnetCollector.name: AvnetCollector,
}


def supported_distributors() -> list:
    """Names recognized in the input header."""
    return list(DISTRIBUTORS)


def create_collectors(
    names: Iterable[str],
    config: Optional[Dict[str, Any]] = None,
    session_factory: Callable[[], requests.Session] = requests.Session,
) -> Dict[str, Any]:
    """
    Build one collector per detected distributor.

    Args:
        names: Distributor names detected in the header
        config: Application configuration; the "digikey" / "avnet" sections
            and the shared "timeout", "request_delay" and "user_agent" values
            are passed on as site config overrides
        session_factory: Creates HTTP sessions for the collectors

    Returns:
        Distributor name -> collector
    """
    config = config or {}
    shared = {k: config[k] for k in ("timeout", "request_delay", "user_agent") if k in config}

    collectors = {}
    for name in names:
        overrides = dict(shared)
        overrides.update(config.get(name.lower(), {}))
        collectors[name] = DISTRIBUTORS[name](overrides, session_factory=session_factory)
    return collectors
