"""
Processing Workflow for the BOM Availability Enricher

Main workflow that:
1. Reads and validates the input table
2. For each part, asks every detected distributor for availability and
   price breaks, one request at a time
3. Builds the enriched table with break columns sorted by quantity
4. Writes it out

Only a table validation error stops the run; a distributor page that
cannot be fetched or read just leaves that part's cells empty.
"""

import logging
from typing import Any, Callable, Dict, Optional, TextIO, Union

import requests
import os
import sys

sys.path.insert(0, os.path.join(os.path.dirname(__file__), '../..'))

from shared.utils.logging_utils import (
    log_and_status,
    log_section_header,
    log_progress,
    log_warning,
    log_error,
    log_summary,
)

from .models import BomTable, ScrapeResults
from .table_loader import load_table
from .distributors import create_collectors, supported_distributors
from .output import assemble, write_table


def process_table(
    table: BomTable,
    collectors: Dict[str, Any],
    results: ScrapeResults,
    currency: str,
    status_fn: Optional[Callable] = None,
) -> Dict[str, int]:
    """
    Scrape every part at every detected distributor.

    Args:
        table: Validated input table
        collectors: Distributor name -> collector
        results: Scrape results to fill
        currency: Currency unit
        status_fn: Status callback function

    Returns:
        Counters: lookups, skipped, found, failed
    """
    stats = {"lookups": 0, "skipped": 0, "found": 0, "failed": 0}
    total = len(table.parts)

    for i, part in enumerate(table.parts, 1):
        codes = ", ".join(
            f"{name}={part.order_code(name) or '-'}" for name in table.distributors
        )
        log_progress(status_fn, current=i, total=total, item_name=part.key, details=codes)

        for name in table.distributors:
            if not part.order_code(name):
                stats["skipped"] += 1
                continue

            stats["lookups"] += 1
            try:
                collectors[name].collect(part, currency, results)
            except Exception as e:
                stats["failed"] += 1
                log_error(
                    status_fn,
                    msg=f"{name} lookup failed for {part.key}",
                    details=f"Order code: {part.order_code(name)}",
                    exc=e,
                )
                continue

            if results.availability(part, name) is not None:
                stats["found"] += 1

    return stats


def enrich(
    source: Union[str, TextIO],
    sink: TextIO,
    currency: str = "EUR",
    config: Optional[Dict[str, Any]] = None,
    status_fn: Optional[Callable] = None,
    session_factory: Callable[[], requests.Session] = requests.Session,
) -> Dict[str, int]:
    """
    Enrich a BOM with distributor availability and price breaks.

    Args:
        source: Input file path or text stream
        sink: Output text stream
        currency: Currency unit ("EUR" or "USD")
        config: Application configuration
        status_fn: Status callback function
        session_factory: Creates HTTP sessions for the collectors

    Returns:
        Summary statistics

    Raises:
        TableError: If the input table fails validation; nothing is
            fetched or written in that case
    """
    config = config or {}

    log_section_header(status_fn, "BOM AVAILABILITY")
    table = load_table(source, supported_distributors(), status_fn)

    if not table.distributors:
        log_warning(
            status_fn,
            msg="No distributor columns found",
            details=f"Recognized headers: {', '.join(supported_distributors())}",
        )

    collectors = create_collectors(table.distributors, config, session_factory)
    results = ScrapeResults()
    for name in table.distributors:
        results.break_table(name)

    log_and_status(
        status_fn,
        msg=f"Querying {', '.join(table.distributors) or 'no distributors'} in {currency}",
        ui_msg="Querying distributors...",
    )
    stats = process_table(table, collectors, results, currency, status_fn)

    rows = assemble(table, results)
    write_table(rows, sink)

    summary = {
        "Parts": len(table.parts),
        "Lookups": stats["lookups"],
        "Skipped (no order code)": stats["skipped"],
        "Found": stats["found"],
        "Failed": stats["failed"],
    }
    for name in table.distributors:
        summary[f"{name} price breaks"] = len(results.sorted_breaks(name))
    log_summary(status_fn, title="ENRICHMENT COMPLETE", stats=summary)

    logging.debug(f"Wrote {len(rows)} rows")
    return summary
