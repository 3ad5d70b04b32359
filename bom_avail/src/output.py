"""
Output table assembly.

Builds the enriched table: per distributor the order code, the stock count
and one price column per break quantity found for any part, sorted by
quantity.
"""

from typing import List, TextIO

from .models import BomTable, ScrapeResults


KEYS_HEADER = "Keys"
FIELD_SEPARATOR = "\t"
RECORD_SEPARATOR = "\n"


def build_header(table: BomTable, results: ScrapeResults) -> List[str]:
    """
    Build the output header row.

    Args:
        table: Loaded input table
        results: Scrape results

    Returns:
        Header cells
    """
    header = [KEYS_HEADER]
    for name in table.distributors:
        header.append(name)
        header.append(f"{name}_Avail")
        header.extend(f"{name}_{qty}" for qty in results.sorted_breaks(name))
    return header


def build_rows(table: BomTable, results: ScrapeResults) -> List[List[str]]:
    """
    Build one output row per part, in input order.

    Cells for data that was never scraped are left empty.

    Args:
        table: Loaded input table
        results: Scrape results

    Returns:
        Data rows
    """
    columns = {name: results.sorted_breaks(name) for name in table.distributors}

    rows = []
    for part in table.parts:
        row = [part.key]
        for name in table.distributors:
            avail = results.availability(part, name)
            row.append(part.order_codes.get(name, ""))
            row.append("" if avail is None else str(avail))
            for qty in columns[name]:
                row.append(results.price(part, name, qty) or "")
        rows.append(row)
    return rows


def assemble(table: BomTable, results: ScrapeResults) -> List[List[str]]:
    """Header row followed by the data rows."""
    return [build_header(table, results)] + build_rows(table, results)


def write_table(rows: List[List[str]], sink: TextIO) -> None:
    """
    Write rows as tab-separated records.

    Args:
        rows: Table rows
        sink: Open text stream
    """
    for row in rows:
        sink.write(FIELD_SEPARATOR.join(row) + RECORD_SEPARATOR)
