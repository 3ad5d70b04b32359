"""
Input table loading and validation.

Reads the tab-separated BOM, checks the header and builds the part list.
Validation happens before any distributor is contacted, so a bad header
never produces partial output.
"""

import csv
import io
import logging
from typing import Callable, Dict, Iterable, List, Optional, TextIO, Union

import pandas as pd

from .models import BomTable, Part


KEY_HEADER = "Key"


class TableError(ValueError):
    """Raised when the input table fails validation."""
    pass


def read_rows(source: Union[str, TextIO]) -> List[List[str]]:
    """
    Read a tab-separated table as rows of strings.

    Cells are kept exactly as written: no type inference, no NA
    conversion and no quote handling. Blank lines are dropped. Rows are
    as wide as the header: cells past the last header column are dropped
    and missing cells come back empty.

    Args:
        source: File path or open text stream

    Returns:
        Rows including the header row
    """
    if isinstance(source, str):
        with open(source, "r", encoding="utf-8") as f:
            text = f.read()
    else:
        text = source.read()

    lines = [line for line in text.splitlines() if line.strip()]
    if not lines:
        return []

    width = len(lines[0].split("\t"))
    squared = []
    for line in lines:
        cells = line.split("\t")[:width]
        cells += [""] * (width - len(cells))
        squared.append("\t".join(cells))

    df = pd.read_csv(
        io.StringIO("\n".join(squared) + "\n"),
        sep="\t",
        header=None,
        dtype=str,
        keep_default_na=False,
        na_filter=False,
        quoting=csv.QUOTE_NONE,
        skip_blank_lines=False,
    )

    df = df.fillna("")
    return [[str(cell) for cell in row] for row in df.itertuples(index=False, name=None)]


def match_distributors(header: List[str], known: Iterable[str]) -> Dict[str, int]:
    """
    Locate the recognized distributor columns of a header row.

    Args:
        header: Header cells
        known: Recognized distributor names (matched case-sensitively)

    Returns:
        Distributor name -> column position, in header order

    Raises:
        TableError: If the first column is not "Key" or a distributor
            column appears twice
    """
    if not header or header[0] != KEY_HEADER:
        raise TableError(f'First column header must be "{KEY_HEADER}"')

    known = set(known)
    columns: Dict[str, int] = {}
    for pos, name in enumerate(header[1:], start=1):
        if name not in known:
            logging.debug(f"Dropping column {pos + 1} ({name!r}): not a distributor")
            continue
        if name in columns:
            raise TableError(f'Found multiple "{name}" columns')
        columns[name] = pos
    return columns


def load_table(
    source: Union[str, TextIO],
    known: Iterable[str],
    status_fn: Optional[Callable] = None,
) -> BomTable:
    """
    Load and validate the input BOM.

    Args:
        source: File path or open text stream
        known: Recognized distributor names
        status_fn: Status callback function

    Returns:
        Validated table

    Raises:
        TableError: On any validation failure
    """
    rows = read_rows(source)
    if not rows:
        raise TableError(f'First column header must be "{KEY_HEADER}"')

    columns = match_distributors(rows[0], known)

    parts: List[Part] = []
    for index, row in enumerate(rows[1:]):
        codes = {
            name: (row[pos] if pos < len(row) else "")
            for name, pos in columns.items()
        }
        parts.append(Part(index=index, key=row[0] if row else "", order_codes=codes))

    logging.info(
        f"Loaded {len(parts)} parts, distributors: {', '.join(columns) or 'none'}"
    )
    if status_fn:
        status_fn(f"Loaded {len(parts)} parts")

    return BomTable(distributors=list(columns), parts=parts)
