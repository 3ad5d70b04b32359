"""
Data models for the BOM availability enricher.

This module defines the parts read from the input table, the per-distributor
break tables, the aggregate scrape results, and the scan events distributor
parsers produce.
"""

import logging
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Tuple


ROW_START = "row_start"
FIELD = "field"
ROW_END = "row_end"


@dataclass
class Part:
    """
    One row of the bill of materials.

    Attributes:
        index: Position of the row in the input (0-based, header excluded)
        key: Value of the "Key" column
        order_codes: Distributor name -> order code ("" when not stocked)
    """
    index: int
    key: str
    order_codes: Dict[str, str] = field(default_factory=dict)

    def order_code(self, distributor: str) -> str:
        """Order code for a distributor, "" when missing or blank."""
        code = self.order_codes.get(distributor, "")
        return code if code.strip() else ""


@dataclass
class BomTable:
    """
    A loaded and validated input table.

    Attributes:
        distributors: Recognized distributor columns in header order
        parts: Parts in input order
    """
    distributors: List[str]
    parts: List[Part]


@dataclass(frozen=True)
class ScanEvent:
    """
    One step of a parsed distributor page.

    Attributes:
        kind: ROW_START, FIELD or ROW_END
        name: Field name for FIELD events
        value: Raw field text for FIELD events
    """
    kind: str
    name: str = ""
    value: str = ""


class BreakTable:
    """Assigns each distinct break quantity of one distributor a stable index."""

    def __init__(self):
        self._index: Dict[int, int] = {}

    def find_or_create(self, quantity: int) -> int:
        """
        Return the index of a break quantity, registering it if new.

        Args:
            quantity: Break quantity

        Returns:
            Column index of the quantity
        """
        index = self._index.get(quantity)
        if index is None:
            index = len(self._index)
            self._index[quantity] = index
        return index

    def index_of(self, quantity: int) -> Optional[int]:
        return self._index.get(quantity)

    def sorted_quantities(self) -> List[int]:
        """Registered quantities in ascending numeric order."""
        return sorted(self._index)

    def __contains__(self, quantity: int) -> bool:
        return quantity in self._index


class ScrapeResults:
    """
    Availability and price-break data gathered during one run.

    Every slot is write-once: the first value stored for a
    (part, distributor) availability or (part, distributor, break) price wins.
    """

    def __init__(self):
        self.breaks: Dict[str, BreakTable] = {}
        self._availability: Dict[Tuple[int, str], int] = {}
        self._prices: Dict[Tuple[int, str, int], str] = {}

    def break_table(self, distributor: str) -> BreakTable:
        if distributor not in self.breaks:
            self.breaks[distributor] = BreakTable()
        return self.breaks[distributor]

    def find_or_create(self, distributor: str, quantity: int) -> int:
        """Register a break quantity for a distributor and return its index."""
        return self.break_table(distributor).find_or_create(quantity)

    def set_availability(self, part: Part, distributor: str, count: int) -> bool:
        """
        Store the on-hand stock of a part at a distributor.

        Returns:
            True if stored, False if a value was already present
        """
        slot = (part.index, distributor)
        if slot in self._availability:
            logging.debug(
                f"Availability for {part.key}/{distributor} already set, ignoring {count}"
            )
            return False
        self._availability[slot] = count
        return True

    def set_price(self, part: Part, distributor: str, quantity: int, price: str) -> bool:
        """
        Store the unit price of a part at a break quantity.

        Returns:
            True if stored, False if a price was already present
        """
        slot = (part.index, distributor, self.find_or_create(distributor, quantity))
        if slot in self._prices:
            logging.debug(
                f"Price for {part.key}/{distributor} at {quantity} already set, ignoring {price}"
            )
            return False
        self._prices[slot] = price
        return True

    def availability(self, part: Part, distributor: str) -> Optional[int]:
        return self._availability.get((part.index, distributor))

    def price(self, part: Part, distributor: str, quantity: int) -> Optional[str]:
        table = self.breaks.get(distributor)
        if table is None:
            return None
        index = table.index_of(quantity)
        if index is None:
            return None
        return self._prices.get((part.index, distributor, index))

    def sorted_breaks(self, distributor: str) -> List[int]:
        """Break quantities of a distributor in output column order."""
        table = self.breaks.get(distributor)
        return table.sorted_quantities() if table else []
