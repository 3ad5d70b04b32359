"""
BOM Availability Enricher

Adds distributor stock and price-break columns to a tab-separated BOM.
"""

__version__ = "1.0.0"

from .processor import enrich, process_table

__all__ = ["enrich", "process_table", "__version__"]
