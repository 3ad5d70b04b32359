"""BOM availability and price-break enricher."""
