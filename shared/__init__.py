"""
Shared utilities for distributor scrapers.

This package provides common functionality used by every distributor.
"""
