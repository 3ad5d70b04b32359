"""Logging helpers shared by the distributor scrapers."""
