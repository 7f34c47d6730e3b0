"""Scraped university pages served as JSON."""

__version__ = "1.0.0"
