"""Top-level package for the earnings-watch scraper.

This package fetches an earnings news listing page, turns the links it finds
into dated ``Article`` records, and reports the recent ones that mention
growth-related keywords.
"""

__all__ = []
