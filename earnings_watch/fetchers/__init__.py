"""Content fetching layer for the listing page and article pages."""

from .http import FetchError, extract_raw_links, fetch_article_details, fetch_document

__all__ = ["FetchError", "extract_raw_links", "fetch_article_details", "fetch_document"]
