"""Typed models used across the application."""

from .article import Article, RawLink
from .site import SiteConfig

__all__ = ["Article", "RawLink", "SiteConfig"]
