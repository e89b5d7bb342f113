"""Processing pipeline: date resolution, normalization, recency and keyword filters."""

from .dates import DateResolver, build_local_datetime, resolve_date
from .normalize import ArticleNormalizer, NormalizeStats, absolutize, normalize_links
from .recency import filter_recent, recency_cutoff
from .keywords import filter_by_keywords, matching_keyword

__all__ = [
    "DateResolver",
    "build_local_datetime",
    "resolve_date",
    "ArticleNormalizer",
    "NormalizeStats",
    "absolutize",
    "normalize_links",
    "filter_recent",
    "recency_cutoff",
    "filter_by_keywords",
    "matching_keyword",
]
