from __future__ import annotations

from datetime import datetime, timedelta
from typing import Iterable, List

from ..models import Article
from ..utils.logging import get_logger

_logger = get_logger("ew.processors.recency")


def recency_cutoff(days_back: int, *, now: datetime) -> datetime:
    return now - timedelta(days=days_back)


def filter_recent(articles: Iterable[Article], days_back: int, *, now: datetime) -> List[Article]:
    """Keep articles dated at or after ``now - days_back`` days.

    Articles without a resolved date are kept: an unknown date is not a
    reason to drop a possibly relevant article.
    """
    cutoff = recency_cutoff(days_back, now=now)
    _logger.info("Date filter: keeping articles on or after %s", cutoff.strftime("%Y/%m/%d %H:%M"))

    kept: List[Article] = []
    for art in articles:
        if art.resolved_date is None or art.resolved_date >= cutoff:
            kept.append(art)
        else:
            _logger.debug("Dropping stale article (%s): %s", art.resolved_date, art.url)
    return kept
