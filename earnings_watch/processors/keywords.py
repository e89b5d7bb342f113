from __future__ import annotations

from typing import Iterable, List, Optional, Sequence

from ..models import Article
from ..utils.logging import get_logger

_logger = get_logger("ew.processors.keywords")


def matching_keyword(article: Article, keywords: Sequence[str]) -> Optional[str]:
    """Return the first keyword found in the title or description, if any.

    Each keyword is checked as-is and again with both sides lower-cased, so
    mixed-script keyword lists (Japanese plus Latin terms) behave sensibly.
    """
    title = article.title
    desc = article.description
    title_lower = title.lower()
    desc_lower = desc.lower()
    for keyword in keywords:
        kw_lower = keyword.lower()
        if (
            keyword in title
            or keyword in desc
            or kw_lower in title_lower
            or kw_lower in desc_lower
        ):
            return keyword
    return None


def filter_by_keywords(articles: Iterable[Article], keywords: Sequence[str]) -> List[Article]:
    kept: List[Article] = []
    for art in articles:
        keyword = matching_keyword(art, keywords)
        if keyword is None:
            continue
        _logger.debug("Keyword '%s' matched: %s", keyword, art.title)
        kept.append(art)
    return kept
