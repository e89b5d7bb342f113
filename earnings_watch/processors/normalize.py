from __future__ import annotations

from collections import defaultdict
from dataclasses import dataclass
from datetime import datetime
from typing import Dict, Iterable, List, Optional, Sequence

from ..models import Article, RawLink
from ..utils.logging import get_logger
from .dates import DateResolver

_logger = get_logger("ew.processors.normalize")

DEFAULT_LINK_MARKERS = ("news", "earnings")
DEFAULT_NOISE_MARKERS = ("ログイン", "登録")


@dataclass(slots=True)
class NormalizeStats:
    total: int
    kept: int
    duplicates: int
    reasons: dict[str, int]


def absolutize(href: str, origin: str) -> str:
    """Prefix site-relative links (``/path``) with the site origin."""
    href = href.strip()
    if href.startswith("/") and origin:
        return origin.rstrip("/") + href
    return href


class ArticleNormalizer:
    """Build one ``Article`` per unique URL from raw listing links.

    Filtering rules, in order:
    - the resolved URL must contain one of ``link_markers``
    - the trimmed title must be non-empty and at least ``min_title_length``
      characters long
    - the title must not contain any of ``noise_markers`` (navigation links)

    The first surviving link for a URL wins; later ones are ignored without
    merging any field.
    """

    def __init__(
        self,
        *,
        resolver: DateResolver | None = None,
        site_origin: str = "",
        link_markers: Sequence[str] = DEFAULT_LINK_MARKERS,
        noise_markers: Sequence[str] = DEFAULT_NOISE_MARKERS,
        min_title_length: int = 10,
    ) -> None:
        self.resolver = resolver or DateResolver()
        self.site_origin = site_origin
        self.link_markers = tuple(link_markers)
        self.noise_markers = tuple(noise_markers)
        self.min_title_length = min_title_length

    def _discard_reason(self, url: str, title: str) -> Optional[str]:
        if not any(marker in url for marker in self.link_markers):
            return "not_news"
        if not title:
            return "empty_title"
        if len(title) < self.min_title_length:
            return "short_title"
        if any(marker in title for marker in self.noise_markers):
            return "navigation"
        return None

    def normalize(self, raw_links: Iterable[RawLink], *, return_stats: bool = False):
        """Return articles in first-seen order.

        If ``return_stats`` is True, returns a tuple of (articles, NormalizeStats).
        """
        by_url: Dict[str, Article] = {}
        reasons = defaultdict(int)
        total = 0
        for link in raw_links:
            total += 1
            url = absolutize(link.href, self.site_origin or link.base_url)
            title = (link.title or "").strip()

            reason = self._discard_reason(url, title)
            if reason:
                reasons[reason] += 1
                continue
            if url in by_url:
                reasons["duplicate"] += 1
                continue

            raw_date = (link.date_text or "").strip()
            resolved = self.resolver.resolve(raw_date, url)
            _logger.debug("Article %s dated %s (raw=%r)", url, resolved, raw_date)
            by_url[url] = Article(
                title=title,
                url=url,
                description=link.description or "",
                raw_date=raw_date,
                resolved_date=resolved,
            )

        articles = list(by_url.values())
        stats = NormalizeStats(
            total=total,
            kept=len(articles),
            duplicates=reasons.get("duplicate", 0),
            reasons=dict(reasons),
        )
        _logger.info(
            "Normalized %d raw link(s) into %d article(s); discarded=%s",
            stats.total,
            stats.kept,
            stats.reasons,
        )
        return (articles, stats) if return_stats else articles


def normalize_links(
    raw_links: Iterable[RawLink],
    *,
    now: datetime | None = None,
    site_origin: str = "",
    link_markers: Sequence[str] = DEFAULT_LINK_MARKERS,
    noise_markers: Sequence[str] = DEFAULT_NOISE_MARKERS,
    min_title_length: int = 10,
) -> List[Article]:
    """Normalize raw links with a resolver anchored at ``now``."""
    normalizer = ArticleNormalizer(
        resolver=DateResolver(now),
        site_origin=site_origin,
        link_markers=link_markers,
        noise_markers=noise_markers,
        min_title_length=min_title_length,
    )
    return normalizer.normalize(raw_links)
