from __future__ import annotations

from concurrent.futures import ThreadPoolExecutor, as_completed
from dataclasses import dataclass, field
from datetime import datetime
from typing import Dict, Iterable, List

from .fetchers import extract_raw_links, fetch_article_details, fetch_document
from .models import Article, RawLink, SiteConfig
from .output import PipelineReport, format_report
from .processors import ArticleNormalizer, DateResolver, filter_by_keywords, filter_recent
from .utils.logging import get_logger
from .utils.pipeline_config import PipelineConfig

logger = get_logger("ew.orchestrator")


@dataclass(slots=True)
class RunResult:
    articles: List[Article]
    details: Dict[str, str] = field(default_factory=dict)
    report: PipelineReport | None = None
    text: str = ""


class Orchestrator:
    def __init__(
        self,
        site: SiteConfig,
        *,
        settings: PipelineConfig | None = None,
        now: datetime | None = None,
        max_detail_workers: int = 4,
    ) -> None:
        self.site = site
        self.settings = settings or PipelineConfig()
        # One reference instant per run for both year defaulting and the recency cutoff
        self.now = now or datetime.now()
        self.max_detail_workers = max_detail_workers
        self.normalizer = ArticleNormalizer(
            resolver=DateResolver(self.now),
            site_origin=site.origin,
            link_markers=site.link_markers,
            noise_markers=site.noise_markers,
            min_title_length=site.min_title_length,
        )

    def _fetch_links(self) -> List[RawLink]:
        soup = fetch_document(
            self.site.listing_url,
            headers=self.site.headers,
            timeout=self.settings.http_timeout,
        )
        return extract_raw_links(
            soup,
            base_url=self.site.origin,
            link_selectors=self.site.link_selectors,
            date_selector=self.site.date_selector,
        )

    def collect(self) -> List[Article]:
        """Fetch the listing page and return its unique, dated articles."""
        return self.normalizer.normalize(self._fetch_links())

    def fetch_details(self, articles: Iterable[Article]) -> Dict[str, str]:
        """Fetch body excerpts concurrently; articles without one are omitted."""
        art_list = list(articles)
        if not art_list:
            return {}

        details: Dict[str, str] = {}
        max_workers = max(1, min(self.max_detail_workers, len(art_list)))
        logger.debug("Fetching details for %d article(s) (workers=%d)", len(art_list), max_workers)
        with ThreadPoolExecutor(max_workers=max_workers) as executor:
            future_map = {
                executor.submit(
                    fetch_article_details,
                    a.url,
                    selectors=self.site.detail_selectors,
                    headers=self.site.headers,
                    timeout=self.settings.http_timeout,
                    max_chars=self.settings.detail_max_chars,
                ): a
                for a in art_list
            }
            for fut in as_completed(future_map):
                text = fut.result()
                if text:
                    details[future_map[fut].url] = text
        return details

    def process(self, raw_links: List[RawLink]) -> RunResult:
        """Run normalization, filtering, details and rendering over raw links."""
        articles = self.normalizer.normalize(raw_links)
        recent = filter_recent(articles, self.settings.days_back, now=self.now)
        matched = filter_by_keywords(recent, self.site.keywords)
        logger.info(
            "Pipeline counts: links=%d, articles=%d, recent=%d, matched=%d",
            len(raw_links),
            len(articles),
            len(recent),
            len(matched),
        )

        details = self.fetch_details(matched) if self.settings.fetch_details else {}
        report = PipelineReport(
            links_extracted=len(raw_links),
            articles=len(articles),
            recent=len(recent),
            matched=len(matched),
            details_fetched=len(details),
            days_back=self.settings.days_back,
        )
        label = self.site.keywords[0] if self.site.keywords else ""
        text = format_report(matched, details=details, keyword_label=label)
        return RunResult(articles=matched, details=details, report=report, text=text)

    def run(self) -> RunResult:
        logger.info("Searching %s (%s) for growth articles", self.site.name, self.site.listing_url)
        return self.process(self._fetch_links())
