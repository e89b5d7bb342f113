from __future__ import annotations

from datetime import datetime

import pytest

from earnings_watch.fetchers import FetchError
from earnings_watch.models import RawLink, SiteConfig
from earnings_watch.orchestrator import Orchestrator
from earnings_watch.utils.pipeline_config import PipelineConfig

ARTICLE_URL = "https://us.kabutan.jp/news/n2025100109291"


def _settings(**overrides) -> PipelineConfig:
    values = dict(days_back=2, http_timeout=5, fetch_details=False, detail_max_chars=300)
    values.update(overrides)
    return PipelineConfig(**values)


def test_growth_article_survives_the_whole_pipeline():
    site = SiteConfig(
        name="site",
        listing_url="https://site/earnings_news",
        origin="https://site",
        keywords=["増収増益"],
    )
    raw = [
        RawLink("●●株式会社、増収増益を発表しました", "/news/n2025100109291", "https://site", ""),
        RawLink("ログインしてください", "/login", "https://site", ""),
    ]
    orch = Orchestrator(site, settings=_settings(), now=datetime(2025, 10, 2))

    result = orch.process(raw)

    assert len(result.articles) == 1
    article = result.articles[0]
    assert article.url == "https://site/news/n2025100109291"
    assert article.resolved_date == datetime(2025, 10, 1)
    assert result.report.links_extracted == 2
    assert result.report.articles == 1
    assert result.report.recent == 1
    assert result.report.matched == 1
    assert "1. ●●株式会社、増収増益を発表しました" in result.text


def test_empty_input_produces_empty_report(site):
    result = Orchestrator(site, settings=_settings(), now=datetime(2025, 10, 2)).process([])
    assert result.articles == []
    assert "該当する記事が見つかりませんでした。" in result.text


def test_run_fetches_filters_and_adds_details(web, site, now, listing_html, detail_html):
    web.add(site.listing_url, listing_html)
    web.add(ARTICLE_URL, detail_html)
    orch = Orchestrator(site, settings=_settings(fetch_details=True), now=now)

    result = orch.run()

    # The 09/30 article is older than the cutoff and does not match the keywords
    assert [a.url for a in result.articles] == [ARTICLE_URL]
    assert result.articles[0].resolved_date == datetime(2025, 10, 1, 15, 30)
    assert result.details[ARTICLE_URL].startswith("アップルは")
    assert result.report.details_fetched == 1
    assert "詳細: アップルは" in result.text
    assert web.calls[0] == site.listing_url


def test_collect_returns_unique_articles(web, site, now, listing_html):
    web.add(site.listing_url, listing_html)
    articles = Orchestrator(site, settings=_settings(), now=now).collect()
    assert [a.url for a in articles] == [
        "https://us.kabutan.jp/news/n2025100109291",
        "https://us.kabutan.jp/news/n2025093000011",
    ]
    assert articles[1].resolved_date == datetime(2025, 9, 30)


def test_missing_details_are_omitted(web, site, now, listing_html):
    web.add(site.listing_url, listing_html)
    result = Orchestrator(site, settings=_settings(fetch_details=True), now=now).run()
    assert result.details == {}
    assert result.report.details_fetched == 0


def test_listing_failure_propagates(web, site, now):
    web.add(site.listing_url, "", status_code=503)
    with pytest.raises(FetchError):
        Orchestrator(site, settings=_settings(), now=now).run()
