from __future__ import annotations

import logging
from datetime import datetime

import pytest

from earnings_watch.models import SiteConfig

LISTING_HTML = """
<html><head><meta charset="utf-8"><title>決算速報</title></head><body>
<ul>
  <li><a href="/news/n2025100109291">アップル、増収増益を発表しました</a><time>10/01 15:30</time></li>
  <li><a href="/news/n2025093000011">マイクロソフト、減収減益の決算を発表</a><span class="date">2025/09/30</span></li>
  <li><a href="/login">ログインしてください</a></li>
  <li><span>no link here</span></li>
</ul>
<div class="news-item">not a link</div>
</body></html>
"""

DETAIL_HTML = """
<html><head><meta charset="utf-8"></head><body>
<nav>menu</nav>
<main>アップルは第4四半期決算で売上高と営業利益がともに前年同期を上回り、増収増益となったと発表した。サービス部門が好調だった。</main>
</body></html>
"""


class FakeResponse:
    def __init__(self, status_code: int = 200, text: str = "") -> None:
        self.status_code = status_code
        self.text = text
        self.content = text.encode("utf-8")


@pytest.fixture
def now() -> datetime:
    return datetime(2025, 10, 2, 12, 0)


@pytest.fixture
def site() -> SiteConfig:
    return SiteConfig(
        name="test site",
        listing_url="https://us.kabutan.jp/earnings_news",
        origin="https://us.kabutan.jp",
    )


@pytest.fixture
def listing_html() -> str:
    return LISTING_HTML


@pytest.fixture
def detail_html() -> str:
    return DETAIL_HTML


class FakeWeb:
    """In-memory stand-in for the web: URL -> FakeResponse, recording requests."""

    def __init__(self) -> None:
        self.pages: dict[str, FakeResponse] = {}
        self.calls: list[str] = []
        self.headers_seen: list[dict] = []

    def add(self, url: str, text: str, status_code: int = 200) -> None:
        self.pages[url] = FakeResponse(status_code, text)

    def get(self, url, headers=None, timeout=None):
        self.calls.append(url)
        self.headers_seen.append(dict(headers or {}))
        return self.pages.get(url, FakeResponse(404, ""))


@pytest.fixture
def web(monkeypatch) -> FakeWeb:
    fake = FakeWeb()
    monkeypatch.setattr("earnings_watch.fetchers.http.requests.get", fake.get)
    return fake


@pytest.fixture
def restore_logging():
    root = logging.getLogger()
    handlers = list(root.handlers)
    level = root.level
    yield
    for h in root.handlers:
        if h not in handlers:
            h.close()
    root.handlers[:] = handlers
    root.setLevel(level)
