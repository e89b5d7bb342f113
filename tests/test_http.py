from __future__ import annotations

import pytest
import requests
from bs4 import BeautifulSoup

from earnings_watch.fetchers import FetchError, extract_raw_links, fetch_article_details, fetch_document
from earnings_watch.models import RawLink

LISTING_URL = "https://us.kabutan.jp/earnings_news"


def test_fetch_document_parses_html(web, listing_html):
    web.add(LISTING_URL, listing_html)
    soup = fetch_document(LISTING_URL, headers={"Accept-Language": "ja"})
    assert soup.title.get_text() == "決算速報"
    assert "Mozilla" in web.headers_seen[0]["User-Agent"]
    assert web.headers_seen[0]["Accept-Language"] == "ja"


def test_fetch_document_rejects_non_200(web):
    web.add(LISTING_URL, "moved", status_code=301)
    with pytest.raises(FetchError, match="301"):
        fetch_document(LISTING_URL)


def test_fetch_document_wraps_transport_errors(monkeypatch):
    def boom(url, headers=None, timeout=None):
        raise requests.ConnectionError("connection refused")

    monkeypatch.setattr("earnings_watch.fetchers.http.requests.get", boom)
    with pytest.raises(FetchError) as excinfo:
        fetch_document(LISTING_URL)
    assert isinstance(excinfo.value.__cause__, requests.ConnectionError)


def test_fetch_document_validates_url():
    with pytest.raises(ValueError):
        fetch_document("file:///etc/passwd")


def test_extract_raw_links_follows_selector_then_document_order(listing_html):
    soup = BeautifulSoup(listing_html, "html.parser")
    links = extract_raw_links(
        soup,
        base_url="https://us.kabutan.jp",
        link_selectors=["a[href*='/news/']", ".news-item", "li a"],
    )
    assert [link.href for link in links] == [
        "/news/n2025100109291",
        "/news/n2025093000011",
        "/news/n2025100109291",
        "/news/n2025093000011",
        "/login",
    ]
    assert links[0] == RawLink(
        title="アップル、増収増益を発表しました",
        href="/news/n2025100109291",
        base_url="https://us.kabutan.jp",
        date_text="10/01 15:30",
    )
    assert links[1].date_text == "2025/09/30"
    assert links[4].date_text == ""


def test_extract_raw_links_from_empty_page():
    soup = BeautifulSoup("<html><body></body></html>", "html.parser")
    assert extract_raw_links(soup, base_url="https://site", link_selectors=["a"]) == []


def test_article_details_use_first_substantial_selector(web, detail_html):
    url = "https://us.kabutan.jp/news/n2025100109291"
    web.add(url, detail_html)
    text = fetch_article_details(url, selectors=["nav", "main"], max_chars=20)
    assert text.startswith("アップルは第4四半期決算")
    assert text.endswith("...")
    assert len(text) == 23


def test_article_details_without_truncation(web, detail_html):
    url = "https://us.kabutan.jp/news/n2025100109291"
    web.add(url, detail_html)
    text = fetch_article_details(url, selectors=["main"])
    assert text.endswith("サービス部門が好調だった。")


def test_article_details_failure_returns_empty(web):
    assert fetch_article_details("https://us.kabutan.jp/news/missing", selectors=["main"]) == ""
    assert fetch_article_details("not a url", selectors=["main"]) == ""


def test_fetch_document_reads_charset_from_meta_when_header_has_none(monkeypatch, listing_html):
    resp = requests.Response()
    resp.status_code = 200
    resp.headers["Content-Type"] = "text/html"
    resp._content = listing_html.encode("utf-8")
    resp.encoding = requests.utils.get_encoding_from_headers(resp.headers)
    assert resp.encoding == "ISO-8859-1"

    monkeypatch.setattr("earnings_watch.fetchers.http.requests.get", lambda url, headers=None, timeout=None: resp)
    soup = fetch_document(LISTING_URL)

    assert soup.title.get_text() == "決算速報"
    assert "増収増益" in soup.get_text()
