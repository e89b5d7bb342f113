from __future__ import annotations

from typing import Dict, List, Mapping, Optional, Sequence
from urllib.parse import urlparse

import requests
from bs4 import BeautifulSoup, Tag

from ..models import RawLink
from ..utils.logging import get_logger

logger = get_logger("ew.fetchers.http")


class FetchError(RuntimeError):
    """Raised when a page cannot be fetched or returns a non-200 status."""


_DEFAULT_HEADERS: Dict[str, str] = {
    "User-Agent": (
        "Mozilla/5.0 (Macintosh; Intel Mac OS X 10_15_7) "
        "AppleWebKit/537.36 (KHTML, like Gecko) "
        "Chrome/127.0.0.0 Safari/537.36"
    )
}

# Article bodies shorter than this are treated as navigation chrome
_MIN_DETAIL_CHARS = 50


def _validated_url(url: str) -> str:
    parsed = urlparse(url)
    if parsed.scheme not in ("http", "https") or not parsed.netloc:
        raise ValueError(f"Invalid URL for HTTP fetch: {url}")
    return url


def fetch_document(
    url: str,
    *,
    headers: Optional[Mapping[str, str]] = None,
    timeout: int = 30,
) -> BeautifulSoup:
    """Fetch ``url`` and parse it into a BeautifulSoup tree.

    Raises ``FetchError`` on transport failures and on any status other
    than 200.
    """
    url = _validated_url(url)
    merged = {**_DEFAULT_HEADERS, **(headers or {})}
    logger.debug("Fetching HTML from %s", url)
    try:
        resp = requests.get(url, headers=merged, timeout=timeout)
    except requests.RequestException as exc:
        logger.warning("HTTP request error for %s: %s", url, exc)
        raise FetchError(f"making request to {url}: {exc}") from exc

    if resp.status_code != 200:
        logger.warning("HTTP fetch failed (%s): %s", resp.status_code, url)
        raise FetchError(f"HTTP error {resp.status_code} for {url}")

    # Raw bytes, so the parser honours <meta charset> when the header omits it
    return BeautifulSoup(resp.content, "html.parser")


def _nearby_date_text(element: Tag, date_selector: str) -> str:
    parent = element.parent
    if not isinstance(parent, Tag):
        return ""
    for date_el in parent.select(date_selector):
        text = date_el.get_text(strip=True)
        if text:
            return text
    return ""


def extract_raw_links(
    soup: BeautifulSoup,
    *,
    base_url: str,
    link_selectors: Sequence[str],
    date_selector: str = "time, .date, .published",
) -> List[RawLink]:
    """Collect candidate links from the listing page.

    Selectors are applied in the given order and each one yields matches in
    document order, so the same page always produces the same sequence.
    Elements without an ``href`` are skipped; everything else is left for
    the normalizer to judge.
    """
    page_title = soup.title.get_text(strip=True) if soup.title else ""
    logger.info("Scanning page '%s' for article links", page_title)

    links: List[RawLink] = []
    for selector in link_selectors:
        for el in soup.select(selector):
            href = el.get("href")
            if not href or not isinstance(href, str):
                continue
            links.append(
                RawLink(
                    title=el.get_text().strip(),
                    href=href,
                    base_url=base_url,
                    date_text=_nearby_date_text(el, date_selector),
                )
            )
    logger.info("Extracted %d candidate link(s) from %s", len(links), base_url)
    return links


def fetch_article_details(
    url: str,
    *,
    selectors: Sequence[str],
    headers: Optional[Mapping[str, str]] = None,
    timeout: int = 30,
    max_chars: int = 300,
) -> str:
    """Return a short excerpt of the article body, or "" if unavailable."""
    try:
        soup = fetch_document(url, headers=headers, timeout=timeout)
    except (FetchError, ValueError) as exc:
        logger.debug("Skipping details for %s: %s", url, exc)
        return ""

    content = ""
    for selector in selectors:
        element = soup.select_one(selector)
        if element is None:
            continue
        text = element.get_text().strip()
        if len(text) > _MIN_DETAIL_CHARS:
            content = text
            break

    if len(content) > max_chars:
        content = content[:max_chars] + "..."
    return content
