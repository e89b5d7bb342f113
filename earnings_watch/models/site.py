from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, List

DEFAULT_KEYWORDS = ["増収増益", "増収営業増益", "好調", "上方修正", "増加"]

DEFAULT_LINK_SELECTORS = [
    "a[href*='/news/']",
    "a[href*='news']",
    ".news-item",
    ".article-item",
    "tr td a",
    "div a",
    "li a",
]

DEFAULT_DETAIL_SELECTORS = [".article-content", ".news-content", "main", ".content", "article"]


@dataclass(slots=True)
class SiteConfig:
    """Configuration for the listing page being watched and how to read it."""

    name: str
    listing_url: str
    origin: str
    headers: Dict[str, str] = field(default_factory=dict)
    keywords: List[str] = field(default_factory=lambda: list(DEFAULT_KEYWORDS))
    link_selectors: List[str] = field(default_factory=lambda: list(DEFAULT_LINK_SELECTORS))
    date_selector: str = "time, .date, .published"
    detail_selectors: List[str] = field(default_factory=lambda: list(DEFAULT_DETAIL_SELECTORS))
    link_markers: List[str] = field(default_factory=lambda: ["news", "earnings"])
    noise_markers: List[str] = field(default_factory=lambda: ["ログイン", "登録"])
    min_title_length: int = 10
