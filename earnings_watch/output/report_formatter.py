from __future__ import annotations

import re
from typing import List, Mapping, Optional, Sequence

from ..models import Article

_spaces_re = re.compile(r" {2,}")

DATE_DISPLAY_FORMAT = "%Y/%m/%d %H:%M"
RULE = "=" * 80


def clean_title(title: str) -> str:
    """Flatten newlines and tabs and collapse repeated spaces."""
    cleaned = title.replace("\n", " ").replace("\t", " ")
    cleaned = _spaces_re.sub(" ", cleaned)
    return cleaned.strip()


def format_date_line(article: Article) -> Optional[str]:
    if article.resolved_date is not None:
        line = f"日付: {article.resolved_date.strftime(DATE_DISPLAY_FORMAT)}"
        if article.raw_date:
            line += f" (元の表記: {article.raw_date})"
        return line
    if article.raw_date:
        return f"日付: {article.raw_date}"
    return None


def format_article(index: int, article: Article, *, detail: str = "") -> str:
    lines = [f"{index}. {clean_title(article.title)}", f"   URL: {article.url}"]
    date_line = format_date_line(article)
    if date_line:
        lines.append(f"   {date_line}")
    if detail:
        lines.append(f"   詳細: {detail}")
    return "\n".join(lines) + "\n"


def format_report(
    articles: Sequence[Article],
    *,
    details: Optional[Mapping[str, str]] = None,
    keyword_label: str = "増収増益",
) -> str:
    """Render the matched articles as a plain-text report.

    ``details`` maps article URL to a body excerpt; missing entries are
    simply not shown.
    """
    details = details or {}
    lines: List[str] = [
        f"「{keyword_label}」関連の決算ニュース記事: {len(articles)}件",
        RULE,
    ]
    if not articles:
        lines.append("該当する記事が見つかりませんでした。")
        return "\n".join(lines) + "\n"

    for idx, art in enumerate(articles, start=1):
        lines.append(format_article(idx, art, detail=details.get(art.url, "")))
    return "\n".join(lines)
