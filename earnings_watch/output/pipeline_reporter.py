from __future__ import annotations

from dataclasses import dataclass


@dataclass(slots=True)
class PipelineReport:
    links_extracted: int
    articles: int
    recent: int
    matched: int
    details_fetched: int = 0
    days_back: int = 2

    def to_text(self) -> str:
        return (
            f"抽出リンク数: {self.links_extracted}件\n"
            f"総記事数: {self.articles}件\n"
            f"過去{self.days_back}日間の記事数: {self.recent}件\n"
            f"キーワード一致: {self.matched}件\n"
            f"詳細取得: {self.details_fetched}件\n"
        )
