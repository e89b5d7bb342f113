from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Optional


@dataclass(slots=True, frozen=True)
class RawLink:
    """A candidate link as found on the listing page, before any filtering."""

    title: str
    href: str
    base_url: str
    date_text: str = ""
    description: str = ""


@dataclass(slots=True, frozen=True)
class Article:
    title: str
    url: str
    description: str = ""
    raw_date: str = ""

    # Naive local time; None when no date could be inferred
    resolved_date: Optional[datetime] = None
