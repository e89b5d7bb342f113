"""Publication date inference for listing-page links.

Date text on the listing is free-form and frequently missing. ``DateResolver``
tries, in order: structural regex matchers, strict ``strptime`` templates, and
finally a ``YYYYMMDD`` fragment embedded in the article URL. The first
strategy that produces a value wins.
"""

from __future__ import annotations

import re
from datetime import datetime, timedelta
from re import Match, Pattern
from typing import Callable, Optional, Sequence, Tuple

from ..utils.logging import get_logger

_logger = get_logger("ew.processors.dates")

# (year, month, day, hour, minute); year None means "use the reference year"
DateFields = Tuple[Optional[int], int, int, int, int]

_MMDD_HHMM_RE = re.compile(r"(?<![\d/])(\d{1,2})/(\d{1,2})\s+(\d{1,2}):(\d{2})(?!\d)")
_MMDD_RE = re.compile(r"(?<![\d/])(\d{1,2})/(\d{1,2})(?!\d)")
_YMD_HHMM_RE = re.compile(r"(?<!\d)(\d{4})/(\d{1,2})/(\d{1,2})\s+(\d{1,2}):(\d{2})(?!\d)")
_YMD_RE = re.compile(r"(?<!\d)(\d{4})/(\d{1,2})/(\d{1,2})(?!\d)")

# Kabutan article URLs: /news/n + YYYYMMDD + sequence number
DEFAULT_URL_DATE_RE = re.compile(r"/news/n(\d{8})\d+")

_TEMPLATES = (
    "%m/%d %H:%M",
    "%m/%d",
    "%Y/%m/%d %H:%M",
    "%Y/%m/%d",
    "%Y-%m-%d %H:%M",
    "%Y-%m-%d",
)


def _month_day_time(m: Match[str]) -> DateFields:
    month, day, hour, minute = (int(g) for g in m.groups())
    return None, month, day, hour, minute


def _month_day(m: Match[str]) -> DateFields:
    month, day = (int(g) for g in m.groups())
    return None, month, day, 0, 0


def _full_date_time(m: Match[str]) -> DateFields:
    year, month, day, hour, minute = (int(g) for g in m.groups())
    return year, month, day, hour, minute


def _full_date(m: Match[str]) -> DateFields:
    year, month, day = (int(g) for g in m.groups())
    return year, month, day, 0, 0


STRUCTURAL_MATCHERS: Sequence[Tuple[Pattern[str], Callable[[Match[str]], DateFields]]] = (
    (_MMDD_HHMM_RE, _month_day_time),
    (_MMDD_RE, _month_day),
    (_YMD_HHMM_RE, _full_date_time),
    (_YMD_RE, _full_date),
)


def build_local_datetime(year: int, month: int, day: int, hour: int = 0, minute: int = 0) -> datetime:
    """Build a naive local datetime, rolling out-of-range fields over.

    Month 13 becomes January of the following year, day 32 spills into the
    next month, hour 24 into the next day. Raises ``ValueError`` or
    ``OverflowError`` only when the result falls outside ``datetime``'s range.
    """
    year += (month - 1) // 12
    month = (month - 1) % 12 + 1
    base = datetime(year, month, 1)
    return base + timedelta(days=day - 1, hours=hour, minutes=minute)


class DateResolver:
    """Resolve free-form date text to a naive local ``datetime``.

    ``now`` supplies the year used when the text carries none. It is fixed at
    construction so resolution is deterministic for a given run.
    """

    def __init__(
        self,
        now: datetime | None = None,
        *,
        url_date_pattern: Pattern[str] | str = DEFAULT_URL_DATE_RE,
    ) -> None:
        self.now = now or datetime.now()
        self.url_date_pattern = (
            re.compile(url_date_pattern) if isinstance(url_date_pattern, str) else url_date_pattern
        )

    @property
    def reference_year(self) -> int:
        return self.now.year

    def resolve(self, text: str | None, url_hint: str = "") -> Optional[datetime]:
        cleaned = (text or "").strip()
        if cleaned:
            matched, value = self._from_structure(cleaned)
            if not matched:
                value = self._from_templates(cleaned)
            if value is not None:
                return value
        return self.from_url(url_hint)

    def _from_structure(self, text: str) -> Tuple[bool, Optional[datetime]]:
        """Apply the structural matchers; report whether any shape matched."""
        for pattern, assemble in STRUCTURAL_MATCHERS:
            m = pattern.search(text)
            if not m:
                continue
            year, month, day, hour, minute = assemble(m)
            if year is None:
                year = self.reference_year
            try:
                return True, build_local_datetime(year, month, day, hour, minute)
            except (ValueError, OverflowError):
                _logger.debug("Date shape matched but is out of range: %r", text)
                return True, None
        return False, None

    def _from_templates(self, text: str) -> Optional[datetime]:
        for fmt in _TEMPLATES:
            try:
                if "%Y" in fmt:
                    return datetime.strptime(text, fmt)
                # Parse with the reference year attached so Feb 29 follows that year
                return datetime.strptime(f"{self.reference_year} {text}", f"%Y {fmt}")
            except ValueError:
                continue
        return None

    def from_url(self, url: str | None) -> Optional[datetime]:
        """Extract the ``YYYYMMDD`` fragment from an article URL, at midnight."""
        if not url:
            return None
        m = self.url_date_pattern.search(url)
        if not m:
            return None
        digits = m.group(1)
        try:
            return build_local_datetime(int(digits[:4]), int(digits[4:6]), int(digits[6:8]))
        except (ValueError, OverflowError):
            _logger.debug("URL date fragment is out of range: %s", url)
            return None


def resolve_date(text: str | None, url_hint: str = "", *, now: datetime | None = None) -> Optional[datetime]:
    """Convenience wrapper around ``DateResolver(now).resolve``."""
    return DateResolver(now).resolve(text, url_hint)
