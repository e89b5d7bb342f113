from __future__ import annotations

import os
from dataclasses import dataclass, field


def _env_int(name: str, default: int) -> int:
    return int(os.getenv(name, str(default)))


def _env_flag(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None:
        return default
    return raw.strip().lower() in {"1", "true", "yes"}


# Defaults are read when the config is instantiated so a .env loaded by main() applies
@dataclass(slots=True)
class PipelineConfig:
    days_back: int = field(default_factory=lambda: _env_int("WATCH_DAYS_BACK", 2))
    http_timeout: int = field(default_factory=lambda: _env_int("WATCH_HTTP_TIMEOUT", 30))
    fetch_details: bool = field(default_factory=lambda: _env_flag("WATCH_FETCH_DETAILS", True))
    detail_max_chars: int = field(default_factory=lambda: _env_int("WATCH_DETAIL_MAX_CHARS", 300))
