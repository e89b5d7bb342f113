from __future__ import annotations

from pathlib import Path
from typing import Any, List
from urllib.parse import urlparse

import soupsieve
import yaml

from ..models import SiteConfig
from ..models.site import (
    DEFAULT_DETAIL_SELECTORS,
    DEFAULT_KEYWORDS,
    DEFAULT_LINK_SELECTORS,
)


class ConfigError(Exception):
    """Raised when the configuration file is invalid or missing required fields."""


REQUIRED_FIELDS = {"name", "listing_url"}

_LIST_FIELDS = (
    "keywords",
    "link_selectors",
    "detail_selectors",
    "link_markers",
    "noise_markers",
)


_SELECTOR_LIST_FIELDS = ("link_selectors", "detail_selectors")


def _check_selector(key: str, selector: str) -> None:
    try:
        soupsieve.compile(selector)
    except soupsieve.SelectorSyntaxError as exc:
        raise ConfigError(f"Invalid CSS selector in '{key}': {selector!r} ({exc})") from exc


def _is_http_url(value: str) -> bool:
    parsed = urlparse(value)
    return parsed.scheme in ("http", "https") and bool(parsed.netloc)


def _origin_of(url: str) -> str:
    parsed = urlparse(url)
    return f"{parsed.scheme}://{parsed.netloc}"


def _validate_site_dict(entry: dict) -> None:
    """Validate the ``site`` mapping from YAML.

    Required fields: name (str), listing_url (http/https).
    Optional fields:
      - origin: http/https URL used to absolutize relative links
      - headers: mapping[str, str]
      - keywords, link_selectors, detail_selectors, link_markers,
        noise_markers: list[str]
      - date_selector: str
      - min_title_length: int >= 0
    """
    missing = REQUIRED_FIELDS - set(entry)
    if missing:
        raise ConfigError(f"Missing required fields: {sorted(missing)} in {entry}")

    name = entry["name"]
    if not isinstance(name, str) or not name.strip():
        raise ConfigError("'name' must be a non-empty string")

    for key in ("listing_url", "origin"):
        if key not in entry or entry[key] is None:
            continue
        url_str = str(entry[key]).strip()
        if not _is_http_url(url_str):
            raise ConfigError(f"Invalid {key} '{url_str}'. Must be absolute http(s) URL.")

    for key in _LIST_FIELDS:
        if key not in entry or entry[key] is None:
            continue
        values = entry[key]
        if not isinstance(values, list) or not all(isinstance(v, str) for v in values):
            raise ConfigError(f"'{key}' must be a list of strings if provided")
        if any(not v.strip() for v in values):
            raise ConfigError(f"'{key}' must not contain empty strings")

    if "date_selector" in entry and entry["date_selector"] is not None:
        sel = entry["date_selector"]
        if not isinstance(sel, str) or not sel.strip():
            raise ConfigError("'date_selector' must be a non-empty string if provided")
        _check_selector("date_selector", sel)

    for key in _SELECTOR_LIST_FIELDS:
        for sel in entry.get(key) or []:
            _check_selector(key, sel)

    if "min_title_length" in entry and entry["min_title_length"] is not None:
        length = entry["min_title_length"]
        if isinstance(length, bool) or not isinstance(length, int) or length < 0:
            raise ConfigError("'min_title_length' must be a non-negative integer if provided")

    if "headers" in entry and entry["headers"] is not None:
        headers = entry["headers"]
        if not isinstance(headers, dict) or not all(isinstance(k, str) and isinstance(v, str) for k, v in headers.items()):
            raise ConfigError("'headers' must be a mapping of string keys to string values if provided")


def _str_list(entry: dict, key: str, default: List[str]) -> List[str]:
    values: Any = entry.get(key)
    if values is None:
        return list(default)
    return [str(v).strip() for v in values]


def _coerce_site(entry: dict) -> SiteConfig:
    listing_url = str(entry["listing_url"]).strip()
    origin = str(entry.get("origin") or _origin_of(listing_url)).strip().rstrip("/")
    headers = entry.get("headers") or {}
    min_len = entry.get("min_title_length")
    return SiteConfig(
        name=str(entry["name"]).strip(),
        listing_url=listing_url,
        origin=origin,
        headers={str(k): str(v) for k, v in headers.items()},
        keywords=_str_list(entry, "keywords", DEFAULT_KEYWORDS),
        link_selectors=_str_list(entry, "link_selectors", DEFAULT_LINK_SELECTORS),
        date_selector=str(entry.get("date_selector") or "time, .date, .published").strip(),
        detail_selectors=_str_list(entry, "detail_selectors", DEFAULT_DETAIL_SELECTORS),
        link_markers=_str_list(entry, "link_markers", ["news", "earnings"]),
        noise_markers=_str_list(entry, "noise_markers", ["ログイン", "登録"]),
        min_title_length=10 if min_len is None else int(min_len),
    )


def load_site_config(path: Path | str) -> SiteConfig:
    """Load ``site.yaml`` into a typed ``SiteConfig``.

    YAML structure:
      - Top-level mapping
      - Key ``site``: mapping with fields
          - name: string (required)
          - listing_url: http/https URL (required)
          - origin: http/https URL (optional, defaults to listing_url's host)
          - headers: mapping[string, string] (optional)
          - keywords: list[string] (optional)
          - link_selectors / detail_selectors: list[CSS selector] (optional)
          - date_selector: CSS selector (optional)
          - link_markers / noise_markers: list[string] (optional)
          - min_title_length: int (optional)

    Unknown keys are ignored for forward compatibility.
    """
    config_path = Path(path)
    if not config_path.exists():
        raise ConfigError(f"Config file not found: {config_path}")

    with config_path.open("r", encoding="utf-8") as f:
        data = yaml.safe_load(f) or {}

    if not isinstance(data, dict):
        raise ConfigError("Top level of the YAML configuration must be a mapping")

    site_raw = data.get("site")
    if not isinstance(site_raw, dict):
        raise ConfigError("'site' must be a mapping in the YAML configuration")

    _validate_site_dict(site_raw)
    return _coerce_site(site_raw)
