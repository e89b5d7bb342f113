"""Application entrypoint for earnings-watch.

This script orchestrates the high-level flow:
1) load configuration
2) fetch the listing page and build dated articles
3) filter by recency and keywords, then print the report
"""

from __future__ import annotations

import argparse
from datetime import datetime
from pathlib import Path
from typing import Sequence

from dotenv import load_dotenv

from .fetchers import FetchError
from .orchestrator import Orchestrator
from .utils.config_loader import ConfigError, load_site_config
from .utils.logging import configure_logging, get_logger
from .utils.pipeline_config import PipelineConfig


def _as_of(value: str) -> datetime:
    try:
        dt = datetime.fromisoformat(value)
    except ValueError as exc:
        raise argparse.ArgumentTypeError(f"invalid --as-of value '{value}': {exc}") from exc
    # Resolved dates are naive local time; compare like with like
    if dt.tzinfo is not None:
        dt = dt.astimezone().replace(tzinfo=None)
    return dt


def parse_args(argv: Sequence[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="earnings-watch – find recent growth-related earnings news"
    )
    parser.add_argument(
        "--config",
        default="config/site.yaml",
        help="Path to site configuration file (YAML)",
    )
    parser.add_argument(
        "--days-back",
        type=int,
        default=None,
        help="Recency window in days (default: WATCH_DAYS_BACK or 2)",
    )
    parser.add_argument(
        "--as-of",
        type=_as_of,
        default=None,
        help="Reference instant in ISO format (YYYY-MM-DD[THH:MM]); defaults to now",
    )
    parser.add_argument(
        "--no-details",
        action="store_true",
        help="Do not fetch article pages for body excerpts",
    )
    parser.add_argument(
        "--log-level",
        default=None,
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        help="Logging verbosity (default: LOG_LEVEL or INFO)",
    )
    return parser.parse_args(argv)


def main(argv: Sequence[str] | None = None) -> int:
    load_dotenv(override=False)
    args = parse_args(argv)
    configure_logging(level=args.log_level)
    logger = get_logger("ew.agent")

    config_path = Path(args.config)
    logger.info("Loading site configuration from %s", config_path)
    try:
        site = load_site_config(config_path)
    except ConfigError as exc:
        logger.exception("Failed to load configuration: %s", exc)
        return 1

    try:
        settings = PipelineConfig()
    except ValueError as exc:
        logger.exception("Invalid WATCH_* environment setting: %s", exc)
        return 1
    if args.days_back is not None:
        settings.days_back = args.days_back
    if args.no_details:
        settings.fetch_details = False

    orch = Orchestrator(site, settings=settings, now=args.as_of)
    try:
        result = orch.run()
    except FetchError as exc:
        logger.exception("Failed to fetch listing page: %s", exc)
        return 1
    except Exception as exc:  # noqa: BLE001 - top-level entrypoint guard
        logger.exception("Run failed: %s", exc)
        return 1

    print(result.text)
    if result.report is not None:
        logger.info("Run summary:\n%s", result.report.to_text())
    return 0


if __name__ == "__main__":  # pragma: no cover - script entrypoint
    raise SystemExit(main())
