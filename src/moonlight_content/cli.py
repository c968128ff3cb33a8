# src/moonlight_content/cli.py

from __future__ import annotations

import argparse
import json
import logging
import sys
from collections.abc import Callable
from dataclasses import asdict, replace
from datetime import date
from pathlib import Path
from typing import Any, TypeVar

from moonlight_content.config import HeroSource, Settings, SourceKind, get_settings
from moonlight_content.domain.models import SUPPORTED_LOCALES, MediaKind
from moonlight_content.io.jsonl import write_json
from moonlight_content.io.records_jsonl import Record, record_to_raw, write_records
from moonlight_content.io.snapshots import CONTENT_SNAPSHOT, SnapshotStore
from moonlight_content.pipeline.loader import ContentLoader
from moonlight_content.pipeline.selection import filter_media, select_all, select_upcoming
from moonlight_content.sheets.client import CONTENT_TAB, CsvSheetSource
from moonlight_content.sheets.errors import SourceUnavailable
from moonlight_content.sheets.values_api import ValuesApiSource

logger = logging.getLogger(__name__)

T = TypeVar("T")


def main(argv: list[str] | None = None) -> None:
    """Entry point for the moonlight-content CLI."""
    parser = _build_arg_parser()
    args = parser.parse_args(argv)

    _configure_logging(verbose=args.verbose)

    try:
        settings = _apply_overrides(get_settings(), args)
        source = _build_source(settings)
    except ValueError as exc:
        parser.error(str(exc))

    try:
        with source:
            if args.command == "health":
                _cmd_health(source)
                return
            if settings.hero_source is not HeroSource.SHEET:
                logger.info("No content store available here; hero is read from the sheet.")
            loader = ContentLoader(source)
            snapshots = SnapshotStore(args.snapshot_dir) if args.snapshot_dir else None
            _run_command(loader, args, snapshots)
    except SourceUnavailable as exc:
        logger.error("%s", exc)
        sys.exit(1)
    except KeyboardInterrupt:
        logger.warning("Interrupted by user. Exiting.")
        sys.exit(1)


def _build_arg_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="moonlight-content",
        description="Fetch and normalize Moonlight site content from Google Sheets.",
    )

    parser.add_argument(
        "--source",
        choices=[k.value for k in SourceKind],
        default=None,
        help="Sheet access strategy (default: MOONLIGHT_SOURCE or 'csv').",
    )
    parser.add_argument(
        "--timeout",
        type=float,
        default=None,
        help="Request timeout in seconds (default: MOONLIGHT_SHEET_TIMEOUT or 10).",
    )
    parser.add_argument(
        "--snapshot-dir",
        type=Path,
        default=None,
        help=(
            "Keep a last-known-good copy of each fetched tab here and serve it "
            "when the sheet is unreachable."
        ),
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Enable verbose logging.",
    )

    subparsers = parser.add_subparsers(
        dest="command",
        required=True,
        help="Sub-command to run.",
    )

    shows_parser = subparsers.add_parser("shows", help="List shows.")
    shows_parser.add_argument(
        "--all",
        action="store_true",
        help="Include past shows and shows with unreadable dates.",
    )
    shows_parser.add_argument(
        "--limit",
        type=int,
        default=None,
        help="Maximum number of upcoming shows to list.",
    )
    shows_parser.add_argument(
        "--as-of",
        type=date.fromisoformat,
        default=None,
        help="Reference date (YYYY-MM-DD) for upcoming shows (default: today).",
    )
    _add_output_argument(shows_parser)

    media_parser = subparsers.add_parser("media", help="List media items.")
    media_parser.add_argument(
        "--kind",
        choices=[k.value for k in MediaKind],
        default=None,
        help="Only list photos or videos.",
    )
    _add_output_argument(media_parser)

    testimonials_parser = subparsers.add_parser("testimonials", help="List testimonials.")
    _add_output_argument(testimonials_parser)

    content_parser = subparsers.add_parser("content", help="Dump the content tree.")
    _add_output_argument(content_parser)

    hero_parser = subparsers.add_parser("hero", help="Show resolved hero copy.")
    hero_parser.add_argument(
        "--locale",
        choices=SUPPORTED_LOCALES,
        default=SUPPORTED_LOCALES[0],
        help="Locale to resolve (default: %(default)s).",
    )

    subparsers.add_parser("health", help="Check that the sheet can be reached.")

    return parser


def _add_output_argument(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "--output",
        type=Path,
        default=None,
        help="Write the snapshot to this file instead of stdout.",
    )


def _configure_logging(*, verbose: bool) -> None:
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(
        level=level,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )


def _apply_overrides(settings: Settings, args: argparse.Namespace) -> Settings:
    if args.source is not None:
        settings = replace(settings, source=SourceKind(args.source))
    if args.timeout is not None:
        if args.timeout <= 0:
            msg = "--timeout must be positive."
            raise ValueError(msg)
        settings = replace(settings, timeout=args.timeout)
    return settings


def _build_source(settings: Settings) -> CsvSheetSource | ValuesApiSource:
    if settings.source is SourceKind.API:
        if not settings.api_key:
            msg = "GOOGLE_API_KEY must be set to use the values API."
            raise ValueError(msg)
        return ValuesApiSource(
            settings.sheet_id,
            settings.api_key,
            timeout=settings.timeout,
        )
    return CsvSheetSource(settings.sheet_id, timeout=settings.timeout)


def _run_command(
    loader: ContentLoader,
    args: argparse.Namespace,
    snapshots: SnapshotStore | None = None,
) -> None:
    if args.command == "shows":
        shows = _fetch_or_fallback("shows", loader.load_shows, snapshots)
        if args.all:
            records: list[Record] = list(select_all(shows, published_only=True))
        else:
            as_of = args.as_of or date.today()
            records = list(select_upcoming(shows, as_of, args.limit))
        _emit_records(records, args.output)
    elif args.command == "media":
        items = _fetch_or_fallback("media", loader.load_media, snapshots)
        if args.kind is not None:
            items = filter_media(items, MediaKind(args.kind))
        _emit_records(list(items), args.output)
    elif args.command == "testimonials":
        testimonials = _fetch_or_fallback("testimonials", loader.load_testimonials, snapshots)
        _emit_records(list(testimonials), args.output)
    elif args.command == "content":
        tree = _fetch_or_fallback(CONTENT_SNAPSHOT, loader.load_content, snapshots)
        if args.output is not None:
            write_json(args.output, tree)
            logger.info("Wrote %s content sections to %s.", len(tree), args.output)
        else:
            _print_json(tree)
    elif args.command == "hero":
        view = loader.load_hero(args.locale)
        if view.connection_error:
            logger.warning("Sheet unreachable; showing default hero content.")
        _print_json(asdict(view.content))
    else:
        msg = f"Unknown command: {args.command}"
        raise ValueError(msg)


def _fetch_or_fallback(
    name: str,
    fetch: Callable[[], T],
    snapshots: SnapshotStore | None,
) -> T:
    """Fetch from the sheet and refresh the snapshot, or fall back to it."""
    try:
        result = fetch()
    except SourceUnavailable as exc:
        if snapshots is None or not snapshots.exists(name):
            raise
        logger.warning(
            "Sheet unavailable (%s); using %s snapshot from %s.",
            exc,
            name,
            snapshots.path_for(name),
        )
        return snapshots.load(name)

    if snapshots is not None:
        snapshots.save(name, result)
    return result


def _cmd_health(source: CsvSheetSource | ValuesApiSource) -> None:
    if isinstance(source, CsvSheetSource):
        status = source.check_connection()
        _print_json(asdict(status))
        if not status.success:
            sys.exit(1)
        return

    # The values API has no health endpoint; fetching a small tab is enough.
    source.fetch_tab(CONTENT_TAB)
    _print_json({"success": True, "error": None, "tabs": [CONTENT_TAB]})


def _emit_records(records: list[Record], output: Path | None) -> None:
    if output is not None:
        count = write_records(output, records)
        logger.info("Wrote %s records to %s.", count, output)
        return
    for record in records:
        print(json.dumps(record_to_raw(record), ensure_ascii=False))


def _print_json(obj: Any) -> None:
    print(json.dumps(obj, ensure_ascii=False, indent=2))


if __name__ == "__main__":
    # python -m moonlight_content.cli -v shows --limit 4
    # python -m moonlight_content.cli --source api media --kind video
    main()
