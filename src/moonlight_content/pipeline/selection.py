# moonlight_content/pipeline/selection.py

"""View filters and orderings for shows and media.

All helpers return new lists; the inputs are never mutated.
"""

from __future__ import annotations

from collections.abc import Iterable
from datetime import date, datetime
from operator import attrgetter
from typing import TypeVar

from moonlight_content.domain.models import MediaItem, MediaKind, ShowRecord
from moonlight_content.pipeline.dates import parse_date

T = TypeVar("T")


def _as_day(value: date | datetime) -> date:
    if isinstance(value, datetime):
        return value.date()
    return value


def select_upcoming(
    shows: Iterable[ShowRecord],
    as_of: date | datetime,
    limit: int | None = None,
) -> list[ShowRecord]:
    """Return shows dated on or after ``as_of``, earliest first.

    The comparison is by calendar day, so a show "today" always qualifies.
    Shows whose date cannot be parsed are left out. Ties keep input order.
    ``limit`` truncates after sorting.
    """
    if limit is not None and limit < 0:
        msg = "limit must be non-negative."
        raise ValueError(msg)

    cutoff = _as_day(as_of)
    dated: list[tuple[date, ShowRecord]] = []
    for show in shows:
        parsed = parse_date(show.date_text)
        if parsed is not None and parsed >= cutoff:
            dated.append((parsed, show))

    # sorted() is stable, so equal dates keep their sheet order.
    dated.sort(key=lambda pair: pair[0])
    upcoming = [show for _, show in dated]
    return upcoming if limit is None else upcoming[:limit]


def select_all(
    shows: Iterable[ShowRecord],
    published_only: bool = True,
) -> list[ShowRecord]:
    """Return every show in chronological order.

    Shows with unparseable dates go last, in input order. Public pages pass
    ``published_only=True``; admin views pass False.
    """
    dated: list[tuple[date, ShowRecord]] = []
    undated: list[ShowRecord] = []
    for show in shows:
        if published_only and not show.is_published:
            continue
        parsed = parse_date(show.date_text)
        if parsed is None:
            undated.append(show)
        else:
            dated.append((parsed, show))

    dated.sort(key=lambda pair: pair[0])
    return [show for _, show in dated] + undated


def filter_media(items: Iterable[MediaItem], kind: MediaKind) -> list[MediaItem]:
    """Keep only items of one kind (photo or video)."""
    return [item for item in items if item.kind is kind]


def sort_by_order(items: Iterable[T]) -> list[T]:
    """Stable sort by the ``order`` attribute."""
    return sorted(items, key=attrgetter("order"))
