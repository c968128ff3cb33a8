# moonlight_content/pipeline/mappers.py

"""Map raw sheet rows into domain records.

Each tab has a fixed positional column layout (header row already removed):

    Coldplay:      date | venue | (unused) | location | ticket_link | is_private | image_url
    Media:         type | url | thumbnail | title | description | duration | order
    Testimonials:  author | role | content | avatar_url | order
    Content:       section | key | value_en | value_he

Row mappers return None for rows that fail the required-field check; the
list mappers drop those rows.
"""

from __future__ import annotations

import logging
import re
from collections.abc import Iterable

from moonlight_content.domain.models import (
    PRIMARY_LOCALE,
    SECONDARY_LOCALE,
    LocalizedContentTree,
    MediaItem,
    MediaKind,
    RawRow,
    ShowRecord,
    TestimonialRecord,
)
from moonlight_content.pipeline.drive_urls import convert_google_drive_url
from moonlight_content.pipeline.selection import sort_by_order

logger = logging.getLogger(__name__)

_LEADING_INT = re.compile(r"\s*([+-]?)(\d+)")
_INT_MIN = -(2**31)
_INT_MAX = 2**31 - 1

# Content keys whose values may be Drive sharing links.
URL_KEYS = frozenset(
    {"logo_url", "image_url", "background_url", "thumbnail", "avatar_url"}
)


def _cell(row: RawRow, position: int) -> str:
    """Return the trimmed cell at ``position``, or "" for short rows."""
    if position >= len(row):
        return ""
    value = row[position]
    return value.strip() if isinstance(value, str) else ""


def parse_int(value: str) -> int | None:
    """Parse a leading base-10 integer ("12", " 3rd") or return None.

    Values outside the signed 32-bit range count as unparseable.
    """
    match = _LEADING_INT.match(value)
    if not match:
        return None
    sign, digits = match.groups()
    digits = digits.lstrip("0") or "0"
    # 2**31 has 10 digits; longer strings are out of range before int() sees them.
    if len(digits) > 10:
        return None
    number = int(sign + digits, 10)
    if not _INT_MIN <= number <= _INT_MAX:
        return None
    return number


def map_show_row(row: RawRow, index: int) -> ShowRecord | None:
    date_text = _cell(row, 0)
    venue = _cell(row, 1)
    location = _cell(row, 3)
    ticket_link = _cell(row, 4)

    if not date_text or not venue or not location or not ticket_link:
        logger.debug("Skipping show row with missing essential data: %r", row)
        return None

    if _cell(row, 5).lower() == "true":
        logger.debug("Skipping private show: %s @ %s", date_text, venue)
        return None

    return ShowRecord(
        id=f"show-{index + 1}",
        date_text=date_text,
        venue=venue,
        location=location,
        ticket_link=ticket_link,
        image_url=convert_google_drive_url(_cell(row, 6)),
        is_published=True,
    )


def map_media_row(row: RawRow, index: int) -> MediaItem | None:
    raw_type = _cell(row, 0).lower()
    kind = MediaKind.VIDEO if raw_type == MediaKind.VIDEO.value else MediaKind.PHOTO

    url = _cell(row, 1)
    # Photos may live on Drive; video links (YouTube) are kept as-is.
    if kind is MediaKind.PHOTO:
        url = convert_google_drive_url(url) or ""
    if not url:
        logger.debug("Skipping media row without url: %r", row)
        return None

    order = parse_int(_cell(row, 6))

    return MediaItem(
        id=f"media-{index + 1}",
        kind=kind,
        url=url,
        thumbnail=convert_google_drive_url(_cell(row, 2)),
        title=_cell(row, 3) or ("Video" if kind is MediaKind.VIDEO else "Photo"),
        description=_cell(row, 4) or None,
        duration=_cell(row, 5) or None,
        order=order if order is not None else index + 1,
    )


def map_testimonial_row(row: RawRow, index: int) -> TestimonialRecord | None:
    author = _cell(row, 0)
    content = _cell(row, 2)
    if not author or not content:
        logger.debug("Skipping testimonial row without author/content: %r", row)
        return None

    # An explicit 0 falls back to the position as well.
    order = parse_int(_cell(row, 4)) or index + 1

    return TestimonialRecord(
        id=f"testimonial-{index + 1}",
        author=author,
        role=_cell(row, 1),
        content=content,
        avatar_url=_cell(row, 3) or None,
        order=order,
    )


def map_shows(rows: Iterable[RawRow]) -> list[ShowRecord]:
    """Map show rows in sheet order, dropping incomplete and private rows."""
    shows: list[ShowRecord] = []
    for row in rows:
        show = map_show_row(row, len(shows))
        if show is not None:
            shows.append(show)
    return shows


def map_media(rows: Iterable[RawRow]) -> list[MediaItem]:
    """Map media rows, dropping rows without url, sorted by ``order``."""
    items: list[MediaItem] = []
    for row in rows:
        item = map_media_row(row, len(items))
        if item is not None:
            items.append(item)
    return sort_by_order(items)


def map_testimonials(rows: Iterable[RawRow]) -> list[TestimonialRecord]:
    """Map testimonial rows, dropping rows without author/content, sorted by ``order``."""
    testimonials: list[TestimonialRecord] = []
    for row in rows:
        testimonial = map_testimonial_row(row, len(testimonials))
        if testimonial is not None:
            testimonials.append(testimonial)
    return sort_by_order(testimonials)


def build_content_tree(rows: Iterable[RawRow]) -> LocalizedContentTree:
    """Fold key-value rows into ``section -> key -> {locale: value}``.

    Later rows overwrite earlier ones for the same section/key.
    """
    tree: LocalizedContentTree = {}
    for row in rows:
        section = _cell(row, 0)
        key = _cell(row, 1)
        if not section or not key:
            continue

        primary = row[2] if len(row) > 2 and isinstance(row[2], str) else ""
        secondary = row[3] if len(row) > 3 and isinstance(row[3], str) else ""

        if key in URL_KEYS:
            primary = convert_google_drive_url(primary) or ""
            secondary = convert_google_drive_url(secondary) or primary

        tree.setdefault(section, {})[key] = {
            PRIMARY_LOCALE: primary,
            SECONDARY_LOCALE: secondary,
        }
    return tree
