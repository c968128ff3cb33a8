# moonlight_content/io/records_jsonl.py

from __future__ import annotations

from collections.abc import Iterable
from pathlib import Path
from typing import Any

from moonlight_content.domain.models import (
    MediaItem,
    MediaKind,
    ShowRecord,
    TestimonialRecord,
)
from moonlight_content.io.jsonl import iter_jsonl_objects, write_jsonl

Record = ShowRecord | MediaItem | TestimonialRecord


def show_to_raw(show: ShowRecord) -> dict[str, Any]:
    return {
        "id": show.id,
        "date": show.date_text,
        "venue": show.venue,
        "location": show.location,
        "ticket_link": show.ticket_link,
        "image_url": show.image_url,
        "is_published": show.is_published,
    }


def show_from_raw(raw: dict[str, Any]) -> ShowRecord:
    return ShowRecord(
        id=raw.get("id"),
        date_text=raw["date"],
        venue=raw["venue"],
        location=raw["location"],
        ticket_link=raw["ticket_link"],
        image_url=raw.get("image_url"),
        is_published=bool(raw.get("is_published", True)),
    )


def media_to_raw(item: MediaItem) -> dict[str, Any]:
    return {
        "id": item.id,
        "type": item.kind.value,
        "url": item.url,
        "thumbnail": item.thumbnail,
        "title": item.title,
        "description": item.description,
        "duration": item.duration,
        "order": item.order,
    }


def media_from_raw(raw: dict[str, Any]) -> MediaItem:
    return MediaItem(
        id=raw["id"],
        kind=MediaKind(raw["type"]),
        url=raw["url"],
        thumbnail=raw.get("thumbnail"),
        title=raw["title"],
        description=raw.get("description"),
        duration=raw.get("duration"),
        order=int(raw["order"]),
    )


def testimonial_to_raw(testimonial: TestimonialRecord) -> dict[str, Any]:
    return {
        "id": testimonial.id,
        "author": testimonial.author,
        "role": testimonial.role,
        "content": testimonial.content,
        "avatar_url": testimonial.avatar_url,
        "order": testimonial.order,
    }


def testimonial_from_raw(raw: dict[str, Any]) -> TestimonialRecord:
    return TestimonialRecord(
        id=raw["id"],
        author=raw["author"],
        role=raw.get("role", ""),
        content=raw["content"],
        avatar_url=raw.get("avatar_url"),
        order=int(raw["order"]),
    )


def record_to_raw(record: Record) -> dict[str, Any]:
    """Convert any content record into a JSON-serialisable dict."""
    if isinstance(record, ShowRecord):
        return show_to_raw(record)
    if isinstance(record, MediaItem):
        return media_to_raw(record)
    if isinstance(record, TestimonialRecord):
        return testimonial_to_raw(record)
    msg = f"Unsupported record type: {type(record).__name__}"
    raise TypeError(msg)


def write_records(path: Path, records: Iterable[Record]) -> int:
    """Write records to a JSONL snapshot file."""
    return write_jsonl(path, (record_to_raw(r) for r in records))


def load_shows(path: Path) -> list[ShowRecord]:
    return [show_from_raw(obj) for obj in iter_jsonl_objects(path)]


def load_media(path: Path) -> list[MediaItem]:
    return [media_from_raw(obj) for obj in iter_jsonl_objects(path)]


def load_testimonials(path: Path) -> list[TestimonialRecord]:
    return [testimonial_from_raw(obj) for obj in iter_jsonl_objects(path)]
