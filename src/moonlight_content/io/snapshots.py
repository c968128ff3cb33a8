# moonlight_content/io/snapshots.py

"""Last-known-good copies of fetched content.

Each content kind is kept in its own file under one directory:
``shows.jsonl``, ``media.jsonl``, ``testimonials.jsonl`` and ``content.json``.
The CLI refreshes them after every successful fetch and reads them back when
the sheet cannot be reached.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from pathlib import Path
from typing import Any

from moonlight_content.io.jsonl import read_json, write_json
from moonlight_content.io.records_jsonl import (
    load_media,
    load_shows,
    load_testimonials,
    write_records,
)

logger = logging.getLogger(__name__)

CONTENT_SNAPSHOT = "content"

_RECORD_READERS: dict[str, Callable[[Path], list[Any]]] = {
    "shows": load_shows,
    "media": load_media,
    "testimonials": load_testimonials,
}


class SnapshotStore:
    def __init__(self, directory: Path) -> None:
        self.directory = directory

    def path_for(self, name: str) -> Path:
        if name == CONTENT_SNAPSHOT:
            return self.directory / f"{name}.json"
        if name not in _RECORD_READERS:
            msg = f"Unknown snapshot kind: {name!r}"
            raise ValueError(msg)
        return self.directory / f"{name}.jsonl"

    def exists(self, name: str) -> bool:
        return self.path_for(name).is_file()

    def save(self, name: str, payload: Any) -> None:
        """Replace the snapshot for ``name`` (records, or the content tree)."""
        path = self.path_for(name)
        if name == CONTENT_SNAPSHOT:
            write_json(path, payload)
            logger.debug("Saved content snapshot to %s.", path)
            return
        count = write_records(path, payload)
        logger.debug("Saved %s %s records to %s.", count, name, path)

    def load(self, name: str) -> Any:
        """Read the snapshot for ``name``. Raises ``FileNotFoundError`` if absent."""
        path = self.path_for(name)
        if name == CONTENT_SNAPSHOT:
            return read_json(path)
        return _RECORD_READERS[name](path)
