# moonlight_content/io/jsonl.py

"""Low-level JSON / JSONL read/write helpers for content snapshots."""

from __future__ import annotations

import json
import logging
from collections.abc import Iterable, Iterator
from pathlib import Path
from typing import Any

logger = logging.getLogger(__name__)


def iter_jsonl_objects(path: Path, *, strict: bool = False) -> Iterator[dict[str, Any]]:
    """Yield the JSON objects stored one per line in ``path``.

    Blank lines are ignored. A line that is not a JSON object is logged and
    skipped, or raises ``ValueError`` when ``strict`` is set. A missing file
    raises ``FileNotFoundError``.
    """
    with path.open("r", encoding="utf-8") as f:
        for line_number, line in enumerate(f, start=1):
            if not line.strip():
                continue
            try:
                obj = json.loads(line)
            except json.JSONDecodeError:
                obj = None
            if isinstance(obj, dict):
                yield obj
                continue

            msg = f"{path}:{line_number} is not a JSON object"
            if strict:
                raise ValueError(msg)
            logger.warning("Skipping snapshot line: %s", msg)


def write_jsonl(path: Path, objects: Iterable[dict[str, Any]]) -> int:
    """Write objects to a JSONL file, one per line. Returns the count written."""
    path.parent.mkdir(parents=True, exist_ok=True)
    count = 0
    with path.open("w", encoding="utf-8") as f:
        for obj in objects:
            f.write(json.dumps(obj, ensure_ascii=False) + "\n")
            count += 1
    return count


def write_json(path: Path, obj: Any) -> None:
    """Write a single JSON document (used for the nested content tree)."""
    path.parent.mkdir(parents=True, exist_ok=True)
    with path.open("w", encoding="utf-8") as f:
        json.dump(obj, f, ensure_ascii=False, indent=2)
        f.write("\n")


def read_json(path: Path) -> Any:
    with path.open("r", encoding="utf-8") as f:
        return json.load(f)
