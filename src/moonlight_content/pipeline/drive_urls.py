# moonlight_content/pipeline/drive_urls.py

from __future__ import annotations

import re

_FILE_LINK = re.compile(r"drive\.google\.com/file/d/([a-zA-Z0-9_-]+)")
_OPEN_LINK = re.compile(r"drive\.google\.com/open\?id=([a-zA-Z0-9_-]+)")

DIRECT_VIEW_URL = "https://drive.google.com/uc?export=view&id={file_id}"


def convert_google_drive_url(url: str | None) -> str | None:
    """Rewrite a Drive sharing link into a direct image URL.

    Non-Drive URLs are returned trimmed; blank input gives None.
    """
    if url is None:
        return None
    trimmed = url.strip()
    if not trimmed:
        return None

    match = _FILE_LINK.search(trimmed) or _OPEN_LINK.search(trimmed)
    if match:
        return DIRECT_VIEW_URL.format(file_id=match.group(1))
    return trimmed
