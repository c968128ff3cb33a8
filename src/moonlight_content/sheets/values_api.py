# moonlight_content/sheets/values_api.py

"""
Thin wrapper around the Google Sheets v4 ``values`` endpoint.

Requires an API key with read access to the sheet (``GOOGLE_API_KEY``).
Ranges start at row 2, so the header row is never returned.
"""

from __future__ import annotations

import json
import logging
import string
import time
from typing import Any
from urllib.parse import quote

import requests

from moonlight_content.config import DEFAULT_TIMEOUT
from moonlight_content.domain.models import RawRow
from moonlight_content.sheets.client import (
    CONTENT_TAB,
    MEDIA_TAB,
    SHOWS_TAB,
    TESTIMONIALS_TAB,
)
from moonlight_content.sheets.errors import SourceTimeout, SourceUnavailable

LOGGER = logging.getLogger(__name__)

BASE_URL = "https://sheets.googleapis.com/v4/spreadsheets"

# Last column read per tab. Rows are padded to this width.
TAB_LAST_COLUMN: dict[str, str] = {
    SHOWS_TAB: "G",
    MEDIA_TAB: "G",
    TESTIMONIALS_TAB: "E",
    CONTENT_TAB: "D",
}
_FALLBACK_LAST_COLUMN = "Z"
_CHUNK_SIZE = 8192


def column_width(last_column: str) -> int:
    """Return the number of columns in ``A..last_column`` (single letters only)."""
    letter = last_column.upper()
    if len(letter) != 1 or letter not in string.ascii_uppercase:
        msg = f"Unsupported column letter: {last_column!r}"
        raise ValueError(msg)
    return string.ascii_uppercase.index(letter) + 1


def pad_row(row: list[Any], width: int) -> RawRow:
    """Stringify cells and fill missing trailing cells with empty strings."""
    cells = ["" if cell is None else str(cell) for cell in row]
    if len(cells) < width:
        cells.extend([""] * (width - len(cells)))
    return cells


class ValuesApiSource:
    """Read fixed cell ranges of sheet tabs through the values API."""

    def __init__(
        self,
        sheet_id: str,
        api_key: str,
        *,
        timeout: float = DEFAULT_TIMEOUT,
        session: requests.Session | None = None,
    ) -> None:
        if not api_key:
            msg = "api_key is required for the values API."
            raise ValueError(msg)
        if timeout <= 0:
            msg = "timeout must be positive."
            raise ValueError(msg)

        self._sheet_id = sheet_id
        self._api_key = api_key
        self._timeout = timeout
        self._session = session or requests.Session()

    def close(self) -> None:
        self._session.close()

    def __enter__(self) -> "ValuesApiSource":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:  # type: ignore[override]
        self.close()

    def build_range(self, tab_name: str) -> str:
        last_column = TAB_LAST_COLUMN.get(tab_name, _FALLBACK_LAST_COLUMN)
        return f"{tab_name}!A2:{last_column}"

    def fetch_tab(self, tab_name: str) -> list[RawRow]:
        """Fetch the data rows of a tab, each padded to the tab's width.

        Raises:
            SourceTimeout: if the request exceeded the timeout.
            SourceUnavailable: on HTTP errors, network errors or a malformed body.
        """
        cell_range = self.build_range(tab_name)
        width = column_width(cell_range.rsplit(":", 1)[1])
        data = self._get(tab_name, cell_range)

        values = data.get("values", [])
        if not isinstance(values, list):
            raise SourceUnavailable(tab_name, "malformed response: 'values' is not a list")

        rows: list[RawRow] = []
        for row in values:
            if not isinstance(row, list):
                raise SourceUnavailable(tab_name, "malformed response: row is not a list")
            rows.append(pad_row(row, width))

        LOGGER.debug("Received %s rows for range %s.", len(rows), cell_range)
        return rows

    def _get(self, tab_name: str, cell_range: str) -> dict[str, Any]:
        url = f"{BASE_URL}/{self._sheet_id}/values/{quote(cell_range, safe='!:')}"
        # requests applies the timeout per connect/read; the deadline bounds the whole fetch.
        deadline = time.monotonic() + self._timeout
        try:
            response = self._session.get(
                url,
                params={"key": self._api_key},
                timeout=self._timeout,
                stream=True,
            )
            try:
                response.raise_for_status()
                chunks: list[bytes] = []
                for chunk in response.iter_content(chunk_size=_CHUNK_SIZE):
                    if time.monotonic() > deadline:
                        LOGGER.error(
                            "Sheets API request for %s exceeded %.1fs; abandoning.",
                            cell_range,
                            self._timeout,
                        )
                        raise SourceTimeout(tab_name, "request timed out")
                    chunks.append(chunk)
            finally:
                response.close()
            data = json.loads(b"".join(chunks))
        except requests.Timeout as exc:
            LOGGER.error("Sheets API request for %s timed out: %s", cell_range, exc)
            raise SourceTimeout(tab_name, "request timed out") from exc
        except requests.HTTPError as exc:
            status = exc.response.status_code if exc.response is not None else "?"
            LOGGER.error("Google Sheets API error (%s) for %s.", status, cell_range)
            raise SourceUnavailable(tab_name, f"Google Sheets API error ({status})") from exc
        except requests.RequestException as exc:
            LOGGER.error("Sheets API request for %s failed: %s", cell_range, exc)
            raise SourceUnavailable(tab_name, str(exc) or type(exc).__name__) from exc
        except ValueError as exc:
            LOGGER.error("Sheets API returned invalid JSON for %s: %s", cell_range, exc)
            raise SourceUnavailable(tab_name, "malformed response body") from exc

        if not isinstance(data, dict):
            raise SourceUnavailable(tab_name, "malformed response: expected an object")
        return data
