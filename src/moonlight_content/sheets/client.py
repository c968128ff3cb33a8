# moonlight_content/sheets/client.py

"""Fetch sheet tabs through the public CSV export of a Google Sheet."""

from __future__ import annotations

import csv
import io
import logging
import time
from dataclasses import dataclass, field
from urllib.parse import quote

import httpx

from moonlight_content.config import DEFAULT_TIMEOUT
from moonlight_content.domain.models import RawRow
from moonlight_content.sheets.errors import SourceTimeout, SourceUnavailable

logger = logging.getLogger(__name__)


BASE_URL = "https://docs.google.com/spreadsheets/d"

SHOWS_TAB = "Coldplay"
MEDIA_TAB = "Media"
TESTIMONIALS_TAB = "Testimonials"
CONTENT_TAB = "Content"
ALL_TABS = (SHOWS_TAB, MEDIA_TAB, TESTIMONIALS_TAB, CONTENT_TAB)


@dataclass(slots=True)
class ConnectionStatus:
    success: bool
    error: str | None = None
    tabs: list[str] = field(default_factory=list)


def parse_csv(text: str) -> list[RawRow]:
    """Parse CSV text into rows of trimmed cells.

    Quoted cells may contain commas, and a doubled quote inside a quoted cell
    collapses to one. Blank lines are skipped. The header is NOT removed here.
    """
    rows: list[RawRow] = []
    for row in csv.reader(io.StringIO(text)):
        if not row or (len(row) == 1 and not row[0].strip()):
            continue
        rows.append([cell.strip() for cell in row])
    return rows


class CsvSheetSource:
    """HTTP client for reading tabs of a public Google Sheet as CSV."""

    def __init__(
        self,
        sheet_id: str,
        *,
        timeout: float = DEFAULT_TIMEOUT,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        if timeout <= 0:
            msg = "timeout must be positive."
            raise ValueError(msg)

        self._sheet_id = sheet_id
        self._timeout = timeout
        self._client = httpx.Client(
            headers={"Accept": "text/csv"},
            timeout=timeout,
            follow_redirects=True,
            transport=transport,
        )

    def close(self) -> None:
        """Close the underlying HTTP client."""
        self._client.close()

    def __enter__(self) -> "CsvSheetSource":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:  # type: ignore[override]
        self.close()

    def build_url(self, tab_name: str) -> str:
        """Build the CSV export URL for a tab."""
        return (
            f"{BASE_URL}/{self._sheet_id}/gviz/tq"
            f"?tqx=out:csv&sheet={quote(tab_name, safe='')}"
        )

    def fetch_tab(self, tab_name: str) -> list[RawRow]:
        """Fetch a tab and return its data rows, header excluded.

        Raises:
            SourceTimeout: if the request exceeded the timeout.
            SourceUnavailable: on any other transport or HTTP failure.
        """
        text = self._fetch_text(tab_name)
        rows = parse_csv(text)
        logger.debug("Fetched tab %s (%s rows incl. header).", tab_name, len(rows))
        return rows[1:]

    def check_connection(self) -> ConnectionStatus:
        """Try to read the Content tab. Never raises."""
        try:
            self._fetch_text(CONTENT_TAB)
        except SourceUnavailable as exc:
            return ConnectionStatus(success=False, error=exc.reason)
        return ConnectionStatus(success=True, tabs=list(ALL_TABS))

    def _fetch_text(self, tab_name: str) -> str:
        url = self.build_url(tab_name)
        # httpx applies the timeout per connect/read; the deadline bounds the whole fetch.
        deadline = time.monotonic() + self._timeout
        try:
            with self._client.stream("GET", url) as response:
                response.raise_for_status()
                chunks: list[bytes] = []
                for chunk in response.iter_bytes():
                    if time.monotonic() > deadline:
                        logger.error(
                            "Fetching tab %s exceeded %.1fs; abandoning.",
                            tab_name,
                            self._timeout,
                        )
                        raise SourceTimeout(tab_name, "request timed out")
                    chunks.append(chunk)
                encoding = response.encoding or "utf-8"
        except httpx.TimeoutException as exc:
            logger.error("Timed out fetching tab %s: %s", tab_name, exc)
            raise SourceTimeout(tab_name, "request timed out") from exc
        except httpx.HTTPStatusError as exc:
            status = exc.response.status_code
            logger.error("HTTP error fetching tab %s (status=%s).", tab_name, status)
            raise SourceUnavailable(
                tab_name, f"HTTP {status}: {exc.response.reason_phrase}"
            ) from exc
        except httpx.RequestError as exc:
            logger.error("Request error fetching tab %s: %s", tab_name, exc)
            raise SourceUnavailable(tab_name, str(exc) or type(exc).__name__) from exc

        return b"".join(chunks).decode(encoding, errors="replace")
