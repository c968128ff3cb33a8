"""Tests for the Sheets values API source.

A fake session stands in for ``requests.Session`` so no network is used.
"""

from __future__ import annotations

import json
import time
from collections.abc import Iterator
from typing import Any

import pytest
import requests

from moonlight_content.sheets.errors import SourceTimeout, SourceUnavailable
from moonlight_content.sheets.values_api import ValuesApiSource, column_width, pad_row


class FakeResponse:
    def __init__(
        self,
        status_code: int = 200,
        payload: Any = None,
        bad_json: bool = False,
        chunk_size: int | None = None,
        delay: float = 0.0,
    ):
        self.status_code = status_code
        self._body = b"not json" if bad_json else json.dumps(payload).encode("utf-8")
        self._chunk_size = chunk_size
        self._delay = delay
        self.closed = False

    def raise_for_status(self) -> None:
        if self.status_code >= 400:
            raise requests.HTTPError(f"{self.status_code} error", response=self)

    def iter_content(self, chunk_size: int = 1) -> Iterator[bytes]:
        size = self._chunk_size or chunk_size
        for start in range(0, len(self._body), size):
            if self._delay:
                time.sleep(self._delay)
            yield self._body[start : start + size]

    def close(self) -> None:
        self.closed = True


class FakeSession:
    def __init__(self, response: FakeResponse | None = None, exc: Exception | None = None):
        self.response = response
        self.exc = exc
        self.calls: list[dict[str, Any]] = []
        self.closed = False

    def get(self, url: str, **kwargs: Any) -> FakeResponse:
        self.calls.append({"url": url, **kwargs})
        if self.exc is not None:
            raise self.exc
        assert self.response is not None
        return self.response

    def close(self) -> None:
        self.closed = True


def _source(session: FakeSession, timeout: float = 5.0) -> ValuesApiSource:
    return ValuesApiSource("sheet123", "key-abc", timeout=timeout, session=session)  # type: ignore[arg-type]


def test_column_width() -> None:
    assert column_width("A") == 1
    assert column_width("e") == 5
    with pytest.raises(ValueError):
        column_width("AA")


def test_pad_row_fills_missing_trailing_cells() -> None:
    assert pad_row(["a", None, 3], 5) == ["a", "", "3", "", ""]
    assert pad_row(["a", "b"], 1) == ["a", "b"]


def test_fetch_tab_requests_range_and_pads_rows() -> None:
    session = FakeSession(FakeResponse(payload={"values": [["Ann", "", "Great!"], ["Bob"]]}))
    with _source(session, timeout=3.5) as source:
        rows = source.fetch_tab("Testimonials")

    assert rows == [["Ann", "", "Great!", "", ""], ["Bob", "", "", "", ""]]
    call = session.calls[0]
    assert call["url"].endswith("/sheet123/values/Testimonials!A2:E")
    assert call["params"] == {"key": "key-abc"}
    assert call["timeout"] == 3.5
    assert session.closed is True


def test_missing_values_means_zero_rows() -> None:
    session = FakeSession(FakeResponse(payload={"range": "Media!A2:G"}))
    assert _source(session).fetch_tab("Media") == []


def test_http_error_raises_source_unavailable() -> None:
    session = FakeSession(FakeResponse(status_code=403, payload={}))
    with pytest.raises(SourceUnavailable) as excinfo:
        _source(session).fetch_tab("Content")
    assert "403" in excinfo.value.reason


def test_timeout_raises_source_timeout() -> None:
    session = FakeSession(exc=requests.Timeout("read timed out"))
    with pytest.raises(SourceTimeout):
        _source(session).fetch_tab("Coldplay")


def test_connection_error_raises_source_unavailable() -> None:
    session = FakeSession(exc=requests.ConnectionError("dns failure"))
    with pytest.raises(SourceUnavailable):
        _source(session).fetch_tab("Coldplay")


@pytest.mark.parametrize(
    "response",
    [
        FakeResponse(bad_json=True),
        FakeResponse(payload=["not", "an", "object"]),
        FakeResponse(payload={"values": "nope"}),
        FakeResponse(payload={"values": ["row-as-string"]}),
    ],
)
def test_malformed_body_raises_source_unavailable(response: FakeResponse) -> None:
    with pytest.raises(SourceUnavailable):
        _source(FakeSession(response)).fetch_tab("Media")


def test_api_key_is_required() -> None:
    with pytest.raises(ValueError):
        ValuesApiSource("sheet123", "")


def test_body_is_streamed_and_response_closed() -> None:
    response = FakeResponse(payload={"values": [["Dana", "Fan", "Wow"]]}, chunk_size=4)
    session = FakeSession(response)
    assert _source(session).fetch_tab("Testimonials") == [["Dana", "Fan", "Wow", "", ""]]
    assert session.calls[0]["stream"] is True
    assert response.closed is True


def test_slow_body_exceeding_total_timeout_raises_source_timeout() -> None:
    # Each chunk arrives within the read timeout but the whole body does not.
    response = FakeResponse(payload={"values": [["a", "b"]] * 5}, chunk_size=8, delay=0.1)
    with pytest.raises(SourceTimeout):
        _source(FakeSession(response), timeout=0.2).fetch_tab("Media")
    assert response.closed is True
