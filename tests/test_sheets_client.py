"""Tests for the CSV export source."""

from __future__ import annotations

import time
from collections.abc import Iterator

import httpx
import pytest

from moonlight_content.sheets.client import CsvSheetSource, parse_csv
from moonlight_content.sheets.errors import SourceTimeout, SourceUnavailable

SHOWS_CSV = (
    '"Date","Event Name","Notes","Location","Ticket Link","Private"\n'
    '"15/06/2024","Barby","","Tel Aviv","https://t.example/1","FALSE"\n'
    "\n"
    '"20/06/2024","Zappa, Herzliya","","Herzliya","https://t.example/2",""\n'
)


def _source(handler) -> CsvSheetSource:
    return CsvSheetSource("sheet123", transport=httpx.MockTransport(handler))


def test_parse_csv_handles_quotes_and_blank_lines() -> None:
    rows = parse_csv('a,"b, c","say ""hi"""\n\n   \n d , e ,f\n')
    assert rows == [["a", "b, c", 'say "hi"'], ["d", "e", "f"]]


def test_parse_csv_keeps_rows_of_empty_cells() -> None:
    assert parse_csv(",,\n") == [["", "", ""]]


def test_build_url_encodes_tab_name() -> None:
    source = CsvSheetSource("sheet123")
    try:
        url = source.build_url("My Tab")
    finally:
        source.close()
    assert url == (
        "https://docs.google.com/spreadsheets/d/sheet123/gviz/tq"
        "?tqx=out:csv&sheet=My%20Tab"
    )


def test_fetch_tab_drops_header() -> None:
    seen: list[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return httpx.Response(200, text=SHOWS_CSV)

    with _source(handler) as source:
        rows = source.fetch_tab("Coldplay")

    assert rows == [
        ["15/06/2024", "Barby", "", "Tel Aviv", "https://t.example/1", "FALSE"],
        ["20/06/2024", "Zappa, Herzliya", "", "Herzliya", "https://t.example/2", ""],
    ]
    assert seen[0].url.params["sheet"] == "Coldplay"


def test_header_only_tab_is_empty_not_an_error() -> None:
    with _source(lambda request: httpx.Response(200, text="a,b,c\n")) as source:
        assert source.fetch_tab("Media") == []


def test_http_error_raises_source_unavailable() -> None:
    with _source(lambda request: httpx.Response(404)) as source:
        with pytest.raises(SourceUnavailable) as excinfo:
            source.fetch_tab("Media")

    assert excinfo.value.tab == "Media"
    assert "404" in excinfo.value.reason
    assert not isinstance(excinfo.value, SourceTimeout)


def test_transport_error_raises_source_unavailable() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("connection refused", request=request)

    with _source(handler) as source:
        with pytest.raises(SourceUnavailable):
            source.fetch_tab("Content")


def test_timeout_raises_source_timeout() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ReadTimeout("too slow", request=request)

    with _source(handler) as source:
        with pytest.raises(SourceTimeout) as excinfo:
            source.fetch_tab("Content")

    assert isinstance(excinfo.value, SourceUnavailable)


def test_check_connection_reports_failure_without_raising() -> None:
    with _source(lambda request: httpx.Response(500)) as source:
        status = source.check_connection()

    assert status.success is False
    assert status.error is not None
    assert "500" in status.error


def test_check_connection_lists_tabs_on_success() -> None:
    with _source(lambda request: httpx.Response(200, text="section,key\n")) as source:
        status = source.check_connection()

    assert status.success is True
    assert status.tabs == ["Coldplay", "Media", "Testimonials", "Content"]


def test_timeout_must_be_positive() -> None:
    with pytest.raises(ValueError):
        CsvSheetSource("sheet123", timeout=0)


class SlowStream(httpx.SyncByteStream):
    """Body that trickles in; every chunk is fast, the whole body is not."""

    def __iter__(self) -> Iterator[bytes]:
        yield b"section,key\n"
        for _ in range(5):
            time.sleep(0.1)
            yield b"hero,title\n"


def test_slow_body_exceeding_total_timeout_raises_source_timeout() -> None:
    transport = httpx.MockTransport(lambda request: httpx.Response(200, stream=SlowStream()))
    with CsvSheetSource("sheet123", timeout=0.2, transport=transport) as source:
        with pytest.raises(SourceTimeout) as excinfo:
            source.fetch_tab("Content")

    assert excinfo.value.tab == "Content"
    assert "timed out" in excinfo.value.reason


def test_streamed_body_within_timeout_is_parsed() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, content=b"section,key,en\nhero,title,MOONLIGHT\n")

    with _source(handler) as source:
        assert source.fetch_tab("Content") == [["hero", "title", "MOONLIGHT"]]
