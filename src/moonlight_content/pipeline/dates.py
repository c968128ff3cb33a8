# moonlight_content/pipeline/dates.py

"""Parse the hand-typed show dates found in the sheet."""

from __future__ import annotations

from datetime import date, datetime

from dateutil import parser as date_parser

# Fills fields missing from free-form input ("June 15") so parsing never
# depends on the current time.
_FIXED_DEFAULT = datetime(2000, 1, 1)


def parse_date(text: str | None) -> date | None:
    """Parse ``dd/mm/yyyy``, ``d/m/yy`` or a free-form date. Never raises.

    Slash dates are read day-first. Two-digit years are taken as 20yy, so
    "5/3/99" is 2099, not 1999.
    """
    if not text:
        return None
    trimmed = text.strip()
    if not trimmed:
        return None

    if "/" in trimmed:
        return _parse_slash_date(trimmed)

    try:
        return date.fromisoformat(trimmed)
    except ValueError:
        pass

    try:
        return date_parser.parse(trimmed, default=_FIXED_DEFAULT).date()
    except (ValueError, OverflowError):
        return None


def _parse_slash_date(text: str) -> date | None:
    parts = [part.strip() for part in text.split("/")]
    if len(parts) != 3 or not all(part.isdigit() for part in parts):
        return None

    day, month, year = parts
    day = day.zfill(2)
    month = month.zfill(2)
    if len(year) == 2:
        year = f"20{year}"

    if len(day) != 2 or len(month) != 2 or len(year) != 4:
        return None

    try:
        return date.fromisoformat(f"{year}-{month}-{day}")
    except ValueError:
        return None
