# moonlight_content/config.py

"""Shared configuration and environment setup."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from os import getenv

from dotenv import load_dotenv

load_dotenv(override=True)

# Public Moonlight content spreadsheet.
DEFAULT_SHEET_ID = "1V0m-BhUqJvvCDGhdklUxKSxo2OOd2h1ZR1HiMLZ27mc"
DEFAULT_TIMEOUT = 10.0


class SourceKind(str, Enum):
    CSV = "csv"
    API = "api"


class HeroSource(str, Enum):
    """Where hero content is read from."""

    SHEET = "sheet"
    DATABASE = "database"


@dataclass(frozen=True, slots=True)
class Settings:
    sheet_id: str
    api_key: str | None
    timeout: float
    source: SourceKind
    hero_source: HeroSource


def get_settings() -> Settings:
    """Build settings from environment variables (and .env, if present).

    Raises:
        ValueError: if a variable holds a value that cannot be interpreted.
    """
    timeout_raw = getenv("MOONLIGHT_SHEET_TIMEOUT", str(DEFAULT_TIMEOUT))
    try:
        timeout = float(timeout_raw)
    except ValueError:
        msg = f"MOONLIGHT_SHEET_TIMEOUT must be a number, got {timeout_raw!r}."
        raise ValueError(msg) from None
    if timeout <= 0:
        msg = "MOONLIGHT_SHEET_TIMEOUT must be positive."
        raise ValueError(msg)

    return Settings(
        sheet_id=getenv("GOOGLE_SHEET_ID") or DEFAULT_SHEET_ID,
        api_key=getenv("GOOGLE_API_KEY") or None,
        timeout=timeout,
        source=SourceKind(getenv("MOONLIGHT_SOURCE", SourceKind.CSV.value).lower()),
        hero_source=HeroSource(
            getenv("MOONLIGHT_HERO_SOURCE", HeroSource.SHEET.value).lower()
        ),
    )
