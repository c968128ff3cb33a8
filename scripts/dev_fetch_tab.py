#!/usr/bin/env python3
"""Manual script to fetch one sheet tab and print its raw rows."""

import sys

from moonlight_content.config import get_settings
from moonlight_content.sheets.client import CsvSheetSource

if __name__ == "__main__":
    tab = sys.argv[1] if len(sys.argv) > 1 else "Coldplay"
    settings = get_settings()
    with CsvSheetSource(settings.sheet_id, timeout=settings.timeout) as source:
        for row in source.fetch_tab(tab):
            print(row)
