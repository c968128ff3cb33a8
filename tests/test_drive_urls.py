from __future__ import annotations

import pytest

from moonlight_content.pipeline.drive_urls import convert_google_drive_url


@pytest.mark.parametrize(
    ("url", "expected"),
    [
        (
            "https://drive.google.com/file/d/ABC123/view?usp=sharing",
            "https://drive.google.com/uc?export=view&id=ABC123",
        ),
        (
            "https://drive.google.com/open?id=a_b-C9",
            "https://drive.google.com/uc?export=view&id=a_b-C9",
        ),
        (
            "  https://drive.google.com/file/d/XYZ/preview  ",
            "https://drive.google.com/uc?export=view&id=XYZ",
        ),
        ("https://example.com/photo.jpg", "https://example.com/photo.jpg"),
        ("  https://example.com/a.png ", "https://example.com/a.png"),
    ],
)
def test_convert_google_drive_url(url: str, expected: str) -> None:
    assert convert_google_drive_url(url) == expected


def test_none_and_blank_give_none() -> None:
    assert convert_google_drive_url(None) is None
    assert convert_google_drive_url("") is None
    assert convert_google_drive_url("   ") is None
