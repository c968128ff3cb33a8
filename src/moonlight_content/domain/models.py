# moonlight_content/domain/models.py

"""Core domain models for shows, media, testimonials and site content."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any

# section -> key -> locale -> value
LocalizedContentTree = dict[str, dict[str, dict[str, str]]]

# locale -> record blob, e.g. {"en": {...}, "he": {...}}
MultilingualRecord = dict[str, dict[str, Any]]

RawRow = list[str]

PRIMARY_LOCALE = "en"
SECONDARY_LOCALE = "he"
SUPPORTED_LOCALES = (PRIMARY_LOCALE, SECONDARY_LOCALE)


class MediaKind(str, Enum):
    PHOTO = "photo"
    VIDEO = "video"


@dataclass(frozen=True, slots=True)
class ShowRecord:
    """A single gig as listed in the shows tab."""

    date_text: str  # kept verbatim for display, parsed on demand
    venue: str
    location: str
    ticket_link: str
    id: str | None = None
    image_url: str | None = None
    is_published: bool = True


@dataclass(frozen=True, slots=True)
class MediaItem:
    id: str
    kind: MediaKind
    url: str
    title: str
    order: int
    thumbnail: str | None = None
    description: str | None = None
    duration: str | None = None  # e.g. "4:21", videos only


@dataclass(frozen=True, slots=True)
class TestimonialRecord:
    id: str
    author: str
    role: str
    content: str
    order: int
    avatar_url: str | None = None


@dataclass(frozen=True, slots=True)
class HeroContent:
    """Hero banner copy for one locale."""

    title: str
    subtitle: str
    description: str
    button1_text: str
    button1_link: str
    button2_text: str
    button2_link: str
    logo_url: str

    @classmethod
    def from_dict(cls, raw: dict[str, Any]) -> HeroContent:
        return cls(
            title=raw["title"],
            subtitle=raw["subtitle"],
            description=raw["description"],
            button1_text=raw["button1_text"],
            button1_link=raw["button1_link"],
            button2_text=raw["button2_text"],
            button2_link=raw["button2_link"],
            logo_url=raw["logo_url"],
        )


@dataclass(frozen=True, slots=True)
class SocialLinks:
    facebook: str
    instagram: str
    twitter: str
    youtube: str


@dataclass(frozen=True, slots=True)
class FooterData:
    """Footer contact block for one locale.

    Persisted blobs use camelCase keys (``companyName``, ``socialLinks``).
    """

    company_name: str
    description: str
    email: str
    phone: str
    location: str
    social_links: SocialLinks

    @classmethod
    def from_dict(cls, raw: dict[str, Any]) -> FooterData:
        links = raw["socialLinks"]
        return cls(
            company_name=raw["companyName"],
            description=raw["description"],
            email=raw["email"],
            phone=raw["phone"],
            location=raw["location"],
            social_links=SocialLinks(
                facebook=links["facebook"],
                instagram=links["instagram"],
                twitter=links["twitter"],
                youtube=links["youtube"],
            ),
        )
