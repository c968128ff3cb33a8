# moonlight_content/pipeline/loader.py

"""Load typed content snapshots from a sheet source (and optionally a store)."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import date, datetime
from typing import Any, Protocol

from moonlight_content.config import HeroSource
from moonlight_content.domain.defaults import default_content_tree
from moonlight_content.domain.models import (
    PRIMARY_LOCALE,
    FooterData,
    HeroContent,
    LocalizedContentTree,
    MediaItem,
    RawRow,
    ShowRecord,
    TestimonialRecord,
)
from moonlight_content.pipeline.locale import HERO_SECTION, LocaleResolver
from moonlight_content.pipeline.mappers import (
    build_content_tree,
    map_media,
    map_shows,
    map_testimonials,
)
from moonlight_content.pipeline.reconcile import (
    ContentShape,
    Reconciler,
    footer_reconciler,
    hero_reconciler,
)
from moonlight_content.pipeline.selection import select_all, select_upcoming
from moonlight_content.sheets.client import (
    CONTENT_TAB,
    MEDIA_TAB,
    SHOWS_TAB,
    TESTIMONIALS_TAB,
)
from moonlight_content.sheets.errors import SourceUnavailable

logger = logging.getLogger(__name__)

FOOTER_SECTION = "footer"


class SheetSource(Protocol):
    def fetch_tab(self, tab_name: str) -> list[RawRow]: ...


class ContentStore(Protocol):
    """Persistence backend holding one JSON blob per content section.

    ``get_section`` returns None when the section has never been saved and
    raises ``SourceUnavailable`` when the backend cannot be reached.
    """

    def get_section(self, name: str) -> Any: ...


@dataclass(frozen=True, slots=True)
class HeroView:
    content: HeroContent
    connection_error: bool = False
    shape: ContentShape | None = None


@dataclass(frozen=True, slots=True)
class FooterView:
    content: FooterData
    connection_error: bool = False
    shape: ContentShape | None = None


class ContentLoader:
    """Fetch, map and select site content.

    Sheet failures in the list loaders propagate as ``SourceUnavailable`` so
    callers can tell a failed fetch from an empty tab. Hero and footer
    loaders degrade to defaults instead and flag ``connection_error``.
    """

    def __init__(
        self,
        source: SheetSource,
        *,
        resolver: LocaleResolver | None = None,
        hero: Reconciler | None = None,
        footer: Reconciler | None = None,
        store: ContentStore | None = None,
        hero_source: HeroSource = HeroSource.SHEET,
    ) -> None:
        if hero_source is HeroSource.DATABASE and store is None:
            msg = "hero_source=database requires a content store."
            raise ValueError(msg)

        self._source = source
        self._resolver = resolver or LocaleResolver(default_content_tree())
        self._hero = hero or hero_reconciler()
        self._footer = footer or footer_reconciler()
        self._store = store
        self._hero_source = hero_source

    def load_shows(self) -> list[ShowRecord]:
        return map_shows(self._source.fetch_tab(SHOWS_TAB))

    def load_upcoming_shows(
        self,
        as_of: date | datetime,
        limit: int | None = None,
    ) -> list[ShowRecord]:
        return select_upcoming(self.load_shows(), as_of, limit)

    def load_all_shows(self, published_only: bool = True) -> list[ShowRecord]:
        return select_all(self.load_shows(), published_only=published_only)

    def load_media(self) -> list[MediaItem]:
        return map_media(self._source.fetch_tab(MEDIA_TAB))

    def load_testimonials(self) -> list[TestimonialRecord]:
        return map_testimonials(self._source.fetch_tab(TESTIMONIALS_TAB))

    def load_content(self) -> LocalizedContentTree:
        return build_content_tree(self._source.fetch_tab(CONTENT_TAB))

    def resolve(self, tree: LocalizedContentTree, section: str, key: str, locale: str) -> str:
        return self._resolver.resolve(tree, section, key, locale)

    def load_hero(self, locale: str) -> HeroView:
        """Return hero copy for ``locale`` from the configured hero source."""
        if self._hero_source is HeroSource.SHEET:
            try:
                tree = self.load_content()
            except SourceUnavailable as exc:
                logger.warning("Hero content unavailable, using defaults: %s", exc)
                return HeroView(self._resolver.hero_from_tree(None, locale), True)
            return HeroView(self._resolver.hero_from_tree(tree, locale))

        raw, connection_error = self._read_section(HERO_SECTION)
        if raw is None:
            record = self._hero.defaults
            shape = None
        else:
            result = self._hero.reconcile_with_state(raw)
            record, shape = result.record, result.state
        return HeroView(
            HeroContent.from_dict(record.get(locale) or record[PRIMARY_LOCALE]),
            connection_error,
            shape,
        )

    def load_footer(self, locale: str) -> FooterView:
        """Return footer data for ``locale`` from the store, or the defaults."""
        raw, connection_error = (None, False)
        if self._store is not None:
            raw, connection_error = self._read_section(FOOTER_SECTION)

        if raw is None:
            record = self._footer.defaults
            shape = None
        else:
            result = self._footer.reconcile_with_state(raw)
            record, shape = result.record, result.state
        return FooterView(
            FooterData.from_dict(record.get(locale) or record[PRIMARY_LOCALE]),
            connection_error,
            shape,
        )

    def _read_section(self, name: str) -> tuple[Any, bool]:
        if self._store is None:
            msg = f"No content store configured; cannot read the {name} section."
            raise ValueError(msg)
        try:
            raw = self._store.get_section(name)
        except SourceUnavailable as exc:
            logger.warning("Could not load %s content, using defaults: %s", name, exc)
            return None, True
        if raw is None:
            logger.info("%s content not found in store, using defaults.", name.capitalize())
        return raw, False
