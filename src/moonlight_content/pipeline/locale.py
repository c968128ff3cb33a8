# moonlight_content/pipeline/locale.py

"""Per-field locale fallback for sheet-driven content."""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import fields
from typing import Any

from moonlight_content.domain.models import (
    PRIMARY_LOCALE,
    HeroContent,
    LocalizedContentTree,
)

HERO_SECTION = "hero"
HERO_KEYS = tuple(f.name for f in fields(HeroContent))


def _lookup(tree: Any, section: str, key: str, locale: str) -> str | None:
    """Return a non-blank string at tree[section][key][locale], else None."""
    if not isinstance(tree, dict):
        return None
    entries = tree.get(section)
    if not isinstance(entries, dict):
        return None
    values = entries.get(key)
    if not isinstance(values, dict):
        return None
    value = values.get(locale)
    if isinstance(value, str) and value.strip():
        return value
    return None


class LocaleResolver:
    """Resolve content values with a fixed fallback chain.

    requested locale -> base locale -> registered default (requested locale,
    then base locale) -> "".

    Blank cells count as missing. Lookups never raise, whatever shape the
    tree has.
    """

    def __init__(
        self,
        defaults: LocalizedContentTree | None = None,
        *,
        base_locale: str = PRIMARY_LOCALE,
    ) -> None:
        self._defaults: LocalizedContentTree = defaults or {}
        self._base_locale = base_locale

    @property
    def base_locale(self) -> str:
        return self._base_locale

    def resolve(
        self,
        tree: LocalizedContentTree | None,
        section: str,
        key: str,
        locale: str,
    ) -> str:
        for source in (tree, self._defaults):
            for candidate in (locale, self._base_locale):
                value = _lookup(source, section, key, candidate)
                if value is not None:
                    return value
        return ""

    def resolve_section(
        self,
        tree: LocalizedContentTree | None,
        section: str,
        locale: str,
        keys: Iterable[str] | None = None,
    ) -> dict[str, str]:
        """Resolve several keys of a section at once.

        Without ``keys``, every key present in the tree or the defaults for
        that section is resolved.
        """
        if keys is None:
            names: dict[str, None] = {}
            for source in (tree, self._defaults):
                if isinstance(source, dict) and isinstance(source.get(section), dict):
                    names.update(dict.fromkeys(source[section]))
            keys = names
        return {key: self.resolve(tree, section, key, locale) for key in keys}

    def hero_from_tree(
        self,
        tree: LocalizedContentTree | None,
        locale: str,
    ) -> HeroContent:
        """Build hero copy for ``locale``, filling gaps field by field."""
        values = self.resolve_section(tree, HERO_SECTION, locale, HERO_KEYS)
        return HeroContent(**values)
