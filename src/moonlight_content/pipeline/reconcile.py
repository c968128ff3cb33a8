# moonlight_content/pipeline/reconcile.py

"""Normalize persisted content blobs to the multilingual shape.

Blobs saved before multilingual support are flat single-locale records
(``{"title": ..., ...}``). Newer blobs nest one record per locale
(``{"en": {...}, "he": {...}}``). ``Reconciler`` tells them apart and always
returns the nested form.
"""

from __future__ import annotations

import copy
import logging
from collections.abc import Mapping
from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from moonlight_content.domain.defaults import default_footer, default_hero
from moonlight_content.domain.models import (
    PRIMARY_LOCALE,
    SECONDARY_LOCALE,
    MultilingualRecord,
)
from moonlight_content.pipeline.locale import HERO_KEYS

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class RecordShape:
    """Required string fields of a record, plus nested sub-records."""

    name: str
    fields: tuple[str, ...]
    nested: Mapping[str, "RecordShape"] = field(default_factory=dict)


@dataclass(frozen=True, slots=True)
class ShapeCheck:
    ok: bool
    problem: str | None = None


class ContentShape(str, Enum):
    MULTILINGUAL = "multilingual"
    LEGACY_SINGLE_LOCALE = "legacy_single_locale"
    INVALID = "invalid"


@dataclass(frozen=True, slots=True)
class Reconciliation:
    state: ContentShape
    record: MultilingualRecord
    problem: str | None = None


HERO_SHAPE = RecordShape(name="hero", fields=HERO_KEYS)

SOCIAL_LINKS_SHAPE = RecordShape(
    name="socialLinks",
    fields=("facebook", "instagram", "twitter", "youtube"),
)

FOOTER_SHAPE = RecordShape(
    name="footer",
    fields=("companyName", "description", "email", "phone", "location"),
    nested={"socialLinks": SOCIAL_LINKS_SHAPE},
)


def check_shape(obj: Any, shape: RecordShape, path: str = "") -> ShapeCheck:
    """Check that ``obj`` has every field of ``shape`` as a string.

    On failure, ``problem`` names the first offending field (dotted path).
    """
    where = path or shape.name
    if not isinstance(obj, dict):
        return ShapeCheck(False, f"{where}: expected an object, got {type(obj).__name__}")

    for name in shape.fields:
        if name not in obj:
            return ShapeCheck(False, f"{where}.{name}: missing")
        if not isinstance(obj[name], str):
            return ShapeCheck(False, f"{where}.{name}: not a string")

    for name, sub_shape in shape.nested.items():
        result = check_shape(obj.get(name), sub_shape, f"{where}.{name}")
        if not result.ok:
            return result

    return ShapeCheck(True)


class Reconciler:
    """Classify and normalize content blobs for one record shape."""

    def __init__(
        self,
        shape: RecordShape,
        defaults: MultilingualRecord,
        *,
        primary_locale: str = PRIMARY_LOCALE,
        secondary_locale: str = SECONDARY_LOCALE,
    ) -> None:
        for locale in (primary_locale, secondary_locale):
            result = check_shape(defaults.get(locale), shape, f"defaults.{locale}")
            if not result.ok:
                msg = f"Invalid {shape.name} defaults: {result.problem}"
                raise ValueError(msg)

        self._shape = shape
        self._defaults = copy.deepcopy(defaults)
        self._primary = primary_locale
        self._secondary = secondary_locale

    @property
    def defaults(self) -> MultilingualRecord:
        return copy.deepcopy(self._defaults)

    def _check_multilingual(self, raw: Any) -> ShapeCheck:
        if not isinstance(raw, dict):
            return ShapeCheck(False, f"{self._shape.name}: expected an object")
        for locale in (self._primary, self._secondary):
            result = check_shape(raw.get(locale), self._shape, f"{self._shape.name}.{locale}")
            if not result.ok:
                return result
        return ShapeCheck(True)

    def classify(self, raw: Any) -> ContentShape:
        return self.reconcile_with_state(raw).state

    def reconcile_with_state(self, raw: Any) -> Reconciliation:
        multilingual = self._check_multilingual(raw)
        if multilingual.ok:
            record = {
                self._primary: copy.deepcopy(raw[self._primary]),
                self._secondary: copy.deepcopy(raw[self._secondary]),
            }
            return Reconciliation(ContentShape.MULTILINGUAL, record)

        legacy = check_shape(raw, self._shape)
        if legacy.ok:
            logger.info(
                "Legacy single-locale %s content detected, promoting to %r.",
                self._shape.name,
                self._primary,
            )
            record = {
                self._primary: copy.deepcopy(raw),
                self._secondary: copy.deepcopy(self._defaults[self._secondary]),
            }
            return Reconciliation(ContentShape.LEGACY_SINGLE_LOCALE, record)

        logger.warning(
            "%s content has invalid structure (%s); using defaults.",
            self._shape.name.capitalize(),
            multilingual.problem,
        )
        return Reconciliation(ContentShape.INVALID, self.defaults, multilingual.problem)

    def reconcile(self, raw: Any) -> MultilingualRecord:
        """Return ``raw`` in multilingual form, or the defaults if unusable."""
        return self.reconcile_with_state(raw).record


def hero_reconciler() -> Reconciler:
    return Reconciler(HERO_SHAPE, default_hero())


def footer_reconciler() -> Reconciler:
    return Reconciler(FOOTER_SHAPE, default_footer())
