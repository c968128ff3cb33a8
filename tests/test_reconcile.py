from __future__ import annotations

import copy
import logging

import pytest

from moonlight_content.domain.defaults import default_footer, default_hero
from moonlight_content.pipeline.reconcile import (
    HERO_SHAPE,
    ContentShape,
    Reconciler,
    check_shape,
    footer_reconciler,
    hero_reconciler,
)

FLAT_HERO = {
    "title": "MOONLIGHT",
    "subtitle": "LIVE",
    "description": "A night under the stars.",
    "button1_text": "SHOWS",
    "button1_link": "#shows",
    "button2_text": "FOLLOW",
    "button2_link": "https://instagram.com/moonlight",
    "logo_url": "/logo.png",
}


@pytest.fixture()
def reconciler() -> Reconciler:
    return hero_reconciler()


def test_check_shape_names_the_problem() -> None:
    broken = dict(FLAT_HERO, subtitle=3)
    result = check_shape(broken, HERO_SHAPE)
    assert result.ok is False
    assert result.problem == "hero.subtitle: not a string"

    missing = {k: v for k, v in FLAT_HERO.items() if k != "logo_url"}
    assert check_shape(missing, HERO_SHAPE).problem == "hero.logo_url: missing"
    assert check_shape(FLAT_HERO, HERO_SHAPE).ok is True


def test_multilingual_is_returned_unchanged(reconciler: Reconciler) -> None:
    raw = {"en": FLAT_HERO, "he": dict(FLAT_HERO, subtitle="חי")}
    result = reconciler.reconcile_with_state(raw)
    assert result.state is ContentShape.MULTILINGUAL
    assert result.record == raw
    assert result.record["en"] is not raw["en"]


def test_legacy_is_promoted_to_primary_locale(reconciler: Reconciler) -> None:
    result = reconciler.reconcile_with_state(copy.deepcopy(FLAT_HERO))
    assert result.state is ContentShape.LEGACY_SINGLE_LOCALE
    assert result.record["en"] == FLAT_HERO
    assert result.record["he"] == default_hero()["he"]


def test_partially_valid_multilingual_is_rejected_wholesale(reconciler: Reconciler) -> None:
    raw = {"en": FLAT_HERO, "he": {"title": "only a title"}}
    result = reconciler.reconcile_with_state(raw)
    assert result.state is ContentShape.INVALID
    assert result.record == default_hero()
    assert result.problem is not None
    assert "hero.he" in result.problem


@pytest.mark.parametrize("raw", [None, "text", 42, [FLAT_HERO], {}, {"en": "x", "he": "y"}])
def test_invalid_input_falls_back_to_defaults(reconciler: Reconciler, raw, caplog) -> None:
    with caplog.at_level(logging.WARNING):
        assert reconciler.reconcile(raw) == default_hero()
    assert "invalid structure" in caplog.text


@pytest.mark.parametrize(
    "raw",
    [
        FLAT_HERO,
        {"en": FLAT_HERO, "he": FLAT_HERO},
        {"en": FLAT_HERO},
        None,
        {"title": "x"},
    ],
)
def test_reconcile_is_idempotent(reconciler: Reconciler, raw) -> None:
    once = reconciler.reconcile(raw)
    assert reconciler.reconcile(once) == once


def test_reconcile_does_not_mutate_input(reconciler: Reconciler) -> None:
    raw = copy.deepcopy(FLAT_HERO)
    record = reconciler.reconcile(raw)
    record["en"]["title"] = "CHANGED"
    assert raw["title"] == "MOONLIGHT"


def test_classify(reconciler: Reconciler) -> None:
    assert reconciler.classify(FLAT_HERO) is ContentShape.LEGACY_SINGLE_LOCALE
    assert reconciler.classify({"en": FLAT_HERO, "he": FLAT_HERO}) is ContentShape.MULTILINGUAL
    assert reconciler.classify([]) is ContentShape.INVALID


class TestFooter:
    def test_nested_social_links_are_checked(self) -> None:
        footer = default_footer()["en"]
        footer["socialLinks"] = {"facebook": "#"}
        assert footer_reconciler().classify(footer) is ContentShape.INVALID

    def test_legacy_footer_promoted(self) -> None:
        footer = default_footer()["en"]
        footer["email"] = "new@example.com"
        record = footer_reconciler().reconcile(footer)
        assert record["en"]["email"] == "new@example.com"
        assert record["he"] == default_footer()["he"]


def test_invalid_defaults_are_rejected() -> None:
    with pytest.raises(ValueError):
        Reconciler(HERO_SHAPE, {"en": FLAT_HERO, "he": {}})
