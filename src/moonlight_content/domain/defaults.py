# moonlight_content/domain/defaults.py

"""Static fallback content shown when the sheet or database has nothing usable."""

from __future__ import annotations

from types import MappingProxyType
from typing import Any

from moonlight_content.domain.models import (
    PRIMARY_LOCALE,
    SECONDARY_LOCALE,
    LocalizedContentTree,
    MultilingualRecord,
)

_LOGO_URL = "/lovable-uploads/1dd6733a-cd1d-4727-bc54-7d4a3885c0c5.png"

DEFAULT_HERO: MappingProxyType[str, MappingProxyType[str, str]] = MappingProxyType(
    {
        PRIMARY_LOCALE: MappingProxyType(
            {
                "title": "MOONLIGHT",
                "subtitle": "COLDPLAY TRIBUTE BAND",
                "description": (
                    "Experience the magic of Coldplay's iconic music performed "
                    "live with passion and precision. Join us on a musical "
                    "journey through the stars."
                ),
                "button1_text": "UPCOMING SHOWS",
                "button1_link": "#shows",
                "button2_text": "FOLLOW US",
                "button2_link": "#",
                "logo_url": _LOGO_URL,
            }
        ),
        SECONDARY_LOCALE: MappingProxyType(
            {
                "title": "MOONLIGHT",
                "subtitle": "להקת המחווה לקולדפליי",
                "description": (
                    "חווה את הקסם של המוזיקה האיקונית של קולדפליי בהופעה חיה "
                    "עם תשוקה ודיוק. הצטרף אלינו למסע מוזיקלי בין הכוכבים."
                ),
                "button1_text": "הופעות קרובות",
                "button1_link": "#shows",
                "button2_text": "עקבו אחרינו",
                "button2_link": "#",
                "logo_url": _LOGO_URL,
            }
        ),
    }
)

_SOCIAL_LINKS = MappingProxyType(
    {"facebook": "#", "instagram": "#", "twitter": "#", "youtube": "#"}
)

DEFAULT_FOOTER: MappingProxyType[str, MappingProxyType[str, Any]] = MappingProxyType(
    {
        PRIMARY_LOCALE: MappingProxyType(
            {
                "companyName": "MOONLIGHT",
                "description": (
                    "Experience the magic of Coldplay's iconic music performed "
                    "live with passion and precision."
                ),
                "email": "booking@moonlighttribute.com",
                "phone": "+1 (555) 123-4567",
                "location": "Los Angeles, CA",
                "socialLinks": _SOCIAL_LINKS,
            }
        ),
        SECONDARY_LOCALE: MappingProxyType(
            {
                "companyName": "MOONLIGHT",
                "description": (
                    "חווה את הקסם של המוזיקה האיקונית של קולדפליי בהופעה חיה "
                    "עם תשוקה ודיוק."
                ),
                "email": "booking@moonlighttribute.com",
                "phone": "+1 (555) 123-4567",
                "location": "לוס אנג'לס, קליפורניה",
                "socialLinks": _SOCIAL_LINKS,
            }
        ),
    }
)


def _thaw(value: Any) -> Any:
    if isinstance(value, MappingProxyType):
        return {k: _thaw(v) for k, v in value.items()}
    return value


def default_hero() -> MultilingualRecord:
    """Return a fresh, mutable copy of the hero defaults."""
    return _thaw(DEFAULT_HERO)


def default_footer() -> MultilingualRecord:
    """Return a fresh, mutable copy of the footer defaults."""
    return _thaw(DEFAULT_FOOTER)


def default_content_tree() -> LocalizedContentTree:
    """Build the registered per-key defaults used by the locale resolver.

    Footer social links are flattened into ``facebook``/``instagram``/... keys,
    matching how they are laid out in the Content tab.
    """
    tree: LocalizedContentTree = {"hero": {}, "footer": {}}

    for locale, fields in DEFAULT_HERO.items():
        for key, value in fields.items():
            tree["hero"].setdefault(key, {})[locale] = value

    for locale, fields in DEFAULT_FOOTER.items():
        for key, value in fields.items():
            if key == "socialLinks":
                for network, link in value.items():
                    tree["footer"].setdefault(network, {})[locale] = link
                continue
            tree["footer"].setdefault(key, {})[locale] = value

    return tree
