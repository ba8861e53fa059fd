"""Locale Fallback Example - Fallback Chains and Per-Record Locales.

Demonstrates fallback chains for incomplete translations and records that
choose their own set of locale accessors.

Scenarios covered:
1. Baltic storefront with partial Latvian and Lithuanian translations
2. Regional locales falling back to their parent language via Babel
3. Products exposing accessors only for the markets they are sold in
4. Observing fallbacks with on_fallback

Python 3.13+.
"""

from __future__ import annotations

import logging

from jsontranslate import (
    FallbackInfo,
    LocaleConfig,
    LocaleFallbacks,
    StorageFormat,
    TranslateConfig,
    Translatable,
    translates,
)

logger = logging.getLogger(__name__)

missing: list[FallbackInfo] = []

locales = LocaleConfig("en", ["en", "lv", "lt", "et", "de", "de_AT"])
config = TranslateConfig(
    locale_provider=locales,
    fallback_provider=LocaleFallbacks({"lv": ["lt", "en"], "lt": ["en"]}, defaults=["en"]),
    storage=StorageFormat.JSON,
    on_fallback=missing.append,
)


@translates("name", "description", config=config, locale_accessors=lambda product: product.markets)
class Product(Translatable):
    def __init__(self, markets: list[str]) -> None:
        self.markets = markets
        self.name_translations = "{}"
        self.description_translations = "{}"

    def field_will_change(self, field: str) -> None:
        logger.info("%s changed", field)


def example_partial_translations() -> None:
    """Latvian falls back to Lithuanian, then English."""
    print("=" * 60)
    print("Example 1: Partial Baltic Translations")
    print("=" * 60)

    product = Product(["en", "lv", "lt"])
    product.name_en = "Amber necklace"
    product.name_lt = "Gintaro vėrinys"
    product.description_en = "Handmade in the Baltics."

    with locales.using("lv"):
        print(f"name:        {product.name}")
        print(f"description: {product.description}")
    print(f"stored JSON: {product.name_translations}")


def example_regional_parents() -> None:
    """de_AT derives de as its parent."""
    print("\n" + "=" * 60)
    print("Example 2: Regional Parent Locales")
    print("=" * 60)

    product = Product(["en", "de", "de_AT"])
    product.name_de = "Bernsteinkette"
    lookup = product.lookup_translation("name", "de_AT")
    print(f"{lookup.value!r} from {lookup.resolved_locale} (requested {lookup.requested_locale})")


def example_market_accessors() -> None:
    """Accessors follow the record's markets."""
    print("\n" + "=" * 60)
    print("Example 3: Per-Record Locale Accessors")
    print("=" * 60)

    product = Product(["en", "et"])
    print(f"has name_et: {hasattr(product, 'name_et')}")
    print(f"has name_lv: {hasattr(product, 'name_lv')}")

    product.markets = ["en", "lv"]
    report = product.sync_locale_accessors()
    print(f"added:   {report.added}")
    print(f"removed: {report.removed}")


def example_fallback_events() -> None:
    """on_fallback collects every value served from another locale."""
    print("\n" + "=" * 60)
    print("Example 4: Fallback Events")
    print("=" * 60)

    for info in missing:
        print(f"{info.attribute}: {info.requested_locale} -> {info.resolved_locale}")


if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO)
    example_partial_translations()
    example_regional_parents()
    example_market_accessors()
    example_fallback_events()
