"""Translation engine: codec and resolver bound to one configuration.

The engine is the seam between a record's logical attributes and the two
core components. Reads load the attribute's translation map through the
codec and hand it to the resolver; writes canonicalize the locale and go
through the codec.

Python 3.13+.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import TYPE_CHECKING

from jsontranslate.locale_utils import canonical_locale, canonical_locales
from jsontranslate.runtime.codec import TranslationCodec
from jsontranslate.runtime.resolver import LocaleResolver, Resolution

if TYPE_CHECKING:
    from jsontranslate.config import TranslateConfig
    from jsontranslate.providers.protocols import TranslationStore
    from jsontranslate.types import AttributeName, FieldName, LocaleCode

__all__ = ["TranslationEngine"]


class TranslationEngine:
    """Reads and writes translatable attributes for one TranslateConfig.

    Stateless between calls; one engine serves every record of every type
    declared with the same configuration.

    Attributes:
        config: Configuration the engine was built from
        codec: Translation store codec
        resolver: Locale resolution engine
    """

    __slots__ = ("codec", "config", "resolver")

    def __init__(self, config: TranslateConfig) -> None:
        """Build codec and resolver from a configuration."""
        self.config = config
        self.codec = TranslationCodec(config.storage)
        self.resolver = LocaleResolver(
            config.locale_provider,
            config.fallback_provider,
            config.interpolator,
            on_fallback=config.on_fallback,
        )

    def field_name(self, attribute: AttributeName) -> FieldName:
        """Return the backing field name for an attribute."""
        return f"{attribute}{self.config.suffix}"

    def active_locale(self) -> LocaleCode:
        """Return the provider's active locale in canonical form."""
        return canonical_locale(self.config.locale_provider.active_locale())

    def available_locales(self) -> tuple[LocaleCode, ...]:
        """Return the provider's baseline locales in canonical form."""
        return canonical_locales(self.config.locale_provider.available_locales())

    def lookup(
        self,
        store: TranslationStore,
        attribute: AttributeName,
        locale: LocaleCode | None = None,
        *,
        fallback: bool = True,
        fallback_allowed: bool = True,
        params: Mapping[str, object] | None = None,
    ) -> Resolution:
        """Resolve an attribute, returning the selected locale with the value."""
        translations = self.codec.load(store, self.field_name(attribute))
        return self.resolver.lookup(
            translations,
            locale,
            fallback=fallback,
            fallback_allowed=fallback_allowed,
            params=params,
            attribute=attribute,
        )

    def read(
        self,
        store: TranslationStore,
        attribute: AttributeName,
        locale: LocaleCode | None = None,
        *,
        fallback: bool = True,
        fallback_allowed: bool = True,
        params: Mapping[str, object] | None = None,
    ) -> str | None:
        """Resolve an attribute's value for a locale (default: active locale)."""
        return self.lookup(
            store,
            attribute,
            locale,
            fallback=fallback,
            fallback_allowed=fallback_allowed,
            params=params,
        ).value

    def write(
        self,
        store: TranslationStore,
        attribute: AttributeName,
        value: object,
        locale: LocaleCode | None = None,
        *,
        allow_blank: bool = False,
    ) -> object:
        """Store an attribute's value for a locale (default: active locale).

        Returns:
            The value actually written (None if stripped or removed)
        """
        code = canonical_locale(locale) if locale is not None else self.active_locale()
        return self.codec.write(
            store, self.field_name(attribute), value, code, allow_blank=allow_blank
        )

    def __repr__(self) -> str:
        """Return string representation for debugging."""
        return f"TranslationEngine(config={self.config!r})"
