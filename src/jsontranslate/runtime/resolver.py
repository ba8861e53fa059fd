"""Locale resolution engine.

Given a translation map and a requested locale, picks the locale whose value
is returned and optionally interpolates named parameters into it.

Resolution Algorithm:
    1. Requested locale defaults to the provider's active locale
    2. With fallback effective, walk the fallback chain and select the first
       candidate holding a non-blank value
    3. When no candidate qualifies, the requested locale stays selected, so a
       blank value stored on purpose is still returned
    4. Interpolate params into the selected value; a missing placeholder
       leaves the raw string untouched

Fallback is effective only when both the per-call flag and the record's
fallback state allow it.

Python 3.13+.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Mapping
from dataclasses import dataclass
from typing import TYPE_CHECKING

from jsontranslate.errors import MissingInterpolationArgumentError
from jsontranslate.locale_utils import canonical_locale, canonical_locales
from jsontranslate.providers.interpolation import I18nInterpolator
from jsontranslate.runtime.codec import is_blank

if TYPE_CHECKING:
    from jsontranslate.providers.protocols import FallbackProvider, Interpolator, LocaleProvider
    from jsontranslate.types import AttributeName, LocaleCode, TranslationMap

__all__ = ["FallbackInfo", "LocaleResolver", "Resolution"]

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class FallbackInfo:
    """Record of a value served from a locale other than the requested one.

    Passed to the on_fallback callback for monitoring missing translations.

    Attributes:
        attribute: Translatable attribute, when known
        requested_locale: Locale the caller asked for
        resolved_locale: Locale the value came from
    """

    attribute: AttributeName | None
    requested_locale: LocaleCode
    resolved_locale: LocaleCode


@dataclass(frozen=True, slots=True)
class Resolution:
    """Outcome of one lookup.

    Attributes:
        value: Resolved (and interpolated) value, None when no translation exists
        requested_locale: Canonical requested locale
        resolved_locale: Locale selected by the fallback walk
    """

    value: str | None
    requested_locale: LocaleCode
    resolved_locale: LocaleCode

    @property
    def is_fallback(self) -> bool:
        """True when a value was found in a locale other than the requested one."""
        return self.value is not None and self.resolved_locale != self.requested_locale


class LocaleResolver:
    """Selects and interpolates the value for a requested locale.

    Example:
        >>> resolver = LocaleResolver(
        ...     LocaleConfig("en", ["en", "fr"]),
        ...     LocaleFallbacks({"fr": ["en"]}),
        ... )
        >>> resolver.resolve({"en": "Hello"}, "fr")
        'Hello'
        >>> resolver.resolve({"en": "Hello"}, "fr", fallback=False) is None
        True
    """

    __slots__ = ("_fallback_provider", "_interpolator", "_locale_provider", "_on_fallback")

    def __init__(
        self,
        locale_provider: LocaleProvider,
        fallback_provider: FallbackProvider | None = None,
        interpolator: Interpolator | None = None,
        *,
        on_fallback: Callable[[FallbackInfo], None] | None = None,
    ) -> None:
        """Initialize resolver.

        Args:
            locale_provider: Source of the default (active) locale
            fallback_provider: Fallback chains; None disables chain walking
            interpolator: Parameter interpolation service (default: I18nInterpolator)
            on_fallback: Called with FallbackInfo when a fallback locale is used
        """
        self._locale_provider = locale_provider
        self._fallback_provider = fallback_provider
        self._interpolator = interpolator if interpolator is not None else I18nInterpolator()
        self._on_fallback = on_fallback

    def fallback_chain(
        self, locale: LocaleCode, *, fallback_allowed: bool = True
    ) -> tuple[LocaleCode, ...]:
        """Return candidate locales for a requested locale.

        Args:
            locale: Requested locale
            fallback_allowed: False degenerates the chain to the locale itself

        Returns:
            Deduplicated chain beginning with the requested locale

        Raises:
            InvalidLocaleError: If the provider yields a malformed identifier
        """
        code = canonical_locale(locale)
        if not fallback_allowed or self._fallback_provider is None:
            return (code,)
        chain = canonical_locales(self._fallback_provider.fallback_chain(code))
        return tuple(dict.fromkeys((code, *chain)))

    def lookup(
        self,
        translations: TranslationMap,
        locale: LocaleCode | None = None,
        *,
        fallback: bool = True,
        fallback_allowed: bool = True,
        params: Mapping[str, object] | None = None,
        attribute: AttributeName | None = None,
    ) -> Resolution:
        """Resolve a translation map for a locale.

        Args:
            translations: Translation map of one attribute
            locale: Requested locale (default: active locale)
            fallback: Walk the fallback chain for this call
            fallback_allowed: Record-level fallback state; False overrides fallback
            params: Named interpolation parameters
            attribute: Attribute name, for logging and FallbackInfo

        Returns:
            Resolution with the value and the selected locale

        Raises:
            InvalidLocaleError: If the locale is malformed
            InterpolationError: For interpolation failures other than a missing argument
        """
        requested = canonical_locale(
            locale if locale is not None else self._locale_provider.active_locale()
        )

        selected = requested
        if fallback and fallback_allowed:
            for candidate in self.fallback_chain(requested):
                if not is_blank(translations.get(candidate)):
                    selected = candidate
                    break

        value = translations.get(selected)
        if value is not None and params and isinstance(value, str):
            value = self._interpolate(value, params)

        resolution = Resolution(value, requested, selected)
        if resolution.is_fallback:
            logger.debug(
                "Resolved %s for %s from fallback locale %s", attribute, requested, selected
            )
            if self._on_fallback is not None:
                self._on_fallback(FallbackInfo(attribute, requested, selected))
        return resolution

    def resolve(
        self,
        translations: TranslationMap,
        locale: LocaleCode | None = None,
        *,
        fallback: bool = True,
        fallback_allowed: bool = True,
        params: Mapping[str, object] | None = None,
        attribute: AttributeName | None = None,
    ) -> str | None:
        """Resolve a translation map for a locale and return only the value.

        See lookup() for arguments and errors.
        """
        return self.lookup(
            translations,
            locale,
            fallback=fallback,
            fallback_allowed=fallback_allowed,
            params=params,
            attribute=attribute,
        ).value

    def _interpolate(self, template: str, params: Mapping[str, object]) -> str:
        try:
            return self._interpolator.interpolate(template, params)
        except MissingInterpolationArgumentError as e:
            logger.debug("Missing interpolation argument %r, returning raw translation", e.key)
            return template

    def __repr__(self) -> str:
        """Return string representation for debugging."""
        return (
            f"LocaleResolver(locale_provider={self._locale_provider!r}, "
            f"fallback_provider={self._fallback_provider!r})"
        )
