"""Tests for LocaleResolver: fallback chains, selection and interpolation.

Python 3.13+.
"""

from collections.abc import Mapping, Sequence

import pytest
from hypothesis import given

from jsontranslate.errors import InvalidLocaleError, ReservedInterpolationKeyError
from jsontranslate.providers import LocaleConfig, LocaleFallbacks
from jsontranslate.runtime.resolver import FallbackInfo, LocaleResolver, Resolution
from tests.strategies import locale_codes, translation_maps


@pytest.fixture
def resolver(locales: LocaleConfig, fallbacks: LocaleFallbacks) -> LocaleResolver:
    return LocaleResolver(locales, fallbacks)


class TestFallbackChain:
    """Test LocaleResolver.fallback_chain."""

    def test_provider_chain(self, resolver: LocaleResolver) -> None:
        """Chain comes from the fallback provider."""
        assert resolver.fallback_chain("fr") == ("fr", "en")

    def test_disallowed_degenerates(self, resolver: LocaleResolver) -> None:
        """fallback_allowed=False yields the requested locale only."""
        assert resolver.fallback_chain("fr", fallback_allowed=False) == ("fr",)

    def test_no_provider_degenerates(self, locales: LocaleConfig) -> None:
        """Without a fallback provider the chain is just the locale."""
        assert LocaleResolver(locales).fallback_chain("fr") == ("fr",)

    def test_requested_locale_prepended(self, locales: LocaleConfig) -> None:
        """Providers omitting the requested locale still start with it."""

        class OnlyEnglish:
            def fallback_chain(self, locale: str) -> Sequence[str]:
                return ["en"]

        assert LocaleResolver(locales, OnlyEnglish()).fallback_chain("fr") == ("fr", "en")

    def test_malformed_provider_locale_propagates(self, locales: LocaleConfig) -> None:
        """A provider returning a malformed identifier raises InvalidLocaleError."""

        class Broken:
            def fallback_chain(self, locale: str) -> Sequence[str]:
                return [locale, "english please"]

        with pytest.raises(InvalidLocaleError):
            LocaleResolver(locales, Broken()).fallback_chain("fr")


class TestSelection:
    """Test locale selection with and without fallback."""

    def test_exact_locale(self, resolver: LocaleResolver) -> None:
        """A present requested locale wins."""
        assert resolver.resolve({"en": "Hello", "fr": "Bonjour"}, "fr") == "Bonjour"

    def test_fallback_to_en(self, resolver: LocaleResolver) -> None:
        """Missing fr falls back to en."""
        assert resolver.resolve({"en": "Hello"}, "fr") == "Hello"

    def test_no_fallback(self, resolver: LocaleResolver) -> None:
        """fallback=False never walks the chain."""
        assert resolver.resolve({"en": "Hello"}, "fr", fallback=False) is None

    def test_record_state_overrides_call(self, resolver: LocaleResolver) -> None:
        """fallback_allowed=False wins over fallback=True."""
        assert resolver.resolve({"en": "Hello"}, "fr", fallback_allowed=False) is None

    def test_blank_candidate_skipped(self, resolver: LocaleResolver) -> None:
        """Blank stored values do not qualify during the walk."""
        assert resolver.resolve({"fr": "  ", "en": "Hello"}, "fr") == "Hello"

    def test_blank_kept_when_nothing_qualifies(self, resolver: LocaleResolver) -> None:
        """With no qualifying candidate the requested locale's stored blank is returned."""
        lookup = resolver.lookup({"fr": ""}, "fr")
        assert lookup == Resolution("", "fr", "fr")
        assert not lookup.is_fallback

    def test_nothing_found(self, resolver: LocaleResolver) -> None:
        """Empty map resolves to None on the requested locale."""
        assert resolver.lookup({}, "fr") == Resolution(None, "fr", "fr")

    def test_default_locale_from_provider(
        self, resolver: LocaleResolver, locales: LocaleConfig
    ) -> None:
        """Omitted locale uses the provider's active locale."""
        translations = {"en": "Hello", "de": "Hallo"}
        assert resolver.resolve(translations) == "Hello"
        with locales.using("de"):
            assert resolver.resolve(translations) == "Hallo"

    def test_locale_canonicalized(self, locales: LocaleConfig) -> None:
        """Hyphenated requests match underscore keys."""
        resolver = LocaleResolver(locales)
        assert resolver.resolve({"pt_BR": "Olá"}, "pt-BR") == "Olá"

    def test_lookup_reports_fallback(self, resolver: LocaleResolver) -> None:
        """lookup() exposes the selected locale."""
        lookup = resolver.lookup({"en": "Hello"}, "de")
        assert lookup.resolved_locale == "en"
        assert lookup.is_fallback


class TestOnFallback:
    """Test the on_fallback observability callback."""

    def test_called_on_fallback(self, locales: LocaleConfig, fallbacks: LocaleFallbacks) -> None:
        """Callback receives FallbackInfo when a fallback locale is used."""
        events: list[FallbackInfo] = []
        resolver = LocaleResolver(locales, fallbacks, on_fallback=events.append)
        resolver.resolve({"en": "Hello"}, "fr", attribute="title")
        assert events == [FallbackInfo("title", "fr", "en")]

    def test_not_called_for_exact_match(
        self, locales: LocaleConfig, fallbacks: LocaleFallbacks
    ) -> None:
        """No callback when the requested locale has a value."""
        events: list[FallbackInfo] = []
        resolver = LocaleResolver(locales, fallbacks, on_fallback=events.append)
        resolver.resolve({"fr": "Bonjour", "en": "Hello"}, "fr")
        resolver.resolve({}, "fr")
        assert events == []


class TestInterpolation:
    """Test parameter interpolation during resolution."""

    def test_params_interpolated(self, resolver: LocaleResolver) -> None:
        """Params are substituted into the selected value."""
        result = resolver.resolve({"en": "Hello %{name}"}, "fr", params={"name": "Anna"})
        assert result == "Hello Anna"

    def test_empty_params_return_raw(self, resolver: LocaleResolver) -> None:
        """No params means no interpolation."""
        assert resolver.resolve({"en": "Hello %{name}"}, "en", params={}) == "Hello %{name}"

    def test_missing_argument_returns_raw(self, resolver: LocaleResolver) -> None:
        """A missing placeholder value yields the raw template."""
        result = resolver.resolve({"en": "Hello %{name}"}, "en", params={"age": 30})
        assert result == "Hello %{name}"

    def test_reserved_key_propagates(self, resolver: LocaleResolver) -> None:
        """Other interpolation errors reach the caller."""
        with pytest.raises(ReservedInterpolationKeyError):
            resolver.resolve({"en": "%{scope}"}, "en", params={"scope": "x"})

    def test_custom_interpolator(self, locales: LocaleConfig) -> None:
        """Any Interpolator implementation can be injected."""

        class Upper:
            def interpolate(self, template: str, params: Mapping[str, object]) -> str:
                return template.upper()

        resolver = LocaleResolver(locales, interpolator=Upper())
        assert resolver.resolve({"en": "hi"}, "en", params={"x": 1}) == "HI"

    def test_absent_value_not_interpolated(self, resolver: LocaleResolver) -> None:
        """None stays None regardless of params."""
        assert resolver.resolve({}, "en", params={"name": "Anna"}) is None


class TestResolverProperties:
    """Property tests for resolution invariants."""

    @given(translations=translation_maps(), locale=locale_codes())
    def test_without_fallback_reads_exact_key(
        self, translations: dict[str, str], locale: str
    ) -> None:
        """fallback=False is a plain key lookup."""
        resolver = LocaleResolver(LocaleConfig(), LocaleFallbacks(defaults=["en"]))
        assert resolver.resolve(translations, locale, fallback=False) == translations.get(locale)

    @given(translations=translation_maps(), locale=locale_codes())
    def test_fallback_picks_first_present_candidate(
        self, translations: dict[str, str], locale: str
    ) -> None:
        """The value comes from the first chain entry holding one."""
        resolver = LocaleResolver(LocaleConfig(), LocaleFallbacks(defaults=["en"]))
        chain = resolver.fallback_chain(locale)
        expected = next((translations[c] for c in chain if c in translations), None)
        assert resolver.resolve(translations, locale) == expected
