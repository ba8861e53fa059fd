"""Tests for the Translatable record surface and the translates() decorator.

Python 3.13+.
"""

from __future__ import annotations

from typing import Any

import pytest

from jsontranslate import (
    FallbackInfo,
    InvalidLocaleError,
    LocaleConfig,
    LocaleFallbacks,
    StorageFormat,
    TranslateConfig,
    Translatable,
    TranslatesConfigurationError,
    UnknownAttributeError,
    is_translatable,
    translates,
)
from jsontranslate.runtime.accessors import SyncReport
from tests.helpers.records import MemoryStore, Record


def make_post_class(config: TranslateConfig, **options: Any) -> type[Any]:
    """Build a fresh Post model declared with the given options."""

    @translates("title", "body", config=config, **options)
    class Post(Translatable, Record):
        def __init__(self, **fields: Any) -> None:
            fields.setdefault("title_translations", None)
            fields.setdefault("body_translations", None)
            super().__init__(**fields)

    return Post


@pytest.fixture
def post_class(config: TranslateConfig) -> type[Any]:
    return make_post_class(config)


class TestDeclaration:
    """Test translates() validation and class-level introspection."""

    def test_attribute_names(self, post_class: type[Any]) -> None:
        """Declared names are reported in order."""
        assert post_class.translated_attribute_names() == ("title", "body")

    def test_permitted_attributes(self, post_class: type[Any]) -> None:
        """Attribute names followed by baseline accessor names."""
        assert post_class.permitted_translated_attributes() == (
            "title",
            "body",
            "title_en",
            "title_fr",
            "title_de",
            "body_en",
            "body_fr",
            "body_de",
        )

    def test_is_translatable(self, post_class: type[Any]) -> None:
        """Classes and instances are recognized."""
        assert is_translatable(post_class)
        assert is_translatable(post_class())
        assert not is_translatable(Record)
        assert not is_translatable(Translatable)

    def test_requires_attributes(self, config: TranslateConfig) -> None:
        with pytest.raises(TranslatesConfigurationError, match="at least one"):
            translates(config=config)

    @pytest.mark.parametrize("name", ["", "1title", "title-text", "_title"])
    def test_rejects_bad_names(self, config: TranslateConfig, name: str) -> None:
        with pytest.raises(TranslatesConfigurationError, match="Invalid translatable"):
            translates(name, config=config)

    def test_rejects_non_callable_locale_accessors(self, config: TranslateConfig) -> None:
        with pytest.raises(TranslatesConfigurationError, match="callable"):
            translates("title", config=config, locale_accessors=["en"])  # type: ignore[arg-type]

    def test_requires_translatable_subclass(self, config: TranslateConfig) -> None:
        with pytest.raises(TranslatesConfigurationError, match="Translatable subclass"):

            @translates("title", config=config)  # type: ignore[arg-type]
            class Plain:
                pass

    def test_undeclared_type(self) -> None:
        """A bare Translatable subclass has no registry."""

        class Bare(Translatable):
            pass

        with pytest.raises(TranslatesConfigurationError, match="declares no translatable"):
            Bare.translated_attribute_names()

    def test_subclass_extends(self, config: TranslateConfig, post_class: type[Any]) -> None:
        """Decorating a subclass adds attributes without touching the parent."""

        @translates("summary", config=config, allow_blank=True)
        class Article(post_class):  # type: ignore[misc, valid-type]
            pass

        assert Article.translated_attribute_names() == ("title", "body", "summary")
        assert post_class.translated_attribute_names() == ("title", "body")

    def test_subclass_with_other_config_rejected(self, post_class: type[Any]) -> None:
        with pytest.raises(TranslatesConfigurationError, match="different TranslateConfig"):

            @translates("summary", config=TranslateConfig())
            class Article(post_class):  # type: ignore[misc, valid-type]
                pass

    def test_config_method(self, config: TranslateConfig) -> None:
        """TranslateConfig.translates is the same decorator."""

        @config.translates("title")
        class Page(Translatable, Record):
            pass

        assert Page.translated_attribute_names() == ("title",)

    def test_class_attribute_is_descriptor(self, post_class: type[Any]) -> None:
        """Class access returns the descriptor itself."""
        assert repr(post_class.title) == "TranslatedAttribute('title')"


class TestReadWrite:
    """Test active-locale attributes and explicit read/write."""

    def test_attribute_uses_active_locale(
        self, post_class: type[Any], locales: LocaleConfig
    ) -> None:
        post = post_class()
        post.title = "Hello"
        with locales.using("fr"):
            post.title = "Bonjour"
            assert post.title == "Bonjour"
        assert post.title == "Hello"
        assert post.title_translations == {"en": "Hello", "fr": "Bonjour"}

    def test_fallback_on_attribute_read(
        self, post_class: type[Any], locales: LocaleConfig
    ) -> None:
        """Active-locale reads walk the fallback chain."""
        post = post_class(title_translations={"en": "Hello"})
        with locales.using("fr"):
            assert post.title == "Hello"

    def test_read_translation_without_fallback(self, post_class: type[Any]) -> None:
        post = post_class(title_translations={"en": "Hello"})
        assert post.read_translation("title", "fr") == "Hello"
        assert post.read_translation("title", "fr", fallback=False) is None

    def test_read_with_params(self, post_class: type[Any]) -> None:
        post = post_class(title_translations={"en": "Hello %{name}"})
        assert post.read_translation("title", "en", name="Anna") == "Hello Anna"
        assert post.read_translation("title", "en", age=3) == "Hello %{name}"

    def test_lookup_translation(self, post_class: type[Any]) -> None:
        post = post_class(title_translations={"en": "Hello"})
        lookup = post.lookup_translation("title", "de")
        assert lookup.resolved_locale == "en"
        assert lookup.is_fallback

    def test_write_returns_stored_value(self, post_class: type[Any]) -> None:
        post = post_class()
        assert post.write_translation("title", "Hallo", "de") == "Hallo"
        assert post.write_translation("title", "   ", "de") is None
        assert post.title_translations == {}

    def test_blank_override(self, post_class: type[Any]) -> None:
        """allow_blank=True on a call overrides the attribute policy."""
        post = post_class()
        post.write_translation("title", "", "de", allow_blank=True)
        assert post.read_translation("title", "de", fallback=False) == ""

    def test_allow_blank_attribute(self, config: TranslateConfig) -> None:
        post = make_post_class(config, allow_blank=True)()
        post.title = ""
        assert post.title_translations == {"en": ""}
        assert post.title == ""

    def test_dirty_notifications(self, post_class: type[Any]) -> None:
        """Changing writes notify the backing field once; repeats do not."""
        post = post_class()
        post.title = "Hello"
        post.title = "Hello"
        post.body = "Text"
        assert post.changes == ["title_translations", "body_translations"]

    def test_unknown_attribute(self, post_class: type[Any]) -> None:
        post = post_class()
        with pytest.raises(UnknownAttributeError, match="'subtitle'"):
            post.read_translation("subtitle")
        with pytest.raises(AttributeError):
            post.write_translation("subtitle", "x")

    def test_invalid_locale(self, post_class: type[Any]) -> None:
        with pytest.raises(InvalidLocaleError):
            post_class().write_translation("title", "x", "not a locale")

    def test_json_storage(self, locales: LocaleConfig) -> None:
        config = TranslateConfig(locale_provider=locales, storage=StorageFormat.JSON)
        post = make_post_class(config)(title_translations='{"en": "Hello"}')
        post.title_fr = "Bonjour"
        assert post.title_translations == '{"en": "Hello", "fr": "Bonjour"}'

    def test_custom_store(self, config: TranslateConfig) -> None:
        """translation_store() can be overridden to adapt another persistence layer."""
        store = MemoryStore()

        @translates("title", config=config)
        class Document(Translatable):
            def translation_store(self) -> MemoryStore:
                return store

        doc = Document()
        doc.title = "Hello"
        assert store.fields == {"title_translations": {"en": "Hello"}}
        assert store.dirty == ["title_translations"]

    def test_on_fallback_reports_attribute(
        self, locales: LocaleConfig, fallbacks: LocaleFallbacks
    ) -> None:
        events: list[FallbackInfo] = []
        config = TranslateConfig(
            locale_provider=locales, fallback_provider=fallbacks, on_fallback=events.append
        )
        post = make_post_class(config)(title_translations={"en": "Hello"})
        post.read_translation("title", "de")
        assert events == [FallbackInfo("title", "de", "en")]


class TestFallbackToggle:
    """Test record-level fallback toggling."""

    def test_disable_fallback_persistent(self, post_class: type[Any]) -> None:
        post = post_class(title_translations={"en": "Hello"})
        post.disable_fallback()
        assert post.read_translation("title", "fr") is None
        post.enable_fallback()
        assert post.read_translation("title", "fr") == "Hello"

    def test_scoped_body(self, post_class: type[Any]) -> None:
        post = post_class(title_translations={"en": "Hello"})
        assert post.disable_fallback(lambda: post.read_translation("title", "fr")) is None
        assert post.fallback_toggle.state is None
        assert post.read_translation("title", "fr") == "Hello"

    def test_nested_scopes_restore_after_error(self, post_class: type[Any]) -> None:
        post = post_class()

        def inner() -> None:
            assert post.fallback_toggle.state is False
            raise ValueError("inner failure")

        with pytest.raises(ValueError, match="inner failure"):
            post.enable_fallback(lambda: post.disable_fallback(inner))
        assert post.fallback_toggle.state is None

    def test_toggle_is_per_instance(self, post_class: type[Any]) -> None:
        first = post_class(title_translations={"en": "Hello"})
        second = post_class(title_translations={"en": "Hello"})
        first.disable_fallback()
        assert first.read_translation("title", "fr") is None
        assert second.read_translation("title", "fr") == "Hello"


class TestLocaleAccessors:
    """Test per-locale accessors and their reconciliation."""

    def test_baseline_accessors(self, post_class: type[Any]) -> None:
        """Available locales get accessors without fallback."""
        post = post_class(title_translations={"en": "Hello"})
        post.title_de = "Hallo"
        assert post.title_de == "Hallo"
        assert post.title_fr is None
        assert post.title_translations == {"en": "Hello", "de": "Hallo"}

    def test_unknown_locale_accessor(self, post_class: type[Any]) -> None:
        post = post_class()
        assert not hasattr(post, "title_ja")
        with pytest.raises(AttributeError, match="title_ja"):
            _ = post.title_ja

    def test_plain_attributes_unaffected(self, post_class: type[Any]) -> None:
        """Names that are not exposed accessors are ordinary attributes."""
        post = post_class()
        post.title_ja = "direct"
        assert post.__dict__["title_ja"] == "direct"
        post.slug = "hello"
        assert post.slug == "hello"

    def test_accessor_writer_uses_blank_policy(self, post_class: type[Any]) -> None:
        post = post_class(title_translations={"de": "Hallo"})
        post.title_de = " "
        assert post.title_translations == {}

    def test_locale_accessor_read_with_params(self, post_class: type[Any]) -> None:
        post = post_class(title_translations={"de": "Hallo %{name}"})
        descriptor = post.locale_accessor("title_de")
        assert descriptor is not None
        assert descriptor.read(post, name="Anna") == "Hallo Anna"
        assert post.locale_accessor("title_ja") is None

    def test_reconciliation_follows_record_state(self, config: TranslateConfig) -> None:
        """[en, fr] then [en, de]: de exists, fr gone, en untouched."""
        post_class = make_post_class(config, locale_accessors=lambda record: record.locales)
        post = post_class(locales=["en", "fr"], title_translations={"fr": "Bonjour"})
        assert post.title_fr == "Bonjour"
        assert not hasattr(post, "title_de")

        post.locales = ["en", "de"]
        report = post.sync_locale_accessors()
        assert report == SyncReport(added=("title_de", "body_de"), removed=("title_fr", "body_fr"))
        assert not hasattr(post, "title_fr")
        assert post.title_de is None
        post.title_en = "Hello"
        assert post.title_en == "Hello"

    def test_extra_locales_beyond_baseline(self, config: TranslateConfig) -> None:
        post_class = make_post_class(config, locale_accessors=lambda record: ["en", "ja", "pt-BR"])
        post = post_class()
        post.title_ja = "こんにちは"
        post.title_pt_BR = "Olá"
        assert post.title_translations == {"ja": "こんにちは", "pt_BR": "Olá"}
        assert post.title_ja == "こんにちは"

    def test_sync_idempotent(self, config: TranslateConfig) -> None:
        post_class = make_post_class(config, locale_accessors=lambda record: ["en", "ja"])
        post = post_class()
        post.locale_accessor_table()
        assert post.sync_locale_accessors() == SyncReport()

    def test_accessors_are_per_instance(self, config: TranslateConfig) -> None:
        post_class = make_post_class(config, locale_accessors=lambda record: record.locales)
        french = post_class(locales=["fr"])
        german = post_class(locales=["de"])
        assert hasattr(french, "title_fr")
        assert not hasattr(french, "title_de")
        assert hasattr(german, "title_de")
        assert not hasattr(german, "title_fr")

    def test_callable_evaluated_once_per_sync(self, config: TranslateConfig) -> None:
        """A callable shared by several attributes runs once per synchronization."""
        calls: list[object] = []

        def locales_of(record: object) -> list[str]:
            calls.append(record)
            return ["en"]

        post = make_post_class(config, locale_accessors=locales_of)()
        post.sync_locale_accessors()
        assert len(calls) == 1

    def test_plain_field_set_before_locale_state(self, config: TranslateConfig) -> None:
        """Fields shaped like accessors do not evaluate locale_accessors during __init__."""
        calls: list[object] = []

        def locales_of(record: Any) -> list[str]:
            calls.append(record)
            return record.locales

        post_class = make_post_class(config, locale_accessors=locales_of)
        post = post_class(title_html="<h1>Hi</h1>", body_text="plain", locales=["en", "ja"])
        assert calls == []
        assert post.title_html == "<h1>Hi</h1>"
        assert post.body_text == "plain"

        post.title_ja = "こんにちは"
        assert len(calls) == 1
        assert post.title_translations == {"ja": "こんにちは"}
        assert not hasattr(post, "title_fr")

    def test_failed_synchronization_is_retried(self, config: TranslateConfig) -> None:
        """A callable failing on the first sync leaves no stale baseline table."""
        post_class = make_post_class(config, locale_accessors=lambda record: record.locales)
        post = post_class()
        with pytest.raises(AttributeError, match="locales"):
            post.sync_locale_accessors()

        post.locales = ["ja"]
        assert post.title_ja is None
        assert not hasattr(post, "title_en")

    def test_accessors_follow_latest_evaluation(self, config: TranslateConfig) -> None:
        """State changes take effect at the next synchronization."""
        post_class = make_post_class(config, locale_accessors=lambda record: record.locales)
        post = post_class(locales=["fr"])
        assert hasattr(post, "title_fr")

        post.locales = ["de"]
        assert hasattr(post, "title_fr")
        post.sync_locale_accessors()
        assert not hasattr(post, "title_fr")
        assert hasattr(post, "title_de")

    def test_invalid_locale_from_callable(self, config: TranslateConfig) -> None:
        post_class = make_post_class(config, locale_accessors=lambda record: ["en", "bad locale"])
        with pytest.raises(InvalidLocaleError):
            post_class().sync_locale_accessors()
