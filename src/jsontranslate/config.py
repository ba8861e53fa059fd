"""Configuration for translatable record types.

Provides a single frozen dataclass carrying every injected collaborator:
the locale provider, the optional fallback provider, the interpolation
service and the storage conventions. Nothing in the package reads global
i18n state; records get it from the TranslateConfig they were declared with.

Python 3.13+.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from jsontranslate.constants import TRANSLATIONS_SUFFIX
from jsontranslate.enums import StorageFormat
from jsontranslate.errors import TranslatesConfigurationError
from jsontranslate.providers.interpolation import I18nInterpolator
from jsontranslate.providers.locales import LocaleConfig

if TYPE_CHECKING:
    from jsontranslate.providers.protocols import FallbackProvider, Interpolator, LocaleProvider
    from jsontranslate.runtime.resolver import FallbackInfo
    from jsontranslate.translates import Translatable
    from jsontranslate.types import LocaleAccessors

__all__ = ["TranslateConfig"]


@dataclass(frozen=True, slots=True)
class TranslateConfig:
    """Immutable configuration shared by translatable record types.

    All fields have sensible defaults; ``TranslateConfig()`` yields English-only
    records without fallback chains.

    Attributes:
        locale_provider: Active and available locales (default: LocaleConfig()).
        fallback_provider: Fallback chains; None disables chain walking
            (default: None).
        interpolator: Named-parameter interpolation (default: I18nInterpolator()).
        suffix: Backing field suffix; "title" is stored in "title" + suffix
            (default: "_translations").
        storage: Backing field representation (default: StorageFormat.MAPPING).
        on_fallback: Called with FallbackInfo whenever a value is served from a
            fallback locale (default: None).

    Example:
        >>> config = TranslateConfig(
        ...     locale_provider=LocaleConfig("en", ["en", "fr", "de"]),
        ...     fallback_provider=LocaleFallbacks(defaults=["en"]),
        ... )
        >>> @config.translates("title", "body")
        ... class Post(Translatable):
        ...     pass
    """

    locale_provider: LocaleProvider = field(default_factory=LocaleConfig)
    fallback_provider: FallbackProvider | None = None
    interpolator: Interpolator = field(default_factory=I18nInterpolator)
    suffix: str = TRANSLATIONS_SUFFIX
    storage: StorageFormat = StorageFormat.MAPPING
    on_fallback: Callable[[FallbackInfo], None] | None = None

    def __post_init__(self) -> None:
        """Validate configuration values at construction time.

        Raises:
            TranslatesConfigurationError: If suffix is empty or storage is unknown
        """
        if not self.suffix:
            msg = "suffix must be a non-empty string"
            raise TranslatesConfigurationError(msg)
        if not isinstance(self.storage, StorageFormat):
            try:
                object.__setattr__(self, "storage", StorageFormat(self.storage))
            except ValueError as e:
                msg = f"Unknown storage format: {self.storage!r}"
                raise TranslatesConfigurationError(msg) from e

    def translates(
        self,
        *attributes: str,
        allow_blank: bool = False,
        locale_accessors: LocaleAccessors | None = None,
    ) -> Callable[[type[Translatable]], type[Translatable]]:
        """Class decorator declaring translatable attributes with this config.

        Shorthand for ``translates(*attributes, config=self, ...)``.
        """
        # Lazy import: translates imports this module
        from jsontranslate.translates import translates  # noqa: PLC0415

        return translates(
            *attributes,
            config=self,
            allow_blank=allow_blank,
            locale_accessors=locale_accessors,
        )
