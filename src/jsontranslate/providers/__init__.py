"""Collaborator protocols and reference implementations.

Submodules:
    protocols     - TranslationStore, LocaleProvider, FallbackProvider, Interpolator
    locales       - LocaleConfig (context-local active locale)
    fallbacks     - LocaleFallbacks (explicit and Babel-derived chains)
    interpolation - I18nInterpolator (%{name} placeholders)
    stores        - RecordFieldStore (attribute-backed TranslationStore)

Python 3.13+.
"""

# ruff: noqa: RUF022 - __all__ organized by category for readability

from jsontranslate.providers.fallbacks import LocaleFallbacks
from jsontranslate.providers.interpolation import I18nInterpolator
from jsontranslate.providers.locales import LocaleConfig
from jsontranslate.providers.protocols import (
    FallbackProvider,
    Interpolator,
    LocaleProvider,
    TranslationStore,
)
from jsontranslate.providers.stores import RecordFieldStore

__all__ = [
    # Protocols
    "FallbackProvider",
    "Interpolator",
    "LocaleProvider",
    "TranslationStore",
    # Reference implementations
    "I18nInterpolator",
    "LocaleConfig",
    "LocaleFallbacks",
    "RecordFieldStore",
]
