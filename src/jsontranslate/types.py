"""Type aliases for the translation domain.

Provides semantic type aliases used throughout the package and by user code
when annotating record types and custom collaborators.

Python 3.13+. Zero external dependencies.
"""

from collections.abc import Callable, Iterable

__all__ = [
    "AttributeName",
    "FieldName",
    "LocaleAccessors",
    "LocaleCode",
    "TranslationMap",
]

type LocaleCode = str
"""Canonical POSIX locale identifier (e.g., 'en', 'pt_BR', 'zh_Hant')."""

type AttributeName = str
"""Logical translatable attribute (e.g., 'title')."""

type FieldName = str
"""Backing field holding an attribute's translations (e.g., 'title_translations')."""

type TranslationMap = dict[LocaleCode, str]
"""Translations of one attribute keyed by locale."""

type LocaleAccessors = Callable[[object], Iterable[str]]
"""Per-record callable returning the locales that get accessors."""
