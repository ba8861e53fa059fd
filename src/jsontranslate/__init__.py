"""jsontranslate - Translations stored in one structured field per attribute.

Records keep every locale's value of a translatable attribute in a single
mapping field (typically a JSON column) instead of one column per locale.
The package reads and writes those mappings, resolves the value for a
requested locale through fallback chains, interpolates named parameters and
exposes per-locale accessors such as ``post.title_fr``.

Public API:
    translates - Class decorator declaring translatable attributes
    Translatable - Record mixin (read_translation, write_translation, fallback toggle)
    TranslateConfig - Injected collaborators and storage conventions
    LocaleConfig - Active/available locales (context-local active locale)
    LocaleFallbacks - Explicit and Babel-derived fallback chains
    I18nInterpolator - %{name} placeholder interpolation
    StorageFormat - Backing field representation (mapping or JSON text)

Exceptions:
    TranslateError - Base exception class
    InvalidLocaleError - Malformed or unknown locale identifier
    InterpolationError - Interpolation failures
    UnknownAttributeError - Attribute not declared translatable

Submodules:
    jsontranslate.runtime - Codec, resolver, accessor table, fallback toggle
    jsontranslate.providers - Collaborator protocols and reference implementations
    jsontranslate.locale_utils - Canonical locale identifiers
"""

from .config import TranslateConfig
from .enums import StorageFormat
from .errors import (
    InterpolationError,
    InvalidLocaleError,
    MissingInterpolationArgumentError,
    ReservedInterpolationKeyError,
    TranslateError,
    TranslatesConfigurationError,
    TranslationStoreError,
    UnknownAttributeError,
)
from .providers import I18nInterpolator, LocaleConfig, LocaleFallbacks, RecordFieldStore
from .runtime import FallbackInfo, Resolution, SyncReport
from .translates import Translatable, is_translatable, translates

# Version information - Auto-populated from package metadata
# SINGLE SOURCE OF TRUTH: pyproject.toml [project] version
from importlib.metadata import PackageNotFoundError
from importlib.metadata import version as _get_version

try:
    __version__ = _get_version("jsontranslate")
except PackageNotFoundError:
    # Development mode: package not installed yet
    __version__ = "0.0.0+dev"

__all__ = [
    "FallbackInfo",
    "I18nInterpolator",
    "InterpolationError",
    "InvalidLocaleError",
    "LocaleConfig",
    "LocaleFallbacks",
    "MissingInterpolationArgumentError",
    "RecordFieldStore",
    "ReservedInterpolationKeyError",
    "Resolution",
    "StorageFormat",
    "SyncReport",
    "TranslateConfig",
    "TranslateError",
    "Translatable",
    "TranslatesConfigurationError",
    "TranslationStoreError",
    "UnknownAttributeError",
    "__version__",
    "is_translatable",
    "translates",
]
