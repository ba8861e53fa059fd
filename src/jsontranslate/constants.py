"""Shared constants for jsontranslate.

This module provides centralized configuration constants used across the
codec, resolver and record surface. Placing constants here avoids circular
imports and provides a single source of truth.

Constants are grouped by domain:
- Storage: backing field naming
- Locales: defaults and identifier grammar
- Interpolation: placeholder grammar and reserved keys

Python 3.13+. Zero external dependencies.
"""

import re

# ruff: noqa: RUF022 - __all__ organized by category for readability
__all__ = [
    # Storage
    "TRANSLATIONS_SUFFIX",
    # Locales
    "DEFAULT_LOCALE",
    "LOCALE_PATTERN",
    "MAX_LOCALE_CACHE_SIZE",
    # Interpolation
    "INTERPOLATION_PATTERN",
    "RESERVED_INTERPOLATION_KEYS",
]

# ============================================================================
# STORAGE
# ============================================================================

# Backing field name is "<attribute><suffix>", e.g. "title_translations".
TRANSLATIONS_SUFFIX: str = "_translations"

# ============================================================================
# LOCALES
# ============================================================================

DEFAULT_LOCALE: str = "en"

# Canonical (POSIX, underscore-separated) locale identifier.
# Language subtag of 2-8 letters followed by any number of alphanumeric subtags.
# Every canonical identifier is also a valid Python identifier suffix, so
# accessor names such as "title_pt_BR" stay addressable as attributes.
LOCALE_PATTERN: re.Pattern[str] = re.compile(r"^[A-Za-z]{2,8}(?:_[A-Za-z0-9]{1,8})*$")

# Maximum cached Babel Locale objects for parent-chain derivation.
MAX_LOCALE_CACHE_SIZE: int = 128

# ============================================================================
# INTERPOLATION
# ============================================================================

# Matches, in order of precedence:
#   %%            -> literal "%" (so "%%{name}" renders as "%{name}")
#   %{name}       -> plain substitution
#   %<name>spec   -> formatted substitution (printf-style spec, e.g. "%<n>.2f")
INTERPOLATION_PATTERN: re.Pattern[str] = re.compile(
    r"(?P<escaped>%%)"
    r"|%\{(?P<plain>\w+)\}"
    r"|%<(?P<formatted>\w+)>(?P<spec>[-+ 0#]*\d*(?:\.\d+)?[diouxXeEfFgGcs])"
)

# Keys that collide with lookup options and may never be interpolated.
RESERVED_INTERPOLATION_KEYS: frozenset[str] = frozenset(
    {
        "cascade",
        "deep_interpolation",
        "default",
        "fallback",
        "format",
        "object",
        "raise",
        "resolve",
        "scope",
        "separator",
        "throw",
    }
)
