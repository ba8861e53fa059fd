"""Locale utilities for canonical identifiers and Babel interop.

Centralizes locale coercion used throughout the codebase. All locale handling
canonicalizes at the system boundary (translates() declarations, provider
results, explicit locale arguments) using canonical_locale(), then uses the
canonical form for translation map keys and accessor names.

Canonical form is POSIX (underscore-separated), the form Babel uses:
"pt-BR" and "pt_BR" both become "pt_BR". No case folding is performed.

Python 3.13+.
"""

from __future__ import annotations

import functools
from collections.abc import Iterable
from typing import TYPE_CHECKING

from jsontranslate.constants import LOCALE_PATTERN, MAX_LOCALE_CACHE_SIZE
from jsontranslate.errors import InvalidLocaleError

if TYPE_CHECKING:
    from babel import Locale

__all__ = [
    "canonical_locale",
    "canonical_locales",
    "clear_locale_cache",
    "get_babel_locale",
    "is_known_locale",
    "normalize_locale",
    "parent_locales",
]


def normalize_locale(locale_code: str) -> str:
    """Convert BCP-47 locale code to POSIX format for Babel.

    BCP-47 uses hyphens (en-US), while Babel/POSIX uses underscores (en_US).

    Args:
        locale_code: BCP-47 locale code (e.g., "en-US", "pt-BR")

    Returns:
        POSIX-formatted locale code (e.g., "en_US", "pt_BR")

    Example:
        >>> normalize_locale("en-US")
        'en_US'
        >>> normalize_locale("en")  # Already normalized
        'en'
    """
    return locale_code.replace("-", "_")


def canonical_locale(locale: object) -> str:
    """Coerce a locale identifier to its canonical string form.

    Accepts strings and any object whose str() is a locale identifier
    (notably babel.Locale). Surrounding whitespace is not stripped: an
    identifier with whitespace is malformed.

    Args:
        locale: Locale identifier or object

    Returns:
        Canonical POSIX locale identifier

    Raises:
        InvalidLocaleError: If the identifier is empty or malformed

    Example:
        >>> canonical_locale("pt-BR")
        'pt_BR'
        >>> canonical_locale(Locale("de", "AT"))
        'de_AT'
    """
    if locale is None:
        msg = "Locale identifier is required, got None"
        raise InvalidLocaleError(msg, locale_code=locale)

    code = normalize_locale(str(locale))
    if not LOCALE_PATTERN.match(code):
        msg = f"Invalid locale identifier: {locale!r}"
        raise InvalidLocaleError(msg, locale_code=locale)
    return code


def canonical_locales(locales: Iterable[object]) -> tuple[str, ...]:
    """Canonicalize and deduplicate locales, preserving first-seen order.

    Args:
        locales: Locale identifiers in priority order

    Returns:
        Tuple of unique canonical identifiers

    Raises:
        InvalidLocaleError: If any identifier is malformed
    """
    # dict.fromkeys() removes duplicates while maintaining insertion order
    return tuple(dict.fromkeys(canonical_locale(locale) for locale in locales))


@functools.lru_cache(maxsize=MAX_LOCALE_CACHE_SIZE)
def get_babel_locale(locale_code: str) -> Locale:
    """Get a Babel Locale object with caching.

    Parses the locale code once and caches the result.

    Args:
        locale_code: Locale code (BCP-47 or POSIX format accepted)

    Returns:
        Babel Locale object

    Raises:
        InvalidLocaleError: If Babel does not recognize the locale

    Example:
        >>> locale = get_babel_locale("en-US")
        >>> locale.language
        'en'
        >>> locale.territory
        'US'
    """
    # Lazy import: Babel loads CLDR data at import time; defer until needed
    from babel import Locale, UnknownLocaleError  # noqa: PLC0415

    try:
        return Locale.parse(normalize_locale(locale_code))
    except (UnknownLocaleError, ValueError) as e:
        msg = f"Unknown locale: {locale_code!r}"
        raise InvalidLocaleError(msg, locale_code=locale_code) from e


def is_known_locale(locale_code: str) -> bool:
    """Check whether Babel recognizes a locale identifier.

    Malformed identifiers are not known; no exception is raised.

    Example:
        >>> is_known_locale("pt_BR")
        True
        >>> is_known_locale("html")
        False
    """
    try:
        get_babel_locale(canonical_locale(locale_code))
    except InvalidLocaleError:
        return False
    return True


def parent_locales(locale_code: str) -> tuple[str, ...]:
    """Derive less specific locales from a locale's subtags.

    Walks the identifier from most to least specific by dropping trailing
    subtags, then consults Babel for script/territory components it knows
    about. Locales Babel does not know (e.g. "xx_YY") get subtag stripping
    only. The locale itself is not included.

    Args:
        locale_code: Canonical locale identifier

    Returns:
        Parent locales, most specific first

    Raises:
        InvalidLocaleError: If the identifier is malformed

    Example:
        >>> parent_locales("zh_Hant_TW")
        ('zh_Hant', 'zh')
        >>> parent_locales("xx_YY")
        ('xx',)
        >>> parent_locales("de")
        ()
    """
    code = canonical_locale(locale_code)

    parents: list[str] = []
    subtags = code.split("_")
    parents.extend("_".join(subtags[:end]) for end in range(len(subtags) - 1, 0, -1))

    if not is_known_locale(code):
        return tuple(dict.fromkeys(parents))
    babel_locale = get_babel_locale(code)

    # Babel fills in likely scripts: zh_TW parses as zh_Hant_TW.
    if babel_locale.script and babel_locale.territory:
        parents.insert(0, f"{babel_locale.language}_{babel_locale.script}")
    if babel_locale.language != code:
        parents.append(babel_locale.language)

    return tuple(p for p in dict.fromkeys(parents) if p != code)


def clear_locale_cache() -> None:
    """Clear the cached Babel Locale objects.

    Use this method to free memory or reset state in tests.
    """
    get_babel_locale.cache_clear()
