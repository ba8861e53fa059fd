"""Reference LocaleProvider with a context-local active locale.

Architecture:
    - Available locales are fixed at construction (immutable tuple)
    - The active locale lives in a ContextVar: each thread and asyncio task
      sees its own value, and using() scopes restore on every exit path
    - All identifiers are canonicalized at the boundary

Python 3.13+.
"""

from __future__ import annotations

import logging
from collections.abc import Generator, Iterable
from contextlib import contextmanager
from contextvars import ContextVar

from jsontranslate.constants import DEFAULT_LOCALE
from jsontranslate.errors import InvalidLocaleError
from jsontranslate.locale_utils import canonical_locale, canonical_locales

__all__ = ["LocaleConfig"]

logger = logging.getLogger(__name__)


class LocaleConfig:
    """Active and available locales for translatable records.

    Implements the LocaleProvider protocol. Mirrors the usual i18n setup of
    a default locale, an allow-list of available locales and a per-request
    current locale.

    Example:
        >>> config = LocaleConfig("en", ["en", "fr", "de"])
        >>> config.active_locale()
        'en'
        >>> with config.using("fr"):
        ...     config.active_locale()
        'fr'
        >>> config.active_locale()
        'en'

    Attributes:
        default_locale: Locale returned when none was set in the current context
    """

    __slots__ = ("_available", "_current", "default_locale")

    def __init__(
        self,
        default_locale: str = DEFAULT_LOCALE,
        available_locales: Iterable[str] | None = None,
    ) -> None:
        """Initialize locale configuration.

        Args:
            default_locale: Fallback active locale
            available_locales: Baseline locales (default: just the default locale).
                The default locale is always considered available.

        Raises:
            InvalidLocaleError: If any identifier is malformed
        """
        self.default_locale = canonical_locale(default_locale)
        available = canonical_locales(available_locales or ())
        if self.default_locale not in available:
            available = (self.default_locale, *available)
        self._available: tuple[str, ...] = available
        self._current: ContextVar[str | None] = ContextVar(
            "jsontranslate_active_locale", default=None
        )

    def active_locale(self) -> str:
        """Return the locale set for the current context, or the default."""
        return self._current.get() or self.default_locale

    def available_locales(self) -> tuple[str, ...]:
        """Return the baseline available locales in declaration order."""
        return self._available

    def set_locale(self, locale: str | None) -> None:
        """Set the active locale for the current context.

        Args:
            locale: Locale to activate, or None to revert to the default

        Raises:
            InvalidLocaleError: If the locale is malformed or not available
        """
        self._current.set(None if locale is None else self._enforce_available(locale))

    @contextmanager
    def using(self, locale: str) -> Generator[str]:
        """Activate a locale for the duration of a with-block.

        The previous locale is restored on exit, including when the body raises.

        Args:
            locale: Locale to activate

        Yields:
            The canonical active locale

        Raises:
            InvalidLocaleError: If the locale is malformed or not available
        """
        code = self._enforce_available(locale)
        token = self._current.set(code)
        try:
            yield code
        finally:
            self._current.reset(token)

    def _enforce_available(self, locale: str) -> str:
        code = canonical_locale(locale)
        if code not in self._available:
            msg = f"Locale {code!r} is not available (available: {self._available!r})"
            raise InvalidLocaleError(msg, locale_code=locale)
        logger.debug("Active locale set to %s", code)
        return code

    def __repr__(self) -> str:
        """Return string representation for debugging."""
        return (
            f"LocaleConfig(default_locale={self.default_locale!r}, "
            f"available_locales={self._available!r})"
        )
