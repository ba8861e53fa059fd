"""Collaborator protocols consumed by the translation engine.

The engine never reaches for global state: the backing field, the active
locale, the fallback chains and the interpolation service are all injected
through these protocols.

These are Protocols (structural typing) rather than ABCs to allow maximum
flexibility for users adapting their own ORM or i18n stack.

Python 3.13+. Zero external dependencies.
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from typing import Protocol

__all__ = [
    "FallbackProvider",
    "Interpolator",
    "LocaleProvider",
    "TranslationStore",
]


class TranslationStore(Protocol):
    """Access to the persisted structured fields of one record.

    Example:
        >>> class DjangoStore:
        ...     def __init__(self, instance):
        ...         self.instance = instance
        ...     def get(self, field):
        ...         return getattr(self.instance, field)
        ...     def set(self, field, value):
        ...         setattr(self.instance, field, value)
        ...     def mark_dirty(self, field):
        ...         self.instance._dirty_fields.add(field)
    """

    def get(self, field: str) -> Mapping[str, object] | str | bytes | None:
        """Return the current value of the backing field (None if unset)."""

    def set(self, field: str, value: Mapping[str, object] | str) -> None:
        """Replace the value of the backing field."""

    def mark_dirty(self, field: str) -> None:
        """Signal that the backing field is about to change.

        Called at most once per write, and only when the write changes the
        stored value.
        """


class LocaleProvider(Protocol):
    """Source of the active locale and the baseline available locales."""

    def active_locale(self) -> str:
        """Return the locale used when a call does not name one."""

    def available_locales(self) -> tuple[str, ...]:
        """Return the baseline locales every translatable record exposes."""


class FallbackProvider(Protocol):
    """Maps a requested locale to its ordered fallback candidates."""

    def fallback_chain(self, locale: str) -> Sequence[str]:
        """Return candidate locales, most preferred first.

        Implementations should include the requested locale itself; the
        resolver prepends it when missing.
        """


class Interpolator(Protocol):
    """Substitutes named parameters into a translation string."""

    def interpolate(self, template: str, params: Mapping[str, object]) -> str:
        """Return template with placeholders replaced.

        Raises:
            MissingInterpolationArgumentError: A placeholder has no value in params
        """
