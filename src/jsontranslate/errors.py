"""Exception hierarchy for jsontranslate.

All library errors derive from TranslateError. Errors that also describe a
standard Python failure mode (bad value, missing attribute, wrong type)
additionally inherit the matching builtin so callers can catch either.

Recovery policy:
- MissingInterpolationArgumentError: recovered by the resolver, which returns
  the un-interpolated string.
- Everything else propagates to the caller unchanged.

Python 3.13+. Zero external dependencies.
"""

from __future__ import annotations

from collections.abc import Mapping

__all__ = [
    "InterpolationError",
    "InvalidLocaleError",
    "MissingInterpolationArgumentError",
    "ReservedInterpolationKeyError",
    "TranslateError",
    "TranslatesConfigurationError",
    "TranslationStoreError",
    "UnknownAttributeError",
]


class TranslateError(Exception):
    """Base exception for all jsontranslate errors."""


class InvalidLocaleError(TranslateError, ValueError):
    """Locale identifier is malformed or not recognized.

    Attributes:
        locale_code: The offending identifier, as received
    """

    def __init__(self, message: str, *, locale_code: object = None) -> None:
        """Initialize InvalidLocaleError.

        Args:
            message: Error message
            locale_code: The identifier that failed validation
        """
        super().__init__(message)
        self.locale_code = locale_code


class InterpolationError(TranslateError):
    """Named-parameter interpolation into a translation failed.

    Attributes:
        key: Placeholder name that caused the failure
        template: The translation string being interpolated
    """

    def __init__(self, message: str, *, key: str, template: str) -> None:
        """Initialize InterpolationError.

        Args:
            message: Error message
            key: Placeholder name
            template: Template string
        """
        super().__init__(message)
        self.key = key
        self.template = template


class MissingInterpolationArgumentError(InterpolationError):
    """Template references a placeholder absent from the supplied params.

    Example:
        >>> I18nInterpolator().interpolate("Hello %{name}", {"age": 3})
        Traceback (most recent call last):
        MissingInterpolationArgumentError: missing interpolation argument 'name' ...
    """

    def __init__(self, key: str, params: Mapping[str, object], template: str) -> None:
        """Initialize MissingInterpolationArgumentError.

        Args:
            key: Missing placeholder name
            params: Parameters that were supplied
            template: Template string
        """
        super().__init__(
            f"missing interpolation argument {key!r} in {template!r} "
            f"(given: {sorted(params)!r})",
            key=key,
            template=template,
        )
        self.params = dict(params)


class ReservedInterpolationKeyError(InterpolationError):
    """Template references a key reserved for lookup options."""

    def __init__(self, key: str, template: str) -> None:
        """Initialize ReservedInterpolationKeyError.

        Args:
            key: Reserved placeholder name
            template: Template string
        """
        super().__init__(
            f"reserved key {key!r} used in {template!r}",
            key=key,
            template=template,
        )


class UnknownAttributeError(TranslateError, AttributeError):
    """Attribute was not declared translatable on the record type."""


class TranslationStoreError(TranslateError, TypeError):
    """Backing field holds a value that cannot be decoded to a translation map."""


class TranslatesConfigurationError(TranslateError, ValueError):
    """Invalid translates() declaration or TranslateConfig value."""
