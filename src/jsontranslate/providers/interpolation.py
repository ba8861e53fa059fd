"""Named-parameter interpolation for translation strings.

Placeholder grammar:
    %{name}       substitute str(params["name"])
    %<name>.2f    substitute params["name"] formatted with a printf-style spec
    %%            literal percent sign ("%%{name}" renders as "%{name}")

Placeholders naming a reserved lookup option (scope, default, fallback, ...)
are rejected with ReservedInterpolationKeyError. A placeholder missing from
params raises MissingInterpolationArgumentError, which the resolver recovers
from by returning the raw string.

Python 3.13+. Zero external dependencies.
"""

from __future__ import annotations

import re
from collections.abc import Mapping

from jsontranslate.constants import INTERPOLATION_PATTERN, RESERVED_INTERPOLATION_KEYS
from jsontranslate.errors import MissingInterpolationArgumentError, ReservedInterpolationKeyError

__all__ = ["I18nInterpolator"]


class I18nInterpolator:
    """Interpolation service for %{name}-style templates.

    Implements the Interpolator protocol. Stateless; one instance can be
    shared by any number of configurations.

    Example:
        >>> interpolator = I18nInterpolator()
        >>> interpolator.interpolate("Hello %{name}", {"name": "Anna"})
        'Hello Anna'
        >>> interpolator.interpolate("Total: %<amount>.2f", {"amount": 3.14159})
        'Total: 3.14'
    """

    __slots__ = ()

    def interpolate(self, template: str, params: Mapping[str, object]) -> str:
        """Substitute named parameters into a template.

        Args:
            template: Translation string containing placeholders
            params: Parameter values by name

        Returns:
            Interpolated string

        Raises:
            ReservedInterpolationKeyError: Placeholder names a reserved key
            MissingInterpolationArgumentError: Placeholder absent from params
            TypeError: Value incompatible with its printf-style spec
        """

        def substitute(match: re.Match[str]) -> str:
            if match.group("escaped"):
                return "%"
            key = match.group("plain") or match.group("formatted")
            if key in RESERVED_INTERPOLATION_KEYS:
                raise ReservedInterpolationKeyError(key, template)
            if key not in params:
                raise MissingInterpolationArgumentError(key, params, template)
            value = params[key]
            spec = match.group("spec")
            if spec is None:
                return str(value)
            return f"%{spec}" % (value,)

        return INTERPOLATION_PATTERN.sub(substitute, template)

    def __repr__(self) -> str:
        """Return string representation for debugging."""
        return "I18nInterpolator()"
