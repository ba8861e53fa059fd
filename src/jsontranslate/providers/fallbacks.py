"""Reference FallbackProvider with explicit and derived fallback chains.

A chain for a requested locale is assembled from, in order:
1. The requested locale itself
2. Explicitly configured fallbacks for that locale
3. Parent locales derived from its subtags via Babel (de_AT -> de)
4. Global default fallbacks

Duplicates are removed, keeping the first occurrence.

Python 3.13+. Uses Babel for locale parent derivation.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping

from jsontranslate.locale_utils import canonical_locale, canonical_locales, parent_locales

__all__ = ["LocaleFallbacks"]


class LocaleFallbacks:
    """Locale fallback chains.

    Implements the FallbackProvider protocol.

    Example:
        >>> fallbacks = LocaleFallbacks({"fr": ["en"]})
        >>> fallbacks.fallback_chain("fr")
        ('fr', 'en')
        >>> fallbacks.fallback_chain("de_AT")
        ('de_AT', 'de')
        >>> LocaleFallbacks(defaults=["en"]).fallback_chain("de_AT")
        ('de_AT', 'de', 'en')

    Attributes:
        defaults: Locales appended to every chain
        derive_parents: Whether Babel-derived parent locales are included
    """

    __slots__ = ("_chains", "_mapping", "defaults", "derive_parents")

    def __init__(
        self,
        mapping: Mapping[str, Iterable[str]] | None = None,
        defaults: Iterable[str] = (),
        *,
        derive_parents: bool = True,
    ) -> None:
        """Initialize fallback configuration.

        Args:
            mapping: Explicit fallbacks per locale, e.g. {"ca": ["es", "en"]}
            defaults: Fallbacks appended to every chain
            derive_parents: Include parent locales derived from subtags

        Raises:
            InvalidLocaleError: If any identifier is malformed
        """
        self._mapping: dict[str, tuple[str, ...]] = {
            canonical_locale(locale): canonical_locales(chain)
            for locale, chain in (mapping or {}).items()
        }
        self.defaults: tuple[str, ...] = canonical_locales(defaults)
        self.derive_parents = derive_parents
        self._chains: dict[str, tuple[str, ...]] = {}

    def fallback_chain(self, locale: str) -> tuple[str, ...]:
        """Return the ordered fallback chain for a locale.

        Chains are computed once per locale and memoized.

        Args:
            locale: Requested locale

        Returns:
            Deduplicated chain starting with the requested locale

        Raises:
            InvalidLocaleError: If the locale is malformed
        """
        code = canonical_locale(locale)
        chain = self._chains.get(code)
        if chain is None:
            chain = self._compute(code)
            self._chains[code] = chain
        return chain

    def _compute(self, code: str) -> tuple[str, ...]:
        candidates = [code, *self._mapping.get(code, ())]
        if self.derive_parents:
            candidates.extend(parent_locales(code))
        candidates.extend(self.defaults)
        return tuple(dict.fromkeys(candidates))

    def __repr__(self) -> str:
        """Return string representation for debugging."""
        return (
            f"LocaleFallbacks(mapping={self._mapping!r}, defaults={self.defaults!r}, "
            f"derive_parents={self.derive_parents!r})"
        )
