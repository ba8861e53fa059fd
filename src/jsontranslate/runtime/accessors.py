"""Per-locale accessor table and synchronizer.

Locale-specific accessors (post.title_de, post.title_de = "...") are data,
not synthesized methods: each record owns an AccessorTable mapping accessor
names to AccessorDescriptor entries, and one dispatch function routes reads
and writes through it.

Synchronization Algorithm:
    For each attribute with a desired locale list:
    1. Retract entries whose locale is exposed but no longer desired
    2. Add entries for desired locales not yet exposed
    A table starts out exposing the baseline available locales, so the first
    synchronization retracts baseline locales the record does not want and adds
    the extra ones it does. Re-running with the same list changes nothing.

Python 3.13+.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Iterator, Mapping
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

from jsontranslate.enums import AccessorKind
from jsontranslate.locale_utils import canonical_locale, canonical_locales

if TYPE_CHECKING:
    from jsontranslate.translates import Translatable
    from jsontranslate.types import AttributeName, LocaleCode

__all__ = ["AccessorDescriptor", "AccessorTable", "SyncReport", "accessor_name"]

logger = logging.getLogger(__name__)


def accessor_name(attribute: AttributeName, locale: LocaleCode) -> str:
    """Return the accessor name for an attribute/locale pair.

    Example:
        >>> accessor_name("title", "pt-BR")
        'title_pt_BR'
    """
    return f"{attribute}_{canonical_locale(locale)}"


@dataclass(frozen=True, slots=True)
class AccessorDescriptor:
    """Reader/writer pair for one attribute in one locale.

    The reader never walks fallback chains; the writer applies the attribute's
    blank policy.

    Attributes:
        attribute: Translatable attribute name
        locale: Canonical locale identifier
    """

    attribute: AttributeName
    locale: LocaleCode

    @property
    def name(self) -> str:
        """Accessor name, e.g. 'title_de'."""
        return f"{self.attribute}_{self.locale}"

    def read(self, record: Translatable, **params: Any) -> str | None:
        """Read the locale's value, interpolating params if given."""
        return record.read_translation(self.attribute, self.locale, fallback=False, **params)

    def write(self, record: Translatable, value: object) -> object:
        """Write the locale's value with the attribute's blank policy."""
        return record.write_translation(self.attribute, value, self.locale)


@dataclass(frozen=True, slots=True)
class SyncReport:
    """Accessor changes made by one synchronization.

    Attributes:
        added: Names of accessors added, in order
        removed: Names of accessors retracted, in order
    """

    added: tuple[str, ...] = ()
    removed: tuple[str, ...] = ()

    @property
    def changed(self) -> bool:
        """True when any accessor was added or removed."""
        return bool(self.added or self.removed)


class AccessorTable:
    """Lookup table of (attribute, locale) accessors for one record.

    Not thread-safe: one table belongs to one record instance.

    Example:
        >>> table = AccessorTable(["title"], ["en", "fr"])
        >>> "title_fr" in table
        True
        >>> report = table.synchronize({"title": ["en", "de"]})
        >>> report.added, report.removed
        (('title_de',), ('title_fr',))
    """

    __slots__ = ("_entries",)

    def __init__(
        self,
        attributes: Iterable[AttributeName] = (),
        baseline: Iterable[LocaleCode] = (),
    ) -> None:
        """Initialize table exposing the baseline locales for every attribute.

        Args:
            attributes: Translatable attribute names
            baseline: Baseline available locales

        Raises:
            InvalidLocaleError: If a baseline locale is malformed
        """
        self._entries: dict[str, AccessorDescriptor] = {}
        locales = canonical_locales(baseline)
        for attribute in attributes:
            for locale in locales:
                descriptor = AccessorDescriptor(attribute, locale)
                self._entries[descriptor.name] = descriptor

    def add(self, attribute: AttributeName, locale: LocaleCode) -> bool:
        """Expose an accessor pair.

        Returns:
            True if added, False if it already existed
        """
        descriptor = AccessorDescriptor(attribute, canonical_locale(locale))
        if descriptor.name in self._entries:
            return False
        self._entries[descriptor.name] = descriptor
        logger.debug("Added locale accessor %s", descriptor.name)
        return True

    def remove(self, attribute: AttributeName, locale: LocaleCode) -> bool:
        """Retract an accessor pair.

        Removing an accessor that does not exist is a no-op.

        Returns:
            True if removed, False if it did not exist
        """
        name = accessor_name(attribute, locale)
        if self._entries.pop(name, None) is None:
            return False
        logger.debug("Removed locale accessor %s", name)
        return True

    def lookup(self, name: str) -> AccessorDescriptor | None:
        """Return the descriptor for an accessor name, or None."""
        return self._entries.get(name)

    def locales_for(self, attribute: AttributeName) -> tuple[LocaleCode, ...]:
        """Return the locales currently exposed for an attribute."""
        return tuple(d.locale for d in self._entries.values() if d.attribute == attribute)

    def synchronize(self, desired: Mapping[AttributeName, Iterable[str]]) -> SyncReport:
        """Reconcile exposed accessors with desired locale lists.

        Attributes missing from desired are left untouched.

        Args:
            desired: Desired locales per attribute (deduplicated and canonicalized here)

        Returns:
            SyncReport of the accessors added and removed

        Raises:
            InvalidLocaleError: If a desired locale is malformed
        """
        added: list[str] = []
        removed: list[str] = []
        for attribute, locales in desired.items():
            wanted = canonical_locales(locales)
            for locale in self.locales_for(attribute):
                if locale not in wanted and self.remove(attribute, locale):
                    removed.append(f"{attribute}_{locale}")
            for locale in wanted:
                if self.add(attribute, locale):
                    added.append(f"{attribute}_{locale}")
        return SyncReport(tuple(added), tuple(removed))

    def dispatch(
        self,
        record: Translatable,
        name: str,
        kind: AccessorKind,
        value: object = None,
    ) -> object:
        """Route an accessor read or write through the table.

        Args:
            record: Record owning this table
            name: Accessor name, e.g. 'title_de'
            kind: READER or WRITER
            value: Value to write (WRITER only)

        Returns:
            The read value, or the value actually written

        Raises:
            AttributeError: If no accessor with that name is exposed
        """
        descriptor = self._entries.get(name)
        if descriptor is None:
            msg = f"{type(record).__name__!r} object has no locale accessor {name!r}"
            raise AttributeError(msg)
        match kind:
            case AccessorKind.READER:
                return descriptor.read(record)
            case AccessorKind.WRITER:
                return descriptor.write(record, value)

    def __contains__(self, name: object) -> bool:
        """Check whether an accessor name is exposed."""
        return name in self._entries

    def __iter__(self) -> Iterator[AccessorDescriptor]:
        """Iterate descriptors in insertion order."""
        return iter(self._entries.values())

    def __len__(self) -> int:
        """Return the number of exposed accessor pairs."""
        return len(self._entries)

    def __repr__(self) -> str:
        """Return string representation for debugging."""
        return f"AccessorTable({sorted(self._entries)!r})"
