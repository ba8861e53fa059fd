"""Enumerations for jsontranslate type-safe constants.

Uses StrEnum (Python 3.11+) for automatic string conversion.
StrEnum members are strings themselves, eliminating boilerplate __str__ methods.

Python 3.13+.
"""

from enum import StrEnum


class StorageFormat(StrEnum):
    """Representation of the backing field that holds a translation map.

    StrEnum provides automatic string conversion: str(StorageFormat.JSON) == "json"
    """

    MAPPING = "mapping"
    """Backing field holds a mapping (e.g. a JSON/JSONB column decoded by the ORM)."""

    JSON = "json"
    """Backing field holds JSON text that must be decoded and encoded here."""


class AccessorKind(StrEnum):
    """Half of a per-locale accessor pair.

    StrEnum provides automatic string conversion: str(AccessorKind.READER) == "reader"
    """

    READER = "reader"
    """Reads the locale's value without fallback: post.title_de"""

    WRITER = "writer"
    """Writes the locale's value: post.title_de = "Hallo" """


__all__ = [
    "AccessorKind",
    "StorageFormat",
]
