"""TranslationStore adapter for plain Python records.

RecordFieldStore reads and writes backing fields as ordinary attributes and
forwards dirty notifications to the record's field_will_change() hook, the
same contract ORMs with attribute-level change tracking expose.

Python 3.13+. Zero external dependencies.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping

__all__ = ["RecordFieldStore"]

logger = logging.getLogger(__name__)


class RecordFieldStore:
    """Backing field accessor over a record's attributes.

    Implements the TranslationStore protocol.

    The record must provide field_will_change(field_name); a record without
    it raises AttributeError on the first changing write.

    Example:
        >>> class Post:
        ...     title_translations = None
        ...     def field_will_change(self, name):
        ...         print(f"{name} changed")
        >>> store = RecordFieldStore(Post())
        >>> store.mark_dirty("title_translations")
        title_translations changed
    """

    __slots__ = ("record",)

    def __init__(self, record: object) -> None:
        """Wrap a record.

        Args:
            record: Object holding the backing fields as attributes
        """
        self.record = record

    def get(self, field: str) -> Mapping[str, object] | str | bytes | None:
        """Return the backing field value, None when the attribute is unset."""
        return getattr(self.record, field, None)

    def set(self, field: str, value: Mapping[str, object] | str) -> None:
        """Assign the backing field."""
        setattr(self.record, field, value)

    def mark_dirty(self, field: str) -> None:
        """Forward the change notification to the record."""
        logger.debug("Marking %s dirty on %s", field, type(self.record).__name__)
        self.record.field_will_change(field)  # type: ignore[attr-defined]

    def __repr__(self) -> str:
        """Return string representation for debugging."""
        return f"RecordFieldStore(record={self.record!r})"
