"""Translation store codec.

Reads and writes the {locale -> value} map kept in one backing field per
translatable attribute. The codec owns three rules:

- Decoding: a missing or empty backing field is an empty map; mappings are
  copied; JSON text is decoded when the storage format says so.
- Blank policy: unless blanks are allowed, blank values are stripped to None
  and None removes the locale's key.
- Change tracking: a write that changes the stored value notifies the store
  exactly once, before the map is replaced; a no-op write notifies nobody.

Python 3.13+. Zero external dependencies.
"""

from __future__ import annotations

import json
import logging
from collections.abc import Collection, Mapping
from typing import TYPE_CHECKING

from jsontranslate.enums import StorageFormat
from jsontranslate.errors import TranslationStoreError

if TYPE_CHECKING:
    from jsontranslate.providers.protocols import TranslationStore
    from jsontranslate.types import FieldName, LocaleCode, TranslationMap

__all__ = ["TranslationCodec", "blank_to_none", "is_blank"]

logger = logging.getLogger(__name__)


def is_blank(value: object) -> bool:
    """Check whether a value counts as "no value".

    None, empty or whitespace-only strings, and empty collections are blank.
    Numbers (including 0) and False are not: only the absence of content is.

    Example:
        >>> is_blank("  ")
        True
        >>> is_blank("0")
        False
    """
    match value:
        case None:
            return True
        case str():
            return not value.strip()
        case Collection():
            return len(value) == 0
        case _:
            return False


def blank_to_none(value: object) -> object:
    """Return None for blank values, the value itself otherwise."""
    return None if is_blank(value) else value


class TranslationCodec:
    """Codec between a backing field and its translation map.

    Example:
        >>> codec = TranslationCodec()
        >>> codec.write(store, "title_translations", "Hello", "en", allow_blank=False)
        'Hello'
        >>> codec.read(store, "title_translations", "en")
        'Hello'
        >>> codec.write(store, "title_translations", "  ", "en", allow_blank=False)
        >>> codec.read(store, "title_translations", "en") is None
        True

    Attributes:
        storage: Representation of the backing field value
    """

    __slots__ = ("storage",)

    def __init__(self, storage: StorageFormat = StorageFormat.MAPPING) -> None:
        """Initialize codec.

        Args:
            storage: MAPPING for dict-valued fields, JSON for text-valued fields
        """
        self.storage = storage

    def load(self, store: TranslationStore, field: FieldName) -> TranslationMap:
        """Fetch the translation map held by a backing field.

        Args:
            store: Backing field accessor
            field: Backing field name

        Returns:
            A fresh dict; mutating it does not affect the record

        Raises:
            TranslationStoreError: If the stored value cannot be decoded
        """
        raw = store.get(field)
        match raw:
            case None | "" | b"":
                return {}
            case Mapping():
                return dict(raw)
            case str() | bytes() if self.storage is StorageFormat.JSON:
                return self._decode(field, raw)
            case _:
                msg = (
                    f"Backing field {field!r} holds {type(raw).__name__}, "
                    f"expected a mapping for {self.storage} storage"
                )
                raise TranslationStoreError(msg)

    def dump(self, translations: TranslationMap) -> Mapping[str, str] | str:
        """Encode a translation map for assignment to the backing field."""
        if self.storage is StorageFormat.JSON:
            return json.dumps(translations, ensure_ascii=False)
        return translations

    def read(self, store: TranslationStore, field: FieldName, locale: LocaleCode) -> str | None:
        """Return the stored value for a locale, or None when absent."""
        return self.load(store, field).get(locale)

    def write(
        self,
        store: TranslationStore,
        field: FieldName,
        value: object,
        locale: LocaleCode,
        *,
        allow_blank: bool,
    ) -> object:
        """Store a value for a locale.

        Args:
            store: Backing field accessor
            field: Backing field name (also the name passed to mark_dirty)
            value: Value to store; None removes the locale
            locale: Canonical locale identifier
            allow_blank: Keep blank values instead of removing the locale

        Returns:
            The value actually written (None if stripped or removed)

        Raises:
            TranslationStoreError: If the current stored value cannot be decoded
            TypeError: If JSON storage cannot encode the value; nothing is
                marked dirty or written
        """
        stored = value if allow_blank else blank_to_none(value)
        translations = self.load(store, field)

        changed = translations.get(locale) != stored
        if stored is None:
            translations.pop(locale, None)
        else:
            translations[locale] = stored  # type: ignore[assignment]

        # mark_dirty only after encoding succeeds
        encoded = self.dump(translations)
        if changed:
            logger.debug("Translation %s[%s] changing", field, locale)
            store.mark_dirty(field)
        store.set(field, encoded)
        return stored

    def _decode(self, field: FieldName, raw: str | bytes) -> TranslationMap:
        if not raw.strip():
            return {}
        try:
            decoded = json.loads(raw)
        except json.JSONDecodeError as e:
            msg = f"Backing field {field!r} holds invalid JSON: {e}"
            raise TranslationStoreError(msg) from e
        if not isinstance(decoded, dict):
            msg = f"Backing field {field!r} holds JSON {type(decoded).__name__}, expected object"
            raise TranslationStoreError(msg)
        return decoded

    def __repr__(self) -> str:
        """Return string representation for debugging."""
        return f"TranslationCodec(storage={self.storage!r})"
