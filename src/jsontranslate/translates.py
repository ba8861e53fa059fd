"""Translatable record surface.

Wires the codec, the resolver, the accessor table and the fallback toggle
into a record type:

    >>> config = TranslateConfig(
    ...     locale_provider=LocaleConfig("en", ["en", "fr"]),
    ...     fallback_provider=LocaleFallbacks({"fr": ["en"]}),
    ... )
    >>> @translates("title", config=config)
    ... class Post(Translatable):
    ...     def __init__(self):
    ...         self.title_translations = {}
    ...     def field_will_change(self, field):
    ...         pass
    >>> post = Post()
    >>> post.title = "Hello"          # active locale
    >>> post.title_fr = "Bonjour"     # per-locale accessor
    >>> post.read_translation("title", "fr")
    'Bonjour'
    >>> post.title_translations
    {'en': 'Hello', 'fr': 'Bonjour'}

Per-locale accessors are entries of a per-record AccessorTable rather than
methods; __getattr__ and __setattr__ dispatch names such as "title_fr"
through it. Records opt into extra or fewer locales with a locale_accessors
callable evaluated per instance.

Python 3.13+.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable, Mapping
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any, ClassVar

from jsontranslate.constants import LOCALE_PATTERN
from jsontranslate.enums import AccessorKind
from jsontranslate.errors import TranslatesConfigurationError, UnknownAttributeError
from jsontranslate.locale_utils import canonical_locales, is_known_locale
from jsontranslate.providers.stores import RecordFieldStore
from jsontranslate.runtime.accessors import AccessorDescriptor, AccessorTable, SyncReport
from jsontranslate.runtime.engine import TranslationEngine
from jsontranslate.runtime.fallback import FallbackToggle

if TYPE_CHECKING:
    from jsontranslate.config import TranslateConfig
    from jsontranslate.providers.protocols import TranslationStore
    from jsontranslate.runtime.resolver import Resolution
    from jsontranslate.types import AttributeName, LocaleAccessors, LocaleCode

__all__ = [
    "AttributeOptions",
    "TranslatedAttribute",
    "Translatable",
    "TranslationRegistry",
    "is_translatable",
    "translates",
]

logger = logging.getLogger(__name__)

# Per-instance state, kept out of the accessor namespace by the leading underscore.
_TABLE_ATTR = "_jsontranslate_accessors"
_TOGGLE_ATTR = "_jsontranslate_fallback"


@dataclass(frozen=True, slots=True)
class AttributeOptions:
    """Declaration of one translatable attribute.

    Attributes:
        name: Attribute name
        allow_blank: Store blank values instead of removing the locale
        locale_accessors: Per-record callable returning the locales that get
            accessors; None keeps the baseline available locales
    """

    name: AttributeName
    allow_blank: bool = False
    locale_accessors: LocaleAccessors | None = None


@dataclass(frozen=True, slots=True)
class TranslationRegistry:
    """Translatable attributes of a record type and the engine serving them.

    Attributes:
        engine: Engine bound to the type's TranslateConfig
        attributes: Options by attribute name, in declaration order
    """

    engine: TranslationEngine
    attributes: Mapping[AttributeName, AttributeOptions] = field(default_factory=dict)

    def options(self, attribute: AttributeName) -> AttributeOptions:
        """Return the options of a declared attribute.

        Raises:
            UnknownAttributeError: If the attribute is not translatable
        """
        try:
            return self.attributes[attribute]
        except KeyError:
            msg = (
                f"{attribute!r} is not a translatable attribute "
                f"(declared: {', '.join(self.attributes)})"
            )
            raise UnknownAttributeError(msg) from None

    def extend(self, options: Iterable[AttributeOptions]) -> TranslationRegistry:
        """Return a registry with additional (or redeclared) attributes."""
        merged = dict(self.attributes)
        merged.update((o.name, o) for o in options)
        return TranslationRegistry(self.engine, merged)


class TranslatedAttribute:
    """Data descriptor for the active-locale value of an attribute.

    Reading resolves the active locale with fallback; assigning writes the
    active locale with the attribute's blank policy.
    """

    __slots__ = ("name",)

    def __init__(self, name: AttributeName) -> None:
        """Bind the descriptor to an attribute name."""
        self.name = name

    def __get__(self, record: Translatable | None, owner: type | None = None) -> Any:
        if record is None:
            return self
        return record.read_translation(self.name)

    def __set__(self, record: Translatable, value: object) -> None:
        record.write_translation(self.name, value)

    def __repr__(self) -> str:
        """Return string representation for debugging."""
        return f"TranslatedAttribute({self.name!r})"


class Translatable:
    """Mixin for records storing translations in one field per attribute.

    Declare attributes with the translates() class decorator. The record
    provides one backing field per attribute (e.g. title_translations) and a
    field_will_change(field) hook, or overrides translation_store() to adapt
    another persistence layer.

    Per-locale accessors reflect the most recent evaluation of the
    locale_accessors callables. The first evaluation happens lazily when an
    accessor is first used; after changing record state those callables read,
    call sync_locale_accessors() to re-evaluate. Until then the previous
    accessor set stays exposed. Assigning a name such as title_html on a
    record with no accessor table yet is a plain assignment unless "html" is
    a baseline or Babel-known locale, so ordinary fields can be set in
    __init__ before the state locale_accessors depends on.

    Not thread-safe: a record's fallback state and accessor table are plain
    instance state.
    """

    __translates__: ClassVar[TranslationRegistry | None] = None

    # ------------------------------------------------------------------
    # Class-level introspection
    # ------------------------------------------------------------------

    @classmethod
    def translation_registry(cls) -> TranslationRegistry:
        """Return the type's registry.

        Raises:
            TranslatesConfigurationError: If no attribute was declared
        """
        registry = cls.__translates__
        if registry is None:
            msg = f"{cls.__name__} declares no translatable attributes; use @translates(...)"
            raise TranslatesConfigurationError(msg)
        return registry

    @classmethod
    def translated_attribute_names(cls) -> tuple[AttributeName, ...]:
        """Return translatable attribute names in declaration order."""
        return tuple(cls.translation_registry().attributes)

    @classmethod
    def permitted_translated_attributes(cls) -> tuple[str, ...]:
        """Return every assignable translation name.

        Attribute names followed by their baseline per-locale accessor names,
        suitable as an allow-list for mass assignment.

        Example:
            >>> Post.permitted_translated_attributes()
            ('title', 'title_en', 'title_fr')
        """
        registry = cls.translation_registry()
        locales = registry.engine.available_locales()
        names = list(registry.attributes)
        names.extend(f"{attribute}_{locale}" for attribute in registry.attributes for locale in locales)
        return tuple(names)

    @classmethod
    def _may_be_accessor(cls, name: str) -> bool:
        registry = cls.__translates__
        if registry is None:
            return False
        for attribute in registry.attributes:
            prefix = f"{attribute}_"
            if name.startswith(prefix) and LOCALE_PATTERN.match(name[len(prefix) :]):
                return True
        return False

    # ------------------------------------------------------------------
    # Backing field access
    # ------------------------------------------------------------------

    def translation_store(self) -> TranslationStore:
        """Return the accessor for this record's backing fields.

        Override to adapt a persistence layer whose fields or change tracking
        are not plain attributes.
        """
        return RecordFieldStore(self)

    # ------------------------------------------------------------------
    # Reading and writing
    # ------------------------------------------------------------------

    def lookup_translation(
        self,
        attribute: AttributeName,
        locale: LocaleCode | None = None,
        *,
        fallback: bool = True,
        **params: Any,
    ) -> Resolution:
        """Resolve an attribute and report which locale the value came from.

        See read_translation() for arguments.
        """
        registry = self.translation_registry()
        registry.options(attribute)
        return registry.engine.lookup(
            self.translation_store(),
            attribute,
            locale,
            fallback=fallback,
            fallback_allowed=self.fallback_toggle.allowed,
            params=params,
        )

    def read_translation(
        self,
        attribute: AttributeName,
        locale: LocaleCode | None = None,
        *,
        fallback: bool = True,
        **params: Any,
    ) -> str | None:
        """Resolve an attribute's value.

        Args:
            attribute: Translatable attribute name
            locale: Requested locale (default: active locale)
            fallback: Walk the fallback chain; ignored while fallback is
                disabled on this record
            **params: Named interpolation parameters

        Returns:
            The translation, or None when none exists

        Raises:
            UnknownAttributeError: If the attribute is not translatable
            InvalidLocaleError: If the locale is malformed
        """
        return self.lookup_translation(attribute, locale, fallback=fallback, **params).value

    def write_translation(
        self,
        attribute: AttributeName,
        value: object,
        locale: LocaleCode | None = None,
        *,
        allow_blank: bool | None = None,
    ) -> object:
        """Store an attribute's value for a locale.

        Args:
            attribute: Translatable attribute name
            value: Value to store; None or (unless allowed) blank removes the locale
            locale: Target locale (default: active locale)
            allow_blank: Override the attribute's blank policy (None: use it)

        Returns:
            The value actually written

        Raises:
            UnknownAttributeError: If the attribute is not translatable
            InvalidLocaleError: If the locale is malformed
        """
        registry = self.translation_registry()
        options = registry.options(attribute)
        policy = options.allow_blank if allow_blank is None else allow_blank
        return registry.engine.write(
            self.translation_store(), attribute, value, locale, allow_blank=policy
        )

    # ------------------------------------------------------------------
    # Fallback toggle
    # ------------------------------------------------------------------

    @property
    def fallback_toggle(self) -> FallbackToggle:
        """This record's fallback toggle, created unset on first use."""
        toggle = self.__dict__.get(_TOGGLE_ATTR)
        if toggle is None:
            toggle = FallbackToggle()
            object.__setattr__(self, _TOGGLE_ATTR, toggle)
        return toggle

    def enable_fallback[T](self, body: Callable[[], T] | None = None) -> T | None:
        """Enable fallback persistently, or only while body runs."""
        return self.fallback_toggle.enable_fallback(body)

    def disable_fallback[T](self, body: Callable[[], T] | None = None) -> T | None:
        """Disable fallback persistently, or only while body runs.

        Example:
            >>> post.disable_fallback(lambda: post.read_translation("title", "fr"))
        """
        return self.fallback_toggle.disable_fallback(body)

    # ------------------------------------------------------------------
    # Per-locale accessors
    # ------------------------------------------------------------------

    def sync_locale_accessors(self) -> SyncReport:
        """Reconcile this record's locale accessors with its locale_accessors.

        Runs automatically the first time an accessor is used. Call it again
        after changing state the locale_accessors callables depend on.

        Returns:
            SyncReport of the accessors added and removed

        Raises:
            InvalidLocaleError: If a callable returns a malformed locale
        """
        registry = self.translation_registry()

        # Evaluate and canonicalize first: a failing callable leaves the table untouched.
        evaluated: dict[int, tuple[str, ...]] = {}
        desired: dict[AttributeName, tuple[str, ...]] = {}
        for name, options in registry.attributes.items():
            if options.locale_accessors is None:
                continue
            key = id(options.locale_accessors)
            if key not in evaluated:
                evaluated[key] = canonical_locales(options.locale_accessors(self))
            desired[name] = evaluated[key]

        table = self.__dict__.get(_TABLE_ATTR)
        if table is None:
            table = AccessorTable(registry.attributes, registry.engine.available_locales())
            report = table.synchronize(desired)
            object.__setattr__(self, _TABLE_ATTR, table)
        else:
            report = table.synchronize(desired)
        if report.changed:
            logger.debug(
                "Synchronized locale accessors on %s: added %s, removed %s",
                type(self).__name__,
                report.added,
                report.removed,
            )
        return report

    def locale_accessor_table(self) -> AccessorTable:
        """Return this record's accessor table, synchronizing it on first use."""
        table = self.__dict__.get(_TABLE_ATTR)
        if table is None:
            self.sync_locale_accessors()
            table = self.__dict__[_TABLE_ATTR]
        return table

    def locale_accessor(self, name: str) -> AccessorDescriptor | None:
        """Return the descriptor behind an accessor name, or None.

        Useful for reads with interpolation parameters:

            >>> post.locale_accessor("title_de").read(post, name="Anna")
        """
        return self.locale_accessor_table().lookup(name)

    def __getattr__(self, name: str) -> Any:
        if not name.startswith("_") and self._may_be_accessor(name):
            table = self.locale_accessor_table()
            if name in table:
                return table.dispatch(self, name, AccessorKind.READER)
        msg = f"{type(self).__name__!r} object has no attribute {name!r}"
        raise AttributeError(msg)

    def __setattr__(self, name: str, value: Any) -> None:
        if not name.startswith("_") and self._may_be_accessor(name):
            table = self.__dict__.get(_TABLE_ATTR)
            if table is None and self._may_trigger_sync(name):
                table = self.locale_accessor_table()
            if table is not None and name in table:
                table.dispatch(self, name, AccessorKind.WRITER, value)
                return
        super().__setattr__(name, value)

    def _may_trigger_sync(self, name: str) -> bool:
        """Whether assigning name may run the first synchronization.

        Only names ending in a baseline locale or a locale Babel knows do, so
        plain fields such as title_html are assigned without evaluating
        locale_accessors on a record that may still be initializing.
        """
        registry = self.translation_registry()
        baseline = registry.engine.available_locales()
        for attribute in registry.attributes:
            prefix = f"{attribute}_"
            if name.startswith(prefix):
                suffix = name[len(prefix) :]
                if suffix in baseline or is_known_locale(suffix):
                    return True
        return False


def is_translatable(obj: object) -> bool:
    """Check whether a record or record type declares translatable attributes."""
    cls = obj if isinstance(obj, type) else type(obj)
    return issubclass(cls, Translatable) and cls.__translates__ is not None


def translates(
    *attributes: str,
    config: TranslateConfig,
    allow_blank: bool = False,
    locale_accessors: LocaleAccessors | None = None,
) -> Callable[[type[Translatable]], type[Translatable]]:
    """Class decorator declaring translatable attributes.

    May be applied more than once (and again on subclasses) to add attributes
    with different options; all declarations on one type must share a config.

    Args:
        *attributes: Attribute names; each is stored in "<name><suffix>"
        config: Collaborators and storage conventions
        allow_blank: Store blank values instead of removing the locale
        locale_accessors: Callable(record) returning the locales that get
            per-locale accessors on that record

    Returns:
        Decorator returning the class itself

    Raises:
        TranslatesConfigurationError: If the declaration is invalid
    """
    if not attributes:
        msg = "translates() requires at least one attribute name"
        raise TranslatesConfigurationError(msg)
    for attribute in attributes:
        if not isinstance(attribute, str) or not attribute.isidentifier() or attribute.startswith("_"):
            msg = f"Invalid translatable attribute name: {attribute!r}"
            raise TranslatesConfigurationError(msg)
    if locale_accessors is not None and not callable(locale_accessors):
        msg = f"locale_accessors must be callable, got {type(locale_accessors).__name__}"
        raise TranslatesConfigurationError(msg)

    declared = [
        AttributeOptions(name, allow_blank, locale_accessors) for name in dict.fromkeys(attributes)
    ]

    def decorate(cls: type[Translatable]) -> type[Translatable]:
        if not (isinstance(cls, type) and issubclass(cls, Translatable)):
            msg = f"@translates requires a Translatable subclass, got {cls!r}"
            raise TranslatesConfigurationError(msg)

        inherited = cls.__translates__
        if inherited is None:
            registry = TranslationRegistry(
                TranslationEngine(config), {o.name: o for o in declared}
            )
        elif inherited.engine.config is config:
            registry = inherited.extend(declared)
        else:
            msg = f"{cls.__name__} already declares translations with a different TranslateConfig"
            raise TranslatesConfigurationError(msg)

        cls.__translates__ = registry
        for options in declared:
            setattr(cls, options.name, TranslatedAttribute(options.name))
        logger.debug(
            "Declared translatable attributes %s on %s",
            ", ".join(o.name for o in declared),
            cls.__name__,
        )
        return cls

    return decorate
