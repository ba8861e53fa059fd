"""Translation runtime: codec, resolver, accessors and fallback toggle.

Submodules:
    codec     - TranslationCodec (backing field <-> translation map, blank policy)
    resolver  - LocaleResolver (fallback chains, interpolation)
    accessors - AccessorTable (per-locale accessor reconciliation and dispatch)
    fallback  - FallbackToggle (instance-scoped fallback flag)
    engine    - TranslationEngine (codec and resolver bound to a config)

Python 3.13+.
"""

from .accessors import AccessorDescriptor, AccessorTable, SyncReport, accessor_name
from .codec import TranslationCodec, blank_to_none, is_blank
from .engine import TranslationEngine
from .fallback import FallbackToggle
from .resolver import FallbackInfo, LocaleResolver, Resolution

__all__ = [
    "AccessorDescriptor",
    "AccessorTable",
    "FallbackInfo",
    "FallbackToggle",
    "LocaleResolver",
    "Resolution",
    "SyncReport",
    "TranslationCodec",
    "TranslationEngine",
    "accessor_name",
    "blank_to_none",
    "is_blank",
]
