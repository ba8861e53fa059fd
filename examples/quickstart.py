"""Quickstart example for jsontranslate.

Demonstrates declaring translatable attributes on a plain record class,
reading and writing per locale, per-locale accessors, interpolation and the
fallback toggle.

Note: A real application maps title_translations to a JSON column of its
persistence layer and implements field_will_change() with that layer's
change tracking. The record below keeps both in memory.
"""

import logging

from jsontranslate import LocaleConfig, LocaleFallbacks, TranslateConfig, Translatable, translates

logging.basicConfig(level=logging.INFO)

locales = LocaleConfig("en", ["en", "fr", "de"])
config = TranslateConfig(
    locale_provider=locales,
    fallback_provider=LocaleFallbacks({"fr": ["en"], "de": ["en"]}),
)


@translates("title", "body", config=config)
class Post(Translatable):
    def __init__(self) -> None:
        self.title_translations = {}
        self.body_translations = {}
        self.dirty_fields: set[str] = set()

    def field_will_change(self, field: str) -> None:
        self.dirty_fields.add(field)


# Example 1: Active-locale attributes
print("=" * 50)
print("Example 1: Active Locale")
print("=" * 50)

post = Post()
post.title = "Hello"
with locales.using("fr"):
    post.title = "Bonjour"
    print(post.title)
    # Output: Bonjour
print(post.title)
# Output: Hello
print(post.title_translations)
# Output: {'en': 'Hello', 'fr': 'Bonjour'}

# Example 2: Per-locale accessors
print("\n" + "=" * 50)
print("Example 2: Per-Locale Accessors")
print("=" * 50)

post.title_de = "Hallo"
print(post.title_de)
# Output: Hallo
post.body_en = "Body text"
print(post.body_fr)
# Output: None (accessors never fall back)
print(Post.permitted_translated_attributes())

# Example 3: Fallback and interpolation
print("\n" + "=" * 50)
print("Example 3: Fallback and Interpolation")
print("=" * 50)

print(post.read_translation("body", "fr"))
# Output: Body text (fr -> en)
print(post.disable_fallback(lambda: post.read_translation("body", "fr")))
# Output: None

post.write_translation("title", "Hello %{name}", "en")
print(post.read_translation("title", "en", name="Anna"))
# Output: Hello Anna

# Example 4: Blank values remove the locale
print("\n" + "=" * 50)
print("Example 4: Blank Values")
print("=" * 50)

post.title_de = "   "
print(post.title_translations)
# Output: {'en': 'Hello %{name}', 'fr': 'Bonjour'}
print(sorted(post.dirty_fields))
# Output: ['body_translations', 'title_translations']
