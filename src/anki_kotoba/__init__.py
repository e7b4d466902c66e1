"""anki-kotoba: Anki notes from Japanese dictionary lookups.

Lookup entries (word, kanji, name) are turned into Yomitan-compatible marker
values, which fill user field templates to produce AnkiConnect-ready notes.
"""

__all__ = [
    "kana",
    "furigana",
    "pitch",
    "glossary",
    "deinflect",
    "entries",
    "markers",
    "templates",
    "settings",
    "note_builder",
    "frequency",
    "ingest",
    "report",
]
