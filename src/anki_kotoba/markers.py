"""Marker values for note field templates.

The marker vocabulary mirrors Yomitan's Anki field markers (plus a few
10ten-native names) so existing card templates work unchanged. It is a closed
set: renaming or removing a member breaks user templates.

Each builder returns a map holding every marker name. Markers that do not apply
to an entry type, or that need media/dictionary metadata this package never
sees (audio, screenshots, dictionary names), are present with "".
"""

from __future__ import annotations

from enum import Enum
from typing import Dict, Iterable, List, Optional

from .deinflect import render_reason_chains
from .entries import Entry, KanjiEntry, LookupContext, NameEntry, WordEntry
from .furigana import furigana_html, furigana_plain
from .glossary import serialize_glossary
from .pitch import pitch_accent_values

MarkerMap = Dict[str, str]

READING_SEPARATOR = "、"


class Marker(str, Enum):
    # Core
    EXPRESSION = "expression"
    READING = "reading"
    READING_ROMAJI = "reading-romaji"
    FURIGANA = "furigana"
    FURIGANA_PLAIN = "furigana-plain"
    # Glossary variants
    GLOSSARY = "glossary"
    GLOSSARY_BRIEF = "glossary-brief"
    GLOSSARY_PLAIN = "glossary-plain"
    GLOSSARY_NO_DICTIONARY = "glossary-no-dictionary"
    GLOSSARY_PLAIN_NO_DICTIONARY = "glossary-plain-no-dictionary"
    GLOSSARY_FIRST = "glossary-first"
    GLOSSARY_FIRST_BRIEF = "glossary-first-brief"
    GLOSSARY_FIRST_NO_DICTIONARY = "glossary-first-no-dictionary"
    DEFINITION = "definition"
    # Grammar
    PART_OF_SPEECH = "part-of-speech"
    TAGS_POS = "tags-pos"
    TAGS = "tags"
    CONJUGATION = "conjugation"
    # Pitch accent
    PITCH_ACCENT_POSITIONS = "pitch-accent-positions"
    PITCH_ACCENT_CATEGORIES = "pitch-accent-categories"
    PITCH_ACCENTS = "pitch-accents"
    PITCH_ACCENT_GRAPHS = "pitch-accent-graphs"
    PITCH_ACCENT_GRAPHS_JJ = "pitch-accent-graphs-jj"
    # Context
    SENTENCE = "sentence"
    SENTENCE_FURIGANA = "sentence-furigana"
    SENTENCE_FURIGANA_PLAIN = "sentence-furigana-plain"
    URL = "url"
    DOCUMENT_TITLE = "document-title"
    SEARCH_QUERY = "search-query"
    # Cloze
    CLOZE_BODY = "cloze-body"
    CLOZE_BODY_KANA = "cloze-body-kana"
    CLOZE_PREFIX = "cloze-prefix"
    CLOZE_SUFFIX = "cloze-suffix"
    # Media
    AUDIO = "audio"
    SCREENSHOT = "screenshot"
    CLIPBOARD_IMAGE = "clipboard-image"
    CLIPBOARD_TEXT = "clipboard-text"
    POPUP_SELECTION_TEXT = "popup-selection-text"
    # Frequency
    FREQUENCIES = "frequencies"
    FREQUENCY_HARMONIC_RANK = "frequency-harmonic-rank"
    FREQUENCY_HARMONIC_OCCURRENCE = "frequency-harmonic-occurrence"
    FREQUENCY_AVERAGE_RANK = "frequency-average-rank"
    FREQUENCY_AVERAGE_OCCURRENCE = "frequency-average-occurrence"
    # Phonetic
    PHONETIC_TRANSCRIPTIONS = "phonetic-transcriptions"
    # Dictionary info
    DICTIONARY = "dictionary"
    DICTIONARY_ALIAS = "dictionary-alias"
    # Kanji-specific
    CHARACTER = "character"
    ONYOMI = "onyomi"
    KUNYOMI = "kunyomi"
    STROKE_COUNT = "stroke-count"


MARKER_NAMES = tuple(m.value for m in Marker)


def is_known_marker(name: str) -> bool:
    return name in MARKER_NAMES


def empty_marker_map() -> MarkerMap:
    return {name: "" for name in MARKER_NAMES}


def _fill(values: Dict[Marker, str]) -> MarkerMap:
    markers = empty_marker_map()
    for marker, value in values.items():
        markers[marker.value] = value
    return markers


def _unique(items: Iterable[str]) -> List[str]:
    return list(dict.fromkeys(items))  # Preserve order


def _context_values(context: Optional[LookupContext]) -> Dict[Marker, str]:
    context = context or LookupContext()
    return {
        Marker.SENTENCE: context.sentence or "",
        Marker.URL: context.url or "",
        Marker.DOCUMENT_TITLE: context.document_title or "",
    }


def _frequency_values(rank: Optional[int]) -> Dict[Marker, str]:
    if rank is None:
        return {}
    return {
        Marker.FREQUENCIES: f'<ul style="text-align: left;"><li>Global: {rank}</li></ul>',
        Marker.FREQUENCY_HARMONIC_RANK: str(rank),
        Marker.FREQUENCY_AVERAGE_RANK: str(rank),
    }


def build_word_markers(word: WordEntry, context: Optional[LookupContext] = None) -> MarkerMap:
    """Compute every marker for a word entry."""
    kanji = word.display_kanji
    readings = word.display_readings

    reading = readings[0].text if readings else ""
    if kanji:
        expression = kanji[0].text
    elif readings:
        expression = reading
    else:
        expression = word.readings[0].text if word.readings else ""

    glossary = serialize_glossary(word.senses)

    part_of_speech = ", ".join(_unique(pos for sense in word.senses for pos in sense.pos))
    tags = ", ".join(
        _unique(
            tag
            for sense in word.senses
            for tag in (*sense.pos, *sense.misc, *sense.field)
        )
    )

    positions, categories = pitch_accent_values((r.text, r.accents) for r in readings)
    pitch_positions = ", ".join(positions)

    values = {
        Marker.EXPRESSION: expression,
        Marker.READING: reading,
        Marker.READING_ROMAJI: ", ".join(r.romaji for r in readings),
        Marker.FURIGANA: furigana_html(expression, reading),
        Marker.FURIGANA_PLAIN: furigana_plain(expression, reading),
        Marker.GLOSSARY: glossary.full,
        Marker.GLOSSARY_BRIEF: glossary.brief,
        Marker.GLOSSARY_NO_DICTIONARY: glossary.brief,
        Marker.GLOSSARY_PLAIN: glossary.plain,
        Marker.GLOSSARY_PLAIN_NO_DICTIONARY: glossary.plain,
        Marker.GLOSSARY_FIRST: glossary.first_full,
        Marker.GLOSSARY_FIRST_BRIEF: glossary.first_brief,
        Marker.GLOSSARY_FIRST_NO_DICTIONARY: glossary.first_brief,
        Marker.DEFINITION: glossary.brief,
        Marker.PART_OF_SPEECH: part_of_speech,
        Marker.TAGS_POS: part_of_speech,
        Marker.TAGS: tags,
        Marker.CONJUGATION: render_reason_chains(word.reason_chains),
        Marker.PITCH_ACCENT_POSITIONS: pitch_positions,
        Marker.PITCH_ACCENT_CATEGORIES: ", ".join(categories),
        Marker.PITCH_ACCENTS: pitch_positions,
        Marker.SEARCH_QUERY: expression,
        Marker.CLOZE_BODY: expression,
        Marker.CLOZE_BODY_KANA: reading,
    }
    values.update(_context_values(context))
    values.update(_frequency_values(word.frequency_rank))
    return _fill(values)


def build_kanji_markers(kanji: KanjiEntry, context: Optional[LookupContext] = None) -> MarkerMap:
    """Compute every marker for a kanji entry."""
    meanings = ", ".join(kanji.meanings)
    first_meaning = kanji.meanings[0] if kanji.meanings else ""
    values = {
        Marker.EXPRESSION: kanji.character,
        Marker.CHARACTER: kanji.character,
        Marker.READING: READING_SEPARATOR.join((*kanji.on_readings, *kanji.kun_readings)),
        Marker.ONYOMI: READING_SEPARATOR.join(kanji.on_readings),
        Marker.KUNYOMI: READING_SEPARATOR.join(kanji.kun_readings),
        Marker.GLOSSARY: meanings,
        Marker.GLOSSARY_BRIEF: meanings,
        Marker.GLOSSARY_PLAIN: meanings,
        Marker.GLOSSARY_FIRST: first_meaning,
        Marker.GLOSSARY_FIRST_BRIEF: first_meaning,
        Marker.DEFINITION: meanings,
        Marker.STROKE_COUNT: str(kanji.stroke_count) if kanji.stroke_count else "",
        Marker.FURIGANA: kanji.character,
        Marker.FURIGANA_PLAIN: kanji.character,
        Marker.SEARCH_QUERY: kanji.character,
    }
    values.update(_context_values(context))
    return _fill(values)


def _translation_text(types: Iterable[str], details: Iterable[str]) -> str:
    parts: List[str] = []
    types = list(types)
    if types:
        parts.append(f"({', '.join(types)})")
    parts.append(", ".join(details))
    return " ".join(parts)


def build_name_markers(name: NameEntry, context: Optional[LookupContext] = None) -> MarkerMap:
    """Compute every marker for a name entry."""
    expression = READING_SEPARATOR.join(name.kanji or name.readings)
    definitions = [_translation_text(tr.types, tr.details) for tr in name.translations]
    definition = "; ".join(definitions)
    first_definition = definitions[0] if definitions else ""

    primary_expression = name.kanji[0] if name.kanji else (name.readings[0] if name.readings else "")
    primary_reading = name.readings[0] if name.readings else ""
    # Names use bracket furigana for both furigana markers.
    furigana = furigana_plain(primary_expression, primary_reading)

    values = {
        Marker.EXPRESSION: expression,
        Marker.READING: READING_SEPARATOR.join(name.readings),
        Marker.GLOSSARY: definition,
        Marker.GLOSSARY_BRIEF: definition,
        Marker.GLOSSARY_PLAIN: definition,
        Marker.GLOSSARY_FIRST: first_definition,
        Marker.GLOSSARY_FIRST_BRIEF: first_definition,
        Marker.DEFINITION: definition,
        Marker.FURIGANA: furigana,
        Marker.FURIGANA_PLAIN: furigana,
        Marker.SEARCH_QUERY: expression,
    }
    values.update(_context_values(context))
    return _fill(values)


def build_marker_values(entry: Entry, context: Optional[LookupContext] = None) -> MarkerMap:
    """Dispatch to the builder for the entry's type."""
    if isinstance(entry, WordEntry):
        return build_word_markers(entry, context)
    if isinstance(entry, KanjiEntry):
        return build_kanji_markers(entry, context)
    if isinstance(entry, NameEntry):
        return build_name_markers(entry, context)
    raise TypeError(f"Unsupported entry type: {type(entry).__name__}")
