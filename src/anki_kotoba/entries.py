"""Lookup result types and conversion from serialized lookup results.

Entries arrive as the dictionary engine serializes them:
  {"type": "word" | "kanji" | "name", "data": {...}}
with the engine's short keys (k, r, s, ent, g, ...). Everything is converted to
frozen dataclasses here so the marker builders never touch raw dicts.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, List, Optional, Tuple, Union

# Headword/reading info flags that hide an entry from display.
SEARCH_ONLY_KANJI = "sK"
SEARCH_ONLY_KANA = "sk"


@dataclass(frozen=True)
class Gloss:
    text: str
    trademark: bool = False


@dataclass(frozen=True)
class Sense:
    """One sense of a word entry.

    Attributes:
        glosses: Ordered glosses
        pos: Part-of-speech tags
        misc: Register/misc tags
        field: Field-of-use tags
        info: Free-text note
        lang: Gloss language (None or "en" means English)
    """
    glosses: Tuple[Gloss, ...]
    pos: Tuple[str, ...] = ()
    misc: Tuple[str, ...] = ()
    field: Tuple[str, ...] = ()
    info: Optional[str] = None
    lang: Optional[str] = None

    @property
    def is_native_language(self) -> bool:
        return bool(self.lang) and self.lang != "en"


@dataclass(frozen=True)
class KanjiHeadword:
    text: str
    search_only: bool = False


@dataclass(frozen=True)
class Reading:
    text: str
    search_only: bool = False
    romaji: str = ""
    accents: Tuple[int, ...] = ()  # downstep positions


@dataclass(frozen=True)
class WordEntry:
    kanji: Tuple[KanjiHeadword, ...]
    readings: Tuple[Reading, ...]
    senses: Tuple[Sense, ...]
    reason_chains: Tuple[Tuple[int, ...], ...] = ()
    frequency_rank: Optional[int] = None

    @property
    def display_kanji(self) -> List[KanjiHeadword]:
        return [k for k in self.kanji if not k.search_only]

    @property
    def display_readings(self) -> List[Reading]:
        return [r for r in self.readings if not r.search_only]


@dataclass(frozen=True)
class KanjiEntry:
    character: str
    on_readings: Tuple[str, ...] = ()
    kun_readings: Tuple[str, ...] = ()
    meanings: Tuple[str, ...] = ()
    stroke_count: Optional[int] = None


@dataclass(frozen=True)
class Translation:
    details: Tuple[str, ...]
    types: Tuple[str, ...] = ()


@dataclass(frozen=True)
class NameEntry:
    kanji: Tuple[str, ...]
    readings: Tuple[str, ...]
    translations: Tuple[Translation, ...] = ()


Entry = Union[WordEntry, KanjiEntry, NameEntry]


@dataclass(frozen=True)
class LookupContext:
    """Where the lookup happened. All values are opaque strings."""
    url: Optional[str] = None
    document_title: Optional[str] = None
    sentence: Optional[str] = None


def _str_tuple(value: Any) -> Tuple[str, ...]:
    if not value:
        return ()
    if isinstance(value, str):
        return (value,)
    return tuple(str(v) for v in value)


def _parse_accents(value: Any) -> Tuple[int, ...]:
    # The engine stores either a bare position or a list of {"i": position}.
    if isinstance(value, bool) or value is None:
        return ()
    if isinstance(value, int):
        return (value,)
    accents: List[int] = []
    if isinstance(value, list):
        for item in value:
            if isinstance(item, dict) and isinstance(item.get("i"), int):
                accents.append(item["i"])
            elif isinstance(item, int) and not isinstance(item, bool):
                accents.append(item)
    return tuple(accents)


def _parse_sense(data: dict) -> Sense:
    glosses = []
    for g in data.get("g", []):
        if isinstance(g, str):
            glosses.append(Gloss(text=g))
        else:
            glosses.append(Gloss(text=str(g.get("str", "")), trademark=g.get("type") == "tm"))
    return Sense(
        glosses=tuple(glosses),
        pos=_str_tuple(data.get("pos")),
        misc=_str_tuple(data.get("misc")),
        field=_str_tuple(data.get("field")),
        info=data.get("inf") or None,
        lang=data.get("lang") or None,
    )


def _parse_word(data: dict) -> WordEntry:
    if "r" not in data:
        raise ValueError("Word entry is missing readings ('r')")
    kanji = tuple(
        KanjiHeadword(text=k["ent"], search_only=SEARCH_ONLY_KANJI in (k.get("i") or []))
        for k in data.get("k") or []
    )
    readings = tuple(
        Reading(
            text=r["ent"],
            search_only=SEARCH_ONLY_KANA in (r.get("i") or []),
            romaji=r.get("romaji") or "",
            accents=_parse_accents(r.get("a")),
        )
        for r in data["r"]
    )
    senses = tuple(_parse_sense(s) for s in data.get("s") or [])
    chains = tuple(tuple(chain) for chain in data.get("reasonChains") or [])
    rank = data.get("frequencyRank")
    return WordEntry(
        kanji=kanji,
        readings=readings,
        senses=senses,
        reason_chains=chains,
        frequency_rank=rank if isinstance(rank, int) and not isinstance(rank, bool) else None,
    )


def _parse_kanji(data: dict) -> KanjiEntry:
    if "c" not in data:
        raise ValueError("Kanji entry is missing its character ('c')")
    readings = data.get("r") or {}
    misc = data.get("misc") or {}
    stroke_count = misc.get("sc")
    return KanjiEntry(
        character=data["c"],
        on_readings=_str_tuple(readings.get("on")),
        kun_readings=_str_tuple(readings.get("kun")),
        meanings=_str_tuple(data.get("m")),
        stroke_count=stroke_count if isinstance(stroke_count, int) else None,
    )


def _parse_name(data: dict) -> NameEntry:
    if "r" not in data:
        raise ValueError("Name entry is missing readings ('r')")
    translations = tuple(
        Translation(details=_str_tuple(tr.get("det")), types=_str_tuple(tr.get("type")))
        for tr in data.get("tr") or []
    )
    return NameEntry(
        kanji=_str_tuple(data.get("k")),
        readings=_str_tuple(data["r"]),
        translations=translations,
    )


_PARSERS = {
    "word": _parse_word,
    "kanji": _parse_kanji,
    "name": _parse_name,
}


def entry_from_dict(data: dict) -> Entry:
    """Convert a serialized lookup result into an Entry value.

    Raises:
        ValueError: If the type tag is unknown or a required key is missing
    """
    if not isinstance(data, dict):
        raise ValueError(f"Entry must be a JSON object, got {type(data).__name__}")
    entry_type = data.get("type")
    parser = _PARSERS.get(entry_type) if isinstance(entry_type, str) else None
    if parser is None:
        raise ValueError(f"Unknown entry type: {entry_type!r}")
    payload = data.get("data")
    if not isinstance(payload, dict):
        raise ValueError(f"Entry of type {entry_type!r} has no 'data' object")
    try:
        return parser(payload)
    except (KeyError, TypeError, AttributeError) as e:
        raise ValueError(f"Malformed {entry_type} entry: {e}")
