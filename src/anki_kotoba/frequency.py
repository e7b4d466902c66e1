"""Word frequency ranks from a Word,Form,Rank CSV.

Two indexes are built, both keyed on hiragana-folded text:
  1. "word\\tform" -> rank, for exact (kanji, reading) pairs
  2. word or form -> best (lowest) rank, for single-form lookups

When both a kanji form and a reading are known ONLY the pair key is consulted,
so 生/き never picks up the rank of 生/なま.
"""

from __future__ import annotations

import dataclasses
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, Optional, Protocol

from .entries import WordEntry
from .kana import katakana_to_hiragana

logger = logging.getLogger(__name__)


class FrequencyLookup(Protocol):
    def lookup(self, kanji: Optional[str], kana: Optional[str]) -> Optional[int]:
        ...


@dataclass
class FrequencyIndex:
    pairs: Dict[str, int] = field(default_factory=dict)
    singles: Dict[str, int] = field(default_factory=dict)

    def add(self, word: str, form: str, rank: int) -> None:
        norm_word = katakana_to_hiragana(word)
        norm_form = katakana_to_hiragana(form)
        key = f"{norm_word}\t{norm_form}"
        if key not in self.pairs or self.pairs[key] > rank:
            self.pairs[key] = rank
        for single in {norm_word, norm_form}:
            if single not in self.singles or self.singles[single] > rank:
                self.singles[single] = rank

    def lookup(self, kanji: Optional[str], kana: Optional[str]) -> Optional[int]:
        norm_kanji = katakana_to_hiragana(kanji) if kanji else ""
        norm_kana = katakana_to_hiragana(kana) if kana else ""
        if norm_kanji and norm_kana:
            return self.pairs.get(f"{norm_kanji}\t{norm_kana}")
        if norm_kanji:
            return self.singles.get(norm_kanji)
        if norm_kana:
            return self.singles.get(norm_kana)
        return None

    def __len__(self) -> int:
        return len(self.pairs)


def load_frequency_csv(path: str | Path) -> FrequencyIndex:
    """Build a FrequencyIndex from a CSV with a Word,Form,Rank header.

    The form is whatever lies between the first and last comma, so forms
    containing commas survive. Malformed rows are skipped.

    Raises:
        FileNotFoundError: If the CSV does not exist
    """
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Frequency list not found: {path}")

    index = FrequencyIndex()
    skipped = 0
    with path.open("r", encoding="utf-8") as f:
        next(f, None)  # header
        for line in f:
            line = line.rstrip("\r\n")
            if not line:
                continue
            first = line.find(",")
            last = line.rfind(",")
            if first < 0 or first == last:
                skipped += 1
                continue
            try:
                rank = int(line[last + 1:].strip())
            except ValueError:
                skipped += 1
                continue
            index.add(line[:first], line[first + 1:last], rank)

    if skipped:
        logger.debug("Skipped %d malformed rows in %s", skipped, path)
    logger.info("Loaded %d frequency entries from %s", len(index), path)
    return index


def with_frequency_rank(word: WordEntry, lookup: FrequencyLookup) -> WordEntry:
    """Copy of ``word`` carrying the rank for its primary headword and reading."""
    kanji = word.display_kanji
    readings = word.display_readings
    rank = lookup.lookup(
        kanji[0].text if kanji else None,
        readings[0].text if readings else None,
    )
    if rank is None:
        return word
    return dataclasses.replace(word, frequency_rank=rank)
