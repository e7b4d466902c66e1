"""Pitch accent classification from a downstep position.

Categories:
- heiban: no downstep (position 0)
- atamadaka: drop after the first mora (position 1)
- odaka: drop after the last mora (position == mora count)
- nakadaka: any interior drop
"""

from __future__ import annotations

from enum import Enum
from typing import Iterable, List, Tuple

# Small vowel/glide kana merge with the preceding character into one mora.
SMALL_KANA = frozenset("ゃゅょぁぃぅぇぉャュョァィゥェォ")


class PitchCategory(str, Enum):
    HEIBAN = "heiban"
    ATAMADAKA = "atamadaka"
    NAKADAKA = "nakadaka"
    ODAKA = "odaka"


def count_morae(reading: str) -> int:
    return sum(1 for ch in reading if ch not in SMALL_KANA)


def classify_pitch(reading: str, position: int) -> PitchCategory:
    """Name the accent pattern for a downstep ``position`` in ``reading``."""
    if position == 0:
        return PitchCategory.HEIBAN
    if position == 1:
        return PitchCategory.ATAMADAKA
    if position == count_morae(reading):
        return PitchCategory.ODAKA
    return PitchCategory.NAKADAKA


def pitch_accent_values(readings: Iterable[Tuple[str, Iterable[int]]]) -> Tuple[List[str], List[str]]:
    """Collect positions and category names for (reading, accents) pairs.

    Each accent is classified independently; both lists share index order.
    """
    positions: List[str] = []
    categories: List[str] = []
    for reading, accents in readings:
        for position in accents:
            positions.append(str(position))
            categories.append(classify_pitch(reading, position).value)
    return positions, categories
