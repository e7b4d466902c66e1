"""Furigana distribution over a mixed kanji/kana expression.

The expression is split into runs of kana and non-kana characters. Each kana
run is located in the (hiragana-folded) reading with a greedy, left-to-right
substring search; the reading between two matches belongs to the kanji run in
between. When a kana run cannot be found the whole expression gets the whole
reading as a single annotation.

The greedy search can mis-segment readings where a kana run also occurs
earlier than its true position (e.g. a reading that repeats the okurigana).
Card output depends on this exact behavior, so it is kept as is.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import List, Tuple

from .kana import is_all_kana, is_kana_char, katakana_to_hiragana

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class FuriganaSegment:
    """A run of expression text and the reading shown above it.

    Attributes:
        text: Literal run of the expression
        reading: Furigana for the run ("" when none is shown)
    """
    text: str
    reading: str = ""


def split_kana_runs(expression: str) -> List[Tuple[str, bool]]:
    """Split text into maximal (run, is_kana) groups, preserving order."""
    runs: List[Tuple[str, bool]] = []
    current = ""
    current_is_kana: bool | None = None
    for ch in expression:
        ch_is_kana = is_kana_char(ch)
        if ch_is_kana == current_is_kana:
            current += ch
            continue
        if current:
            runs.append((current, bool(current_is_kana)))
        current = ch
        current_is_kana = ch_is_kana
    if current:
        runs.append((current, bool(current_is_kana)))
    return runs


def distribute_furigana(expression: str, reading: str) -> List[FuriganaSegment]:
    """Align ``reading`` against ``expression``.

    Never raises: alignment failures degrade to a single segment carrying the
    whole reading.
    """
    if not reading or reading == expression:
        return [FuriganaSegment(expression)]

    # Furigana is never placed over an all-kana expression.
    if is_all_kana(expression):
        return [FuriganaSegment(expression)]

    runs = split_kana_runs(expression)
    if len(runs) == 1:
        return [FuriganaSegment(expression, reading)]

    # Segments are built as [text, reading] pairs so placeholders for kanji
    # runs can be filled once the following kana run is matched.
    pending: List[List[str]] = []
    reading_norm = katakana_to_hiragana(reading)
    pos = 0

    for text, run_is_kana in runs:
        if not run_is_kana:
            pending.append([text, ""])
            continue

        needle = katakana_to_hiragana(text)
        found = reading_norm.find(needle, pos)
        if found < 0:
            logger.debug(
                "furigana fallback: kana run %r not found in reading %r after offset %d",
                text, reading, pos,
            )
            return [FuriganaSegment(expression, reading)]

        if found > pos:
            if pending:
                pending[-1][1] = reading[pos:found]
            else:
                pending.append([reading[pos:found], ""])
        pending.append([text, ""])
        pos = found + len(needle)

    if pos < len(reading):
        for segment in reversed(pending):
            if not is_all_kana(segment[0]):
                segment[1] = reading[pos:]
                break

    return [FuriganaSegment(text, seg_reading) for text, seg_reading in pending]


def segments_to_plain(segments: List[FuriganaSegment]) -> str:
    """Bracket notation: ``食[た] べる``."""
    return " ".join(f"{s.text}[{s.reading}]" if s.reading else s.text for s in segments)


def segments_to_html(segments: List[FuriganaSegment]) -> str:
    """Ruby markup: ``<ruby>食<rt>た</rt></ruby>べる``."""
    return "".join(
        f"<ruby>{s.text}<rt>{s.reading}</rt></ruby>" if s.reading else s.text
        for s in segments
    )


def furigana_plain(expression: str, reading: str) -> str:
    if not reading or reading == expression:
        return expression
    return segments_to_plain(distribute_furigana(expression, reading))


def furigana_html(expression: str, reading: str) -> str:
    if not reading or reading == expression:
        return expression
    return segments_to_html(distribute_furigana(expression, reading))
