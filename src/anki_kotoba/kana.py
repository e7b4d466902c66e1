"""Kana classification and normalization utilities.

Policy:
- Kana means the hiragana (U+3040-U+309F) and katakana (U+30A0-U+30FF) blocks.
- Katakana is folded to hiragana only for matching; the folding is
  length-preserving so offsets into the folded text are valid in the original.
"""

from __future__ import annotations

import jaconv

_HIRAGANA_START, _HIRAGANA_END = 0x3040, 0x309F
_KATAKANA_START, _KATAKANA_END = 0x30A0, 0x30FF


def is_kana_char(ch: str) -> bool:
    """Return True if ``ch`` is a hiragana or katakana character."""
    if not ch:
        return False
    code = ord(ch[0])
    return (_HIRAGANA_START <= code <= _HIRAGANA_END) or (_KATAKANA_START <= code <= _KATAKANA_END)


def is_all_kana(text: str) -> bool:
    """Return True if text is non-empty and made only of kana."""
    if not text:
        return False
    return all(is_kana_char(ch) for ch in text)


def katakana_to_hiragana(text: str) -> str:
    """Fold katakana to hiragana for comparison (safe for None-like inputs)."""
    if not text:
        return ""
    return jaconv.kata2hira(text)
