"""Sense list serialization into the glossary strings used by card templates.

Three renderings are produced:
- full HTML: tag parentheticals, glosses, and the sense note
- brief HTML: glosses only
- plain text: glosses only, numbered one per line

Dictionary text is inserted as-is (no HTML escaping) so the output matches
what Yomitan-style templates already expect.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import List, Sequence

from .entries import Sense

TRADEMARK = "™"
NATIVE_BULLET = "• "


@dataclass(frozen=True)
class GlossarySet:
    """Every glossary rendering for one sense list.

    Attributes:
        full: Full HTML for all senses
        brief: Brief HTML for all senses
        plain: Plain text for all senses
        first_full: Full HTML for the first sense only
        first_brief: Brief form of the first sense only
    """
    full: str
    brief: str
    plain: str
    first_full: str
    first_brief: str


def glosses_to_str(sense: Sense) -> str:
    return "; ".join(g.text + TRADEMARK if g.trademark else g.text for g in sense.glosses)


def serialize_sense_full(sense: Sense) -> str:
    parts: List[str] = []
    if sense.pos:
        parts.append(f"<i>({', '.join(sense.pos)})</i>")
    if sense.field:
        parts.append(f"({', '.join(sense.field)})")
    if sense.misc:
        parts.append(f"({', '.join(sense.misc)})")
    parts.append(glosses_to_str(sense))
    if sense.info:
        parts.append(f"({sense.info})")
    return " ".join(parts)


def serialize_sense_brief(sense: Sense) -> str:
    return glosses_to_str(sense)


def serialize_senses_html(senses: Sequence[Sense], brief: bool = False) -> str:
    """Render senses as HTML, numbering English senses and bulleting others.

    Native-language senses do not consume a number.
    """
    if not senses:
        return ""
    render = serialize_sense_brief if brief else serialize_sense_full
    if len(senses) == 1:
        return render(senses[0])

    parts: List[str] = []
    number = 1
    for sense in senses:
        if sense.is_native_language:
            prefix = NATIVE_BULLET
        else:
            prefix = f"({number}) "
            number += 1
        parts.append(prefix + render(sense))
    return "<br>".join(parts)


def serialize_senses_plain(senses: Sequence[Sense]) -> str:
    """Render senses as plain text, one per line, numbered by position."""
    if not senses:
        return ""
    numbered = len(senses) > 1
    return "\n".join(
        (f"({i}) " if numbered else "") + glosses_to_str(sense)
        for i, sense in enumerate(senses, start=1)
    )


def serialize_glossary(senses: Sequence[Sense]) -> GlossarySet:
    first = senses[0] if senses else None
    return GlossarySet(
        full=serialize_senses_html(senses, brief=False),
        brief=serialize_senses_html(senses, brief=True),
        plain=serialize_senses_plain(senses),
        first_full=serialize_sense_full(first) if first else "",
        first_brief=serialize_sense_brief(first) if first else "",
    )
