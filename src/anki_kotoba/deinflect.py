"""Deinflection reason codes and their display labels.

Codes follow the dictionary engine's reason enumeration; a chain lists the
transformations from the looked-up surface form back to the dictionary form.
"""

from __future__ import annotations

import re
from enum import IntEnum
from typing import Iterable, Sequence

CHAIN_SEPARATOR = " « "

_CAMEL_RE = re.compile(r"(?<!^)(?=[A-Z])")


class Reason(IntEnum):
    PolitePastNegative = 0
    PoliteNegative = 1
    PoliteVolitional = 2
    Chau = 3
    Sugiru = 4
    PolitePast = 5
    Tara = 6
    Tari = 7
    Causative = 8
    PotentialOrPassive = 9
    Toku = 10
    Sou = 11
    Tai = 12
    Polite = 13
    Respectful = 14
    Humble = 15
    HumbleOrKansaiDialect = 16
    Past = 17
    Negative = 18
    Passive = 19
    Ba = 20
    Volitional = 21
    Potential = 22
    EruUru = 23
    CausativePassive = 24
    Te = 25
    Zu = 26
    Imperative = 27
    MasuStem = 28
    Adv = 29
    Noun = 30
    ImperativeNegative = 31
    Continuous = 32
    Ki = 33
    SuruNoun = 34
    ZaruWoEnai = 35
    NegativeTe = 36
    Irregular = 37

    @property
    def label(self) -> str:
        # PolitePastNegative -> "polite past negative"
        return _CAMEL_RE.sub(" ", self.name).lower()


def reason_label(code: int) -> str:
    """Label for a reason code; unknown codes render as their raw value."""
    try:
        return Reason(code).label
    except ValueError:
        return str(code)


def render_reason_chains(chains: Iterable[Sequence[int]]) -> str:
    return ", ".join(
        CHAIN_SEPARATOR.join(reason_label(code) for code in chain)
        for chain in chains
    )
