"""Scale-degree lexicon and token parser.

Formulas use the jazz convention for describing a scale relative to its root:
``"1 2 3 4 5 6 7 8"`` is a major scale and ``"1 b2 b3 4 5 b6 b7 8"`` a
phrygian one. Tokens are strings rather than numbers so they can carry
accidentals and octave markers:

* an optional octave marker, ``,`` (one octave down) or ``u`` (one octave up),
  which may be repeated (``,,5`` sits two octaves below the root's fifth);
* an optional accidental: ``#``, ``b``, ``x`` or ``##`` (double sharp) and
  ``bb`` (double flat);
* a numeral from 1 to 15, or one of the special tokens ``sus`` (suspended
  fourth), ``sus2`` and ``d7`` (diminished seventh).

Numerals beyond the octave continue the ascent so chord extensions need no
special casing: ``9`` is an octave plus a major second (14 half-steps),
``13`` an octave plus a major sixth (21).

Example
-------
>>> offset_of("b3")
3
>>> offset_of(",5")
-5
>>> parse_token("u#11").numeral
11
"""

from __future__ import annotations

import re
from collections.abc import Iterable
from dataclasses import dataclass
from functools import lru_cache
from types import MappingProxyType
from typing import Dict, List, Mapping, Tuple, Union

from .errors import MalformedFormula, UnknownDegree
from .pitch_tables import Accidental

__all__ = [
    "OCTAVE_UP",
    "OCTAVE_DOWN",
    "SCALE_DEGREE_TO_HALF_STEPS",
    "ScaleDegreeToken",
    "parse_token",
    "offset_of",
    "split_formula",
    "parse_formula",
]

OCTAVE_UP = "u"
OCTAVE_DOWN = ","

Formula = Union[str, Iterable]

# Half-steps above the root for each natural numeral.
_NATURAL_HALF_STEPS: Dict[int, int] = {
    1: 0,
    2: 2,
    3: 4,
    4: 5,
    5: 7,
    6: 9,
    7: 11,
    8: 12,
    9: 14,
    10: 16,
    11: 17,
    12: 19,
    13: 21,
    14: 23,
    15: 24,
}

# Special tokens map to ``(numeral, half_steps)``. The numeral decides which
# letter the note is spelled with: ``d7`` of C is ``Bbb``, not ``A``.
_SPECIAL_DEGREES: Dict[str, Tuple[int, int]] = {
    "sus": (4, 5),
    "sus2": (2, 2),
    "d7": (7, 9),
}


def _build_lexicon() -> Mapping[str, int]:
    table: Dict[str, int] = {}
    for numeral, half_steps in _NATURAL_HALF_STEPS.items():
        for accidental in Accidental:
            table[f"{accidental.value}{numeral}"] = half_steps + accidental.shift
    for token, (_numeral, half_steps) in _SPECIAL_DEGREES.items():
        table[token] = half_steps
    return MappingProxyType(table)


SCALE_DEGREE_TO_HALF_STEPS: Mapping[str, int] = _build_lexicon()

_TOKEN_RE = re.compile(
    r"(?P<octave>,+|u+)?"
    r"(?:(?P<special>sus2|sus|d7)|(?P<accidental>bb|b|##|#|x)?(?P<numeral>\d+))"
)


@dataclass(frozen=True)
class ScaleDegreeToken:
    """A parsed formula token.

    ``degree`` is the lexicon key (accidental plus numeral, or a special
    token) and ``octave_shift`` the signed number of octave markers.
    """

    text: str
    degree: str
    numeral: int
    accidental: Accidental = Accidental.NONE
    octave_shift: int = 0

    @property
    def half_steps(self) -> int:
        """Chromatic offset from the root including octave markers."""

        return SCALE_DEGREE_TO_HALF_STEPS[self.degree] + 12 * self.octave_shift


@lru_cache(maxsize=None)
def parse_token(text: str) -> ScaleDegreeToken:
    """Parse a single formula token.

    Parameters
    ----------
    text:
        Token such as ``"b3"``, ``",7"``, ``"u9"`` or ``"sus"``.

    Returns
    -------
    ScaleDegreeToken
        The token split into octave marker, accidental and numeral.

    Raises
    ------
    UnknownDegree
        If ``text`` does not follow the token grammar or names a degree the
        lexicon does not contain (``"16"``, ``"z3"``).
    """

    match = _TOKEN_RE.fullmatch(text)
    if not match:
        raise UnknownDegree(text)

    markers = match.group("octave") or ""
    octave_shift = -len(markers) if markers.startswith(OCTAVE_DOWN) else len(markers)

    special = match.group("special")
    if special is not None:
        numeral, _half_steps = _SPECIAL_DEGREES[special]
        return ScaleDegreeToken(text, special, numeral, Accidental.NONE, octave_shift)

    accidental = Accidental.from_symbol(match.group("accidental") or "")
    degree = f"{accidental.value}{match.group('numeral')}"
    if degree not in SCALE_DEGREE_TO_HALF_STEPS:
        raise UnknownDegree(text)
    return ScaleDegreeToken(
        text, degree, int(match.group("numeral")), accidental, octave_shift
    )


def offset_of(token: str) -> int:
    """Return the half-step offset of ``token`` relative to the root."""

    return parse_token(token).half_steps


def split_formula(formula: Formula) -> List[str]:
    """Return the tokens of ``formula``.

    ``formula`` may be a whitespace separated string or a sequence of token
    strings. Empty input raises :class:`MalformedFormula`.
    """

    if isinstance(formula, str):
        tokens = formula.split()
    elif isinstance(formula, Iterable):
        tokens = []
        for item in formula:
            if not isinstance(item, str) or not item.strip():
                raise MalformedFormula(formula, "tokens must be non-empty strings")
            tokens.append(item.strip())
    else:
        raise MalformedFormula(formula, "expected a string or a sequence of tokens")

    if not tokens:
        raise MalformedFormula(formula)
    return tokens


def parse_formula(formula: Formula) -> List[ScaleDegreeToken]:
    """Parse every token of ``formula``; any bad token aborts the whole call."""

    return [parse_token(token) for token in split_formula(formula)]
