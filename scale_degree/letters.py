"""Diatonic letter sequencing.

Every position of a formula is spelled with a letter fixed purely by counting
up from the root's letter: the third of any kind of D chord is an F of some
sort, the sixth of Bb is a G of some sort. Accidentals and octave markers do
not influence the letter, which is why ``b3`` and ``3`` share one.

Example
-------
>>> expected_letters("Eb4", "1 b3 5 b7 9")
['E', 'G', 'B', 'D', 'F']
"""

from __future__ import annotations

import re
from typing import List, Tuple, Union

from .errors import InvalidPitchName
from .lexicon import Formula, ScaleDegreeToken, parse_formula, parse_token
from .pitch_tables import LETTERS, Accidental, PitchName

__all__ = ["split_root", "root_letter", "expected_letter", "expected_letters"]

Root = Union[str, PitchName]

# A key such as ``Eb`` or a full pitch name such as ``Eb4``.
_ROOT_RE = re.compile(r"([A-Ga-g])(bb|b|##|#|x)?(-?\d+)?")


def split_root(root: Root) -> Tuple[str, Accidental]:
    """Return ``(letter, accidental)`` for ``root``, ignoring any octave."""

    if isinstance(root, PitchName):
        return root.letter, root.accidental
    match = _ROOT_RE.fullmatch(root.strip()) if isinstance(root, str) else None
    if not match:
        raise InvalidPitchName(root)
    return match.group(1).upper(), Accidental.from_symbol(match.group(2) or "")


def root_letter(root: Root) -> str:
    return split_root(root)[0]


def _letter_for(start: int, token: ScaleDegreeToken) -> str:
    # Numerals past the octave reduce modulo 7: 9 spells like 2, 13 like 6.
    return LETTERS[(start + token.numeral - 1) % len(LETTERS)]


def expected_letter(root: Root, token: Union[str, ScaleDegreeToken]) -> str:
    """Return the letter that spells scale degree ``token`` above ``root``."""

    if isinstance(token, str):
        token = parse_token(token)
    return _letter_for(LETTERS.index(root_letter(root)), token)


def expected_letters(root: Root, formula: Formula) -> List[str]:
    """Return the expected letter for each position of ``formula``."""

    start = LETTERS.index(root_letter(root))
    tokens = formula if _is_parsed(formula) else parse_formula(formula)
    return [_letter_for(start, token) for token in tokens]


def _is_parsed(formula: Formula) -> bool:
    return (
        isinstance(formula, (list, tuple))
        and bool(formula)
        and all(isinstance(token, ScaleDegreeToken) for token in formula)
    )
