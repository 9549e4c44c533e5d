"""Library of ready-made scale, bass-line and voicing formulas.

The formulas are plain strings in the token grammar of
:mod:`scale_degree.lexicon`, grouped by purpose. Callers may pass any of them
to the builders or supply their own; nothing in the engine depends on this
module beyond the II-V-I templates.

Example
-------
>>> formula_for("Dorian")
'1 2 b3 4 5 6 b7 8'
"""

from __future__ import annotations

from functools import lru_cache
from types import MappingProxyType
from typing import Mapping, Tuple

__all__ = [
    "SCALE_FORMULAS",
    "WALKING_BASS_FORMULAS",
    "CHORD_VOICINGS",
    "II_V_I_MAJOR_WALK_BASS",
    "II_V_I_MINOR_WALK_BASS",
    "formula_for",
    "formula_names",
]

SCALE_FORMULAS: Mapping[str, str] = MappingProxyType(
    {
        "major": "1 2 3 4 5 6 7 8",
        "natural_minor": "1 2 b3 4 5 b6 b7 8",
        "harmonic_minor": "1 2 b3 4 5 b6 7 8",
        "melodic_minor": "1 2 b3 4 5 6 7 8",
        "ionian": "1 2 3 4 5 6 7 8",
        "dorian": "1 2 b3 4 5 6 b7 8",
        "phrygian": "1 b2 b3 4 5 b6 b7 8",
        "lydian": "1 2 3 #4 5 6 7 8",
        "mixolydian": "1 2 3 4 5 6 b7 8",
        "aeolian": "1 2 b3 4 5 b6 b7 8",
        "locrian": "1 b2 b3 4 b5 b6 b7 8",
        # Modes of the parent major scale written from its root, so the
        # notes stay in the parent key while starting on another degree.
        "rel_dorian": "2 3 4 5 6 7 8 9",
        "rel_phrygian": "3 4 5 6 7 8 9 10",
        "rel_lydian": "4 5 6 7 8 9 10 11",
        "rel_mixolydian": ",5 ,6 ,7 1 2 3 4 5",
        "rel_aeolian": ",6 ,7 1 2 3 4 5 6",
        "rel_locrian": ",7 1 2 3 4 5 6 7",
        "min_pentatonic": "1 b3 4 5 b7 8",
        "maj_pentatonic": "1 2 3 5 6 8",
        "min_blues": "1 b3 4 b5 5 b7 8",
        "maj_blues": "1 2 b3 3 5 6 8",
    }
)

WALKING_BASS_FORMULAS: Mapping[str, str] = MappingProxyType(
    {
        "dom_walk_2bar_v1": "1 3 5 6 8 6 5 3",
        "dom_walk_2bar_v2": "1 3 5 6 b7 6 5 3",
        "dom_walk_2bar_v3": "8 b7 6 b6 5 4 b3 3",
        "dom_walk_2bar_v4": "1 8 b7 5 1 5 4 3",
        "dom_walk_2bar_v5": "1 3 4 #4 5 4 b3 2",
        "dom_walk_1bar_v1": "1 8 b7 5",
        "dom_walk_1bar_v2": "1 2 b3 3",
        "dom_walk_1bar_v3": "1 3 4 5",
        "dom_walk_1bar_v4": "1 3 5 6",
        "blues_turnaround_v1": "1 b7 6 b6 5 4 b3 2",
        "blues_turnaround_v2": "1 b7 6 b6 5 b3 2 b2",
        "blues_turnaround_v3": "1 3 4 #4 5 6 b7 7",
        "blues_turnaround_v4": "1 b7 6 b3 2 b6 5 b2",
        "blues_turnaround_v5": "1 #5 6 #1 2 #4 5 ,7",
    }
)

CHORD_VOICINGS: Mapping[str, str] = MappingProxyType(
    {
        "dom9_v1": "1 3 b7 9 12",
        "dom9_v2": "1 3 b7 9",
        "dom9_v3": "3 b7 9 12",
        "dom9_v4": "b7 10 12 15",
        "dom13_v1": "1 b7 10 13",
        "dom13_v2": "b7 10 13 15",
        "dom13_v3": "3 b7 9 13",
        "dom13_v4": "b7 10 13 u9",
    }
)

# Sixteen quarter notes: one bar of ii, one bar of V and two bars of I,
# written from the key's tonic.
II_V_I_MAJOR_WALK_BASS: Tuple[str, ...] = (
    "2 4 6 4 5 4 3 2 1 2 3 5 8 7 5 3",
    "2 1 ,7 ,6 ,5 ,6 ,b7 ,7 1 2 b3 3 1 ,7 ,6 ,5",
    "2 3 4 #4 5 6 b7 7 8 7 6 5 4 3 2 1",
    "2 1 ,7 ,6 ,5 4 3 2 1 ,7 ,6 ,5 ,6 3 2 1",
    "2 4 6 b6 5 4 2 ,7 1 3 5 4 3 2 1 3",
)

II_V_I_MINOR_WALK_BASS: Tuple[str, ...] = (
    "2 4 b6 4 5 4 b3 2 1 2 b3 5 8 5 4 b3",
    "2 4 5 b6 5 4 b3 2 1 b3 5 4 b3 2 1 ,5",
    "2 b3 4 #4 5 6 b7 7 8 b7 b6 5 4 b3 2 1",
    "2 1 ,b7 ,b6 ,5 4 b3 2 1 ,5 1 2 b3 5 4 b3",
    "2 4 b6 #4 5 4 2 ,7 1 b3 5 4 b3 2 1 b3",
)

_LIBRARY = {
    **SCALE_FORMULAS,
    **WALKING_BASS_FORMULAS,
    **CHORD_VOICINGS,
}


def formula_names() -> Tuple[str, ...]:
    """Return every named formula in the library, sorted."""

    return tuple(sorted(_LIBRARY))


@lru_cache(maxsize=None)
def formula_for(name: str) -> str:
    """Return the formula stored under ``name`` (case-insensitive).

    Raises
    ------
    ValueError
        If ``name`` is not in the library.
    """

    formula = _LIBRARY.get(name.strip().lower())
    if formula is None:
        raise ValueError(f"Unknown formula: {name}")
    return formula
