"""Static pitch-spelling tables.

The tables in this module are computed once at import time and exposed as
read-only mappings. They replace the three parallel "sharp / flat / other"
name arrays a MIDI-indexed lookup would otherwise need: :data:`SPELLING_TABLE`
is keyed by ``(midi_number, letter)`` and holds the single spelling of that
pitch which uses ``letter``, or nothing when more than two accidentals would
be required.

Octave numbers follow scientific pitch notation with ``C4 == 60``. The octave
belongs to the *letter*, so ``B#3`` and ``C4`` share MIDI number 60 while
``Cb5`` and ``B4`` share 71.

Example
-------
>>> SPELLING_TABLE[(61, "D")]
PitchName(letter='D', accidental=<Accidental.FLAT: 'b'>, octave=4)
>>> str(SPELLING_TABLE[(60, "B")])
'B#3'
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from numbers import Integral
from types import MappingProxyType
from typing import Dict, Mapping, Optional, Tuple

from .errors import InvalidPitchName

__all__ = [
    "MIDI_MIN",
    "MIDI_MAX",
    "LETTERS",
    "NATURAL_PITCH_CLASS",
    "PITCH_CLASS",
    "SHARP_NAMES",
    "SPELLING_TABLE",
    "Accidental",
    "PitchName",
]

MIDI_MIN = 0
MIDI_MAX = 127

# Letter names in cyclic order starting from A. Scale-degree arithmetic walks
# this sequence, wrapping from G back to A.
LETTERS = "ABCDEFG"

NATURAL_PITCH_CLASS: Mapping[str, int] = MappingProxyType(
    {"C": 0, "D": 2, "E": 4, "F": 5, "G": 7, "A": 9, "B": 11}
)

# Sharp spelling for each pitch class. Used wherever letter fidelity is not
# required (transposition, degraded spellings, plain MIDI-to-name output).
SHARP_NAMES: Tuple[str, ...] = (
    "C", "C#", "D", "D#", "E", "F", "F#", "G", "G#", "A", "A#", "B",
)


class Accidental(Enum):
    """Accidental attached to a letter name or a scale degree."""

    NONE = ""
    SHARP = "#"
    FLAT = "b"
    DOUBLE_SHARP = "x"
    DOUBLE_FLAT = "bb"

    @property
    def shift(self) -> int:
        """Signed half-step adjustment applied by this accidental."""

        return _SHIFTS[self.value]

    @classmethod
    def from_symbol(cls, symbol: str) -> "Accidental":
        """Return the accidental written as ``symbol`` (``##`` means ``x``)."""

        return cls("x" if symbol == "##" else symbol)

    @classmethod
    def from_shift(cls, shift: int) -> Optional["Accidental"]:
        """Return the accidental for ``shift`` or ``None`` beyond two steps."""

        for accidental in cls:
            if accidental.shift == shift:
                return accidental
        return None


_SHIFTS: Dict[str, int] = {"": 0, "#": 1, "b": -1, "x": 2, "bb": -2}


@dataclass(frozen=True)
class PitchName:
    """A spelled pitch: letter, accidental and octave."""

    letter: str
    accidental: Accidental = Accidental.NONE
    octave: int = 4

    def __post_init__(self) -> None:
        if (
            self.letter not in NATURAL_PITCH_CLASS
            or not isinstance(self.accidental, Accidental)
            or not isinstance(self.octave, Integral)
            or isinstance(self.octave, bool)
        ):
            raise InvalidPitchName(f"{self.letter!r}, {self.accidental!r}, {self.octave!r}")

    @property
    def key_name(self) -> str:
        """Letter plus accidental without the octave, e.g. ``Eb``."""

        return f"{self.letter}{self.accidental.value}"

    @property
    def pitch_class(self) -> int:
        return (NATURAL_PITCH_CLASS[self.letter] + self.accidental.shift) % 12

    @property
    def midi(self) -> int:
        """Absolute MIDI number, which may fall outside ``0-127``."""

        return (
            (self.octave + 1) * 12
            + NATURAL_PITCH_CLASS[self.letter]
            + self.accidental.shift
        )

    def __str__(self) -> str:
        return f"{self.letter}{self.accidental.value}{self.octave}"


# Pitch class of every letter/accidental combination (35 spellings), used to
# resolve bare key names such as ``Bbb`` or ``Fx``.
PITCH_CLASS: Mapping[str, int] = MappingProxyType(
    {
        f"{letter}{accidental.value}": (natural + accidental.shift) % 12
        for letter, natural in NATURAL_PITCH_CLASS.items()
        for accidental in Accidental
    }
)


def _spell(midi: int, letter: str) -> Optional[PitchName]:
    """Return the spelling of ``midi`` that uses ``letter``, if one exists."""

    natural = NATURAL_PITCH_CLASS[letter]
    # Signed distance from the nearest natural ``letter`` folded into -6..5.
    shift = (midi - natural + 6) % 12 - 6
    accidental = Accidental.from_shift(shift)
    if accidental is None:
        return None
    octave = (midi - shift - natural) // 12 - 1
    return PitchName(letter, accidental, octave)


def _build_spelling_table() -> Mapping[Tuple[int, str], PitchName]:
    table: Dict[Tuple[int, str], PitchName] = {}
    for midi in range(MIDI_MIN, MIDI_MAX + 1):
        for letter in LETTERS:
            spelled = _spell(midi, letter)
            if spelled is not None:
                table[(midi, letter)] = spelled
    return MappingProxyType(table)


SPELLING_TABLE: Mapping[Tuple[int, str], PitchName] = _build_spelling_table()
