"""Utility functions for translating note names to MIDI numbers and back.

This module groups helpers dealing with note representation conversions,
including the pitch namer used by the formula builders: given an absolute
pitch and the letter a formula position expects, :func:`name_for` returns the
one enharmonic spelling that uses that letter.

Example
-------
>>> from scale_degree.note_utils import note_to_midi, name_for
>>> note_to_midi("C4")
60
>>> str(name_for(63, "E").pitch)
'Eb4'
"""

# Modification Summary
# ---------------------
# * ``note_to_midi`` accepts double accidentals (``x``, ``##``, ``bb``) and
#   computes the MIDI number from the letter and accidental, so spellings
#   such as ``B#3`` and ``Cb5`` land in the octave their letter belongs to.
# * Out-of-range values raise :class:`PitchOutOfRange` and malformed names
#   :class:`InvalidPitchName`; both are ``ValueError`` subclasses.
# * ``name_for`` flags a degraded sharp spelling when the expected letter
#   cannot spell a pitch.

from __future__ import annotations

import logging
import re
from functools import lru_cache
from typing import List, NamedTuple, Union

from .errors import InvalidPitchName, PitchOutOfRange
from .pitch_tables import (
    LETTERS,
    MIDI_MAX,
    MIDI_MIN,
    SHARP_NAMES,
    SPELLING_TABLE,
    Accidental,
    PitchName,
)

__all__ = [
    "SpelledPitch",
    "check_midi_range",
    "parse_pitch_name",
    "note_to_midi",
    "midi_to_note",
    "midi_to_pitch_name",
    "name_for",
    "enharmonic_spellings",
    "get_interval",
]

_NOTE_RE = re.compile(r"([A-Ga-g])(bb|b|##|#|x)?(-?\d+)")


class SpelledPitch(NamedTuple):
    """Result of :func:`name_for`.

    ``degraded`` is ``True`` when no spelling with the expected letter exists
    and the sharp spelling was substituted.
    """

    pitch: PitchName
    degraded: bool = False


def check_midi_range(midi_note: int) -> int:
    """Return ``midi_note`` unchanged or raise :class:`PitchOutOfRange`."""

    if not MIDI_MIN <= midi_note <= MIDI_MAX:
        raise PitchOutOfRange(midi_note)
    return midi_note


@lru_cache(maxsize=None)
def parse_pitch_name(note: str) -> PitchName:
    """Split a note string such as ``Ebb3`` into a :class:`PitchName`.

    The letter may be lowercase; octaves may be negative or contain multiple
    digits. No range check is applied here.
    """

    match = _NOTE_RE.fullmatch(note.strip()) if isinstance(note, str) else None
    if not match:
        logging.error("Invalid note format: %s", note)
        raise InvalidPitchName(note)
    letter, accidental, octave = match.groups()
    return PitchName(letter.upper(), Accidental.from_symbol(accidental or ""), int(octave))


def note_to_midi(note: Union[str, PitchName]) -> int:
    """Convert a note such as ``C#4`` into a MIDI number.

    Parameters
    ----------
    note:
        Note name including octave, or an already parsed :class:`PitchName`.

    Returns
    -------
    int
        MIDI note number in the range ``0-127``.

    Raises
    ------
    InvalidPitchName
        If ``note`` is not properly formatted.
    PitchOutOfRange
        If the computed MIDI value falls outside ``0-127``.
    """

    pitch = note if isinstance(note, PitchName) else parse_pitch_name(note)
    midi_val = pitch.midi

    # Typical cases:
    #   * ``C-1`` -> 0 (lower boundary)
    #   * ``G9``  -> 127 (upper boundary)
    # ``Cb-1`` and ``G#9`` fall just outside and raise.
    if not MIDI_MIN <= midi_val <= MIDI_MAX:
        logging.error("MIDI value out of range: %s -> %d", note, midi_val)
        raise PitchOutOfRange(midi_val)
    return midi_val


def midi_to_pitch_name(midi_note: int) -> PitchName:
    """Return the sharp spelling of ``midi_note`` as a :class:`PitchName`."""

    check_midi_range(midi_note)
    name = SHARP_NAMES[midi_note % 12]
    accidental = Accidental.SHARP if name.endswith("#") else Accidental.NONE
    return PitchName(name[0], accidental, midi_note // 12 - 1)


def midi_to_note(midi_note: int) -> str:
    """Convert a MIDI number into a note name using sharps.

    Examples
    --------
    >>> midi_to_note(60)
    'C4'
    >>> midi_to_note(61)
    'C#4'
    >>> midi_to_note(-1)
    Traceback (most recent call last):
        ...
    scale_degree.errors.PitchOutOfRange: MIDI note -1 out of range 0-127
    """

    return str(midi_to_pitch_name(midi_note))


def name_for(midi_note: int, letter: str) -> SpelledPitch:
    """Spell ``midi_note`` with ``letter``.

    Parameters
    ----------
    midi_note:
        Absolute pitch in the range ``0-127``.
    letter:
        Expected diatonic letter, ``A`` through ``G``.

    Returns
    -------
    SpelledPitch
        The spelling using ``letter``. When that would need more than two
        accidentals the sharp spelling is returned with ``degraded=True`` and
        a warning is logged.

    Raises
    ------
    PitchOutOfRange
        If ``midi_note`` lies outside ``0-127``.
    """

    check_midi_range(midi_note)
    spelled = SPELLING_TABLE.get((midi_note, letter))
    if spelled is not None:
        return SpelledPitch(spelled)

    fallback = midi_to_pitch_name(midi_note)
    logging.warning(
        "No spelling of MIDI %d uses the letter %s; falling back to %s",
        midi_note,
        letter,
        fallback,
    )
    return SpelledPitch(fallback, degraded=True)


def enharmonic_spellings(midi_note: int) -> List[PitchName]:
    """Return every spelling of ``midi_note`` with at most two accidentals."""

    check_midi_range(midi_note)
    return [
        SPELLING_TABLE[(midi_note, letter)]
        for letter in LETTERS
        if (midi_note, letter) in SPELLING_TABLE
    ]


def get_interval(note1: str, note2: str) -> int:
    """Return the interval between ``note1`` and ``note2`` in semitones."""

    return abs(note_to_midi(note1) - note_to_midi(note2))
