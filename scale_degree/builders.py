"""Build note-name, MIDI and frequency arrays from formulas.

These are the entry points most callers need. Each builder resolves a formula
into chromatic offsets, anchors them on a root with an octave, derives the
expected letter of every position and finally picks the spelling of each
absolute pitch that uses that letter.

Example
-------
>>> build_scale_notes("1 2 b3 4 5 b6 7 8", "G4")
['G4', 'A4', 'Bb4', 'C5', 'D5', 'Eb5', 'F#5', 'G5']
>>> build_chord_notes("1 b3 5", "C#4")
['C#4', 'E4', 'G#4']
>>> build_chord_notes("5 9 3 7", "D3")
['A3', 'E4', 'F#4', 'C#5']
"""

from __future__ import annotations

from typing import List, NamedTuple, Sequence, Tuple, Union

import numpy as np

from .letters import expected_letters
from .lexicon import Formula, parse_formula
from .note_utils import (
    SpelledPitch,
    check_midi_range,
    midi_to_pitch_name,
    name_for,
    note_to_midi,
    parse_pitch_name,
)
from .pitch_tables import PitchName
from .resolver import stack_ascending

__all__ = [
    "ChordVoicingEntry",
    "spell_formula",
    "build_scale_notes",
    "build_chord_notes",
    "build_entry_notes",
    "build_midi_array",
    "build_chord_midi_array",
    "build_chord_array",
    "build_frequency_array",
    "build_chord_frequency_array",
    "midi_to_frequency",
]

AnchorRoot = Union[str, PitchName, int]

# Concert pitch reference for :func:`midi_to_frequency`.
A4_MIDI = 69
A4_FREQUENCY = 440.0


class ChordVoicingEntry(NamedTuple):
    """One chord of a progression, e.g. ``("Dm7", "D3", "1 b3 b7 9")``."""

    label: str
    root: str
    voicing: str


def _anchor(root: AnchorRoot) -> Tuple[int, PitchName]:
    """Return the MIDI number and spelled name of ``root``.

    Integer roots are spelled with sharps for letter counting.
    """

    if isinstance(root, int) and not isinstance(root, bool):
        return check_midi_range(root), midi_to_pitch_name(root)
    pitch = root if isinstance(root, PitchName) else parse_pitch_name(root)
    return note_to_midi(pitch), pitch


def _absolute_pitches(
    formula: Formula, root: AnchorRoot, chord: bool
) -> Tuple[List[int], List[str]]:
    tokens = parse_formula(formula)
    offsets = stack_ascending(tokens) if chord else [t.half_steps for t in tokens]
    root_midi, root_pitch = _anchor(root)
    # Validate every pitch before any naming so a bad position never yields a
    # partially built result.
    midis = [check_midi_range(root_midi + offset) for offset in offsets]
    return midis, expected_letters(root_pitch, tokens)


def spell_formula(
    formula: Formula, root: AnchorRoot, *, chord: bool = False
) -> List[SpelledPitch]:
    """Return the spelled pitches of ``formula`` above ``root``.

    Parameters
    ----------
    formula:
        Scale-degree formula, e.g. ``"1 2 b3 4 5"``.
    root:
        Root with octave (``"C4"``), a :class:`PitchName` or a MIDI number.
    chord:
        When ``True`` the formula is read as an ascending chord voicing.

    Returns
    -------
    List[SpelledPitch]
        One entry per token in formula order. Entries whose ``degraded`` flag
        is set fell back to a sharp spelling.

    Raises
    ------
    UnknownDegree, MalformedFormula, InvalidPitchName, PitchOutOfRange
    """

    midis, letters = _absolute_pitches(formula, root, chord)
    return [name_for(midi, letter) for midi, letter in zip(midis, letters)]


def build_scale_notes(formula: Formula, root: AnchorRoot) -> List[str]:
    """Return note names for scale ``formula`` starting on ``root``."""

    return [str(spelled.pitch) for spelled in spell_formula(formula, root)]


def build_chord_notes(voicing: Formula, root: AnchorRoot) -> List[str]:
    """Return ascending note names for chord ``voicing`` on ``root``."""

    return [str(spelled.pitch) for spelled in spell_formula(voicing, root, chord=True)]


def build_entry_notes(entry: ChordVoicingEntry) -> List[str]:
    return build_chord_notes(entry.voicing, entry.root)


def build_midi_array(formula: Formula, root: AnchorRoot) -> List[int]:
    """Return MIDI numbers for scale ``formula`` starting on ``root``."""

    return _absolute_pitches(formula, root, chord=False)[0]


def build_chord_midi_array(voicing: Formula, root: AnchorRoot) -> List[int]:
    return _absolute_pitches(voicing, root, chord=True)[0]


def build_chord_array(
    voicings: Union[str, Sequence[Formula]], root: AnchorRoot
) -> List[List[str]]:
    """Return one ascending chord per entry of ``voicings``, all on ``root``.

    A single voicing string is accepted as a one-chord list.
    """

    if isinstance(voicings, str):
        voicings = [voicings]
    return [build_chord_notes(voicing, root) for voicing in voicings]


def midi_to_frequency(midi_notes: Sequence[int]) -> np.ndarray:
    """Return equal-tempered frequencies in Hz for ``midi_notes`` (A4 = 440)."""

    midis = np.asarray(midi_notes, dtype=np.float64)
    return A4_FREQUENCY * np.power(2.0, (midis - A4_MIDI) / 12.0)


def build_frequency_array(formula: Formula, root: AnchorRoot) -> np.ndarray:
    """Return frequencies for scale ``formula`` starting on ``root``."""

    return midi_to_frequency(build_midi_array(formula, root))


def build_chord_frequency_array(
    voicings: Union[str, Sequence[Formula]], root: AnchorRoot
) -> List[np.ndarray]:
    if isinstance(voicings, str):
        voicings = [voicings]
    return [midi_to_frequency(build_chord_midi_array(v, root)) for v in voicings]
