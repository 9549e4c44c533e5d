"""Chromatic transposition of note-name sequences.

Transposition here answers "same shape, different starting pitch": every note
moves by the same number of half-steps and is re-spelled with sharps. Letter
fidelity is not preserved, so ``transpose(["C4", "E4", "G4"], 3)`` sounds an
E-flat major triad but is written ``D#4 G4 A#4``. Use the builders when the
diatonic spelling matters.

Example
-------
>>> transpose(["C3", "D3", "E3"], -3)
['A2', 'B2', 'C#3']
"""

from __future__ import annotations

from numbers import Integral
from typing import Iterable, List, Union

from .errors import ScaleDegreeError
from .note_utils import check_midi_range, midi_to_note, note_to_midi
from .pitch_tables import PitchName

__all__ = ["transpose"]


def transpose(notes: Iterable[Union[str, PitchName]], half_steps: int) -> List[str]:
    """Return ``notes`` shifted by ``half_steps``.

    Parameters
    ----------
    notes:
        Note names with octaves, e.g. ``["C4", "Eb4"]``.
    half_steps:
        Signed distance in semitones. Positive values transpose up.

    Returns
    -------
    List[str]
        Sharp-spelled note names.

    Raises
    ------
    PitchOutOfRange
        If any shifted note leaves the MIDI range. Nothing is clamped.
    ScaleDegreeError
        If ``half_steps`` is not an integer.
    """

    if not isinstance(half_steps, Integral) or isinstance(half_steps, bool):
        raise ScaleDegreeError(f"half_steps must be an integer, got {half_steps!r}")
    half_steps = int(half_steps)
    shifted = [check_midi_range(note_to_midi(note) + half_steps) for note in notes]
    return [midi_to_note(midi) for midi in shifted]
