"""Write spelled notes and chords to a MIDI file.

``create_midi_file`` takes pitch groups, a single note or a chord per step,
so scales, voicings and progressions share one writer. The destination
directory is created automatically. ``mido`` is imported inside the function
so the engine loads even when the MIDI dependency is missing.

Each group sounds for the same number of beats and groups follow one another
without gaps. Timing from a rhythm template is not applied here; callers that
need it hand the ``(durations, pitch_groups)`` pair to their own sequencer.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import TYPE_CHECKING, List, Sequence, Union

if TYPE_CHECKING:
    from mido import MidiFile

from .note_utils import note_to_midi

__all__ = ["create_midi_file"]

TICKS_PER_BEAT = 480

PitchGroup = Union[str, Sequence[str]]


def create_midi_file(
    pitch_groups: Sequence[PitchGroup],
    output_file: str,
    *,
    bpm: int = 120,
    beats: float = 1.0,
    program: int = 0,
    velocity: int = 64,
) -> "MidiFile":
    """Write ``pitch_groups`` to ``output_file`` as a single-track MIDI file.

    Parameters
    ----------
    pitch_groups:
        Sequence of note names (``"C4"``) or chords (``["C4", "E4", "G4"]``).
    output_file:
        Destination path. Missing parent directories are created.
    bpm:
        Tempo in beats per minute.
    beats:
        Length of every group in beats.
    program:
        General MIDI program number for the track.
    velocity:
        Note-on velocity.

    Returns
    -------
    MidiFile
        In-memory representation of the written file.

    Raises
    ------
    ValueError
        If ``bpm`` or ``beats`` is not positive or ``pitch_groups`` is empty.
    InvalidPitchName, PitchOutOfRange
        If a note cannot be converted to a MIDI number.
    ImportError
        If ``mido`` is not installed.
    """
    try:
        import mido
        from mido import Message, MidiFile, MidiTrack
    except ModuleNotFoundError as exc:
        raise ImportError(
            "mido is required to create MIDI files; install it with 'pip install mido'"
        ) from exc

    if bpm <= 0:
        raise ValueError("bpm must be a positive integer")
    if beats <= 0:
        raise ValueError("beats must be positive")
    if not pitch_groups:
        raise ValueError("pitch_groups must contain at least one note")

    # Convert everything first so a bad note never leaves a half-written file.
    groups: List[List[int]] = []
    for group in pitch_groups:
        notes = [group] if isinstance(group, str) else list(group)
        if not notes:
            raise ValueError("pitch groups must not be empty")
        groups.append([note_to_midi(note) for note in notes])

    mid = MidiFile(ticks_per_beat=TICKS_PER_BEAT)
    track = MidiTrack()
    mid.tracks.append(track)
    track.append(mido.MetaMessage("set_tempo", tempo=mido.bpm2tempo(bpm)))
    track.append(Message("program_change", program=program, time=0))

    step_ticks = int(beats * TICKS_PER_BEAT)
    for midis in groups:
        for midi_note in midis:
            track.append(Message("note_on", note=midi_note, velocity=velocity, time=0))
        # Only the first note-off carries the delta; the rest release together.
        for index, midi_note in enumerate(midis):
            track.append(
                Message(
                    "note_off",
                    note=midi_note,
                    velocity=velocity,
                    time=step_ticks if index == 0 else 0,
                )
            )

    Path(output_file).expanduser().parent.mkdir(parents=True, exist_ok=True)
    mid.save(output_file)
    logging.info("MIDI file saved to %s", output_file)
    return mid
