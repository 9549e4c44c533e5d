"""Unit tests for ``midi_io``'s behaviour and error handling.

The suite verifies that ``create_midi_file`` writes one note-on per pitch,
keeps chord tones together, validates its timing arguments and provides a
helpful message when the ``mido`` dependency is absent.

Example
-------
>>> from scale_degree import midi_io
>>> midi_io.create_midi_file(["C4", ["C4", "E4", "G4"]], "out.mid")
"""

from __future__ import annotations

import builtins
import importlib
import sys
from pathlib import Path

import pytest

# Ensure the package is importable regardless of the current working directory
sys.path.insert(0, str(Path(__file__).resolve().parents[1]))

midi_io = importlib.import_module("scale_degree.midi_io")
scale_degree = importlib.import_module("scale_degree")


def _notes_on(mid):
    return [msg for msg in mid.tracks[0] if msg.type == "note_on"]


def test_create_midi_file_returns_midifile(tmp_path):
    """``create_midi_file`` should return the ``MidiFile`` object it writes."""

    from mido import MidiFile

    out = tmp_path / "scale.mid"
    mid = midi_io.create_midi_file(["C4", "D4"], str(out))

    assert isinstance(mid, MidiFile)
    assert out.exists()


def test_one_note_on_per_pitch(tmp_path):
    notes = scale_degree.build_scale_notes("1 2 b3 4 5 b6 7 8", "G4")
    mid = midi_io.create_midi_file(notes, str(tmp_path / "g.mid"))
    assert [msg.note for msg in _notes_on(mid)] == [67, 69, 70, 72, 74, 75, 78, 79]


def test_chord_tones_start_together(tmp_path):
    chord = scale_degree.build_chord_notes("5 9 3 7", "D3")
    mid = midi_io.create_midi_file([chord, chord], str(tmp_path / "c.mid"), beats=2)

    ons = _notes_on(mid)
    assert [msg.note for msg in ons] == [57, 64, 66, 73] * 2
    assert all(msg.time == 0 for msg in ons)
    offs = [msg for msg in mid.tracks[0] if msg.type == "note_off"]
    assert [msg.time for msg in offs[:4]] == [960, 0, 0, 0]


def test_tempo_and_program(tmp_path):
    import mido

    mid = midi_io.create_midi_file(["C4"], str(tmp_path / "t.mid"), bpm=90, program=33)
    tempo = [msg for msg in mid.tracks[0] if msg.type == "set_tempo"]
    program = [msg for msg in mid.tracks[0] if msg.type == "program_change"]
    assert tempo[0].tempo == mido.bpm2tempo(90)
    assert program[0].program == 33


def test_creates_parent_directory(tmp_path):
    out = tmp_path / "nested" / "dir" / "song.mid"
    midi_io.create_midi_file(["C4"], str(out))
    assert out.exists()


@pytest.mark.parametrize(
    "kwargs, message",
    [
        ({"bpm": 0}, "bpm"),
        ({"bpm": -60}, "bpm"),
        ({"beats": 0}, "beats"),
    ],
)
def test_invalid_timing(kwargs, message, tmp_path):
    with pytest.raises(ValueError, match=message):
        midi_io.create_midi_file(["C4"], str(tmp_path / "x.mid"), **kwargs)


def test_empty_groups(tmp_path):
    with pytest.raises(ValueError, match="at least one note"):
        midi_io.create_midi_file([], str(tmp_path / "x.mid"))


def test_empty_chord_in_groups(tmp_path):
    """A step without notes is rejected rather than silently dropped."""

    out = tmp_path / "gap.mid"
    with pytest.raises(ValueError, match="must not be empty"):
        midi_io.create_midi_file(["C4", [], "E4"], str(out))
    assert not out.exists()


def test_every_step_adds_its_length(tmp_path):
    mid = midi_io.create_midi_file(["C4", ["D4", "F4"], "E4"], str(tmp_path / "len.mid"))
    assert sum(msg.time for msg in mid.tracks[0]) == 3 * midi_io.TICKS_PER_BEAT


def test_bad_note_leaves_no_file(tmp_path):
    out = tmp_path / "bad.mid"
    with pytest.raises(scale_degree.InvalidPitchName):
        midi_io.create_midi_file(["C4", "H4"], str(out))
    assert not out.exists()


def test_create_midi_file_missing_mido(monkeypatch, tmp_path):
    """Absent ``mido`` should raise ``ImportError`` with install guidance.

    The test removes ``mido`` from ``sys.modules`` and patches ``__import__`` to
    raise ``ModuleNotFoundError`` when ``mido`` is requested.
    """

    monkeypatch.delitem(sys.modules, "mido", raising=False)

    original_import = builtins.__import__

    def fake_import(name, globals=None, locals=None, fromlist=(), level=0):
        if name == "mido":
            raise ModuleNotFoundError("No module named 'mido'")
        return original_import(name, globals, locals, fromlist, level)

    monkeypatch.setattr(builtins, "__import__", fake_import)

    with pytest.raises(ImportError, match="pip install mido"):
        midi_io.create_midi_file(["C4"], str(tmp_path / "song.mid"))
