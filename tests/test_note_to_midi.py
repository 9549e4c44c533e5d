"""Unit tests for note ↔ MIDI conversion helpers.

These tests exercise both :func:`note_to_midi` and :func:`midi_to_note`. The
goal is to ensure conversions place every spelling in the octave its letter
belongs to, while invalid inputs result in descriptive errors instead of
silent failures."""

import importlib
import logging
import sys
from pathlib import Path

import pytest

sys.path.insert(0, str(Path(__file__).resolve().parents[1]))

scale_degree = importlib.import_module("scale_degree")
note_to_midi = scale_degree.note_to_midi
midi_to_note = scale_degree.midi_to_note
note_utils_mod = importlib.import_module("scale_degree.note_utils")


def test_sharp_conversion():
    """Sharp notes convert to their expected MIDI numbers."""
    assert note_to_midi('C#4') == 61


def test_flat_conversion():
    """Flat notes produce the same value as their enharmonic sharps."""
    assert note_to_midi('Db4') == 61


def test_double_accidentals():
    assert note_to_midi('Cx4') == 62
    assert note_to_midi('C##4') == 62
    assert note_to_midi('Dbb4') == 60


def test_octave_belongs_to_letter():
    """``B#3`` is middle C and ``Cb5`` is the B just below ``C5``."""
    assert note_to_midi('B#3') == 60
    assert note_to_midi('Cb5') == 71
    assert note_to_midi('Cb4') == 59


def test_lowercase_letter_accepted():
    assert note_to_midi('eb3') == 51


def test_multi_digit_octaves_and_range_validation():
    """Multi-digit octaves parse correctly and out-of-range values error."""

    assert note_to_midi('C8') == 108
    assert note_to_midi('Gb9') == 126

    with pytest.raises(ValueError, match="out of range"):
        note_to_midi('C10')
    with pytest.raises(ValueError, match="out of range"):
        note_to_midi('Gb11')


def test_negative_octaves_raise_value_error():
    """Notes mapping below MIDI 0 raise instead of clamping."""

    assert note_to_midi('C-1') == 0
    with pytest.raises(scale_degree.PitchOutOfRange):
        note_to_midi('Cb-1')
    with pytest.raises(ValueError, match="out of range"):
        note_to_midi('C-2')


@pytest.mark.parametrize("bad", ["H4", "C", "4", "C#", "Cbbb4", ""])
def test_invalid_note_format_logs_and_raises(bad, caplog):
    with caplog.at_level(logging.ERROR):
        with pytest.raises(scale_degree.InvalidPitchName, match="Invalid note format"):
            note_to_midi(bad)
    assert "Invalid note format" in caplog.text


def test_midi_to_note_uses_sharps():
    assert midi_to_note(60) == "C4"
    assert midi_to_note(61) == "C#4"
    assert midi_to_note(0) == "C-1"
    assert midi_to_note(127) == "G9"


@pytest.mark.parametrize("value", [-1, 128])
def test_midi_to_note_out_of_range(value):
    with pytest.raises(scale_degree.PitchOutOfRange) as excinfo:
        midi_to_note(value)
    assert excinfo.value.value == value


def test_name_for_uses_expected_letter():
    assert str(note_utils_mod.name_for(63, "E").pitch) == "Eb4"
    assert str(note_utils_mod.name_for(63, "D").pitch) == "D#4"
    assert str(note_utils_mod.name_for(61, "B").pitch) == "Bx3"
    assert note_utils_mod.name_for(63, "E").degraded is False


def test_name_for_degrades_with_warning(caplog):
    """Without a two-accidental spelling the sharp name is flagged."""

    with caplog.at_level(logging.WARNING):
        spelled = note_utils_mod.name_for(60, "G")
    assert spelled.degraded is True
    assert str(spelled.pitch) == "C4"
    assert "falling back" in caplog.text


def test_enharmonic_spellings():
    names = [str(p) for p in note_utils_mod.enharmonic_spellings(60)]
    assert names == ["B#3", "C4", "Dbb4"]
    # G#/Ab has no third spelling within two accidentals.
    assert [str(p) for p in note_utils_mod.enharmonic_spellings(68)] == ["Ab4", "G#4"]
    with pytest.raises(scale_degree.PitchOutOfRange):
        note_utils_mod.enharmonic_spellings(128)


def test_get_interval():
    assert note_utils_mod.get_interval("C4", "G4") == 7
    assert note_utils_mod.get_interval("B#3", "C4") == 0
    assert note_utils_mod.get_interval("B#3", "Dbb4") == 0
    assert note_utils_mod.get_interval("G4", "C4") == 7


def test_pitch_name_rejects_bad_fields():
    with pytest.raises(scale_degree.InvalidPitchName):
        scale_degree.PitchName("c", scale_degree.Accidental.NONE, 4)
    with pytest.raises(scale_degree.InvalidPitchName):
        scale_degree.PitchName("C", "#", 4)
    with pytest.raises(scale_degree.InvalidPitchName):
        scale_degree.PitchName("C", scale_degree.Accidental.NONE, 4.0)
