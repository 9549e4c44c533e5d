"""Tests for scale-mode and chord-mode formula resolution.

Scale mode must preserve token order exactly, including descents below the
root. Chord mode must never produce a falling offset whatever order the
voicing lists its degrees in.
"""

import importlib
import itertools
import sys
from pathlib import Path

import pytest

sys.path.insert(0, str(Path(__file__).resolve().parents[1]))

resolver = importlib.import_module("scale_degree.resolver")
errors = importlib.import_module("scale_degree.errors")


def test_scale_mode_keeps_order():
    assert resolver.resolve_scale("1 b3 5 ,7") == [0, 3, 7, -1]
    assert resolver.resolve_scale("8 7 6 5") == [12, 11, 9, 7]


def test_chord_mode_stacks_voicing():
    """``5 9 3 7`` stacks the third above the ninth as a tenth."""
    assert resolver.resolve_chord("5 9 3 7") == [7, 14, 16, 23]


def test_chord_mode_keeps_first_offset():
    assert resolver.resolve_chord(",5 1 3") == [-5, 0, 4]
    assert resolver.resolve_chord("b7 3 13") == [10, 16, 21]


@pytest.mark.parametrize("order", list(itertools.permutations(["5", "9", "3", "7"])))
def test_chord_mode_is_non_decreasing(order):
    offsets = resolver.resolve_chord(list(order))
    assert offsets == sorted(offsets)
    # Each voice sits within an octave of the one below it.
    assert all(b - a < 12 for a, b in zip(offsets, offsets[1:]))


def test_unison_allowed_in_chord_mode():
    assert resolver.resolve_chord("1 1 8") == [0, 0, 12]


def test_bad_token_raises_without_partial_result():
    with pytest.raises(errors.UnknownDegree):
        resolver.resolve_scale("1 2 16")
    with pytest.raises(errors.MalformedFormula):
        resolver.resolve_chord("")
