"""Chord progressions and walking bass lines built from formulas.

A rhythm template is a list of duration strings in the notation used by the
downstream timing layer (``"4n"`` quarter, ``"8n+4n"`` tied, ``"2nr"`` a half
rest). ``"|"`` marks a chord change. :func:`build_progression` lines the
template up with one :class:`ChordVoicingEntry` per bar and returns pitches
aligned one-to-one with the sounding slots, ready to be merged with velocity
and start-time data elsewhere.

Example
-------
>>> entries = ii_v_i_major("C")
>>> [e.label for e in entries]
['Dm7', 'G7', 'Cma7']
>>> durations, groups = build_progression(entries, ["2n", "2nr", "|", "1n", "|", "1n"])
>>> durations
['2n', '2nr', '1n', '1n']
>>> groups[0]
['D3', 'F3', 'C4', 'E4']
"""

# Modification Summary
# ---------------------
# * When a template has fewer chords than bars the last chord is held for the
#   remaining bars and a warning is logged.
# * Template variants are chosen explicitly by the caller.

from __future__ import annotations

import logging
from typing import Iterable, List, Optional, Sequence, Tuple, Union

from .builders import ChordVoicingEntry, build_entry_notes, build_scale_notes
from .degree_root import root_of_degree
from .formulas import II_V_I_MAJOR_WALK_BASS, II_V_I_MINOR_WALK_BASS
from .letters import root_letter, split_root

__all__ = [
    "BAR_BREAK",
    "DEFAULT_CHORD_RHYTHM",
    "DEFAULT_WALK_BASS_RHYTHM",
    "is_rest",
    "build_progression",
    "voice_progression",
    "ii_v_i_major",
    "ii_v_i_minor",
    "make_ii_v_i",
    "make_walk_bass",
]

BAR_BREAK = "|"

# Three bars: ii, V and I.
DEFAULT_CHORD_RHYTHM: Tuple[str, ...] = (
    "2n+4n", "8n", BAR_BREAK,
    "8n+4n", "8nr", "8n", "2nr", BAR_BREAK,
    "4n", "8nr", "8n", "2nr", "2n+4n", "4nr",
)

DEFAULT_WALK_BASS_RHYTHM: Tuple[str, ...] = ("4n",) * 16

# Chord suffix and voicing for the ii, V and I chords of each variant.
_MAJOR_TEMPLATES = (
    (("m7", "1 b3 b7 9"), ("7", "1 b7 3 13"), ("ma7", "1 3 7 9")),
    (("m7", "1 b7 b3 5"), ("7", "8 3 b7 9"), ("ma7", "1 7 3 5")),
    (("m7", "1 5 b7 b3"), ("7", "1 8 3 b7"), ("ma7", "1 5 7 3")),
)
_MINOR_TEMPLATES = (
    (("m7b5", "1 b5 b7 b3"), ("7", "1 b7 3 b13"), ("mi6", "1 b3 6 9")),
    (("m7b5", "1 b7 b3 b5"), ("7", "8 3 b7 b9"), ("mi6", "1 6 b3 5")),
    (("m7b5", "1 b5 b7 b3"), ("7", "1 8 3 b7"), ("mi6", "1 5 6 b3")),
)

# Default (ii, V, I) octaves per variant for keys without a register rule.
_MAJOR_OCTAVES = ((2, 2, 2), (2, 2, 2), (2, 2, 2))
_MINOR_OCTAVES = ((3, 3, 3), (3, 3, 3), (2, 2, 2))

EntryLike = Union[ChordVoicingEntry, Sequence[str]]


def is_rest(slot: str) -> bool:
    """Return ``True`` when ``slot`` is a rest such as ``"8nr"``."""

    return slot.endswith("r")


def _split_bars(rhythm: Iterable[str]) -> List[List[str]]:
    bars: List[List[str]] = [[]]
    for slot in rhythm:
        if not isinstance(slot, str) or not slot:
            raise ValueError(f"Invalid rhythm slot: {slot!r}")
        if slot == BAR_BREAK:
            bars.append([])
        else:
            bars[-1].append(slot)
    if not any(bars):
        raise ValueError("rhythm must contain at least one duration")
    # Leading and trailing markers delimit the template; they open no bar.
    while not bars[0]:
        bars.pop(0)
    while not bars[-1]:
        bars.pop()
    return bars


def voice_progression(
    chords: Sequence[Sequence[str]], rhythm: Iterable[str]
) -> Tuple[List[str], List[List[str]]]:
    """Spread already voiced ``chords``, one per bar, over ``rhythm``.

    Bars and chords are paired the same way as in :func:`build_progression`.
    Each sounding slot receives its own copy of the bar's chord.
    """

    bars = _split_bars(rhythm)
    if len(chords) != len(bars):
        # The template and the chord list disagree. Surplus chords are
        # dropped; missing chords are covered by holding the last one.
        logging.warning(
            "Progression has %d chords for %d bars; %s",
            len(chords),
            len(bars),
            "holding the last chord" if len(chords) < len(bars) else "ignoring extra chords",
        )

    durations: List[str] = []
    pitch_groups: List[List[str]] = []
    for index, bar in enumerate(bars):
        durations.extend(bar)
        sounding = sum(1 for slot in bar if not is_rest(slot))
        if not sounding:
            continue
        if not chords:
            raise ValueError("a progression needs at least one chord")
        chord = chords[min(index, len(chords) - 1)]
        pitch_groups.extend(list(chord) for _ in range(sounding))
    return durations, pitch_groups


def build_progression(
    chord_entries: Iterable[EntryLike], rhythm: Iterable[str]
) -> Tuple[List[str], List[List[str]]]:
    """Pair a rhythm template with the chords of a progression.

    Parameters
    ----------
    chord_entries:
        One ``(label, root_with_octave, voicing)`` entry per bar.
    rhythm:
        Duration strings with ``"|"`` between bars.

    Returns
    -------
    tuple(list[str], list[list[str]])
        ``(durations, pitch_groups)``. ``durations`` is ``rhythm`` without the
        bar markers; ``pitch_groups`` holds one chord per sounding slot.

    Raises
    ------
    ValueError
        If ``rhythm`` is empty or sounding slots exist but no chord was
        supplied. Formula errors from the builders propagate unchanged.
    """

    entries = [ChordVoicingEntry(*entry) for entry in chord_entries]
    return voice_progression([build_entry_notes(entry) for entry in entries], rhythm)


def _register(key: str, default: Tuple[int, int, int]) -> Tuple[int, int, int]:
    """Return ``(ii, V, I)`` root octaves that keep the voicings mid-range."""

    letter = root_letter(key)
    if letter in "CDE":
        return (3, 2, 3)
    if letter == "B":
        return (3, 2, 2)
    if letter == "A":
        return (2, 2, 2)
    return default


def _ii_v_i(key: str, templates, octaves, variant: int) -> List[ChordVoicingEntry]:
    if not 1 <= variant <= len(templates):
        raise ValueError(f"variant must be between 1 and {len(templates)}")
    register = _register(key, octaves[variant - 1])
    entries = []
    for degree, octave, (suffix, voicing) in zip(("2", "5", "1"), register, templates[variant - 1]):
        root = root_of_degree(key, degree)
        entries.append(ChordVoicingEntry(root + suffix, f"{root}{octave}", voicing))
    return entries


def ii_v_i_major(key: str, variant: int = 1) -> List[ChordVoicingEntry]:
    """Return the ii-V-I of major ``key`` voiced with template ``variant``."""

    return _ii_v_i(key, _MAJOR_TEMPLATES, _MAJOR_OCTAVES, variant)


def ii_v_i_minor(key: str, variant: int = 1) -> List[ChordVoicingEntry]:
    """Return the iiø-V-i of minor ``key`` voiced with template ``variant``."""

    return _ii_v_i(key, _MINOR_TEMPLATES, _MINOR_OCTAVES, variant)


def make_ii_v_i(
    key: str,
    *,
    minor: bool = False,
    variant: int = 1,
    rhythm: Optional[Sequence[str]] = None,
) -> Tuple[List[str], List[List[str]]]:
    """Return ``(durations, pitch_groups)`` for a ii-V-I in ``key``."""

    entries = ii_v_i_minor(key, variant) if minor else ii_v_i_major(key, variant)
    return build_progression(entries, rhythm or DEFAULT_CHORD_RHYTHM)


def make_walk_bass(
    key: str,
    *,
    minor: bool = False,
    variant: int = 1,
    rhythm: Optional[Sequence[str]] = None,
    formula: Optional[str] = None,
    octave: int = 3,
) -> Tuple[List[str], List[str]]:
    """Return ``(durations, notes)`` for a walking bass line under a ii-V-I.

    ``formula`` overrides the built-in line selected by ``variant``. The
    number of sounding slots in ``rhythm`` must match the number of notes.
    """

    if formula is None:
        lines = II_V_I_MINOR_WALK_BASS if minor else II_V_I_MAJOR_WALK_BASS
        if not 1 <= variant <= len(lines):
            raise ValueError(f"variant must be between 1 and {len(lines)}")
        formula = lines[variant - 1]

    letter, accidental = split_root(key)
    notes = build_scale_notes(formula, f"{letter}{accidental.value}{octave}")

    durations = [slot for slot in (rhythm or DEFAULT_WALK_BASS_RHYTHM) if slot != BAR_BREAK]
    sounding = sum(1 for slot in durations if not is_rest(slot))
    if sounding != len(notes):
        raise ValueError(
            f"rhythm has {sounding} sounding slots but the bass line has {len(notes)} notes"
        )
    return durations, notes
