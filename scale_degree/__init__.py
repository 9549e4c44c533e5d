"""Scale-degree pitch spelling library.

This package turns scale-degree formulas such as ``"1 2 b3 4 5 b6 7 8"`` into
correctly spelled note names, MIDI numbers and frequencies above a given
root. A typical workflow is to call :func:`build_scale_notes` or
:func:`build_chord_notes` with a formula and a root like ``"G4"``, then feed
the result into :func:`create_midi_file` or a downstream sequencer.

Underlying Algorithm
--------------------
Every formula token carries two independent pieces of information: its
chromatic distance from the root and the letter its pitch must be written
with. The builders compute both and then look up the one spelling of the
absolute pitch that uses the expected letter::

    tokens = parse_formula(formula)
    offsets = stack_ascending(tokens) if chord else half_steps(tokens)
    letters = expected_letters(root, tokens)
    for midi, letter in zip(root_midi + offsets, letters):
        yield SPELLING_TABLE[(midi, letter)]

Keeping the letter separate from the pitch is what makes ``b3`` of ``G``
come out as ``Bb`` rather than ``A#`` and ``7`` of ``F#`` as ``E#`` rather
than ``F``.

Features include:
- Scale and ascending chord spelling with diatonic letter fidelity.
- MIDI and equal-tempered frequency arrays.
- Chromatic transposition and root-of-degree lookup.
- A library of scale, walking bass and voicing formulas plus ii-V-I
  progression templates.
- A command line interface and MIDI export.

Modification Summary
--------------------
* Spelling tables are built once at import time and exposed read-only.
* Engine errors share the :class:`ScaleDegreeError` base, itself a
  ``ValueError``.
"""

__version__ = "0.1.0"

from .errors import (  # noqa: F401
    InvalidPitchName,
    MalformedFormula,
    PitchOutOfRange,
    ScaleDegreeError,
    UnknownDegree,
    UnspellableDegree,
)
from .pitch_tables import (  # noqa: F401
    MIDI_MAX,
    MIDI_MIN,
    PITCH_CLASS,
    SPELLING_TABLE,
    Accidental,
    PitchName,
)
from .lexicon import (  # noqa: F401
    SCALE_DEGREE_TO_HALF_STEPS,
    ScaleDegreeToken,
    parse_formula,
    parse_token,
    split_formula,
)
from .note_utils import (  # noqa: F401
    SpelledPitch,
    enharmonic_spellings,
    get_interval,
    midi_to_note,
    name_for,
    note_to_midi,
)
from .letters import expected_letter, expected_letters  # noqa: F401
from .resolver import resolve_chord, resolve_scale  # noqa: F401
from .builders import (  # noqa: F401
    ChordVoicingEntry,
    build_chord_array,
    build_chord_frequency_array,
    build_chord_midi_array,
    build_chord_notes,
    build_frequency_array,
    build_midi_array,
    build_scale_notes,
    midi_to_frequency,
    spell_formula,
)
from .transpose import transpose  # noqa: F401
from .degree_root import root_of_degree  # noqa: F401
from .formulas import (  # noqa: F401
    CHORD_VOICINGS,
    SCALE_FORMULAS,
    WALKING_BASS_FORMULAS,
    formula_for,
    formula_names,
)
from .progression import (  # noqa: F401
    build_progression,
    ii_v_i_major,
    ii_v_i_minor,
    make_ii_v_i,
    make_walk_bass,
    voice_progression,
)
from .settings import DEFAULT_SETTINGS_FILE, load_settings, save_settings  # noqa: F401
from .midi_io import create_midi_file  # noqa: F401


def run_cli():
    from .cli import run_cli as _run_cli
    _run_cli()


def main():
    from .cli import main as _main
    _main()
