"""Command line helpers for the scale-degree engine.

Each engine operation is a subcommand. Library formula names (``dorian``,
``dom13_v4``) are accepted wherever a formula is expected, and roots given
without an octave pick it up from the settings file. Engine errors are logged
and turn into exit status ``1``.

Example
-------
Running ``python -m scale_degree scale harmonic_minor G4`` prints
``G4 A4 Bb4 C5 D5 Eb5 F#5 G5``. Adding ``--midi`` prints MIDI numbers instead,
and ``--output scale.mid`` also writes the notes to a MIDI file.
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import List, Optional, Sequence, Union

from .builders import build_chord_notes, build_entry_notes, build_scale_notes
from .degree_root import root_of_degree
from .formulas import formula_for, formula_names
from .note_utils import note_to_midi
from .progression import (
    DEFAULT_CHORD_RHYTHM,
    ii_v_i_major,
    ii_v_i_minor,
    make_walk_bass,
    voice_progression,
)
from .settings import load_settings
from .transpose import transpose

__all__ = ["run_cli", "main"]

PitchGroups = List[Union[str, List[str]]]


def _resolve_formula(text: str) -> str:
    """Return the library formula named ``text`` or ``text`` itself."""

    if text.strip().lower() in formula_names():
        return formula_for(text)
    return text


def _with_octave(root: str, octave: int) -> str:
    if any(ch.isdigit() for ch in root):
        return root
    return f"{root}{octave}"


def _format(notes: Sequence[str], as_midi: bool) -> str:
    if as_midi:
        return " ".join(str(note_to_midi(note)) for note in notes)
    return " ".join(notes)


def _build_parser() -> argparse.ArgumentParser:
    common = argparse.ArgumentParser(add_help=False)
    common.add_argument("--midi", action="store_true", help="Print MIDI note numbers instead of names")
    common.add_argument("--output", type=str, help="Write the result to this MIDI file")
    common.add_argument("--settings-file", type=str, help="Path to the JSON settings file")

    parser = argparse.ArgumentParser(
        prog="scale-degree",
        description="Spell scales and chords from scale-degree formulas.",
    )
    sub = parser.add_subparsers(dest="command", required=True)

    scale = sub.add_parser("scale", parents=[common], help="Spell a scale formula on a root")
    scale.add_argument("formula", help="Formula such as '1 2 b3 4 5' or a library name")
    scale.add_argument("root", help="Root note, e.g. G4 or Eb")

    chord = sub.add_parser("chord", parents=[common], help="Spell an ascending chord voicing")
    chord.add_argument("voicing", help="Voicing such as '5 9 3 7' or a library name")
    chord.add_argument("root", help="Root note, e.g. D3")

    trans = sub.add_parser("transpose", parents=[common], help="Shift notes by half-steps")
    trans.add_argument("steps", type=int, help="Signed number of half-steps")
    trans.add_argument("notes", nargs="+", help="Notes with octaves")

    root = sub.add_parser("root", parents=[common], help="Name a degree of a key")
    root.add_argument("key", help="Key root, e.g. Bb")
    root.add_argument("degree", help="Scale degree, e.g. b6")

    for name, help_text in (
        ("ii-v-i", "Voice a ii-V-I progression"),
        ("walk-bass", "Spell a walking bass line under a ii-V-I"),
    ):
        prog = sub.add_parser(name, parents=[common], help=help_text)
        prog.add_argument("key", help="Key root without octave, e.g. F")
        prog.add_argument("--minor", action="store_true", help="Use the minor-key templates")
        prog.add_argument("--variant", type=int, default=1, help="Template variant (default: 1)")

    sub.add_parser("formulas", help="List the named formulas and exit")
    return parser


def run_cli(argv: Optional[Sequence[str]] = None) -> None:
    """Parse CLI arguments, print the result and optionally write MIDI."""

    args = _build_parser().parse_args(argv)

    if args.command == "formulas":
        print("\n".join(formula_names()))
        return

    settings = load_settings(Path(args.settings_file).expanduser()) if args.settings_file else load_settings()

    lines: List[str] = []
    groups: PitchGroups = []
    try:
        if args.command == "scale":
            notes = build_scale_notes(
                _resolve_formula(args.formula), _with_octave(args.root, settings["root_octave"])
            )
            lines.append(_format(notes, args.midi))
            groups.extend(notes)
        elif args.command == "chord":
            notes = build_chord_notes(
                _resolve_formula(args.voicing), _with_octave(args.root, settings["root_octave"])
            )
            lines.append(_format(notes, args.midi))
            groups.append(notes)
        elif args.command == "transpose":
            notes = transpose(args.notes, args.steps)
            lines.append(_format(notes, args.midi))
            groups.extend(notes)
        elif args.command == "root":
            lines.append(root_of_degree(args.key, args.degree))
        elif args.command == "ii-v-i":
            entries = (ii_v_i_minor if args.minor else ii_v_i_major)(args.key, args.variant)
            chords = [build_entry_notes(entry) for entry in entries]
            for entry, notes in zip(entries, chords):
                lines.append(f"{entry.label}: {_format(notes, args.midi)}")
            _, pitch_groups = voice_progression(chords, DEFAULT_CHORD_RHYTHM)
            groups.extend(pitch_groups)
        elif args.command == "walk-bass":
            _, notes = make_walk_bass(
                args.key,
                minor=args.minor,
                variant=args.variant,
                octave=settings["bass_octave"],
            )
            lines.append(_format(notes, args.midi))
            groups.extend(notes)
    except ValueError as exc:
        # Every engine error derives from ``ValueError``.
        logging.error(str(exc))
        sys.exit(1)

    print("\n".join(lines))

    if args.output:
        if not groups:
            logging.error(f"--output is not supported for the {args.command} command.")
            sys.exit(1)
        from .midi_io import create_midi_file

        try:
            create_midi_file(groups, args.output, bpm=settings["bpm"], beats=settings["beats"])
        except (ValueError, ImportError) as exc:
            logging.error(str(exc))
            sys.exit(1)
        except OSError as exc:
            logging.error("Could not write MIDI file: %s", exc)
            sys.exit(1)


def main() -> None:
    """Entry point for ``python -m scale_degree`` and the console script."""

    logging.basicConfig(level=logging.INFO, format="%(levelname)s: %(message)s")
    run_cli()
