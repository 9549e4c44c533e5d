"""Name the root of a scale degree within a key.

Chord labels in a progression are written relative to the key ("the ii chord",
"the bVI chord"); :func:`root_of_degree` turns such a degree into the letter
and accidental of the chord root, without an octave.

Example
-------
>>> root_of_degree("G", "b6")
'Eb'
>>> root_of_degree("Bb", "2")
'C'
>>> root_of_degree("F#", "7")
'E#'
"""

from __future__ import annotations

from typing import Union

from .errors import UnspellableDegree
from .letters import expected_letter, split_root
from .lexicon import parse_token
from .pitch_tables import NATURAL_PITCH_CLASS, Accidental, PitchName

__all__ = ["root_of_degree"]


def root_of_degree(key_root: Union[str, PitchName], degree: str) -> str:
    """Return the name of ``degree`` in the key of ``key_root``.

    ``key_root`` may carry an octave (``"G4"``); it is ignored. Octave markers
    on ``degree`` do not change the result.

    Raises
    ------
    UnknownDegree
        If ``degree`` is not a valid token.
    UnspellableDegree
        If the degree would need more than two accidentals, e.g. the ``b4`` of
        ``Fb``.
    """

    token = parse_token(degree)
    letter, accidental = split_root(key_root)
    root_pc = NATURAL_PITCH_CLASS[letter] + accidental.shift
    target = expected_letter(key_root, token)

    # Fold into -6..5 so spellings across the B/C boundary (``B#``, ``Cb``)
    # compare correctly.
    diff = ((root_pc + token.half_steps) - NATURAL_PITCH_CLASS[target] + 6) % 12 - 6
    chromatic = Accidental.from_shift(diff)
    if chromatic is None:
        raise UnspellableDegree(str(key_root), degree)
    return f"{target}{chromatic.value}"
