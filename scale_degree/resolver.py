"""Resolve formulas into chromatic offsets.

Two readings of the same token grammar are supported:

* **scale mode** keeps every token where it is written, so melodic material
  can ascend, descend, repeat or skip degrees freely;
* **chord mode** treats the formula as an open voicing listed lowest voice
  first. ``"5 9 3 7"`` stacks the fifth, then the ninth above it, then the
  third above the ninth (a tenth) and finally the seventh on top.

Example
-------
>>> resolve_scale("1 b3 5 ,7")
[0, 3, 7, -1]
>>> resolve_chord("5 9 3 7")
[7, 14, 16, 23]
"""

from __future__ import annotations

from typing import List, Sequence

from .lexicon import Formula, ScaleDegreeToken, parse_formula

__all__ = ["resolve_scale", "resolve_chord", "stack_ascending"]


def resolve_scale(formula: Formula) -> List[int]:
    """Return the half-step offset of every token in ``formula``.

    Raises
    ------
    UnknownDegree
        If any token is not in the lexicon. No partial result is returned.
    MalformedFormula
        If ``formula`` is empty.
    """

    return [token.half_steps for token in parse_formula(formula)]


def stack_ascending(tokens: Sequence[ScaleDegreeToken]) -> List[int]:
    """Return offsets for ``tokens`` raised by octaves into ascending order.

    The first token keeps its own offset; each following offset is raised by
    12 until it is at least the previous value, so the result never falls.
    """

    offsets: List[int] = []
    for token in tokens:
        value = token.half_steps
        if offsets:
            while value < offsets[-1]:
                value += 12
        offsets.append(value)
    return offsets


def resolve_chord(voicing: Formula) -> List[int]:
    """Return monotonically non-decreasing offsets for chord ``voicing``."""

    return stack_ascending(parse_formula(voicing))
