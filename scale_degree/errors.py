"""Exception types raised by the scale-degree engine.

Every error derives from :class:`ScaleDegreeError`, itself a ``ValueError``,
so callers that already guard user input with ``except ValueError`` keep
working while code that needs finer control can catch the specific subclass.
Each exception stores the offending value as an attribute so tests and the
CLI can report it without parsing the message.

Example
-------
>>> from scale_degree import build_scale_notes
>>> build_scale_notes("1 2 z3", "C4")
Traceback (most recent call last):
    ...
scale_degree.errors.UnknownDegree: Unknown scale degree: z3
"""

from __future__ import annotations

__all__ = [
    "ScaleDegreeError",
    "UnknownDegree",
    "PitchOutOfRange",
    "UnspellableDegree",
    "MalformedFormula",
    "InvalidPitchName",
]


class ScaleDegreeError(ValueError):
    """Base class for all engine errors."""


class UnknownDegree(ScaleDegreeError):
    """A formula token is absent from the scale-degree lexicon."""

    def __init__(self, token: str) -> None:
        self.token = token
        super().__init__(f"Unknown scale degree: {token}")


class PitchOutOfRange(ScaleDegreeError):
    """An absolute pitch falls outside the MIDI range ``0-127``."""

    def __init__(self, value: int) -> None:
        self.value = value
        super().__init__(f"MIDI note {value} out of range 0-127")


class UnspellableDegree(ScaleDegreeError):
    """A degree cannot be written with at most two accidentals."""

    def __init__(self, key_root: str, degree: str) -> None:
        self.key_root = key_root
        self.degree = degree
        super().__init__(
            f"Scale degree {degree} of {key_root} needs more than two accidentals"
        )


class MalformedFormula(ScaleDegreeError):
    """A formula string is empty or cannot be tokenised."""

    def __init__(self, formula: object, reason: str = "empty formula") -> None:
        self.formula = formula
        self.reason = reason
        super().__init__(f"Malformed formula {formula!r}: {reason}")


class InvalidPitchName(ScaleDegreeError):
    """A note or key name does not follow ``Letter[Accidental][Octave]``."""

    def __init__(self, name: object) -> None:
        self.name = name
        super().__init__(f"Invalid note format: {name}")
