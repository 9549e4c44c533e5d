"""Unit tests for the scale-degree lexicon and token parser.

The lexicon maps every accidental/numeral combination from 1 to 15 onto a
half-step offset and adds three special tokens. These tests pin a sample of
the table, the octave markers and the error raised for tokens outside the
grammar.
"""

import importlib
import sys
from pathlib import Path

import pytest

sys.path.insert(0, str(Path(__file__).resolve().parents[1]))

lexicon = importlib.import_module("scale_degree.lexicon")
errors = importlib.import_module("scale_degree.errors")


@pytest.mark.parametrize(
    "token, expected",
    [
        ("1", 0),
        ("b2", 1),
        ("2", 2),
        ("#2", 3),
        ("b3", 3),
        ("3", 4),
        ("4", 5),
        ("#4", 6),
        ("b5", 6),
        ("5", 7),
        ("#5", 8),
        ("b6", 8),
        ("6", 9),
        ("b7", 10),
        ("7", 11),
        ("8", 12),
        ("b9", 13),
        ("9", 14),
        ("#9", 15),
        ("10", 16),
        ("11", 17),
        ("#11", 18),
        ("12", 19),
        ("b13", 20),
        ("13", 21),
        ("14", 23),
        ("15", 24),
    ],
)
def test_lexicon_values(token, expected):
    """Common degrees resolve to their conventional half-step distances."""
    assert lexicon.SCALE_DEGREE_TO_HALF_STEPS[token] == expected


def test_double_accidentals_shift_by_two():
    table = lexicon.SCALE_DEGREE_TO_HALF_STEPS
    assert table["x4"] == 7
    assert table["bb7"] == 9
    assert table["bb1"] == -2


def test_special_tokens():
    """``sus``, ``sus2`` and ``d7`` keep the letter of 4, 2 and 7."""

    sus = lexicon.parse_token("sus")
    assert (sus.half_steps, sus.numeral) == (5, 4)
    sus2 = lexicon.parse_token("sus2")
    assert (sus2.half_steps, sus2.numeral) == (2, 2)
    dim7 = lexicon.parse_token("d7")
    assert (dim7.half_steps, dim7.numeral) == (9, 7)


def test_lexicon_is_read_only():
    with pytest.raises(TypeError):
        lexicon.SCALE_DEGREE_TO_HALF_STEPS["16"] = 26


@pytest.mark.parametrize(
    "token, expected",
    [(",5", -5), (",,5", -17), ("u9", 26), ("uu1", 24), (",b7", -2), ("u#11", 30)],
)
def test_octave_markers(token, expected):
    """Each ``,`` lowers and each ``u`` raises the token by an octave."""
    assert lexicon.offset_of(token) == expected


def test_double_sharp_spellings_are_equivalent():
    assert lexicon.parse_token("##4").degree == "x4"
    assert lexicon.offset_of("##4") == lexicon.offset_of("x4")


def test_parse_token_fields():
    token = lexicon.parse_token(",b7")
    assert token.text == ",b7"
    assert token.degree == "b7"
    assert token.numeral == 7
    assert token.octave_shift == -1


@pytest.mark.parametrize("token", ["16", "0", "z3", "b", "", "u,5", "sus4", "7b"])
def test_unknown_tokens_raise(token):
    with pytest.raises(errors.UnknownDegree, match="Unknown scale degree"):
        lexicon.parse_token(token)


def test_unknown_degree_is_value_error():
    """Callers guarding with ``except ValueError`` still catch engine errors."""

    with pytest.raises(ValueError):
        lexicon.offset_of("q")


def test_parse_formula_accepts_strings_and_lists():
    from_string = lexicon.parse_formula("  1 b3\t5 ")
    from_list = lexicon.parse_formula(["1", "b3", "5"])
    assert [t.degree for t in from_string] == ["1", "b3", "5"]
    assert from_string == from_list


@pytest.mark.parametrize("formula", ["", "   ", []])
def test_empty_formula_is_malformed(formula):
    with pytest.raises(errors.MalformedFormula):
        lexicon.parse_formula(formula)


def test_non_string_formula_is_malformed():
    with pytest.raises(errors.MalformedFormula):
        lexicon.split_formula(135)
    with pytest.raises(errors.MalformedFormula):
        lexicon.split_formula(["1", 3])


def test_one_bad_token_fails_whole_formula():
    with pytest.raises(errors.UnknownDegree) as excinfo:
        lexicon.parse_formula("1 2 q3 4")
    assert excinfo.value.token == "q3"


def test_parse_token_cache_hits():
    """Repeated token parses should register cache hits."""
    info_before = lexicon.parse_token.cache_info()
    lexicon.parse_token("b9")
    lexicon.parse_token("b9")
    info_after = lexicon.parse_token.cache_info()
    assert info_after.hits >= info_before.hits + 1
