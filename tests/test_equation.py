"""Tests for the Equation value holder."""

from gridcircuit import Equation


def test_chained_construction():
    eq = Equation().unknown("x", 3).unknown("y", -2).constant(9)

    assert eq.terms == {"x": 3, "y": -2}
    assert eq.unknowns() == ["x", "y"]
    assert eq.constant_value == 9
    assert eq.coefficient("z") == 0


def test_unknown_overwrites_coefficient():
    eq = Equation().unknown("x", 1).unknown("y", 1).unknown("x", 4)

    assert eq.terms == {"x": 4, "y": 1}
    assert eq.unknowns() == ["x", "y"]


def test_empty_equation():
    eq = Equation()

    assert eq.terms == {}
    assert eq.constant_value == 0
    assert repr(eq) == "0 = 0"


def test_substitute_moves_known_terms_into_constant():
    eq = Equation().unknown("x", 3).unknown("y", -2).unknown("z", 5).constant(9)

    reduced = eq.substitute({"y": 2, "z": 1})

    assert reduced.terms == {"x": 3}
    assert reduced.constant_value == 9 + 4 - 5
    # The original is untouched
    assert eq.terms == {"x": 3, "y": -2, "z": 5}


def test_evaluate_and_repr():
    eq = Equation().unknown("x", 3).unknown("y", -2).constant(9)

    assert eq.evaluate({"x": -1, "y": -6}) == 9
    assert repr(eq) == "3*x - 2*y = 9"
    assert repr(Equation().unknown("x", -1).unknown("y", 1).constant(-7)) == "-x + y = -7"
