"""Unit tests for the greedy drift loop."""

import math
from fractions import Fraction

import pytest

from justdrift.drift import converge, to_cents, validate_target
from justdrift.errors import ConvergenceFailure, InvalidParameter
from justdrift.intervals import IntervalVector

DOWN = IntervalVector(1, 2, -2)   # 80/81
UP = IntervalVector(-2, 3, -1)    # 2048/2025
INVERSE_UP = IntervalVector(-1, -2, 2)  # 81/80


def test_to_cents() -> None:
    assert to_cents(2) == pytest.approx(1200.0)
    assert to_cents(Fraction(1, 2)) == pytest.approx(-1200.0)
    assert to_cents(Fraction(3, 2)) == pytest.approx(701.955, abs=1e-3)
    assert to_cents(1) == 0.0


def test_unit_target_on_unit_base_stops_immediately() -> None:
    result = converge(IntervalVector.zero(), DOWN, UP, Fraction(1), 0.0)
    assert result.steps == 0
    assert result.vector == IntervalVector.zero()
    assert result.error_cents == 0.0


def test_exact_ratio_match_stops() -> None:
    result = converge(IntervalVector.zero(), DOWN, UP, Fraction(80, 81), 0.0)
    assert result.steps == 1
    assert result.vector == DOWN
    assert result.vector.ratio == Fraction(80, 81)


def test_converges_within_tolerance_and_keeps_half_steps() -> None:
    base = IntervalVector(0, 0, 1)
    result = converge(base, DOWN, UP, 1.0, 1.0)
    assert result.steps > 0
    assert result.error_cents <= 1.0
    assert abs(to_cents(result.vector.ratio)) <= 1.0
    assert result.vector.half_steps == 7


def test_converges_upward() -> None:
    result = converge(IntervalVector.zero(), DOWN, UP, Fraction(101, 100), 2.0)
    assert abs(to_cents(result.vector.ratio) - to_cents(Fraction(101, 100))) <= 2.0
    assert result.vector.half_steps == 0


def test_iteration_cap_raises() -> None:
    with pytest.raises(ConvergenceFailure) as excinfo:
        converge(IntervalVector.zero(), DOWN, UP, Fraction(3, 2), 0.0, max_iterations=5)
    assert excinfo.value.iterations == 5
    assert excinfo.value.error_cents > 0
    assert excinfo.value.vector.half_steps == 0


def test_plain_inverse_bracket_oscillates() -> None:
    with pytest.raises(ConvergenceFailure):
        converge(IntervalVector.zero(), DOWN, INVERSE_UP, 1.01, 1.0, max_iterations=100)


def test_zero_iterations_allowed_when_already_converged() -> None:
    result = converge(IntervalVector.zero(), DOWN, UP, 1, 0.5, max_iterations=0)
    assert result.steps == 0


@pytest.mark.parametrize("ratio", [0, -1.5, Fraction(-1, 2), math.inf, math.nan])
def test_invalid_target_ratio(ratio: float) -> None:
    with pytest.raises(InvalidParameter):
        converge(IntervalVector.zero(), DOWN, UP, ratio, 1.0)


@pytest.mark.parametrize("tolerance", [-0.1, math.nan, math.inf])
def test_invalid_tolerance(tolerance: float) -> None:
    with pytest.raises(InvalidParameter):
        validate_target(1.0, tolerance)


def test_negative_iteration_cap() -> None:
    with pytest.raises(InvalidParameter):
        converge(IntervalVector.zero(), DOWN, UP, 1.0, 1.0, max_iterations=-1)
