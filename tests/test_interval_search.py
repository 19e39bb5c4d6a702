"""Unit tests for the expanding-shell IntervalSearch."""

import pytest

from justdrift.errors import InvalidParameter, SearchExhausted
from justdrift.interval_search import BracketExclusion, IntervalSearch, signed_sequence
from justdrift.intervals import IntervalVector


def test_signed_sequence_order() -> None:
    assert signed_sequence(1) == [0]
    assert signed_sequence(2) == [0, 1, -1]
    assert signed_sequence(3) == [0, 1, -1, 2, -2]


@pytest.mark.parametrize("radius", [1, 2, 5, 10])
def test_signed_sequence_length(radius: int) -> None:
    assert len(signed_sequence(radius)) == 2 * radius - 1


@pytest.mark.parametrize("target", range(-20, 21))
def test_half_step_vector_matches_target(target: int) -> None:
    vector = IntervalSearch().find_vector_for_half_steps(target)
    assert vector.half_steps == target


@pytest.mark.parametrize(
    ("target", "expected"),
    [
        (0, IntervalVector(0, 0, 0)),
        (1, IntervalVector(-1, 1, 0)),
        (4, IntervalVector(1, 0, 0)),
        (5, IntervalVector(0, 1, 0)),
        (7, IntervalVector(0, 0, 1)),
    ],
)
def test_half_step_vector_follows_search_order(target: int, expected: IntervalVector) -> None:
    assert IntervalSearch().find_vector_for_half_steps(target) == expected


def test_large_half_step_target() -> None:
    assert IntervalSearch().find_vector_for_half_steps(200).half_steps == 200


def test_drift_bracket_properties() -> None:
    down, up = IntervalSearch().find_drift_bracket()
    assert down.half_steps == 0
    assert up.half_steps == 0
    assert down.ratio < 1
    assert up.ratio > 1
    assert not down.is_zero()
    assert not up.is_zero()


def test_drift_bracket_componentwise_exclusion() -> None:
    down, up = IntervalSearch().find_drift_bracket()
    assert down == IntervalVector(1, 2, -2)
    assert up == IntervalVector(-2, 3, -1)
    assert all(u != -d for u, d in zip(up.coefficients, down.coefficients))


def test_drift_bracket_negation_exclusion_skips_inverse() -> None:
    # Shell 3 only holds the comma and its inverse, so both rules land in shell 4.
    down, up = IntervalSearch(exclusion=BracketExclusion.NEGATION).find_drift_bracket()
    assert down == IntervalVector(1, 2, -2)
    assert up == IntervalVector(-2, 3, -1)
    assert up != -down


def test_up_allowed_rules_differ_on_shared_coefficient() -> None:
    down = IntervalVector(1, 2, -2)
    candidate = IntervalVector(-1, 3, -2)
    assert not IntervalSearch()._up_allowed(candidate, down)
    assert IntervalSearch(exclusion=BracketExclusion.NEGATION)._up_allowed(candidate, down)


def test_up_allowed_both_rules_reject_exact_inverse() -> None:
    down = IntervalVector(1, 2, -2)
    for rule in BracketExclusion:
        assert not IntervalSearch(exclusion=rule)._up_allowed(-down, down)


def test_half_step_search_exhausted() -> None:
    with pytest.raises(SearchExhausted) as excinfo:
        IntervalSearch(max_radius=2).find_vector_for_half_steps(100)
    assert excinfo.value.max_radius == 2


def test_drift_bracket_search_exhausted() -> None:
    # The first zero-half-step vector lives in shell 3.
    with pytest.raises(SearchExhausted):
        IntervalSearch(max_radius=2).find_drift_bracket()


def test_invalid_max_radius() -> None:
    with pytest.raises(InvalidParameter):
        IntervalSearch(max_radius=0)
