"""Greedy drift loop: steers a vector's frequency ratio toward a target."""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from fractions import Fraction

from justdrift.errors import ConvergenceFailure, InvalidParameter
from justdrift.intervals import IntervalVector

logger = logging.getLogger(__name__)

CENTS_PER_OCTAVE = 1200.0
DEFAULT_MAX_ITERATIONS = 10_000


def to_cents(ratio: Fraction | float) -> float:
    """Convert a frequency ratio to cents (1200 per octave)."""
    return CENTS_PER_OCTAVE * math.log2(abs(float(ratio)))


@dataclass(frozen=True)
class DriftResult:
    """
    Outcome of a converged drift loop.

    Attributes:
        vector:      Final accumulated vector.
        steps:       Number of bracket vectors added to the base vector.
        error_cents: Absolute distance between the final and target ratio.
    """

    vector: IntervalVector
    steps: int
    error_cents: float


def validate_target(target_ratio: Fraction | float, tolerance_cents: float) -> Fraction:
    """
    Check the drift target and return it as an exact ratio.

    Raises:
        InvalidParameter: For a non-positive ratio or a negative/non-finite tolerance.
    """
    if isinstance(target_ratio, float) and not math.isfinite(target_ratio):
        raise InvalidParameter(f"Target frequency scale must be finite, got {target_ratio}.")
    if target_ratio <= 0:
        raise InvalidParameter(f"Target frequency scale must be positive, got {target_ratio}.")
    if not math.isfinite(tolerance_cents) or tolerance_cents < 0:
        raise InvalidParameter(
            f"Scaling error tolerance must be a non-negative number of cents, got {tolerance_cents}."
        )
    return Fraction(target_ratio)


def converge(
    base: IntervalVector,
    down: IntervalVector,
    up: IntervalVector,
    target_ratio: Fraction | float,
    tolerance_cents: float,
    max_iterations: int = DEFAULT_MAX_ITERATIONS,
) -> DriftResult:
    """
    Add drift vectors to ``base`` until its ratio is close enough to the target.

    While the accumulated ratio is above the target ``down`` is added,
    otherwise ``up``. The loop stops when the ratio equals the target exactly
    or lies within ``tolerance_cents`` of it. The bracket vectors carry zero
    half-steps, so the half-step count of ``base`` is preserved.

    Raises:
        InvalidParameter:   For a bad target, tolerance or iteration cap.
        ConvergenceFailure: If ``max_iterations`` additions do not reach the tolerance.
    """
    target = validate_target(target_ratio, tolerance_cents)
    if max_iterations < 0:
        raise InvalidParameter(f"max_iterations must not be negative, got {max_iterations}.")

    target_cents = to_cents(target)
    accumulator = base
    steps = 0

    while True:
        ratio = accumulator.ratio
        error_cents = abs(target_cents - to_cents(ratio))
        if ratio == target or error_cents <= tolerance_cents:
            logger.info(
                "Drift converged after %d steps, error %.4f cents", steps, error_cents
            )
            return DriftResult(vector=accumulator, steps=steps, error_cents=error_cents)

        if steps >= max_iterations:
            raise ConvergenceFailure(steps, error_cents, accumulator)

        accumulator = accumulator + (down if ratio > target else up)
        steps += 1
        logger.debug("Drift step %d: %s, error was %.4f cents", steps, accumulator, error_cents)
