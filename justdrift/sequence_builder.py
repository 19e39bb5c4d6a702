"""SequenceBuilder: runs search, drift loop and distribution end to end."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from fractions import Fraction

from justdrift.distributor import schedule
from justdrift.drift import DEFAULT_MAX_ITERATIONS, DriftResult, converge, validate_target
from justdrift.interval_search import BracketExclusion, IntervalSearch
from justdrift.intervals import IntervalVector, JustInterval

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class DriftSequence:
    """
    Everything produced while building one drifting interval sequence.

    Attributes:
        base:   Vector matching the requested half-step count.
        down:   Zero-half-step vector lowering the ratio.
        up:     Zero-half-step vector raising the ratio.
        result: Outcome of the drift loop (final vector, steps, error).
        tokens: Final vector expanded and evenly distributed.
    """

    base: IntervalVector
    down: IntervalVector
    up: IntervalVector
    result: DriftResult
    tokens: list[JustInterval] = field(default_factory=list)

    @property
    def vector(self) -> IntervalVector:
        return self.result.vector

    @property
    def half_steps(self) -> int:
        return sum(token.half_steps for token in self.tokens)

    @property
    def ratio(self) -> Fraction:
        ratio = Fraction(1)
        for token in self.tokens:
            ratio *= token.ratio
        return ratio


class SequenceBuilder:
    """
    Builds a token sequence hitting a half-step count and a drift target.

    The builder owns an ``IntervalSearch`` so repeated builds share its
    bounds and exclusion rule.
    """

    def __init__(
        self,
        max_radius: int = IntervalSearch.DEFAULT_MAX_RADIUS,
        max_iterations: int = DEFAULT_MAX_ITERATIONS,
        exclusion: BracketExclusion = BracketExclusion.COMPONENTWISE,
    ) -> None:
        self.search = IntervalSearch(max_radius=max_radius, exclusion=exclusion)
        self.max_iterations = max_iterations

    def build(
        self,
        target_half_steps: int,
        target_ratio: Fraction | float = 1,
        tolerance_cents: float = 1.0,
    ) -> DriftSequence:
        """
        Run the full pipeline.

        Args:
            target_half_steps: Net half-steps the sequence must span.
            target_ratio:      Frequency scale the sequence should drift to.
            tolerance_cents:   Allowed distance from ``target_ratio`` in cents.

        Raises:
            InvalidParameter:   For a bad ratio or tolerance, before searching.
            SearchExhausted:    If a search exceeds its radius bound.
            ConvergenceFailure: If the drift loop exceeds its iteration cap.
        """
        target = validate_target(target_ratio, tolerance_cents)

        base = self.search.find_vector_for_half_steps(target_half_steps)
        logger.info("Half-step vector %s: %d half-steps, ratio %s", base, base.half_steps, base.ratio)

        down, up = self.search.find_drift_bracket()
        logger.info("Drift bracket down=%s (%s) up=%s (%s)", down, down.ratio, up, up.ratio)

        result = converge(base, down, up, target, tolerance_cents, self.max_iterations)
        tokens = schedule(result.vector.expand())
        return DriftSequence(base=base, down=down, up=up, result=result, tokens=tokens)


def compute_sequence(
    target_half_steps: int,
    target_ratio: Fraction | float,
    tolerance_cents: float,
    *,
    max_radius: int = IntervalSearch.DEFAULT_MAX_RADIUS,
    max_iterations: int = DEFAULT_MAX_ITERATIONS,
    exclusion: BracketExclusion = BracketExclusion.COMPONENTWISE,
) -> list[JustInterval]:
    """Return the ordered token sequence for the given targets."""
    builder = SequenceBuilder(max_radius=max_radius, max_iterations=max_iterations, exclusion=exclusion)
    return builder.build(target_half_steps, target_ratio, tolerance_cents).tokens
