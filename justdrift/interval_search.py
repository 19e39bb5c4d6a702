"""IntervalSearch: finds generator combinations by expanding-shell enumeration."""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterator
from enum import Enum

from justdrift.errors import InvalidParameter, SearchExhausted
from justdrift.intervals import (
    MAJOR_THIRD_HALF_STEPS,
    PERFECT_FIFTH_HALF_STEPS,
    PERFECT_FOURTH_HALF_STEPS,
    IntervalVector,
)

logger = logging.getLogger(__name__)


def signed_sequence(radius: int) -> list[int]:
    """
    Return the coefficient range of one shell: ``0, 1, -1, …, r-1, -(r-1)``.

    Zero comes first, then magnitudes grow one at a time with the positive
    value ahead of the negative one. The list has ``2·radius - 1`` entries.
    """
    values = [0]
    for magnitude in range(1, radius):
        values.extend((magnitude, -magnitude))
    return values


class BracketExclusion(Enum):
    """How the upward drift vector must differ from the downward one."""

    #: Every coefficient must differ from the matching coefficient of -down.
    COMPONENTWISE = "componentwise"
    #: Only the exact inverse -down is rejected.
    NEGATION = "negation"


class IntervalSearch:
    """
    Enumerates IntervalVectors in a fixed, reproducible order.

    Algorithm overview
    ------------------
    The search walks shells of growing radius ``m = 1, 2, 3, …``. Inside a
    shell every coefficient runs over ``signed_sequence(m)`` and the axes are
    nested major thirds (outer), perfect fourths, perfect fifths (inner). The
    first candidate satisfying the predicate wins, so results are deterministic
    but only minimal with respect to this traversal order.

    For a fixed (n3, n4) pair the half-step constraint leaves at most one
    admissible n5, which is solved for directly instead of scanned. This keeps
    the first-hit order of the full triple loop while a shell costs
    ``O(m²)`` instead of ``O(m³)``.

    Every search is bounded by ``max_radius``; a target that is not reached
    within it raises ``SearchExhausted``. With the generators {4, 5, 7}
    (gcd 1) every half-step count is reachable, so the bound only triggers for
    targets that are too large for it.
    """

    DEFAULT_MAX_RADIUS = 128

    def __init__(
        self,
        max_radius: int = DEFAULT_MAX_RADIUS,
        exclusion: BracketExclusion = BracketExclusion.COMPONENTWISE,
    ) -> None:
        """
        Args:
            max_radius: Largest shell radius examined before giving up.
            exclusion:  Rule used to keep the upward drift vector from being
                        the plain inverse of the downward one.
        """
        if max_radius < 1:
            raise InvalidParameter(f"max_radius must be at least 1, got {max_radius}.")
        self.max_radius = max_radius
        self.exclusion = exclusion

    # ------------------------------------------------------------------
    # Private helpers
    # ------------------------------------------------------------------

    def _shell(self, radius: int, half_steps: int) -> Iterator[IntervalVector]:
        """Yield every vector of one shell whose half-steps equal ``half_steps``."""
        values = signed_sequence(radius)
        limit = radius - 1
        for n3 in values:
            for n4 in values:
                remainder = half_steps - MAJOR_THIRD_HALF_STEPS * n3 - PERFECT_FOURTH_HALF_STEPS * n4
                n5, rest = divmod(remainder, PERFECT_FIFTH_HALF_STEPS)
                if rest == 0 and abs(n5) <= limit:
                    yield IntervalVector(n3, n4, n5)

    def _first_match(
        self,
        half_steps: int,
        accept: Callable[[IntervalVector], bool],
        what: str,
    ) -> IntervalVector:
        for radius in range(1, self.max_radius + 1):
            for candidate in self._shell(radius, half_steps):
                if accept(candidate):
                    logger.debug("Found %s %s at shell radius %d", what, candidate, radius)
                    return candidate
        raise SearchExhausted(what, self.max_radius)

    def _up_allowed(self, candidate: IntervalVector, down: IntervalVector) -> bool:
        inverse = -down
        if self.exclusion is BracketExclusion.NEGATION:
            return candidate != inverse
        return all(c != i for c, i in zip(candidate.coefficients, inverse.coefficients))

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def find_vector_for_half_steps(self, target: int) -> IntervalVector:
        """
        Return the first vector whose evaluated half-steps equal ``target``.

        Raises:
            SearchExhausted: If no shell up to ``max_radius`` contains a match.
        """
        return self._first_match(target, lambda _candidate: True, f"vector for {target} half-steps")

    def find_drift_bracket(self) -> tuple[IntervalVector, IntervalVector]:
        """
        Return ``(down, up)``: zero-half-step vectors with ratio < 1 and > 1.

        Both are non-zero and tuning-neutral on the keyboard, so adding them to
        a sequence changes only its just-intonation drift.

        Raises:
            SearchExhausted: If either vector lies beyond ``max_radius``.
        """
        down = self._first_match(
            0,
            lambda v: not v.is_zero() and v.ratio < 1,
            "downward drift vector",
        )
        up = self._first_match(
            0,
            lambda v: not v.is_zero() and v.ratio > 1 and self._up_allowed(v, down),
            "upward drift vector",
        )
        return down, up
