"""Exception hierarchy for the interval search and drift loop."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from justdrift.intervals import IntervalVector


class DriftError(Exception):
    """Base class for every failure raised by justdrift."""


class InvalidParameter(DriftError, ValueError):
    """A request parameter was rejected before any search started."""


class SearchExhausted(DriftError):
    """No matching vector was found within the shell radius bound."""

    def __init__(self, what: str, max_radius: int) -> None:
        super().__init__(f"No {what} found within shell radius {max_radius}.")
        self.what = what
        self.max_radius = max_radius


class ConvergenceFailure(DriftError):
    """
    The drift loop hit its iteration cap before reaching the tolerance.

    Attributes:
        iterations:  Number of bracket vectors added before giving up.
        error_cents: Remaining distance to the target ratio in cents.
        vector:      Accumulated vector at the moment the loop stopped.
    """

    def __init__(self, iterations: int, error_cents: float, vector: IntervalVector) -> None:
        super().__init__(
            f"Drift did not converge after {iterations} steps "
            f"(remaining error {error_cents:.3f} cents). Try a larger tolerance."
        )
        self.iterations = iterations
        self.error_cents = error_cents
        self.vector = vector
