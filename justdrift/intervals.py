"""Just-intonation generator intervals and their integer combinations."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from fractions import Fraction

# ── Generator constants ──────────────────────────────────────────────────────

MAJOR_THIRD_HALF_STEPS = 4
PERFECT_FOURTH_HALF_STEPS = 5
PERFECT_FIFTH_HALF_STEPS = 7

MAJOR_THIRD_RATIO = Fraction(5, 4)
PERFECT_FOURTH_RATIO = Fraction(4, 3)
PERFECT_FIFTH_RATIO = Fraction(3, 2)


@dataclass(frozen=True)
class Interval:
    """
    A musical interval as a pair of tempered and just measures.

    Attributes:
        half_steps: Distance on the 12-tone keyboard (negative = downward).
        ratio:      Exact frequency ratio of the just interval.
    """

    half_steps: int
    ratio: Fraction

    # All other intervals are built from these three.
    @classmethod
    def major_third(cls) -> Interval:
        return cls(MAJOR_THIRD_HALF_STEPS, MAJOR_THIRD_RATIO)

    @classmethod
    def perfect_fourth(cls) -> Interval:
        return cls(PERFECT_FOURTH_HALF_STEPS, PERFECT_FOURTH_RATIO)

    @classmethod
    def perfect_fifth(cls) -> Interval:
        return cls(PERFECT_FIFTH_HALF_STEPS, PERFECT_FIFTH_RATIO)

    @classmethod
    def unison(cls) -> Interval:
        return cls(0, Fraction(1))

    def __neg__(self) -> Interval:
        return Interval(-self.half_steps, 1 / self.ratio)

    def __add__(self, other: Interval) -> Interval:
        return Interval(self.half_steps + other.half_steps, self.ratio * other.ratio)

    def __sub__(self, other: Interval) -> Interval:
        return Interval(self.half_steps - other.half_steps, self.ratio / other.ratio)

    def __mul__(self, factor: int) -> Interval:
        return Interval(self.half_steps * factor, self.ratio**factor)

    __rmul__ = __mul__


class JustInterval(Enum):
    """A single signed generator step, the atomic token of a sequence."""

    UNISON = "Unison"
    MAJOR_THIRD = "MajorThird"
    INVERTED_MAJOR_THIRD = "InvertedMajorThird"
    PERFECT_FOURTH = "PerfectFourth"
    INVERTED_PERFECT_FOURTH = "InvertedPerfectFourth"
    PERFECT_FIFTH = "PerfectFifth"
    INVERTED_PERFECT_FIFTH = "InvertedPerfectFifth"

    @property
    def interval(self) -> Interval:
        return _TOKEN_INTERVALS[self]

    @property
    def half_steps(self) -> int:
        return self.interval.half_steps

    @property
    def ratio(self) -> Fraction:
        return self.interval.ratio

    @property
    def is_inverted(self) -> bool:
        return self.value.startswith("Inverted")

    def __neg__(self) -> JustInterval:
        return _TOKEN_INVERSES[self]

    def __mul__(self, sign: int) -> JustInterval:
        """Sign-scale a token: unchanged for n > 0, unison for 0, inverted for n < 0."""
        if sign > 0:
            return self
        if sign == 0:
            return JustInterval.UNISON
        return -self

    def __str__(self) -> str:
        return self.value


_TOKEN_INTERVALS: dict[JustInterval, Interval] = {
    JustInterval.UNISON: Interval.unison(),
    JustInterval.MAJOR_THIRD: Interval.major_third(),
    JustInterval.INVERTED_MAJOR_THIRD: -Interval.major_third(),
    JustInterval.PERFECT_FOURTH: Interval.perfect_fourth(),
    JustInterval.INVERTED_PERFECT_FOURTH: -Interval.perfect_fourth(),
    JustInterval.PERFECT_FIFTH: Interval.perfect_fifth(),
    JustInterval.INVERTED_PERFECT_FIFTH: -Interval.perfect_fifth(),
}

_TOKEN_INVERSES: dict[JustInterval, JustInterval] = {
    JustInterval.UNISON: JustInterval.UNISON,
    JustInterval.MAJOR_THIRD: JustInterval.INVERTED_MAJOR_THIRD,
    JustInterval.INVERTED_MAJOR_THIRD: JustInterval.MAJOR_THIRD,
    JustInterval.PERFECT_FOURTH: JustInterval.INVERTED_PERFECT_FOURTH,
    JustInterval.INVERTED_PERFECT_FOURTH: JustInterval.PERFECT_FOURTH,
    JustInterval.PERFECT_FIFTH: JustInterval.INVERTED_PERFECT_FIFTH,
    JustInterval.INVERTED_PERFECT_FIFTH: JustInterval.PERFECT_FIFTH,
}

#: Generator tokens in axis order of IntervalVector (thirds, fourths, fifths).
GENERATORS: tuple[JustInterval, ...] = (
    JustInterval.MAJOR_THIRD,
    JustInterval.PERFECT_FOURTH,
    JustInterval.PERFECT_FIFTH,
)


@dataclass(frozen=True)
class IntervalVector:
    """
    A signed count of each generator interval.

    Positive counts step upward by the generator, negative counts by its
    inversion. The vector evaluates to ``4·n3 + 5·n4 + 7·n5`` half-steps and a
    frequency ratio of ``(5/4)^n3 · (4/3)^n4 · (3/2)^n5``.

    Attributes:
        major_thirds:    n3, signed number of major thirds.
        perfect_fourths: n4, signed number of perfect fourths.
        perfect_fifths:  n5, signed number of perfect fifths.
    """

    major_thirds: int = 0
    perfect_fourths: int = 0
    perfect_fifths: int = 0

    @classmethod
    def zero(cls) -> IntervalVector:
        return cls(0, 0, 0)

    @property
    def coefficients(self) -> tuple[int, int, int]:
        return (self.major_thirds, self.perfect_fourths, self.perfect_fifths)

    @property
    def half_steps(self) -> int:
        return (
            MAJOR_THIRD_HALF_STEPS * self.major_thirds
            + PERFECT_FOURTH_HALF_STEPS * self.perfect_fourths
            + PERFECT_FIFTH_HALF_STEPS * self.perfect_fifths
        )

    @property
    def ratio(self) -> Fraction:
        return (
            MAJOR_THIRD_RATIO**self.major_thirds
            * PERFECT_FOURTH_RATIO**self.perfect_fourths
            * PERFECT_FIFTH_RATIO**self.perfect_fifths
        )

    @property
    def interval(self) -> Interval:
        return Interval(self.half_steps, self.ratio)

    @property
    def num_intervals(self) -> int:
        """Number of tokens the vector expands to."""
        return sum(abs(n) for n in self.coefficients)

    @property
    def absolute_half_steps(self) -> int:
        """Total keyboard distance travelled, ignoring direction."""
        return (
            MAJOR_THIRD_HALF_STEPS * abs(self.major_thirds)
            + PERFECT_FOURTH_HALF_STEPS * abs(self.perfect_fourths)
            + PERFECT_FIFTH_HALF_STEPS * abs(self.perfect_fifths)
        )

    def is_zero(self) -> bool:
        return self.coefficients == (0, 0, 0)

    def __add__(self, other: IntervalVector) -> IntervalVector:
        return IntervalVector(
            self.major_thirds + other.major_thirds,
            self.perfect_fourths + other.perfect_fourths,
            self.perfect_fifths + other.perfect_fifths,
        )

    def __neg__(self) -> IntervalVector:
        return IntervalVector(-self.major_thirds, -self.perfect_fourths, -self.perfect_fifths)

    def __sub__(self, other: IntervalVector) -> IntervalVector:
        return self + (-other)

    def __mul__(self, factor: int) -> IntervalVector:
        return IntervalVector(
            self.major_thirds * factor,
            self.perfect_fourths * factor,
            self.perfect_fifths * factor,
        )

    __rmul__ = __mul__

    def expand(self) -> list[JustInterval]:
        """
        Expand the vector into an unordered multiset of signed tokens.

        Each axis contributes ``|count|`` copies of its generator, or of the
        inverted generator when the count is negative. The order of the result
        carries no meaning; pass it through ``distributor.schedule`` to spread
        the tokens out.
        """
        tokens: list[JustInterval] = []
        for generator, count in zip(GENERATORS, self.coefficients):
            tokens.extend([generator * count] * abs(count))
        return tokens

    def __str__(self) -> str:
        return f"({self.major_thirds}, {self.perfect_fourths}, {self.perfect_fifths})"
