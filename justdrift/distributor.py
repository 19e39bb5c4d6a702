"""Fair distribution of repeated tokens by virtual-time scheduling."""

from __future__ import annotations

from collections import Counter
from collections.abc import Hashable, Iterable, Sequence
from dataclasses import dataclass
from typing import Generic, TypeVar

T = TypeVar("T", bound=Hashable)


@dataclass
class _SchedulerEntry(Generic[T]):
    """
    Bookkeeping for one distinct value.

    Attributes:
        value:        The value emitted by this entry.
        count:        Emissions still owed.
        period:       Total token count divided by the value's count.
        virtual_time: Ideal position of the next emission.
    """

    value: T
    count: int
    period: float
    virtual_time: float


def _insert(entries: list[_SchedulerEntry[T]], entry: _SchedulerEntry[T]) -> None:
    """
    Insert ``entry`` so the list stays sorted by descending virtual time.

    A single bubble pass runs from the tail to the head. On equal virtual
    times the entry with the smaller (or equal) period moves toward the tail,
    so more frequent values are emitted first.
    """
    entries.append(entry)
    for idx in range(len(entries) - 1, 0, -1):
        current, previous = entries[idx], entries[idx - 1]
        if current.virtual_time > previous.virtual_time or (
            current.virtual_time == previous.virtual_time and current.period <= previous.period
        ):
            entries[idx], entries[idx - 1] = previous, current


def distribute(counts: Sequence[tuple[int, T]]) -> list[T]:
    """
    Spread repeated values as evenly as possible over one sequence.

    Each value with count ``c`` out of ``N`` tokens gets a period ``N / c``
    and is first due at half its period. The value with the smallest virtual
    time is emitted next and then rescheduled one period later, the stride
    technique of weighted round-robin schedulers.

    Args:
        counts: ``(count, value)`` pairs. Values with a zero count are skipped.

    Returns:
        A list holding every value exactly ``count`` times.

    Example:
        >>> distribute([(2, "a"), (2, "b"), (2, "c")])
        ['a', 'b', 'c', 'a', 'b', 'c']
    """
    total = sum(count for count, _value in counts)
    entries: list[_SchedulerEntry[T]] = []
    for count, value in counts:
        if count < 0:
            raise ValueError(f"Counts must not be negative, got {count} for {value!r}.")
        if count > 0:
            period = total / count
            _insert(entries, _SchedulerEntry(value, count, period, period / 2.0))

    ordered: list[T] = []
    while entries:
        entry = entries.pop()
        ordered.append(entry.value)
        entry.count -= 1
        entry.virtual_time += entry.period
        if entry.count > 0:
            _insert(entries, entry)
    return ordered


def schedule(tokens: Iterable[T]) -> list[T]:
    """Reorder a multiset of tokens, counting values in first-appearance order."""
    counts = Counter(tokens)
    return distribute([(count, value) for value, count in counts.items()])
