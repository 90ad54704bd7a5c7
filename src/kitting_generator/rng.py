"""Seeded randomization utility."""

from __future__ import annotations

import random
from typing import Collection, Sequence, TypeVar

T = TypeVar("T")


class Rng(random.Random):
    """
    ``random.Random`` with helpers for generating problem instances.

    Every draw is a function of the seed and the sequence of calls, so two
    sources built from the same seed produce the same values. A source is
    not safe to share between threads.
    """

    def __init__(self, seed: int) -> None:
        super().__init__(seed)

    def bounded_int(self, lo: int, hi: int) -> int:
        """Uniformly random in [lo, hi]. Hence lo == hi is allowed."""
        if hi < lo:
            raise ValueError(f"Empty range [{lo}, {hi}]")
        return self.randint(lo, hi)

    def bounded_double(self, lo: float, hi: float) -> float:
        """Uniformly random in [lo, hi[."""
        if hi < lo:
            raise ValueError(f"Empty range [{lo}, {hi}[")
        return lo + (hi - lo) * self.random()

    def bernoulli(self, probability: float) -> bool:
        """Generate ``True`` with the given probability."""
        if probability > 1.0 or probability < 0.0:
            raise ValueError(f"{probability} not in [0,1]")
        return self.random() < probability

    def take_random(self, items: list[T]) -> T:
        """
        Remove and return an element from the list.
        Mutates the given ``items``!
        """
        if not items:
            raise ValueError("Cannot remove an element from an empty list")
        return items.pop(self.randrange(len(items)))

    def peek_random(self, items: Collection[T]) -> T:
        """
        Return an element from the collection.

        Sets are picked from in iteration order, which for most element types
        is not stable between processes; pass a sequence to stay reproducible.
        """
        if not items:
            raise ValueError("Cannot select an element from an empty collection")
        seq = items if isinstance(items, Sequence) else list(items)
        return seq[self.randrange(len(seq))]

    def shuffled_copy(self, items: Collection[T]) -> list[T]:
        """Return a shuffled copy of the collection."""
        copy = list(items)
        self.shuffle(copy)
        return copy

    def random_sublist(self, items: Collection[T], size: int) -> list[T]:
        """The first ``size`` elements of a shuffled copy."""
        if size < 0 or size > len(items):
            raise ValueError(f"Cannot take {size} of {len(items)} elements")
        return self.shuffled_copy(items)[:size]

    def random_subset(self, items: Collection[T], size: int) -> set[T]:
        """
        Like :meth:`random_sublist` but returns a set.

        If ``items`` is NOT a set AND contains duplicates, the returned set
        will have fewer than ``size`` elements.
        """
        return set(self.random_sublist(items, size))
