from __future__ import annotations

import random
from typing import List, Optional, Protocol, Sequence, Tuple, TypeVar

T = TypeVar("T")


class RandomSource(Protocol):
    """Anything that can draw a uniform integer in [a, b] (both inclusive)."""

    def randint(self, a: int, b: int) -> int: ...


def make_rng(seed: Optional[int] = None) -> random.Random:
    """Return a private `random.Random`, seeded when `seed` is given.

    The global `random` state is left alone so presenters never interfere
    with each other or with the caller.
    """
    return random.Random(seed)


def fisher_yates(items: Sequence[T], rng: RandomSource) -> Tuple[List[T], List[int]]:
    """Uniformly permute `items`, returning (shuffled items, index map)."""
    shuffled = list(items)
    order = list(range(len(shuffled)))
    for i in range(len(shuffled) - 1, 0, -1):
        j = rng.randint(0, i)
        shuffled[i], shuffled[j] = shuffled[j], shuffled[i]
        order[i], order[j] = order[j], order[i]
    return shuffled, order
