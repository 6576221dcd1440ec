"""Answer-option shuffling with a map back to the canonical order."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Sequence, Tuple

from ..utils.determinism import RandomSource, fisher_yates


@dataclass(frozen=True)
class ShuffleMapping:
    """One presentation order for a question's options.

    `index_map[p]` is the canonical position of the option shown at shuffled
    position `p`. `shuffled_correct_index` is None when the canonical correct
    index was missing or out of range.
    """
    shuffled_options: Tuple[str, ...]
    index_map: Tuple[int, ...]
    shuffled_correct_index: Optional[int]

    def canonical_index(self, shuffled_position: int) -> int:
        return self.index_map[shuffled_position]

    def shuffled_position(self, canonical_index: int) -> Optional[int]:
        for p, c in enumerate(self.index_map):
            if c == canonical_index:
                return p
        return None


def shuffle_options(
    options: Sequence[str],
    correct_answer_index: Optional[int],
    rng: RandomSource,
) -> ShuffleMapping:
    shuffled, order = fisher_yates(options, rng)

    correct: Optional[int] = None
    if (
        isinstance(correct_answer_index, int)
        and not isinstance(correct_answer_index, bool)
        and 0 <= correct_answer_index < len(order)
    ):
        correct = order.index(correct_answer_index)

    return ShuffleMapping(
        shuffled_options=tuple(shuffled),
        index_map=tuple(order),
        shuffled_correct_index=correct,
    )
