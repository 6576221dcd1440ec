"""Building a quiz from a question bank."""

from __future__ import annotations

import logging
from typing import List, Optional, Sequence

from ..utils.determinism import RandomSource, fisher_yates, make_rng
from .schemas import Question

logger = logging.getLogger(__name__)

MIN_QUIZ_LENGTH = 1
MAX_QUIZ_LENGTH = 50
DEFAULT_QUIZ_LENGTH = 10


def select_questions(
    questions: Sequence[Question],
    topics: Optional[Sequence[str]] = None,
    limit: int = DEFAULT_QUIZ_LENGTH,
    rng: Optional[RandomSource] = None,
) -> List[Question]:
    """Pick up to `limit` questions in random order.

    A non-empty `topics` keeps only questions whose topic is listed; an empty
    or missing list draws from the whole bank.
    """
    if isinstance(limit, bool) or not isinstance(limit, int):
        raise ValueError(f"limit must be an int, got {type(limit).__name__}")
    if not MIN_QUIZ_LENGTH <= limit <= MAX_QUIZ_LENGTH:
        raise ValueError(f"limit must be between {MIN_QUIZ_LENGTH} and {MAX_QUIZ_LENGTH}, got {limit}")

    pool = list(questions)
    if topics:
        wanted = set(topics)
        pool = [q for q in pool if q.topic in wanted]

    ordered, _ = fisher_yates(pool, rng if rng is not None else make_rng())
    picked = ordered[:limit]
    logger.debug("Selected %d of %d question(s) (topics=%s)", len(picked), len(pool), list(topics or []))
    return picked
