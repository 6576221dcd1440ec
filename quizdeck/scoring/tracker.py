"""Per-session score keeping."""

from __future__ import annotations

import logging
import math
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional, Sequence

from ..data.schemas import AnswerOutcome

logger = logging.getLogger(__name__)

# (minimum percentage, message), checked top-down
GRADE_BANDS = [
    (90, "Excellent!"),
    (80, "Great job!"),
    (70, "Good work!"),
    (60, "Not bad!"),
    (0, "Keep studying!"),
]


def round_half_up(x: float) -> int:
    return int(math.floor(x + 0.5))


def percentage_of(correct: int, total: int) -> int:
    return round_half_up(correct / total * 100) if total > 0 else 0


def grade_message(percentage: float) -> str:
    for floor, message in GRADE_BANDS:
        if percentage >= floor:
            return message
    return GRADE_BANDS[-1][1]


class ScoreTracker:
    """Collects answer outcomes for one quiz run.

    Only the first outcome per question id counts. Pass `tracker.record` as
    the `on_answer` callback of a presenter or PresentationSession.
    """

    def __init__(self) -> None:
        self._outcomes: Dict[str, AnswerOutcome] = {}

    def record(self, outcome: AnswerOutcome) -> None:
        if outcome.question_id in self._outcomes:
            logger.debug("Outcome for question %s already recorded", outcome.question_id)
            return
        self._outcomes[outcome.question_id] = outcome

    def outcome_for(self, question_id: str) -> Optional[AnswerOutcome]:
        return self._outcomes.get(question_id)

    @property
    def outcomes(self) -> List[AnswerOutcome]:
        return list(self._outcomes.values())

    @property
    def total(self) -> int:
        return len(self._outcomes)

    @property
    def correct_count(self) -> int:
        return sum(1 for o in self._outcomes.values() if o.is_correct)

    @property
    def percentage(self) -> int:
        return percentage_of(self.correct_count, self.total)

    def grade_message(self) -> str:
        return grade_message(self.percentage)

    def to_attempt(
        self,
        topics: Sequence[str],
        visitor_id: Optional[str] = None,
        user_id: Optional[int] = None,
    ) -> Dict[str, Any]:
        attempt: Dict[str, Any] = {
            "topics": list(topics),
            "totalQuestions": self.total,
            "correctAnswers": self.correct_count,
            "percentage": self.percentage,
            "answers": [o.to_dict() for o in self._outcomes.values()],
            "date": datetime.now(timezone.utc).isoformat().replace("+00:00", "Z"),
        }
        if visitor_id is not None:
            attempt["visitorId"] = visitor_id
        if user_id is not None:
            attempt["userId"] = user_id
        return attempt
