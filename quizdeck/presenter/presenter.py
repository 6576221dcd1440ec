"""Per-question presentation and grading.

A presenter walks one question instance through
UNPREPARED -> PREPARED -> ANSWERED. The shuffle is drawn once, on the first
`prepare()`, and the first `submit_answer()` is the only one that counts.
Multiple-choice selections are positions in the shuffled order and are graded
against the shuffled correct position; true/false and open-ended questions
never look at shuffle state.

Bad question data never raises here. It is reported as a DataQualityIssue
(logged, kept on `issues`, forwarded to `on_issue`) and the question simply
can't be answered correctly.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Callable, List, Optional, Tuple

from ..data.schemas import (
    Answer,
    AnswerOutcome,
    DataQualityIssue,
    MultipleChoiceAnswer,
    Question,
    QuestionType,
    TrueFalseAnswer,
    answer_type_for,
)
from ..utils.determinism import RandomSource, make_rng
from ..utils.validation import MIN_OPTIONS, check_question
from .shuffle import ShuffleMapping, shuffle_options

logger = logging.getLogger(__name__)

AnswerCallback = Callable[[AnswerOutcome], None]
IssueCallback = Callable[[DataQualityIssue], None]


class PresenterState(str, Enum):
    UNPREPARED = "unprepared"
    PREPARED = "prepared"
    ANSWERED = "answered"


class OptionState(str, Enum):
    NEUTRAL = "neutral"
    CORRECT = "correct"
    INCORRECT = "incorrect"
    DIMMED = "dimmed"


@dataclass(frozen=True)
class Feedback:
    is_correct: bool
    correct_answer_text: Optional[str]


def option_label(position: int) -> str:
    return chr(ord("A") + position)


class ShuffledQuestionPresenter:
    def __init__(
        self,
        question: Question,
        rng: Optional[RandomSource] = None,
        on_answer: Optional[AnswerCallback] = None,
        on_issue: Optional[IssueCallback] = None,
    ):
        self.question = question
        self._rng = rng if rng is not None else make_rng()
        self._on_answer = on_answer
        self._on_issue = on_issue
        self._state = PresenterState.UNPREPARED
        self._mapping: Optional[ShuffleMapping] = None
        self._answer: Optional[Answer] = None
        self._outcome: Optional[AnswerOutcome] = None
        self.issues: List[DataQualityIssue] = []

    @property
    def state(self) -> PresenterState:
        return self._state

    @property
    def mapping(self) -> Optional[ShuffleMapping]:
        return self._mapping

    @property
    def answered(self) -> bool:
        return self._state is PresenterState.ANSWERED

    @property
    def outcome(self) -> Optional[AnswerOutcome]:
        return self._outcome

    @property
    def options(self) -> Optional[Tuple[str, ...]]:
        """Options in display order (None for non multiple-choice questions)."""
        return self._mapping.shuffled_options if self._mapping else None

    def prepare(self) -> Optional[ShuffleMapping]:
        if self._state is not PresenterState.UNPREPARED:
            # Same question still on screen: keep the order the learner is looking at.
            return self._mapping

        q = self.question
        if q.type is QuestionType.MULTIPLE_CHOICE and q.options is not None:
            self._mapping = shuffle_options(q.options, q.correct_answer_index, self._rng)

        for issue in check_question(q):
            self._report(issue)

        self._state = PresenterState.PREPARED
        return self._mapping

    def submit_answer(self, answer: Answer) -> AnswerOutcome:
        if self._state is PresenterState.ANSWERED:
            logger.debug("Ignoring repeated answer for question %s", self.question.id)
            return self._outcome  # type: ignore[return-value]
        if self._state is PresenterState.UNPREPARED:
            self.prepare()

        is_correct = self._grade(answer)
        self._answer = answer
        self._outcome = AnswerOutcome(
            question_id=self.question.id,
            recorded_answer=getattr(answer, "raw", answer),
            is_correct=is_correct,
        )
        self._state = PresenterState.ANSWERED

        if self._on_answer is not None:
            self._on_answer(self._outcome)
        return self._outcome

    def _grade(self, answer: Answer) -> bool:
        q = self.question
        expected = answer_type_for(q)
        if not isinstance(answer, expected):
            self._report(DataQualityIssue(
                q.id,
                "answer_type_mismatch",
                f"{type(answer).__name__} submitted for a {q.type.value} question",
            ))
            return False

        if q.type is QuestionType.MULTIPLE_CHOICE:
            if isinstance(answer.index, bool) or not isinstance(answer.index, int):
                self._report(DataQualityIssue(
                    q.id,
                    "answer_type_mismatch",
                    f"{type(answer.index).__name__} submitted as a multiple-choice position",
                ))
                return False
            m = self._mapping
            if m is None or m.shuffled_correct_index is None or len(m.shuffled_options) < MIN_OPTIONS:
                return False
            return answer.index == m.shuffled_correct_index
        if q.type is QuestionType.TRUE_FALSE:
            return isinstance(q.correct_answer, bool) and answer.value == q.correct_answer
        # Open-ended answers are recorded as submitted, not graded.
        return True

    def _report(self, issue: DataQualityIssue) -> None:
        self.issues.append(issue)
        logger.warning(
            "Question %s: %s",
            issue.question_id,
            issue.message,
            extra={"question_id": issue.question_id, "issue_code": issue.code},
        )
        if self._on_issue is not None:
            self._on_issue(issue)

    # -- revealed state ------------------------------------------------------

    def _selected_position(self) -> Optional[int]:
        if isinstance(self._answer, MultipleChoiceAnswer):
            index = self._answer.index
            if isinstance(index, int) and not isinstance(index, bool):
                return index
        return None

    def option_states(self) -> List[OptionState]:
        if self._mapping is None:
            return []
        n = len(self._mapping.shuffled_options)
        if not self.answered:
            return [OptionState.NEUTRAL] * n

        correct = self._mapping.shuffled_correct_index
        selected = self._selected_position()
        states = []
        for p in range(n):
            if p == correct:
                states.append(OptionState.CORRECT)
            elif p == selected:
                states.append(OptionState.INCORRECT)
            else:
                states.append(OptionState.DIMMED)
        return states

    def true_false_states(self) -> Tuple[OptionState, ...]:
        """States for the (True, False) buttons."""
        q = self.question
        if q.type is not QuestionType.TRUE_FALSE:
            return ()
        if not self.answered:
            return (OptionState.NEUTRAL, OptionState.NEUTRAL)

        selected = self._answer.value if isinstance(self._answer, TrueFalseAnswer) else None
        states = []
        for value in (True, False):
            if value == q.correct_answer:
                states.append(OptionState.CORRECT)
            elif value == selected:
                states.append(OptionState.INCORRECT)
            else:
                states.append(OptionState.DIMMED)
        return tuple(states)

    def labelled_options(self) -> List[Tuple[str, str]]:
        if self._mapping is None:
            return []
        return [(option_label(p), text) for p, text in enumerate(self._mapping.shuffled_options)]

    def feedback(self) -> Optional[Feedback]:
        q = self.question
        if not self.answered or q.type is QuestionType.OPEN_ENDED:
            return None

        text: Optional[str] = None
        if q.type is QuestionType.MULTIPLE_CHOICE:
            m = self._mapping
            if m is not None and m.shuffled_correct_index is not None:
                text = m.shuffled_options[m.shuffled_correct_index]
        elif isinstance(q.correct_answer, bool):
            text = "True" if q.correct_answer else "False"
        return Feedback(is_correct=self._outcome.is_correct, correct_answer_text=text)
