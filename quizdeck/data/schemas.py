"""Data schemas for quizdeck."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, NamedTuple, Optional, Tuple, Union


class QuestionType(str, Enum):
    MULTIPLE_CHOICE = "multiple_choice"
    TRUE_FALSE = "true_false"
    OPEN_ENDED = "open_ended"


class Question(NamedTuple):
    """Question record as handed over by the question supply.

    `correct_answer_index` refers to the canonical (stored) order of `options`.
    """
    id: str
    type: QuestionType
    question: str = ""
    topic: str = ""
    options: Optional[Tuple[str, ...]] = None
    correct_answer_index: Optional[int] = None
    correct_answer: Optional[bool] = None
    suggested_answer: Optional[str] = None

    @classmethod
    def from_dict(cls, row: Dict[str, Any]) -> "Question":
        """Build a Question from a snake_case or camelCase mapping."""
        if "id" not in row or row["id"] is None:
            raise ValueError("Row missing id")
        raw_type = row.get("type", QuestionType.MULTIPLE_CHOICE.value)
        try:
            qtype = QuestionType(raw_type)
        except ValueError:
            raise ValueError(f"Unknown question type in row {row['id']}: {raw_type!r}")

        options = row.get("options")
        if options is not None:
            if not isinstance(options, (list, tuple)):
                raise ValueError(f"options must be a list in row {row['id']}, got {type(options).__name__}")
            options = tuple(str(o) for o in options)

        return cls(
            id=str(row["id"]),
            type=qtype,
            question=str(row.get("question", "")).strip(),
            topic=str(row.get("topic", "")),
            options=options,
            correct_answer_index=_first_present(row, "correct_answer_index", "correctAnswerIndex"),
            correct_answer=_first_present(row, "correct_answer", "correctAnswer"),
            suggested_answer=_first_present(row, "suggested_answer", "suggestedAnswer"),
        )


def _first_present(row: Dict[str, Any], *keys: str) -> Any:
    for key in keys:
        if row.get(key) is not None:
            return row[key]
    return None


@dataclass(frozen=True)
class MultipleChoiceAnswer:
    """Selected position in the shuffled option order."""
    index: int

    @property
    def raw(self) -> int:
        return self.index


@dataclass(frozen=True)
class TrueFalseAnswer:
    value: bool

    @property
    def raw(self) -> bool:
        return self.value


@dataclass(frozen=True)
class OpenEndedAnswer:
    text: str = ""

    @property
    def raw(self) -> str:
        return self.text


Answer = Union[MultipleChoiceAnswer, TrueFalseAnswer, OpenEndedAnswer]

_ANSWER_TYPES = {
    QuestionType.MULTIPLE_CHOICE: MultipleChoiceAnswer,
    QuestionType.TRUE_FALSE: TrueFalseAnswer,
    QuestionType.OPEN_ENDED: OpenEndedAnswer,
}


def answer_type_for(question: Question) -> type:
    return _ANSWER_TYPES[question.type]


def make_answer(question: Question, raw: Any) -> Answer:
    """Wrap a raw selection in the answer variant matching the question type."""
    if question.type is QuestionType.MULTIPLE_CHOICE:
        if isinstance(raw, bool) or not isinstance(raw, int):
            raise TypeError(f"Multiple-choice answer must be an int position, got {type(raw).__name__}")
        return MultipleChoiceAnswer(raw)
    if question.type is QuestionType.TRUE_FALSE:
        if not isinstance(raw, bool):
            raise TypeError(f"True/false answer must be a bool, got {type(raw).__name__}")
        return TrueFalseAnswer(raw)
    return OpenEndedAnswer("" if raw is None else str(raw))


@dataclass(frozen=True)
class AnswerOutcome:
    """What gets handed to the scoring collaborator for one question."""
    question_id: str
    recorded_answer: Union[int, bool, str]
    is_correct: bool

    def to_dict(self) -> Dict[str, Any]:
        return {
            "questionId": self.question_id,
            "userAnswer": self.recorded_answer,
            "isCorrect": self.is_correct,
        }


@dataclass(frozen=True)
class DataQualityIssue:
    question_id: str
    code: str
    message: str
