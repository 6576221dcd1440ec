"""Data handling modules for quizdeck."""

from .schemas import (
    Answer,
    AnswerOutcome,
    DataQualityIssue,
    MultipleChoiceAnswer,
    OpenEndedAnswer,
    Question,
    QuestionType,
    TrueFalseAnswer,
    make_answer,
)
from .loader import load_questions
from .selection import select_questions

__all__ = [
    "Answer",
    "AnswerOutcome",
    "DataQualityIssue",
    "MultipleChoiceAnswer",
    "OpenEndedAnswer",
    "Question",
    "QuestionType",
    "TrueFalseAnswer",
    "make_answer",
    "load_questions",
    "select_questions",
]
