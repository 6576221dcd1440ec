"""quizdeck package.

Shuffled multiple-choice presentation with grading against the original
answer key, plus the loading, validation and scoring pieces around it.
"""

from .config import AppConfig, default_app_config
from .data import (
    AnswerOutcome,
    MultipleChoiceAnswer,
    OpenEndedAnswer,
    Question,
    QuestionType,
    TrueFalseAnswer,
    load_questions,
    make_answer,
    select_questions,
)
from .presenter import PresentationSession, ShuffledQuestionPresenter, ShuffleMapping, shuffle_options
from .scoring import ScoreTracker, list_attempts, summarize_attempts
from .statistical import audit_shuffle_uniformity
from .utils import make_rng, setup_logging, validate_questions

__all__ = [
    "__version__",
    "AppConfig",
    "default_app_config",
    "AnswerOutcome",
    "MultipleChoiceAnswer",
    "OpenEndedAnswer",
    "Question",
    "QuestionType",
    "TrueFalseAnswer",
    "load_questions",
    "make_answer",
    "select_questions",
    "PresentationSession",
    "ShuffledQuestionPresenter",
    "ShuffleMapping",
    "shuffle_options",
    "ScoreTracker",
    "list_attempts",
    "summarize_attempts",
    "audit_shuffle_uniformity",
    "make_rng",
    "setup_logging",
    "validate_questions",
]

__version__ = "0.1.0"
