"""Question presentation: option shuffling and answer grading."""

from .presenter import (
    Feedback,
    OptionState,
    PresenterState,
    ShuffledQuestionPresenter,
    option_label,
)
from .session import PresentationSession
from .shuffle import ShuffleMapping, fisher_yates, shuffle_options

__all__ = [
    "Feedback",
    "OptionState",
    "PresenterState",
    "ShuffledQuestionPresenter",
    "option_label",
    "PresentationSession",
    "ShuffleMapping",
    "fisher_yates",
    "shuffle_options",
]
