"""Score keeping and attempt-history statistics."""

from .stats import attempts_frame, filter_attempts, list_attempts, summarize_attempts
from .tracker import ScoreTracker, grade_message, percentage_of

__all__ = [
    "ScoreTracker",
    "grade_message",
    "percentage_of",
    "attempts_frame",
    "filter_attempts",
    "list_attempts",
    "summarize_attempts",
]
