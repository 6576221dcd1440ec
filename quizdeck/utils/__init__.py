"""Utilities for quizdeck."""

from .determinism import RandomSource, fisher_yates, make_rng
from .logging import setup_logging
from .validation import QuestionBankError, ValidationError, validate_questions, validate_records

__all__ = [
    "RandomSource",
    "fisher_yates",
    "make_rng",
    "setup_logging",
    "QuestionBankError",
    "ValidationError",
    "validate_questions",
    "validate_records",
]
