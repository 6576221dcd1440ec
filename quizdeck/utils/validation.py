"""Data-quality checks for question banks."""

import logging
from typing import Any, Dict, Iterable, List, Optional

from ..data.schemas import DataQualityIssue, Question, QuestionType

logger = logging.getLogger(__name__)

MIN_OPTIONS = 2


class ValidationError(Exception):
    """Base exception for validation errors."""
    pass


class QuestionBankError(ValidationError):
    """Raised when a question bank has data-quality issues and strict mode is on."""
    def __init__(self, message: str, issues: Optional[List[DataQualityIssue]] = None):
        super().__init__(message)
        self.issues = issues or []


def check_question(question: Question) -> List[DataQualityIssue]:
    """Return the data-quality issues for a single question (empty if clean)."""
    qid = question.id
    issues: List[DataQualityIssue] = []

    if question.type is QuestionType.MULTIPLE_CHOICE:
        options = question.options
        if options is None:
            issues.append(DataQualityIssue(qid, "missing_options", "multiple-choice question has no options"))
        elif len(options) < MIN_OPTIONS:
            issues.append(DataQualityIssue(
                qid, "too_few_options",
                f"multiple-choice question has {len(options)} option(s), need at least {MIN_OPTIONS}",
            ))

        idx = question.correct_answer_index
        if idx is None:
            issues.append(DataQualityIssue(qid, "missing_correct_index", "correct answer index is missing"))
        elif options is not None and not _index_in_range(idx, len(options)):
            issues.append(DataQualityIssue(
                qid, "correct_index_out_of_range",
                f"correct answer index {idx!r} is outside [0, {len(options)})",
            ))

    elif question.type is QuestionType.TRUE_FALSE:
        if not isinstance(question.correct_answer, bool):
            issues.append(DataQualityIssue(qid, "missing_correct_answer", "true/false question has no boolean answer"))

    return issues


def _index_in_range(idx: Any, n: int) -> bool:
    return isinstance(idx, int) and not isinstance(idx, bool) and 0 <= idx < n


def validate_questions(questions: Iterable[Question], strict: bool = False) -> List[DataQualityIssue]:
    """Collect data-quality issues across a bank.

    With `strict=True` a non-empty result raises QuestionBankError instead.
    """
    issues: List[DataQualityIssue] = []
    for q in questions:
        issues.extend(check_question(q))

    if issues:
        logger.warning("Found %d data-quality issue(s)", len(issues))
        if strict:
            raise QuestionBankError(f"Question bank has {len(issues)} data-quality issue(s)", issues)
    return issues


def validate_records(rows: Iterable[Dict[str, Any]], strict: bool = False) -> List[DataQualityIssue]:
    """Like validate_questions but starts from raw rows, so unreadable rows become issues too."""
    issues: List[DataQualityIssue] = []
    for i, row in enumerate(rows):
        if not isinstance(row, dict):
            issues.append(DataQualityIssue(f"row-{i}", "invalid_row", f"expected object, got {type(row).__name__}"))
            continue
        try:
            question = Question.from_dict(row)
        except ValueError as e:
            qid = str(row.get("id", f"row-{i}"))
            code = "unknown_type" if str(e).startswith("Unknown question type") else "invalid_row"
            issues.append(DataQualityIssue(qid, code, str(e)))
            continue
        issues.extend(check_question(question))

    if issues:
        logger.warning("Found %d data-quality issue(s)", len(issues))
        if strict:
            raise QuestionBankError(f"Question bank has {len(issues)} data-quality issue(s)", issues)
    return issues
