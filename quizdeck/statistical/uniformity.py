"""Uniformity audit for the option shuffle.

Shuffles a multiple-choice question many times and checks, with a Pearson
chi-square test, whether the correct answer lands in every display position
equally often.
"""

from __future__ import annotations

import math
from dataclasses import asdict, dataclass
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional, Sequence, Tuple

import numpy as np

from ..data.schemas import Question, QuestionType
from ..presenter.shuffle import shuffle_options
from ..utils.determinism import RandomSource, make_rng
from ..utils.validation import check_question


@dataclass
class UniformityReport:
    question_id: str
    trials: int
    observed_frequencies: List[int]
    expected_frequencies: List[float]
    chi_square_statistic: float
    degrees_of_freedom: int
    p_value: float
    significance_level: float
    uniform: bool
    timestamp: str

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


def _now_iso() -> str:
    return datetime.now(timezone.utc).isoformat().replace("+00:00", "Z")


def _regularized_gamma_p(s: float, x: float) -> float:
    """
    Regularized lower incomplete gamma P(s,x) using series/continued fraction (NR style).
    Accurate enough for chi-square CDF without SciPy.
    """
    if x < 0 or s <= 0:
        return float("nan")
    if x == 0:
        return 0.0

    if x < s + 1:
        # series
        term = 1.0 / s
        summ = term
        k = 1
        while True:
            term *= x / (s + k)
            summ += term
            if abs(term) < abs(summ) * 1e-12 or k > 10_000:
                break
            k += 1
        return summ * math.exp(-x + s * math.log(x) - math.lgamma(s))

    # continued fraction for Q (Lentz), P = 1 - Q
    b = x + 1.0 - s
    c = 1.0 / 1e-30
    d = 1.0 / b
    h = d
    for i in range(1, 10_000):
        an = -i * (i - s)
        b += 2.0
        d = an * d + b
        if abs(d) < 1e-30:
            d = 1e-30
        c = b + an / c
        if abs(c) < 1e-30:
            c = 1e-30
        d = 1.0 / d
        delta = d * c
        h *= delta
        if abs(delta - 1.0) < 1e-12:
            break
    return 1.0 - math.exp(-x + s * math.log(x) - math.lgamma(s)) * h


def chi2_sf(x: float, df: int) -> float:
    """Survival function (1 - CDF) for chi-square(df) using regularized gamma."""
    s = df / 2.0
    return max(0.0, min(1.0, 1.0 - _regularized_gamma_p(s, x / 2.0)))


def chi_square_test(observed: np.ndarray, expected: np.ndarray) -> Tuple[float, float, int]:
    """Classic Pearson chi-square and p-value (no SciPy)."""
    if observed.shape != expected.shape:
        raise ValueError("Observed and expected must have same shape.")
    if np.any(expected <= 0):
        raise ValueError("Expected frequencies must be positive.")

    chi2 = float(np.sum((observed - expected) ** 2 / expected))
    df = observed.size - 1
    return chi2, chi2_sf(chi2, df), df


def correct_position_counts(question: Question, trials: int, rng: RandomSource) -> np.ndarray:
    """Count how often the correct answer lands in each shuffled position."""
    n = len(question.options)
    counts = np.zeros(n, dtype=int)
    for _ in range(trials):
        mapping = shuffle_options(question.options, question.correct_answer_index, rng)
        counts[mapping.shuffled_correct_index] += 1
    return counts


def audit_shuffle_uniformity(
    question: Question,
    trials: int = 2000,
    rng: Optional[RandomSource] = None,
    seed: Optional[int] = None,
    significance_level: float = 0.05,
) -> UniformityReport:
    if question.type is not QuestionType.MULTIPLE_CHOICE:
        raise ValueError(f"Question {question.id} is not multiple choice")
    issues = check_question(question)
    if issues:
        raise ValueError(f"Question {question.id} can't be audited: {issues[0].message}")
    if trials < 1:
        raise ValueError("trials must be positive")

    rng = rng if rng is not None else make_rng(seed)
    observed = correct_position_counts(question, trials, rng)
    expected = np.full(observed.size, trials / observed.size)
    chi2, p, df = chi_square_test(observed.astype(float), expected)

    return UniformityReport(
        question_id=question.id,
        trials=trials,
        observed_frequencies=observed.tolist(),
        expected_frequencies=expected.tolist(),
        chi_square_statistic=chi2,
        degrees_of_freedom=df,
        p_value=p,
        significance_level=significance_level,
        uniform=bool(p >= significance_level),
        timestamp=_now_iso(),
    )


def audit_question_bank(
    questions: Sequence[Question],
    trials: int = 2000,
    seed: Optional[int] = None,
    significance_level: float = 0.05,
) -> Dict[str, Any]:
    """Audit every well-formed multiple-choice question; others are listed as skipped."""
    rng = make_rng(seed)
    reports: List[Dict[str, Any]] = []
    skipped: List[str] = []
    for q in questions:
        if q.type is not QuestionType.MULTIPLE_CHOICE or check_question(q):
            skipped.append(q.id)
            continue
        reports.append(
            audit_shuffle_uniformity(q, trials=trials, rng=rng, significance_level=significance_level).to_dict()
        )

    return {
        "audited": len(reports),
        "skipped": skipped,
        "non_uniform": [r["question_id"] for r in reports if not r["uniform"]],
        "reports": reports,
    }
