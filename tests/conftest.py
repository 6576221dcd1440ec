from __future__ import annotations

import json
import logging
import sys
from pathlib import Path
from typing import Any, Dict, List

import pytest

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from quizdeck.data.schemas import Question, QuestionType  # noqa: E402


class ScriptedRandom:
    """RNG that hands out pre-chosen draws and remembers what was asked for."""

    def __init__(self, draws: List[int]):
        self.draws = list(draws)
        self.calls: List[tuple] = []

    def randint(self, a: int, b: int) -> int:
        self.calls.append((a, b))
        j = self.draws.pop(0)
        assert a <= j <= b, f"scripted draw {j} outside [{a}, {b}]"
        return j


@pytest.fixture(autouse=True)
def reset_quizdeck_logger():
    """Drop handlers added by setup_logging so each test starts unconfigured."""
    yield
    logger = logging.getLogger("quizdeck")
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()
    if hasattr(logger, "_configured"):
        del logger._configured


@pytest.fixture
def scripted_rng():
    return ScriptedRandom


# ====================
# Question fixtures
# ====================

@pytest.fixture
def mc_question() -> Question:
    return Question(
        id="mc-1",
        type=QuestionType.MULTIPLE_CHOICE,
        question="Which letter comes third?",
        topic="alphabet",
        options=("A", "B", "C", "D"),
        correct_answer_index=2,
    )


@pytest.fixture
def tf_question() -> Question:
    return Question(
        id="tf-1",
        type=QuestionType.TRUE_FALSE,
        question="Water boils at 100C at sea level.",
        topic="science",
        correct_answer=True,
    )


@pytest.fixture
def oe_question() -> Question:
    return Question(
        id="oe-1",
        type=QuestionType.OPEN_ENDED,
        question="Describe a closure.",
        topic="programming",
        suggested_answer="A function bundled with its environment.",
    )


@pytest.fixture
def question_rows() -> List[Dict[str, Any]]:
    return [
        {
            "id": 1,
            "type": "multiple_choice",
            "topic": "geography",
            "question": "What is the capital of France?",
            "options": ["London", "Paris", "Berlin", "Madrid"],
            "correctAnswerIndex": 1,
        },
        {
            "id": 2,
            "type": "true_false",
            "topic": "science",
            "question": "The sun is a star.",
            "correctAnswer": True,
        },
        {
            "id": 3,
            "type": "open_ended",
            "topic": "programming",
            "question": "What is a list comprehension?",
            "suggestedAnswer": "A compact way to build lists.",
        },
    ]


def _write_jsonl(path: Path, rows: List[Any]) -> Path:
    with open(path, "w", encoding="utf-8") as f:
        for row in rows:
            f.write(json.dumps(row) + "\n")
    return path


@pytest.fixture
def question_bank_file(tmp_path, question_rows) -> Path:
    return _write_jsonl(tmp_path / "questions.jsonl", question_rows)


@pytest.fixture
def bad_question_bank_file(tmp_path) -> Path:
    rows = [
        {"id": "ok", "type": "multiple_choice", "options": ["x", "y"], "correct_answer_index": 0},
        {"id": "far", "type": "multiple_choice", "options": ["a", "b", "c", "d"], "correct_answer_index": 99},
        {"id": "lonely", "type": "multiple_choice", "options": ["only"], "correct_answer_index": 0},
        {"id": "tf", "type": "true_false"},
        {"id": "odd", "type": "essay"},
    ]
    return _write_jsonl(tmp_path / "bad_questions.jsonl", rows)


@pytest.fixture
def attempts() -> List[Dict[str, Any]]:
    return [
        {"visitorId": "v1", "topics": ["math"], "totalQuestions": 10, "correctAnswers": 8, "percentage": 80},
        {"visitorId": "v1", "topics": ["math", "science"], "totalQuestions": 5, "correctAnswers": 2, "percentage": 40},
        {"visitorId": "v2", "topics": ["history"], "totalQuestions": 4, "correctAnswers": 4, "percentage": 100},
        {"userId": 7, "topics": ["math"], "totalQuestions": 10, "correctAnswers": 5, "percentage": 50},
    ]


@pytest.fixture
def attempts_file(tmp_path, attempts) -> Path:
    return _write_jsonl(tmp_path / "attempts.jsonl", attempts)


@pytest.fixture
def cli_config(tmp_path) -> Path:
    cfg = tmp_path / "config.json"
    cfg.write_text(json.dumps({
        "logging": {"level": "INFO", "log_dir": str(tmp_path / "logs"), "filename": "cli.log"},
        "shuffle": {"seed": 123, "audit_trials": 2000, "significance_level": 0.001},
        "data": {"max_items": None, "strict": False},
    }))
    return cfg
