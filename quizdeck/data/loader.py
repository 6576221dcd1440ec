"""Data loading utilities for quizdeck."""

import json
from pathlib import Path
from typing import List, Optional, Union

from .schemas import Question
from ..utils.io import read_jsonl


def load_questions(
    path: Union[str, Path],
    max_items: Optional[int] = None,
) -> List[Question]:
    """Load a question bank from a JSONL file.

    Args:
        path: Path to JSONL file
        max_items: Optional limit on number of items to load

    Returns:
        List of Question objects

    Raises:
        FileNotFoundError: If file doesn't exist
        ValueError: If file format is invalid or a row can't be read as a question

    Rows with a known type but inconsistent content (say an out-of-range
    correct index) load fine; use `validate_questions` to report those.
    """
    filepath = Path(path).resolve()
    if not filepath.exists():
        raise FileNotFoundError(f"Question bank not found: {filepath}")
    if not filepath.is_file():
        raise ValueError(f"Path is not a file: {filepath}")
    if filepath.suffix not in {".jsonl", ".json"}:
        raise ValueError(f"Expected .jsonl or .json file, got: {filepath.suffix}")

    questions: List[Question] = []
    try:
        for row in read_jsonl(filepath):
            if not isinstance(row, dict):
                raise ValueError(f"Invalid row format: expected dict, got {type(row).__name__}")
            questions.append(Question.from_dict(row))

            if max_items is not None and len(questions) >= max_items:
                break
    except json.JSONDecodeError as e:
        raise ValueError(f"Error loading questions from {filepath}: {e}")

    if not questions:
        raise ValueError(f"Question bank is empty or no valid rows found in {filepath}")

    return questions
