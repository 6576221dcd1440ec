"""Tests for question loading and data-quality validation."""

import json
import random

import pytest

from quizdeck.data import QuestionType, load_questions, make_answer, select_questions
from quizdeck.data.schemas import MultipleChoiceAnswer, OpenEndedAnswer, Question, TrueFalseAnswer
from quizdeck.utils.io import read_jsonl
from quizdeck.utils.validation import QuestionBankError, validate_questions, validate_records


# ====================
# Loader
# ====================

def test_load_questions_reads_camel_case_keys(question_bank_file):
    questions = load_questions(question_bank_file)
    assert [q.id for q in questions] == ["1", "2", "3"]

    mc, tf, oe = questions
    assert mc.type is QuestionType.MULTIPLE_CHOICE
    assert mc.options == ("London", "Paris", "Berlin", "Madrid")
    assert mc.correct_answer_index == 1
    assert tf.correct_answer is True
    assert oe.suggested_answer == "A compact way to build lists."


def test_load_questions_max_items(question_bank_file):
    assert len(load_questions(question_bank_file, max_items=2)) == 2


def test_load_questions_missing_file(tmp_path):
    with pytest.raises(FileNotFoundError):
        load_questions(tmp_path / "nope.jsonl")


def test_load_questions_wrong_suffix(tmp_path):
    path = tmp_path / "questions.csv"
    path.write_text("id,type\n")
    with pytest.raises(ValueError, match="Expected .jsonl"):
        load_questions(path)


def test_load_questions_empty_file(tmp_path):
    path = tmp_path / "empty.jsonl"
    path.write_text("\n\n")
    with pytest.raises(ValueError, match="empty"):
        load_questions(path)


def test_load_questions_unknown_type(tmp_path):
    path = tmp_path / "odd.jsonl"
    path.write_text(json.dumps({"id": "x", "type": "essay"}) + "\n")
    with pytest.raises(ValueError, match="Unknown question type"):
        load_questions(path)


def test_load_questions_bad_json(tmp_path):
    path = tmp_path / "broken.jsonl"
    path.write_text('{"id": 1, "type": \n')
    with pytest.raises(ValueError):
        load_questions(path)


def test_bad_json_error_names_the_line(tmp_path):
    path = tmp_path / "broken.jsonl"
    path.write_text(json.dumps({"id": 1, "type": "true_false"}) + "\n\n{not json}\n")
    with pytest.raises(json.JSONDecodeError, match=r"broken\.jsonl:3: "):
        list(read_jsonl(path))


def test_load_questions_non_list_options(tmp_path):
    path = tmp_path / "bad.jsonl"
    path.write_text(json.dumps({"id": "n", "type": "multiple_choice", "options": 5}) + "\n")
    with pytest.raises(ValueError, match="options must be a list"):
        load_questions(path)


def test_malformed_content_still_loads(bad_question_bank_file, tmp_path):
    rows = [r for r in read_jsonl(bad_question_bank_file) if r.get("type") != "essay"]
    path = tmp_path / "loadable.jsonl"
    path.write_text("\n".join(json.dumps(r) for r in rows) + "\n")
    questions = load_questions(path)
    assert questions[1].correct_answer_index == 99


def test_from_dict_requires_id():
    with pytest.raises(ValueError, match="missing id"):
        Question.from_dict({"type": "true_false"})


# ====================
# Answer variants
# ====================

def test_make_answer_picks_variant(question_rows):
    mc, tf, oe = (Question.from_dict(r) for r in question_rows)
    assert make_answer(mc, 2) == MultipleChoiceAnswer(2)
    assert make_answer(tf, False) == TrueFalseAnswer(False)
    assert make_answer(oe, None) == OpenEndedAnswer("")


def test_make_answer_rejects_wrong_raw_types(question_rows):
    mc, tf, _ = (Question.from_dict(r) for r in question_rows)
    with pytest.raises(TypeError):
        make_answer(mc, True)
    with pytest.raises(TypeError):
        make_answer(tf, 1)


# ====================
# Validation
# ====================

def test_validate_records_reports_each_problem(bad_question_bank_file):
    issues = validate_records(read_jsonl(bad_question_bank_file))
    codes = {(i.question_id, i.code) for i in issues}
    assert codes == {
        ("far", "correct_index_out_of_range"),
        ("lonely", "too_few_options"),
        ("tf", "missing_correct_answer"),
        ("odd", "unknown_type"),
    }


@pytest.mark.parametrize("options", [5, "ABCD", {"a": 1}])
def test_validate_records_rejects_non_list_options(options):
    rows = [{"id": "s", "type": "multiple_choice", "options": options, "correctAnswerIndex": 2}]
    issues = validate_records(rows)
    assert [(i.question_id, i.code) for i in issues] == [("s", "invalid_row")]
    assert "options must be a list" in issues[0].message


def test_validate_records_non_dict_row():
    issues = validate_records([["not", "a", "row"]])
    assert [(i.question_id, i.code) for i in issues] == [("row-0", "invalid_row")]


def test_validate_questions_clean_bank(question_bank_file):
    assert validate_questions(load_questions(question_bank_file)) == []


def test_validate_questions_strict_raises():
    broken = Question.from_dict({"id": "m", "type": "multiple_choice", "options": ["a", "b"]})
    with pytest.raises(QuestionBankError) as excinfo:
        validate_questions([broken], strict=True)
    assert [i.code for i in excinfo.value.issues] == ["missing_correct_index"]


# ====================
# Quiz selection
# ====================

def _bank(n, topic_of=lambda i: "math"):
    return [
        Question(id=f"q{i}", type=QuestionType.TRUE_FALSE, topic=topic_of(i), correct_answer=True)
        for i in range(n)
    ]


def test_select_questions_filters_by_topic():
    bank = _bank(20, topic_of=lambda i: ["math", "art", "history"][i % 3])
    picked = select_questions(bank, topics=["math", "history"], limit=50, rng=random.Random(0))
    assert {q.topic for q in picked} == {"math", "history"}
    assert sorted(q.id for q in picked) == sorted(q.id for q in bank if q.topic != "art")


def test_select_questions_empty_topics_uses_whole_bank():
    bank = _bank(5)
    assert len(select_questions(bank, topics=[], limit=10, rng=random.Random(1))) == 5
    assert len(select_questions(bank, topics=None, limit=3, rng=random.Random(1))) == 3


def test_select_questions_default_limit_is_ten():
    assert len(select_questions(_bank(30), rng=random.Random(2))) == 10


def test_select_questions_order_comes_from_rng(scripted_rng):
    bank = _bank(4)
    rng = scripted_rng([0, 0, 0])
    picked = select_questions(bank, limit=4, rng=rng)
    assert [q.id for q in picked] == ["q1", "q2", "q3", "q0"]
    assert rng.calls == [(0, 3), (0, 2), (0, 1)]


def test_select_questions_is_reproducible_with_seed():
    bank = _bank(30)
    a = select_questions(bank, limit=10, rng=random.Random(7))
    b = select_questions(bank, limit=10, rng=random.Random(7))
    assert a == b
    assert len({q.id for q in a}) == 10


@pytest.mark.parametrize("limit", [0, 51, -1, True, 2.5])
def test_select_questions_rejects_bad_limit(limit):
    with pytest.raises(ValueError, match="limit"):
        select_questions(_bank(3), limit=limit)


def test_select_questions_unknown_topic_gives_nothing():
    assert select_questions(_bank(3), topics=["poetry"], rng=random.Random(0)) == []
