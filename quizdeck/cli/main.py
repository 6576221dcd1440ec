from __future__ import annotations

import argparse
import json
import sys
from dataclasses import asdict
from pathlib import Path
from typing import List, Optional

import yaml

from quizdeck.config import AppConfig, default_app_config
from quizdeck.data.loader import load_questions
from quizdeck.data.selection import DEFAULT_QUIZ_LENGTH, select_questions
from quizdeck.presenter.session import PresentationSession
from quizdeck.scoring.stats import list_attempts, summarize_attempts
from quizdeck.statistical.uniformity import audit_question_bank
from quizdeck.utils.determinism import make_rng
from quizdeck.utils.io import read_jsonl, write_json, write_jsonl
from quizdeck.utils.logging import setup_logging
from quizdeck.utils.validation import validate_records

EXIT_OK = 0
EXIT_ERROR = 1
EXIT_VALIDATION = 4


def _load_config(path: Optional[str]) -> AppConfig:
    if path is None:
        return default_app_config()
    return AppConfig.from_file(path)


def _cmd_validate(args, cfg: AppConfig, logger) -> int:
    rows = list(read_jsonl(args.path))
    issues = validate_records(rows)
    if args.output:
        write_json(args.output, {
            "path": str(args.path),
            "questions": len(rows),
            "issues": [asdict(issue) for issue in issues],
        })

    if not issues:
        print(f"[validate] OK: {len(rows)} question(s) in {args.path}")
        logger.info("Validated %d questions from %s", len(rows), args.path)
        return EXIT_OK

    print(f"[validate] {len(issues)} data-quality issue(s) in {args.path}")
    for issue in issues:
        print(f"  [{issue.code}] {issue.question_id}: {issue.message}")
    return EXIT_VALIDATION


def _cmd_shuffle(args, cfg: AppConfig, logger) -> int:
    questions = load_questions(args.path, max_items=cfg.data.max_items)
    seed = args.seed if args.seed is not None else cfg.shuffle.seed
    rng = make_rng(seed)
    if args.topics or args.limit is not None:
        limit = args.limit if args.limit is not None else DEFAULT_QUIZ_LENGTH
        questions = select_questions(questions, topics=args.topics, limit=limit, rng=rng)
    session = PresentationSession(rng=rng)

    rows = []
    for q in questions:
        mapping = session.mapping_for(q)
        rows.append({
            "id": q.id,
            "type": q.type.value,
            "question": q.question,
            "options": list(mapping.shuffled_options) if mapping else None,
            "index_map": list(mapping.index_map) if mapping else None,
            "shuffled_correct_index": mapping.shuffled_correct_index if mapping else None,
        })
    write_jsonl(args.out_path, rows)
    logger.info("Wrote %d shuffled questions to %s (seed=%s)", len(rows), args.out_path, seed)
    print(f"Wrote shuffled presentation to {args.out_path}")
    return EXIT_OK


def _cmd_audit(args, cfg: AppConfig, logger) -> int:
    questions = load_questions(args.path, max_items=cfg.data.max_items)
    trials = args.trials if args.trials is not None else cfg.shuffle.audit_trials
    seed = args.seed if args.seed is not None else cfg.shuffle.seed
    significance = args.significance if args.significance is not None else cfg.shuffle.significance_level

    result = audit_question_bank(questions, trials=trials, seed=seed, significance_level=significance)
    if args.output:
        write_json(args.output, result)
        print(f"  Results saved to: {args.output}")

    print("\nShuffle audit complete:")
    print(f"  Questions audited: {result['audited']}")
    print(f"  Skipped: {len(result['skipped'])}")
    print(f"  Non-uniform: {len(result['non_uniform'])}")
    if result["non_uniform"]:
        logger.warning("Non-uniform shuffle for: %s", ", ".join(result["non_uniform"]))
        return EXIT_VALIDATION
    return EXIT_OK


def _cmd_stats(args, cfg: AppConfig, logger) -> int:
    attempts = list(read_jsonl(args.path))
    summary = summarize_attempts(attempts, visitor_id=args.visitor_id, user_id=args.user_id)
    print(json.dumps(summary, indent=2))
    return EXIT_OK


def _cmd_history(args, cfg: AppConfig, logger) -> int:
    attempts = list(read_jsonl(args.path))
    history = list_attempts(attempts, visitor_id=args.visitor_id, user_id=args.user_id)
    if args.output:
        write_jsonl(args.output, history)
        print(f"  Results saved to: {args.output}")
    print(json.dumps(history, indent=2))
    return EXIT_OK


COMMANDS = {
    "validate": _cmd_validate,
    "shuffle": _cmd_shuffle,
    "audit": _cmd_audit,
    "stats": _cmd_stats,
    "history": _cmd_history,
}


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="quizdeck CLI - shuffled multiple-choice presentation and scoring tools",
        epilog="""Examples:
  # Report data-quality issues in a question bank
  python -m quizdeck.cli.main validate data/questions.jsonl

  # Write one shuffled presentation per question
  python -m quizdeck.cli.main shuffle data/questions.jsonl out/shuffled.jsonl --seed 7

  # Build a 5-question quiz on two topics
  python -m quizdeck.cli.main shuffle data/questions.jsonl out/quiz.jsonl --topics math science --limit 5

  # Check that correct answers land uniformly across positions
  python -m quizdeck.cli.main audit data/questions.jsonl --trials 5000 --output out/audit.json

  # Summarize a visitor's attempt history
  python -m quizdeck.cli.main stats data/attempts.jsonl --visitor-id abc123

  # List a user's attempts, newest first
  python -m quizdeck.cli.main history data/attempts.jsonl --user-id 42
""",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    validate_parser = subparsers.add_parser("validate", help="Report data-quality issues in a question bank")
    validate_parser.add_argument("path", help="Path to question bank (JSONL)")
    validate_parser.add_argument("--output", "-o", help="Write issues to this JSON file")

    shuffle_parser = subparsers.add_parser("shuffle", help="Write a shuffled presentation of every question")
    shuffle_parser.add_argument("path", help="Path to question bank (JSONL)")
    shuffle_parser.add_argument("out_path", help="Output JSONL path")
    shuffle_parser.add_argument("--seed", type=int, default=None, help="RNG seed (default: config or random)")
    shuffle_parser.add_argument("--topics", nargs="+", default=None, help="Only questions from these topics")
    shuffle_parser.add_argument("--limit", type=int, default=None, help="Number of questions to draw (1-50, default: 10 when selecting)")

    audit_parser = subparsers.add_parser("audit", help="Chi-square audit of shuffle uniformity")
    audit_parser.add_argument("path", help="Path to question bank (JSONL)")
    audit_parser.add_argument("--trials", type=int, default=None, help="Shuffles per question")
    audit_parser.add_argument("--seed", type=int, default=None, help="RNG seed")
    audit_parser.add_argument("--significance", type=float, default=None, help="Significance level (default: 0.05)")
    audit_parser.add_argument("--output", "-o", help="Output file path for results (JSON format)")

    stats_parser = subparsers.add_parser("stats", help="Summarize attempt history")
    stats_parser.add_argument("path", help="Path to attempts (JSONL)")
    who = stats_parser.add_mutually_exclusive_group()
    who.add_argument("--visitor-id", default=None)
    who.add_argument("--user-id", type=int, default=None)

    history_parser = subparsers.add_parser("history", help="List attempts, newest first")
    history_parser.add_argument("path", help="Path to attempts (JSONL)")
    history_parser.add_argument("--output", "-o", help="Write the listing to this JSONL file")
    history_who = history_parser.add_mutually_exclusive_group()
    history_who.add_argument("--visitor-id", default=None)
    history_who.add_argument("--user-id", type=int, default=None)

    for sub in (validate_parser, shuffle_parser, audit_parser, stats_parser, history_parser):
        sub.add_argument("--config", "-c", default=None, help="Configuration file (JSON or YAML)")

    return parser


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        return EXIT_ERROR

    try:
        cfg = _load_config(args.config)
    except FileNotFoundError:
        print(f"Error: Config file '{args.config}' not found")
        return EXIT_ERROR
    except (json.JSONDecodeError, yaml.YAMLError, TypeError, ValueError) as e:
        print(f"Error: Invalid config '{args.config}': {e}")
        return EXIT_ERROR

    logger = setup_logging(cfg.logging.log_dir, cfg.logging.filename, cfg.logging.level, cfg.logging.structured)

    path = Path(args.path)
    if not path.is_file():
        print(f"Error: Input file '{path}' not found")
        logger.error("FileNotFoundError: Input file '%s' not found", path, extra={"command": args.command})
        return EXIT_ERROR

    try:
        return COMMANDS[args.command](args, cfg, logger)
    except json.JSONDecodeError as e:
        print(f"Error: Invalid JSON format in '{path}': {e}")
        logger.error("JSONDecodeError in '%s': %s", path, e, exc_info=True, extra={"command": args.command})
        return EXIT_ERROR
    except ValueError as e:
        print(f"Error: Invalid data format - {e}")
        logger.error("ValueError in '%s': %s", path, e, exc_info=True, extra={"command": args.command})
        return EXIT_ERROR
    except Exception as e:
        print(f"Unexpected error: {e}")
        logger.error("Unexpected error in '%s': %s", path, e, exc_info=True, extra={"command": args.command})
        return EXIT_ERROR


if __name__ == "__main__":
    sys.exit(main())
