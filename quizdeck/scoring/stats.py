"""Statistics over stored quiz attempts."""

from __future__ import annotations

from typing import Any, Dict, Iterable, List, Optional

import pandas as pd

from .tracker import percentage_of, round_half_up

_COLUMNS = ["topics", "totalQuestions", "correctAnswers", "percentage", "visitorId", "userId", "date"]


def attempts_frame(attempts: Iterable[Dict[str, Any]]) -> pd.DataFrame:
    df = pd.DataFrame(list(attempts))
    for col in _COLUMNS:
        if col not in df.columns:
            df[col] = None
    return df


def filter_attempts(
    df: pd.DataFrame,
    visitor_id: Optional[str] = None,
    user_id: Optional[int] = None,
) -> pd.DataFrame:
    """A user id wins over a visitor id; with neither, nothing matches.

    Empty ids (0, "") count as absent.
    """
    if user_id:
        return df[df["userId"] == user_id]
    if visitor_id:
        return df[df["visitorId"] == visitor_id]
    return df.iloc[0:0]


def summarize_attempts(
    attempts: Iterable[Dict[str, Any]],
    visitor_id: Optional[str] = None,
    user_id: Optional[int] = None,
) -> Dict[str, Any]:
    """Aggregate attempt history for one visitor or user.

    Returns total attempts, total questions, total correct, the overall
    average score (percentage of correct over all questions) and a per-topic
    breakdown with attempt counts and the mean attempt percentage.
    """
    df = filter_attempts(attempts_frame(attempts), visitor_id=visitor_id, user_id=user_id)

    total_questions = int(pd.to_numeric(df["totalQuestions"], errors="coerce").fillna(0).sum())
    total_correct = int(pd.to_numeric(df["correctAnswers"], errors="coerce").fillna(0).sum())

    by_topic: Dict[str, Dict[str, Any]] = {}
    if not df.empty:
        per_topic = df[["topics", "percentage"]].explode("topics").dropna(subset=["topics"])
        if not per_topic.empty:
            per_topic = per_topic.assign(percentage=pd.to_numeric(per_topic["percentage"], errors="coerce"))
            grouped = per_topic.groupby("topics")["percentage"].agg(["count", "mean"])
            for topic, row in grouped.iterrows():
                by_topic[str(topic)] = {
                    "attempts": int(row["count"]),
                    "average_percentage": round_half_up(float(row["mean"])) if pd.notna(row["mean"]) else 0,
                }

    return {
        "total_attempts": int(len(df)),
        "total_questions": total_questions,
        "total_correct": total_correct,
        "average_score": percentage_of(total_correct, total_questions),
        "by_topic": by_topic,
    }


def list_attempts(
    attempts: Iterable[Dict[str, Any]],
    visitor_id: Optional[str] = None,
    user_id: Optional[int] = None,
) -> List[Dict[str, Any]]:
    """Attempt records for one visitor or user, newest first.

    Records without a readable `date` go last, in their stored order.
    """
    records = list(attempts)
    df = filter_attempts(attempts_frame(records), visitor_id=visitor_id, user_id=user_id)
    if df.empty:
        return []
    dates = pd.to_datetime(df["date"], errors="coerce", utc=True, format="ISO8601")
    ordered = dates.sort_values(ascending=False, na_position="last", kind="mergesort")
    return [records[i] for i in ordered.index]
