# ABOUTME: Spaced-repetition review scheduling for practice items.
# ABOUTME: Computes the next review date from attempt history and builds the due-for-review queue.

from __future__ import annotations

from dataclasses import dataclass, replace
from datetime import datetime, timedelta
from typing import Iterable, List, Optional, Sequence

from src.common.config import REVIEW_INTERVALS_DAYS
from src.common.errors import InvalidArgument
from src.common.schemas import PracticeItem, ProblemStatus, as_utc


@dataclass(frozen=True)
class AttemptRequest:
    """Outcome of one practice attempt as reported by the learner."""

    time_taken_minutes: int
    solved_optimally: bool
    status: ProblemStatus = ProblemStatus.SOLVED
    notes: Optional[str] = None


def review_interval_days(
    attempt_count: int,
    solved_optimally: bool,
    intervals: Sequence[int] = REVIEW_INTERVALS_DAYS,
) -> int:
    """
    Days until the next review.

    The interval grows with each attempt and clamps at the last table entry.
    A non-optimal solve halves it (floor), never below one day.
    """
    if attempt_count < 1:
        raise InvalidArgument(f"attempt_count must be >= 1, got {attempt_count}.")
    if not intervals:
        raise InvalidArgument("interval table must not be empty.")

    index = min(attempt_count - 1, len(intervals) - 1)
    interval = intervals[index]
    if not solved_optimally:
        interval = max(1, interval // 2)
    return interval


def next_review_date(
    attempt_count: int,
    solved_optimally: bool,
    now: datetime,
    intervals: Sequence[int] = REVIEW_INTERVALS_DAYS,
) -> datetime:
    return now + timedelta(days=review_interval_days(attempt_count, solved_optimally, intervals))


def record_attempt(
    item: PracticeItem,
    attempt: AttemptRequest,
    now: datetime,
    intervals: Sequence[int] = REVIEW_INTERVALS_DAYS,
) -> PracticeItem:
    """Return a copy of ``item`` updated with the attempt and its next review date."""

    attempt_count = item.attempt_count + 1
    return replace(
        item,
        attempt_count=attempt_count,
        last_attempted_at=now,
        time_taken_minutes=attempt.time_taken_minutes,
        solved_optimally=attempt.solved_optimally,
        status=ProblemStatus.parse(attempt.status),
        notes=attempt.notes if attempt.notes else item.notes,
        next_review_date=next_review_date(attempt_count, attempt.solved_optimally, now, intervals),
    )


def items_due_for_review(items: Iterable[PracticeItem], now: datetime) -> List[PracticeItem]:
    """Items with a review date at or before ``now``, earliest first. Naive datetimes are read as UTC."""

    now = as_utc(now)
    due = [item for item in items if item.next_review_date is not None and as_utc(item.next_review_date) <= now]
    # sorted() is stable, so equal dates keep input order.
    return sorted(due, key=lambda item: as_utc(item.next_review_date))
