# ABOUTME: Exposes the spaced-repetition review scheduler.
# ABOUTME: Pure functions over practice items; persistence stays with the caller.

from .scheduler import (
    AttemptRequest,
    items_due_for_review,
    next_review_date,
    record_attempt,
    review_interval_days,
)

__all__ = [
    "AttemptRequest",
    "items_due_for_review",
    "next_review_date",
    "record_attempt",
    "review_interval_days",
]
