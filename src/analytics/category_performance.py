# ABOUTME: Groups practice records by category into success-rate and strength rollups.
# ABOUTME: Orders categories weakest first so consumers can surface what to focus on next.

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, List

import pandas as pd

from src.common.config import AnalyticsConfig
from src.common.rates import percentage
from src.common.schemas import DesignTopic, PracticeItem, StrengthLevel

CATEGORY_COLUMNS = ["category", "total_problems", "solved_count", "average_time"]


@dataclass
class CategoryPerformance:
    category: str
    total_problems: int
    solved_count: int
    success_rate: float
    average_time: float
    strength_level: StrengthLevel


@dataclass
class TopicProgress:
    category: str
    total: int
    mastered: int
    progress: float


def strength_level(
    success_rate: float,
    strong_threshold: float = 70.0,
    average_threshold: float = 40.0,
) -> StrengthLevel:
    """Bucket a success percentage; lower bounds are inclusive."""

    if success_rate >= strong_threshold:
        return StrengthLevel.STRONG
    if success_rate >= average_threshold:
        return StrengthLevel.AVERAGE
    return StrengthLevel.WEAK


def category_frame(items: Iterable[PracticeItem]) -> pd.DataFrame:
    """
    Aggregate practice items per category.

    Categories appear in the order they are first seen in ``items``.
    Columns: category, total_problems, solved_count, average_time.
    """

    rows = [
        {
            "category": item.category,
            "solved": item.is_solved,
            "time_taken_minutes": item.time_taken_minutes,
        }
        for item in items
    ]
    if not rows:
        return pd.DataFrame(columns=CATEGORY_COLUMNS)

    df = pd.DataFrame(rows)
    return (
        df.groupby("category", sort=False)
        .agg(
            total_problems=("solved", "size"),
            solved_count=("solved", "sum"),
            average_time=("time_taken_minutes", "mean"),
        )
        .reset_index()
    )


def rank_categories(
    items: Iterable[PracticeItem],
    config: AnalyticsConfig = AnalyticsConfig(),
) -> List[CategoryPerformance]:
    """
    Build one CategoryPerformance per category, ascending by success rate.

    Ties keep category discovery order. An empty input yields an empty list.
    """

    grouped = category_frame(items)
    if grouped.empty:
        return []

    grouped["success_rate"] = [
        percentage(solved, total) for solved, total in zip(grouped["solved_count"], grouped["total_problems"])
    ]
    grouped = grouped.sort_values("success_rate", kind="mergesort")

    ranked: List[CategoryPerformance] = []
    for row in grouped.itertuples(index=False):
        rate = float(row.success_rate)
        ranked.append(
            CategoryPerformance(
                category=str(row.category),
                total_problems=int(row.total_problems),
                solved_count=int(row.solved_count),
                success_rate=rate,
                average_time=float(row.average_time),
                strength_level=strength_level(rate, config.strong_threshold, config.average_threshold),
            )
        )
    return ranked


def topic_progress(topics: Iterable[DesignTopic]) -> List[TopicProgress]:
    """Per-category system-design progress (Mastered or Understood share), discovery order."""

    rows = [
        {"category": topic.category, "mastered": topic.is_mastered, "learned": topic.is_learned}
        for topic in topics
    ]
    if not rows:
        return []

    grouped = (
        pd.DataFrame(rows)
        .groupby("category", sort=False)
        .agg(total=("mastered", "size"), mastered=("mastered", "sum"), learned=("learned", "sum"))
        .reset_index()
    )
    return [
        TopicProgress(
            category=str(row.category),
            total=int(row.total),
            mastered=int(row.mastered),
            progress=percentage(int(row.learned), int(row.total)),
        )
        for row in grouped.itertuples(index=False)
    ]
