# ABOUTME: Composes per-domain rollups (DSA, system design, interviews, weak areas, study time).
# ABOUTME: Builders are pure over snapshots; AnalyticsAggregator pulls snapshots through the repository port.

from __future__ import annotations

import logging
from collections import Counter
from dataclasses import dataclass, field
from datetime import date, datetime, timedelta, timezone
from typing import Dict, Iterable, List, Optional, Sequence

import pandas as pd

from src.common.config import DEFAULT_CONFIG, AnalyticsConfig, TrackerConfig
from src.common.rates import fraction, minutes_to_hours, percentage, safe_mean
from src.common.repository import TrackerRepository, snapshot_from
from src.common.schemas import (
    DesignTopic,
    InterviewResult,
    PracticeItem,
    Severity,
    StudySession,
    TrackerSnapshot,
    WeakArea,
    as_utc,
    unresolved,
)
from src.review.scheduler import items_due_for_review

from .category_performance import (
    CategoryPerformance,
    TopicProgress,
    category_frame,
    rank_categories,
    topic_progress,
)

logger = logging.getLogger(__name__)

COMMUNICATION_WEAKNESS = "Communication"
PROBLEM_SOLVING_WEAKNESS = "Problem Solving"
TECHNICAL_WEAKNESS = "Technical Skills"


@dataclass
class DashboardStats:
    total_dsa_problems: int
    solved_dsa_problems: int
    total_system_design_topics: int
    mastered_topics: int
    total_mock_interviews: int
    passed_interviews: int
    active_weak_areas: int
    total_study_hours: int
    average_interview_score: float
    dsa_completion_rate: float
    system_design_progress: float


@dataclass
class DsaAnalytics:
    problems_by_category: Dict[str, int]
    problems_by_difficulty: Dict[str, int]
    problems_by_status: Dict[str, int]
    category_performance: List[CategoryPerformance]
    needs_review: List[PracticeItem]
    average_time_per_problem: float
    optimal_solution_rate: float


@dataclass
class SystemDesignAnalytics:
    topics_by_category: Dict[str, int]
    topics_by_status: Dict[str, int]
    topic_progress: List[TopicProgress]
    average_confidence: float


@dataclass
class ScoreTrend:
    date: datetime
    score: float
    type: str


@dataclass
class InterviewAnalytics:
    average_scores_by_type: Dict[str, float]
    score_trends: List[ScoreTrend]
    overall_pass_rate: float
    average_communication_score: float
    average_problem_solving_score: float
    average_technical_score: float
    common_weaknesses: List[str] = field(default_factory=list)


@dataclass
class WeakAreaSummary:
    area: str
    category: str
    severity: Severity
    days_identified: int


@dataclass
class WeakAreaAnalytics:
    active_weak_areas: List[WeakAreaSummary]
    weak_areas_by_category: Dict[str, int]
    resolved_this_month: int
    recommended_focus_areas: List[str]


@dataclass
class DailyStudy:
    date: date
    minutes: int
    type: str


@dataclass
class StudyAnalytics:
    total_hours_this_week: int
    total_hours_this_month: int
    hours_by_type: Dict[str, int]
    daily_study_data: List[DailyStudy]
    average_productivity: float


def build_dashboard(snapshot: TrackerSnapshot) -> DashboardStats:
    problems = snapshot.problems
    topics = snapshot.topics
    interviews = snapshot.interviews

    solved = sum(1 for p in problems if p.is_solved)
    learned = sum(1 for t in topics if t.is_learned)
    return DashboardStats(
        total_dsa_problems=len(problems),
        solved_dsa_problems=solved,
        total_system_design_topics=len(topics),
        mastered_topics=sum(1 for t in topics if t.is_mastered),
        total_mock_interviews=len(interviews),
        passed_interviews=sum(1 for i in interviews if i.passed),
        active_weak_areas=len(unresolved(snapshot.weak_areas)),
        total_study_hours=minutes_to_hours(sum(s.duration_minutes for s in snapshot.sessions)),
        average_interview_score=safe_mean(i.overall_score for i in interviews),
        dsa_completion_rate=percentage(solved, len(problems)),
        system_design_progress=percentage(learned, len(topics)),
    )


def build_dsa_analytics(
    problems: Sequence[PracticeItem],
    now: datetime,
    config: AnalyticsConfig = DEFAULT_CONFIG.analytics,
) -> DsaAnalytics:
    return DsaAnalytics(
        problems_by_category=dict(Counter(p.category for p in problems)),
        problems_by_difficulty=dict(Counter(p.difficulty for p in problems)),
        problems_by_status=dict(Counter(p.status.value for p in problems)),
        category_performance=rank_categories(problems, config),
        needs_review=items_due_for_review(problems, now),
        average_time_per_problem=safe_mean(p.time_taken_minutes for p in problems),
        optimal_solution_rate=percentage(sum(1 for p in problems if p.solved_optimally), len(problems)),
    )


def build_system_design_analytics(topics: Sequence[DesignTopic]) -> SystemDesignAnalytics:
    return SystemDesignAnalytics(
        topics_by_category=dict(Counter(t.category for t in topics)),
        topics_by_status=dict(Counter(t.status.value for t in topics)),
        topic_progress=topic_progress(topics),
        average_confidence=safe_mean(t.confidence_level for t in topics),
    )


def common_weaknesses(
    interviews: Sequence[InterviewResult],
    threshold: float = DEFAULT_CONFIG.analytics.common_weakness_threshold,
) -> List[str]:
    """
    Coarse dashboard signal: dimensions whose average across all interviews is below ``threshold``.

    Independent of the per-interview weak-area detector, which uses its own threshold.
    No interviews means no evidence, so the list is empty.
    """
    if not interviews:
        return []
    weaknesses = []
    if safe_mean(i.communication_score for i in interviews) < threshold:
        weaknesses.append(COMMUNICATION_WEAKNESS)
    if safe_mean(i.problem_solving_score for i in interviews) < threshold:
        weaknesses.append(PROBLEM_SOLVING_WEAKNESS)
    if safe_mean(i.technical_score for i in interviews) < threshold:
        weaknesses.append(TECHNICAL_WEAKNESS)
    return weaknesses


def build_interview_analytics(
    interviews: Sequence[InterviewResult],
    config: AnalyticsConfig = DEFAULT_CONFIG.analytics,
) -> InterviewAnalytics:
    ordered = sorted(interviews, key=lambda i: i.interview_date)

    averages_by_type: Dict[str, float] = {}
    if ordered:
        df = pd.DataFrame([{"type": i.type, "overall_score": i.overall_score} for i in ordered])
        means = df.groupby("type", sort=False)["overall_score"].mean()
        averages_by_type = {str(k): float(v) for k, v in means.items()}

    return InterviewAnalytics(
        average_scores_by_type=averages_by_type,
        score_trends=[ScoreTrend(date=i.interview_date, score=i.overall_score, type=i.type) for i in ordered],
        overall_pass_rate=percentage(sum(1 for i in ordered if i.passed), len(ordered)),
        average_communication_score=safe_mean(i.communication_score for i in ordered),
        average_problem_solving_score=safe_mean(i.problem_solving_score for i in ordered),
        average_technical_score=safe_mean(i.technical_score for i in ordered),
        common_weaknesses=common_weaknesses(ordered, config.common_weakness_threshold),
    )


def recommended_focus_areas(
    problems: Iterable[PracticeItem],
    config: AnalyticsConfig = DEFAULT_CONFIG.analytics,
) -> List[str]:
    """Categories whose solved fraction is strictly below the cutoff, discovery order, capped."""

    grouped = category_frame(problems)
    focus = [
        str(row.category)
        for row in grouped.itertuples(index=False)
        if fraction(int(row.solved_count), int(row.total_problems)) < config.focus_area_solved_fraction
    ]
    return focus[: config.max_focus_areas]


def build_weak_area_analytics(
    weak_areas: Sequence[WeakArea],
    problems: Sequence[PracticeItem],
    now: datetime,
    config: AnalyticsConfig = DEFAULT_CONFIG.analytics,
) -> WeakAreaAnalytics:
    now = as_utc(now)
    month_start = now - timedelta(days=config.month_window_days)
    active = unresolved(weak_areas)

    return WeakAreaAnalytics(
        active_weak_areas=[
            WeakAreaSummary(
                area=w.area,
                category=w.category,
                severity=w.severity,
                days_identified=int((now - as_utc(w.identified_at)) / timedelta(days=1)),
            )
            for w in active
        ],
        weak_areas_by_category=dict(Counter(w.category for w in active)),
        resolved_this_month=sum(
            1
            for w in weak_areas
            if w.is_resolved and w.resolved_at is not None and as_utc(w.resolved_at) >= month_start
        ),
        recommended_focus_areas=recommended_focus_areas(problems, config),
    )


def daily_study(sessions: Iterable[StudySession]) -> List[DailyStudy]:
    """Minutes per calendar day, tagged with the first session's type, ascending by day."""

    rows = [{"day": s.session_date.date(), "minutes": s.duration_minutes, "type": s.type} for s in sessions]
    if not rows:
        return []
    daily = (
        pd.DataFrame(rows)
        .groupby("day", sort=False)
        .agg(minutes=("minutes", "sum"), first_type=("type", "first"))
        .reset_index()
        .sort_values("day", kind="mergesort")
    )
    return [
        DailyStudy(date=row.day, minutes=int(row.minutes), type=str(row.first_type))
        for row in daily.itertuples(index=False)
    ]


def build_study_analytics(
    sessions: Sequence[StudySession],
    now: datetime,
    config: AnalyticsConfig = DEFAULT_CONFIG.analytics,
) -> StudyAnalytics:
    now = as_utc(now)
    week_start = now - timedelta(days=config.week_window_days)
    month_start = now - timedelta(days=config.month_window_days)
    this_week = [s for s in sessions if as_utc(s.session_date) >= week_start]
    this_month = [s for s in sessions if as_utc(s.session_date) >= month_start]

    minutes_by_type: Dict[str, int] = {}
    for session in sessions:
        minutes_by_type[session.type] = minutes_by_type.get(session.type, 0) + session.duration_minutes

    return StudyAnalytics(
        total_hours_this_week=minutes_to_hours(sum(s.duration_minutes for s in this_week)),
        total_hours_this_month=minutes_to_hours(sum(s.duration_minutes for s in this_month)),
        hours_by_type={kind: minutes_to_hours(minutes) for kind, minutes in minutes_by_type.items()},
        daily_study_data=daily_study(this_month),
        average_productivity=safe_mean(s.productivity_score for s in sessions),
    )


class AnalyticsAggregator:
    """Reads a fresh snapshot through the repository for every call."""

    def __init__(self, repository: TrackerRepository, config: TrackerConfig = DEFAULT_CONFIG) -> None:
        self.repository = repository
        self.config = config

    def snapshot(self) -> TrackerSnapshot:
        snapshot = snapshot_from(self.repository)
        logger.debug(
            "Snapshot: %d problems, %d topics, %d interviews, %d weak areas, %d sessions",
            len(snapshot.problems),
            len(snapshot.topics),
            len(snapshot.interviews),
            len(snapshot.weak_areas),
            len(snapshot.sessions),
        )
        return snapshot

    def dashboard(self) -> DashboardStats:
        return build_dashboard(self.snapshot())

    def dsa(self, now: Optional[datetime] = None) -> DsaAnalytics:
        return build_dsa_analytics(self.repository.practice_items(), _now(now), self.config.analytics)

    def system_design(self) -> SystemDesignAnalytics:
        return build_system_design_analytics(self.repository.design_topics())

    def interviews(self) -> InterviewAnalytics:
        return build_interview_analytics(self.repository.interviews(), self.config.analytics)

    def weak_areas(self, now: Optional[datetime] = None) -> WeakAreaAnalytics:
        return build_weak_area_analytics(
            self.repository.weak_areas(),
            self.repository.practice_items(),
            _now(now),
            self.config.analytics,
        )

    def study(self, now: Optional[datetime] = None) -> StudyAnalytics:
        return build_study_analytics(self.repository.study_sessions(), _now(now), self.config.analytics)


def _now(now: Optional[datetime]) -> datetime:
    return now if now is not None else datetime.now(timezone.utc)
