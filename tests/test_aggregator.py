# ABOUTME: Tests dashboard and per-domain rollups built from record snapshots.
# ABOUTME: Checks zero-guards on empty inputs, hour truncation, focus-area caps and study windows.

import json
import math
from datetime import date, datetime, timedelta, timezone

import pytest

from src.analytics.aggregator import (
    AnalyticsAggregator,
    build_dashboard,
    build_dsa_analytics,
    build_interview_analytics,
    build_study_analytics,
    build_system_design_analytics,
    build_weak_area_analytics,
    common_weaknesses,
    recommended_focus_areas,
)
from src.analytics.export import summary_to_dict, write_summary
from src.common.repository import InMemoryTrackerRepository
from src.common.schemas import (
    DesignTopic,
    InterviewResult,
    PracticeItem,
    ProblemStatus,
    Severity,
    StudySession,
    TopicStatus,
    TrackerSnapshot,
    WeakArea,
)

NOW = datetime(2024, 6, 30, 12, 0, tzinfo=timezone.utc)


def _problem(pid, category, solved, minutes=10, optimal=False, next_review=None, difficulty="Easy"):
    return PracticeItem(
        id=pid,
        title=pid,
        category=category,
        difficulty=difficulty,
        status=ProblemStatus.SOLVED if solved else ProblemStatus.ATTEMPTED,
        attempt_count=1,
        time_taken_minutes=minutes,
        solved_optimally=optimal,
        next_review_date=next_review,
    )


def _interview(iid, overall, comm, ps, tech, passed=False, kind="DSA", days_ago=0):
    return InterviewResult(
        id=iid,
        type=kind,
        interview_date=NOW - timedelta(days=days_ago),
        overall_score=overall,
        communication_score=comm,
        problem_solving_score=ps,
        technical_score=tech,
        passed=passed,
    )


def _session(minutes, kind="DSA", days_ago=0, productivity=3):
    return StudySession(
        session_date=NOW - timedelta(days=days_ago),
        duration_minutes=minutes,
        type=kind,
        productivity_score=productivity,
    )


def _assert_all_zero(values):
    for value in values:
        assert value == 0
        assert not math.isnan(value)


def test_empty_snapshot_dashboard_is_all_zero():
    stats = build_dashboard(TrackerSnapshot())

    _assert_all_zero(
        [
            stats.total_dsa_problems,
            stats.solved_dsa_problems,
            stats.total_study_hours,
            stats.average_interview_score,
            stats.dsa_completion_rate,
            stats.system_design_progress,
        ]
    )


def test_empty_collections_never_raise():
    dsa = build_dsa_analytics([], NOW)
    assert dsa.category_performance == []
    assert dsa.needs_review == []
    _assert_all_zero([dsa.average_time_per_problem, dsa.optimal_solution_rate])

    interviews = build_interview_analytics([])
    _assert_all_zero(
        [
            interviews.overall_pass_rate,
            interviews.average_communication_score,
            interviews.average_problem_solving_score,
            interviews.average_technical_score,
        ]
    )
    assert interviews.common_weaknesses == []
    assert interviews.average_scores_by_type == {}

    design = build_system_design_analytics([])
    assert design.topic_progress == []
    _assert_all_zero([design.average_confidence])

    study = build_study_analytics([], NOW)
    _assert_all_zero([study.total_hours_this_week, study.total_hours_this_month, study.average_productivity])
    assert study.daily_study_data == []

    weak = build_weak_area_analytics([], [], NOW)
    assert weak.active_weak_areas == []
    assert weak.recommended_focus_areas == []


def test_dashboard_rollup():
    snapshot = TrackerSnapshot(
        problems=[_problem("a", "Array", True), _problem("b", "Array", False), _problem("c", "Graph", True)],
        topics=[
            DesignTopic(id="t1", title="Caching", category="Caching", status=TopicStatus.MASTERED),
            DesignTopic(id="t2", title="Queues", category="Messaging", status=TopicStatus.UNDERSTOOD),
            DesignTopic(id="t3", title="CAP", category="Theory", status=TopicStatus.LEARNING),
            DesignTopic(id="t4", title="Raft", category="Theory", status=TopicStatus.NOT_STARTED),
        ],
        interviews=[_interview("i1", 8, 8, 8, 8, passed=True), _interview("i2", 5, 5, 5, 5)],
        weak_areas=[
            WeakArea("Technical Knowledge", "DSA", Severity.MEDIUM, NOW),
            WeakArea("Communication Skills", "Behavioral", Severity.HIGH, NOW, is_resolved=True, resolved_at=NOW),
        ],
        sessions=[_session(59), _session(60), _session(60)],
    )

    stats = build_dashboard(snapshot)

    assert stats.total_dsa_problems == 3
    assert stats.solved_dsa_problems == 2
    assert stats.dsa_completion_rate == pytest.approx(200 / 3)
    assert stats.total_system_design_topics == 4
    assert stats.mastered_topics == 1
    assert stats.system_design_progress == pytest.approx(50.0)
    assert stats.total_mock_interviews == 2
    assert stats.passed_interviews == 1
    assert stats.average_interview_score == pytest.approx(6.5)
    assert stats.active_weak_areas == 1
    # 179 minutes truncates to 2 whole hours
    assert stats.total_study_hours == 2


def test_dsa_analytics_counts_and_review_queue():
    problems = [
        _problem("a", "Array", True, minutes=10, optimal=True, next_review=NOW - timedelta(days=1)),
        _problem("b", "Array", False, minutes=20, next_review=NOW - timedelta(days=2), difficulty="Hard"),
        _problem("c", "Graph", False, minutes=30, next_review=NOW + timedelta(days=2)),
    ]

    analytics = build_dsa_analytics(problems, NOW)

    assert analytics.problems_by_category == {"Array": 2, "Graph": 1}
    assert analytics.problems_by_difficulty == {"Easy": 2, "Hard": 1}
    assert analytics.problems_by_status == {"Solved": 1, "Attempted": 2}
    assert [p.category for p in analytics.category_performance] == ["Graph", "Array"]
    assert [p.id for p in analytics.needs_review] == ["b", "a"]
    assert analytics.average_time_per_problem == pytest.approx(20.0)
    assert analytics.optimal_solution_rate == pytest.approx(100 / 3)


def test_system_design_analytics():
    topics = [
        DesignTopic(id="t1", title="LB", category="Scalability", status="Mastered", confidence_level=5),
        DesignTopic(id="t2", title="CDN", category="Scalability", status="Learning", confidence_level=2),
        DesignTopic(id="t3", title="LRU", category="Caching", status="Understood", confidence_level=4),
    ]

    analytics = build_system_design_analytics(topics)

    assert analytics.topics_by_category == {"Scalability": 2, "Caching": 1}
    assert analytics.topics_by_status == {"Mastered": 1, "Learning": 1, "Understood": 1}
    assert analytics.average_confidence == pytest.approx(11 / 3)
    assert [p.progress for p in analytics.topic_progress] == [pytest.approx(50.0), pytest.approx(100.0)]


def test_interview_analytics_trends_and_weaknesses():
    interviews = [
        _interview("late", 9, 9, 6, 8, passed=True, kind="SystemDesign", days_ago=1),
        _interview("early", 5, 4, 6, 7, kind="DSA", days_ago=10),
        _interview("mid", 7, 8, 7, 6, passed=True, kind="DSA", days_ago=5),
    ]

    analytics = build_interview_analytics(interviews)

    assert [t.score for t in analytics.score_trends] == [5, 7, 9]
    assert analytics.average_scores_by_type == {"DSA": pytest.approx(6.0), "SystemDesign": pytest.approx(9.0)}
    assert analytics.overall_pass_rate == pytest.approx(200 / 3)
    assert analytics.average_communication_score == pytest.approx(7.0)
    assert analytics.average_problem_solving_score == pytest.approx(19 / 3)
    assert analytics.average_technical_score == pytest.approx(7.0)
    # averages of exactly 7 are not weaknesses
    assert analytics.common_weaknesses == ["Problem Solving"]


def test_common_weaknesses_lists_every_low_dimension():
    interviews = [_interview("i1", 5, 6.9, 3, 2)]
    assert common_weaknesses(interviews) == ["Communication", "Problem Solving", "Technical Skills"]


def test_recommended_focus_areas_are_strictly_below_half_and_capped():
    problems = (
        [_problem("a1", "Array", True), _problem("a2", "Array", False)]  # exactly 0.5: excluded
        + [_problem("g1", "Graph", False)]
        + [_problem("d1", "DP", False), _problem("d2", "DP", True), _problem("d3", "DP", False)]
        + [_problem("t1", "Tree", False)]
        + [_problem("h1", "Heap", False)]
        + [_problem("s1", "String", True)]
    )

    focus = recommended_focus_areas(problems)

    assert focus == ["Graph", "DP", "Tree"]
    assert len(focus) <= 3


def test_weak_area_analytics():
    weak_areas = [
        WeakArea("Technical Knowledge", "DSA", Severity.HIGH, NOW - timedelta(days=4, hours=23)),
        WeakArea("Problem Solving Approach", "DSA", Severity.MEDIUM, NOW - timedelta(days=12)),
        WeakArea("Communication Skills", "Behavioral", Severity.MEDIUM, NOW - timedelta(days=1)),
        WeakArea(
            "System Design",
            "SystemDesign",
            Severity.LOW,
            NOW - timedelta(days=60),
            is_resolved=True,
            resolved_at=NOW - timedelta(days=3),
        ),
        WeakArea(
            "Old",
            "DSA",
            Severity.LOW,
            NOW - timedelta(days=90),
            is_resolved=True,
            resolved_at=NOW - timedelta(days=45),
        ),
    ]
    problems = [_problem("g1", "Graph", False), _problem("a1", "Array", True)]

    analytics = build_weak_area_analytics(weak_areas, problems, NOW)

    assert [s.area for s in analytics.active_weak_areas] == [
        "Technical Knowledge",
        "Problem Solving Approach",
        "Communication Skills",
    ]
    assert [s.days_identified for s in analytics.active_weak_areas] == [4, 12, 1]
    assert analytics.weak_areas_by_category == {"DSA": 2, "Behavioral": 1}
    assert analytics.resolved_this_month == 1
    assert analytics.recommended_focus_areas == ["Graph"]


def test_study_analytics_windows_and_daily_rollup():
    sessions = [
        _session(90, "DSA", days_ago=1, productivity=4),
        _session(45, "SystemDesign", days_ago=1, productivity=2),
        _session(30, "DSA", days_ago=3, productivity=3),
        _session(120, "Behavioral", days_ago=20, productivity=5),
        _session(600, "DSA", days_ago=40, productivity=1),
    ]

    analytics = build_study_analytics(sessions, NOW)

    assert analytics.total_hours_this_week == 2  # 165 minutes
    assert analytics.total_hours_this_month == 4  # 285 minutes
    assert analytics.hours_by_type == {"DSA": 12, "SystemDesign": 0, "Behavioral": 2}
    assert analytics.average_productivity == pytest.approx(3.0)
    assert [(d.date, d.minutes, d.type) for d in analytics.daily_study_data] == [
        (date(2024, 6, 10), 120, "Behavioral"),
        (date(2024, 6, 27), 30, "DSA"),
        (date(2024, 6, 29), 135, "DSA"),
    ]


def test_aggregator_reads_through_repository():
    repository = InMemoryTrackerRepository(
        problems=[_problem("a", "Array", False, next_review=NOW - timedelta(hours=1))],
        interviews=[_interview("i1", 6, 6, 6, 6)],
        sessions=[_session(61)],
    )
    aggregator = AnalyticsAggregator(repository)

    assert aggregator.dashboard().total_study_hours == 1
    assert [p.id for p in aggregator.dsa(NOW).needs_review] == ["a"]
    assert aggregator.weak_areas(NOW).recommended_focus_areas == ["Array"]
    assert aggregator.interviews().common_weaknesses == ["Communication", "Problem Solving", "Technical Skills"]
    assert aggregator.study(NOW).total_hours_this_week == 1
    assert aggregator.system_design().topic_progress == []


def test_summary_export_is_json_ready(tmp_path):
    analytics = build_weak_area_analytics(
        [WeakArea("Technical Knowledge", "DSA", Severity.HIGH, NOW - timedelta(days=2))],
        [],
        NOW,
    )

    data = summary_to_dict(analytics)
    assert data["active_weak_areas"][0]["severity"] == "High"

    path = write_summary(build_dsa_analytics([_problem("a", "Array", True, next_review=NOW)], NOW), tmp_path / "out" / "dsa.json")
    written = json.loads(path.read_text(encoding="utf-8"))
    assert written["category_performance"][0]["strength_level"] == "Strong"
    assert written["needs_review"][0]["next_review_date"] == NOW.isoformat()
    assert written["needs_review"][0]["status"] == "Solved"


def test_naive_now_is_read_as_utc_against_aware_records():
    naive_now = NOW.replace(tzinfo=None)
    weak_areas = [
        WeakArea("Technical Knowledge", "DSA", Severity.HIGH, NOW - timedelta(days=2)),
        WeakArea(
            "Communication Skills",
            "Behavioral",
            Severity.MEDIUM,
            NOW - timedelta(days=20),
            is_resolved=True,
            resolved_at=NOW - timedelta(days=5),
        ),
    ]
    sessions = [_session(90, "DSA", days_ago=1), _session(60, "DSA", days_ago=10)]

    weak = build_weak_area_analytics(weak_areas, [], naive_now)
    study = build_study_analytics(sessions, naive_now)

    assert [s.days_identified for s in weak.active_weak_areas] == [2]
    assert weak.resolved_this_month == 1
    assert study.total_hours_this_week == 1
    assert study.total_hours_this_month == 2
