# ABOUTME: Exposes category ranking and dashboard rollups.
# ABOUTME: Re-exports the builders and summary types consumed by the CLI.

from .aggregator import (
    AnalyticsAggregator,
    DashboardStats,
    DsaAnalytics,
    InterviewAnalytics,
    StudyAnalytics,
    SystemDesignAnalytics,
    WeakAreaAnalytics,
    build_dashboard,
    build_dsa_analytics,
    build_interview_analytics,
    build_study_analytics,
    build_system_design_analytics,
    build_weak_area_analytics,
)
from .category_performance import CategoryPerformance, TopicProgress, rank_categories, strength_level, topic_progress

__all__ = [
    "AnalyticsAggregator",
    "CategoryPerformance",
    "DashboardStats",
    "DsaAnalytics",
    "InterviewAnalytics",
    "StudyAnalytics",
    "SystemDesignAnalytics",
    "TopicProgress",
    "WeakAreaAnalytics",
    "build_dashboard",
    "build_dsa_analytics",
    "build_interview_analytics",
    "build_study_analytics",
    "build_system_design_analytics",
    "build_weak_area_analytics",
    "rank_categories",
    "strength_level",
    "topic_progress",
]
