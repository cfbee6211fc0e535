# ABOUTME: Makes the shared common package importable across the tracker engines.
# ABOUTME: Re-exports record schemas, errors and configuration for convenience.

from .config import TrackerConfig, load_tracker_config
from .errors import InvalidArgument, RecordLoadError
from .schemas import (
    DesignTopic,
    InterviewResult,
    PracticeItem,
    ProblemStatus,
    Severity,
    StrengthLevel,
    StudySession,
    TopicStatus,
    TrackerSnapshot,
    WeakArea,
)

__all__ = [
    "DesignTopic",
    "InterviewResult",
    "InvalidArgument",
    "PracticeItem",
    "ProblemStatus",
    "RecordLoadError",
    "Severity",
    "StrengthLevel",
    "StudySession",
    "TopicStatus",
    "TrackerConfig",
    "TrackerSnapshot",
    "WeakArea",
    "load_tracker_config",
]
