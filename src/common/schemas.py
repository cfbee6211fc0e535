# ABOUTME: Defines canonical record structures shared by the scheduler, analytics and detector.
# ABOUTME: Centralizes practice, interview, weak-area and study-session schemas plus their closed label sets.

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import List, Optional, Sequence, Tuple

from .errors import InvalidArgument


class _LabelEnum(str, Enum):
    """String-valued enum that parses stored labels exhaustively."""

    @classmethod
    def parse(cls, value) -> "_LabelEnum":
        if isinstance(value, cls):
            return value
        if isinstance(value, str):
            wanted = value.strip().lower()
            for member in cls:
                if member.value.lower() == wanted:
                    return member
        expected = ", ".join(m.value for m in cls)
        raise InvalidArgument(f"Unknown {cls.__name__} '{value}'. Expected one of: {expected}.")


class ProblemStatus(_LabelEnum):
    NOT_STARTED = "NotStarted"
    IN_PROGRESS = "InProgress"
    ATTEMPTED = "Attempted"
    SOLVED = "Solved"
    NEEDS_REVIEW = "NeedsReview"


class TopicStatus(_LabelEnum):
    NOT_STARTED = "NotStarted"
    LEARNING = "Learning"
    UNDERSTOOD = "Understood"
    MASTERED = "Mastered"


class Severity(_LabelEnum):
    LOW = "Low"
    MEDIUM = "Medium"
    HIGH = "High"


class StrengthLevel(_LabelEnum):
    STRONG = "Strong"
    AVERAGE = "Average"
    WEAK = "Weak"


def _require_category(category: str) -> None:
    if not isinstance(category, str) or not category.strip():
        raise InvalidArgument("category must be a non-empty string.")


def _require_non_negative(name: str, value) -> None:
    if value < 0:
        raise InvalidArgument(f"{name} must be >= 0, got {value}.")


@dataclass(frozen=True)
class PracticeItem:
    """A DSA problem as tracked for spaced repetition and category rollups."""

    id: str
    title: str
    category: str
    difficulty: str
    status: ProblemStatus = ProblemStatus.NOT_STARTED
    attempt_count: int = 0
    time_taken_minutes: int = 0
    solved_optimally: bool = False
    last_attempted_at: Optional[datetime] = None
    next_review_date: Optional[datetime] = None
    platform: str = ""
    tags: Tuple[str, ...] = ()
    is_favorite: bool = False
    notes: Optional[str] = None

    def __post_init__(self) -> None:
        _require_category(self.category)
        _require_non_negative("attempt_count", self.attempt_count)
        _require_non_negative("time_taken_minutes", self.time_taken_minutes)
        object.__setattr__(self, "status", ProblemStatus.parse(self.status))
        object.__setattr__(self, "tags", tuple(self.tags))

    @property
    def is_solved(self) -> bool:
        return self.status is ProblemStatus.SOLVED


@dataclass(frozen=True)
class DesignTopic:
    """System-design variant of a practice item, progressed by review rather than attempts."""

    id: str
    title: str
    category: str
    difficulty: str = ""
    status: TopicStatus = TopicStatus.NOT_STARTED
    confidence_level: int = 0
    last_reviewed_at: Optional[datetime] = None

    def __post_init__(self) -> None:
        _require_category(self.category)
        _require_non_negative("confidence_level", self.confidence_level)
        object.__setattr__(self, "status", TopicStatus.parse(self.status))

    @property
    def is_mastered(self) -> bool:
        return self.status is TopicStatus.MASTERED

    @property
    def is_learned(self) -> bool:
        return self.status in (TopicStatus.MASTERED, TopicStatus.UNDERSTOOD)


@dataclass(frozen=True)
class InterviewResult:
    """Scored mock interview; scores are on a 0-10 scale."""

    id: str
    type: str
    interview_date: datetime
    overall_score: float
    communication_score: float
    problem_solving_score: float
    technical_score: float
    passed: bool = False
    company: str = ""
    duration_minutes: int = 0


@dataclass(frozen=True)
class WeakArea:
    """A skill flagged for remediation. At most one unresolved entry per (area, category)."""

    area: str
    category: str
    severity: Severity
    identified_at: datetime
    is_resolved: bool = False
    resolved_at: Optional[datetime] = None
    id: Optional[str] = None
    description: Optional[str] = None

    def __post_init__(self) -> None:
        object.__setattr__(self, "severity", Severity.parse(self.severity))

    @property
    def key(self) -> Tuple[str, str]:
        return (self.area, self.category)


@dataclass(frozen=True)
class StudySession:
    session_date: datetime
    duration_minutes: int
    type: str
    productivity_score: float = 0
    topic: str = ""

    def __post_init__(self) -> None:
        _require_non_negative("duration_minutes", self.duration_minutes)


@dataclass(frozen=True)
class TrackerSnapshot:
    """Everything the analytics builders read for one learner."""

    problems: Sequence[PracticeItem] = field(default_factory=list)
    topics: Sequence[DesignTopic] = field(default_factory=list)
    interviews: Sequence[InterviewResult] = field(default_factory=list)
    weak_areas: Sequence[WeakArea] = field(default_factory=list)
    sessions: Sequence[StudySession] = field(default_factory=list)


def unresolved(weak_areas: Sequence[WeakArea]) -> List[WeakArea]:
    return [w for w in weak_areas if not w.is_resolved]


def as_utc(value: datetime) -> datetime:
    """Treat naive datetimes as UTC so they compare with loaded (UTC-aware) records."""
    return value if value.tzinfo is not None else value.replace(tzinfo=timezone.utc)
