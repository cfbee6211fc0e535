# ABOUTME: Declares the persistence port the aggregator and weak-area recorder read through.
# ABOUTME: Ships an in-memory adapter used by the CLI and tests.

from __future__ import annotations

from dataclasses import replace
from datetime import datetime
from typing import Iterable, List, Optional, Protocol, Sequence

from .errors import InvalidArgument
from .schemas import (
    DesignTopic,
    InterviewResult,
    PracticeItem,
    StudySession,
    TrackerSnapshot,
    WeakArea,
)


class TrackerRepository(Protocol):
    """Storage collaborator for one learner's records."""

    def practice_items(self) -> Sequence[PracticeItem]:
        ...

    def design_topics(self) -> Sequence[DesignTopic]:
        ...

    def interviews(self) -> Sequence[InterviewResult]:
        ...

    def weak_areas(self) -> Sequence[WeakArea]:
        ...

    def study_sessions(self) -> Sequence[StudySession]:
        ...

    def add_weak_area(self, weak_area: WeakArea) -> WeakArea:
        ...


def snapshot_from(repository: TrackerRepository) -> TrackerSnapshot:
    return TrackerSnapshot(
        problems=list(repository.practice_items()),
        topics=list(repository.design_topics()),
        interviews=list(repository.interviews()),
        weak_areas=list(repository.weak_areas()),
        sessions=list(repository.study_sessions()),
    )


class InMemoryTrackerRepository:
    """List-backed repository. Returned sequences are copies."""

    def __init__(
        self,
        problems: Iterable[PracticeItem] = (),
        topics: Iterable[DesignTopic] = (),
        interviews: Iterable[InterviewResult] = (),
        weak_areas: Iterable[WeakArea] = (),
        sessions: Iterable[StudySession] = (),
    ) -> None:
        self._problems: List[PracticeItem] = list(problems)
        self._topics: List[DesignTopic] = list(topics)
        self._interviews: List[InterviewResult] = list(interviews)
        self._weak_areas: List[WeakArea] = list(weak_areas)
        self._sessions: List[StudySession] = list(sessions)

    @classmethod
    def from_snapshot(cls, snapshot: TrackerSnapshot) -> "InMemoryTrackerRepository":
        return cls(
            problems=snapshot.problems,
            topics=snapshot.topics,
            interviews=snapshot.interviews,
            weak_areas=snapshot.weak_areas,
            sessions=snapshot.sessions,
        )

    def practice_items(self) -> List[PracticeItem]:
        return list(self._problems)

    def design_topics(self) -> List[DesignTopic]:
        return list(self._topics)

    def interviews(self) -> List[InterviewResult]:
        return list(self._interviews)

    def weak_areas(self) -> List[WeakArea]:
        return list(self._weak_areas)

    def study_sessions(self) -> List[StudySession]:
        return list(self._sessions)

    def add_weak_area(self, weak_area: WeakArea) -> WeakArea:
        if weak_area.id is None:
            weak_area = replace(weak_area, id=f"wa-{len(self._weak_areas) + 1}")
        self._weak_areas.append(weak_area)
        return weak_area

    def resolve_weak_area(self, weak_area_id: str, now: datetime) -> WeakArea:
        """Mark a weak area resolved; the learner drives this, never the detector."""
        index = self._find_weak_area(weak_area_id)
        if index is None:
            raise InvalidArgument(f"No weak area with id '{weak_area_id}'.")
        resolved = replace(self._weak_areas[index], is_resolved=True, resolved_at=now)
        self._weak_areas[index] = resolved
        return resolved

    def _find_weak_area(self, weak_area_id: str) -> Optional[int]:
        for index, weak_area in enumerate(self._weak_areas):
            if weak_area.id == weak_area_id:
                return index
        return None
