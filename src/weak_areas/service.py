# ABOUTME: Persists detector output through the repository port.
# ABOUTME: Stamps new weak areas with the identification time and an unresolved state.

from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import List, Optional

from src.common.config import DetectorConfig
from src.common.repository import TrackerRepository
from src.common.schemas import InterviewResult, WeakArea, unresolved

from .detector import WeakAreaCandidate, detect_weak_areas

logger = logging.getLogger(__name__)


def candidate_to_weak_area(candidate: WeakAreaCandidate, now: datetime) -> WeakArea:
    return WeakArea(
        area=candidate.area,
        category=candidate.category,
        severity=candidate.severity,
        identified_at=now,
        is_resolved=False,
    )


class WeakAreaRecorder:
    """
    Runs weak-area detection for a new interview and stores what it finds.

    The read-then-insert sequence is not atomic. Callers must serialize calls for
    the same learner (per-user lock, or a unique constraint on unresolved
    (area, category) in storage).
    """

    def __init__(self, repository: TrackerRepository, config: DetectorConfig = DetectorConfig()) -> None:
        self.repository = repository
        self.config = config

    def record_interview(self, interview: InterviewResult, now: Optional[datetime] = None) -> List[WeakArea]:
        now = now if now is not None else datetime.now(timezone.utc)
        existing = unresolved(self.repository.weak_areas())
        candidates = detect_weak_areas(interview, existing, self.config)

        created = []
        for candidate in candidates:
            created.append(self.repository.add_weak_area(candidate_to_weak_area(candidate, now)))
        logger.info(
            "Interview %s: %d weak area(s) created from %d open", interview.id, len(created), len(existing)
        )
        return created
