# ABOUTME: Flags weak areas from a single interview's per-dimension scores.
# ABOUTME: Skips any (area, category) pair that already has an unresolved weak area.

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Iterable, List, Optional, Tuple

from src.common.config import DetectorConfig
from src.common.schemas import InterviewResult, Severity, WeakArea

logger = logging.getLogger(__name__)

COMMUNICATION_AREA = "Communication Skills"
PROBLEM_SOLVING_AREA = "Problem Solving Approach"
TECHNICAL_AREA = "Technical Knowledge"


@dataclass(frozen=True)
class WeakAreaCandidate:
    """A weak area the caller should persist."""

    area: str
    category: str
    severity: Severity
    score: float

    @property
    def key(self) -> Tuple[str, str]:
        return (self.area, self.category)


@dataclass(frozen=True)
class DimensionRule:
    area: str
    score_field: str
    # None means "use the interview's own track label".
    category: Optional[str] = None


def dimension_rules(config: DetectorConfig) -> Tuple[DimensionRule, ...]:
    return (
        DimensionRule(COMMUNICATION_AREA, "communication_score", config.behavioral_category),
        DimensionRule(PROBLEM_SOLVING_AREA, "problem_solving_score"),
        DimensionRule(TECHNICAL_AREA, "technical_score"),
    )


def severity_for(score: float, config: DetectorConfig = DetectorConfig()) -> Severity:
    return Severity.HIGH if score < config.high_severity_below else Severity.MEDIUM


def detect_weak_areas(
    interview: InterviewResult,
    existing_unresolved: Iterable[WeakArea],
    config: DetectorConfig = DetectorConfig(),
) -> List[WeakAreaCandidate]:
    """
    Decide which weak areas a freshly scored interview should create.

    Each dimension is checked on its own, so one interview yields 0-3 candidates.
    A candidate whose (area, category) matches an unresolved weak area is dropped
    without touching the existing record; severity is never escalated.
    """

    taken = {w.key for w in existing_unresolved if not w.is_resolved}
    candidates: List[WeakAreaCandidate] = []

    for rule in dimension_rules(config):
        score = getattr(interview, rule.score_field)
        if score >= config.flag_below:
            continue
        category = rule.category if rule.category is not None else interview.type
        key = (rule.area, category)
        if key in taken:
            logger.debug("Interview %s: '%s' already open for %s, skipping", interview.id, rule.area, category)
            continue
        taken.add(key)
        candidates.append(
            WeakAreaCandidate(
                area=rule.area,
                category=category,
                severity=severity_for(score, config),
                score=score,
            )
        )
    return candidates
