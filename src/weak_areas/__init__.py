# ABOUTME: Exposes rule-based weak-area detection and its persistence boundary.
# ABOUTME: The detector is pure; WeakAreaRecorder writes through the repository port.

from .detector import WeakAreaCandidate, detect_weak_areas, severity_for
from .service import WeakAreaRecorder, candidate_to_weak_area

__all__ = [
    "WeakAreaCandidate",
    "WeakAreaRecorder",
    "candidate_to_weak_area",
    "detect_weak_areas",
    "severity_for",
]
