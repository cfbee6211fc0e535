# ABOUTME: Loads tracker thresholds from YAML into frozen configuration dataclasses.
# ABOUTME: Missing sections fall back to the stock spaced-repetition and weakness thresholds.

from __future__ import annotations

from dataclasses import dataclass, field, fields
from pathlib import Path
from typing import Any, Dict, Mapping, Optional, Tuple

import yaml

from .errors import InvalidArgument

REVIEW_INTERVALS_DAYS: Tuple[int, ...] = (1, 3, 7, 14, 30)


@dataclass(frozen=True)
class ReviewConfig:
    """Spaced-repetition interval table, in days."""

    intervals_days: Tuple[int, ...] = REVIEW_INTERVALS_DAYS

    def __post_init__(self) -> None:
        intervals = tuple(int(v) for v in self.intervals_days)
        if not intervals:
            raise InvalidArgument("review.intervals_days must not be empty.")
        if any(v < 1 for v in intervals):
            raise InvalidArgument("review.intervals_days entries must be >= 1.")
        object.__setattr__(self, "intervals_days", intervals)


@dataclass(frozen=True)
class AnalyticsConfig:
    strong_threshold: float = 70.0
    average_threshold: float = 40.0
    common_weakness_threshold: float = 7.0
    focus_area_solved_fraction: float = 0.5
    max_focus_areas: int = 3
    week_window_days: int = 7
    month_window_days: int = 30

    def __post_init__(self) -> None:
        if self.average_threshold > self.strong_threshold:
            raise InvalidArgument("analytics.average_threshold must not exceed strong_threshold.")
        if self.max_focus_areas < 0:
            raise InvalidArgument("analytics.max_focus_areas must be >= 0.")
        if self.week_window_days < 0 or self.month_window_days < 0:
            raise InvalidArgument("analytics window sizes must be >= 0.")


@dataclass(frozen=True)
class DetectorConfig:
    """Per-interview weak-area thresholds (scores strictly below trigger)."""

    flag_below: float = 6.0
    high_severity_below: float = 4.0
    behavioral_category: str = "Behavioral"

    def __post_init__(self) -> None:
        if self.high_severity_below > self.flag_below:
            raise InvalidArgument("detector.high_severity_below must not exceed flag_below.")


@dataclass(frozen=True)
class TrackerConfig:
    review: ReviewConfig = field(default_factory=ReviewConfig)
    analytics: AnalyticsConfig = field(default_factory=AnalyticsConfig)
    detector: DetectorConfig = field(default_factory=DetectorConfig)


DEFAULT_CONFIG = TrackerConfig()


def _section(cls, raw: Optional[Mapping[str, Any]], name: str):
    if raw is None:
        return cls()
    if not isinstance(raw, Mapping):
        raise InvalidArgument(f"Config section '{name}' must be a mapping.")
    allowed = {f.name for f in fields(cls)}
    unknown = set(raw) - allowed
    if unknown:
        raise InvalidArgument(f"Unknown keys in '{name}': {', '.join(sorted(unknown))}.")
    return cls(**raw)


def tracker_config_from_dict(cfg: Optional[Mapping[str, Any]]) -> TrackerConfig:
    cfg = cfg or {}
    unknown = set(cfg) - {"review", "analytics", "detector"}
    if unknown:
        raise InvalidArgument(f"Unknown config sections: {', '.join(sorted(unknown))}.")
    return TrackerConfig(
        review=_section(ReviewConfig, cfg.get("review"), "review"),
        analytics=_section(AnalyticsConfig, cfg.get("analytics"), "analytics"),
        detector=_section(DetectorConfig, cfg.get("detector"), "detector"),
    )


def load_tracker_config(config_path: Optional[Path]) -> TrackerConfig:
    """
    Load tracker thresholds from a YAML file.

    Args:
        config_path: Path to a YAML file; ``None`` returns the defaults.

    Returns:
        TrackerConfig with every section populated.
    """
    if config_path is None:
        return DEFAULT_CONFIG
    with open(config_path) as f:
        cfg: Dict[str, Any] = yaml.safe_load(f) or {}
    if not isinstance(cfg, Mapping):
        raise InvalidArgument(f"Config at {config_path} must be a YAML mapping.")
    return tracker_config_from_dict(cfg)
