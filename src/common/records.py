# ABOUTME: Loads per-learner record tables (parquet or JSON) into canonical schema objects.
# ABOUTME: Used by the CLI to build a TrackerSnapshot from exported storage dumps.

from __future__ import annotations

import logging
import math
from dataclasses import fields
from pathlib import Path
from typing import Any, Dict, List, Tuple, Type

import pandas as pd

from .errors import InvalidArgument, RecordLoadError
from .schemas import (
    DesignTopic,
    InterviewResult,
    PracticeItem,
    StudySession,
    TrackerSnapshot,
    WeakArea,
)

logger = logging.getLogger(__name__)

TABLES: Dict[str, Tuple[Type, Tuple[str, ...]]] = {
    "problems": (PracticeItem, ("id", "title", "category", "difficulty")),
    "topics": (DesignTopic, ("id", "title", "category")),
    "interviews": (
        InterviewResult,
        (
            "id",
            "type",
            "interview_date",
            "overall_score",
            "communication_score",
            "problem_solving_score",
            "technical_score",
        ),
    ),
    "weak_areas": (WeakArea, ("area", "category", "severity", "identified_at")),
    "sessions": (StudySession, ("session_date", "duration_minutes", "type")),
}

DATETIME_COLUMNS = {
    "last_attempted_at",
    "next_review_date",
    "last_reviewed_at",
    "interview_date",
    "identified_at",
    "resolved_at",
    "session_date",
}


def read_table(records_dir: Path, name: str) -> pd.DataFrame:
    """Read ``<name>.parquet`` or ``<name>.json``; an absent table is an empty frame."""

    parquet_path = records_dir / f"{name}.parquet"
    json_path = records_dir / f"{name}.json"
    if parquet_path.exists():
        return pd.read_parquet(parquet_path)
    if json_path.exists():
        return pd.read_json(json_path, orient="records", dtype=False, convert_dates=False)
    return pd.DataFrame()


def frame_to_records(df: pd.DataFrame, name: str) -> List[Any]:
    record_cls, required = TABLES[name]
    if df is None or df.empty:
        return []

    missing = [col for col in required if col not in df.columns]
    if missing:
        raise RecordLoadError(f"Table '{name}' is missing columns: {', '.join(missing)}.")

    allowed = {f.name for f in fields(record_cls)}
    # schemas use postponed annotations, so field types are strings
    int_fields = {f.name for f in fields(record_cls) if f.type == "int"}
    frame = df[[col for col in df.columns if col in allowed]].copy()
    for col in frame.columns:
        if col in DATETIME_COLUMNS:
            parsed = pd.to_datetime(frame[col], utc=True, errors="coerce", format="ISO8601")
            unparsed = parsed.isna() & frame[col].notna()
            if unparsed.any():
                position = int(unparsed.to_numpy().argmax())
                raise RecordLoadError(
                    f"Row {position} of table '{name}' has an unparseable {col}: {frame[col].iloc[position]!r}."
                )
            frame[col] = parsed

    records = []
    for position, row in enumerate(frame.to_dict(orient="records")):
        kwargs = {}
        for key, value in row.items():
            value = _to_python(value)
            if value is None:
                continue
            if key in int_fields and isinstance(value, float):
                # pandas widens int columns with gaps to float64
                if not value.is_integer():
                    raise RecordLoadError(
                        f"Row {position} of table '{name}': {key} must be a whole number, got {value}."
                    )
                value = int(value)
            kwargs[key] = str(value) if key == "id" else value
        try:
            records.append(record_cls(**kwargs))
        except (TypeError, InvalidArgument) as exc:
            raise RecordLoadError(f"Row {position} of table '{name}' is invalid: {exc}") from exc
    return records


def load_snapshot(records_dir: Path) -> TrackerSnapshot:
    """
    Build a snapshot from a directory of record tables.

    Expected table names: problems, topics, interviews, weak_areas, sessions.
    """
    records_dir = Path(records_dir)
    loaded = {name: frame_to_records(read_table(records_dir, name), name) for name in TABLES}
    logger.debug(
        "Loaded snapshot from %s: %s",
        records_dir,
        ", ".join(f"{name}={len(rows)}" for name, rows in loaded.items()),
    )
    return TrackerSnapshot(
        problems=loaded["problems"],
        topics=loaded["topics"],
        interviews=loaded["interviews"],
        weak_areas=loaded["weak_areas"],
        sessions=loaded["sessions"],
    )


def _to_python(value: Any) -> Any:
    if value is None or value is pd.NaT:
        return None
    if isinstance(value, pd.Timestamp):
        return value.to_pydatetime()
    if hasattr(value, "tolist"):
        # numpy scalars and arrays (parquet list columns)
        value = value.tolist()
    if isinstance(value, float) and math.isnan(value):
        return None
    if isinstance(value, list):
        return tuple(value)
    return value
