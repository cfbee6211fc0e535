# ABOUTME: Converts analytics summaries into JSON-ready primitives and writes them to disk.
# ABOUTME: Timestamps become ISO strings and closed labels become their stored values.

import json
from dataclasses import asdict, is_dataclass
from datetime import date, datetime
from enum import Enum
from pathlib import Path
from typing import Any


def _jsonable(value: Any) -> Any:
    if isinstance(value, Enum):
        return value.value
    if isinstance(value, (datetime, date)):
        return value.isoformat()
    if isinstance(value, dict):
        return {str(_jsonable(k)): _jsonable(v) for k, v in value.items()}
    if isinstance(value, (list, tuple)):
        return [_jsonable(v) for v in value]
    return value


def summary_to_dict(summary: Any) -> Any:
    """Flatten a summary dataclass (or a list of them) into plain dicts/lists."""

    if is_dataclass(summary) and not isinstance(summary, type):
        return _jsonable(asdict(summary))
    if isinstance(summary, (list, tuple)):
        return [summary_to_dict(item) for item in summary]
    return _jsonable(summary)


def write_summary(summary: Any, output_path: Path) -> Path:
    output_path = Path(output_path)
    output_path.parent.mkdir(parents=True, exist_ok=True)
    output_path.write_text(json.dumps(summary_to_dict(summary), indent=2), encoding="utf-8")
    return output_path
