"""JSON utilities with numpy and Path support."""

from __future__ import annotations

import json
import logging
from datetime import date, datetime
from pathlib import Path
from typing import Any

import numpy as np

logger = logging.getLogger(__name__)


def _json_default(obj: Any) -> Any:
    """JSON serializer for types not supported by default.

    Handles:
    - pathlib.Path -> str
    - datetime/date -> ISO-8601 string
    - numpy arrays -> list
    - numpy scalars -> Python scalars
    """
    if isinstance(obj, Path):
        return str(obj)

    if isinstance(obj, (datetime, date)):
        return obj.isoformat()

    if isinstance(obj, np.ndarray):
        return obj.tolist()
    if isinstance(obj, np.integer):
        return int(obj)
    if isinstance(obj, np.floating):
        return float(obj)

    return str(obj)


def dumps_json(obj: Any, *, indent: int | None = 2) -> str:
    """Serialize an object to a JSON string using the shared default hook."""
    return json.dumps(obj, indent=indent, ensure_ascii=False, default=_json_default)


def write_json(path: str | Path, obj: Any) -> None:
    """Write object to JSON file with pretty formatting.

    Args:
        path: Output file path
        obj: Object to serialize (must be JSON-serializable)
    """
    path_obj = Path(path)
    path_obj.parent.mkdir(parents=True, exist_ok=True)
    path_obj.write_text(dumps_json(obj), encoding="utf-8")


def read_json(path: str | Path) -> dict[str, Any]:
    """Read and parse JSON file.

    Args:
        path: Input file path

    Returns:
        Parsed JSON as dictionary
    """
    data: Any = json.loads(Path(path).read_text(encoding="utf-8"))
    if not isinstance(data, dict):
        raise ValueError(f"Expected JSON object, got {type(data).__name__}")
    return data
