"""Serialization, number formatting, list access and file removal helpers."""

from __future__ import annotations

import dataclasses
import datetime as dt
import json
from pathlib import Path
from typing import Any, Callable, Iterable, Sequence, TypeVar

T = TypeVar("T")


def _json_default(obj: Any) -> Any:
    if dataclasses.is_dataclass(obj) and not isinstance(obj, type):
        return dataclasses.asdict(obj)
    to_dict = getattr(obj, "to_dict", None)
    if callable(to_dict):
        return to_dict()
    if isinstance(obj, (dt.date, dt.time)):
        return obj.isoformat()
    raise TypeError(f"Object of type {type(obj).__name__} is not JSON serializable")


def convert_json_from_struct(obj: Any) -> Any:
    """Convert an object into plain JSON data (dicts, lists, strings, numbers)."""
    try:
        return json.loads(json.dumps(obj, default=_json_default))
    except (TypeError, ValueError) as exc:
        raise TypeError(f"Failed to serialize struct to JSON: {exc}") from exc


def format_number(value: int) -> str:
    """Format an integer with comma thousands separators."""
    return f"{value:,}"


def get_parsed_value_from_vector(
    values: Sequence[str], index: int, parser: Callable[[str], T]
) -> T:
    """Parse the element at ``index`` with ``parser``.

    Raises ``IndexError`` if there is no such element and ``ValueError`` if it
    cannot be parsed.
    """
    if index < 0 or index >= len(values):
        raise IndexError(f"The {index}th element does not exist.")
    try:
        return parser(values[index])
    except (TypeError, ValueError) as exc:
        raise ValueError(f"Failed to parse the value at index {index}: {exc}") from exc


def delete_file(paths: Iterable[str | Path]) -> None:
    """Remove each file in turn, stopping at the first failure."""
    for path in paths:
        Path(path).unlink()