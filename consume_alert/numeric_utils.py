"""Strict parsing of signed 64-bit integers from text."""

from __future__ import annotations

import re

_INT_PATTERN = re.compile(r"[+-]?[0-9]+")
_I64_MIN = -(2**63)
_I64_MAX = 2**63 - 1


def _parse_i64(s: str) -> int | None:
    if not _INT_PATTERN.fullmatch(s):
        return None
    value = int(s)
    if not _I64_MIN <= value <= _I64_MAX:
        return None
    return value


def is_numeric(s: str) -> bool:
    """Return whether ``s`` is a plain signed 64-bit integer literal."""
    return _parse_i64(s) is not None


def convert_numeric(s: str) -> int:
    """Parse ``s`` as a signed 64-bit integer, returning 0 when it is not one."""
    value = _parse_i64(s)
    return 0 if value is None else value