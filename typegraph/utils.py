"""
utils.py – shared, low-level utilities for the typegraph package.

This module consolidates common helpers for:
- JSON kind inspection (Python's ``bool`` is an ``int``; JSON's is not)
- Type checking (date and date-time strings)
- String rendering of JSON values for regex predicates
- Display helpers (notebook-aware printing)
"""

from __future__ import annotations

import datetime as _dt
import json
import math
import re
from typing import Any, Mapping

# --------------------------------------------------------------------------- #
# Display Helper                                                              #
# --------------------------------------------------------------------------- #

def _display(obj: Any, **print_kwargs) -> None:
    """Pretty-print that degrades gracefully outside Jupyter."""
    try:
        get_ipython  # type: ignore  # noqa: F821
        from IPython.display import display  # type: ignore

        display(obj)
    except Exception:  # fall back to plain text in any environment
        print(obj, **print_kwargs)


# --------------------------------------------------------------------------- #
# JSON kind helpers                                                           #
# --------------------------------------------------------------------------- #

def _is_number(value: Any) -> bool:
    """True for JSON numbers; booleans are excluded."""
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def _is_finite_number(value: Any) -> bool:
    return _is_number(value) and math.isfinite(value)


def _is_object(value: Any) -> bool:
    return isinstance(value, Mapping)


def _json_kind(value: Any) -> str:
    """Name the JSON kind of a decoded value."""
    if value is None:
        return "null"
    if isinstance(value, bool):
        return "boolean"
    if _is_number(value):
        return "number"
    if isinstance(value, str):
        return "string"
    if isinstance(value, (list, tuple)):
        return "array"
    if _is_object(value):
        return "object"
    return type(value).__name__


def _stringify(value: Any) -> str:
    """Render *value* the way a regex predicate sees it (null -> '')."""
    if value is None:
        return ""
    if isinstance(value, str):
        return value
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    if isinstance(value, (list, tuple, dict)):
        return json.dumps(value, separators=(",", ":"), ensure_ascii=False)
    return str(value)


# --------------------------------------------------------------------------- #
# Type Checking Helpers                                                       #
# --------------------------------------------------------------------------- #

_DT_RE = re.compile(r"^\d{4}-\d{2}-\d{2}T\d{2}:\d{2}:\d{2}(?:\.\d{1,6})?(?:Z|[+\-]\d{2}:\d{2})$")
_DATE_RE = re.compile(r"^\d{4}-\d{2}-\d{2}$")


def _is_datetime(value: Any) -> bool:
    """Return True iff *value* is a valid ISO-8601 date-time string."""
    if not isinstance(value, str) or not _DT_RE.fullmatch(value):
        return False
    try:
        _dt.datetime.fromisoformat(value.replace("Z", "+00:00"))
        return True
    except ValueError:
        return False


def _is_date(value: Any) -> bool:
    """Return True iff *value* is a valid ``YYYY-MM-DD`` calendar date."""
    if not isinstance(value, str) or not _DATE_RE.fullmatch(value):
        return False
    try:
        _dt.date.fromisoformat(value)
        return True
    except ValueError:
        return False
