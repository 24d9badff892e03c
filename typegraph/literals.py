"""
literals.py - coerce textual operands into typed JSON values.

Constraint arguments, parameter defaults and the right-hand side of
expressions all arrive as raw text.  :func:`coerce` turns them into
``bool`` / ``None`` / ``int`` / ``float`` / ``str``.
"""

from __future__ import annotations

import re
from typing import Any

__all__ = ["coerce", "decode_string_literal"]

_NUMBER_RE = re.compile(r"^-?\d+(?:\.\d+)?$")

_ESCAPES = {"n": "\n", "r": "\r", "t": "\t"}


def decode_string_literal(text: str) -> str:
    """Strip the surrounding quotes of *text* and decode backslash escapes.

    Only ``\\n``, ``\\r`` and ``\\t`` are special; any other escaped
    character is kept literally (``\\"`` -> ``"``).
    """
    out: list[str] = []
    escaped = False
    for char in text[1:-1]:
        if escaped:
            out.append(_ESCAPES.get(char, char))
            escaped = False
        elif char == "\\":
            escaped = True
        else:
            out.append(char)
    return "".join(out)


def coerce(value: Any) -> Any:
    """Convert a raw operand to a typed value.

    >>> coerce(" 42 "), coerce("-1.5"), coerce("'a\\\\tb'"), coerce("null")
    (42, -1.5, 'a\\tb', None)

    Anything that is not a string is returned untouched; unrecognised text
    comes back trimmed.
    """
    if not isinstance(value, str):
        return value

    text = value.strip()
    if text == "true":
        return True
    if text == "false":
        return False
    if text == "null":
        return None
    if _NUMBER_RE.fullmatch(text):
        return float(text) if "." in text else int(text)
    if len(text) >= 2 and text[0] == text[-1] and text[0] in "\"'":
        return decode_string_literal(text)
    return text
