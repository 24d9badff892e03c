"""
expressions.py - the embedded mini-language for validator bodies and guards.

Two kinds of text are understood:

* **validator bodies** - ``this matches /re/flags``, ``not (this matches
  /re/flags)``, ``this <op> $p1 and this <op> $p2`` and ``this <op>
  <operand>``;
* **conditional guards** - ``dotted.path <op> <literal>`` with ``=`` / ``!=``.

Text is parsed once into a small expression tree; evaluation is tri-state and
returns ``True``, ``False`` or ``None`` (indeterminate).
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Any, Mapping, Optional, Tuple, Union

from . import utils
from .literals import coerce

__all__ = [
    "AllOf",
    "Comparison",
    "Expression",
    "ParamRef",
    "PathCondition",
    "RegexTest",
    "Unrecognized",
    "compare",
    "compile_regex",
    "compile_regex_literal",
    "parse_condition",
    "parse_validator_body",
    "strict_equal",
]

# --------------------------------------------------------------------------- #
# Operand helpers                                                             #
# --------------------------------------------------------------------------- #

_REGEX_FLAGS = {
    "i": re.IGNORECASE,
    "m": re.MULTILINE,
    "s": re.DOTALL,
    # no Python counterpart; harmless for a one-shot search
    "g": 0,
    "y": 0,
    "u": 0,
    "d": 0,
}


def strict_equal(left: Any, right: Any) -> bool:
    """Equal in both JSON kind and value (``1 == True`` is not equal).

    Arrays and objects are compared element by element with the same rule.
    """
    kind = utils._json_kind(left)
    if kind != utils._json_kind(right):
        return False
    if kind == "array":
        return len(left) == len(right) and all(strict_equal(a, b) for a, b in zip(left, right))
    if kind == "object":
        return left.keys() == right.keys() and all(strict_equal(left[k], right[k]) for k in left)
    return left == right


def compare(left: Any, op: str, right: Any) -> bool:
    """Apply *op* without coercing across JSON kinds."""
    if op == "=":
        return strict_equal(left, right)
    if op == "!=":
        return not strict_equal(left, right)

    both_numbers = utils._is_number(left) and utils._is_number(right)
    both_strings = isinstance(left, str) and isinstance(right, str)
    if not (both_numbers or both_strings):
        return False

    if op == "<":
        return left < right
    if op == ">":
        return left > right
    if op == "<=":
        return left <= right
    if op == ">=":
        return left >= right
    return False


def _anchor_at_end(source: str) -> str:
    """Rewrite unescaped ``$`` outside character classes to ``\\Z``.

    Python's ``$`` also matches before a trailing newline.
    """
    out = []
    in_class = False
    i = 0
    while i < len(source):
        ch = source[i]
        if ch == "\\":
            out.append(source[i:i + 2])
            i += 2
            continue
        if in_class:
            if ch == "]":
                in_class = False
        elif ch == "[":
            in_class = True
        elif ch == "$":
            ch = r"\Z"
        out.append(ch)
        i += 1
    return "".join(out)


def compile_regex(source: str, flag_letters: str = "") -> Optional[re.Pattern[str]]:
    """Compile *source* with JS-style flag letters; ``None`` if either is bad."""
    flags = 0
    for flag in flag_letters:
        if flag not in _REGEX_FLAGS:
            return None
        flags |= _REGEX_FLAGS[flag]

    if not flags & re.MULTILINE:
        source = _anchor_at_end(source)

    try:
        return re.compile(source, flags)
    except re.error:
        return None


def compile_regex_literal(raw: str) -> Optional[re.Pattern[str]]:
    """Compile ``/pattern/flags``; ``None`` if the literal or pattern is bad."""
    match = re.fullmatch(r"/(.*)/([a-z]*)", raw, re.DOTALL)
    if not match:
        return None
    return compile_regex(match.group(1), match.group(2))


# --------------------------------------------------------------------------- #
# Expression tree                                                             #
# --------------------------------------------------------------------------- #

@dataclass(frozen=True)
class ParamRef:
    """A ``$name`` reference to a bound validator parameter."""

    name: str

    def resolve(self, params: Mapping[str, Any]) -> Any:
        return params.get(self.name)


@dataclass(frozen=True)
class Unrecognized:
    """Text that matched none of the known shapes."""

    text: str

    def evaluate(self, subject: Any, params: Mapping[str, Any] | None = None) -> Optional[bool]:
        return None


@dataclass(frozen=True)
class RegexTest:
    """``this matches /re/`` (optionally negated)."""

    source: str
    pattern: Optional[re.Pattern[str]]
    negated: bool = False

    def evaluate(self, subject: Any, params: Mapping[str, Any] | None = None) -> Optional[bool]:
        if self.pattern is None:
            return None
        found = self.pattern.search(utils._stringify(subject)) is not None
        return not found if self.negated else found


@dataclass(frozen=True)
class Comparison:
    """``this <op> operand`` where operand is a constant or a ``ParamRef``."""

    op: str
    operand: Any

    def evaluate(self, subject: Any, params: Mapping[str, Any] | None = None) -> Optional[bool]:
        right = self.operand
        if isinstance(right, ParamRef):
            right = right.resolve(params or {})
        return compare(subject, self.op, right)


@dataclass(frozen=True)
class AllOf:
    """Conjunction of comparisons (the ranged ``... and ...`` form)."""

    parts: Tuple[Comparison, ...]

    def evaluate(self, subject: Any, params: Mapping[str, Any] | None = None) -> Optional[bool]:
        return all(part.evaluate(subject, params) for part in self.parts)


@dataclass(frozen=True)
class PathCondition:
    """``a.b.c <op> literal`` evaluated against an object scope.

    A scope that is not an object is indeterminate.  A path that cannot be
    walked inside the scope makes the condition false.
    """

    path: Tuple[str, ...]
    op: str
    expected: Any

    def evaluate(self, scope: Any, params: Mapping[str, Any] | None = None) -> Optional[bool]:
        if not utils._is_object(scope):
            return None

        current = scope
        for segment in self.path:
            if not utils._is_object(current) or segment not in current:
                return False
            current = current[segment]

        return compare(current, self.op, self.expected)


Expression = Union[Unrecognized, RegexTest, Comparison, AllOf, PathCondition]


# --------------------------------------------------------------------------- #
# Parsers                                                                     #
# --------------------------------------------------------------------------- #

_IDENT = r"[A-Za-z_][A-Za-z0-9_]*"

_NOT_MATCHES_RE = re.compile(r"^not\s*\(\s*this\s+matches\s+(/.*/[a-z]*)\s*\)$", re.DOTALL)
_MATCHES_RE = re.compile(r"^this\s+matches\s+(/.*/[a-z]*)$", re.DOTALL)
_RANGE_RE = re.compile(
    rf"^this\s*([<>]=?)\s*\$({_IDENT})\s+and\s+this\s*([<>]=?)\s*\$({_IDENT})$"
)
_COMPARE_RE = re.compile(r"^this\s*(<=|>=|<|>|=|!=)\s*(.+)$", re.DOTALL)
_CONDITION_RE = re.compile(rf"^({_IDENT}(?:\.{_IDENT})*)\s*(=|!=)\s*(.+)$", re.DOTALL)


def _operand(raw: str) -> Any:
    raw = raw.strip()
    if raw.startswith("$"):
        return ParamRef(raw[1:])
    return coerce(raw)


def parse_validator_body(text: Any) -> Expression:
    """Parse a custom validator body into an expression tree."""
    if not isinstance(text, str):
        return Unrecognized(repr(text))
    body = text.strip()

    if m := _NOT_MATCHES_RE.match(body):
        return RegexTest(m.group(1), compile_regex_literal(m.group(1)), negated=True)

    if m := _MATCHES_RE.match(body):
        return RegexTest(m.group(1), compile_regex_literal(m.group(1)))

    if m := _RANGE_RE.match(body):
        return AllOf((
            Comparison(m.group(1), ParamRef(m.group(2))),
            Comparison(m.group(3), ParamRef(m.group(4))),
        ))

    if m := _COMPARE_RE.match(body):
        return Comparison(m.group(1), _operand(m.group(2)))

    return Unrecognized(body)


def parse_condition(text: Any) -> Expression:
    """Parse a conditional-type guard into an expression tree."""
    if not isinstance(text, str):
        return Unrecognized(repr(text))
    cond = text.strip()

    if m := _CONDITION_RE.match(cond):
        return PathCondition(tuple(m.group(1).split(".")), m.group(2), coerce(m.group(3).strip()))

    return Unrecognized(cond)
