"""
builtins.py - the builtin type and validator catalog.

Builtin types carry a native ``matches`` predicate.  Builtin validators take
``(value, argument)`` and return ``True`` / ``False``, or ``None`` when the
value is of a kind the validator does not apply to (the structural check
reports that mismatch, not the constraint).
"""

from __future__ import annotations

import json
import math
from typing import Any, Callable, Mapping, Optional

from . import utils
from .expressions import compile_regex, compile_regex_literal
from .literals import coerce
from .nodes import TypeDefinition, ValidatorDefinition

__all__ = ["BUILTIN_TYPES", "BUILTIN_VALIDATORS", "SUPPORTED_VERSION"]

SUPPORTED_VERSION = "0.14.2"

# --------------------------------------------------------------------------- #
# Types                                                                       #
# --------------------------------------------------------------------------- #

def _is_int(value: Any) -> bool:
    if not utils._is_finite_number(value):
        return False
    return isinstance(value, int) or float(value).is_integer()


_TYPE_PREDICATES: dict[str, Callable[[Any], bool]] = {
    "Any": lambda v: True,
    "Null": lambda v: v is None,
    "Bool": lambda v: isinstance(v, bool),
    "Int": _is_int,
    "Float": utils._is_finite_number,
    "Number": utils._is_finite_number,
    "String": lambda v: isinstance(v, str),
    "Object": utils._is_object,
    "DateTime": utils._is_datetime,
    "Date": utils._is_date,
}

BUILTIN_TYPES: dict[str, TypeDefinition] = {
    name: TypeDefinition(name=name, matches=predicate)
    for name, predicate in _TYPE_PREDICATES.items()
}

# --------------------------------------------------------------------------- #
# Validator helpers                                                           #
# --------------------------------------------------------------------------- #

def _number(arg: Any) -> Optional[float]:
    arg = coerce(arg)
    return arg if utils._is_number(arg) else None


def _sized(measure: Callable[[Any], Optional[int]], check: Callable[[int, float], bool]):
    """Build a validator comparing ``measure(value)`` against a numeric argument."""

    def evaluate(value: Any, arg: Any) -> Optional[bool]:
        size, bound = measure(value), _number(arg)
        if size is None or bound is None:
            return None
        return check(size, bound)

    return evaluate


def _text_length(value: Any) -> Optional[int]:
    return len(value) if isinstance(value, str) else None


def _array_length(value: Any) -> Optional[int]:
    return len(value) if isinstance(value, (list, tuple)) else None


def _numeric_value(value: Any) -> Optional[float]:
    return value if utils._is_number(value) else None


def _between(value: Any, arg: Any) -> Optional[bool]:
    if not utils._is_number(value) or not isinstance(arg, (list, tuple)) or len(arg) != 2:
        return None
    low, high = _number(arg[0]), _number(arg[1])
    if low is None or high is None:
        return None
    return low <= value <= high


def _multiple_of(value: Any, arg: Any) -> Optional[bool]:
    step = _number(arg)
    if not utils._is_number(value) or not step:
        return None
    quotient = value / step
    return math.isclose(quotient, round(quotient), rel_tol=0, abs_tol=1e-9)


def _pattern(value: Any, arg: Any) -> Optional[bool]:
    arg = coerce(arg)
    if not isinstance(value, str) or not isinstance(arg, str):
        return None
    if arg.startswith("/") and arg.rfind("/") > 0:
        rx = compile_regex_literal(arg)
    else:
        rx = compile_regex(arg)
    if rx is None:
        return None
    return rx.search(value) is not None


def _affix(method: str):
    def evaluate(value: Any, arg: Any) -> Optional[bool]:
        arg = coerce(arg)
        if not isinstance(value, str) or not isinstance(arg, str):
            return None
        return getattr(value, method)(arg)

    return evaluate


def _unique(value: Any, arg: Any) -> Optional[bool]:
    if not isinstance(value, (list, tuple)):
        return None
    if coerce(arg) is False:
        return True
    # canonical JSON keeps 1 and true distinct
    seen = {json.dumps(_canonical(item), sort_keys=True) for item in value}
    return len(seen) == len(value)


def _canonical(item: Any) -> Any:
    """Fold integral floats to ints so ``1`` and ``1.0`` collide."""
    if isinstance(item, float) and item.is_integer():
        return int(item)
    if isinstance(item, (list, tuple)):
        return [_canonical(x) for x in item]
    if utils._is_object(item):
        return {k: _canonical(v) for k, v in item.items()}
    return item


# --------------------------------------------------------------------------- #
# Validator catalog                                                           #
# --------------------------------------------------------------------------- #

_STRING_VALIDATORS = {
    "min": _sized(_text_length, lambda size, bound: size >= bound),
    "max": _sized(_text_length, lambda size, bound: size <= bound),
    "length": _sized(_text_length, lambda size, bound: size == bound),
    "pattern": _pattern,
    "startsWith": _affix("startswith"),
    "endsWith": _affix("endswith"),
}

_NUMBER_VALIDATORS = {
    "min": _sized(_numeric_value, lambda value, bound: value >= bound),
    "max": _sized(_numeric_value, lambda value, bound: value <= bound),
    "between": _between,
    "multipleOf": _multiple_of,
}

_ARRAY_VALIDATORS = {
    "min": _sized(_array_length, lambda size, bound: size >= bound),
    "max": _sized(_array_length, lambda size, bound: size <= bound),
    "length": _sized(_array_length, lambda size, bound: size == bound),
    "unique": _unique,
}


def _catalog(validators: Mapping[str, Callable]) -> dict[str, ValidatorDefinition]:
    return {name: ValidatorDefinition(name=name, evaluate=fn) for name, fn in validators.items()}


BUILTIN_VALIDATORS: dict[str, dict[str, ValidatorDefinition]] = {
    "String": _catalog(_STRING_VALIDATORS),
    "DateTime": _catalog(_STRING_VALIDATORS),
    "Date": _catalog(_STRING_VALIDATORS),
    "Int": _catalog(_NUMBER_VALIDATORS),
    "Float": _catalog(_NUMBER_VALIDATORS),
    "Number": _catalog(_NUMBER_VALIDATORS),
    "Array": _catalog(_ARRAY_VALIDATORS),
}
