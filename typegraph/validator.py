"""
validator.py - the structural evaluator and the public validation entry point
=============================================================================

Walks a decoded JSON value in lock-step with a type-expression tree and
collects path-qualified diagnostics.

Public API
----------
validate(json_input, repository, root_type=None) -> list[ValidationError]
    Decode *json_input* if it is text, resolve the root type, then validate
    the whole document depth-first.

JsonValidator
    Thin class wrapper exposing the supported schema-specification versions.

check(value, node, path, repository, collector, scope)
    The recursive step, usable on its own for sub-trees.

Paths follow a fixed grammar: ``$`` is the root, ``.name`` a record field,
``[i]`` an array index, ``.[key:k]`` a dict key and ``.k`` a dict value.
"""

from __future__ import annotations

import json
import logging
from typing import Any, Callable

from . import utils
from .builtins import SUPPORTED_VERSION
from .constraints import apply_constraint
from .errors import DiagnosticCollector, ErrorCode, ValidationError
from .expressions import strict_equal
from .nodes import (
    MISSING,
    Absent,
    ArrayOf,
    Conditional,
    Dict,
    Intersection,
    Literal,
    Named,
    Nullable,
    NullableNamed,
    Record,
    Scope,
    TypeNode,
    Union,
)

__all__ = [
    "JsonValidator",
    "check",
    "decode_json",
    "validate",
]

log = logging.getLogger(__name__)

ROOT_PATH = "$"


# --------------------------------------------------------------------------- #
# Decoding                                                                    #
# --------------------------------------------------------------------------- #

def _reject_constant(name: str) -> Any:
    raise ValueError(f"{name} is not valid JSON")


def decode_json(text: str | bytes) -> Any:
    """Decode JSON text, refusing the ``NaN`` / ``Infinity`` extensions."""
    if isinstance(text, (bytes, bytearray)):
        text = text.decode("utf-8")
    return json.loads(text, parse_constant=_reject_constant)


# --------------------------------------------------------------------------- #
# Recursive evaluator                                                         #
# --------------------------------------------------------------------------- #

def check_type_name(value: Any, type_name: str, path: str, repository, collector: DiagnosticCollector,
                    scope: Scope) -> bool:
    """Validate against a named type; ``False`` when the name is unknown."""
    definition = repository.get_type(type_name)
    if definition is None:
        collector.add(ErrorCode.UNKNOWN_TYPE, path, f"Unknown type: {type_name}")
        return False

    if definition.is_builtin:
        if not definition.matches(value):
            collector.add(ErrorCode.TYPE_MISMATCH, path, f"Expected {type_name}.")
        return True

    check(value, definition.expr, path, repository, collector, scope)
    return True


def _check_named(node: Named, value, path, repository, collector, scope) -> None:
    if not check_type_name(value, node.name, path, repository, collector, scope):
        return
    for usage in node.constraints:
        apply_constraint(node.name, usage, value, path, repository, collector, scope)


def _check_nullable_named(node: NullableNamed, value, path, repository, collector, scope) -> None:
    if value is None:
        return
    check_type_name(value, node.name, path, repository, collector, scope)


def _check_nullable(node: Nullable, value, path, repository, collector, scope) -> None:
    if value is None:
        return
    check(value, node.inner, path, repository, collector, scope)


def _check_array(node: ArrayOf, value, path, repository, collector, scope) -> None:
    if not isinstance(value, (list, tuple)):
        collector.add(ErrorCode.TYPE_MISMATCH, path, "Expected array.")
        return

    for usage in node.constraints:
        apply_constraint("Array", usage, value, path, repository, collector, scope)

    for idx, item in enumerate(value):
        check(item, node.item_type, f"{path}[{idx}]", repository, collector, scope.descend(item, value))


def _check_record(node: Record, value, path, repository, collector, scope) -> None:
    if not utils._is_object(value):
        collector.add(ErrorCode.TYPE_MISMATCH, path, "Expected object.")
        return

    # undeclared keys are not checked
    for field in node.fields:
        child_path = f"{path}.{field.name}"
        if field.name not in value:
            if field.optional or field.default_expr is not None or isinstance(field.type, Absent):
                continue
            collector.add(ErrorCode.FIELD_MISSING, child_path, "Missing required field.")
            continue

        field_value = value[field.name]
        check(field_value, field.type, child_path, repository, collector, scope.descend(field_value, value))


def _check_dict(node: Dict, value, path, repository, collector, scope) -> None:
    if not utils._is_object(value):
        collector.add(ErrorCode.TYPE_MISMATCH, path, "Expected object/dict.")
        return

    for key, item in value.items():
        check(key, node.key_type, f"{path}.[key:{key}]", repository, collector, scope.descend(key, value))
        check(item, node.value_type, f"{path}.{key}", repository, collector, scope.descend(item, value))


def _check_union(node: Union, value, path, repository, collector, scope) -> None:
    if any(is_valid(member, value, repository, scope) for member in node.members):
        return
    collector.add(ErrorCode.TYPE_MISMATCH, path, "Value does not match any union member.")


def _check_intersection(node: Intersection, value, path, repository, collector, scope) -> None:
    for member in node.members:
        check(value, member, path, repository, collector, scope)


def _check_conditional(node: Conditional, value, path, repository, collector, scope) -> None:
    subject = scope.parent if scope.parent is not None else scope.root
    matched = node.guard.evaluate(subject)

    if matched is True:
        check(value, node.then_type, path, repository, collector, scope)
        return
    if matched is False:
        check(value, node.else_type, path, repository, collector, scope)
        return

    # indeterminate guard: either branch will do
    if is_valid(node.then_type, value, repository, scope) or is_valid(node.else_type, value, repository, scope):
        return
    collector.add(ErrorCode.TYPE_MISMATCH, path, "Value does not match conditional branches.")


def _check_literal(node: Literal, value, path, repository, collector, scope) -> None:
    if not strict_equal(value, node.value):
        collector.add(
            ErrorCode.TYPE_MISMATCH, path,
            f"Expected literal {json.dumps(node.value, ensure_ascii=False)}.",
        )


def _check_absent(node: Absent, value, path, repository, collector, scope) -> None:
    if value is not MISSING:
        collector.add(ErrorCode.FIELD_MUST_BE_ABSENT, path, "Expected field to be absent.")


_DISPATCH: dict[type, Callable[..., None]] = {
    Named: _check_named,
    NullableNamed: _check_nullable_named,
    Nullable: _check_nullable,
    ArrayOf: _check_array,
    Record: _check_record,
    Dict: _check_dict,
    Union: _check_union,
    Intersection: _check_intersection,
    Conditional: _check_conditional,
    Literal: _check_literal,
    Absent: _check_absent,
}


def check(value: Any, node: TypeNode, path: str, repository, collector: DiagnosticCollector,
          scope: Scope) -> None:
    """Validate *value* against *node*, appending diagnostics to *collector*."""
    handler = _DISPATCH.get(type(node))
    if handler is None:
        raise TypeError(f"unsupported type node {type(node).__name__} at {path}")
    handler(node, value, path, repository, collector, scope)


def is_valid(node: TypeNode, value: Any, repository, scope: Scope) -> bool:
    """Evaluate *node* in isolation; its diagnostics are discarded."""
    scratch = DiagnosticCollector()
    check(value, node, ROOT_PATH, repository, scratch, scope)
    return len(scratch) == 0


# --------------------------------------------------------------------------- #
# Entry point                                                                 #
# --------------------------------------------------------------------------- #

def validate(json_input: Any, repository, root_type: str | None = None) -> list[ValidationError]:
    """Validate *json_input* (text or decoded value) against *root_type*.

    Returns the diagnostics in document pre-order; an empty list means valid.
    Undecodable text and an unresolvable root type each short-circuit to a
    single diagnostic.
    """
    value = json_input
    if isinstance(json_input, (str, bytes, bytearray)):
        try:
            value = decode_json(json_input)
        except ValueError as exc:
            log.debug("input is not JSON: %s", exc)
            return [ValidationError.of(ErrorCode.INVALID_EXPRESSION, ROOT_PATH, f"Invalid JSON: {exc}")]

    try:
        resolved = repository.resolve_root_type(root_type)
    except (LookupError, ValueError) as exc:
        log.debug("root type %r not resolved: %s", root_type, exc)
        return [ValidationError.of(ErrorCode.UNKNOWN_TYPE, ROOT_PATH, str(exc))]

    collector = DiagnosticCollector()
    check_type_name(value, resolved, ROOT_PATH, repository, collector, Scope.at_root(value))

    log.debug("validated against %s: %d diagnostic(s)", resolved, len(collector))
    return collector.errors


class JsonValidator:
    """Validates JSON documents against a compiled schema repository."""

    SUPPORTED_VERSIONS = (SUPPORTED_VERSION,)

    def validate(self, json_input: Any, repository, root_type: str | None = None) -> list[ValidationError]:
        return validate(json_input, repository, root_type)
