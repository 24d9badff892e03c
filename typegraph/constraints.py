"""
constraints.py - apply a named constraint to a value.

A constraint usage is resolved against its target type through the
repository.  Builtin validators get a native call; custom validators have
their parameters bound and their pre-parsed body evaluated with the value as
``this``.
"""

from __future__ import annotations

import logging
from typing import Any

from .errors import DiagnosticCollector, ErrorCode
from .literals import coerce
from .nodes import ConstraintUsage, Scope, ValidatorDefinition

__all__ = ["apply_constraint", "bind_params", "resolve_argument"]

log = logging.getLogger(__name__)


def resolve_argument(usage: ConstraintUsage) -> Any:
    """Argument handed to a builtin validator.

    One call argument is coerced, several are coerced into a list, none
    falls back to the raw ``argument``.
    """
    if usage.call_args:
        if len(usage.call_args) == 1:
            return coerce(usage.call_args[0])
        return [coerce(arg) for arg in usage.call_args]
    return usage.argument


def bind_params(validator: ValidatorDefinition, usage: ConstraintUsage) -> dict[str, Any]:
    """Bind positional arguments to *validator*'s parameters, filling defaults."""
    if usage.call_args:
        incoming = list(usage.call_args)
    elif usage.argument is not None:
        incoming = [usage.argument]
    else:
        incoming = []

    bound: dict[str, Any] = {}
    for index, param in enumerate(validator.params):
        raw = incoming[index] if index < len(incoming) else None
        if raw is None:
            raw = param.default_expr
        bound[param.name] = coerce(raw)
    return bound


def apply_constraint(
    target_type: str,
    usage: ConstraintUsage,
    value: Any,
    path: str,
    repository,
    collector: DiagnosticCollector,
    scope: Scope,
) -> None:
    """Check *value* against one constraint, adding at most one diagnostic."""
    validator = repository.get_validator(target_type, usage.name)
    if validator is None:
        collector.add(
            ErrorCode.UNKNOWN_CONSTRAINT, path,
            f"Unknown constraint: {target_type}.{usage.name}",
        )
        return

    if validator.is_builtin:
        if validator.evaluate(value, resolve_argument(usage)) is False:
            collector.add(
                ErrorCode.CONSTRAINT_VIOLATION, path,
                f"Constraint failed: {target_type}.{usage.name}",
            )
        return

    result = validator.expression.evaluate(value, bind_params(validator, usage))
    if result is None:
        # Unrecognised bodies pass.
        log.debug("indeterminate validator %s.%s at %s", target_type, usage.name, path)
    elif result is False:
        collector.add(
            ErrorCode.VALIDATOR_FAILED, path,
            f"Constraint failed: {target_type}.{usage.name}",
        )
