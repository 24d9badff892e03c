"""
errors.py - diagnostic records and exceptions for the validation engine.

Public API
----------
ValidationError
    One path-qualified diagnostic produced while walking a JSON value.

ErrorCode / Category
    Machine-readable codes and the category each one belongs to.

DiagnosticCollector
    Ordered accumulator owned by a single top-level validation.

SchemaError / UnknownTypeError
    Exceptions raised by repositories for malformed or incomplete schemas.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Iterator

__all__ = [
    "Category",
    "DiagnosticCollector",
    "ErrorCode",
    "SchemaError",
    "UnknownTypeError",
    "ValidationError",
]

# --------------------------------------------------------------------------- #
# Exceptions                                                                  #
# --------------------------------------------------------------------------- #

class SchemaError(ValueError):
    """Raised when a compiled schema is malformed."""


class UnknownTypeError(SchemaError, LookupError):
    """Raised when a root type name cannot be resolved."""


# --------------------------------------------------------------------------- #
# Codes & categories                                                          #
# --------------------------------------------------------------------------- #

class Category(str, Enum):
    PARSE = "ParseError"
    TYPE = "TypeError"
    VALIDATION = "ValidationError"
    SEMANTIC = "SemanticError"

    def __str__(self) -> str:
        return self.value


class ErrorCode(str, Enum):
    INVALID_EXPRESSION = "InvalidExpression"
    UNKNOWN_TYPE = "UnknownType"
    TYPE_MISMATCH = "TypeMismatch"
    FIELD_MISSING = "FieldMissing"
    FIELD_MUST_BE_ABSENT = "FieldMustBeAbsent"
    UNKNOWN_CONSTRAINT = "UnknownConstraint"
    CONSTRAINT_VIOLATION = "ConstraintViolation"
    VALIDATOR_FAILED = "ValidatorFailed"

    def __str__(self) -> str:
        return self.value

    @property
    def category(self) -> Category:
        return _CATEGORY_OF[self]


_CATEGORY_OF = {
    ErrorCode.INVALID_EXPRESSION: Category.PARSE,
    ErrorCode.UNKNOWN_TYPE: Category.TYPE,
    ErrorCode.TYPE_MISMATCH: Category.TYPE,
    ErrorCode.FIELD_MISSING: Category.VALIDATION,
    ErrorCode.FIELD_MUST_BE_ABSENT: Category.VALIDATION,
    ErrorCode.UNKNOWN_CONSTRAINT: Category.SEMANTIC,
    ErrorCode.CONSTRAINT_VIOLATION: Category.VALIDATION,
    ErrorCode.VALIDATOR_FAILED: Category.VALIDATION,
}


# --------------------------------------------------------------------------- #
# Diagnostics                                                                 #
# --------------------------------------------------------------------------- #

@dataclass(frozen=True)
class ValidationError:
    """A single diagnostic: where, what, and how to classify it."""

    path: str
    message: str
    code: ErrorCode
    category: Category

    @classmethod
    def of(cls, code: ErrorCode, path: str, message: str) -> "ValidationError":
        """Build a diagnostic whose category is derived from *code*."""
        return cls(path=path, message=message, code=code, category=code.category)

    def as_dict(self) -> dict[str, str]:
        return {
            "path": self.path,
            "code": str(self.code),
            "category": str(self.category),
            "message": self.message,
        }

    def __str__(self) -> str:
        return f"{self.path}: {self.message}"


class DiagnosticCollector:
    """Append-only list of diagnostics in document pre-order."""

    def __init__(self) -> None:
        self._errors: list[ValidationError] = []

    def add(self, code: ErrorCode, path: str, message: str) -> None:
        self._errors.append(ValidationError.of(code, path, message))

    @property
    def errors(self) -> list[ValidationError]:
        return list(self._errors)

    def __len__(self) -> int:
        return len(self._errors)

    def __bool__(self) -> bool:
        return bool(self._errors)

    def __iter__(self) -> Iterator[ValidationError]:
        return iter(self._errors)
