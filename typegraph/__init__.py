"""
typegraph – validate decoded JSON against a compiled graph of named types.
"""
from .errors import Category, ErrorCode, SchemaError, UnknownTypeError, ValidationError
from .repository import Repository
from .loader import load_repository
from .validator import JsonValidator, validate
from .card import to_markdown_card

__all__ = [
    "Category",
    "ErrorCode",
    "JsonValidator",
    "Repository",
    "SchemaError",
    "UnknownTypeError",
    "ValidationError",
    "load_repository",
    "to_markdown_card",
    "validate",
]
