"""
repository.py - an in-memory, read-only catalog of types and validators.

The validation engine only needs three queries from a repository:

* ``resolve_root_type(name_or_none) -> str``
* ``get_type(name) -> TypeDefinition | None``
* ``get_validator(type_name, constraint_name) -> ValidatorDefinition | None``

:class:`Repository` answers them from dictionaries seeded with the builtin
catalog.  Any other object exposing the same three methods can be handed to
the engine instead.
"""

from __future__ import annotations

from types import MappingProxyType
from typing import Any, Mapping, Optional, Sequence

from .builtins import BUILTIN_TYPES, BUILTIN_VALIDATORS, SUPPORTED_VERSION
from .errors import SchemaError, UnknownTypeError
from .nodes import (
    Named,
    NullableNamed,
    Param,
    TypeDefinition,
    TypeNode,
    ValidatorDefinition,
    node_from_dict,
)

__all__ = ["Repository"]


class Repository:
    """Immutable lookup tables for one compiled schema."""

    def __init__(
        self,
        types: Mapping[str, TypeNode] | None = None,
        validators: Mapping[str, Mapping[str, ValidatorDefinition]] | None = None,
        *,
        root: str | None = None,
        version: str = SUPPORTED_VERSION,
    ):
        user_types = {name: TypeDefinition(name=name, expr=expr) for name, expr in (types or {}).items()}
        clash = sorted(set(user_types) & set(BUILTIN_TYPES))
        if clash:
            raise SchemaError(f"cannot redefine builtin type(s): {clash}")

        merged: dict[str, dict[str, ValidatorDefinition]] = {
            target: dict(table) for target, table in BUILTIN_VALIDATORS.items()
        }
        for target, table in (validators or {}).items():
            merged.setdefault(target, {}).update(table)

        self.version = version
        self.root = root
        self._user_type_names = tuple(user_types)
        self._types = MappingProxyType({**BUILTIN_TYPES, **user_types})
        self._validators = MappingProxyType(
            {target: MappingProxyType(table) for target, table in merged.items()}
        )

    # ------------------------------------------------------------------ #
    # Construction from the compiled JSON form                           #
    # ------------------------------------------------------------------ #
    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "Repository":
        """Build a repository from a compiled-schema mapping."""
        if not isinstance(data, Mapping):
            raise SchemaError("compiled schema must be a JSON object")

        raw_types = data.get("types", {})
        if not isinstance(raw_types, Mapping):
            raise SchemaError("'types' must be an object mapping names to type nodes")
        types = {name: node_from_dict(node, where=name) for name, node in raw_types.items()}

        raw_validators = data.get("validators", {})
        if not isinstance(raw_validators, Mapping):
            raise SchemaError("'validators' must be an object keyed by target type")

        validators: dict[str, dict[str, ValidatorDefinition]] = {}
        for target, table in raw_validators.items():
            if not isinstance(table, Mapping):
                raise SchemaError(f"validators for '{target}' must be an object")
            validators[target] = {
                name: _validator_from_dict(name, spec, where=f"{target}.{name}")
                for name, spec in table.items()
            }

        return cls(
            types,
            validators,
            root=data.get("root"),
            version=data.get("version", SUPPORTED_VERSION),
        )

    # ------------------------------------------------------------------ #
    # Queries                                                            #
    # ------------------------------------------------------------------ #
    @property
    def type_names(self) -> tuple[str, ...]:
        """User-defined type names in declaration order."""
        return self._user_type_names

    def resolve_root_type(self, name: Optional[str] = None) -> str:
        if name is None:
            name = self.root
        if name is None and len(self._user_type_names) == 1:
            name = self._user_type_names[0]
        if name is None:
            raise UnknownTypeError("No root type given and the schema declares no default root")
        if name not in self._types:
            raise UnknownTypeError(f"Unknown root type: {name}")
        return name

    def get_type(self, name: str) -> Optional[TypeDefinition]:
        return self._types.get(name)

    def get_validator(self, type_name: str, constraint_name: str) -> Optional[ValidatorDefinition]:
        """Look up ``type_name.constraint_name``, following simple aliases."""
        seen = set()
        while type_name not in seen:
            seen.add(type_name)
            found = self._validators.get(type_name, {}).get(constraint_name)
            if found is not None:
                return found

            definition = self._types.get(type_name)
            if definition is None or definition.is_builtin:
                return None
            if not isinstance(definition.expr, (Named, NullableNamed)):
                return None
            type_name = definition.expr.name
        return None


def _validator_from_dict(name: str, spec: Any, *, where: str) -> ValidatorDefinition:
    if isinstance(spec, str):
        return ValidatorDefinition(name=name, body=spec)
    if not isinstance(spec, Mapping) or not isinstance(spec.get("body"), str):
        raise SchemaError(f"{where}: a custom validator needs a string 'body'")

    raw_params = spec.get("params") or ()
    if not isinstance(raw_params, Sequence) or isinstance(raw_params, str):
        raise SchemaError(f"{where}: 'params' must be a list")
    params = []
    for param in raw_params:
        if isinstance(param, str):
            params.append(Param(param))
        elif isinstance(param, Mapping) and "name" in param:
            params.append(Param(param["name"], param.get("default")))
        else:
            raise SchemaError(f"{where}: malformed parameter {param!r}")

    return ValidatorDefinition(name=name, body=spec["body"], params=tuple(params))
