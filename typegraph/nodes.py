"""
nodes.py - the type-expression model a compiled schema is made of.

Every node is an immutable dataclass.  Trees are owned by the repository; the
evaluator only reads them.  Named references are resolved lazily through the
repository on every visit, which is what allows recursive types.

:func:`node_from_dict` turns the JSON form of a compiled schema node into the
matching dataclass (a bare string is shorthand for a named reference).
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Callable, Mapping, Optional, Sequence, Tuple

from .errors import SchemaError
from .expressions import Expression, parse_condition, parse_validator_body

__all__ = [
    "MISSING",
    "Absent",
    "ArrayOf",
    "Conditional",
    "ConstraintUsage",
    "Dict",
    "FieldDef",
    "Intersection",
    "Literal",
    "Named",
    "Nullable",
    "NullableNamed",
    "Param",
    "Record",
    "Scope",
    "TypeDefinition",
    "TypeNode",
    "Union",
    "ValidatorDefinition",
    "node_from_dict",
]


class _Missing:
    """Sentinel for a record key that is not present at all."""

    _instance = None

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "MISSING"

    def __bool__(self) -> bool:
        return False


MISSING = _Missing()


# --------------------------------------------------------------------------- #
# Constraint usage                                                            #
# --------------------------------------------------------------------------- #

@dataclass(frozen=True)
class ConstraintUsage:
    """``Int(min: 1)`` -> ``ConstraintUsage("min", argument="1")``."""

    name: str
    call_args: Tuple[Any, ...] = ()
    argument: Any = None


# --------------------------------------------------------------------------- #
# Type nodes                                                                  #
# --------------------------------------------------------------------------- #

@dataclass(frozen=True)
class Named:
    name: str
    constraints: Tuple[ConstraintUsage, ...] = ()


@dataclass(frozen=True)
class NullableNamed:
    name: str


@dataclass(frozen=True)
class Nullable:
    inner: "TypeNode"


@dataclass(frozen=True)
class ArrayOf:
    item_type: "TypeNode"
    constraints: Tuple[ConstraintUsage, ...] = ()


@dataclass(frozen=True)
class FieldDef:
    name: str
    type: "TypeNode"
    optional: bool = False
    default_expr: Optional[str] = None


@dataclass(frozen=True)
class Record:
    fields: Tuple[FieldDef, ...] = ()


@dataclass(frozen=True)
class Dict:
    key_type: "TypeNode"
    value_type: "TypeNode"


@dataclass(frozen=True)
class Union:
    members: Tuple["TypeNode", ...]


@dataclass(frozen=True)
class Intersection:
    members: Tuple["TypeNode", ...]


@dataclass(frozen=True)
class Conditional:
    """``when <condition> then <then_type> else <else_type>``.

    The guard is parsed once, at construction.
    """

    condition: str
    then_type: "TypeNode"
    else_type: "TypeNode"
    guard: Expression = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        object.__setattr__(self, "guard", parse_condition(self.condition))


@dataclass(frozen=True)
class Literal:
    value: Any


@dataclass(frozen=True)
class Absent:
    pass


TypeNode = Any  # one of the node classes above


# --------------------------------------------------------------------------- #
# Definitions                                                                 #
# --------------------------------------------------------------------------- #

@dataclass(frozen=True)
class TypeDefinition:
    """A builtin (``matches`` predicate) or user-defined (``expr``) type."""

    name: str
    expr: Optional[TypeNode] = None
    matches: Optional[Callable[[Any], bool]] = None

    @property
    def is_builtin(self) -> bool:
        return self.matches is not None


@dataclass(frozen=True)
class Param:
    name: str
    default_expr: Optional[str] = None


@dataclass(frozen=True)
class ValidatorDefinition:
    """A builtin (``evaluate`` predicate) or custom (``body``) validator."""

    name: str
    evaluate: Optional[Callable[[Any, Any], Optional[bool]]] = None
    body: Optional[str] = None
    params: Tuple[Param, ...] = ()
    expression: Expression = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        object.__setattr__(self, "expression", parse_validator_body(self.body))

    @property
    def is_builtin(self) -> bool:
        return self.evaluate is not None


# --------------------------------------------------------------------------- #
# Evaluation scope                                                            #
# --------------------------------------------------------------------------- #

@dataclass(frozen=True)
class Scope:
    """The document root, the value being checked, and its container."""

    root: Any
    current: Any
    parent: Any = None

    @classmethod
    def at_root(cls, value: Any) -> "Scope":
        return cls(root=value, current=value, parent=None)

    def descend(self, current: Any, parent: Any) -> "Scope":
        return Scope(root=self.root, current=current, parent=parent)


# --------------------------------------------------------------------------- #
# JSON form                                                                   #
# --------------------------------------------------------------------------- #

def _constraints_from(raw: Any, where: str) -> Tuple[ConstraintUsage, ...]:
    if raw is None:
        return ()
    if not isinstance(raw, Sequence) or isinstance(raw, str):
        raise SchemaError(f"{where}: 'constraints' must be a list")

    out = []
    for item in raw:
        if not isinstance(item, Mapping) or "name" not in item:
            raise SchemaError(f"{where}: constraint entries need a 'name'")
        out.append(ConstraintUsage(
            name=item["name"],
            call_args=tuple(item.get("args") or ()),
            argument=item.get("argument"),
        ))
    return tuple(out)


def _members_from(raw: Mapping[str, Any], where: str) -> Tuple[TypeNode, ...]:
    members = raw.get("members")
    if not isinstance(members, Sequence) or isinstance(members, str) or not members:
        raise SchemaError(f"{where}: 'members' must be a non-empty list")
    return tuple(node_from_dict(m, where=f"{where}|{i}") for i, m in enumerate(members))


def _require(raw: Mapping[str, Any], key: str, where: str) -> Any:
    if key not in raw:
        raise SchemaError(f"{where}: missing '{key}' for kind '{raw.get('kind')}'")
    return raw[key]


def node_from_dict(raw: Any, *, where: str = "type") -> TypeNode:
    """Build a type node from its compiled JSON form."""
    if isinstance(raw, str):
        return Named(raw)
    if not isinstance(raw, Mapping):
        raise SchemaError(f"{where}: expected an object or a type name, got {type(raw).__name__}")

    kind = raw.get("kind")

    if kind == "named":
        return Named(_require(raw, "name", where), _constraints_from(raw.get("constraints"), where))

    if kind == "nullableNamed":
        return NullableNamed(_require(raw, "name", where))

    if kind == "nullable":
        return Nullable(node_from_dict(_require(raw, "inner", where), where=f"{where}?"))

    if kind == "array":
        return ArrayOf(
            node_from_dict(_require(raw, "itemType", where), where=f"{where}[]"),
            _constraints_from(raw.get("constraints"), where),
        )

    if kind == "record":
        specs = raw.get("fields") or ()
        if not isinstance(specs, Sequence) or isinstance(specs, str):
            raise SchemaError(f"{where}: 'fields' must be a list")
        fields = []
        for spec in specs:
            if not isinstance(spec, Mapping) or "name" not in spec:
                raise SchemaError(f"{where}: record fields need a 'name'")
            fields.append(FieldDef(
                name=spec["name"],
                type=node_from_dict(_require(spec, "type", where), where=f"{where}.{spec['name']}"),
                optional=bool(spec.get("optional", False)),
                default_expr=spec.get("default"),
            ))
        return Record(tuple(fields))

    if kind == "dict":
        return Dict(
            node_from_dict(_require(raw, "keyType", where), where=f"{where}.<key>"),
            node_from_dict(_require(raw, "valueType", where), where=f"{where}.<value>"),
        )

    if kind == "union":
        return Union(_members_from(raw, where))

    if kind == "intersection":
        return Intersection(_members_from(raw, where))

    if kind == "conditional":
        return Conditional(
            condition=_require(raw, "condition", where),
            then_type=node_from_dict(_require(raw, "then", where), where=f"{where}<then>"),
            else_type=node_from_dict(_require(raw, "else", where), where=f"{where}<else>"),
        )

    if kind == "literal":
        return Literal(_require(raw, "value", where))

    if kind == "absent":
        return Absent()

    raise SchemaError(f"{where}: unknown node kind {kind!r}")
