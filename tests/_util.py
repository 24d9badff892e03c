"""Shared helpers for the typegraph test-suite (std-lib only)."""
from __future__ import annotations

import json
import tempfile
from pathlib import Path
from typing import Any

from typegraph import loader
from typegraph.nodes import ConstraintUsage, FieldDef, Named, Record
from typegraph.repository import Repository

# ------------------------------------------------------------------ #
# Repository-relative paths                                           #
# ------------------------------------------------------------------ #
ROOT       = Path(__file__).resolve().parents[1]
SCHEMA_DIR = ROOT / "typegraph" / "schemas"

EXAMPLE_J  = SCHEMA_DIR / "example.json"


def example_repository() -> Repository:
    return loader.load_repository(EXAMPLE_J)


def good_post() -> dict[str, Any]:
    """A post that satisfies the bundled example schema."""
    return {
        "id": 7,
        "title": "Hello world",
        "slug": "hello-world",
        "status": "Draft",
        "tags": ["intro", "misc"],
        "author": {"name": "Ada", "email": None},
    }

# ------------------------------------------------------------------ #
# Tiny helpers                                                       #
# ------------------------------------------------------------------ #
def named(name: str, **constraints: Any) -> Named:
    """``named("Int", min="1")`` -> ``Int(min: 1)`` with one call argument each."""
    return Named(name, tuple(ConstraintUsage(k, call_args=(v,)) for k, v in constraints.items()))


def record(*fields: FieldDef) -> Record:
    return Record(tuple(fields))


def repo(root: Any = None, **types: Any) -> Repository:
    """Repository with the given user types; a lone ``root`` node becomes ``Root``."""
    if root is not None:
        types = {"Root": root, **types}
    return Repository(types)


def tmp_json(obj: Any) -> Path:
    """Write *obj* to a temp file and return its Path (caller must unlink)."""
    fh = tempfile.NamedTemporaryFile(delete=False, suffix=".json")
    fh.close()
    Path(fh.name).write_text(json.dumps(obj), encoding="utf-8")
    return Path(fh.name)


def tmp_text(text: str, suffix: str = ".json") -> Path:
    fh = tempfile.NamedTemporaryFile(delete=False, suffix=suffix)
    fh.close()
    Path(fh.name).write_text(text, encoding="utf-8")
    return Path(fh.name)
