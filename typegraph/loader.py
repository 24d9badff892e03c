"""
loader.py - read compiled schemas from disk or from the packaged examples.

Public API
----------
load_schema(path)     : parsed compiled-schema mapping (fresh copy)
load_repository(path) : :class:`~typegraph.repository.Repository` built from it
"""

from __future__ import annotations

import copy
import json
import logging
from importlib import resources
from pathlib import Path
from typing import Any

from .repository import Repository

__all__ = ["load_repository", "load_schema"]

log = logging.getLogger(__name__)

# --------------------------------------------------------------------------- #
# Helpers                                                                     #
# --------------------------------------------------------------------------- #

def _parse(text: str, origin: str) -> dict[str, Any]:
    """Parse schema text, raising crisp errors on failure."""
    try:
        return json.loads(text)
    except json.JSONDecodeError as exc:
        raise ValueError(f"Invalid JSON in {origin}: {exc}") from exc


# --------------------------------------------------------------------------- #
# Public utilities                                                            #
# --------------------------------------------------------------------------- #

def load_schema(path: str | Path) -> dict[str, Any]:
    p = Path(path)

    # 1) direct file on disk ------------------------------------------------
    if p.is_file():
        log.debug("loading compiled schema from %s", p)
        return copy.deepcopy(_parse(p.read_text(encoding="utf-8"), str(p)))

    # 2) bundled resource (exact string or basename) -----------------------
    pkg = resources.files("typegraph.schemas")
    for name in (p.name, str(path)):   # basename first, original second
        resource = pkg.joinpath(name)
        if resource.is_file():
            log.debug("loading bundled schema %s", name)
            return copy.deepcopy(_parse(resource.read_text(encoding="utf-8"), name))

    # 3) give up -----------------------------------------------------------
    raise FileNotFoundError(f"Schema '{path}' not found on disk or in package data")


def load_repository(path: str | Path) -> Repository:
    """Load the compiled schema at *path* and build a repository from it."""
    return Repository.from_dict(load_schema(path))
