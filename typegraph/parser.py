"""
parser.py - command-line parsing and JSON input loading
=======================================================

Public API
----------
`build_arg_parser() -> argparse.ArgumentParser`
    The ``typegraph-validate`` command line.

`load_json_input(source) -> str | Any`
    Resolve a CLI-style JSON argument: an existing file is read, anything
    else is taken to be the JSON text itself.  Mappings and sequences are
    passed through as already-decoded values.
"""

from __future__ import annotations

import argparse
from pathlib import Path
from typing import Any, Mapping, Sequence

from .builtins import SUPPORTED_VERSION

__all__ = ["build_arg_parser", "load_json_input"]

# --------------------------------------------------------------------------- #
# Parser builder                                                              #
# --------------------------------------------------------------------------- #

def build_arg_parser() -> argparse.ArgumentParser:
    """Return the :pyclass:`argparse.ArgumentParser` for the validator CLI."""

    p = argparse.ArgumentParser(
        prog="typegraph-validate",
        description="Validate a JSON document against a compiled type-graph schema.",
        add_help=False,
    )

    # standard meta flags ----------------------------------------------------
    p.add_argument("-h", "--help", action="help", help="Show this help message and exit.")
    p.add_argument(
        "--version",
        action="version",
        version=f"typegraph schema specification : {SUPPORTED_VERSION}",
        help="Print the supported schema-specification version and exit.",
    )
    p.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Log debug output to stderr.",
    )

    p.add_argument(
        "--type",
        dest="root_type",
        metavar="NAME",
        default=None,
        help="Root type to validate against (default: the schema's root).",
    )
    p.add_argument(
        "--format",
        choices=("text", "markdown"),
        default="text",
        help="How to print diagnostics.",
    )

    p.add_argument("json", metavar="JSON", help="JSON literal or path to a JSON file.")
    p.add_argument("schema", metavar="SCHEMA", help="Path to a compiled schema (JSON).")
    return p

# --------------------------------------------------------------------------- #
# Input loading utility                                                       #
# --------------------------------------------------------------------------- #

def load_json_input(source: str | Path | Mapping[str, Any] | Sequence[Any]) -> Any:
    """Return JSON *text* (to be decoded by the engine) or a decoded value.

    Supported variants:
    * ``Path`` - JSON file on disk, returned as text.
    * ``str``  - existing file path → its text; else the string itself.
    * ``Mapping`` / non-string ``Sequence`` - already decoded, returned as is.
    """
    if isinstance(source, Path):
        return source.read_text(encoding="utf-8")

    if isinstance(source, str):
        p = Path(source)
        try:
            if p.is_file():
                return p.read_text(encoding="utf-8")
        except OSError:
            pass  # e.g. a JSON literal too long to be a file name
        return source

    if isinstance(source, (Mapping, Sequence)) and not isinstance(source, (bytes, bytearray)):
        return source

    raise TypeError(f"Unsupported type for load_json_input: {type(source)}")
