# typegraph/card.py
from __future__ import annotations

from typing import Any, Iterable, Sequence

import pandas as pd

from . import utils
from .errors import Category, ValidationError

__all__ = ["display_report", "to_dataframe", "to_markdown_card"]

_COLUMNS = ["path", "code", "category", "message"]


def _format_scalar(v: Any) -> str:
    """Return a Markdown-safe scalar string."""
    if v is True:   return "true"
    if v is False:  return "false"
    if v is None:   return "null"
    return str(v).replace("`", "\\`")


def _format_list(v: Sequence[ValidationError]) -> str:
    """Return a bulleted Markdown list (no surrounding blank lines)."""
    return "\n".join(f"- `{_format_scalar(e.path)}` **{e.code}**: {_format_scalar(e.message)}" for e in v)


def to_markdown_card(errors: Iterable[ValidationError], *, heading_level: int = 2,
                     title: str = "Validation Report") -> str:
    """
    Convert a list of diagnostics into a Markdown card.

    Parameters
    ----------
    errors : Iterable[ValidationError]
        Diagnostics as returned by :func:`typegraph.validate`.
    heading_level : int, default 2
        Markdown heading level for the title; categories get one level more.
    title : str
        Heading text.

    Returns
    -------
    str
        Markdown document.  A valid document renders as a single
        ``JSON is valid.`` line under the title.
    """
    errors = list(errors)
    h = "#" * heading_level
    parts: list[str] = [f"{h} {title}", ""]
    if not errors:
        parts.append("JSON is valid.")
        return "\n".join(parts)

    parts.append(f"{len(errors)} diagnostic(s).")
    parts.append("")
    for category in Category:
        group = [e for e in errors if e.category == category]
        if not group:
            continue
        parts.append(f"{h}# {category.value} ({len(group)})")
        parts.append(_format_list(group))
        parts.append("")             # blank line after each section
    return "\n".join(parts).rstrip()


def to_dataframe(errors: Iterable[ValidationError]) -> pd.DataFrame:
    """Tabulate diagnostics, one row each, in the order they were reported."""
    return pd.DataFrame([e.as_dict() for e in errors], columns=_COLUMNS)


def display_report(errors: Iterable[ValidationError]) -> None:
    """Show diagnostics as a table in a notebook, or as text elsewhere."""
    utils._display(to_dataframe(errors))
