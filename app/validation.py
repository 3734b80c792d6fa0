"""
Shape pydantic validation errors into the API's ``{path, message}`` list.
"""
from __future__ import annotations

from typing import Any, Iterable, Sequence

# Leading location parts FastAPI adds to say where a value came from
_SOURCES = {"body"}


def _path(loc: Sequence[Any]) -> str:
    parts = list(loc)
    if parts and parts[0] in _SOURCES:
        parts = parts[1:]
    return ".".join(str(p) for p in parts)


def format_errors(errors: Iterable[dict[str, Any]]) -> list[dict[str, str]]:
    """Keep pydantic's order; one entry per failing field."""
    return [{"path": _path(err.get("loc", ())), "message": err.get("msg", "")} for err in errors]

