"""Shared fixtures for schema-codegen tests."""

from __future__ import annotations

import copy
import json
from pathlib import Path
from typing import Any, Callable

import pytest

PERSON_SCHEMA: dict[str, Any] = {
    "title": "Person",
    "description": "A person record.",
    "type": "object",
    "properties": {
        "name": {"type": "string", "description": "Full name", "maxLength": 64},
        "age": {"type": "integer", "minimum": 0, "default": 42},
        "tags": {"type": "array", "items": {"type": "string"}},
        "meta": {"type": "object", "additionalProperties": {"type": "string"}},
    },
    "required": ["name"],
}


@pytest.fixture
def write_schema(tmp_path: Path) -> Callable[..., Path]:
    """Return a callable that writes a schema file under tmp_path.

    Usage::

        path = write_schema({"type": "object"}, name="order.json")
    """
    def _write(schema: Any, name: str = "person.json") -> Path:
        path = tmp_path / name
        if isinstance(schema, str):
            path.write_text(schema, encoding="utf-8")
        else:
            path.write_text(json.dumps(schema), encoding="utf-8")
        return path
    return _write


@pytest.fixture
def person_schema() -> dict[str, Any]:
    """A fresh copy of the Person schema."""
    return copy.deepcopy(PERSON_SCHEMA)


@pytest.fixture
def person_schema_path(write_schema) -> Path:
    """A valid schema file for a Person object."""
    return write_schema(PERSON_SCHEMA)
