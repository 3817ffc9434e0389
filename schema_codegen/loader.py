"""Load a JSON Schema document from disk.

Reads the input file, decodes it and hands back the document as a dict.
Also strips schema-declared defaults when they should not reach the
generated field initializers.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

# Keywords whose value maps names to subschemas
_SCHEMA_MAPS = {"properties", "patternProperties", "$defs", "definitions", "dependentSchemas"}

# Keywords whose value is instance data, not a subschema
_DATA_KEYWORDS = {"enum", "const", "examples", "required"}


class SchemaLoadError(ValueError):
    """Raised when the input file does not hold a JSON Schema object."""


def load_schema(path: str | Path) -> dict[str, Any]:
    """Load and decode the schema file at path."""
    with open(path, encoding="utf-8") as f:
        schema = json.load(f)
    if not isinstance(schema, dict):
        raise SchemaLoadError(
            f"expected a JSON object at the top level, got {type(schema).__name__}"
        )
    return schema


def strip_defaults(schema: Any) -> Any:
    """Return a copy of schema with every `default` keyword removed.

    Property names are never touched, so a property called "default"
    survives.
    """
    if isinstance(schema, list):
        return [strip_defaults(item) for item in schema]
    if not isinstance(schema, dict):
        return schema

    stripped: dict[str, Any] = {}
    for key, value in schema.items():
        if key == "default":
            continue
        if key in _DATA_KEYWORDS:
            stripped[key] = value
        elif key in _SCHEMA_MAPS and isinstance(value, dict):
            stripped[key] = {name: strip_defaults(sub) for name, sub in value.items()}
        else:
            stripped[key] = strip_defaults(value)
    return stripped
