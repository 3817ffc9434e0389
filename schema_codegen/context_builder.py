"""Build Jinja2 template context for the generated module.

Wraps the model source produced by datamodel-code-generator with the
namespace header, an __all__ list and, when asked for, JSON helpers.
The body is split at the end of its import block so helper imports can
join it.
"""

from __future__ import annotations

import ast
from typing import Any

from .settings import GenerationSettings, JsonLibrary

# Helper flavour per serialization library
_HELPER_STYLES: dict[JsonLibrary, str] = {
    JsonLibrary.MSGSPEC: "msgspec",
    JsonLibrary.PYDANTIC: "pydantic",
}


def public_class_names(source: str) -> list[str]:
    """Top-level class names in source, in definition order."""
    tree = ast.parse(source)
    return [
        node.name
        for node in tree.body
        if isinstance(node, ast.ClassDef) and not node.name.startswith("_")
    ]


def split_imports(source: str) -> tuple[str, str]:
    """Split source into its leading import block and everything after it."""
    tree = ast.parse(source)
    end = 0
    for node in tree.body:
        if not isinstance(node, (ast.Import, ast.ImportFrom)):
            break
        end = node.end_lineno or node.lineno
    lines = source.splitlines(keepends=True)
    return "".join(lines[:end]).strip("\n"), "".join(lines[end:]).strip("\n")


def build_context(
    body: str, settings: GenerationSettings, source_name: str,
) -> dict[str, Any]:
    """Build the full template context for module.py.j2."""
    imports, models = split_imports(body)
    return {
        "namespace": settings.namespace,
        "source_name": source_name,
        "imports": imports,
        "models": models,
        "class_names": public_class_names(body),
        "json_methods": settings.generate_json_methods,
        "json_library": settings.json_library.value,
        "helper_style": _HELPER_STYLES[settings.json_library],
    }
