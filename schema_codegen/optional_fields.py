"""Drop the implicit nullability from non-required model fields.

datamodel-code-generator types every non-required property as
``Optional[X]``. When optional properties should not be nullable, fields
that carry a default lose the ``Optional``/``| None`` wrapper unless the
schema itself allows null for that property name.
"""

from __future__ import annotations

import ast
from typing import Any

_NULLABLE_BRANCHES = ("anyOf", "oneOf")

# typing names that may go unused once the wrappers are gone
_WRAPPER_NAMES = {"Optional", "Union"}


def _allows_null(schema: Any) -> bool:
    if not isinstance(schema, dict):
        return False
    schema_type = schema.get("type")
    if schema_type == "null" or (isinstance(schema_type, list) and "null" in schema_type):
        return True
    if schema.get("nullable") is True:
        return True
    if "const" in schema and schema["const"] is None:
        return True
    if None in schema.get("enum", ()):
        return True
    return any(
        _allows_null(branch)
        for key in _NULLABLE_BRANCHES
        for branch in schema.get(key, ())
    )


def _collect(schema: Any, nullable: set[str], required: set[str]) -> None:
    if isinstance(schema, list):
        for item in schema:
            _collect(item, nullable, required)
        return
    if not isinstance(schema, dict):
        return
    properties = schema.get("properties")
    if isinstance(properties, dict):
        nullable.update(name for name, sub in properties.items() if _allows_null(sub))
    names = schema.get("required")
    if isinstance(names, list):
        required.update(name for name in names if isinstance(name, str))
    for value in schema.values():
        _collect(value, nullable, required)


def nullable_property_names(schema: dict[str, Any]) -> set[str]:
    """Names of properties whose schema explicitly admits null."""
    nullable: set[str] = set()
    _collect(schema, nullable, set())
    return nullable


def required_property_names(schema: dict[str, Any]) -> set[str]:
    """Every name listed in a `required` array anywhere in schema."""
    required: set[str] = set()
    _collect(schema, set(), required)
    return required


def _field_names(stmt: ast.AnnAssign) -> set[str]:
    """Attribute name plus any alias given through Field(alias=...)/field(name=...)."""
    names = {stmt.target.id} if isinstance(stmt.target, ast.Name) else set()
    if isinstance(stmt.value, ast.Call):
        for keyword in stmt.value.keywords:
            if keyword.arg in ("alias", "name") and isinstance(keyword.value, ast.Constant):
                names.add(str(keyword.value.value))
    return names


def _is_none(node: ast.expr) -> bool:
    return isinstance(node, ast.Constant) and node.value is None


def _union_operands(node: ast.expr) -> list[ast.expr]:
    if isinstance(node, ast.BinOp) and isinstance(node.op, ast.BitOr):
        return _union_operands(node.left) + _union_operands(node.right)
    return [node]


def _strip_none(node: ast.expr, source: str) -> str | None:
    """Annotation text without its None member, or None when unchanged."""
    def segment(part: ast.expr) -> str:
        return ast.get_source_segment(source, part) or ast.unparse(part)

    if isinstance(node, ast.BinOp):
        operands = _union_operands(node)
        kept = [part for part in operands if not _is_none(part)]
        if len(kept) == len(operands) or not kept:
            return None
        return " | ".join(segment(part) for part in kept)

    if not isinstance(node, ast.Subscript) or not isinstance(node.value, ast.Name):
        return None
    wrapper = node.value.id
    if wrapper == "Optional":
        return segment(node.slice)
    if wrapper == "Union" and isinstance(node.slice, ast.Tuple):
        kept = [part for part in node.slice.elts if not _is_none(part)]
        if len(kept) == len(node.slice.elts) or not kept:
            return None
        if len(kept) == 1:
            return segment(kept[0])
        return f"Union[{', '.join(segment(part) for part in kept)}]"
    if wrapper == "Annotated" and isinstance(node.slice, ast.Tuple) and node.slice.elts:
        first, *metadata = node.slice.elts
        inner = _strip_none(first, source)
        if inner is None:
            return None
        return f"Annotated[{', '.join([inner] + [segment(part) for part in metadata])}]"
    return None


def _offset(line_starts: list[int], lines: list[str], lineno: int, col: int) -> int:
    """Character offset of an ast (lineno, utf-8 byte col) position."""
    line = lines[lineno - 1]
    return line_starts[lineno - 1] + len(line.encode("utf-8")[:col].decode("utf-8"))


def _drop_unused_wrappers(source: str) -> str:
    tree = ast.parse(source)
    used = {
        node.id for node in ast.walk(tree)
        if isinstance(node, ast.Name) and node.id in _WRAPPER_NAMES
    }
    typing_import = next(
        (
            node for node in tree.body
            if isinstance(node, ast.ImportFrom) and node.module == "typing" and node.level == 0
        ),
        None,
    )
    if typing_import is None:
        return source
    kept = [
        alias for alias in typing_import.names
        if (alias.asname or alias.name) not in _WRAPPER_NAMES
        or (alias.asname or alias.name) in used
    ]
    if len(kept) == len(typing_import.names):
        return source

    lines = source.splitlines(keepends=True)
    start = typing_import.lineno - 1
    end = typing_import.end_lineno or typing_import.lineno
    if kept:
        parts = [f"{a.name} as {a.asname}" if a.asname else a.name for a in kept]
        lines[start:end] = [f"from typing import {', '.join(parts)}\n"]
    else:
        del lines[start:end]
    return "".join(lines)


def strip_optional(source: str, keep: set[str]) -> str:
    """Remove None from the annotations of defaulted model fields.

    Fields whose name or alias is in keep are left nullable.
    """
    tree = ast.parse(source)
    edits: list[tuple[ast.expr, str]] = []
    for node in tree.body:
        if not isinstance(node, ast.ClassDef):
            continue
        for stmt in node.body:
            if not isinstance(stmt, ast.AnnAssign) or stmt.value is None:
                continue
            if _field_names(stmt) & keep:
                continue
            replacement = _strip_none(stmt.annotation, source)
            if replacement is not None:
                edits.append((stmt.annotation, replacement))
    if not edits:
        return source

    lines = source.splitlines(keepends=True)
    line_starts = [0]
    for line in lines:
        line_starts.append(line_starts[-1] + len(line))

    # Apply bottom-up so earlier offsets stay valid.
    for annotation, replacement in reversed(edits):
        start = _offset(line_starts, lines, annotation.lineno, annotation.col_offset)
        end = _offset(
            line_starts, lines,
            annotation.end_lineno or annotation.lineno,
            annotation.end_col_offset or 0,
        )
        source = source[:start] + replacement + source[end:]

    return _drop_unused_wrappers(source)
