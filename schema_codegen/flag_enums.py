"""Rewrite integer enumerations in generated source as IntFlag classes.

A class qualifies when it derives from Enum and every member is a
non-negative integer literal. String enums are left alone.
"""

from __future__ import annotations

import ast


class FlagEnumError(ValueError):
    """Raised when a qualifying enum class cannot be rewritten."""


def _is_enum_base(base: ast.expr) -> bool:
    if isinstance(base, ast.Name):
        return base.id == "Enum"
    if isinstance(base, ast.Attribute):
        return base.attr == "Enum"
    return False


def _is_flag_candidate(node: ast.ClassDef) -> bool:
    """True for Enum classes whose members are all non-negative ints."""
    if not any(_is_enum_base(base) for base in node.bases):
        return False
    members = [stmt for stmt in node.body if isinstance(stmt, ast.Assign)]
    if not members:
        return False
    for member in members:
        value = member.value
        if not isinstance(value, ast.Constant) or type(value.value) is not int:
            return False
        if value.value < 0:
            return False
    return True


def _import_line(node: ast.ImportFrom) -> str:
    names = {alias.name: alias.asname for alias in node.names}
    names.setdefault("IntFlag", None)
    parts = [
        f"{name} as {asname}" if asname else name
        for name, asname in sorted(names.items())
    ]
    return f"from enum import {', '.join(parts)}\n"


def find_flag_enums(source: str) -> list[str]:
    """Names of the classes enforce_flag_enums would rewrite."""
    tree = ast.parse(source)
    return [
        node.name
        for node in tree.body
        if isinstance(node, ast.ClassDef) and _is_flag_candidate(node)
    ]


def enforce_flag_enums(source: str) -> str:
    """Return source with qualifying Enum classes based on IntFlag.

    Raises FlagEnumError when a class header cannot be isolated.
    """
    tree = ast.parse(source)
    candidates = [
        node
        for node in tree.body
        if isinstance(node, ast.ClassDef) and _is_flag_candidate(node)
    ]
    if not candidates:
        return source

    lines = source.splitlines(keepends=True)
    # Bottom-up: a header spanning several lines collapses into one.
    for node in reversed(candidates):
        header_start = node.lineno - 1
        header_end = node.body[0].lineno - 1
        if header_end <= header_start:
            raise FlagEnumError(
                f"cannot rewrite {node.name}: class body starts on the header line"
            )
        indent = " " * node.col_offset
        lines[header_start:header_end] = [f"{indent}class {node.name}(IntFlag):\n"]

    # Import edits come last: they sit above every class.
    enum_import = next(
        (
            node
            for node in tree.body
            if isinstance(node, ast.ImportFrom) and node.module == "enum" and node.level == 0
        ),
        None,
    )
    if enum_import is not None:
        start = enum_import.lineno - 1
        end = enum_import.end_lineno or enum_import.lineno
        lines[start:end] = [_import_line(enum_import)]
    else:
        insert_at = 0
        for node in tree.body:
            if isinstance(node, (ast.Import, ast.ImportFrom)):
                insert_at = node.end_lineno or node.lineno
        lines.insert(insert_at, "from enum import IntFlag\n")

    return "".join(lines)
