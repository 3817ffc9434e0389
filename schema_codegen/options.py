"""Command-line options for the schema code generator.

Parsing is a pure function of the argument tokens: the parser raises
OptionsError instead of exiting, and the caller decides the exit code.

Boolean options take zero or one value:
  --generateJsonMethods          -> True
  --generateJsonMethods false    -> False
  --useRequiredKeyword no        -> False
"""

from __future__ import annotations

import argparse
from dataclasses import dataclass
from typing import Sequence

DEFAULT_NAMESPACE = "GeneratedNamespace"
DEFAULT_JSON_LIBRARY = "Pydantic"

_TRUE_VALUES = {"true", "1", "yes", "on"}
_FALSE_VALUES = {"false", "0", "no", "off"}

# (flag, dest, default, help)
_BOOL_OPTIONS: list[tuple[str, str, bool, str]] = [
    (
        "--generateDataAnnotations",
        "generate_data_annotations",
        False,
        "Generate data annotations (field constraints)",
    ),
    (
        "--generateJsonMethods",
        "generate_json_methods",
        False,
        "Generate JSON methods",
    ),
    (
        "--generateImmutableArrayProperties",
        "generate_immutable_array_properties",
        False,
        "Generate immutable array properties",
    ),
    (
        "--generateImmutableDictionaryProperties",
        "generate_immutable_dictionary_properties",
        False,
        "Generate immutable dictionary properties",
    ),
    (
        "--generateDefaultValues",
        "generate_default_values",
        False,
        "Generate default values",
    ),
    (
        "--generateOptionalPropertiesAsNullable",
        "generate_optional_properties_as_nullable",
        False,
        "Generate optional properties as nullable",
    ),
    (
        "--useRequiredKeyword",
        "use_required_keyword",
        True,
        "Declare required properties without a default so construction enforces them",
    ),
    (
        "--enforceFlagEnums",
        "enforce_flag_enums",
        False,
        "Enforce flag enums",
    ),
]


class OptionsError(Exception):
    """Raised when the command line cannot be parsed."""

    def __init__(self, message: str, usage: str = "") -> None:
        super().__init__(message)
        self.usage = usage


@dataclass(frozen=True)
class GenerationOptions:
    """Validated configuration for a single generator run."""

    input_path: str = ""
    namespace: str = DEFAULT_NAMESPACE
    generate_data_annotations: bool = False
    generate_json_methods: bool = False
    generate_immutable_array_properties: bool = False
    generate_immutable_dictionary_properties: bool = False
    generate_default_values: bool = False
    generate_optional_properties_as_nullable: bool = False
    json_library: str = DEFAULT_JSON_LIBRARY
    use_required_keyword: bool = True
    enforce_flag_enums: bool = False


class _OptionParser(argparse.ArgumentParser):
    """ArgumentParser that raises instead of calling sys.exit on errors."""

    def error(self, message: str) -> None:  # type: ignore[override]
        raise OptionsError(message, self.format_usage())


def parse_bool(value: str) -> bool:
    """Parse an explicit boolean option value."""
    lowered = value.strip().lower()
    if lowered in _TRUE_VALUES:
        return True
    if lowered in _FALSE_VALUES:
        return False
    raise argparse.ArgumentTypeError(f"invalid boolean value: {value!r}")


def build_parser() -> argparse.ArgumentParser:
    """Build the CLI parser."""
    parser = _OptionParser(
        prog="schema-codegen",
        description="Generate Python models from JSON schema files",
    )
    # Presence is checked by the caller so a missing input exits with 1.
    parser.add_argument(
        "--input",
        nargs="?",
        const="",
        default=None,
        help="The JSON schema file to generate Python models from.",
    )
    parser.add_argument(
        "--namespace",
        default=DEFAULT_NAMESPACE,
        help="The namespace for the generated models",
    )
    for flag, dest, default, help_text in _BOOL_OPTIONS:
        parser.add_argument(
            flag,
            dest=dest,
            type=parse_bool,
            nargs="?",
            const=True,
            default=default,
            metavar="BOOL",
            help=f"{help_text} (default: {str(default).lower()})",
        )
    parser.add_argument(
        "--jsonLibrary",
        dest="json_library",
        nargs="?",
        const=DEFAULT_JSON_LIBRARY,
        default=DEFAULT_JSON_LIBRARY,
        help="The JSON library to use (Msgspec or Pydantic)",
    )
    return parser


def parse_options(argv: Sequence[str]) -> GenerationOptions:
    """Turn argument tokens into GenerationOptions.

    Raises OptionsError for unknown flags or malformed values. Input
    existence is not checked here.
    """
    args = build_parser().parse_args(list(argv))
    return GenerationOptions(
        input_path=args.input or "",
        namespace=args.namespace,
        generate_data_annotations=args.generate_data_annotations,
        generate_json_methods=args.generate_json_methods,
        generate_immutable_array_properties=args.generate_immutable_array_properties,
        generate_immutable_dictionary_properties=args.generate_immutable_dictionary_properties,
        generate_default_values=args.generate_default_values,
        generate_optional_properties_as_nullable=args.generate_optional_properties_as_nullable,
        json_library=args.json_library,
        use_required_keyword=args.use_required_keyword,
        enforce_flag_enums=args.enforce_flag_enums,
    )
