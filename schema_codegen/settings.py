"""Generation settings handed to the code generation library."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from .options import GenerationOptions


class JsonLibrary(Enum):
    """Serialization ecosystem the generated models target."""

    MSGSPEC = "Msgspec"
    PYDANTIC = "Pydantic"


class ConfigurationError(ValueError):
    """Raised when an option value is outside its allowed set."""


@dataclass(frozen=True)
class GenerationSettings:
    namespace: str
    generate_data_annotations: bool
    generate_json_methods: bool
    generate_immutable_array_properties: bool
    generate_immutable_dictionary_properties: bool
    generate_default_values: bool
    generate_optional_properties_as_nullable: bool
    json_library: JsonLibrary
    use_required_keyword: bool
    enforce_flag_enums: bool


def parse_json_library(value: str) -> JsonLibrary:
    """Map the --jsonLibrary literal to JsonLibrary (case-sensitive)."""
    for library in JsonLibrary:
        if library.value == value:
            return library
    raise ConfigurationError(
        "Invalid JSON library specified. Use 'Msgspec' or 'Pydantic'."
    )


def build_settings(options: GenerationOptions) -> GenerationSettings:
    """Build GenerationSettings from parsed options."""
    return GenerationSettings(
        namespace=options.namespace,
        generate_data_annotations=options.generate_data_annotations,
        generate_json_methods=options.generate_json_methods,
        generate_immutable_array_properties=options.generate_immutable_array_properties,
        generate_immutable_dictionary_properties=options.generate_immutable_dictionary_properties,
        generate_default_values=options.generate_default_values,
        generate_optional_properties_as_nullable=options.generate_optional_properties_as_nullable,
        json_library=parse_json_library(options.json_library),
        use_required_keyword=options.use_required_keyword,
        enforce_flag_enums=options.enforce_flag_enums,
    )
