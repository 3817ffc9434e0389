"""Generate model source with datamodel-code-generator and write it out.

Takes the parsed schema and GenerationSettings, runs the JSON Schema
parser, applies the post-passes the library has no switch for, and
renders the result through templates/module.py.j2.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

import isort
import jinja2
from datamodel_code_generator import DataModelType
from datamodel_code_generator.format import PythonVersion
from datamodel_code_generator.model import get_data_model_types
from datamodel_code_generator.parser.jsonschema import JsonSchemaParser

from .context_builder import build_context
from .flag_enums import enforce_flag_enums
from .loader import strip_defaults
from .optional_fields import nullable_property_names, required_property_names, strip_optional
from .settings import GenerationSettings, JsonLibrary

TEMPLATE_DIR = Path(__file__).parent / "templates"
OUTPUT_SUFFIX = ".py"
TARGET_PYTHON_VERSION = PythonVersion.PY_311

_MODEL_TYPES: dict[JsonLibrary, DataModelType] = {
    JsonLibrary.MSGSPEC: DataModelType.MsgspecStruct,
    JsonLibrary.PYDANTIC: DataModelType.PydanticV2BaseModel,
}


class GenerationError(RuntimeError):
    """Raised when the generator output cannot be turned into one module."""


def parser_arguments(settings: GenerationSettings) -> dict[str, Any]:
    """Keyword arguments for JsonSchemaParser derived from settings."""
    model_types = get_data_model_types(
        _MODEL_TYPES[settings.json_library], TARGET_PYTHON_VERSION,
    )
    immutable_containers = (
        settings.generate_immutable_array_properties
        or settings.generate_immutable_dictionary_properties
    )
    return {
        "data_model_type": model_types.data_model,
        "data_model_root_type": model_types.root_model,
        "data_model_field_type": model_types.field_model,
        "data_type_manager_type": model_types.data_type_manager,
        "dump_resolve_reference_action": model_types.dump_resolve_reference_action,
        "target_python_version": TARGET_PYTHON_VERSION,
        # msgspec carries constraints in Annotated[..., Meta(...)].
        "use_annotated": settings.json_library is JsonLibrary.MSGSPEC,
        "field_constraints": settings.generate_data_annotations,
        "use_schema_description": settings.generate_data_annotations,
        # The library only offers one switch for Sequence and Mapping.
        "use_generic_container_types": immutable_containers,
        "apply_default_values_for_required_fields": settings.generate_default_values,
        "set_default_enum_member": settings.generate_default_values,
        "force_optional_for_required_fields": not settings.use_required_keyword,
    }


def nullable_fields_to_keep(schema: dict[str, Any], settings: GenerationSettings) -> set[str]:
    """Field names that stay nullable when optional fields are made non-nullable."""
    keep = nullable_property_names(schema)
    if not settings.use_required_keyword:
        keep |= required_property_names(schema)
    return keep


def _render(context: dict[str, Any]) -> str:
    env = jinja2.Environment(
        loader=jinja2.FileSystemLoader(str(TEMPLATE_DIR)),
        keep_trailing_newline=True,
        trim_blocks=True,
        lstrip_blocks=True,
    )
    template = env.get_template("module.py.j2")
    return isort.code(template.render(**context), profile="black")


def generate_source(
    schema: dict[str, Any], settings: GenerationSettings, source_name: str = "schema.json",
) -> str:
    """Generate the full Python module for schema."""
    if not settings.generate_default_values:
        schema = strip_defaults(schema)

    parser = JsonSchemaParser(json.dumps(schema, indent=2), **parser_arguments(settings))
    body = parser.parse()
    if not isinstance(body, str):
        raise GenerationError(
            f"schema produced {len(body)} modules; only single-module output is supported"
        )

    if settings.enforce_flag_enums:
        body = enforce_flag_enums(body)
    if not settings.generate_optional_properties_as_nullable:
        body = strip_optional(body, nullable_fields_to_keep(schema, settings))

    return _render(build_context(body, settings, source_name))


def output_path_for(input_path: str | Path) -> Path:
    """Sibling of input_path with the extension replaced by .py."""
    path = Path(input_path)
    return path.parent / (path.stem + OUTPUT_SUFFIX)


def write_source(output_path: Path, source: str) -> None:
    """Write source to output_path, replacing any existing file."""
    output_path.write_text(source, encoding="utf-8")
