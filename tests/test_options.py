"""Tests for the options module."""

import pytest

from schema_codegen.options import (
    DEFAULT_JSON_LIBRARY,
    DEFAULT_NAMESPACE,
    GenerationOptions,
    OptionsError,
    parse_bool,
    parse_options,
)


class TestParseOptions:
    """Test argument tokens -> GenerationOptions."""

    def test_defaults(self):
        options = parse_options(["--input", "schema.json"])
        assert options == GenerationOptions(input_path="schema.json")
        assert options.namespace == DEFAULT_NAMESPACE == "GeneratedNamespace"
        assert options.json_library == DEFAULT_JSON_LIBRARY == "Pydantic"

    def test_only_required_keyword_defaults_true(self):
        options = parse_options(["--input", "schema.json"])
        flags = {
            "generate_data_annotations": options.generate_data_annotations,
            "generate_json_methods": options.generate_json_methods,
            "generate_immutable_array_properties": options.generate_immutable_array_properties,
            "generate_immutable_dictionary_properties": options.generate_immutable_dictionary_properties,
            "generate_default_values": options.generate_default_values,
            "generate_optional_properties_as_nullable": options.generate_optional_properties_as_nullable,
            "use_required_keyword": options.use_required_keyword,
            "enforce_flag_enums": options.enforce_flag_enums,
        }
        assert {name for name, value in flags.items() if value} == {"use_required_keyword"}

    def test_missing_input_is_empty(self):
        """Presence of --input is checked later, not by the parser."""
        assert parse_options([]).input_path == ""

    def test_input_without_value_is_empty(self):
        assert parse_options(["--input"]).input_path == ""

    def test_namespace(self):
        options = parse_options(["--input", "s.json", "--namespace", "Billing.Models"])
        assert options.namespace == "Billing.Models"

    def test_bare_bool_flag_is_true(self):
        options = parse_options(["--input", "s.json", "--generateJsonMethods"])
        assert options.generate_json_methods is True

    def test_explicit_bool_values(self):
        options = parse_options([
            "--input", "s.json",
            "--useRequiredKeyword", "false",
            "--enforceFlagEnums", "true",
            "--generateDefaultValues", "1",
        ])
        assert options.use_required_keyword is False
        assert options.enforce_flag_enums is True
        assert options.generate_default_values is True

    def test_bool_flag_followed_by_option(self):
        options = parse_options(["--generateDataAnnotations", "--input", "s.json"])
        assert options.generate_data_annotations is True
        assert options.input_path == "s.json"

    def test_json_library_passed_through_unvalidated(self):
        """Library names are validated when settings are built."""
        options = parse_options(["--input", "s.json", "--jsonLibrary", "Marshmallow"])
        assert options.json_library == "Marshmallow"

    def test_options_are_frozen(self):
        options = parse_options(["--input", "s.json"])
        with pytest.raises(AttributeError):
            options.namespace = "Other"  # type: ignore[misc]


class TestParseErrors:
    """Parser failures raise OptionsError instead of exiting."""

    def test_unknown_flag(self):
        with pytest.raises(OptionsError) as excinfo:
            parse_options(["--input", "s.json", "--outputDir", "x"])
        assert "--outputDir" in str(excinfo.value)
        assert excinfo.value.usage.startswith("usage:")

    def test_malformed_bool(self):
        with pytest.raises(OptionsError) as excinfo:
            parse_options(["--input", "s.json", "--generateJsonMethods", "maybe"])
        assert "maybe" in str(excinfo.value)


class TestParseBool:
    """Test explicit boolean values."""

    @pytest.mark.parametrize("value", ["true", "True", "1", "yes", "on"])
    def test_true_values(self, value):
        assert parse_bool(value) is True

    @pytest.mark.parametrize("value", ["false", "FALSE", "0", "no", "off"])
    def test_false_values(self, value):
        assert parse_bool(value) is False
