"""Tests for FormEngine validation and formatting."""

import pytest

from formforge.engine import FormEngine, is_null
from formforge.errors import SchemaError
from formforge.formatters import FormatterRegistry, register_builtin_formatters
from formforge.settings import EngineSettings
from formforge.types import ErrorEntry, FormValidationResult
from formforge.validators import RegExpValidator, ValidatorRegistry, register_builtin_validators


@pytest.fixture(autouse=True)
def setup_registries():
    ValidatorRegistry.clear()
    FormatterRegistry.clear()
    register_builtin_validators()
    register_builtin_formatters()
    yield
    ValidatorRegistry.clear()
    FormatterRegistry.clear()
    register_builtin_validators()
    register_builtin_formatters()


@pytest.fixture
def signup_fields():
    return {
        "name": {"first": {"type": "String"}, "last": {"type": "String"}},
        "email": {"type": "Email", "required": True},
        "password": {"type": "String", "required": True},
        "passwordConfirm": {"match": "password"},
        "color": {"type": "HexColor", "format": "HexColor"},
    }


@pytest.fixture
def valid_data():
    return {
        "name": {"first": "Ada", "last": "Lovelace"},
        "email": "ada@example.com",
        "password": "s3cret",
        "passwordConfirm": "s3cret",
        "color": "#2572eb",
    }


def entries(result: FormValidationResult) -> list[dict]:
    return [e.to_dict() for e in result.errors or []]


# =============================================================================
# Null sentinels
# =============================================================================


class TestIsNull:
    @pytest.mark.parametrize("value", ["", None])
    def test_null_sentinels(self, value):
        assert is_null(value)

    @pytest.mark.parametrize("value", [0, False, " ", [], "0"])
    def test_falsy_values_are_not_null(self, value):
        assert not is_null(value)


# =============================================================================
# Validation
# =============================================================================


class TestValidateFields:
    def test_valid_form(self, signup_fields, valid_data):
        engine = FormEngine(signup_fields, source=valid_data)
        result = engine.validate_fields()
        assert result.ok is True
        assert result.errors is None
        assert engine.errors is None

    def test_result_unpacks(self, signup_fields, valid_data):
        ok, errors = FormEngine(signup_fields, source=valid_data).validate_fields()
        assert ok is True
        assert errors is None

    def test_password_mismatch(self, signup_fields, valid_data):
        valid_data["passwordConfirm"] = "other"
        engine = FormEngine(signup_fields, source=valid_data)
        ok, errors = engine.validate_fields()
        assert ok is False
        assert errors == [ErrorEntry(key="passwordConfirm", invalid=True, mismatch=True)]
        assert errors[0].to_dict() == {"key": "passwordConfirm", "invalid": True, "mismatch": True}
        assert engine.errors == errors

    @pytest.mark.parametrize("value", ["", None])
    def test_required_null_sentinels_are_missing(self, value):
        engine = FormEngine(
            {"email": {"type": "Email", "required": True}},
            source={"email": value},
        )
        result = engine.validate_fields()
        assert entries(result) == [{"key": "email", "missing": True}]

    def test_required_absent_value_is_missing(self):
        engine = FormEngine({"email": {"type": "Email", "required": True}}, source={})
        assert entries(engine.validate_fields()) == [{"key": "email", "missing": True}]

    @pytest.mark.parametrize("value", [0, False])
    def test_required_falsy_values_are_present(self, value):
        engine = FormEngine({"count": {"required": True}}, source={"count": value})
        assert engine.validate_fields().ok is True

    def test_required_invalid_value(self):
        engine = FormEngine({"email": {"type": "Email", "required": True}}, source={"email": "nope"})
        assert entries(engine.validate_fields()) == [{"key": "email", "invalid": True}]

    def test_optional_empty_field_is_not_type_checked(self):
        engine = FormEngine({"age": {"type": "Integer"}}, source={})
        result = engine.validate_fields()
        assert result.ok is True
        assert engine.field_table["age"].valid is True

    def test_optional_invalid_value(self):
        engine = FormEngine({"age": {"type": "Integer"}}, source={"age": "abc"})
        assert entries(engine.validate_fields()) == [{"key": "age", "invalid": True}]

    def test_not_null_independent_of_required(self):
        engine = FormEngine({"count": {"notNull": True}}, source={"count": 0})
        assert entries(engine.validate_fields()) == [{"key": "count", "missing": True}]

    def test_missing_hides_invalid(self):
        engine = FormEngine(
            {"count": {"type": "Integer", "required": True, "notNull": True}},
            source={"count": ""},
        )
        assert entries(engine.validate_fields()) == [{"key": "count", "missing": True}]

    def test_equal_literal(self):
        fields = {"terms": {"equal": True}}
        assert FormEngine(fields, source={"terms": True}).validate_fields().ok is True
        result = FormEngine(fields, source={"terms": False}).validate_fields()
        assert entries(result) == [{"key": "terms", "invalid": True, "mismatch": True}]

    def test_equal_none_is_a_declared_literal(self):
        fields = {"honeypot": {"equal": None}}
        assert FormEngine(fields, source={}).validate_fields().ok is True
        assert FormEngine(fields, source={"honeypot": "bot"}).validate_fields().ok is False

    def test_match_nested_path(self):
        fields = {"account": {"email": {"type": "Email"}, "emailConfirm": {"match": "account.email"}}}
        data = {"account": {"email": "a@example.com", "emailConfirm": "a@example.com"}}
        engine = FormEngine(fields, source=data)
        assert engine.validate_fields().ok is True
        data["account"]["emailConfirm"] = "b@example.com"
        assert entries(engine.validate_fields()) == [
            {"key": "account.emailConfirm", "invalid": True, "mismatch": True}
        ]

    def test_missing_and_mismatch_together(self):
        engine = FormEngine(
            {"password": {}, "confirm": {"required": True, "match": "password"}},
            source={"password": "x", "confirm": ""},
        )
        assert entries(engine.validate_fields()) == [
            {"key": "confirm", "missing": True, "invalid": True, "mismatch": True}
        ]

    def test_unknown_type_accepts(self):
        engine = FormEngine({"a": {"type": "NoSuchValidator"}}, source={"a": "anything"})
        assert engine.validate_fields().ok is True

    def test_nested_values_read_by_dotted_path(self, signup_fields, valid_data):
        valid_data["name"]["first"] = 42
        result = FormEngine(signup_fields, source=valid_data).validate_fields()
        assert entries(result) == [{"key": "name.first", "invalid": True}]

    def test_errors_are_rebuilt_each_pass(self, signup_fields, valid_data):
        valid_data["email"] = "bad"
        engine = FormEngine(signup_fields, source=valid_data)
        first = engine.validate_fields()
        assert len(first.errors) == 1

        valid_data["email"] = "good@example.com"
        second = engine.validate_fields()
        assert second.ok is True
        assert engine.errors is None
        assert len(first.errors) == 1

    def test_field_order_is_preserved(self):
        engine = FormEngine(
            {"b": {"required": True}, "a": {"required": True}},
            source={},
        )
        assert [e.key for e in engine.validate_fields().errors] == ["b", "a"]

    def test_defaults_apply_to_every_field(self):
        engine = FormEngine({"a": {}, "b": {"required": False}}, source={}, defaults={"required": True})
        assert [e.key for e in engine.validate_fields().errors] == ["a"]

    def test_malformed_validator_raises_schema_error(self):
        ValidatorRegistry.register("Broken", RegExpValidator())
        engine = FormEngine({"code": {"type": "Broken"}, "other": {"required": True}}, source={"code": "x"})
        engine.validate_fields("other")
        previous = engine.errors

        with pytest.raises(SchemaError, match="Field 'code'"):
            engine.validate_fields()
        assert engine.errors is previous

    def test_non_string_type_names_the_field(self):
        engine = FormEngine({"age": {"type": 1, "required": True}}, source={"age": "3"})
        with pytest.raises(SchemaError, match="Field 'age': A validator name must be a string"):
            engine.validate_fields()

    def test_non_string_format_names_the_field(self):
        data = {"age": "3"}
        engine = FormEngine({"age": {"format": ["Integer"]}}, source=data)
        with pytest.raises(SchemaError, match="Field 'age': A formatter name must be a string"):
            engine.format_fields()
        assert data == {"age": "3"}


# =============================================================================
# Field selection
# =============================================================================


class TestSelection:
    @pytest.fixture
    def engine(self, signup_fields):
        return FormEngine(
            signup_fields,
            source={"email": "ada@example.com", "password": "x", "passwordConfirm": "y"},
        )

    def test_single_name_restricts_pass(self, engine):
        result = engine.validate_fields("email")
        assert result.ok is True
        assert engine.errors is None

    def test_list_of_names(self, engine):
        result = engine.validate_fields(["email", "passwordConfirm"])
        assert [e.key for e in result.errors] == ["passwordConfirm"]

    def test_several_arguments(self, engine):
        assert engine.validate_fields("passwordConfirm", "email").ok is False

    def test_unknown_names_are_ignored(self, engine):
        assert engine.validate_fields("nope", "email").ok is True
        assert engine.select_fields("nope") == {}

    def test_selection_order_and_duplicates(self, engine):
        selected = engine.select_fields(["password", "email", "password"])
        assert list(selected) == ["password", "email"]

    def test_no_arguments_selects_all(self, engine):
        assert list(engine.select_fields()) == list(engine.field_table)


# =============================================================================
# Settings
# =============================================================================


class TestEmptyOptionalPolicy:
    def test_validate_empty_optional_with_relaxed_mode(self):
        engine = FormEngine(
            {"age": {"type": "Integer"}},
            source={},
            settings=EngineSettings(validate_empty_optional=True, relaxed_optional=True),
        )
        result = engine.validate_fields()
        assert engine.field_table["age"].valid is False
        assert result.ok is True

    def test_validate_empty_optional_strict(self):
        engine = FormEngine(
            {"age": {"type": "Integer"}},
            source={},
            settings=EngineSettings(validate_empty_optional=True, relaxed_optional=False),
        )
        assert entries(engine.validate_fields()) == [{"key": "age", "invalid": True}]

    def test_relaxed_mode_never_hides_required_fields(self):
        engine = FormEngine(
            {"age": {"type": "Integer", "required": True}},
            source={"age": "abc"},
            settings=EngineSettings(validate_empty_optional=True),
        )
        assert entries(engine.validate_fields()) == [{"key": "age", "invalid": True}]


# =============================================================================
# Formatting
# =============================================================================


class TestFormatFields:
    def test_formats_and_writes_back(self, signup_fields):
        data = {"color": "2572EB"}
        engine = FormEngine(signup_fields, source=data)
        engine.format_fields()
        assert data["color"] == "#2572EB"
        assert engine.field_table["color"].value == "#2572EB"

    def test_fields_without_format_are_untouched(self, signup_fields):
        data = {"email": "ADA@EXAMPLE.COM", "color": "#2572EB"}
        FormEngine(signup_fields, source=data).format_fields()
        assert data == {"email": "ADA@EXAMPLE.COM", "color": "#2572EB"}

    def test_selection(self):
        data = {"a": "x", "b": "y"}
        engine = FormEngine({"a": {"format": "UpperCase"}, "b": {"format": "UpperCase"}}, source=data)
        engine.format_fields("b")
        assert data == {"a": "x", "b": "Y"}

    def test_nested_write(self):
        data = {}
        engine = FormEngine(
            {"price": {"amount": {"format": "Float"}, "currency": {"format": "UpperCase"}}},
            source=data,
        )
        engine.format_fields()
        assert data == {"price": {"amount": 0, "currency": None}}

    def test_format_then_validate(self):
        data = {"slug": "Crème Brûlée", "color": "abc"}
        engine = FormEngine(
            {
                "slug": {"type": "UrlChars", "format": "UrlChars"},
                "color": {"type": "HexColor", "format": "HexColor"},
            },
            source=data,
        )
        assert engine.validate_fields().ok is False
        engine.format_fields()
        assert data == {"slug": "creme_brulee", "color": "#abc"}
        assert engine.validate_fields().ok is True


# =============================================================================
# Schema changes
# =============================================================================


class TestSchemaChanges:
    def test_assigning_fields_rebuilds_table(self):
        engine = FormEngine({"a": {"required": True}}, source={})
        assert list(engine.field_table) == ["a"]

        engine.fields = {"b": {"c": {"required": True}, "d": {}}}
        assert list(engine.field_table) == ["b.c", "b.d"]
        assert [e.key for e in engine.validate_fields().errors] == ["b.c"]

    def test_assigning_defaults_rebuilds_table(self):
        engine = FormEngine({"a": {}}, source={})
        assert engine.validate_fields().ok is True
        engine.defaults = {"required": True}
        assert engine.validate_fields().ok is False

    def test_in_place_mutation_needs_notification(self):
        fields = {"a": {"type": "String"}}
        engine = FormEngine(fields, source={"a": 1, "b": None})
        fields["b"] = {"required": True}
        assert "b" not in engine.field_table

        engine.on_schema_changed()
        assert list(engine.field_table) == ["a", "b"]
        assert [e.key for e in engine.validate_fields().errors] == ["a", "b"]

    def test_empty_schema(self):
        engine = FormEngine()
        assert engine.field_table == {}
        assert engine.validate_fields().ok is True
