"""Tests for the validation engine."""

import pytest

from form_builder.models.field_definitions import FieldType, FormField
from form_builder.schema import FormSchema
from form_builder.validator import (
    check_field,
    extract_value,
    is_form_valid,
    is_valid_email,
    is_valid_number,
    join_checked_options,
    validate_field,
    validate_field_realtime,
    validate_form,
)


def make_field(field_type="text", **kwargs) -> FormField:
    schema = FormSchema()
    return schema.add_field({"name": kwargs.pop("name", "Field"), "type": field_type, **kwargs})


class TestFormatHelpers:
    """Tests for email and number format checks."""

    @pytest.mark.parametrize("value", ["a@b.com", "first.last@mail.example.org", "x+y@d.io"])
    def test_valid_emails(self, value):
        """Test well-formed addresses."""
        assert is_valid_email(value)

    @pytest.mark.parametrize("value", ["a@b", "a b@c.com", "@b.com", "a@.com", "a@b.com\n", "a@@b.com"])
    def test_invalid_emails(self, value):
        """Test malformed addresses."""
        assert not is_valid_email(value)

    @pytest.mark.parametrize(
        "value",
        ["42", "-3.5", "1e3", " 7 ", "0", ".5", "0x10", "0b11", "0o7", "Infinity", "-Infinity", "+Infinity"],
    )
    def test_valid_numbers(self, value):
        """Test numeric strings."""
        assert is_valid_number(value)

    @pytest.mark.parametrize(
        "value",
        ["", "abc", "4 2", "nan", "NaN", "1_000", "inf", "infinity", "-inf", "INFINITY", "+0x10", "0x"],
    )
    def test_invalid_numbers(self, value):
        """Test non-numeric strings."""
        assert not is_valid_number(value)


class TestRequired:
    """Tests for the required check."""

    @pytest.mark.parametrize("value", ["", "   ", None])
    def test_required_text_empty(self, value):
        """Test that blank values fail with the field's message."""
        field = make_field("text", required=True)
        assert validate_field(field, value) == ["This field is required"]

    def test_required_text_custom_message(self):
        """Test configured error message."""
        field = make_field("text", required=True, errorMessage="Name is needed")
        assert validate_field(field, "") == ["Name is needed"]

    def test_required_text_filled(self):
        """Test that any non-blank value passes."""
        assert validate_field(make_field("text", required=True), "x") == []

    def test_optional_empty_skips_type_checks(self):
        """Test that empty optional values are not format checked."""
        assert validate_field(make_field("email"), "") == []
        assert validate_field(make_field("number"), "  ") == []
        assert validate_field(make_field("text", minLength=3), "") == []

    def test_required_select(self):
        """Test required choice fields."""
        field = make_field("select", required=True, options=["A", "B"])
        assert validate_field(field, "") == ["Please select an option"]
        assert validate_field(field, "A") == []


class TestTypeChecks:
    """Tests for type-specific rules."""

    def test_email(self):
        """Test email fields."""
        field = make_field("email", required=True)
        assert validate_field(field, "a@b.com") == []
        assert validate_field(field, "a@b") == ["Please enter a valid email address"]
        assert validate_field(field, "a b@c.com") == ["Please enter a valid email address"]

    def test_number(self):
        """Test number fields."""
        field = make_field("number")
        assert validate_field(field, "42") == []
        assert validate_field(field, "abc") == ["Please enter a valid number"]

    def test_min_length(self):
        """Test the minimum length message."""
        field = make_field("text", minLength=3, errorMessage="custom")
        assert validate_field(field, "ab") == ["Minimum 3 characters required"]
        assert validate_field(field, "abc") == []

    def test_max_length(self):
        """Test the maximum length message."""
        field = make_field("text", maxLength=5)
        assert validate_field(field, "abcdef") == ["Maximum 5 characters allowed"]
        assert validate_field(field, "abcde") == []

    def test_both_bounds_fail(self):
        """Test that all messages are returned and the first is surfaced."""
        field = make_field("text", minLength=10, maxLength=2)
        assert validate_field(field, "abcd") == [
            "Minimum 10 characters required",
            "Maximum 2 characters allowed",
        ]
        assert validate_field_realtime(field, "abcd") == "Minimum 10 characters required"

    def test_length_bounds_only_for_text(self):
        """Test that length bounds are ignored on other types."""
        field = make_field("email", minLength=50)
        assert validate_field(field, "a@b.com") == []

    def test_choice_fields_have_no_format_check(self):
        """Test select and radio values."""
        for field_type in ("select", "radio"):
            field = make_field(field_type, options=["A"])
            assert validate_field(field, "anything") == []

    def test_error_types(self):
        """Test that detailed errors name the failed rule."""
        field = make_field("text", required=True, minLength=3)
        assert [e.error_type for e in check_field(field, "")] == ["required"]
        assert [e.error_type for e in check_field(field, "ab")] == ["min_length"]
        email = make_field("email", name="Mail")
        error = check_field(email, "nope")[0]
        assert error.error_type == "format"
        assert error.field_name == "Mail"
        assert error.received == "nope"


class TestCheckbox:
    """Tests for multi-valued checkbox fields."""

    @pytest.fixture
    def field(self):
        return make_field("checkbox", required=True, options=["Red", "Green", "Blue"])

    def test_join_in_option_order(self, field):
        """Test that checked values are joined in option order."""
        assert join_checked_options(field, ["Blue", "Red"]) == "Red, Blue"
        assert join_checked_options(field, ["Purple"]) == ""

    def test_nothing_checked(self, field):
        """Test required checkbox without selection."""
        assert validate_field(field, []) == ["Please select at least one option"]
        assert validate_field(field, "") == ["Please select at least one option"]

    def test_something_checked(self, field):
        """Test required checkbox with a selection."""
        assert validate_field(field, ["Green"]) == []
        assert validate_field(field, "Red, Blue") == []

    def test_extract_value_joins(self, field):
        """Test value extraction from a submission map."""
        assert extract_value(field, {field.name: ["Blue", "Green"]}) == "Green, Blue"
        assert extract_value(field, {}) == ""


class TestValidateForm:
    """Tests for full-form validation."""

    def test_only_failing_fields_reported(self):
        """Test that valid fields have no entry."""
        schema = FormSchema()
        schema.add_field({"name": "F1", "type": "text", "required": True})
        schema.add_field({"name": "F2", "type": "email"})
        result = validate_form(schema, {"F1": "ok", "F2": "bad"})
        assert result.is_valid is False
        assert result.errors == {"F2": "Please enter a valid email address"}
        assert result.validated_data is None

    def test_first_message_per_field(self):
        """Test that only the first message is surfaced."""
        schema = FormSchema()
        schema.add_field({"name": "Code", "type": "text", "minLength": 5, "maxLength": 1})
        result = validate_form(schema, {"Code": "abc"})
        assert result.errors == {"Code": "Minimum 5 characters required"}
        assert len(result.get_field_errors("Code")) == 2

    def test_valid_form(self, schema):
        """Test a valid submission."""
        values = {"Name": "Ada", "Email": "ada@example.com", "Topics": ["Support", "News"]}
        result = validate_form(schema, values)
        assert result.is_valid
        assert result.errors == {}
        assert result.validated_data == {
            "Name": "Ada",
            "Email": "ada@example.com",
            "Age": "",
            "Topics": "News, Support",
        }
        assert is_form_valid(schema, values)

    def test_missing_values(self, schema):
        """Test that missing values count as empty."""
        result = validate_form(schema, {})
        assert list(result.errors) == ["Name", "Email"]
        assert not is_form_valid(schema, {})

    def test_accepts_field_sequence(self, schema):
        """Test validating against a list of fields."""
        result = validate_form(schema.get_fields(), {"Name": "A", "Email": "a@b.co"})
        assert result.errors == {"Name": "Minimum 2 characters required"}

    def test_schema_not_mutated(self, schema):
        """Test that validation leaves the schema unchanged."""
        before = schema.to_records()
        validate_form(schema, {"Name": "x", "Email": "y"})
        assert schema.to_records() == before


class TestRealtime:
    """Tests for real-time single-field validation."""

    def test_returns_first_error_or_none(self):
        """Test single value checks."""
        field = make_field("number", required=True)
        assert validate_field_realtime(field, "") == "Please enter a valid number"
        assert validate_field_realtime(field, "x") == "Please enter a valid number"
        assert validate_field_realtime(field, "12") is None
