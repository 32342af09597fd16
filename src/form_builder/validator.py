"""
Validation engine for submitted form values.

All functions here are pure: they take field definitions and values and
return results, without touching the schema or any rendering layer.
The same per-field rules back both full-form validation and real-time
validation of a single value.

Rules, per field:
1. Required check. Checkbox fields need at least one checked option;
   every other type needs a value that is non-empty after trimming.
2. Type check, only when the trimmed value is non-empty:
   email and number formats, text length bounds. Choice fields have no
   extra check.
"""

import math
import re
from typing import Callable, Iterable, Mapping, Sequence, Union

from form_builder.models.field_definitions import FieldType, FormField
from form_builder.models.validation_result import (
    FieldValidationError,
    ValidationResult,
)
from form_builder.schema import FormSchema

EMAIL_PATTERN = re.compile(r"[^\s@]+@[^\s@]+\.[^\s@]+")
RADIX_INTEGER_PATTERN = re.compile(r"0[xX][0-9a-fA-F]+|0[bB][01]+|0[oO][0-7]+")
INFINITY_PATTERN = re.compile(r"[+-]?Infinity")

CHECKBOX_SEPARATOR = ", "

# A submitted value: a string, or for checkbox fields the checked options
FieldValue = Union[str, Sequence[str], None]


def is_valid_email(value: str) -> bool:
    """Check for a ``local@domain.tld`` shaped address without whitespace."""
    return bool(EMAIL_PATTERN.fullmatch(value))


def is_valid_number(value: str) -> bool:
    """
    Check that a value is non-empty and parses as a number.

    Accepts what a browser numeric conversion accepts: decimal and
    exponent notation, surrounding whitespace, signed ``Infinity`` and
    unsigned ``0x``/``0b``/``0o`` integers. Digit separators and the
    ``inf``/``nan`` spellings are rejected.
    """
    if value is None or value == "":
        return False
    text = value.strip()
    if RADIX_INTEGER_PATTERN.fullmatch(text) or INFINITY_PATTERN.fullmatch(text):
        return True
    if "_" in text or any(word in text.lower() for word in ("inf", "nan")):
        return False
    try:
        number = float(text)
    except (TypeError, ValueError):
        return False
    return not math.isnan(number)


def join_checked_options(field: FormField, checked: Iterable[str]) -> str:
    """
    Join the checked options of a checkbox field into one value.

    Options are joined in the order the field defines them, whatever
    order they were checked in. Values that are not options are ignored.
    """
    selected = set(checked)
    return CHECKBOX_SEPARATOR.join(opt for opt in field.options if opt in selected)


def _as_text(field: FormField, value: FieldValue) -> str:
    if value is None:
        return ""
    if isinstance(value, str):
        return value
    if field.type.is_multi_valued:
        return join_checked_options(field, value)
    return CHECKBOX_SEPARATOR.join(value)


def _is_blank(value: str) -> bool:
    return value.strip() == ""


def _check_email(field: FormField, value: str) -> list[FieldValidationError]:
    if is_valid_email(value):
        return []
    return [_error(field, "format", field.error_message, value)]


def _check_number(field: FormField, value: str) -> list[FieldValidationError]:
    if is_valid_number(value):
        return []
    return [_error(field, "format", field.error_message, value)]


def _check_text(field: FormField, value: str) -> list[FieldValidationError]:
    errors = []
    if field.min_length and len(value) < field.min_length:
        errors.append(
            _error(field, "min_length", f"Minimum {field.min_length} characters required", value)
        )
    if field.max_length and len(value) > field.max_length:
        errors.append(
            _error(field, "max_length", f"Maximum {field.max_length} characters allowed", value)
        )
    return errors


def _check_choice(field: FormField, value: str) -> list[FieldValidationError]:
    return []


_TYPE_CHECKS: dict[FieldType, Callable[[FormField, str], list[FieldValidationError]]] = {
    FieldType.TEXT: _check_text,
    FieldType.EMAIL: _check_email,
    FieldType.NUMBER: _check_number,
    FieldType.SELECT: _check_choice,
    FieldType.RADIO: _check_choice,
    FieldType.CHECKBOX: _check_choice,
}

_missing = set(FieldType) - set(_TYPE_CHECKS)
if _missing:
    raise RuntimeError(f"No validation rule for field types: {sorted(t.value for t in _missing)}")


def _error(field: FormField, error_type: str, message: str, value: str) -> FieldValidationError:
    return FieldValidationError(
        field_name=field.name,
        error_type=error_type,
        message=message,
        received=value,
    )


def check_field(field: FormField, value: FieldValue) -> list[FieldValidationError]:
    """
    Run every rule for one field and return the errors found, in order.

    Args:
        field: The field definition.
        value: The submitted value. Checkbox fields accept either the
            joined string or the sequence of checked options; an empty
            joined string means nothing is checked.
    """
    text = _as_text(field, value)
    errors: list[FieldValidationError] = []

    if field.required and _is_blank(text):
        errors.append(_error(field, "required", field.error_message, text))

    if _is_blank(text):
        return errors

    errors.extend(_TYPE_CHECKS[field.type](field, text))
    return errors


def validate_field(field: FormField, value: FieldValue) -> list[str]:
    """Validate one value and return every triggered message."""
    return [e.message for e in check_field(field, value)]


def validate_field_realtime(field: FormField, value: FieldValue) -> str | None:
    """Validate a value as it changes. Returns the message to display, or None."""
    messages = validate_field(field, value)
    return messages[0] if messages else None


def extract_value(field: FormField, values: Mapping[str, FieldValue]) -> str:
    """Get a field's submitted value as a string, joining checkbox selections."""
    return _as_text(field, values.get(field.name))


def validate_form(
    schema: FormSchema | Iterable[FormField],
    values: Mapping[str, FieldValue],
) -> ValidationResult:
    """
    Validate a whole submission.

    Fields are checked in form order. Only the first message of a failing
    field is reported in ``errors``; ``details`` keeps all of them.

    Args:
        schema: The form schema, or its fields.
        values: Submitted values keyed by field name.

    Returns:
        ValidationResult with the per-field messages and, when the
        submission is valid, the extracted values.
    """
    fields = schema.get_fields() if isinstance(schema, FormSchema) else tuple(schema)

    errors: dict[str, str] = {}
    details: list[FieldValidationError] = []
    data: dict[str, str] = {}

    for field in fields:
        value = extract_value(field, values)
        data[field.name] = value
        field_errors = check_field(field, value)
        if field_errors:
            errors.setdefault(field.name, field_errors[0].message)
            details.extend(field_errors)

    is_valid = not errors
    return ValidationResult(
        is_valid=is_valid,
        errors=errors,
        details=details,
        validated_data=data if is_valid else None,
    )


def is_form_valid(
    schema: FormSchema | Iterable[FormField],
    values: Mapping[str, FieldValue],
) -> bool:
    """Whether a submission passes validation, e.g. to enable a submit button."""
    return validate_form(schema, values).is_valid
