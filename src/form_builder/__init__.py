"""
Form Builder: compose, fill and validate data-entry forms.

A form is an ordered list of typed fields (text, email, number, select,
radio, checkbox). Submitted values are validated against per-field
rules, stored, and exported as CSV or JSON.

Simple Usage:
    from form_builder import FormSchema, validate_form

    schema = FormSchema()
    schema.add_field({"name": "Email", "type": "email", "required": True})
    schema.add_field({"name": "Age", "type": "number"})

    result = validate_form(schema, {"Email": "user@example", "Age": "42"})
    result.is_valid   # False
    result.errors     # {"Email": "Please enter a valid email address"}

With storage:
    from form_builder import FormBuilder

    builder = FormBuilder(data_dir="./data")
    builder.load_saved_form()
    builder.add_field({"name": "Topics", "type": "checkbox", "options": ["A", "B"]})
    result, submission = builder.submit({"Topics": ["B", "A"]})
    print(builder.export_csv())
"""

from form_builder.builder import FormBuilder
from form_builder.errors import (
    ExportError,
    FieldDefinitionError,
    FormBuilderError,
    SchemaLoadError,
    StorageError,
)
from form_builder.guards import (
    check_field_definition,
    ensure_valid_definition,
    parse_options,
)
from form_builder.models.field_definitions import (
    FieldInput,
    FieldType,
    FieldUpdate,
    FormField,
    default_error_message,
)
from form_builder.models.submission import Submission
from form_builder.models.validation_result import (
    FieldValidationError,
    ValidationResult,
)
from form_builder.schema import FormSchema
from form_builder.storage import StorageManager
from form_builder.validator import (
    is_form_valid,
    join_checked_options,
    validate_field,
    validate_field_realtime,
    validate_form,
)

__all__ = [
    # Main interface
    "FormBuilder",
    "FormSchema",
    "StorageManager",
    # Field models
    "FieldInput",
    "FieldType",
    "FieldUpdate",
    "FormField",
    "default_error_message",
    # Definition guards
    "check_field_definition",
    "ensure_valid_definition",
    "parse_options",
    # Validation
    "ValidationResult",
    "FieldValidationError",
    "validate_field",
    "validate_field_realtime",
    "validate_form",
    "is_form_valid",
    "join_checked_options",
    # Submissions
    "Submission",
    # Errors
    "FormBuilderError",
    "FieldDefinitionError",
    "SchemaLoadError",
    "StorageError",
    "ExportError",
]

__version__ = "0.1.0"
