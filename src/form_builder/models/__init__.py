"""
Data models for the form builder.

This module contains Pydantic models for:
- Field definitions (stored fields, creation input, partial updates)
- Validation results
- Stored submissions
"""

from form_builder.models.field_definitions import (
    CHOICE_TYPES,
    DEFAULT_ERROR_MESSAGES,
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

__all__ = [
    # Field definitions
    "CHOICE_TYPES",
    "DEFAULT_ERROR_MESSAGES",
    "FieldInput",
    "FieldType",
    "FieldUpdate",
    "FormField",
    "default_error_message",
    # Submissions
    "Submission",
    # Validation
    "ValidationResult",
    "FieldValidationError",
]
