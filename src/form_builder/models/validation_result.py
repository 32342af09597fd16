"""
Validation result models for submitted form values.

These models represent the output of the validator.
"""

from typing import Literal

from pydantic import BaseModel, Field

ErrorType = Literal["required", "format", "min_length", "max_length"]


class FieldValidationError(BaseModel):
    """Validation error for a specific field."""

    field_name: str = Field(..., description="Name of the field with error")
    error_type: ErrorType = Field(..., description="Rule that failed")
    message: str = Field(..., description="Human-readable error message")
    received: str | None = Field(default=None, description="Received value")


class ValidationResult(BaseModel):
    """Result of form validation."""

    is_valid: bool = Field(..., description="Whether the form data is valid")
    errors: dict[str, str] = Field(
        default_factory=dict,
        description="First error message per failing field, in schema order",
    )
    details: list[FieldValidationError] = Field(
        default_factory=list, description="Every error found, including later ones"
    )
    validated_data: dict[str, str] | None = Field(
        default=None, description="Extracted values if valid"
    )

    @property
    def error_count(self) -> int:
        """Get the number of failing fields."""
        return len(self.errors)

    def get_field_errors(self, field_name: str) -> list[FieldValidationError]:
        """Get all errors for a specific field."""
        return [e for e in self.details if e.field_name == field_name]

    def to_error_dict(self) -> dict[str, list[str]]:
        """Convert errors to a dict mapping field names to all their messages."""
        result: dict[str, list[str]] = {}
        for error in self.details:
            if error.field_name not in result:
                result[error.field_name] = []
            result[error.field_name].append(error.message)
        return result
