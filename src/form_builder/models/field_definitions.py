"""
Field definition models for the form builder.

A form is an ordered list of typed fields. These models describe one
field as it is stored in a schema (``FormField``), the data used to
create one (``FieldInput``) and a partial update (``FieldUpdate``).

Stored records use camelCase keys (``minLength``, ``errorMessage``) so
that saved forms stay readable by other tools; the Python attributes
use snake_case and either spelling is accepted on input.
"""

from enum import Enum

from pydantic import BaseModel, Field


class FieldType(str, Enum):
    """Supported input types."""

    TEXT = "text"
    EMAIL = "email"
    NUMBER = "number"
    SELECT = "select"
    RADIO = "radio"
    CHECKBOX = "checkbox"

    @property
    def requires_options(self) -> bool:
        """Whether the type is a choice between configured options."""
        return self in CHOICE_TYPES

    @property
    def is_multi_valued(self) -> bool:
        return self is FieldType.CHECKBOX


CHOICE_TYPES = frozenset({FieldType.SELECT, FieldType.RADIO, FieldType.CHECKBOX})

DEFAULT_ERROR_MESSAGES: dict[str, str] = {
    FieldType.TEXT.value: "This field is required",
    FieldType.EMAIL.value: "Please enter a valid email address",
    FieldType.NUMBER.value: "Please enter a valid number",
    FieldType.SELECT.value: "Please select an option",
    FieldType.RADIO.value: "Please select an option",
    FieldType.CHECKBOX.value: "Please select at least one option",
}

FALLBACK_ERROR_MESSAGE = "This field is invalid"


def default_error_message(field_type: FieldType | str) -> str:
    """Get the default error message for a field type."""
    key = field_type.value if isinstance(field_type, FieldType) else str(field_type)
    return DEFAULT_ERROR_MESSAGES.get(key, FALLBACK_ERROR_MESSAGE)


class FormField(BaseModel):
    """A single field of a form schema."""

    id: int = Field(..., description="Schema-assigned identifier, never reused")
    name: str = Field(..., description="Label and key of the submitted value")
    type: FieldType = Field(..., description="Input type")
    options: list[str] = Field(
        default_factory=list,
        description="Choices for select, radio and checkbox fields",
    )
    required: bool = Field(default=False, description="Whether a value is required")
    min_length: int | None = Field(
        default=None, alias="minLength", description="Minimum text length"
    )
    max_length: int | None = Field(
        default=None, alias="maxLength", description="Maximum text length"
    )
    error_message: str = Field(
        ..., alias="errorMessage", description="Message shown when validation fails"
    )
    value: str = Field(default="", description="Unused placeholder kept in records")

    model_config = {"populate_by_name": True}

    def to_record(self) -> dict:
        """Dump as a plain record with camelCase keys."""
        return self.model_dump(by_alias=True, mode="json")


class FieldInput(BaseModel):
    """
    Data for creating a field.

    No consistency checks happen here; see ``form_builder.guards`` for
    the checks callers run before adding a field.
    """

    name: str = Field(..., description="Field label / value key")
    type: FieldType = Field(default=FieldType.TEXT, description="Input type")
    options: list[str] | None = Field(default=None, description="Choices")
    required: bool | None = Field(default=None, description="Whether required")
    min_length: int | None = Field(default=None, alias="minLength")
    max_length: int | None = Field(default=None, alias="maxLength")
    error_message: str | None = Field(default=None, alias="errorMessage")

    model_config = {"populate_by_name": True}


class FieldUpdate(BaseModel):
    """Partial update of a field. Attributes left unset are not changed."""

    name: str | None = None
    type: FieldType | None = None
    options: list[str] | None = None
    required: bool | None = None
    min_length: int | None = Field(default=None, alias="minLength")
    max_length: int | None = Field(default=None, alias="maxLength")
    error_message: str | None = Field(default=None, alias="errorMessage")

    model_config = {"populate_by_name": True}

    def changes(self) -> dict:
        """
        Attributes explicitly set on this update, keyed by Python name.

        An explicit None resets ``options`` and ``required`` to their
        add-time defaults and leaves ``name`` and ``type`` unchanged.
        A None ``error_message`` is kept; the schema derives the type's
        default message from it.
        """
        changes = self.model_dump(exclude_unset=True)
        for key in ("name", "type"):
            if key in changes and changes[key] is None:
                del changes[key]
        if "options" in changes and changes["options"] is None:
            changes["options"] = []
        if "required" in changes and changes["required"] is None:
            changes["required"] = False
        return changes
