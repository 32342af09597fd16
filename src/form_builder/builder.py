"""
Form Builder.

This is the main entry point of the form builder. It owns one form
schema and its storage, and provides the actions a form editing UI
performs: edit fields, validate input, store submissions and export them.
"""

import logging
from pathlib import Path
from typing import Any, Mapping

from pydantic import ValidationError

from form_builder.config import get_config
from form_builder.export import submissions_to_csv, submissions_to_json, write_export
from form_builder.errors import FieldDefinitionError
from form_builder.guards import (
    ensure_valid_definition,
    normalize_definition,
    validation_issues,
)
from form_builder.models.field_definitions import (
    FieldInput,
    FieldUpdate,
    FormField,
    default_error_message,
)
from form_builder.models.submission import Submission
from form_builder.models.validation_result import ValidationResult
from form_builder.schema import FormSchema
from form_builder.storage import StorageManager
from form_builder.validator import FieldValue, validate_field_realtime, validate_form

logger = logging.getLogger("form-builder")


class FormBuilder:
    """
    Form editing and filling workflow around one schema.

    Usage:
        builder = FormBuilder(data_dir="./data")
        builder.load_saved_form()

        field = builder.add_field({"name": "Email", "type": "email", "required": True})
        result, submission = builder.submit({"Email": "user@example.com"})

        csv_text = builder.export_csv()
    """

    def __init__(
        self,
        schema: FormSchema | None = None,
        storage: StorageManager | None = None,
        data_dir: str | Path | None = None,
        unique_names: bool | None = None,
    ):
        """
        Initialize the builder.

        Args:
            schema: Schema to edit. A new empty schema if None.
            storage: Storage to persist to. Built from data_dir if None.
            data_dir: Data directory for the default storage.
            unique_names: Whether field names must be unique. If None,
                uses config.enforce_unique_names.
        """
        config = get_config()
        self.schema = schema if schema is not None else FormSchema()
        self.storage = storage if storage is not None else StorageManager(data_dir)
        self.unique_names = (
            config.enforce_unique_names if unique_names is None else unique_names
        )

    def load_saved_form(self) -> bool:
        """Load the stored form into the schema. Returns whether one was found."""
        return self.storage.load_form_schema(self.schema)

    def _save(self) -> None:
        self.storage.save_form_schema(self.schema)

    # Field editing

    def add_field(self, data: FieldInput | Mapping[str, Any]) -> FormField:
        """
        Tidy, check, add and save a new field.

        The name is trimmed and blank options are dropped before the
        definition is checked.

        Raises:
            FieldDefinitionError: If the definition fails the guard.
        """
        if isinstance(data, FieldInput):
            data = data.model_dump(exclude_unset=True)
        data = normalize_definition(data)

        ensure_valid_definition(
            data, self.schema.get_fields(), unique_names=self.unique_names
        )
        field = self.schema.add_field(data)
        self._save()
        logger.info(f"Added field '{field.name}' ({field.type.value})")
        return field

    def edit_field(
        self,
        field_id: int,
        updates: FieldUpdate | Mapping[str, Any],
    ) -> FormField | None:
        """
        Check, apply and save an update to a field.

        The update is tidied like a new definition. A blank error message
        is replaced by the default message of the field's (possibly new)
        type.

        Returns:
            The updated field, or None if the id is unknown.

        Raises:
            FieldDefinitionError: If the resulting definition fails the guard.
        """
        current = self.schema.get_field(field_id)
        if current is None:
            return None

        if isinstance(updates, FieldUpdate):
            updates = updates.model_dump(exclude_unset=True)
        updates = normalize_definition(
            {k: v for k, v in dict(updates).items() if k != "id"}
        )
        try:
            changes = FieldUpdate.model_validate(updates).changes()
        except ValidationError as e:
            raise FieldDefinitionError(validation_issues(e)) from e

        merged = {**current.model_dump(), **changes}
        ensure_valid_definition(
            merged,
            self.schema.get_fields(),
            field_id=field_id,
            unique_names=self.unique_names,
        )

        if "error_message" in changes and not (changes["error_message"] or "").strip():
            changes["error_message"] = default_error_message(merged["type"])

        field = self.schema.update_field(field_id, changes)
        self._save()
        return field

    def remove_field(self, field_id: int) -> None:
        self.schema.remove_field(field_id)
        self._save()

    def move_field_up(self, field_id: int) -> bool:
        moved = self.schema.move_field_up(field_id)
        if moved:
            self._save()
        return moved

    def move_field_down(self, field_id: int) -> bool:
        moved = self.schema.move_field_down(field_id)
        if moved:
            self._save()
        return moved

    def clear_form(self) -> None:
        """Delete every field and the stored form."""
        self.schema.clear_fields()
        self.storage.clear_form_schema()
        logger.info("Cleared form")

    # Filling

    def validate_value(self, field_id: int, value: FieldValue) -> str | None:
        """Real-time check of one value. Returns the message to show, or None."""
        field = self.schema.get_field(field_id)
        if field is None:
            return None
        return validate_field_realtime(field, value)

    def validate(self, values: Mapping[str, FieldValue]) -> ValidationResult:
        return validate_form(self.schema, values)

    def submit(
        self, values: Mapping[str, FieldValue]
    ) -> tuple[ValidationResult, Submission | None]:
        """
        Validate a submission and store it when valid.

        Returns:
            The validation result and the stored submission, or None if
            the values were rejected.
        """
        result = self.validate(values)
        if not result.is_valid:
            logger.info(f"Submission rejected: {len(result.errors)} invalid fields")
            return result, None
        submission = self.storage.save_submission(result.validated_data or {})
        return result, submission

    # Submissions

    def get_submissions(self) -> list[Submission]:
        return self.storage.get_submissions()

    def clear_submissions(self) -> None:
        self.storage.clear_submissions()

    def export_json(self, path: str | Path | None = None) -> str:
        """Export submissions as JSON, optionally writing them to a file."""
        content = submissions_to_json(
            self.get_submissions(), indent=get_config().indent_json_output
        )
        if path is not None:
            write_export(path, content)
        return content

    def export_csv(self, path: str | Path | None = None) -> str:
        """
        Export submissions as CSV, optionally writing them to a file.

        Raises:
            ExportError: If there are no submissions.
        """
        content = submissions_to_csv(
            self.schema.get_fields(),
            self.get_submissions(),
            delimiter=get_config().csv_delimiter,
        )
        if path is not None:
            write_export(path, content)
        return content
