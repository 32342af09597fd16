"""
Form schema: the ordered collection of field definitions.

``FormSchema`` is the only place that assigns field ids and changes
field order. Read access hands out copies so callers cannot reorder or
re-id fields behind the schema's back.

Usage:
    schema = FormSchema()
    email = schema.add_field({"name": "Email", "type": "email", "required": True})
    schema.move_field_up(email.id)
    records = schema.to_json()
"""

import logging
from datetime import datetime, timezone
from typing import Any, Iterator, Mapping

from pydantic import ValidationError

from form_builder.errors import SchemaLoadError
from form_builder.models.field_definitions import (
    FieldInput,
    FieldUpdate,
    FormField,
    default_error_message,
)

logger = logging.getLogger("form-builder")


class FormSchema:
    """Ordered, uniquely-identified collection of form fields."""

    def __init__(self) -> None:
        self._fields: list[FormField] = []
        self._next_id = 0

    def __len__(self) -> int:
        return len(self._fields)

    def __iter__(self) -> Iterator[FormField]:
        return iter(self.get_fields())

    @property
    def next_id(self) -> int:
        """Id the next added field will receive."""
        return self._next_id

    def _index_of(self, field_id: int) -> int:
        for index, field in enumerate(self._fields):
            if field.id == field_id:
                return index
        return -1

    def add_field(self, data: FieldInput | Mapping[str, Any]) -> FormField:
        """
        Add a new field at the end of the form.

        The schema assigns the id. Missing attributes get defaults and a
        missing error message is derived from the field type. The data is
        not checked for consistency (see ``form_builder.guards``).

        Args:
            data: Field attributes, as a ``FieldInput`` or a plain mapping.

        Returns:
            A copy of the stored field.
        """
        if not isinstance(data, FieldInput):
            data = FieldInput.model_validate(dict(data))

        field = FormField(
            id=self._next_id,
            name=data.name,
            type=data.type,
            options=list(data.options or []),
            required=bool(data.required),
            min_length=data.min_length or None,
            max_length=data.max_length or None,
            error_message=data.error_message or default_error_message(data.type),
        )
        self._next_id += 1
        self._fields.append(field)
        logger.debug(f"Added field {field.id} ({field.type.value}): {field.name}")
        return field.model_copy(deep=True)

    def remove_field(self, field_id: int) -> None:
        """Remove a field by id. Unknown ids are ignored."""
        self._fields = [f for f in self._fields if f.id != field_id]

    def get_field(self, field_id: int) -> FormField | None:
        """Get a copy of a field by id, or None."""
        index = self._index_of(field_id)
        if index < 0:
            return None
        return self._fields[index].model_copy(deep=True)

    def update_field(
        self,
        field_id: int,
        updates: FieldUpdate | Mapping[str, Any],
    ) -> FormField | None:
        """
        Merge attribute updates into an existing field.

        Attributes absent from ``updates`` keep their values and the id is
        never changed. Explicit None values reset an attribute to its
        add-time default (see ``FieldUpdate.changes``).

        Returns:
            A copy of the updated field, or None if the id is unknown.
        """
        index = self._index_of(field_id)
        if index < 0:
            return None

        if not isinstance(updates, FieldUpdate):
            updates = FieldUpdate.model_validate(
                {k: v for k, v in dict(updates).items() if k != "id"}
            )

        current = self._fields[index]
        merged = {**current.model_dump(), **updates.changes(), "id": current.id}
        if merged["error_message"] is None:
            merged["error_message"] = default_error_message(merged["type"])
        self._fields[index] = FormField.model_validate(merged)
        return self._fields[index].model_copy(deep=True)

    def move_field_up(self, field_id: int) -> bool:
        """Swap a field with its predecessor. Returns whether it moved."""
        index = self._index_of(field_id)
        if index > 0:
            fields = self._fields
            fields[index], fields[index - 1] = fields[index - 1], fields[index]
            return True
        return False

    def move_field_down(self, field_id: int) -> bool:
        """Swap a field with its successor. Returns whether it moved."""
        index = self._index_of(field_id)
        if 0 <= index < len(self._fields) - 1:
            fields = self._fields
            fields[index], fields[index + 1] = fields[index + 1], fields[index]
            return True
        return False

    def clear_fields(self) -> None:
        """Remove every field and reset the id counter."""
        self._fields = []
        self._next_id = 0

    def get_fields(self) -> tuple[FormField, ...]:
        """Get copies of all fields in form order."""
        return tuple(f.model_copy(deep=True) for f in self._fields)

    def field_names(self) -> list[str]:
        return [f.name for f in self._fields]

    def to_records(self) -> list[dict[str, Any]]:
        """Dump the fields as plain records, in form order."""
        return [f.to_record() for f in self._fields]

    def to_json(self) -> dict[str, Any]:
        """Export the form as a plain structure with a creation timestamp."""
        return {
            "fields": self.to_records(),
            "createdAt": datetime.now(timezone.utc).isoformat(),
        }

    def from_json(self, data: Mapping[str, Any] | list[Mapping[str, Any]]) -> None:
        """
        Replace the fields with restored records.

        Accepts either the structure produced by ``to_json`` or a bare list
        of field records. The id counter continues after the largest
        restored id. Duplicate ids in the records are kept as they are.

        Raises:
            SchemaLoadError: If a record is not a valid field.
        """
        records = data if isinstance(data, list) else (data.get("fields") or [])

        try:
            fields = [FormField.model_validate(record) for record in records]
        except (ValidationError, TypeError) as e:
            raise SchemaLoadError(f"Invalid field record: {e}") from e

        self._fields = fields
        self._next_id = max(f.id for f in fields) + 1 if fields else 0
        logger.debug(f"Restored {len(fields)} fields, next id {self._next_id}")
