"""Tests for the form schema."""

import pytest

from form_builder.errors import SchemaLoadError
from form_builder.models.field_definitions import FieldInput, FieldType, FieldUpdate
from form_builder.schema import FormSchema


class TestAddField:
    """Tests for FormSchema.add_field."""

    def test_ids_strictly_increasing(self):
        """Test that every added field gets a new, larger id."""
        schema = FormSchema()
        ids = [schema.add_field({"name": f"f{i}", "type": "text"}).id for i in range(5)]
        assert ids == [0, 1, 2, 3, 4]

    def test_ids_not_reused_after_removal(self):
        """Test that removed ids are not handed out again."""
        schema = FormSchema()
        first = schema.add_field({"name": "a", "type": "text"})
        second = schema.add_field({"name": "b", "type": "text"})
        schema.remove_field(second.id)
        schema.remove_field(first.id)
        assert schema.add_field({"name": "c", "type": "text"}).id == 2

    def test_defaults(self):
        """Test default attributes and type-derived error message."""
        field = FormSchema().add_field({"name": "Email", "type": "email"})
        assert field.options == []
        assert field.required is False
        assert field.min_length is None
        assert field.max_length is None
        assert field.error_message == "Please enter a valid email address"
        assert field.value == ""

    def test_custom_error_message_kept(self):
        """Test that a given error message is not replaced."""
        field = FormSchema().add_field(
            FieldInput(name="Name", type=FieldType.TEXT, error_message="Name please")
        )
        assert field.error_message == "Name please"

    def test_zero_lengths_stored_as_unset(self):
        """Test that zero length bounds count as unset."""
        field = FormSchema().add_field({"name": "Bio", "type": "text", "minLength": 0, "maxLength": 0})
        assert field.min_length is None
        assert field.max_length is None

    def test_appends_at_end(self):
        """Test that fields keep insertion order."""
        schema = FormSchema()
        for name in ("a", "b", "c"):
            schema.add_field({"name": name, "type": "text"})
        assert schema.field_names() == ["a", "b", "c"]

    def test_no_consistency_checks(self):
        """Test that the schema accepts definitions the guard would reject."""
        field = FormSchema().add_field({"name": "", "type": "select"})
        assert field.name == ""
        assert field.options == []


class TestReadAccess:
    """Tests for get_field / get_fields."""

    def test_get_missing_field(self, schema):
        """Test absent id."""
        assert schema.get_field(99) is None

    def test_returned_fields_are_copies(self, schema):
        """Test that mutating returned fields does not change the schema."""
        fields = schema.get_fields()
        fields[0].id = 42
        fields[0].options.append("x")
        field = schema.get_field(1)
        field.name = "Changed"

        assert schema.get_fields()[0].id == 0
        assert schema.get_fields()[0].options == []
        assert schema.get_field(1).name == "Email"

    def test_len_and_iter(self, schema):
        """Test container protocol."""
        assert len(schema) == 4
        assert [f.name for f in schema] == ["Name", "Email", "Age", "Topics"]


class TestUpdateField:
    """Tests for FormSchema.update_field."""

    def test_partial_update(self, schema):
        """Test that attributes not in the update are kept."""
        updated = schema.update_field(0, {"required": False})
        assert updated.required is False
        assert updated.name == "Name"
        assert updated.min_length == 2

    def test_update_model(self, schema):
        """Test updating with a FieldUpdate."""
        updated = schema.update_field(2, FieldUpdate(type=FieldType.TEXT, max_length=3))
        assert updated.type is FieldType.TEXT
        assert updated.max_length == 3

    def test_id_never_changes(self, schema):
        """Test that an id in the update is ignored."""
        updated = schema.update_field(1, {"id": 7, "name": "Mail"})
        assert updated.id == 1
        assert schema.get_field(7) is None
        assert schema.get_field(1).name == "Mail"

    def test_none_resets_to_defaults(self, schema):
        """Test that explicit None values reset options and required."""
        updated = schema.update_field(3, {"options": None, "required": None})
        assert updated.options == []
        assert updated.required is False

    def test_none_name_and_type_kept(self, schema):
        """Test that a None name or type leaves the attribute unchanged."""
        updated = schema.update_field(1, {"name": None, "type": None})
        assert updated.name == "Email"
        assert updated.type is FieldType.EMAIL

    def test_none_error_message_uses_type_default(self, schema):
        """Test that a None message falls back to the (new) type default."""
        updated = schema.update_field(0, {"type": "number", "errorMessage": None})
        assert updated.error_message == "Please enter a valid number"

    def test_missing_field(self, schema):
        """Test that unknown ids are a no-op."""
        before = schema.to_records()
        assert schema.update_field(99, {"name": "x"}) is None
        assert schema.to_records() == before


class TestMoveField:
    """Tests for moving fields."""

    def test_move_up(self, schema):
        """Test swapping with the predecessor."""
        assert schema.move_field_up(1) is True
        assert schema.field_names() == ["Email", "Name", "Age", "Topics"]

    def test_move_down(self, schema):
        """Test swapping with the successor."""
        assert schema.move_field_down(1) is True
        assert schema.field_names() == ["Name", "Age", "Email", "Topics"]

    def test_move_first_up(self, schema):
        """Test that the first field cannot move up."""
        assert schema.move_field_up(0) is False
        assert schema.field_names() == ["Name", "Email", "Age", "Topics"]

    def test_move_last_down(self, schema):
        """Test that the last field cannot move down."""
        assert schema.move_field_down(3) is False
        assert schema.field_names() == ["Name", "Email", "Age", "Topics"]

    def test_move_missing(self, schema):
        """Test that unknown ids do not move anything."""
        assert schema.move_field_up(99) is False
        assert schema.move_field_down(99) is False
        assert schema.field_names() == ["Name", "Email", "Age", "Topics"]


class TestRemoveAndClear:
    """Tests for removal and clearing."""

    def test_remove(self, schema):
        """Test removing a field."""
        schema.remove_field(2)
        assert schema.field_names() == ["Name", "Email", "Topics"]

    def test_remove_missing(self, schema):
        """Test that removing an unknown id is a no-op."""
        schema.remove_field(99)
        assert len(schema) == 4

    def test_clear_resets_ids(self, schema):
        """Test that ids start from zero after clearing."""
        schema.clear_fields()
        assert len(schema) == 0
        assert schema.add_field({"name": "x", "type": "text"}).id == 0


class TestSerialization:
    """Tests for to_json / from_json."""

    def test_to_json(self, schema):
        """Test exported structure."""
        data = schema.to_json()
        assert [f["name"] for f in data["fields"]] == ["Name", "Email", "Age", "Topics"]
        assert data["fields"][0]["minLength"] == 2
        assert "createdAt" in data

    def test_round_trip(self, schema):
        """Test that restoring reproduces the fields and continues the ids."""
        schema.move_field_down(0)
        schema.remove_field(2)
        restored = FormSchema()
        restored.from_json(schema.to_json())

        assert restored.to_records() == schema.to_records()
        new_id = restored.add_field({"name": "New", "type": "text"}).id
        assert new_id > max(f["id"] for f in schema.to_records())

    def test_restore_bare_list(self):
        """Test restoring a list of records."""
        schema = FormSchema()
        schema.from_json([
            {"id": 5, "name": "a", "type": "text", "errorMessage": "x"},
            {"id": 2, "name": "b", "type": "number", "errorMessage": "y"},
        ])
        assert schema.next_id == 6
        assert schema.field_names() == ["a", "b"]

    def test_restore_empty(self, schema):
        """Test that an empty restore resets the counter."""
        schema.from_json({"fields": []})
        assert len(schema) == 0
        assert schema.next_id == 0

    def test_duplicate_ids_are_kept(self):
        """Test that restored duplicate ids are not repaired."""
        schema = FormSchema()
        schema.from_json({"fields": [
            {"id": 1, "name": "a", "type": "text", "errorMessage": "x"},
            {"id": 1, "name": "b", "type": "text", "errorMessage": "x"},
        ]})
        assert [f.id for f in schema.get_fields()] == [1, 1]
        assert schema.add_field({"name": "c", "type": "text"}).id == 2

    def test_invalid_record(self, schema):
        """Test that bad records raise and leave the schema untouched."""
        with pytest.raises(SchemaLoadError):
            schema.from_json({"fields": [{"id": 0, "name": "a", "type": "date"}]})
        assert len(schema) == 4
