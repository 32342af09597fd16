"""Shared fixtures for form builder tests."""

import pytest

from form_builder.builder import FormBuilder
from form_builder.schema import FormSchema
from form_builder.storage import StorageManager


@pytest.fixture
def schema():
    """A schema with one field of each kind used across tests."""
    schema = FormSchema()
    schema.add_field({"name": "Name", "type": "text", "required": True, "minLength": 2})
    schema.add_field({"name": "Email", "type": "email", "required": True})
    schema.add_field({"name": "Age", "type": "number"})
    schema.add_field({"name": "Topics", "type": "checkbox", "options": ["News", "Sales", "Support"]})
    return schema


@pytest.fixture
def storage(tmp_path):
    """Storage in a temporary directory."""
    return StorageManager(tmp_path / "data")


@pytest.fixture
def builder(storage):
    """Builder with an empty form and temporary storage."""
    return FormBuilder(storage=storage, unique_names=True)


@pytest.fixture(scope="session")
def anyio_backend():
    """Configure anyio to use asyncio only."""
    return "asyncio"
