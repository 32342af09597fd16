"""
Exception types for the form builder.

Validation failures of submitted values are never raised; they are
returned as data by the validator. These exceptions cover configuration
and I/O problems only.
"""


class FormBuilderError(Exception):
    """Base class for form builder errors."""


class FieldDefinitionError(FormBuilderError, ValueError):
    """Raised when a field definition fails the pre-add/pre-update guard."""

    def __init__(self, issues: list[str]):
        self.issues = list(issues)
        super().__init__("; ".join(self.issues) or "Invalid field definition")


class SchemaLoadError(FormBuilderError):
    """Raised when stored field records cannot be restored."""


class StorageError(FormBuilderError):
    """Raised when a persisted file exists but cannot be read or written."""


class ExportError(FormBuilderError):
    """Raised when an export cannot be produced."""
