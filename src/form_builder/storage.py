"""
File storage for form definitions and submissions.

Forms and submissions are kept as JSON documents in a data directory,
one file for the field records and one for the submission list.
"""

import json
import logging
from pathlib import Path
from typing import Any

from pydantic import ValidationError

from form_builder.config import get_config
from form_builder.errors import StorageError
from form_builder.models.submission import Submission
from form_builder.schema import FormSchema

logger = logging.getLogger("form-builder")


class StorageManager:
    """
    Persist a form's field records and its submissions.

    Usage:
        storage = StorageManager("./data")
        storage.save_form_schema(schema)
        storage.load_form_schema(other_schema)
        storage.save_submission({"Email": "a@b.com"})
    """

    def __init__(
        self,
        data_dir: str | Path | None = None,
        schema_file: str | None = None,
        submissions_file: str | None = None,
    ):
        """
        Initialize the storage manager.

        Args:
            data_dir: Directory holding the files. If None, uses config.data_dir.
            schema_file: File name of the field records.
            submissions_file: File name of the submission list.
        """
        config = get_config()
        self.data_dir = Path(data_dir or config.data_dir)
        self.schema_path = self.data_dir / (schema_file or config.schema_file)
        self.submissions_path = self.data_dir / (submissions_file or config.submissions_file)

    def _read(self, path: Path) -> Any | None:
        if not path.exists():
            return None
        try:
            return json.loads(path.read_text(encoding="utf-8"))
        except (OSError, json.JSONDecodeError) as e:
            raise StorageError(f"Cannot read {path}: {e}") from e

    def _write(self, path: Path, data: Any) -> None:
        tmp_path = path.with_name(path.name + ".tmp")
        try:
            self.data_dir.mkdir(parents=True, exist_ok=True)
            tmp_path.write_text(json.dumps(data, indent=2), encoding="utf-8")
            tmp_path.replace(path)
        except OSError as e:
            raise StorageError(f"Cannot write {path}: {e}") from e

    def _remove(self, path: Path) -> None:
        try:
            path.unlink(missing_ok=True)
        except OSError as e:
            raise StorageError(f"Cannot remove {path}: {e}") from e

    # Field records

    def save(self, records: list[dict[str, Any]]) -> None:
        """Store field records as produced by ``FormSchema.to_records``."""
        self._write(self.schema_path, records)

    def load(self) -> list[dict[str, Any]] | None:
        """Load stored field records, or None if nothing is stored."""
        data = self._read(self.schema_path)
        if data is None:
            return None
        if isinstance(data, dict):
            data = data.get("fields") or []
        if not isinstance(data, list):
            raise StorageError(f"Unexpected content in {self.schema_path}")
        return data

    def save_form_schema(self, schema: FormSchema) -> None:
        """Save the schema's fields."""
        self.save(schema.to_records())
        logger.debug(f"Saved {len(schema)} fields to {self.schema_path}")

    def load_form_schema(self, schema: FormSchema) -> bool:
        """
        Restore stored fields into a schema.

        Returns:
            True if a stored form was found and loaded.
        """
        records = self.load()
        if records is None:
            return False
        schema.from_json(records)
        logger.info(f"Loaded {len(schema)} fields from {self.schema_path}")
        return True

    def clear_form_schema(self) -> None:
        """Delete the stored form."""
        self._remove(self.schema_path)

    # Submissions

    def get_submissions(self) -> list[Submission]:
        """Get all stored submissions, oldest first."""
        data = self._read(self.submissions_path)
        if data is None:
            return []
        try:
            return [Submission.model_validate(item) for item in data]
        except (ValidationError, TypeError) as e:
            raise StorageError(f"Invalid submission in {self.submissions_path}: {e}") from e

    def save_submission(self, data: dict[str, str]) -> Submission:
        """Append a submission and return it."""
        submissions = self.get_submissions()
        submission = Submission(data=dict(data))
        submissions.append(submission)
        self._write(self.submissions_path, [s.model_dump() for s in submissions])
        logger.info(f"Stored submission {submission.id} ({len(submissions)} total)")
        return submission

    def clear_submissions(self) -> None:
        """Delete all stored submissions."""
        self._remove(self.submissions_path)
