"""
Export of stored submissions to CSV and JSON.
"""

import json
from pathlib import Path
from typing import Iterable, Sequence

from form_builder.errors import ExportError
from form_builder.models.field_definitions import FormField
from form_builder.models.submission import Submission

TIMESTAMP_COLUMN = "Timestamp"


def escape_csv(value: object, delimiter: str = ",") -> str:
    """Quote a value if it contains the delimiter, a quote or a line break."""
    text = value if isinstance(value, str) else str(value)
    if delimiter in text or '"' in text or "\n" in text or "\r" in text:
        return '"' + text.replace('"', '""') + '"'
    return text


def submissions_to_csv(
    fields: Iterable[FormField],
    submissions: Sequence[Submission],
    delimiter: str = ",",
) -> str:
    """
    Render submissions as CSV.

    Columns are the timestamp followed by the field names in form order.
    Values missing from a submission are left empty.

    Raises:
        ExportError: If there are no submissions.
    """
    if not submissions:
        raise ExportError("No submissions to export")

    field_names = [f.name for f in fields]
    header = [TIMESTAMP_COLUMN, *field_names]
    rows = [delimiter.join(escape_csv(h, delimiter) for h in header)]

    for submission in submissions:
        row = [submission.timestamp]
        row.extend(submission.data.get(name) or "" for name in field_names)
        rows.append(delimiter.join(escape_csv(v, delimiter) for v in row))

    return "\n".join(rows)


def submissions_to_json(submissions: Sequence[Submission], indent: int = 2) -> str:
    """Render submissions as a JSON array."""
    return json.dumps([s.model_dump() for s in submissions], indent=indent)


def write_export(path: str | Path, content: str) -> Path:
    """Write exported content to a file and return its path."""
    path = Path(path)
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(content, encoding="utf-8")
    except OSError as e:
        raise ExportError(f"Cannot write {path}: {e}") from e
    return path
