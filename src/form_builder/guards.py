"""
Field definition guards.

``FormSchema`` accepts any field definition. Callers run these checks
before adding or updating a field: a name is required, choice types need
options, length bounds must make sense and, optionally, names must be
unique because they key the submitted values.
"""

import re
from typing import Any, Iterable, Mapping

from pydantic import ValidationError

from form_builder.errors import FieldDefinitionError
from form_builder.models.field_definitions import FieldInput, FormField

MAX_NAME_LENGTH = 100

# Field names are rendered as labels; reject markup and script patterns
SUSPICIOUS_PATTERNS = [
    r"<script",
    r"javascript:",
    r"on\w+\s*=",
    r"\{\{.*\}\}",
    r"\$\{.*\}",
    r"<[a-zA-Z/!]",
]


def parse_options(raw: str | Iterable[str] | None) -> list[str]:
    """
    Clean a list of options, trimming each and dropping blanks.

    A string is split on commas first.
    """
    if not raw:
        return []
    if isinstance(raw, str):
        raw = raw.split(",")
    return [opt.strip() for opt in raw if isinstance(opt, str) and opt.strip()]


def normalize_definition(data: Mapping[str, Any]) -> dict[str, Any]:
    """
    Tidy a field definition or update as entered in an editing form.

    The name is trimmed and the options are cleaned with
    ``parse_options``. Other attributes are returned unchanged.
    """
    normalized = dict(data)
    if isinstance(normalized.get("name"), str):
        normalized["name"] = normalized["name"].strip()
    if isinstance(normalized.get("options"), (str, list, tuple)):
        normalized["options"] = parse_options(normalized["options"])
    return normalized


def validation_issues(error: ValidationError) -> list[str]:
    """Describe pydantic validation errors as guard issues."""
    return [
        f"Invalid {'.'.join(str(loc) for loc in err['loc'])}: {err['msg']}"
        for err in error.errors()
    ]


def _check_name(name: str) -> str | None:
    if not name or not name.strip():
        return "Please enter a field name"
    if len(name) > MAX_NAME_LENGTH:
        return f"Field name must be at most {MAX_NAME_LENGTH} characters"
    for pattern in SUSPICIOUS_PATTERNS:
        if re.search(pattern, name, re.IGNORECASE):
            return "Field name contains markup or script"
    return None


def check_field_definition(
    data: FieldInput | Mapping[str, Any],
    existing: Iterable[FormField] = (),
    field_id: int | None = None,
    unique_names: bool = True,
) -> list[str]:
    """
    Check a field definition before it is added or applied as an update.

    Args:
        data: The complete definition (for an update, the merged attributes).
        existing: Fields already in the form.
        field_id: Id of the field being updated, excluded from the
            uniqueness check.
        unique_names: Whether to reject a name already used by another field.

    Returns:
        List of issues; empty when the definition is acceptable.
    """
    if not isinstance(data, FieldInput):
        try:
            data = FieldInput.model_validate(dict(data))
        except ValidationError as e:
            return validation_issues(e)

    issues: list[str] = []

    name_issue = _check_name(data.name)
    if name_issue:
        issues.append(name_issue)

    if data.type.requires_options and not [o for o in (data.options or []) if o.strip()]:
        issues.append("Please enter options for this field type")

    for label, bound in (("Minimum length", data.min_length), ("Maximum length", data.max_length)):
        if bound is not None and bound < 1:
            issues.append(f"{label} must be a positive number")

    if data.min_length and data.max_length and data.min_length > data.max_length:
        issues.append("Minimum length cannot be greater than maximum length")

    if unique_names and not name_issue:
        name = data.name.strip()
        for field in existing:
            if field.id != field_id and field.name.strip() == name:
                issues.append(f"A field named '{name}' already exists")
                break

    return issues


def ensure_valid_definition(
    data: FieldInput | Mapping[str, Any],
    existing: Iterable[FormField] = (),
    field_id: int | None = None,
    unique_names: bool = True,
) -> None:
    """
    Raise if a field definition fails the guard.

    Raises:
        FieldDefinitionError: With the list of issues found.
    """
    issues = check_field_definition(data, existing, field_id, unique_names)
    if issues:
        raise FieldDefinitionError(issues)
