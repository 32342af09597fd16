"""Stored form submission model."""

from datetime import datetime, timezone

from pydantic import BaseModel, Field


def _now_ms() -> int:
    return int(datetime.now(timezone.utc).timestamp() * 1000)


def _now_iso() -> str:
    return datetime.now(timezone.utc).isoformat()


class Submission(BaseModel):
    """One completed set of values collected against a form."""

    id: int = Field(default_factory=_now_ms, description="Creation time in milliseconds")
    timestamp: str = Field(default_factory=_now_iso, description="ISO-8601 creation time")
    data: dict[str, str] = Field(default_factory=dict, description="Values keyed by field name")
