"""Field types and validators shared by the request schemas."""

from datetime import UTC, datetime
from typing import Annotated

from pydantic import Field

HexColor = Annotated[str, Field(pattern=r"^#[0-9A-Fa-f]{6}$", max_length=7)]


def strip_required(v: str | None, label: str) -> str | None:
    """Strip whitespace; reject values that become empty."""
    if v is not None:
        v = v.strip()
        if not v:
            raise ValueError(f"{label} cannot be empty or whitespace only")
    return v


def strip_optional(v: str | None) -> str | None:
    """Strip whitespace; collapse empty strings to None."""
    if v is not None:
        v = v.strip()
        if not v:
            return None
    return v


def to_naive_utc(v: datetime | None) -> datetime | None:
    """Normalize aware datetimes to naive UTC, the storage convention."""
    if v is not None and v.tzinfo is not None:
        return v.astimezone(UTC).replace(tzinfo=None)
    return v
