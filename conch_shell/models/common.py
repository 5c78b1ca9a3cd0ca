"""Shared base model and helpers for Conch API and report models."""

from datetime import datetime, timezone
from uuid import UUID

from pydantic import BaseModel

NIL_UUID = UUID(int=0)

# Go's time.Time zero value, which the API and the Manta job emit for
# timestamps that were never set.
ZERO_TIME = datetime(1, 1, 1, tzinfo=timezone.utc)


class ConchBase(BaseModel):
    """Base model for everything decoded from Conch JSON.

    Unknown keys are dropped; the API adds fields faster than this client.
    """

    model_config = {
        "populate_by_name": True,
        "extra": "ignore",
    }


def as_utc(value: datetime | None) -> datetime | None:
    """Attach UTC to naive timestamps, leave aware ones untouched."""
    if value is not None and value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


def is_zero_time(value: datetime | None) -> bool:
    """True for a missing timestamp or Go's zero time."""
    return value is None or as_utc(value) == ZERO_TIME
