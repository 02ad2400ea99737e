"""Field types shared by the response schemas."""

from datetime import datetime, timezone
from typing import Annotated

from pydantic import AfterValidator


def _as_utc(value: datetime) -> datetime:
    """Stored timestamps are naive UTC; say so when they leave the API."""
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


StoredDateTime = Annotated[datetime, AfterValidator(_as_utc)]
