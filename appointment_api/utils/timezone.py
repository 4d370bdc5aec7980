from datetime import datetime, timezone
from typing import Optional


def utcnow() -> datetime:
    """Current time as a naive UTC datetime, the form stored in the database."""
    return datetime.now(timezone.utc).replace(tzinfo=None)


def to_naive_utc(value: datetime) -> datetime:
    if value.tzinfo is None:
        return value
    return value.astimezone(timezone.utc).replace(tzinfo=None)


def isoformat_z(value: Optional[datetime]) -> Optional[str]:
    """Render a stored datetime as ISO-8601 UTC with a trailing Z."""
    if value is None:
        return None
    value = to_naive_utc(value)
    return value.isoformat(timespec="milliseconds") + "Z"
