from datetime import datetime, timezone


def utcnow() -> datetime:
    """Naive UTC timestamp; challenge and enrollment columns store naive UTC."""
    return datetime.now(timezone.utc).replace(tzinfo=None)


def as_naive_utc(value: datetime) -> datetime:
    if value.tzinfo is None:
        return value
    return value.astimezone(timezone.utc).replace(tzinfo=None)
