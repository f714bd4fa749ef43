"""Time and datetime utilities."""

from datetime import datetime, timezone

MS_PER_HOUR = 60 * 60 * 1000


def utc_now() -> datetime:
    """Get current UTC datetime.

    Returns:
        Current datetime in UTC timezone
    """
    return datetime.now(timezone.utc)


def epoch_ms(dt: datetime | None = None) -> int:
    """Convert a datetime to Unix epoch milliseconds.

    Args:
        dt: Datetime to convert (defaults to now). Naive values are taken as UTC.

    Returns:
        Milliseconds since the Unix epoch
    """
    if dt is None:
        dt = utc_now()
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=timezone.utc)
    return int(dt.timestamp() * 1000)


def from_epoch_ms(value: int) -> datetime:
    """Convert Unix epoch milliseconds to an aware UTC datetime."""
    return datetime.fromtimestamp(value / 1000, tz=timezone.utc)
