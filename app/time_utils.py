"""
Time helpers.

Event and label spans are stored as UNIX seconds (UTC); audit columns such as
created_at are naive UTC datetimes. These helpers convert between the two.
"""

from datetime import date, datetime, time, timezone
from typing import Optional, Tuple


def to_naive_utc(value: Optional[datetime]) -> Optional[datetime]:
    """Normalize an aware datetime to naive UTC; naive values are assumed UTC."""
    if value is None:
        return None
    if value.tzinfo is not None:
        value = value.astimezone(timezone.utc).replace(tzinfo=None)
    return value


def to_epoch_seconds(value: datetime) -> int:
    """Whole seconds since the epoch, flooring sub-second precision."""
    naive = to_naive_utc(value)
    return int(naive.replace(tzinfo=timezone.utc).timestamp() // 1)


def utc_day_bounds(day: date) -> Tuple[int, int]:
    """First and last second of a UTC day as UNIX seconds."""
    start = datetime.combine(day, time.min)
    end = datetime.combine(day, time(23, 59, 59, 999999))
    return to_epoch_seconds(start), to_epoch_seconds(end)


def utc_day_datetimes(day: date) -> Tuple[datetime, datetime]:
    """First and last instant of a UTC day as naive datetimes."""
    return datetime.combine(day, time.min), datetime.combine(day, time(23, 59, 59, 999999))
