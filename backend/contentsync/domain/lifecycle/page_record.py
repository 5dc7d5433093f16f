from datetime import datetime, timedelta, timezone
from typing import Optional

# Smallest step used to keep write timestamps strictly increasing
TICK = timedelta(microseconds=1)


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


def next_write_timestamp(now: datetime, *previous: Optional[datetime]) -> datetime:
    """
    Timestamp for a write that must sort after every `previous` one.

    Two writes inside the same clock tick (or a clock that moved
    backwards) still get distinct, ordered timestamps.
    """
    latest = max((ts for ts in previous if ts is not None), default=None)

    if latest is not None and now <= latest:
        return latest + TICK
    return now
