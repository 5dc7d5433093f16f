from flask import request, abort
from datetime import datetime, timezone
from typing import Optional
from dateutil.parser import parse, ParserError


def normalize_ts(ts):
    """
    Ensure datetime is timezone-aware.
    Defaults to UTC if naive.
    """
    if ts is None:
        return None
    if ts.tzinfo is None:
        return ts.replace(tzinfo=timezone.utc)
    return ts


def if_unmodified_since() -> Optional[datetime]:
    """
    Reads the If-Unmodified-Since header of the current request.
    Returns None when no optimistic lock was requested.
    """
    client_ts = request.headers.get("If-Unmodified-Since")
    if not client_ts:
        return None  # No optimistic lock requested

    try:
        return normalize_ts(parse(client_ts))
    except (ParserError, ValueError, OverflowError):
        abort(400, description="Invalid If-Unmodified-Since header")


def is_stale(server_ts: Optional[datetime], client_ts: Optional[datetime]) -> bool:
    """True when the stored entity changed after the client's copy."""
    if server_ts is None or client_ts is None:
        return False
    return normalize_ts(server_ts) > normalize_ts(client_ts)
