"""UTC clock helpers shared by branch templating and rendering."""

from datetime import datetime, timezone
from typing import Optional


def utc_now(now: Optional[datetime] = None) -> datetime:
    """Return ``now`` as an aware UTC datetime (current time when None).

    Naive datetimes are taken to be UTC already.
    """
    if now is None:
        return datetime.now(timezone.utc)
    if now.tzinfo is None:
        return now.replace(tzinfo=timezone.utc)
    return now.astimezone(timezone.utc)
