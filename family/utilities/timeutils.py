"""Clock helpers shared by the stores.

Components accept a ``clock`` callable returning a ``datetime`` so tests can
drive time explicitly. Activity timestamps are integer milliseconds, the other
timestamps ISO-8601 strings.
"""
from datetime import datetime
from typing import Callable, Optional

Clock = Callable[[], datetime]


def system_clock() -> datetime:
    return datetime.now()


def to_ms(dt: datetime) -> int:
    return int(dt.timestamp() * 1000)


def to_iso(dt: datetime) -> str:
    return dt.isoformat(timespec="milliseconds")


def parse_iso(value: Optional[str], like: Optional[datetime] = None) -> Optional[datetime]:
    """Parse an ISO timestamp; returns None for empty/invalid input.

    When ``like`` is given the result is converted to match its awareness so
    the two can be subtracted.
    """
    if not value or not isinstance(value, str):
        return None
    try:
        parsed = datetime.fromisoformat(value.replace("Z", "+00:00"))
    except ValueError:
        return None
    if like is not None:
        if like.tzinfo is None and parsed.tzinfo is not None:
            parsed = parsed.astimezone().replace(tzinfo=None)
        elif like.tzinfo is not None and parsed.tzinfo is None:
            parsed = parsed.replace(tzinfo=like.tzinfo)
    return parsed
