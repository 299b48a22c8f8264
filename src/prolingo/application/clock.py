"""Wall-clock helpers. Every pure function takes an optional `now` so tests can pin time."""

from collections.abc import Callable
from datetime import datetime, timezone

Clock = Callable[[], datetime]


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def resolve_now(now: datetime | None) -> datetime:
    """Return `now` if given, otherwise the current UTC time."""
    return now if now is not None else utc_now()
