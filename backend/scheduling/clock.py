"""Helpers for reading and converting instants in the scheduling timezone."""

from datetime import datetime


def now_in(tz) -> datetime:
    return datetime.now(tz)


def localize(value: datetime, tz) -> datetime:
    """Attach tz to a naive wall-clock datetime; aware values are converted instead."""
    if value.tzinfo is None:
        return tz.localize(value)
    return value.astimezone(tz)


def to_wall_clock(value: datetime, tz) -> datetime:
    """Naive wall-clock datetime in tz. Naive input is assumed to already be in tz."""
    if value.tzinfo is None:
        return value
    return value.astimezone(tz).replace(tzinfo=None)
