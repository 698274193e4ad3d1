"""
Conflict checks between candidate slots and committed appointments.

Two distinct notions live here and are deliberately kept apart:

- intervals_overlap: half-open interval intersection, used when listing
  open slots.
- starts_collide: exact start-instant equality, used when validating a
  create or update request.
"""

from datetime import date, datetime, time, timedelta
from typing import Iterable, Sequence

from backend.scheduling.models import BookedInterval


def intervals_overlap(start_a: datetime, end_a: datetime, start_b: datetime, end_b: datetime) -> bool:
    # Touching intervals (end_a == start_b) do not overlap.
    return start_a < end_b and start_b < end_a


def starts_collide(start_a: datetime, start_b: datetime) -> bool:
    return start_a == start_b


def filter_available(
    slots: Sequence[time],
    slot_date: date,
    booked_intervals: Iterable[BookedInterval],
    duration_minutes: int,
) -> list[time]:
    """Drop every slot whose [start, start + duration) shares an instant with a booking."""
    booked = list(booked_intervals)
    step = timedelta(minutes=duration_minutes)

    available: list[time] = []
    for slot in slots:
        slot_start = datetime.combine(slot_date, slot)
        slot_end = slot_start + step
        if any(intervals_overlap(slot_start, slot_end, interval.start, interval.end) for interval in booked):
            continue
        available.append(slot)

    return available
