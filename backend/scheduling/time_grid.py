"""
Candidate slot generation over a doctor's working day.

Pure functions: no database, no clock reads. The caller supplies "now".
"""

from datetime import date, datetime, time, timedelta

from backend.scheduling.clock import localize
from backend.scheduling.models import WorkingHours


def generate_slots(
    slot_date: date,
    working_hours: WorkingHours,
    duration_minutes: int,
    now: datetime,
    tz,
) -> list[time]:
    """
    Partition [start, end) of the working day into consecutive windows of
    duration_minutes and return the start of each window, earliest first.

    A trailing window shorter than duration_minutes is dropped. When
    slot_date is today in tz, slots that do not start strictly after now
    are dropped as well. Other dates, past ones included, are not filtered.
    """
    step = timedelta(minutes=duration_minutes)
    cursor, day_end = working_hours.bounds_on(slot_date)
    current_time = localize(now, tz)
    is_today = slot_date == current_time.date()

    slots: list[time] = []
    while cursor + step <= day_end:
        if not is_today or localize(cursor, tz) > current_time:
            slots.append(cursor.time())
        cursor += step

    return slots
