"""
Availability answers for a doctor on a given day.

The doctor's availability status is an authoritative override: a doctor on
leave or fully booked gets no slots, whatever the calendar says.
"""

from datetime import date, datetime
from typing import Iterable

from backend.core import config
from backend.scheduling.errors import InvalidArgument, NotFound
from backend.scheduling.models import AvailabilityResult, AvailabilityStatus, BookedInterval, WorkingHours
from backend.scheduling.overlap import filter_available
from backend.scheduling.time_grid import generate_slots

STATUS_MESSAGES = {
    AvailabilityStatus.ON_LEAVE: 'Doctor is on leave today',
    AvailabilityStatus.FULLY_BOOKED: 'Doctor is fully booked today',
}


def parse_slot_date(value: str | date | None) -> date:
    if value is None or (isinstance(value, str) and not value.strip()):
        raise InvalidArgument('Date is required')
    if isinstance(value, date):
        return value
    try:
        return datetime.strptime(value.strip(), '%Y-%m-%d').date()
    except ValueError as exc:
        raise InvalidArgument('Date must be in YYYY-MM-DD format') from exc


def coerce_duration(value: str | int | None, default: int | None = None) -> int:
    if value is None or (isinstance(value, str) and not value.strip()):
        return config.DEFAULT_SLOT_DURATION_MINUTES if default is None else default
    if isinstance(value, bool):
        raise InvalidArgument('Duration must be a positive integer')
    try:
        duration = int(str(value).strip())
    except ValueError as exc:
        raise InvalidArgument('Duration must be a positive integer') from exc
    if duration <= 0:
        raise InvalidArgument('Duration must be a positive integer')
    check_duration_limit(duration)
    return duration


def check_duration_limit(duration_minutes: int) -> None:
    if duration_minutes > config.MAX_APPOINTMENT_DURATION_MINUTES:
        raise InvalidArgument(f'Duration must be at most {config.MAX_APPOINTMENT_DURATION_MINUTES} minutes')


def get_availability(
    doctor,
    slot_date: date | None,
    duration_minutes: int,
    now: datetime,
    booked_intervals: Iterable[BookedInterval],
    tz,
) -> AvailabilityResult:
    if doctor is None:
        raise NotFound('Doctor not found')
    if slot_date is None:
        raise InvalidArgument('Date is required')
    if duration_minutes <= 0:
        raise InvalidArgument('Duration must be a positive integer')
    check_duration_limit(duration_minutes)

    working_hours = WorkingHours.coerce(doctor.working_hours)

    for status, message in STATUS_MESSAGES.items():
        if doctor.availability_status == status.value:
            return AvailabilityResult(slots=[], working_hours=working_hours, message=message)

    candidates = generate_slots(slot_date, working_hours, duration_minutes, now, tz)
    slots = filter_available(candidates, slot_date, booked_intervals, duration_minutes)
    return AvailabilityResult(slots=slots, working_hours=working_hours)
