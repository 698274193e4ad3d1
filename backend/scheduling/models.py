"""
Value types shared by the slot and booking logic.

Everything here is plain data: no sessions, no request objects.
"""

import json
from dataclasses import dataclass
from datetime import date, datetime, time, timedelta
from enum import Enum

from backend.scheduling.errors import Conflict, NotFound

SLOT_FORMAT = '%H:%M'


class AvailabilityStatus(str, Enum):
    AVAILABLE_TODAY = 'Available Today'
    FULLY_BOOKED = 'Fully Booked'
    ON_LEAVE = 'On Leave'


class RejectionReason(str, Enum):
    OUTSIDE_WORKING_HOURS = 'OutsideWorkingHours'
    SLOT_ALREADY_BOOKED = 'SlotAlreadyBooked'
    DOCTOR_NOT_FOUND = 'DoctorNotFound'


REJECTION_MESSAGES = {
    RejectionReason.OUTSIDE_WORKING_HOURS: 'Appointment time is outside doctor working hours',
    RejectionReason.SLOT_ALREADY_BOOKED: 'Time slot already booked',
    RejectionReason.DOCTOR_NOT_FOUND: 'Doctor not found',
}


def parse_wall_clock(value: str | time) -> time:
    if isinstance(value, time):
        return value.replace(second=0, microsecond=0)
    return datetime.strptime(value.strip(), SLOT_FORMAT).time()


def format_wall_clock(value: time) -> str:
    return value.strftime(SLOT_FORMAT)


@dataclass(frozen=True)
class WorkingHours:
    """
    A doctor's daily bounds as wall-clock times.

    Invariant: start must be before end.
    """
    start: time
    end: time

    def __post_init__(self):
        if self.start >= self.end:
            raise ValueError(f"Working hours start {self.start} must be before end {self.end}")

    @classmethod
    def from_json(cls, raw: str) -> "WorkingHours":
        payload = json.loads(raw)
        return cls(start=parse_wall_clock(payload['start']), end=parse_wall_clock(payload['end']))

    @classmethod
    def coerce(cls, value: "WorkingHours | str | dict") -> "WorkingHours":
        if isinstance(value, cls):
            return value
        if isinstance(value, dict):
            return cls(start=parse_wall_clock(value['start']), end=parse_wall_clock(value['end']))
        return cls.from_json(value)

    def to_dict(self) -> dict[str, str]:
        return {'start': format_wall_clock(self.start), 'end': format_wall_clock(self.end)}

    def to_json(self) -> str:
        return json.dumps(self.to_dict())

    def bounds_on(self, day: date) -> tuple[datetime, datetime]:
        return datetime.combine(day, self.start), datetime.combine(day, self.end)

    def contains(self, start: datetime, end: datetime) -> bool:
        """True when [start, end) sits inside the working window of start's calendar day."""
        work_start, work_end = self.bounds_on(start.date())
        return start >= work_start and end <= work_end


@dataclass(frozen=True)
class BookedInterval:
    """An already-committed appointment as a half-open [start, end) interval."""
    start: datetime
    duration_minutes: int

    @property
    def end(self) -> datetime:
        return self.start + timedelta(minutes=self.duration_minutes)


@dataclass(frozen=True)
class ProposedAppointment:
    doctor_id: int
    start: datetime
    duration_minutes: int

    def __post_init__(self):
        if self.duration_minutes <= 0:
            raise ValueError(f"Duration must be positive, got {self.duration_minutes}")

    @property
    def end(self) -> datetime:
        return self.start + timedelta(minutes=self.duration_minutes)


@dataclass(frozen=True)
class AvailabilityResult:
    slots: list[time]
    working_hours: WorkingHours
    message: str | None = None

    def slot_labels(self) -> list[str]:
        return [format_wall_clock(slot) for slot in self.slots]


@dataclass(frozen=True)
class BookingDecision:
    accepted: bool
    reason: RejectionReason | None = None
    message: str | None = None

    @classmethod
    def accept(cls) -> "BookingDecision":
        return cls(accepted=True)

    @classmethod
    def reject(cls, reason: RejectionReason) -> "BookingDecision":
        return cls(accepted=False, reason=reason, message=REJECTION_MESSAGES[reason])

    def raise_for_rejection(self) -> None:
        if self.accepted:
            return
        if self.reason is RejectionReason.DOCTOR_NOT_FOUND:
            raise NotFound(self.message)
        raise Conflict(self.message, reason=self.reason)
