"""
Validation of a proposed appointment against a doctor's schedule.

validate_booking is a stateless gate. It must be fully evaluated before
anything is written.
"""

from typing import Iterable

from backend.scheduling.models import BookingDecision, ProposedAppointment, RejectionReason, WorkingHours
from backend.scheduling.overlap import starts_collide


def validate_booking(
    doctor,
    proposed: ProposedAppointment,
    existing_appointments: Iterable,
    excluding_id: int | None = None,
) -> BookingDecision:
    """
    Args:
        doctor: the doctor record, or None when the reference did not resolve
        proposed: the requested start (wall clock in the scheduling timezone) and duration
        existing_appointments: the doctor's committed appointments; each needs
            ``id`` and ``start_time``
        excluding_id: the appointment being edited, ignored in the conflict check

    Returns:
        BookingDecision: accepted, or rejected with the first failing reason
    """
    if doctor is None:
        return BookingDecision.reject(RejectionReason.DOCTOR_NOT_FOUND)

    working_hours = WorkingHours.coerce(doctor.working_hours)
    if not working_hours.contains(proposed.start, proposed.end):
        return BookingDecision.reject(RejectionReason.OUTSIDE_WORKING_HOURS)

    for appointment in existing_appointments:
        if excluding_id is not None and appointment.id == excluding_id:
            continue
        if starts_collide(appointment.start_time, proposed.start):
            return BookingDecision.reject(RejectionReason.SLOT_ALREADY_BOOKED)

    return BookingDecision.accept()
