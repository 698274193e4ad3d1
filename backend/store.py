"""Doctor and appointment persistence used by the scheduling routes."""

from contextlib import contextmanager
from datetime import date, datetime, timedelta
from threading import Lock
from typing import Iterator, Protocol

from sqlalchemy.orm import Session

from backend.models.appointment import Appointment
from backend.models.doctor import Doctor

APPOINTMENT_FIELDS = (
    'doctor_id',
    'start_time',
    'duration_minutes',
    'appointment_type',
    'patient_name',
    'patient_email',
    'notes',
)

_booking_locks_guard = Lock()
_booking_locks: dict[int, Lock] = {}


@contextmanager
def doctor_booking_lock(doctor_id: int) -> Iterator[None]:
    """Serialize check-then-write booking sequences for one doctor within this process."""
    with _booking_locks_guard:
        lock = _booking_locks.setdefault(doctor_id, Lock())
    with lock:
        yield


class SchedulingStore(Protocol):
    def list_doctors(self) -> list[Doctor]: ...

    def get_doctor(self, doctor_id: int) -> Doctor | None: ...

    def add_doctor(self, doctor: Doctor) -> Doctor: ...

    def list_appointments(self) -> list[Appointment]: ...

    def get_appointment(self, appointment_id: int) -> Appointment | None: ...

    def list_appointments_for_doctor(self, doctor_id: int, on_date: date | None = None) -> list[Appointment]: ...

    def insert_appointment(self, appointment: Appointment) -> Appointment: ...

    def replace_appointment(self, appointment: Appointment, fields: dict) -> Appointment: ...

    def delete_appointment(self, appointment_id: int) -> bool: ...

    def delete_all_appointments(self) -> int: ...


class SqlAlchemyStore:
    def __init__(self, db: Session):
        self.db = db

    def list_doctors(self) -> list[Doctor]:
        return self.db.query(Doctor).order_by(Doctor.id.asc()).all()

    def get_doctor(self, doctor_id: int) -> Doctor | None:
        return self.db.query(Doctor).filter(Doctor.id == doctor_id).first()

    def add_doctor(self, doctor: Doctor) -> Doctor:
        self.db.add(doctor)
        self.db.commit()
        self.db.refresh(doctor)
        return doctor

    def list_appointments(self) -> list[Appointment]:
        return self.db.query(Appointment).order_by(Appointment.start_time.asc(), Appointment.id.asc()).all()

    def get_appointment(self, appointment_id: int) -> Appointment | None:
        return self.db.query(Appointment).filter(Appointment.id == appointment_id).first()

    def list_appointments_for_doctor(self, doctor_id: int, on_date: date | None = None) -> list[Appointment]:
        query = self.db.query(Appointment).filter(Appointment.doctor_id == doctor_id)
        if on_date is not None:
            day_start = datetime.combine(on_date, datetime.min.time())
            query = query.filter(
                Appointment.start_time >= day_start,
                Appointment.start_time < day_start + timedelta(days=1),
            )
        return query.order_by(Appointment.start_time.asc()).all()

    def insert_appointment(self, appointment: Appointment) -> Appointment:
        self.db.add(appointment)
        self.db.commit()
        self.db.refresh(appointment)
        return appointment

    def replace_appointment(self, appointment: Appointment, fields: dict) -> Appointment:
        for name in APPOINTMENT_FIELDS:
            setattr(appointment, name, fields.get(name))
        self.db.commit()
        self.db.refresh(appointment)
        return appointment

    def delete_appointment(self, appointment_id: int) -> bool:
        appointment = self.get_appointment(appointment_id)
        if appointment is None:
            return False
        self.db.delete(appointment)
        self.db.commit()
        return True

    def delete_all_appointments(self) -> int:
        deleted = self.db.query(Appointment).delete()
        self.db.commit()
        return deleted
