import logging
from datetime import datetime

from fastapi import APIRouter, Depends, HTTPException, status
from pydantic import BaseModel, field_validator
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from backend.core import config
from backend.database import ensure_appointment_schema, get_db
from backend.models.appointment import Appointment
from backend.models.doctor import Doctor
from backend.scheduling.booking import validate_booking
from backend.scheduling.clock import localize, to_wall_clock
from backend.scheduling.errors import NotFound, SchedulingError
from backend.scheduling.models import ProposedAppointment
from backend.store import SchedulingStore, SqlAlchemyStore, doctor_booking_lock

router = APIRouter(tags=['appointments'])

logger = logging.getLogger(__name__)


class AppointmentRequest(BaseModel):
    doctor_id: int
    date: datetime
    duration: int
    appointment_type: str
    patient_name: str
    patient_email: str
    notes: str | None = None

    @field_validator('duration')
    @classmethod
    def validate_duration(cls, value: int) -> int:
        if value <= 0:
            raise ValueError('Duration must be a positive number of minutes.')
        if value > config.MAX_APPOINTMENT_DURATION_MINUTES:
            raise ValueError(f'Duration must be at most {config.MAX_APPOINTMENT_DURATION_MINUTES} minutes.')
        return value

    @field_validator('appointment_type', 'patient_name')
    @classmethod
    def validate_required_text(cls, value: str) -> str:
        normalized = value.strip()
        if not normalized:
            raise ValueError('Field is required.')
        return normalized

    @field_validator('patient_email')
    @classmethod
    def validate_patient_email(cls, value: str) -> str:
        normalized = value.strip().lower()
        if not normalized:
            raise ValueError('Patient email is required.')
        return normalized

    @field_validator('notes')
    @classmethod
    def validate_notes(cls, value: str | None) -> str | None:
        if value is None:
            return None

        normalized = value.strip()
        if not normalized:
            return None

        if len(normalized) > config.MAX_APPOINTMENT_NOTES_LENGTH:
            raise ValueError(f'Notes must be {config.MAX_APPOINTMENT_NOTES_LENGTH} characters or fewer.')

        return normalized

    def to_fields(self) -> dict:
        tz = config.get_scheduling_timezone()
        return {
            'doctor_id': self.doctor_id,
            'start_time': to_wall_clock(self.date, tz).replace(second=0, microsecond=0),
            'duration_minutes': self.duration,
            'appointment_type': self.appointment_type,
            'patient_name': self.patient_name,
            'patient_email': self.patient_email,
            'notes': self.notes,
        }


class AppointmentResponse(BaseModel):
    id: int
    doctor_id: int
    date: datetime
    duration: int
    appointment_type: str | None = None
    patient_name: str | None = None
    patient_email: str | None = None
    notes: str | None = None


class BookingResponse(BaseModel):
    id: int
    message: str


class MessageResponse(BaseModel):
    message: str


def ensure_database_ready() -> None:
    try:
        ensure_appointment_schema()
    except SQLAlchemyError as exc:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail='Database unavailable. Verify DATABASE_URL.',
        ) from exc


def to_response(appointment: Appointment) -> AppointmentResponse:
    return AppointmentResponse(
        id=appointment.id,
        doctor_id=appointment.doctor_id,
        date=localize(appointment.start_time, config.get_scheduling_timezone()),
        duration=appointment.duration_minutes,
        appointment_type=appointment.appointment_type,
        patient_name=appointment.patient_name,
        patient_email=appointment.patient_email,
        notes=appointment.notes,
    )


def _resolve_doctor(store: SchedulingStore, doctor_id: int) -> Doctor:
    doctor = store.get_doctor(doctor_id)
    if doctor is None:
        raise NotFound('Doctor not found')
    return doctor


def _validate_or_raise(store: SchedulingStore, doctor: Doctor, fields: dict, excluding_id: int | None = None) -> None:
    decision = validate_booking(
        doctor,
        ProposedAppointment(
            doctor_id=fields['doctor_id'],
            start=fields['start_time'],
            duration_minutes=fields['duration_minutes'],
        ),
        store.list_appointments_for_doctor(fields['doctor_id'], on_date=fields['start_time'].date()),
        excluding_id=excluding_id,
    )
    if not decision.accepted:
        logger.info('Rejected booking for doctor %s: %s', fields['doctor_id'], decision.reason.value)
    decision.raise_for_rejection()


@router.get('/appointments', response_model=list[AppointmentResponse])
def list_appointments(db: Session = Depends(get_db)):
    ensure_database_ready()

    try:
        return [to_response(appointment) for appointment in SqlAlchemyStore(db).list_appointments()]
    except SQLAlchemyError as exc:
        logger.exception('Failed to load appointments.')
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail='Failed to load appointments',
        ) from exc


@router.post('/appointments', response_model=BookingResponse)
def create_appointment(data: AppointmentRequest, db: Session = Depends(get_db)):
    ensure_database_ready()

    fields = data.to_fields()
    store = SqlAlchemyStore(db)

    try:
        doctor = _resolve_doctor(store, data.doctor_id)
        with doctor_booking_lock(doctor.id):
            _validate_or_raise(store, doctor, fields)
            appointment = store.insert_appointment(Appointment(**fields))
    except SchedulingError as exc:
        raise HTTPException(status_code=exc.status_code, detail=exc.detail) from exc
    except SQLAlchemyError as exc:
        db.rollback()
        logger.exception('Failed to book appointment for doctor %s.', data.doctor_id)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail='Failed to book appointment',
        ) from exc

    logger.info('Booked appointment %s with doctor %s at %s.', appointment.id, appointment.doctor_id, appointment.start_time)
    return BookingResponse(id=appointment.id, message='Appointment booked successfully')


# Registered before /appointments/{appointment_id} so "cleanup" is not parsed as an id.
@router.delete('/appointments/cleanup/all', response_model=MessageResponse)
def cleanup_appointments(db: Session = Depends(get_db)):
    ensure_database_ready()

    try:
        deleted = SqlAlchemyStore(db).delete_all_appointments()
    except SQLAlchemyError as exc:
        db.rollback()
        logger.exception('Failed to cleanup appointments.')
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail='Failed to cleanup appointments',
        ) from exc

    logger.info('Removed %d appointments.', deleted)
    return MessageResponse(message='All appointments cleaned up successfully')


@router.put('/appointments/{appointment_id}', response_model=MessageResponse)
def update_appointment(appointment_id: int, data: AppointmentRequest, db: Session = Depends(get_db)):
    ensure_database_ready()

    fields = data.to_fields()
    store = SqlAlchemyStore(db)

    try:
        doctor = _resolve_doctor(store, data.doctor_id)
        appointment = store.get_appointment(appointment_id)
        if appointment is None:
            raise NotFound('Appointment not found')

        with doctor_booking_lock(doctor.id):
            _validate_or_raise(store, doctor, fields, excluding_id=appointment_id)
            store.replace_appointment(appointment, fields)
    except SchedulingError as exc:
        raise HTTPException(status_code=exc.status_code, detail=exc.detail) from exc
    except SQLAlchemyError as exc:
        db.rollback()
        logger.exception('Failed to update appointment %s.', appointment_id)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail='Failed to update appointment',
        ) from exc

    logger.info('Updated appointment %s.', appointment_id)
    return MessageResponse(message='Appointment updated successfully')


@router.delete('/appointments/{appointment_id}', response_model=MessageResponse)
def cancel_appointment(appointment_id: int, db: Session = Depends(get_db)):
    ensure_database_ready()

    try:
        deleted = SqlAlchemyStore(db).delete_appointment(appointment_id)
    except SQLAlchemyError as exc:
        db.rollback()
        logger.exception('Failed to cancel appointment %s.', appointment_id)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail='Failed to cancel appointment',
        ) from exc

    if deleted:
        logger.info('Canceled appointment %s.', appointment_id)
    else:
        logger.info('Cancel requested for unknown appointment %s.', appointment_id)
    return MessageResponse(message='Appointment canceled')
