import logging
from datetime import datetime, time

from fastapi import APIRouter, Depends, HTTPException, Query, status
from pydantic import BaseModel, field_validator, model_validator
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from backend.core import config
from backend.database import get_db
from backend.models.doctor import Doctor
from backend.scheduling.availability import coerce_duration, get_availability, parse_slot_date
from backend.scheduling.clock import now_in
from backend.scheduling.errors import SchedulingError
from backend.scheduling.models import AvailabilityStatus, BookedInterval, WorkingHours, parse_wall_clock
from backend.store import SqlAlchemyStore

router = APIRouter(tags=['doctors'])

logger = logging.getLogger(__name__)


class CreateDoctorRequest(BaseModel):
    name: str
    specialization: str
    working_start: time
    working_end: time
    profile_image: str | None = None
    availability_status: AvailabilityStatus = AvailabilityStatus.AVAILABLE_TODAY

    @field_validator('name', 'specialization')
    @classmethod
    def validate_required_text(cls, value: str) -> str:
        normalized = value.strip()
        if not normalized:
            raise ValueError('All fields are required (name, specialization, working_start, working_end)')
        return normalized

    @field_validator('working_start', 'working_end')
    @classmethod
    def validate_wall_clock(cls, value: time) -> time:
        # Stored working hours keep minute precision only.
        return parse_wall_clock(value)

    @field_validator('profile_image')
    @classmethod
    def validate_profile_image(cls, value: str | None) -> str | None:
        if value is None:
            return None
        normalized = value.strip()
        return normalized or None

    @model_validator(mode='after')
    def validate_working_hours(self) -> 'CreateDoctorRequest':
        if self.working_start >= self.working_end:
            raise ValueError('Working hours start must be before end.')
        return self


class DoctorResponse(BaseModel):
    id: int
    name: str
    specialization: str
    working_hours: str
    profile_image: str | None = None
    availability_status: str

    class Config:
        from_attributes = True


class CreateDoctorResponse(BaseModel):
    id: int
    message: str


class WorkingHoursResponse(BaseModel):
    start: str
    end: str


class SlotsResponse(BaseModel):
    availableSlots: list[str]
    workingHours: WorkingHoursResponse
    message: str | None = None


def current_time() -> datetime:
    return now_in(config.get_scheduling_timezone())


@router.get('/doctors', response_model=list[DoctorResponse])
def list_doctors(db: Session = Depends(get_db)):
    try:
        return SqlAlchemyStore(db).list_doctors()
    except SQLAlchemyError as exc:
        logger.exception('Failed to load doctors.')
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail='Failed to load doctors',
        ) from exc


@router.post('/doctors', response_model=CreateDoctorResponse, status_code=status.HTTP_201_CREATED)
def create_doctor(data: CreateDoctorRequest, db: Session = Depends(get_db)):
    working_hours = WorkingHours(start=data.working_start, end=data.working_end)

    try:
        doctor = SqlAlchemyStore(db).add_doctor(
            Doctor(
                name=data.name,
                specialization=data.specialization,
                working_hours=working_hours.to_json(),
                profile_image=data.profile_image,
                availability_status=data.availability_status.value,
            )
        )
    except SQLAlchemyError as exc:
        db.rollback()
        logger.exception('Failed to add doctor %s.', data.name)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail='Failed to add doctor',
        ) from exc

    logger.info('Added doctor %s (%s).', doctor.id, doctor.specialization)
    return CreateDoctorResponse(id=doctor.id, message='Doctor added successfully')


@router.get('/doctors/{doctor_id}/slots', response_model=SlotsResponse, response_model_exclude_none=True)
def list_doctor_slots(
    doctor_id: int,
    date: str | None = Query(default=None),
    duration: str | None = Query(default=None),
    db: Session = Depends(get_db),
):
    try:
        slot_date = parse_slot_date(date)
        duration_minutes = coerce_duration(duration)

        store = SqlAlchemyStore(db)
        doctor = store.get_doctor(doctor_id)
        booked_intervals = []
        if doctor is not None:
            booked_intervals = [
                BookedInterval(start=appointment.start_time, duration_minutes=appointment.duration_minutes)
                for appointment in store.list_appointments_for_doctor(doctor_id, on_date=slot_date)
            ]

        result = get_availability(
            doctor,
            slot_date,
            duration_minutes,
            current_time(),
            booked_intervals,
            config.get_scheduling_timezone(),
        )
    except SchedulingError as exc:
        raise HTTPException(status_code=exc.status_code, detail=exc.detail) from exc
    except SQLAlchemyError as exc:
        logger.exception('Failed to load slots for doctor %s.', doctor_id)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail='Failed to load slots',
        ) from exc

    return SlotsResponse(
        availableSlots=result.slot_labels(),
        workingHours=WorkingHoursResponse(**result.working_hours.to_dict()),
        message=result.message,
    )
