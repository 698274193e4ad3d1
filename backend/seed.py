"""Seed the default doctor roster.

Usage:
    python -m backend.seed
"""
import logging
import sys

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from backend.database import SessionLocal, engine
from backend.models import appointment
from backend.models.doctor import Doctor
from backend.scheduling.models import AvailabilityStatus, WorkingHours, parse_wall_clock

logger = logging.getLogger(__name__)

DEFAULT_DOCTORS = [
    {
        'name': 'Dr. Alice Smith',
        'specialization': 'Cardiology',
        'working_hours': ('08:00', '16:00'),
        'profile_image': 'https://i.pravatar.cc/150?img=1',
        'availability_status': AvailabilityStatus.AVAILABLE_TODAY,
    },
    {
        'name': 'Dr. Bob Johnson',
        'specialization': 'Neurology',
        'working_hours': ('10:00', '18:00'),
        'profile_image': 'https://i.pravatar.cc/150?img=2',
        'availability_status': AvailabilityStatus.AVAILABLE_TODAY,
    },
    {
        'name': 'Dr. Charlie Brown',
        'specialization': 'Pediatrics',
        'working_hours': ('09:00', '17:00'),
        'profile_image': 'https://i.pravatar.cc/150?img=3',
        'availability_status': AvailabilityStatus.FULLY_BOOKED,
    },
    {
        'name': 'Dr. Sarah Wilson',
        'specialization': 'Dermatology',
        'working_hours': ('08:30', '16:30'),
        'profile_image': 'https://i.pravatar.cc/150?img=4',
        'availability_status': AvailabilityStatus.ON_LEAVE,
    },
    {
        'name': 'Dr. Michael Chen',
        'specialization': 'Orthopedics',
        'working_hours': ('09:30', '17:30'),
        'profile_image': 'https://i.pravatar.cc/150?img=5',
        'availability_status': AvailabilityStatus.AVAILABLE_TODAY,
    },
]


def seed_default_doctors(db: Session) -> int:
    """Insert the default roster when the doctor table is empty. Returns the number added."""
    if db.query(Doctor).first() is not None:
        return 0

    for entry in DEFAULT_DOCTORS:
        start, end = entry['working_hours']
        hours = WorkingHours(start=parse_wall_clock(start), end=parse_wall_clock(end))
        db.add(
            Doctor(
                name=entry['name'],
                specialization=entry['specialization'],
                working_hours=hours.to_json(),
                profile_image=entry['profile_image'],
                availability_status=entry['availability_status'].value,
            )
        )
    db.commit()
    logger.info('Seeded %d default doctors.', len(DEFAULT_DOCTORS))
    return len(DEFAULT_DOCTORS)


def main() -> None:
    logging.basicConfig(level=logging.INFO)
    appointment.Base.metadata.create_all(bind=engine)
    db = SessionLocal()
    try:
        added = seed_default_doctors(db)
    except SQLAlchemyError:
        logger.exception('Seeding failed. Check DATABASE_URL.')
        sys.exit(1)
    finally:
        db.close()
    if not added:
        print('Doctors already present; nothing to seed.')


if __name__ == "__main__":
    main()
