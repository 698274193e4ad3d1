import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from backend.core import config
from backend.database import Base
from backend.models.appointment import Appointment
from backend.models.doctor import Doctor
from backend.scheduling.models import WorkingHours, parse_wall_clock


@pytest.fixture(autouse=True)
def fixed_scheduling_timezone(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(config, 'SCHEDULING_TIMEZONE', 'Asia/Kolkata')


@pytest.fixture
def scheduling_db():
    engine = create_engine(
        'sqlite://',
        connect_args={'check_same_thread': False},
        poolclass=StaticPool,
    )
    testing_session_local = sessionmaker(autocommit=False, autoflush=False, bind=engine)
    Base.metadata.create_all(bind=engine, tables=[Doctor.__table__, Appointment.__table__])

    db = testing_session_local()
    try:
        yield db
    finally:
        db.close()
        Base.metadata.drop_all(bind=engine, tables=[Appointment.__table__, Doctor.__table__])
        engine.dispose()


@pytest.fixture
def make_doctor(scheduling_db):
    def _make_doctor(
        name: str = 'Dr. Alice Smith',
        start: str = '09:00',
        end: str = '17:00',
        availability_status: str = 'Available Today',
    ) -> Doctor:
        doctor = Doctor(
            name=name,
            specialization='Cardiology',
            working_hours=WorkingHours(start=parse_wall_clock(start), end=parse_wall_clock(end)).to_json(),
            profile_image=None,
            availability_status=availability_status,
        )
        scheduling_db.add(doctor)
        scheduling_db.commit()
        scheduling_db.refresh(doctor)
        return doctor

    return _make_doctor
