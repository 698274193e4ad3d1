"""Doctor model definitions."""

from sqlalchemy import Column, Integer, String
from backend.database import Base


class Doctor(Base):
    """Represents a doctor who can be booked."""
    __tablename__ = "doctors"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String, nullable=False)
    specialization = Column(String, nullable=False)
    working_hours = Column(String, nullable=False)  # {"start": "HH:MM", "end": "HH:MM"}
    profile_image = Column(String, nullable=True)
    availability_status = Column(String, nullable=False, default="Available Today")
