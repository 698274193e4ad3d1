"""Appointment model definitions."""

from sqlalchemy import Column, Integer, DateTime, ForeignKey, String
from backend.database import Base


class Appointment(Base):
    """Represents a booked appointment with a doctor."""
    __tablename__ = "appointments"

    id = Column(Integer, primary_key=True)
    doctor_id = Column(Integer, ForeignKey("doctors.id"), index=True, nullable=False)
    start_time = Column(DateTime, nullable=False)  # wall clock in the scheduling timezone
    duration_minutes = Column(Integer, nullable=False)
    appointment_type = Column(String)
    patient_name = Column(String)
    patient_email = Column(String)
    notes = Column(String, nullable=True)
