from sqlalchemy import Column, Integer, String, DateTime, UniqueConstraint
from sqlalchemy.sql import func

from ..core.database import Base

class Booking(Base):
    __tablename__ = "bookings"
    __table_args__ = (
        # One booking per patient per treatment per day
        UniqueConstraint("treatment", "date", "patient", name="uq_booking_treatment_date_patient"),
    )
    
    id = Column(Integer, primary_key=True, index=True)
    
    # Appointment details
    treatment = Column(String(100), nullable=False)
    date = Column(String(50), nullable=False, index=True)
    slot = Column(String(50), nullable=False)
    
    # Patient
    patient = Column(String(255), nullable=False, index=True)
    patient_name = Column(String(255), nullable=False)
    phone = Column(String(30), nullable=True)
    
    created_at = Column(DateTime, server_default=func.now())
    
    def __repr__(self):
        return f"<Booking(id={self.id}, treatment='{self.treatment}', date='{self.date}', slot='{self.slot}', patient='{self.patient}')>"
