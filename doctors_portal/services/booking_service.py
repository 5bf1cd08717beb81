from sqlalchemy.orm import Session
from sqlalchemy.exc import IntegrityError
from dataclasses import dataclass
from typing import List, Optional
import logging

from ..models.booking import Booking
from ..models.service import Service
from ..schemas.booking import BookingCreate
from ..schemas.service import ServiceResponse
from .availability import compute_availability

logger = logging.getLogger(__name__)

@dataclass
class BookingOutcome:
    """Exactly one of ``created`` / ``duplicate`` is set."""
    created: Optional[Booking] = None
    duplicate: Optional[Booking] = None

    @property
    def is_duplicate(self) -> bool:
        return self.duplicate is not None

class BookingService:
    def __init__(self, db: Session):
        self.db = db
    
    def find_existing(self, treatment: str, date: str, patient: str) -> Optional[Booking]:
        """Find the booking holding the (treatment, date, patient) key."""
        return self.db.query(Booking).filter(
            Booking.treatment == treatment,
            Booking.date == date,
            Booking.patient == patient
        ).first()
    
    def try_create_booking(self, candidate: BookingCreate) -> BookingOutcome:
        """Insert ``candidate`` unless the patient already booked this treatment that day."""
        existing = self.find_existing(candidate.treatment, candidate.date, candidate.patient)
        if existing:
            logger.info(
                f"Duplicate booking for {candidate.patient}: "
                f"{candidate.treatment} on {candidate.date}"
            )
            return BookingOutcome(duplicate=existing)
        
        booking = Booking(
            treatment=candidate.treatment,
            date=candidate.date,
            slot=candidate.slot,
            patient=candidate.patient,
            patient_name=candidate.patient_name,
            phone=candidate.phone
        )
        self.db.add(booking)
        
        try:
            self.db.commit()
        except IntegrityError:
            # A concurrent identical request inserted first
            self.db.rollback()
            existing = self.find_existing(candidate.treatment, candidate.date, candidate.patient)
            if existing is None:
                raise
            logger.info(
                f"Booking for {candidate.patient} lost insert race: "
                f"{candidate.treatment} on {candidate.date}"
            )
            return BookingOutcome(duplicate=existing)
        
        self.db.refresh(booking)
        logger.info(f"Created booking {booking.id} for {booking.patient}")
        return BookingOutcome(created=booking)
    
    def list_for_patient(self, patient: str) -> List[Booking]:
        """List bookings made by ``patient``."""
        return self.db.query(Booking).filter(
            Booking.patient == patient
        ).order_by(Booking.id).all()
    
    def available_slots(self, date: str) -> List[ServiceResponse]:
        """Services with the slots still free on ``date``."""
        services = self.db.query(Service).order_by(Service.name).all()
        bookings = self.db.query(Booking).filter(Booking.date == date).all()
        return compute_availability(services, bookings, date)
