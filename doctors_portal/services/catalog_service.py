from sqlalchemy.orm import Session
from typing import Dict, List
import logging

from ..models.service import Service

logger = logging.getLogger(__name__)

DEFAULT_SLOTS = [
    "08.00 AM - 08.30 AM",
    "08.30 AM - 09.00 AM",
    "09.00 AM - 09.30 AM",
    "09.30 AM - 10.00 AM",
    "10.00 AM - 10.30 AM",
    "10.30 AM - 11.00 AM",
    "11.00 AM - 11.30 AM",
    "11.30 AM - 12.00 PM",
    "04.00 PM - 04.30 PM",
    "04.30 PM - 05.00 PM",
    "05.00 PM - 05.30 PM",
    "05.30 PM - 06.00 PM",
]

DEFAULT_SERVICES: List[Dict] = [
    {"name": "Teeth Orthodontics", "slots": DEFAULT_SLOTS},
    {"name": "Cosmetic Dentistry", "slots": DEFAULT_SLOTS},
    {"name": "Teeth Cleaning", "slots": DEFAULT_SLOTS},
    {"name": "Cavity Protection", "slots": DEFAULT_SLOTS},
    {"name": "Pediatric Dental", "slots": DEFAULT_SLOTS},
    {"name": "Oral Surgery", "slots": DEFAULT_SLOTS},
]

class CatalogService:
    """Read access to the treatment catalog."""

    def __init__(self, db: Session):
        self.db = db
    
    def list_services(self) -> List[Service]:
        return self.db.query(Service).order_by(Service.name).all()
    
    def add_services(self, services: List[Dict]) -> int:
        for data in services:
            self.db.add(Service(name=data["name"], slots=list(data["slots"])))
        self.db.commit()
        return len(services)
    
    def seed_defaults(self) -> int:
        """Insert the default catalog when no service exists yet."""
        if self.db.query(Service).first() is not None:
            return 0
        
        count = self.add_services(DEFAULT_SERVICES)
        logger.info(f"Seeded {count} default services")
        return count
