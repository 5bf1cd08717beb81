from sqlalchemy.orm import Session
from sqlalchemy.exc import IntegrityError
from fastapi import HTTPException, status
from typing import List
import logging

from ..models.doctor import Doctor
from ..schemas.common import WriteResult
from ..schemas.doctor import DoctorCreate

logger = logging.getLogger(__name__)

class DoctorService:
    def __init__(self, db: Session):
        self.db = db
    
    def list_doctors(self) -> List[Doctor]:
        return self.db.query(Doctor).order_by(Doctor.id).all()
    
    def add_doctor(self, doctor_data: DoctorCreate) -> WriteResult:
        """Insert a doctor; the email must not be registered yet."""
        existing = self.db.query(Doctor).filter(
            Doctor.email == doctor_data.email
        ).first()
        
        if existing:
            raise HTTPException(
                status_code=status.HTTP_409_CONFLICT,
                detail="Doctor already registered"
            )
        
        doctor = Doctor(**doctor_data.model_dump())
        self.db.add(doctor)
        try:
            self.db.commit()
        except IntegrityError:
            self.db.rollback()
            raise HTTPException(
                status_code=status.HTTP_409_CONFLICT,
                detail="Doctor already registered"
            )
        self.db.refresh(doctor)
        
        logger.info(f"Added doctor {doctor.email}")
        return WriteResult(inserted_id=doctor.id)
    
    def delete_doctor(self, email: str) -> WriteResult:
        deleted = self.db.query(Doctor).filter(
            Doctor.email == email
        ).delete(synchronize_session=False)
        self.db.commit()
        
        if deleted:
            logger.info(f"Deleted doctor {email}")
        return WriteResult(deleted_count=deleted)
