from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session
from typing import List

from ...core.database import get_db
from ...api.deps import get_admin_email
from ...services.doctor_service import DoctorService
from ...schemas.common import WriteResult
from ...schemas.doctor import DoctorCreate, DoctorResponse

# Every doctor route is admin only
router = APIRouter(
    prefix="/doctor",
    tags=["Doctors"],
    dependencies=[Depends(get_admin_email)]
)

@router.get("", response_model=List[DoctorResponse])
def list_doctors(db: Session = Depends(get_db)):
    return DoctorService(db).list_doctors()

@router.post("", response_model=WriteResult)
def add_doctor(doctor_data: DoctorCreate, db: Session = Depends(get_db)):
    return DoctorService(db).add_doctor(doctor_data)

@router.delete("/{email}", response_model=WriteResult)
def delete_doctor(email: str, db: Session = Depends(get_db)):
    return DoctorService(db).delete_doctor(email)
