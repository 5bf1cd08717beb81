from pydantic import BaseModel, ConfigDict, Field, field_validator
from typing import Optional

from .common import WriteResult, check_email

class BookingCreate(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    # Lengths follow the booking table columns
    treatment: str = Field(..., min_length=1, max_length=100)
    date: str = Field(..., min_length=1, max_length=50)
    slot: str = Field(..., min_length=1, max_length=50)
    patient: str = Field(..., max_length=255)
    patient_name: str = Field(..., alias="patientName", min_length=1, max_length=255)
    phone: Optional[str] = Field(None, max_length=30)

    @field_validator("patient")
    @classmethod
    def patient_email_is_valid(cls, value: str) -> str:
        return check_email(value)

class BookingResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True, populate_by_name=True)

    id: int
    treatment: str
    date: str
    slot: str
    patient: str
    patient_name: str = Field(..., alias="patientName")
    phone: Optional[str] = None

class BookingCreated(BaseModel):
    success: bool = True
    result: WriteResult

class BookingDuplicate(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    success: bool = False
    booking_info: BookingResponse = Field(..., alias="bookingInfo")
