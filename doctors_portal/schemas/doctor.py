from pydantic import BaseModel, ConfigDict, Field, field_validator
from typing import Optional

from .common import check_email

class DoctorCreate(BaseModel):
    name: str = Field(..., min_length=1, max_length=255)
    email: str = Field(..., max_length=255)
    specialty: str = Field(..., min_length=1, max_length=100)
    img: Optional[str] = Field(None, max_length=500)

    @field_validator("email")
    @classmethod
    def email_is_valid(cls, value: str) -> str:
        return check_email(value)

class DoctorResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    email: str
    specialty: str
    img: Optional[str] = None
