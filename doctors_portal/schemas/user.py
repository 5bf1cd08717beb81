from pydantic import BaseModel, ConfigDict, Field
from typing import Any, Dict, Optional

from ..core.security import UserRole
from .common import WriteResult

class UserUpsert(BaseModel):
    """Body of PUT /user/{email}; unknown fields are kept in the profile."""
    model_config = ConfigDict(extra="allow")

    name: Optional[str] = None

class UserResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    email: str
    name: Optional[str] = None
    role: UserRole
    profile: Dict[str, Any] = Field(default_factory=dict)

class UpsertUserResponse(BaseModel):
    result: WriteResult
    token: str

class AdminStatus(BaseModel):
    admin: bool
