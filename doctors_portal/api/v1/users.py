from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session
from typing import List

from ...core.config import Settings
from ...core.database import get_db
from ...core.security import create_access_token
from ...api.deps import get_admin_email, get_current_email, get_settings
from ...services.user_service import UserService
from ...schemas.common import WriteResult
from ...schemas.user import AdminStatus, UpsertUserResponse, UserResponse, UserUpsert

router = APIRouter(tags=["Users"])

@router.get("/user", response_model=List[UserResponse])
def list_users(
    db: Session = Depends(get_db),
    _: str = Depends(get_current_email)
):
    """List all users."""
    return UserService(db).list_users()

@router.get("/admin/{email}", response_model=AdminStatus)
def check_admin(
    email: str,
    db: Session = Depends(get_db),
    _: str = Depends(get_current_email)
):
    """Tell whether ``email`` holds the admin role."""
    return AdminStatus(admin=UserService(db).is_admin(email))

@router.put("/user/admin/{email}", response_model=WriteResult)
def make_admin(
    email: str,
    db: Session = Depends(get_db),
    _: str = Depends(get_admin_email)
):
    """Grant the admin role (admin only)."""
    return UserService(db).grant_admin(email)

@router.put("/user/{email}", response_model=UpsertUserResponse)
def upsert_user(
    email: str,
    user_data: UserUpsert,
    db: Session = Depends(get_db),
    settings: Settings = Depends(get_settings)
):
    """Create or update a user and issue a fresh identity token."""
    result = UserService(db).upsert_user(email, user_data.model_dump())
    token = create_access_token(email, settings=settings)
    return UpsertUserResponse(result=result, token=token)
