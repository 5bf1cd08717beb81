from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials
from sqlalchemy.orm import Session
from typing import Optional

from ..core.config import Settings
from ..core.database import get_db
from ..core.security import (
    security, verify_token, AuthenticationError,
    AuthorizationError, TokenError
)
from ..models.user import User
from ..services.notification import EmailNotifier
from ..services.user_service import UserService

def get_settings(request: Request) -> Settings:
    """Settings of the application serving this request."""
    return request.app.state.settings

def get_notifier(settings: Settings = Depends(get_settings)) -> EmailNotifier:
    return EmailNotifier(settings)

# Authorization gate
def require_authenticated(token: Optional[str], settings: Optional[Settings] = None) -> str:
    """Return the email asserted by ``token``.

    No token is a 401; a token that fails signature or expiry checks is a 403.
    """
    if not token:
        raise AuthenticationError("Unauthorized access")

    try:
        return verify_token(token, settings)
    except TokenError:
        raise AuthorizationError("Forbidden access")

def require_admin(email: str, db: Session) -> User:
    """Return the user for ``email`` if it holds the admin role."""
    user = UserService(db).get_by_email(email)
    if user is None or not user.is_admin:
        raise AuthorizationError("Forbidden access")
    return user

async def get_current_email(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
    settings: Settings = Depends(get_settings)
) -> str:
    """Extract and verify the bearer token from the Authorization header."""
    token = credentials.credentials if credentials else None
    return require_authenticated(token, settings)

def get_admin_email(
    email: str = Depends(get_current_email),
    db: Session = Depends(get_db)
) -> str:
    """Require a valid token whose owner is an admin."""
    require_admin(email, db)
    return email
