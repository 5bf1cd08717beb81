from datetime import datetime, timedelta, timezone
from typing import Optional
from jose import ExpiredSignatureError, JWTError, jwt
from fastapi import HTTPException, status
from fastapi.security import HTTPBearer
from pydantic import BaseModel, ValidationError
from enum import Enum

from .config import settings as default_settings, Settings

# Bearer credentials; a missing header is reported by the auth dependencies
security = HTTPBearer(auto_error=False)

class UserRole(str, Enum):
    NONE = "none"
    ADMIN = "admin"

class TokenPayload(BaseModel):
    email: str
    iat: Optional[int] = None
    exp: Optional[int] = None

# Token verification errors
class TokenError(Exception):
    """Base class for identity tokens that cannot be accepted."""

class InvalidTokenError(TokenError):
    """Bad signature, malformed token or missing email claim."""

class TokenExpiredError(TokenError):
    """Token signature is valid but its expiry has passed."""

# JWT utilities
def create_access_token(
    email: str,
    expires_delta: Optional[timedelta] = None,
    settings: Optional[Settings] = None,
) -> str:
    """Create a signed identity token for ``email``."""
    settings = settings or default_settings
    issued_at = datetime.now(timezone.utc)

    if expires_delta is None:
        expires_delta = timedelta(days=settings.ACCESS_TOKEN_EXPIRE_DAYS)

    to_encode = {
        "email": email,
        "iat": issued_at,
        "exp": issued_at + expires_delta,
    }

    return jwt.encode(
        to_encode,
        settings.ACCESS_TOKEN_SECRET,
        algorithm=settings.ALGORITHM
    )

def decode_token(token: str, settings: Optional[Settings] = None) -> TokenPayload:
    """Verify signature and expiry, returning the decoded claims."""
    settings = settings or default_settings
    try:
        payload = jwt.decode(
            token,
            settings.ACCESS_TOKEN_SECRET,
            algorithms=[settings.ALGORITHM]
        )
    except ExpiredSignatureError as e:
        raise TokenExpiredError("Token has expired") from e
    except JWTError as e:
        raise InvalidTokenError(str(e)) from e

    try:
        return TokenPayload(**payload)
    except ValidationError as e:
        raise InvalidTokenError("Token carries no email claim") from e

def verify_token(token: str, settings: Optional[Settings] = None) -> str:
    """Verify a token and return the email it asserts."""
    return decode_token(token, settings).email

# Security exceptions
class AuthenticationError(HTTPException):
    def __init__(self, detail: str = "Unauthorized access"):
        super().__init__(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=detail,
            headers={"WWW-Authenticate": "Bearer"},
        )

class AuthorizationError(HTTPException):
    def __init__(self, detail: str = "Forbidden access"):
        super().__init__(
            status_code=status.HTTP_403_FORBIDDEN,
            detail=detail,
        )
