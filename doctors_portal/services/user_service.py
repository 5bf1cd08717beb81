from sqlalchemy.orm import Session
from sqlalchemy.exc import IntegrityError
from typing import Any, Dict, List, Optional
import logging

from ..models.user import User
from ..core.security import UserRole
from ..schemas.common import WriteResult

logger = logging.getLogger(__name__)

# Keys a client may not set through the profile upsert
RESERVED_FIELDS = {"id", "email", "role"}

class UserService:
    def __init__(self, db: Session):
        self.db = db
    
    def list_users(self) -> List[User]:
        return self.db.query(User).order_by(User.id).all()
    
    def get_by_email(self, email: str) -> Optional[User]:
        return self.db.query(User).filter(User.email == email).first()
    
    def is_admin(self, email: str) -> bool:
        """Whether ``email`` holds the admin role; unknown users are not admins."""
        user = self.get_by_email(email)
        return bool(user and user.is_admin)
    
    def upsert_user(self, email: str, data: Dict[str, Any]) -> WriteResult:
        """Create or update the user keyed by ``email``."""
        fields = {k: v for k, v in data.items() if k not in RESERVED_FIELDS}
        name = fields.pop("name", None)
        
        user = self.get_by_email(email)
        if user is None:
            user = User(
                email=email,
                name=name,
                role=UserRole.NONE,
                profile=fields
            )
            self.db.add(user)
            try:
                self.db.commit()
            except IntegrityError:
                # A concurrent upsert created the same email first
                self.db.rollback()
                user = self.get_by_email(email)
                if user is None:
                    raise
                return self._update(user, name, fields)
            self.db.refresh(user)
            logger.info(f"Created user {email}")
            return WriteResult(matched_count=0, modified_count=0, upserted_id=user.id)
        
        return self._update(user, name, fields)
    
    def _update(self, user: User, name: Optional[str], fields: Dict[str, Any]) -> WriteResult:
        profile = {**(user.profile or {}), **fields}
        modified = False
        if name is not None and name != user.name:
            user.name = name
            modified = True
        if profile != (user.profile or {}):
            # Assign a new dict so the JSON column is flagged dirty
            user.profile = profile
            modified = True
        
        self.db.commit()
        return WriteResult(matched_count=1, modified_count=int(modified))
    
    def grant_admin(self, email: str) -> WriteResult:
        """Elevate ``email`` to the admin role."""
        user = self.get_by_email(email)
        if user is None:
            logger.warning(f"Admin grant for unknown user {email}")
            return WriteResult(matched_count=0, modified_count=0)
        
        if user.role == UserRole.ADMIN:
            return WriteResult(matched_count=1, modified_count=0)
        
        user.role = UserRole.ADMIN
        self.db.commit()
        logger.info(f"Granted admin role to {email}")
        return WriteResult(matched_count=1, modified_count=1)
