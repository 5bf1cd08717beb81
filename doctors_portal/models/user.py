from sqlalchemy import Column, Integer, String, DateTime, JSON, Enum as SQLEnum
from sqlalchemy.sql import func
from ..core.database import Base
from ..core.security import UserRole

class User(Base):
    __tablename__ = "users"
    
    id = Column(Integer, primary_key=True, index=True)
    email = Column(String(255), unique=True, index=True, nullable=False)
    name = Column(String(255), nullable=True)
    role = Column(
        SQLEnum(UserRole, values_callable=lambda roles: [r.value for r in roles]),
        nullable=False,
        default=UserRole.NONE,
    )
    
    # Any other fields the client sends on upsert
    profile = Column(JSON, nullable=False, default=dict)
    
    # Timestamps
    created_at = Column(DateTime, server_default=func.now())
    updated_at = Column(DateTime, server_default=func.now(), onupdate=func.now())
    
    @property
    def is_admin(self) -> bool:
        return self.role == UserRole.ADMIN
    
    def __repr__(self):
        return f"<User(id={self.id}, email='{self.email}', role='{self.role}')>"
