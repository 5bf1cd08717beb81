from sqlalchemy import Column, Integer, String, JSON

from ..core.database import Base

class Service(Base):
    __tablename__ = "services"
    
    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(100), unique=True, index=True, nullable=False)
    
    # Ordered time-of-day labels, e.g. "08.00 AM - 08.30 AM"
    slots = Column(JSON, nullable=False, default=list)
    
    def __repr__(self):
        return f"<Service(id={self.id}, name='{self.name}', slots={len(self.slots or [])})>"
