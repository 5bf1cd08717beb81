from pydantic import BaseModel, ConfigDict
from typing import List, Optional

class ServiceResponse(BaseModel):
    """A treatment and its slot labels.

    Returned both as the raw template (GET /services) and with booked slots
    removed for one date (GET /available).
    """
    model_config = ConfigDict(from_attributes=True)

    id: Optional[int] = None
    name: str
    slots: List[str]
