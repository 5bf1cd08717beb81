from email_validator import EmailNotValidError, validate_email
from pydantic import BaseModel
from typing import Optional

def check_email(value: str) -> str:
    """Reject malformed addresses but keep the one submitted as-is."""
    try:
        validate_email(value, check_deliverability=False)
    except EmailNotValidError as e:
        raise ValueError(str(e))
    return value

class WriteResult(BaseModel):
    """Outcome of a single write against the store."""
    acknowledged: bool = True
    matched_count: Optional[int] = None
    modified_count: Optional[int] = None
    upserted_id: Optional[int] = None
    inserted_id: Optional[int] = None
    deleted_count: Optional[int] = None
