from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session
from typing import List

from ...core.database import get_db
from ...services.catalog_service import CatalogService
from ...schemas.service import ServiceResponse

router = APIRouter(tags=["Services"])

@router.get("/services", response_model=List[ServiceResponse])
def list_services(db: Session = Depends(get_db)):
    """List treatments with their slot templates."""
    return CatalogService(db).list_services()
