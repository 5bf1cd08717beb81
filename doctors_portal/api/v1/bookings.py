from fastapi import APIRouter, BackgroundTasks, Depends, Query
from sqlalchemy.orm import Session
from typing import List, Union

from ...core.database import get_db
from ...core.security import AuthorizationError
from ...api.deps import get_current_email, get_notifier
from ...services.booking_service import BookingService
from ...services.notification import EmailNotifier
from ...schemas.booking import BookingCreate, BookingCreated, BookingDuplicate, BookingResponse
from ...schemas.common import WriteResult
from ...schemas.service import ServiceResponse

router = APIRouter(tags=["Bookings"])

@router.get("/bookingInfo", response_model=List[BookingResponse])
def list_bookings(
    email: str = Query(...),
    db: Session = Depends(get_db),
    current_email: str = Depends(get_current_email)
):
    """List the caller's own bookings."""
    if email != current_email:
        raise AuthorizationError("Forbidden access")
    return BookingService(db).list_for_patient(email)

@router.post("/bookingInfo", response_model=Union[BookingCreated, BookingDuplicate])
def create_booking(
    booking_data: BookingCreate,
    background_tasks: BackgroundTasks,
    db: Session = Depends(get_db),
    notifier: EmailNotifier = Depends(get_notifier)
):
    """Book a slot unless the patient already booked this treatment that day."""
    outcome = BookingService(db).try_create_booking(booking_data)
    if outcome.is_duplicate:
        return BookingDuplicate(booking_info=BookingResponse.model_validate(outcome.duplicate))

    booking = BookingResponse.model_validate(outcome.created)
    background_tasks.add_task(notifier.send_appointment_email, booking)
    return BookingCreated(result=WriteResult(inserted_id=booking.id))

@router.get("/available", response_model=List[ServiceResponse])
def available_slots(
    date: str = Query(..., min_length=1),
    db: Session = Depends(get_db)
):
    """Slots still free on ``date`` for every service."""
    return BookingService(db).available_slots(date)
