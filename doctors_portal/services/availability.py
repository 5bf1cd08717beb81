"""Open slots per service for a given date."""

from collections import defaultdict
from typing import Dict, Iterable, List, Set

from ..schemas.service import ServiceResponse


def compute_availability(services: Iterable, bookings: Iterable, date: str) -> List[ServiceResponse]:
    """Return each service with the slots already booked on ``date`` removed.

    ``services`` items need ``name`` and ``slots`` (``id`` is carried over
    when present); ``bookings`` items need ``treatment``, ``date`` and
    ``slot``. Neither is modified: every returned item is a new object with
    its own slot list, in the order of the service's template.
    """
    booked: Dict[str, Set[str]] = defaultdict(set)
    for booking in bookings:
        if booking.date == date:
            booked[booking.treatment].add(booking.slot)

    available = []
    for service in services:
        taken = booked.get(service.name, set())
        remaining = []
        seen = set()
        for slot in service.slots:
            if slot in taken or slot in seen:
                continue
            seen.add(slot)
            remaining.append(slot)

        available.append(
            ServiceResponse(id=getattr(service, "id", None), name=service.name, slots=remaining)
        )

    return available
