"""Appointment confirmation emails.

Emails are sent through the SendGrid v3 mail API after a booking has been
stored. Delivery is best effort: failures are logged and never reach the
client that made the booking.
"""

from typing import Any, Dict, Optional
import logging

import httpx

from ..core.config import Settings
from ..schemas.booking import BookingResponse

logger = logging.getLogger(__name__)


def build_appointment_email(booking: BookingResponse) -> Dict[str, str]:
    """Render subject, plain text and HTML bodies for a booking."""
    summary = f"Your Appointment for {booking.treatment} is on {booking.date} at {booking.slot}"
    html = f"""
        <div>
        <p>Hello {booking.patient_name}</p>
        <h3>Your Appointment for {booking.treatment} is confirmed</h3>
        <p>Looking forward to seeing you on {booking.date} at {booking.slot}.</p>
        </div>
        """
    return {
        "to": booking.patient,
        "subject": summary,
        "text": summary,
        "html": html,
    }


class EmailNotifier:
    def __init__(self, settings: Settings, transport: Optional[httpx.AsyncBaseTransport] = None):
        self.settings = settings
        self.transport = transport

    @property
    def enabled(self) -> bool:
        return self.settings.email_enabled

    def _payload(self, email: Dict[str, str]) -> Dict[str, Any]:
        return {
            "personalizations": [{"to": [{"email": email["to"]}]}],
            "from": {"email": self.settings.EMAIL_SENDER},
            "subject": email["subject"],
            "content": [
                {"type": "text/plain", "value": email["text"]},
                {"type": "text/html", "value": email["html"]},
            ],
        }

    async def send_appointment_email(self, booking: BookingResponse) -> bool:
        """Send the confirmation for ``booking``; returns whether it was accepted."""
        if not self.enabled:
            logger.info(f"Email sender not configured, skipping confirmation for booking {booking.id}")
            return False

        email = build_appointment_email(booking)
        headers = {"Authorization": f"Bearer {self.settings.EMAIL_SENDER_KEY}"}

        try:
            async with httpx.AsyncClient(
                transport=self.transport,
                timeout=self.settings.EMAIL_TIMEOUT_SECONDS
            ) as client:
                response = await client.post(
                    self.settings.EMAIL_API_URL,
                    json=self._payload(email),
                    headers=headers
                )
                response.raise_for_status()
        except httpx.HTTPError as e:
            logger.error(f"Failed to send confirmation for booking {booking.id}: {str(e)}")
            return False

        logger.info(f"Confirmation sent to {booking.patient} for booking {booking.id}")
        return True
