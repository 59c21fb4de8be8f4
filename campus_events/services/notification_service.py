"""
Outbound notifications.

Mail delivery is behind ``EmailSender`` so a real transport can be swapped in.
The default sender only logs. A failed send is logged and never fails the
request that triggered it.
"""

import logging
from typing import Optional, Protocol

from campus_events.core.config import settings

logger = logging.getLogger(__name__)


class EmailSender(Protocol):
    def send(self, to: str, subject: str, body: str) -> None:
        ...


class LoggingEmailSender:
    """Writes the message to the log instead of sending it"""

    def send(self, to: str, subject: str, body: str) -> None:
        logger.info("Email to %s: %s", to, subject)
        logger.debug("Email body:\n%s", body)


class NotificationService:
    def __init__(self, sender: Optional[EmailSender] = None):
        self.sender = sender or LoggingEmailSender()

    def _deliver(self, to: str, subject: str, body: str) -> bool:
        try:
            self.sender.send(to, subject, body)
            return True
        except Exception as exc:
            logger.error("Failed to send '%s' to %s: %s", subject, to, exc)
            return False

    def send_registration_confirmation(self, student, event) -> bool:
        body = (
            f"Hi {student.name},\n\n"
            f"You are registered for {event.title} on {event.date.isoformat()} "
            f"at {event.location}.\n"
        )
        return self._deliver(student.email, f"Registration confirmed: {event.title}", body)

    def send_password_reset(self, email: str, reset_token: str) -> bool:
        link = f"{settings.FRONTEND_URL}/reset-password?token={reset_token}"
        body = (
            "A password reset was requested for your account.\n\n"
            f"Reset link: {link}\n\n"
            "If you did not request this, ignore this email.\n"
        )
        return self._deliver(email, "Password reset", body)


notification_service = NotificationService()
