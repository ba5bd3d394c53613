"""Notification dispatcher: renders a mail template and sends it.

Runs outside any unit of work. ``dispatch`` never raises for delivery
problems: it logs them and returns False so the caller can report the
outcome without failing the operation that triggered the mail.
"""

import structlog

from notifications.channel import get_mailer
from notifications.templates import fill_placeholders, get_template
from ordering.exceptions import NotificationFailure

logger = structlog.get_logger(__name__)


class NotificationDispatcher:
    def __init__(self, site_email: str, site_name: str, mailer=None):
        self.site_email = site_email
        self.site_name = site_name
        self._mailer = mailer

    @property
    def mailer(self):
        return self._mailer or get_mailer()

    def deliver(self, kind: str, recipient: str, data: dict) -> dict:
        """Render ``kind`` against ``data`` and send it. Raises NotificationFailure."""
        if not recipient:
            raise NotificationFailure({"recipient": [f"No recipient for {kind} mail"]})
        if not data:
            raise NotificationFailure({"data": [f"No mail data for {kind} mail"]})
        try:
            template = get_template(kind)
        except ValueError as exc:
            raise NotificationFailure({"kind": [str(exc)]}) from exc

        data = dict(data)
        if data.get("status_comment"):
            data["status_comment"] = fill_placeholders(data["status_comment"], data)

        content = template.render(data)
        result = self.mailer.send(
            to=recipient.strip().lower(),
            subject=content["subject"],
            body=content["body"],
            sender=self.site_email,
            sender_name=self.site_name,
        )
        if result.get("status") != "sent":
            raise NotificationFailure({"recipient": [result.get("error") or "Unknown delivery error"]})
        return result

    def dispatch(self, kind: str, recipient: str, data: dict) -> bool:
        """Send a mail; True when it was handed to the mailer, False otherwise."""
        try:
            result = self.deliver(kind, recipient, data)
        except NotificationFailure as exc:
            logger.error("Notification failed", kind=kind, recipient=recipient, error=exc.messages)
            return False
        except Exception as exc:
            logger.error("Notification failed", kind=kind, recipient=recipient, error=str(exc))
            return False

        logger.info("Notification sent", kind=kind, recipient=recipient, message_id=result.get("message_id"))
        return True
