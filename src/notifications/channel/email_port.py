"""Email channel port: abstract interface for email dispatch."""

from abc import ABC, abstractmethod


class EmailPort(ABC):
    """Abstract interface for email dispatch adapters."""

    @abstractmethod
    def send(
        self,
        to: str,
        subject: str,
        body: str,
        sender: str | None = None,
        sender_name: str | None = None,
    ) -> dict:
        """Send an email message from ``sender`` (shown as ``sender_name``).

        Returns:
            dict with keys: message_id, status ("sent" or "failed"), error (optional)
        """
        ...
