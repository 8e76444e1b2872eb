"""Email channel port: abstract interface for email transport."""

from abc import ABC, abstractmethod
from dataclasses import dataclass


@dataclass(frozen=True)
class Attachment:
    filename: str
    content: bytes
    content_type: str = "application/pdf"


@dataclass(frozen=True)
class DeliveryResult:
    """Outcome of a send attempt: ``message_id`` on success, ``error`` on failure."""

    success: bool
    message_id: str | None = None
    error: str | None = None

    def as_dict(self) -> dict:
        if self.success:
            return {"success": True, "messageId": self.message_id}
        return {"success": False, "error": self.error}


class EmailPort(ABC):
    @abstractmethod
    def send(
        self,
        to: str,
        subject: str,
        html: str,
        text: str | None = None,
        attachments: list[Attachment] | None = None,
    ) -> DeliveryResult:
        """Send one message. Transport failures are reported in the result, not raised."""
        ...
