"""SMTP email adapter for production delivery."""

import os
import smtplib
from email.message import EmailMessage
from email.utils import make_msgid

import structlog

from storefront.notifications.channel.email_port import Attachment, DeliveryResult, EmailPort

logger = structlog.get_logger(__name__)


class SmtpEmailAdapter(EmailPort):
    def __init__(
        self,
        host: str,
        port: int = 587,
        username: str | None = None,
        password: str | None = None,
        use_tls: bool = True,
        sender: str = "GameBazaar <no-reply@gamebazaar.local>",
        timeout: float = 10.0,
    ) -> None:
        self.host = host
        self.port = port
        self.username = username
        self.password = password
        self.use_tls = use_tls
        self.sender = sender
        self.timeout = timeout

    @classmethod
    def from_env(cls) -> "SmtpEmailAdapter":
        return cls(
            host=os.getenv("SMTP_HOST", "localhost"),
            port=int(os.getenv("SMTP_PORT", "587")),
            username=os.getenv("SMTP_USERNAME"),
            password=os.getenv("SMTP_PASSWORD"),
            use_tls=os.getenv("SMTP_USE_TLS", "true").lower() in ("1", "true", "yes"),
            sender=os.getenv("EMAIL_FROM", "GameBazaar <no-reply@gamebazaar.local>"),
        )

    def build_message(
        self,
        to: str,
        subject: str,
        html: str,
        text: str | None = None,
        attachments: list[Attachment] | None = None,
    ) -> EmailMessage:
        message = EmailMessage()
        message["From"] = self.sender
        message["To"] = to
        message["Subject"] = subject
        message["Message-ID"] = make_msgid(domain="gamebazaar.local")
        message.set_content(text or "")
        message.add_alternative(html, subtype="html")

        for attachment in attachments or []:
            maintype, _, subtype = attachment.content_type.partition("/")
            message.add_attachment(
                attachment.content,
                maintype=maintype,
                subtype=subtype,
                filename=attachment.filename,
            )
        return message

    def send(
        self,
        to: str,
        subject: str,
        html: str,
        text: str | None = None,
        attachments: list[Attachment] | None = None,
    ) -> DeliveryResult:
        message = self.build_message(to, subject, html, text, attachments)
        try:
            with smtplib.SMTP(self.host, self.port, timeout=self.timeout) as smtp:
                if self.use_tls:
                    smtp.starttls()
                if self.username:
                    smtp.login(self.username, self.password or "")
                smtp.send_message(message)
        except (smtplib.SMTPException, OSError) as exc:
            logger.warning("smtp_send_failed", to=to, subject=subject, error=str(exc))
            return DeliveryResult(success=False, error=str(exc))

        return DeliveryResult(success=True, message_id=message["Message-ID"])
