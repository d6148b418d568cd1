"""
Email Sender

Sends notification emails via SMTP using aiosmtplib.
"""
import logging
import re
from email.mime.text import MIMEText
from email.mime.multipart import MIMEMultipart

import aiosmtplib

from .base_sender import BaseSender, EmailMessage, SendResult

logger = logging.getLogger("byte.notifications.email")

_TAG_PATTERN = re.compile(r"<[^>]*>")


def mask_email(address: str) -> str:
    """Mask an address for log output: ab***@example.com"""
    return re.sub(r"^(.{2})(.*)(@.*)$", r"\1***\3", address) if address else "(none)"


class EmailSender(BaseSender):
    """Send messages via SMTP"""

    def __init__(
        self,
        smtp_host: str = "",
        smtp_port: int = 587,
        smtp_user: str = "",
        smtp_password: str = "",
        use_tls: bool = False,
        from_email: str = "",
        from_name: str = "Byte",
        timeout: float = 30.0,
    ):
        self.smtp_host = smtp_host
        self.smtp_port = smtp_port
        self.smtp_user = smtp_user
        self.smtp_password = smtp_password
        self.use_tls = use_tls
        self.from_email = from_email or smtp_user
        self.from_name = from_name
        self.timeout = timeout

    @property
    def is_configured(self) -> bool:
        return bool(self.smtp_host and self.smtp_user and self.smtp_password)

    async def send(self, message: EmailMessage) -> SendResult:
        """Send one email; transport errors are reported, not raised"""
        if not message.to:
            return SendResult(success=False, error="No recipient address")

        if not self.is_configured:
            return SendResult(success=False, error="SMTP not configured")

        try:
            msg = MIMEMultipart("alternative")
            msg["From"] = f"{self.from_name} <{self.from_email}>"
            msg["To"] = message.to
            msg["Subject"] = message.subject

            text = message.text or _TAG_PATTERN.sub("", message.html)
            msg.attach(MIMEText(text, "plain", "utf-8"))
            msg.attach(MIMEText(message.html, "html", "utf-8"))

            await aiosmtplib.send(
                msg,
                hostname=self.smtp_host,
                port=self.smtp_port,
                username=self.smtp_user,
                password=self.smtp_password,
                use_tls=self.use_tls,
                start_tls=not self.use_tls,
                timeout=self.timeout,
            )

            logger.info(f"Email sent to {mask_email(message.to)}")
            return SendResult(success=True)

        except (aiosmtplib.SMTPException, OSError) as e:
            logger.error(f"Email send error for {mask_email(message.to)}: {e}")
            return SendResult(success=False, error=str(e))

    async def close(self):
        # aiosmtplib.send opens and closes its own connection per message
        pass
