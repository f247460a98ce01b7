"""
SMTP e-mail sender.

Sends HTML mail through a configured SMTP relay. The blocking smtplib
conversation runs in a worker thread with a bounded socket timeout.
"""

import asyncio
import logging
import smtplib
from email.mime.multipart import MIMEMultipart
from email.mime.text import MIMEText
from email.utils import make_msgid
from typing import Optional

from src.app.services.email_sender import EmailSender, EmailSendResult

logger = logging.getLogger(__name__)


class SmtpEmailSender(EmailSender):
    """EmailSender backed by smtplib"""

    def __init__(
        self,
        host: str,
        port: int = 587,
        username: Optional[str] = None,
        password: Optional[str] = None,
        use_tls: bool = True,
        from_address: Optional[str] = None,
        timeout: float = 10.0,
    ):
        self.host = host
        self.port = port
        self.username = username
        self.password = password
        self.use_tls = use_tls
        self.from_address = from_address or username
        self.timeout = timeout

    @classmethod
    def from_config(cls, config) -> "SmtpEmailSender":
        return cls(
            host=config.SMTP_HOST,
            port=config.SMTP_PORT,
            username=config.SMTP_USERNAME,
            password=config.SMTP_PASSWORD,
            use_tls=config.SMTP_USE_TLS,
            from_address=config.SMTP_FROM,
            timeout=config.SMTP_TIMEOUT_SECONDS,
        )

    async def send(self, to: str, subject: str, html_body: str) -> EmailSendResult:
        if not self.host or not self.from_address:
            logger.warning(f"SMTP not configured, cannot send '{subject}' to {to}")
            return EmailSendResult(success=False, error="Email service is not configured")

        message = MIMEMultipart("alternative")
        message["Subject"] = subject
        message["From"] = self.from_address
        message["To"] = to
        message["Message-ID"] = make_msgid()
        message.attach(MIMEText(html_body, "html", "utf-8"))

        try:
            await asyncio.to_thread(self._deliver, message, to)
        except (smtplib.SMTPException, OSError) as exc:
            logger.error(f"SMTP delivery to {to} failed: {exc}")
            return EmailSendResult(success=False, error=str(exc))

        logger.info(f"Email '{subject}' sent to {to}")
        return EmailSendResult(success=True, message_id=message["Message-ID"])

    def _deliver(self, message: MIMEMultipart, to: str) -> None:
        with smtplib.SMTP(self.host, self.port, timeout=self.timeout) as server:
            if self.use_tls:
                server.starttls()
            if self.username and self.password:
                server.login(self.username, self.password)
            server.sendmail(self.from_address, [to], message.as_string())
