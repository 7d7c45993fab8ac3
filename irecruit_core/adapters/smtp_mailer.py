from __future__ import annotations
import smtplib
from email.message import EmailMessage
from typing import Optional

from irecruit_core.config.settings import AppConfig
from irecruit_core.utils.logging import get_logger

logger = get_logger(__name__)


class SMTPMailer:
    """Mailer SMTP synchrone; toute erreur d'envoi remonte à l'appelant."""

    def __init__(
        self,
        host: str = "localhost",
        port: int = 25,
        username: str = "",
        password: str = "",
        sender: str = "no-reply@irecruit.com",
        use_tls: bool = False,
        use_ssl: bool = False,
        timeout: float = 10.0,
    ) -> None:
        if use_tls and use_ssl:
            raise ValueError("Use TLS/Use SSL are mutually exclusive, only set one of those settings to True.")
        self.host = host
        self.port = port
        self.username = username
        self.password = password
        self.sender = sender
        self.use_tls = use_tls
        self.use_ssl = use_ssl
        self.timeout = timeout

    @classmethod
    def from_config(cls, cfg: AppConfig) -> "SMTPMailer":
        return cls(
            host=cfg.smtp_host,
            port=cfg.smtp_port,
            username=cfg.smtp_user,
            password=cfg.smtp_password,
            sender=cfg.smtp_sender,
            use_tls=cfg.smtp_use_tls,
            use_ssl=cfg.smtp_use_ssl,
        )

    def connection_class(self):
        return smtplib.SMTP_SSL if self.use_ssl else smtplib.SMTP

    def build_message(self, to: str, subject: str, html: str, text: Optional[str] = None) -> EmailMessage:
        msg = EmailMessage()
        msg["From"] = self.sender
        msg["To"] = to
        msg["Subject"] = subject
        msg.set_content(text or "This message requires an HTML-capable email client.")
        msg.add_alternative(html, subtype="html")
        return msg

    def send_email(self, to: str, subject: str, html: str) -> None:
        msg = self.build_message(to, subject, html)
        with self.connection_class()(self.host, self.port, timeout=self.timeout) as server:
            if self.use_tls:
                server.starttls()
            if self.username:
                server.login(self.username, self.password)
            server.send_message(msg)
        logger.info("email_sent", extra={"extra": {"to": to, "subject": subject}})
