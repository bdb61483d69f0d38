"""Alert notification sinks."""

from __future__ import annotations

import html
import logging
import smtplib
from abc import ABC, abstractmethod
from email.mime.multipart import MIMEMultipart
from email.mime.text import MIMEText

from kumotracker.config import TrackerConfig
from kumotracker.errors import NotificationError
from kumotracker.models.ichimoku import IchimokuSnapshot
from kumotracker.models.signal import Signal

logger = logging.getLogger(__name__)


class Notifier(ABC):
    """Abstract notification sink accepting a subject and a plain-text body."""

    @abstractmethod
    def send(self, subject: str, body: str) -> None:
        """Deliver the message.

        Raises:
            NotificationError: Delivery failed.
        """
        ...


class LogNotifier(Notifier):
    """Fallback sink used when SMTP is not configured: logs instead of sending."""

    def __init__(self, recipient: str | None = None) -> None:
        self.recipient = recipient
        self.sent: list[tuple[str, str]] = []

    def send(self, subject: str, body: str) -> None:
        logger.warning("SMTP credentials missing. Skipping email notification.")
        logger.info(
            "Unsent alert to %s\nSubject: %s\n%s",
            self.recipient or "<no recipient>", subject, body,
        )
        self.sent.append((subject, body))


class SmtpNotifier(Notifier):
    """Send alerts by e-mail over SMTP with STARTTLS."""

    def __init__(
        self,
        host: str,
        port: int,
        username: str,
        password: str,
        recipient: str,
        sender_name: str = "Ichimoku Tracker",
        timeout: float = 30.0,
    ) -> None:
        self.host = host
        self.port = port
        self.username = username
        self.password = password
        self.recipient = recipient
        self.sender_name = sender_name
        self.timeout = timeout

    def send(self, subject: str, body: str) -> None:
        msg = MIMEMultipart("alternative")
        msg["Subject"] = subject
        msg["From"] = f'"{self.sender_name}" <{self.username}>'
        msg["To"] = self.recipient
        msg.attach(MIMEText(body, "plain"))
        msg.attach(MIMEText(f"<p>{html.escape(body).replace(chr(10), '<br>')}</p>", "html"))

        try:
            with smtplib.SMTP(self.host, self.port, timeout=self.timeout) as server:
                server.starttls()
                server.login(self.username, self.password)
                server.sendmail(self.username, [self.recipient], msg.as_string())
        except (smtplib.SMTPException, OSError) as exc:
            raise NotificationError(f"Failed to send email: {exc}") from exc
        logger.info("Alert e-mail sent to %s", self.recipient)


def build_notifier(config: TrackerConfig) -> Notifier:
    """Return an SMTP notifier when credentials are set, else a log-only one."""
    recipient = config.recipient or config.smtp_user
    if not config.smtp_configured or not recipient:
        return LogNotifier(recipient)
    return SmtpNotifier(
        host=config.smtp_host,
        port=config.smtp_port,
        username=config.smtp_user,  # type: ignore[arg-type]
        password=config.smtp_password,  # type: ignore[arg-type]
        recipient=recipient,
        sender_name=config.sender_name,
        timeout=config.request_timeout,
    )


def format_alert(ticker: str, signal: Signal, snapshot: IchimokuSnapshot) -> tuple[str, str]:
    """Build the alert subject and body."""
    subject = f"{signal.value} Signal Alert: {ticker}"
    body = (
        f"Ichimoku {signal.value} signal detected for {ticker} on the daily timeframe.\n\n"
        f"Metrics:\n"
        f"- Price: ${snapshot.price:.2f}\n"
        f"- Tenkan-Sen: {snapshot.tenkan:.2f}\n"
        f"- Kijun-Sen: {snapshot.kijun:.2f}\n"
        f"- Senkou Span A: {snapshot.senkou_a:.2f}\n"
        f"- Senkou Span B: {snapshot.senkou_b:.2f}\n\n"
        f"Status: Active"
    )
    return subject, body
