"""Tests for notification sinks."""

import smtplib
from datetime import date
from unittest.mock import patch

import pytest

from kumotracker.config import TrackerConfig
from kumotracker.errors import NotificationError
from kumotracker.models.ichimoku import IchimokuSnapshot
from kumotracker.models.signal import Signal
from kumotracker.notify import LogNotifier, SmtpNotifier, build_notifier, format_alert


@pytest.fixture
def snapshot() -> IchimokuSnapshot:
    return IchimokuSnapshot(
        tenkan=144.0, kijun=127.0, senkou_a=100.0, senkou_b=100.0,
        price=152.0, date=date(2024, 3, 20),
    )


def _smtp_notifier() -> SmtpNotifier:
    return SmtpNotifier(
        host="smtp.example.com", port=587,
        username="bot@example.com", password="secret",
        recipient="me@example.com",
    )


class TestFormatAlert:
    def test_subject_and_body(self, snapshot):
        subject, body = format_alert("GLD", Signal.BUY, snapshot)
        assert subject == "BUY Signal Alert: GLD"
        assert "Ichimoku BUY signal detected for GLD" in body
        assert "- Price: $152.00" in body
        assert "- Kijun-Sen: 127.00" in body
        assert "- Senkou Span B: 100.00" in body
        assert body.endswith("Status: Active")


class TestBuildNotifier:
    def test_unconfigured_falls_back_to_log(self):
        assert isinstance(build_notifier(TrackerConfig()), LogNotifier)

    def test_configured(self):
        config = TrackerConfig(smtp_user="bot@example.com", smtp_password="pw")
        notifier = build_notifier(config)
        assert isinstance(notifier, SmtpNotifier)
        assert notifier.recipient == "bot@example.com"

    def test_explicit_recipient(self):
        config = TrackerConfig(
            smtp_user="bot@example.com", smtp_password="pw", recipient="me@example.com",
        )
        assert build_notifier(config).recipient == "me@example.com"  # type: ignore[attr-defined]


class TestLogNotifier:
    def test_records_without_raising(self):
        notifier = LogNotifier("me@example.com")
        notifier.send("subject", "body")
        assert notifier.sent == [("subject", "body")]


class TestSmtpNotifier:
    def test_sends(self):
        with patch("kumotracker.notify.smtplib.SMTP") as smtp_cls:
            _smtp_notifier().send("BUY Signal Alert: GLD", "line1\nline2")
        smtp_cls.assert_called_once_with("smtp.example.com", 587, timeout=30.0)
        server = smtp_cls.return_value.__enter__.return_value
        server.starttls.assert_called_once()
        server.login.assert_called_once_with("bot@example.com", "secret")
        from_addr, to_addrs, message = server.sendmail.call_args[0]
        assert from_addr == "bot@example.com"
        assert to_addrs == ["me@example.com"]
        assert "BUY Signal Alert: GLD" in message
        assert "line1<br>line2" in message

    def test_failure_raises_notification_error(self):
        with patch("kumotracker.notify.smtplib.SMTP") as smtp_cls:
            server = smtp_cls.return_value.__enter__.return_value
            server.login.side_effect = smtplib.SMTPAuthenticationError(535, b"bad")
            with pytest.raises(NotificationError):
                _smtp_notifier().send("s", "b")

    def test_connection_failure(self):
        with patch("kumotracker.notify.smtplib.SMTP", side_effect=OSError("refused")):
            with pytest.raises(NotificationError):
                _smtp_notifier().send("s", "b")
