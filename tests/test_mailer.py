# Tests for favsync.notify.mailer
# SMTP alert delivery and gating

import smtplib
from unittest.mock import patch

import pytest

from favsync.config.schema import SmtpConfig
from favsync.notify.mailer import (
    NotificationDispatchError,
    NotificationDispatcher,
    build_message,
    is_delivery_enabled,
    parse_smtp_host,
    send_notification,
)


def _smtp(password: str | None = "secret", url: str = "smtps://smtp.example.com:465") -> SmtpConfig:
    return SmtpConfig(
        url=url,
        sender_email="sender@example.com",
        sender_password=password,
        recipient_email="me@example.com",
    )


class TestParseSmtpHost:
    """Tests for parse_smtp_host."""

    @pytest.mark.parametrize(
        "url,host",
        [
            ("smtps://smtp.example.com:465", "smtp.example.com"),
            ("smtp://smtp.example.com:587", "smtp.example.com"),
            ("smtps://smtp.example.com", "smtp.example.com"),
        ],
    )
    def test_valid_urls(self, url: str, host: str):
        assert parse_smtp_host(url) == host

    @pytest.mark.parametrize("url", ["smtp.example.com", "smtps://", "smtps://:465", "https://smtp.example.com"])
    def test_invalid_urls(self, url: str):
        with pytest.raises(NotificationDispatchError):
            parse_smtp_host(url)


class TestDeliveryGate:
    """Tests for is_delivery_enabled."""

    @pytest.mark.parametrize("password", [None, "", "null", "NULL", "Null"])
    def test_disabled(self, password):
        assert is_delivery_enabled(password) is False

    @pytest.mark.parametrize("password", ["secret", "nullify", " "])
    def test_enabled(self, password):
        assert is_delivery_enabled(password) is True


class TestBuildMessage:
    """Tests for build_message."""

    def test_headers_and_body(self):
        msg = build_message(_smtp(), "Subject line", "Body text")
        assert msg["From"] == "Bilibili Sync <sender@example.com>"
        assert msg["To"] == "me@example.com"
        assert msg["Subject"] == "Subject line"
        assert "Body text" in msg.get_content()


class TestSendNotification:
    """Tests for send_notification."""

    @pytest.mark.parametrize("password", [None, "", "null", "NULL"])
    @patch("favsync.notify.mailer.smtplib.SMTP_SSL")
    def test_skipped_without_password(self, mock_smtp, password):
        assert send_notification(_smtp(password), "s", "b") is True
        mock_smtp.assert_not_called()

    @patch("favsync.notify.mailer.smtplib.SMTP_SSL")
    def test_skipped_without_smtp_section(self, mock_smtp):
        assert send_notification(None, "s", "b") is True
        mock_smtp.assert_not_called()

    @patch("favsync.notify.mailer.smtplib.SMTP_SSL")
    def test_delivers(self, mock_smtp):
        server = mock_smtp.return_value.__enter__.return_value

        assert send_notification(_smtp(), "Alert", "Details") is True

        mock_smtp.assert_called_once_with("smtp.example.com", 465, timeout=30)
        server.login.assert_called_once_with("sender@example.com", "secret")
        sent = server.send_message.call_args.args[0]
        assert sent["Subject"] == "Alert"

    @patch("favsync.notify.mailer.smtplib.SMTP_SSL")
    def test_login_failure_raises(self, mock_smtp):
        server = mock_smtp.return_value.__enter__.return_value
        server.login.side_effect = smtplib.SMTPAuthenticationError(535, b"bad credentials")

        with pytest.raises(NotificationDispatchError):
            send_notification(_smtp(), "Alert", "Details")

    @patch("favsync.notify.mailer.smtplib.SMTP_SSL", side_effect=OSError("connection refused"))
    def test_connection_failure_raises(self, mock_smtp):
        with pytest.raises(NotificationDispatchError, match="connection refused"):
            send_notification(_smtp(), "Alert", "Details")

    @patch("favsync.notify.mailer.smtplib.SMTP_SSL")
    def test_bad_url_raises(self, mock_smtp):
        with pytest.raises(NotificationDispatchError):
            send_notification(_smtp(url="mail.example.com"), "Alert", "Details")
        mock_smtp.assert_not_called()


class TestNotificationDispatcher:
    """Tests for NotificationDispatcher."""

    @patch("favsync.notify.mailer.smtplib.SMTP_SSL", side_effect=OSError("down"))
    def test_failure_swallowed(self, mock_smtp, caplog: pytest.LogCaptureFixture):
        dispatcher = NotificationDispatcher(_smtp())
        assert dispatcher.dispatch("Alert", "Details") is False
        assert "Failed to send email notification" in caplog.text

    @patch("favsync.notify.mailer.smtplib.SMTP_SSL")
    def test_skip_is_success(self, mock_smtp):
        assert NotificationDispatcher(_smtp("null")).dispatch("Alert", "Details") is True
        assert NotificationDispatcher(None).dispatch("Alert", "Details") is True
        mock_smtp.assert_not_called()

    @patch("favsync.notify.mailer.smtplib.SMTP_SSL")
    def test_delivers(self, mock_smtp):
        assert NotificationDispatcher(_smtp()).dispatch("Alert", "Details") is True
        mock_smtp.assert_called_once()
