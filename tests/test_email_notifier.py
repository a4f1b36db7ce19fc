import email
import logging
import smtplib

from app.email_utils import EmailNotifier


def _configured(**overrides):
    values = dict(
        smtp_host="smtp.example.com",
        smtp_port=587,
        smtp_user="mailer",
        smtp_password="pw",
        from_addr="EmpaAI <no-reply@example.com>",
        base_url="https://empa.example.com",
    )
    values.update(overrides)
    return EmailNotifier(**values)


def test_unconfigured_notifier_logs_link_and_succeeds(caplog):
    notifier = EmailNotifier(base_url="http://localhost:5000")
    assert not notifier.configured

    with caplog.at_level(logging.WARNING, logger="email"):
        assert notifier.send_verification_email("a@x.com", "tok123") is True
    assert "http://localhost:5000/verify-email?token=tok123" in caplog.text


def test_reset_link_points_at_reset_page(caplog):
    notifier = EmailNotifier(base_url="http://localhost:5000")
    with caplog.at_level(logging.WARNING, logger="email"):
        notifier.send_password_reset_email("a@x.com", "rst")
    assert "http://localhost:5000/reset-password?token=rst" in caplog.text


def test_from_env_reads_smtp_settings(monkeypatch):
    monkeypatch.setenv("SMTP_HOST", "smtp.example.com")
    monkeypatch.setenv("SMTP_PORT", "465")
    monkeypatch.setenv("SMTP_USER", "mailer")
    monkeypatch.setenv("SMTP_PASS", "pw")
    monkeypatch.setenv("SMTP_SECURE", "true")
    monkeypatch.setenv("PUBLIC_BASE_URL", "https://empa.example.com/")

    notifier = EmailNotifier.from_env()
    assert notifier.configured
    assert notifier.smtp_port == 465
    assert notifier.use_ssl is True
    assert notifier.base_url == "https://empa.example.com"


def test_smtp_send_uses_starttls_and_login(monkeypatch):
    calls = []
    body = []

    class FakeSMTP:
        def __init__(self, host, port, timeout=None):
            calls.append(("connect", host, port))

        def __enter__(self):
            return self

        def __exit__(self, *exc):
            return False

        def starttls(self):
            calls.append(("starttls",))

        def login(self, user, password):
            calls.append(("login", user))

        def sendmail(self, from_addr, to_addrs, msg):
            parsed = email.message_from_string(msg)
            calls.append(("sendmail", to_addrs, parsed.get_content_type(), parsed["Subject"]))
            body.append(parsed.get_payload())

    monkeypatch.setattr(smtplib, "SMTP", FakeSMTP)

    assert _configured().send_verification_email("a@x.com", "abc") is True
    assert calls == [
        ("connect", "smtp.example.com", 587),
        ("starttls",),
        ("login", "mailer"),
        ("sendmail", ["a@x.com"], "text/plain", "Verify Your EmpaAI Account"),
    ]
    assert "https://empa.example.com/verify-email?token=abc" in body[0]


def test_smtp_failure_returns_false(monkeypatch, caplog):
    class BrokenSMTP:
        def __init__(self, *args, **kwargs):
            raise smtplib.SMTPConnectError(421, b"service not available")

    monkeypatch.setattr(smtplib, "SMTP", BrokenSMTP)

    with caplog.at_level(logging.ERROR, logger="email"):
        assert _configured().send_password_reset_email("a@x.com", "abc") is False
    assert "Failed to send password reset email" in caplog.text


def test_signup_succeeds_when_delivery_fails(auth_service, notifier, caplog):
    notifier.result = False
    with caplog.at_level(logging.WARNING, logger="auth"):
        result = auth_service.signup("a@x.com", "secret1", "disabled")
    assert result["email"] == "a@x.com"
    assert "was not delivered" in caplog.text
