"""
SMTP notifier for verification and password-reset links.

Built once at startup (EmailNotifier.from_env) and injected into the auth
service. With no SMTP credentials the links go to the log instead, and the
send still reports success so signup/reset flows keep working locally.
"""
from __future__ import annotations

import logging
import os
import smtplib
from dataclasses import dataclass
from email.mime.text import MIMEText
from typing import Optional

log = logging.getLogger("email")

DEFAULT_BASE_URL = "http://localhost:5000"


def _verification_body(link: str) -> str:
    return (
        "Welcome to EmpaAI!\n\n"
        "To verify your email address and complete your registration, please visit:\n"
        f"{link}\n\n"
        "This link will expire in 24 hours.\n\n"
        "If you didn't create an EmpaAI account, you can safely ignore this email."
    )


def _reset_body(link: str) -> str:
    return (
        "We received a request to reset the password for your EmpaAI account.\n\n"
        "To reset your password, visit:\n"
        f"{link}\n\n"
        "This link will expire in 1 hour.\n\n"
        "If you didn't request a password reset, please ignore this email and your password will remain unchanged."
    )


@dataclass
class EmailNotifier:
    smtp_host: Optional[str] = None
    smtp_port: int = 587
    smtp_user: Optional[str] = None
    smtp_password: Optional[str] = None
    from_addr: Optional[str] = None
    use_ssl: bool = False
    base_url: str = DEFAULT_BASE_URL

    @classmethod
    def from_env(cls) -> "EmailNotifier":
        notifier = cls(
            smtp_host=os.getenv("SMTP_HOST") or None,
            smtp_port=int(os.getenv("SMTP_PORT", "587")),
            smtp_user=os.getenv("SMTP_USER") or None,
            smtp_password=os.getenv("SMTP_PASS") or None,
            from_addr=os.getenv("SMTP_FROM") or None,
            use_ssl=os.getenv("SMTP_SECURE", "").lower() in ("1", "true", "yes"),
            base_url=(os.getenv("PUBLIC_BASE_URL") or DEFAULT_BASE_URL).rstrip("/"),
        )
        if not notifier.configured:
            log.warning(
                "Email not configured. Set SMTP_HOST, SMTP_PORT, SMTP_USER, SMTP_PASS and SMTP_FROM; "
                "links will be written to the log instead."
            )
        return notifier

    @property
    def configured(self) -> bool:
        return bool(self.smtp_host and self.smtp_user and self.smtp_password)

    def send_verification_email(self, email: str, token: str) -> bool:
        link = f"{self.base_url}/verify-email?token={token}"
        return self._deliver(email, "Verify Your EmpaAI Account", _verification_body(link), link, "verification")

    def send_password_reset_email(self, email: str, token: str) -> bool:
        link = f"{self.base_url}/reset-password?token={token}"
        return self._deliver(email, "Reset Your EmpaAI Password", _reset_body(link), link, "password reset")

    def _deliver(self, to_email: str, subject: str, body: str, link: str, kind: str) -> bool:
        if not self.configured:
            log.warning("[DEV MODE] %s link for %s: %s", kind.capitalize(), to_email, link)
            return True
        try:
            self.send_text_email(to_email, subject, body)
        except (smtplib.SMTPException, OSError):
            log.exception("Failed to send %s email to %s", kind, to_email)
            return False
        log.info("%s email sent to %s", kind.capitalize(), to_email)
        return True

    def send_text_email(self, to_email: str, subject: str, body: str) -> None:
        msg = MIMEText(body)
        msg["Subject"] = subject
        msg["From"] = self.from_addr or self.smtp_user
        msg["To"] = to_email

        smtp_cls = smtplib.SMTP_SSL if self.use_ssl else smtplib.SMTP
        with smtp_cls(self.smtp_host, self.smtp_port, timeout=10) as server:
            if not self.use_ssl:
                server.starttls()
            server.login(self.smtp_user, self.smtp_password)
            server.sendmail(msg["From"], [to_email], msg.as_string())


__all__ = ["EmailNotifier", "DEFAULT_BASE_URL"]
