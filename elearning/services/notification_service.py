"""
Transactional email.

``ResendMailer`` talks to the Resend REST API and raises ``EmailDeliveryError``
on any failure. ``Notifier`` builds the individual messages and treats every
email as best-effort: delivery errors are logged and never reach the caller.
"""
from typing import Optional, Protocol
import html
import logging

import httpx

from elearning.core.config import Settings
from elearning.models.course import Course
from elearning.models.user import User

logger = logging.getLogger(__name__)


class EmailDeliveryError(Exception):
    """Raised when an email could not be handed to the provider."""


class Mailer(Protocol):
    def send(self, to: str, subject: str, text: str, html_body: str) -> None: ...


class ResendMailer:
    """Sends email through the Resend HTTP API."""

    def __init__(self, config: Settings, client: Optional[httpx.Client] = None) -> None:
        self._api_key = config.RESEND_API_KEY
        self._api_url = config.RESEND_API_URL
        self._sender = config.RESEND_FROM_EMAIL
        self._timeout = config.EMAIL_TIMEOUT_SECONDS
        self._client = client

    @property
    def enabled(self) -> bool:
        return bool(self._api_key)

    def send(self, to: str, subject: str, text: str, html_body: str) -> None:
        if not self.enabled:
            logger.info("Email delivery disabled; skipping '%s' to %s", subject, to)
            return

        payload = {
            "from": self._sender,
            "to": [to],
            "subject": subject,
            "text": text,
            "html": html_body,
        }
        headers = {"Authorization": f"Bearer {self._api_key}"}
        try:
            if self._client is not None:
                resp = self._client.post(
                    self._api_url, json=payload, headers=headers, timeout=self._timeout
                )
            else:
                with httpx.Client(timeout=self._timeout) as client:
                    resp = client.post(self._api_url, json=payload, headers=headers)
        except httpx.HTTPError as exc:
            raise EmailDeliveryError(f"Email provider unreachable: {exc}") from exc

        if resp.status_code >= 400:
            raise EmailDeliveryError(
                f"Email provider returned {resp.status_code}: {resp.text[:200]}"
            )
        logger.info("Email '%s' accepted for %s", subject, to)


class Notifier:
    """Builds and sends the platform's notification emails."""

    def __init__(self, mailer: Mailer, config: Settings) -> None:
        self._mailer = mailer
        self._client_url = config.CLIENT_URL.rstrip("/")
        self._sandbox_recipient = config.RESEND_EMAIL

    def _recipient(self, email: str) -> str:
        return self._sandbox_recipient or email

    def _send(
        self, email: str, subject: str, text: str, html_body: Optional[str] = None
    ) -> bool:
        try:
            self._mailer.send(
                to=self._recipient(email),
                subject=subject,
                text=text,
                html_body=html_body or f"<p>{html.escape(text)}</p>",
            )
        except EmailDeliveryError:
            logger.error("Failed to send '%s' email to %s", subject, email, exc_info=True)
            return False
        return True

    def welcome(self, user: User) -> bool:
        return self._send(
            user.email,
            "Registration Successful!",
            "Welcome to elearning! You have successfully registered.",
        )

    def profile_updated(self, user: User) -> bool:
        return self._send(
            user.email, "Profile Updated", "Your profile has been updated successfully"
        )

    def password_reset_link(self, user: User, token: str) -> bool:
        link = f"{self._client_url}/reset-password/{token}"
        return self._send(
            user.email,
            "Password Reset",
            f"Use this link to reset your password: {link}",
            html_body=(
                "<p>Use this link to reset your password: "
                f'<a href="{html.escape(link)}">Reset Password</a></p>'
            ),
        )

    def password_reset_done(self, user: User) -> bool:
        return self._send(
            user.email,
            "Password Reset Successful",
            "Your password has been reset successfully",
        )

    def account_deleted(self, email: str) -> bool:
        return self._send(
            email, "Account Deleted", "Your account has been deleted successfully"
        )

    def enrolled(self, user: User, course: Course) -> bool:
        return self._send(
            user.email,
            "Course Enrollment",
            f"You have successfully enrolled in {course.title}",
        )
