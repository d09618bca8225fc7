"""Tests for the outbound email and image-hosting clients."""

import json
import unittest
from datetime import datetime
from urllib.parse import parse_qs

import httpx

from elearning.core.config import Settings
from elearning.models.user import User, UserRole
from elearning.services.media_service import (
    CloudinaryUploader,
    ImageUploadError,
    sign_params,
)
from elearning.services.notification_service import (
    EmailDeliveryError,
    Notifier,
    ResendMailer,
)

from helpers import FailingMailer, RecordingMailer


def make_user(email: str = "a@x.com") -> User:
    return User(
        id=1,
        name="A",
        email=email,
        hashed_password="x",
        role=UserRole.USER,
        created_at=datetime(2024, 1, 1),
        updated_at=datetime(2024, 1, 1),
    )


def client_for(handler) -> httpx.Client:
    return httpx.Client(transport=httpx.MockTransport(handler))


class TestResendMailer(unittest.TestCase):
    def test_posts_message_with_bearer_key(self) -> None:
        seen = {}

        def handler(request: httpx.Request) -> httpx.Response:
            seen["auth"] = request.headers["Authorization"]
            seen["body"] = json.loads(request.content)
            return httpx.Response(200, json={"id": "msg_1"})

        mailer = ResendMailer(Settings(RESEND_API_KEY="re_test"), client=client_for(handler))
        mailer.send("a@x.com", "Hello", "Hi there", "<p>Hi there</p>")

        self.assertEqual(seen["auth"], "Bearer re_test")
        self.assertEqual(seen["body"]["to"], ["a@x.com"])
        self.assertEqual(seen["body"]["subject"], "Hello")
        self.assertEqual(seen["body"]["from"], "onboarding@resend.dev")

    def test_provider_error_raises(self) -> None:
        mailer = ResendMailer(
            Settings(RESEND_API_KEY="re_test"),
            client=client_for(lambda request: httpx.Response(422, text="bad sender")),
        )
        with self.assertRaises(EmailDeliveryError):
            mailer.send("a@x.com", "Hello", "Hi", "<p>Hi</p>")

    def test_transport_error_raises(self) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("refused", request=request)

        mailer = ResendMailer(Settings(RESEND_API_KEY="re_test"), client=client_for(handler))
        with self.assertRaises(EmailDeliveryError):
            mailer.send("a@x.com", "Hello", "Hi", "<p>Hi</p>")

    def test_without_api_key_nothing_is_sent(self) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            raise AssertionError("no request expected")

        mailer = ResendMailer(Settings(RESEND_API_KEY=None), client=client_for(handler))
        self.assertFalse(mailer.enabled)
        mailer.send("a@x.com", "Hello", "Hi", "<p>Hi</p>")


class TestNotifier(unittest.TestCase):
    def test_delivery_failure_is_swallowed(self) -> None:
        notifier = Notifier(FailingMailer(), Settings())
        self.assertFalse(notifier.welcome(make_user()))

    def test_sandbox_recipient_overrides_user_email(self) -> None:
        mailer = RecordingMailer()
        notifier = Notifier(mailer, Settings(RESEND_EMAIL="sandbox@x.com"))
        self.assertTrue(notifier.welcome(make_user("real@x.com")))
        self.assertEqual(mailer.sent[0]["to"], "sandbox@x.com")

    def test_reset_link_points_at_client(self) -> None:
        mailer = RecordingMailer()
        notifier = Notifier(mailer, Settings(CLIENT_URL="https://app.example.com/"))
        notifier.password_reset_link(make_user(), "tok123")
        message = mailer.sent[0]
        self.assertIn("https://app.example.com/reset-password/tok123", message["text"])
        self.assertIn('href="https://app.example.com/reset-password/tok123"', message["html"])


class TestCloudinaryUploader(unittest.TestCase):
    def settings(self) -> Settings:
        return Settings(
            CLOUD_NAME="demo", CLOUDINARY_API_KEY="key", CLOUDINARY_API_SECRET="secret"
        )

    def test_sign_params_sorts_keys(self) -> None:
        self.assertEqual(
            sign_params({"timestamp": "1", "folder": "f"}, "s"),
            sign_params({"folder": "f", "timestamp": "1"}, "s"),
        )
        self.assertNotEqual(
            sign_params({"folder": "f"}, "s"), sign_params({"folder": "f"}, "t")
        )

    def test_upload_returns_secure_url(self) -> None:
        seen = {}

        def handler(request: httpx.Request) -> httpx.Response:
            seen["url"] = str(request.url)
            seen["form"] = {k: v[0] for k, v in parse_qs(request.content.decode()).items()}
            return httpx.Response(
                200, json={"secure_url": "https://res.cloudinary.com/demo/a.png"}
            )

        uploader = CloudinaryUploader(self.settings(), client=client_for(handler))
        url = uploader.upload("https://x.com/a.png", "profile-pictures", 150, 150)

        self.assertEqual(url, "https://res.cloudinary.com/demo/a.png")
        self.assertEqual(
            seen["url"], "https://api.cloudinary.com/v1_1/demo/image/upload"
        )
        form = seen["form"]
        self.assertEqual(form["folder"], "profile-pictures")
        self.assertEqual(form["transformation"], "c_fill,h_150,w_150")
        self.assertEqual(form["api_key"], "key")
        expected = sign_params(
            {
                "folder": form["folder"],
                "timestamp": form["timestamp"],
                "transformation": form["transformation"],
            },
            "secret",
        )
        self.assertEqual(form["signature"], expected)

    def test_error_response_raises(self) -> None:
        uploader = CloudinaryUploader(
            self.settings(),
            client=client_for(lambda request: httpx.Response(500, text="boom")),
        )
        with self.assertRaises(ImageUploadError):
            uploader.upload("x", "profile-pictures", 150, 150)

    def test_not_configured(self) -> None:
        uploader = CloudinaryUploader(Settings(CLOUD_NAME=None))
        self.assertFalse(uploader.configured)
        with self.assertRaises(ImageUploadError):
            uploader.upload("x", "profile-pictures", 150, 150)
