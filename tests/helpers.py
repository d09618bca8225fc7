"""Shared fixtures for API tests: fresh database, fake collaborators, login helpers."""

import os
import sqlite3
import unittest
from typing import Optional

from fastapi.testclient import TestClient

from elearning.core.config import settings
from elearning.core.dependencies import get_image_uploader, get_mailer
from elearning.db.database import DB_PATH, get_connection, init_db
from elearning.db.seeder import seed_admin
from elearning.main import app
from elearning.repositories.user_repository import UserRepository
from elearning.services.notification_service import EmailDeliveryError

DEFAULT_PASSWORD = "Abcdef1!"


class RecordingMailer:
    """Mailer that keeps every message instead of sending it."""

    def __init__(self) -> None:
        self.sent: list[dict] = []

    def send(self, to: str, subject: str, text: str, html_body: str) -> None:
        self.sent.append({"to": to, "subject": subject, "text": text, "html": html_body})

    def subjects(self) -> list[str]:
        return [m["subject"] for m in self.sent]


class FailingMailer:
    def send(self, to: str, subject: str, text: str, html_body: str) -> None:
        raise EmailDeliveryError("provider down")


class WritingMailer:
    """Mailer that writes to the database from its own connection while sending.

    The write only succeeds when the request has already committed and
    released its lock.
    """

    def __init__(self) -> None:
        self.subjects_sent: list[str] = []
        self.lock_errors: list[str] = []

    def send(self, to: str, subject: str, text: str, html_body: str) -> None:
        conn = get_connection()
        conn.execute("PRAGMA busy_timeout = 200")
        try:
            UserRepository(conn).create(
                name="Side",
                email=f"side-{len(self.subjects_sent)}@x.com",
                hashed_password="x",
            )
            conn.commit()
        except sqlite3.OperationalError as exc:
            self.lock_errors.append(str(exc))
        finally:
            conn.close()
        self.subjects_sent.append(subject)


class FakeUploader:
    def __init__(self) -> None:
        self.calls: list[dict] = []

    def upload(self, source: str, folder: str, width: int, height: int) -> str:
        self.calls.append(
            {"source": source, "folder": folder, "width": width, "height": height}
        )
        return f"https://images.example.com/{folder}/avatar.png"


def reset_database() -> None:
    if os.path.exists(DB_PATH):
        os.remove(DB_PATH)
    init_db()
    seed_admin(settings)


class ApiTestCase(unittest.TestCase):
    """Base class giving each test an empty database and a TestClient."""

    def setUp(self) -> None:
        reset_database()
        self.mailer = RecordingMailer()
        self.uploader = FakeUploader()
        app.dependency_overrides[get_mailer] = lambda: self.mailer
        app.dependency_overrides[get_image_uploader] = lambda: self.uploader
        self.client = TestClient(app)

    def tearDown(self) -> None:
        app.dependency_overrides.clear()
        self.client.close()

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def register(
        self,
        email: str = "a@x.com",
        password: str = DEFAULT_PASSWORD,
        name: str = "A",
    ):
        return self.client.post(
            "/api/auth/register",
            json={"name": name, "email": email, "password": password},
        )

    def login(self, email: str = "a@x.com", password: str = DEFAULT_PASSWORD):
        return self.client.post(
            "/api/auth/login", json={"email": email, "password": password}
        )

    def access_token(self, email: str = "a@x.com", password: str = DEFAULT_PASSWORD) -> str:
        resp = self.login(email, password)
        self.assertEqual(resp.status_code, 200, resp.text)
        return resp.json()["accessToken"]

    def user_headers(self, email: str = "a@x.com") -> dict:
        """Register *email* (if needed) and return its auth header."""
        self.register(email=email)
        return {"Authorization": self.access_token(email)}

    def admin_headers(self) -> dict:
        return {
            "Authorization": self.access_token(settings.ADMIN_EMAIL, settings.ADMIN_PASSWORD)
        }

    def create_course(self, headers: Optional[dict] = None, **overrides):
        body = {
            "title": "Python Basics",
            "category": "Programming",
            "level": "BEGINNER",
            "description": "Learn Python from scratch.",
            "instructor": "Ada",
            "duration": 90,
            "price": 19.99,
        }
        body.update(overrides)
        return self.client.post(
            "/api/courses/create-course",
            json=body,
            headers=headers if headers is not None else self.admin_headers(),
        )
