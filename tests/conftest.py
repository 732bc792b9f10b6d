"""
Shared test fixtures and configuration.

This module provides:
- An in-memory UserRepository with the same semantics as the Postgres adapter
- A recording MailSender
- Settings and a TestClient wired to those fakes (no database required)
"""

import re
import threading
from collections.abc import Callable, Generator
from dataclasses import dataclass
from datetime import UTC, datetime
from pathlib import Path

import pytest
from fastapi.testclient import TestClient

from listi.api.dependencies import get_mail_sender, get_repository
from listi.api.main import create_app
from listi.config.settings import Settings
from listi.domain.exceptions import MailError
from listi.domain.ports import VerifyResult

# Low work factor keeps the suite fast; the default is covered in test_passwords.
FAST_ITERATIONS = 1_000

INDEX_HTML = "<!doctype html><title>LISTI</title><div id=app></div>"


@dataclass
class StoredUser:
    username: str
    email: str
    password_hash: str
    code: str | None
    code_expires_at: datetime | None
    attempts: int = 0
    verified: bool = False


class InMemoryUserRepository:
    """UserRepository fake; uniqueness and verification rules mirror the SQL."""

    def __init__(self) -> None:
        self.users: dict[str, StoredUser] = {}
        self._lock = threading.Lock()

    def create_user(
        self,
        username: str,
        email: str,
        password_hash: str,
        code: str | None,
        code_expires_at: datetime | None,
    ) -> bool:
        with self._lock:
            if email in self.users or any(u.username == username for u in self.users.values()):
                return False
            self.users[email] = StoredUser(username, email, password_hash, code, code_expires_at)
            return True

    def verify_code(self, email: str, code: str, max_attempts: int) -> VerifyResult:
        with self._lock:
            user = self.users.get(email)
            if user is None or user.verified or user.code is None:
                return VerifyResult.NOT_FOUND
            if user.attempts >= max_attempts:
                return VerifyResult.LOCKED
            if user.code_expires_at is not None and user.code_expires_at <= datetime.now(UTC):
                return VerifyResult.EXPIRED
            if user.code != code:
                user.attempts += 1
                if user.attempts >= max_attempts:
                    return VerifyResult.LOCKED
                return VerifyResult.INVALID_CODE
            user.verified = True
            user.code = None
            user.code_expires_at = None
            user.attempts = 0
            return VerifyResult.SUCCESS

    def replace_code(self, email: str, code: str, code_expires_at: datetime) -> str | None:
        with self._lock:
            user = self.users.get(email)
            if user is None or user.verified:
                return None
            user.code = code
            user.code_expires_at = code_expires_at
            user.attempts = 0
            return user.username


class RecordingMailSender:
    """MailSender fake that keeps every message; set ``fail`` to simulate outages."""

    def __init__(self) -> None:
        self.sent: list[tuple[str, str, str]] = []
        self.fail = False

    def send(self, to: str, subject: str, html: str) -> None:
        if self.fail:
            raise MailError("provider unavailable")
        self.sent.append((to, subject, html))

    def last_code_for(self, email: str) -> str:
        """Extract the 6-digit code from the most recent mail to ``email``."""
        for to, _subject, html in reversed(self.sent):
            if to == email:
                match = re.search(r"<h1[^>]*>(\d{6})</h1>", html)
                assert match is not None, html
                return match.group(1)
        raise AssertionError(f"no mail sent to {email}")


@pytest.fixture
def repository() -> InMemoryUserRepository:
    return InMemoryUserRepository()


@pytest.fixture
def mail_sender() -> RecordingMailSender:
    return RecordingMailSender()


@pytest.fixture
def static_dir(tmp_path: Path) -> Path:
    """Minimal frontend bundle with an entry document and one asset."""
    site = tmp_path / "sitio"
    (site / "assets").mkdir(parents=True)
    (site / "index.html").write_text(INDEX_HTML, encoding="utf-8")
    (site / "assets" / "app.js").write_text("console.log('listi');", encoding="utf-8")
    return site


@pytest.fixture
def make_settings(static_dir: Path) -> Callable[..., Settings]:
    """Factory for Settings isolated from the developer's .env file."""

    def factory(**overrides: object) -> Settings:
        values: dict[str, object] = {
            "static_dir": str(static_dir),
            "pbkdf2_iterations": FAST_ITERATIONS,
            "mail_provider": "console",
        }
        values.update(overrides)
        return Settings(_env_file=None, **values)

    return factory


@pytest.fixture
def settings(make_settings: Callable[..., Settings]) -> Settings:
    return make_settings()


@pytest.fixture
def make_client(
    repository: InMemoryUserRepository, mail_sender: RecordingMailSender
) -> Generator[Callable[[Settings], TestClient], None, None]:
    """Build a TestClient for an app whose repository and mailer are fakes."""
    apps = []

    def factory(settings: Settings) -> TestClient:
        app = create_app(settings)
        app.dependency_overrides[get_repository] = lambda: repository
        app.dependency_overrides[get_mail_sender] = lambda: mail_sender
        apps.append(app)
        return TestClient(app)

    yield factory

    for app in apps:
        app.dependency_overrides.clear()


@pytest.fixture
def client(make_client: Callable[[Settings], TestClient], settings: Settings) -> TestClient:
    """Client for an app with verification enabled."""
    return make_client(settings)
