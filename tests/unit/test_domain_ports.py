"""
Unit tests for domain ports and exceptions.

Tests verify:
- Port interfaces are properly defined
- Exceptions carry client-facing messages
- Domain purity (zero framework imports)
- Verification email rendering
"""

import subprocess
from enum import Enum
from pathlib import Path

import pytest

from listi.domain.emails import render_verification_email
from listi.domain.exceptions import (
    InvalidRegistration,
    MailError,
    RegistrationError,
    UserAlreadyExists,
    VerificationFailed,
)
from listi.domain.ports import MailSender, UserRepository, VerifyResult

DOMAIN_DIR = Path(__file__).resolve().parents[2] / "listi" / "domain"


class TestVerifyResultEnum:
    def test_verify_result_is_enum(self) -> None:
        assert issubclass(VerifyResult, Enum)

    def test_values(self) -> None:
        assert {r.value for r in VerifyResult} == {
            "success",
            "invalid_code",
            "expired",
            "locked",
            "not_found",
        }


class TestPorts:
    def test_user_repository_methods(self) -> None:
        for name in ("create_user", "verify_code", "replace_code"):
            assert callable(getattr(UserRepository, name))

    def test_mail_sender_method(self) -> None:
        assert callable(MailSender.send)


class TestExceptions:
    def test_hierarchy(self) -> None:
        assert issubclass(InvalidRegistration, RegistrationError)
        assert issubclass(UserAlreadyExists, RegistrationError)
        assert issubclass(VerificationFailed, RegistrationError)
        assert not issubclass(MailError, RegistrationError)

    def test_default_messages(self) -> None:
        assert UserAlreadyExists().message == "user or email already exists"
        assert VerificationFailed().message == "incorrect code or email"
        assert str(UserAlreadyExists()) == "user or email already exists"

    def test_custom_message(self) -> None:
        exc = InvalidRegistration("all fields required")
        assert exc.message == "all fields required"
        assert str(exc) == "all fields required"

    def test_can_be_raised_and_caught(self) -> None:
        with pytest.raises(RegistrationError):
            raise UserAlreadyExists()


class TestVerificationEmail:
    def test_subject_and_body(self) -> None:
        subject, html = render_verification_email("maria", "123456")

        assert subject == "Verification code - LISTI"
        assert "Hello maria" in html
        assert ">123456</h1>" in html

    def test_username_escaped(self) -> None:
        _, html = render_verification_email("<script>x</script>", "123456")

        assert "<script>" not in html
        assert "&lt;script&gt;" in html

    def test_custom_app_name(self) -> None:
        subject, html = render_verification_email("maria", "123456", app_name="Acme")

        assert subject == "Verification code - Acme"
        assert "Acme" in html


class TestDomainPurity:
    """Domain layer has no framework or driver imports."""

    @pytest.mark.parametrize(
        "pattern",
        ["from fastapi", "import fastapi", "from pydantic", "import pydantic", "from psycopg", "import psycopg", "import requests"],
    )
    def test_no_framework_imports(self, pattern: str) -> None:
        result = subprocess.run(
            ["grep", "-r", pattern, str(DOMAIN_DIR)],
            capture_output=True,
            text=True,
        )
        assert result.returncode != 0, f"Forbidden import found: {result.stdout}"
