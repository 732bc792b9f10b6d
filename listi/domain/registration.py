"""
Registration domain service - account creation and email verification.

This module contains the core business logic for user registration.

Account lifecycle
=================

    (new) --register--> PENDING --verify(correct code)--> VERIFIED

- PENDING: row inserted with verified=false and a 6-digit code that expires
  after ``code_ttl_seconds`` and tolerates ``max_attempts`` wrong guesses.
  ``resend_code`` replaces the code and resets both limits.
- VERIFIED: code cleared, terminal. There is no way back to PENDING.

When verification is disabled the row is inserted without a code and no
mail is sent.

Duplicate usernames and emails are rejected by the repository's atomic
insert, not by a separate lookup, so concurrent registrations cannot both
succeed.
"""

import logging
import re
import secrets
from collections.abc import Callable
from dataclasses import dataclass, field
from datetime import UTC, datetime, timedelta

from email_validator import EmailNotValidError, validate_email

from .emails import render_verification_email
from .exceptions import InvalidRegistration, MailError, UserAlreadyExists
from .passwords import DEFAULT_ITERATIONS, hash_password
from .ports import MailSender, UserRepository, VerifyResult

logger = logging.getLogger(__name__)

PASSWORD_PATTERN = re.compile(r"(?=.*[0-9])(?=.*[a-zA-Z]).{8,}")

MISSING_FIELDS = "all fields required"
INVALID_EMAIL = "invalid email address"
WEAK_PASSWORD = "password must be at least 8 characters including letters and numbers"


def _utcnow() -> datetime:
    return datetime.now(UTC)


@dataclass(frozen=True)
class RegistrationResult:
    """Outcome of a successful registration."""

    username: str
    email: str
    verification_sent: bool


@dataclass
class RegistrationService:
    """
    Domain service for user registration.

    Orchestrates validation, password hashing, code issuance,
    persistence and verification mail delivery.
    """

    repository: UserRepository
    mail_sender: MailSender
    verification_enabled: bool = True
    code_ttl_seconds: int = 900
    max_attempts: int = 5
    iterations: int = DEFAULT_ITERATIONS
    app_name: str = "LISTI"
    check_email_syntax: bool = False
    clock: Callable[[], datetime] = field(default=_utcnow)

    def register(self, username: object, email: object, password: object) -> RegistrationResult:
        """
        Register a new user.

        Validation runs in a fixed order and stops at the first failure:
        required fields, password strength, uniqueness. When
        ``check_email_syntax`` is on, the email syntax is checked right after
        the required fields.

        Returns:
            RegistrationResult for the created user

        Raises:
            InvalidRegistration: If input fails validation
            UserAlreadyExists: If the username or email is taken
        """
        if not all(isinstance(value, str) for value in (username, email, password)):
            raise InvalidRegistration(MISSING_FIELDS)
        username = username.strip()
        normalized_email = self._normalize_email(email)
        if not username or not normalized_email or not password:
            raise InvalidRegistration(MISSING_FIELDS)

        if self.check_email_syntax:
            self._check_email_syntax(normalized_email)

        if not PASSWORD_PATTERN.fullmatch(password):
            raise InvalidRegistration(WEAK_PASSWORD)

        password_hash = hash_password(password, self.iterations)
        code = None
        expires_at = None
        if self.verification_enabled:
            code = self._generate_verification_code()
            expires_at = self._code_expiry()

        created = self.repository.create_user(
            username, normalized_email, password_hash, code, expires_at
        )
        if not created:
            raise UserAlreadyExists()

        logger.info("Registered user %s", username)

        sent = False
        if code is not None:
            sent = self._send_code(username, normalized_email, code)
        return RegistrationResult(username=username, email=normalized_email, verification_sent=sent)

    def verify(self, email: object, code: object) -> VerifyResult:
        """
        Confirm a verification code for an email address.

        Empty or non-string input never reaches the repository.
        """
        if not isinstance(email, str) or not isinstance(code, str):
            return VerifyResult.NOT_FOUND
        normalized_email = self._normalize_email(email)
        code = code.strip()
        if not normalized_email or not code:
            return VerifyResult.NOT_FOUND

        result = self.repository.verify_code(normalized_email, code, self.max_attempts)
        if result is VerifyResult.SUCCESS:
            logger.info("Verified %s", normalized_email)
        else:
            logger.info("Verification failed for %s: %s", normalized_email, result.value)
        return result

    def resend_code(self, email: object) -> bool:
        """
        Issue and mail a fresh code to a pending user.

        Returns:
            True if a pending user existed and a new code was issued

        Raises:
            InvalidRegistration: If the email is missing
        """
        if not isinstance(email, str) or not email.strip():
            raise InvalidRegistration(MISSING_FIELDS)
        normalized_email = self._normalize_email(email)

        code = self._generate_verification_code()
        username = self.repository.replace_code(normalized_email, code, self._code_expiry())
        if username is None:
            logger.info("No pending account for %s, code not reissued", normalized_email)
            return False

        self._send_code(username, normalized_email, code)
        return True

    def _send_code(self, username: str, email: str, code: str) -> bool:
        """Send the verification mail; delivery failures are logged, not raised."""
        subject, html = render_verification_email(username, code, self.app_name)
        try:
            self.mail_sender.send(email, subject, html)
        except MailError:
            logger.exception("Failed to send verification code to %s", email)
            return False
        return True

    def _check_email_syntax(self, email: str) -> None:
        """Reject syntactically malformed addresses, without DNS lookups."""
        try:
            validate_email(
                email,
                check_deliverability=False,
                test_environment=True,
                globally_deliverable=False,
            )
        except EmailNotValidError:
            raise InvalidRegistration(INVALID_EMAIL) from None

    def _code_expiry(self) -> datetime:
        return self.clock() + timedelta(seconds=self.code_ttl_seconds)

    def _normalize_email(self, email: str) -> str:
        """
        Normalize email address for consistent storage and lookup.

        Applies: strip whitespace + lowercase
        """
        return email.strip().lower()

    def _generate_verification_code(self) -> str:
        """Generate a uniform 6-digit code in 100000-999999."""
        return str(secrets.randbelow(900_000) + 100_000)
