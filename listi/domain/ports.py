"""
Port interfaces - Protocol definitions for infrastructure abstraction.

This module defines the interfaces (ports) that the domain requires
from infrastructure. Adapters implement these protocols.
"""

from datetime import datetime
from enum import Enum
from typing import Protocol


class VerifyResult(Enum):
    """
    Result of a verification attempt.

    Only SUCCESS is reported to the client as such; every other value
    collapses to the same generic error at the HTTP layer.
    """

    SUCCESS = "success"
    INVALID_CODE = "invalid_code"
    EXPIRED = "expired"
    LOCKED = "locked"
    NOT_FOUND = "not_found"


class UserRepository(Protocol):
    """Port interface for user persistence."""

    def create_user(
        self,
        username: str,
        email: str,
        password_hash: str,
        code: str | None,
        code_expires_at: datetime | None,
    ) -> bool:
        """
        Insert a new user row.

        Uniqueness of username and email is enforced by the store itself;
        the insert must be atomic with that check.

        Args:
            username: Stripped username
            email: Normalized email address
            password_hash: Encoded PBKDF2 hash
            code: 6-digit verification code, or None when verification is off
            code_expires_at: Expiry of the code, or None

        Returns:
            True if the user was created, False if username or email is taken
        """
        ...

    def verify_code(self, email: str, code: str, max_attempts: int) -> VerifyResult:
        """
        Check a verification code and mark the user verified on success.

        Must lock the row while checking so concurrent attempts are counted
        correctly. A mismatch increments the attempt counter; reaching
        max_attempts makes the current code unusable.

        Args:
            email: Normalized email address
            code: Code submitted by the client
            max_attempts: Failed attempts allowed per issued code

        Returns:
            VerifyResult describing the outcome
        """
        ...

    def replace_code(self, email: str, code: str, code_expires_at: datetime) -> str | None:
        """
        Issue a new code for an unverified user, resetting the attempt counter.

        Returns:
            The username of the affected user, or None if no pending user exists
        """
        ...


class MailSender(Protocol):
    """Port interface for email delivery."""

    def send(self, to: str, subject: str, html: str) -> None:
        """
        Deliver an HTML email.

        Raises:
            MailError: If the provider rejects or cannot be reached
        """
        ...
