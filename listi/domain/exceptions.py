"""
Domain exceptions - Semantic error types for registration.

This module defines domain-specific exceptions that communicate
business rule violations without leaking infrastructure details.
"""


class RegistrationError(Exception):
    """Base class for registration domain errors."""

    message = "registration failed"

    def __init__(self, message: str | None = None) -> None:
        if message is not None:
            self.message = message
        super().__init__(self.message)


class InvalidRegistration(RegistrationError):
    """Submitted registration data failed validation."""


class UserAlreadyExists(RegistrationError):
    """Username or email is already taken."""

    message = "user or email already exists"


class VerificationFailed(RegistrationError):
    """Email/code pair did not verify (unknown, wrong, expired or locked)."""

    message = "incorrect code or email"


class MailError(Exception):
    """Outbound mail could not be delivered to the provider."""
