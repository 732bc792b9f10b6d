"""
Domain layer - Pure business logic with zero framework imports.

This package contains the registration and verification rules. It defines
its own port interfaces for persistence and mail delivery so adapters can
be swapped by configuration.
"""

from .exceptions import (
    InvalidRegistration,
    MailError,
    RegistrationError,
    UserAlreadyExists,
    VerificationFailed,
)
from .passwords import hash_password, verify_password
from .ports import MailSender, UserRepository, VerifyResult
from .registration import RegistrationResult, RegistrationService

__all__ = [
    "InvalidRegistration",
    "MailError",
    "MailSender",
    "RegistrationError",
    "RegistrationResult",
    "RegistrationService",
    "UserAlreadyExists",
    "UserRepository",
    "VerificationFailed",
    "VerifyResult",
    "hash_password",
    "verify_password",
]
