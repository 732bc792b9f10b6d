"""
FastAPI dependencies - Dependency injection factories.

This module provides Depends() factories for injecting domain services and
infrastructure adapters into routes. Everything long-lived (settings, pool,
mail sender) is built once in the application lifespan and read from
``app.state``.
"""

from fastapi import Depends, Request
from psycopg_pool import ConnectionPool

from listi.adapters.repository.postgres import PostgresUserRepository
from listi.config.settings import Settings
from listi.domain.ports import MailSender, UserRepository
from listi.domain.registration import RegistrationService


def get_app_settings(request: Request) -> Settings:
    """Get the settings the application was created with."""
    return request.app.state.settings


def get_pool(request: Request) -> ConnectionPool:
    """
    Get connection pool from app state.

    The pool is created during app lifespan startup and stored in app.state.
    """
    return request.app.state.pool


def get_repository(pool: ConnectionPool = Depends(get_pool)) -> PostgresUserRepository:
    """Create repository with connection pool from app state."""
    return PostgresUserRepository(pool)


def get_mail_sender(request: Request) -> MailSender:
    """Get the mail sender built at startup."""
    return request.app.state.mail_sender


def get_registration_service(
    settings: Settings = Depends(get_app_settings),
    repository: UserRepository = Depends(get_repository),
    mail_sender: MailSender = Depends(get_mail_sender),
) -> RegistrationService:
    """
    Create registration service with injected dependencies.

    Wires together the repository, mail sender and registration settings.
    """
    return RegistrationService(
        repository=repository,
        mail_sender=mail_sender,
        verification_enabled=settings.verification_enabled,
        code_ttl_seconds=settings.code_ttl_seconds,
        max_attempts=settings.max_attempts,
        iterations=settings.pbkdf2_iterations,
        app_name=settings.app_name,
        check_email_syntax=settings.email_syntax_check,
    )
