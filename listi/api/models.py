"""
API request and response models.

Pydantic models for FastAPI endpoint validation and OpenAPI schema generation.
Request fields are optional at this level: presence and content rules are
enforced by the domain service so every rejection carries its own message.
"""

from pydantic import BaseModel, Field


class RegisterRequest(BaseModel):
    """Request model for user registration."""

    nombre: str | None = Field(None, description="Username")
    email: str | None = Field(None, description="Email address")
    password: str | None = Field(
        None, description="Password (min 8 characters, letters and numbers)"
    )


class VerifyRequest(BaseModel):
    """Request model for email verification."""

    email: str | None = None
    codigo: str | None = Field(None, description="6-digit verification code")


class ResendRequest(BaseModel):
    """Request model for reissuing a verification code."""

    email: str | None = None


class MessageResponse(BaseModel):
    """Response model for successful operations."""

    message: str


class ErrorResponse(BaseModel):
    """Standard error response model."""

    error: str
