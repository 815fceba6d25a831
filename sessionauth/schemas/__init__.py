"""Pydantic request/response schemas."""

from sessionauth.schemas.auth import (
    LoginRequest,
    MessageResponse,
    PublicUser,
    RegisterRequest,
    Role,
    SessionPayload,
    SessionResponse,
    TokenResponse,
)

__all__ = [
    "LoginRequest",
    "MessageResponse",
    "PublicUser",
    "RegisterRequest",
    "Role",
    "SessionPayload",
    "SessionResponse",
    "TokenResponse",
]
