"""Request/response schemas for auth endpoints and the session payload."""

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from sessionauth.core.security import PASSWORD_MAX_LEN


class Role(str, Enum):
    ADMIN = "admin"
    USER = "user"


class _CamelModel(BaseModel):
    """JSON bodies use camelCase keys (firstName, confirmationPassword)."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class LoginRequest(_CamelModel):
    """Credentials for login."""

    email: str = Field(..., min_length=1, max_length=255, description="Account email")
    password: str = Field(..., min_length=1, max_length=PASSWORD_MAX_LEN, description="Password")


class RegisterRequest(_CamelModel):
    """Registration body. Never persisted as-is: the password is hashed, the confirmation dropped."""

    first_name: str = Field(default="", max_length=255)
    last_name: str = Field(default="", max_length=255)
    email: str = Field(..., min_length=1, max_length=255)
    password: str = Field(..., min_length=1, max_length=PASSWORD_MAX_LEN)
    confirmation_password: str = Field(..., min_length=1, max_length=PASSWORD_MAX_LEN)
    role: Role = Role.USER


class PublicUser(_CamelModel):
    """A user record with the password omitted."""

    id: int
    first_name: str
    last_name: str
    email: str
    role: Role


class SessionPayload(BaseModel):
    """Minimal identity kept in the session store: id and role only."""

    id: int
    role: Role


class SessionResponse(_CamelModel):
    """Login response: the session as written, echoing the serialized identity."""

    user: SessionPayload
    max_age: int = Field(..., description="Seconds until the session cookie expires")


class TokenResponse(_CamelModel):
    """Signed access token for the token-based variant."""

    access_token: str = Field(..., description="JWT access token")
    token_type: str = Field(default="bearer", description="Token type")


class MessageResponse(BaseModel):
    message: str
