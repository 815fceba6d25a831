"""Application configuration loaded from environment variables."""

from functools import lru_cache
from typing import Literal

from pydantic import SecretStr, field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

# Placeholder secrets; prod refuses to start with these.
DEFAULT_SESSION_SECRET = "sup3rs3cr3t"
DEFAULT_AUTH_SECRET = "change-me-in-production"


class Settings(BaseSettings):
    """Validated application settings from env and optional .env file."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        case_sensitive=False,
    )

    APP_ENV: Literal["dev", "prod"] = "dev"
    DEBUG: bool = False
    CORS_ORIGINS: list[str] = []

    # Session cookie (signed, restored on every request)
    SESSION_SECRET: SecretStr = SecretStr(DEFAULT_SESSION_SECRET)
    SESSION_COOKIE_NAME: str = "session"
    SESSION_MAX_AGE_SEC: int = 60
    SESSION_SAME_SITE: Literal["strict", "lax", "none"] = "strict"
    SESSION_HTTPS_ONLY: bool = False

    # Bcrypt cost (rounds). Tests lower this to keep hashing fast.
    BCRYPT_ROUNDS: int = 12

    # Credential store: unset means the in-memory store for the process lifetime
    DATABASE_URL: str | None = None
    SEED_DEMO_USERS: bool = True

    # Token-based auth variant (secret provided to the token service at construction)
    AUTH_SECRET_VALUE: SecretStr = SecretStr(DEFAULT_AUTH_SECRET)
    JWT_ALGORITHM: str = "HS256"
    JWT_EXPIRE_MINUTES: int = 60

    @field_validator("SESSION_SECRET", "AUTH_SECRET_VALUE")
    @classmethod
    def validate_secret(cls, v: SecretStr) -> SecretStr:
        if not v.get_secret_value() or not v.get_secret_value().strip():
            raise ValueError("secrets must be set and non-empty")
        return v

    @field_validator("SESSION_MAX_AGE_SEC")
    @classmethod
    def validate_session_max_age(cls, v: int) -> int:
        if v < 1 or v > 604800:
            raise ValueError(
                "SESSION_MAX_AGE_SEC must be between 1 and 604800 (1 sec to 7 days)"
            )
        return v

    @field_validator("BCRYPT_ROUNDS")
    @classmethod
    def validate_bcrypt_rounds(cls, v: int) -> int:
        if v < 4 or v > 31:
            raise ValueError("BCRYPT_ROUNDS must be between 4 and 31")
        return v

    @field_validator("DATABASE_URL")
    @classmethod
    def validate_database_url(cls, v: str | None) -> str | None:
        if v is None or not v.strip():
            return None
        return v.strip()

    @field_validator("JWT_ALGORITHM")
    @classmethod
    def validate_jwt_algorithm(cls, v: str) -> str:
        if not v or not v.strip():
            raise ValueError("JWT_ALGORITHM must be set and non-empty")
        return v.strip()

    @field_validator("JWT_EXPIRE_MINUTES")
    @classmethod
    def validate_jwt_expire_minutes(cls, v: int) -> int:
        if v < 1 or v > 10080:
            raise ValueError(
                "JWT_EXPIRE_MINUTES must be between 1 and 10080 (1 min to 7 days)"
            )
        return v

    @model_validator(mode="after")
    def check_prod_secrets(self) -> "Settings":
        if self.APP_ENV != "prod":
            return self
        if self.SESSION_SECRET.get_secret_value() == DEFAULT_SESSION_SECRET:
            raise ValueError("SESSION_SECRET must be changed in prod")
        if self.AUTH_SECRET_VALUE.get_secret_value() == DEFAULT_AUTH_SECRET:
            raise ValueError("AUTH_SECRET_VALUE must be changed in prod")
        return self


@lru_cache
def get_settings() -> Settings:
    """Return cached settings instance (safe to call from dependencies)."""
    return Settings()


settings = get_settings()
