"""Configuration management using pydantic-settings."""

from datetime import timedelta
from typing import Literal

from pydantic import Field, field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from .utils.duration import parse_duration

# Upper bound on token lifetimes; keeps iat + lifetime inside datetime range.
MAX_EXPIRATION = timedelta(days=100 * 365)


class AuthSettings(BaseSettings):
    """Authenticator settings.

    Keyword arguments take precedence, then OCTANE_AUTH_* environment
    variables, then a .env file. The instance is frozen once built.
    """

    # JWT Configuration
    # Secrets have no fallback value: a missing or blank secret fails fast.
    jwt_secret: str
    refresh_secret: str
    token_expiration: timedelta = timedelta(hours=1)
    refresh_token_expiration: timedelta = timedelta(days=7)
    # Only HMAC algorithms work with shared string secrets
    algorithm: Literal["HS256", "HS384", "HS512"] = "HS256"
    issuer: str = "octane-auth"

    # Bcrypt work factor (higher = more secure but slower)
    # For tests, use 4 for faster execution while maintaining functionality
    salt_rounds: int = Field(default=10, ge=4, le=31)

    # The .env file belongs to the host application; keys for other
    # components are ignored.
    model_config = SettingsConfigDict(
        env_prefix="OCTANE_AUTH_",
        env_file=".env",
        case_sensitive=False,
        extra="ignore",
        frozen=True,
    )

    @field_validator("jwt_secret", "refresh_secret")
    @classmethod
    def secret_not_blank(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("Secret must not be empty")
        return v

    @field_validator("token_expiration", "refresh_token_expiration", mode="before")
    @classmethod
    def parse_expiration(cls, v):
        try:
            return parse_duration(v)
        except TypeError as e:
            raise ValueError(str(e)) from e

    @field_validator("token_expiration", "refresh_token_expiration")
    @classmethod
    def expiration_in_range(cls, v: timedelta) -> timedelta:
        if v > MAX_EXPIRATION:
            raise ValueError(f"Expiration must not exceed {MAX_EXPIRATION.days} days")
        return v

    @model_validator(mode="after")
    def secrets_are_independent(self):
        if self.jwt_secret == self.refresh_secret:
            raise ValueError("jwt_secret and refresh_secret must differ")
        return self
