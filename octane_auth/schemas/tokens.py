"""Token result schemas."""

from pydantic import BaseModel, ConfigDict


class TokenPair(BaseModel):
    """Access/refresh token pair returned by issue and refresh operations."""

    model_config = ConfigDict(frozen=True)

    access_token: str
    refresh_token: str
