from __future__ import annotations

from pydantic import ConfigDict, Field

from notekeeper.core.models.base import AppBaseModel


class TokenClaims(AppBaseModel):
    """Identity claims carried inside a session token."""

    # Registered claims (iat, exp) sit next to ours in the payload
    model_config = ConfigDict(extra="ignore")

    user_id: int = Field(..., alias="userId")
    username: str
    email: str


class AuthUser(AppBaseModel):
    """Authenticated user extracted from a verified session token."""

    id: int
    username: str
    email: str

    @classmethod
    def from_claims(cls, claims: TokenClaims) -> AuthUser:
        return cls(id=claims.user_id, username=claims.username, email=claims.email)
