from __future__ import annotations

from datetime import datetime  # noqa: TCH003

from pydantic import Field

from .base import AppBaseModel


class User(AppBaseModel):
    """User domain model. Carries the password hash, never serialize it to clients."""

    id: int
    username: str
    email: str
    password_hash: str = Field(..., repr=False)
    created_at: datetime
