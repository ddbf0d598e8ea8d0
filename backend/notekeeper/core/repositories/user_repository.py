from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from notekeeper.core.models.user import User


class UserRepository(ABC):
    """Abstract repository interface for user accounts."""

    @abstractmethod
    async def create(self, *, username: str, email: str, password_hash: str) -> User:  # pragma: no cover
        """Insert a user. Raises ``ConflictError`` if username or email is taken."""

    @abstractmethod
    async def get_by_email(self, email: str) -> User | None:  # pragma: no cover
        ...

    @abstractmethod
    async def exists(self, *, username: str, email: str) -> bool:  # pragma: no cover
        """True if any user already has this username or this email."""

    @abstractmethod
    async def delete(self, user_id: int) -> bool:  # pragma: no cover
        """Delete a user and, through the foreign key, all of their notes."""
