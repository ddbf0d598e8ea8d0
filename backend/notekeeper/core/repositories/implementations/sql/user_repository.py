from __future__ import annotations

from typing import TYPE_CHECKING, Any

from sqlalchemy import delete, or_, select
from sqlalchemy.exc import IntegrityError

from notekeeper.core.exceptions import ConflictError
from notekeeper.core.models.base import utcnow
from notekeeper.core.models.user import User
from notekeeper.core.repositories.user_repository import UserRepository
from notekeeper.db.tables import UserRow
from notekeeper.utils.logging import get_logger

logger = get_logger(__name__)

if TYPE_CHECKING:
    from collections.abc import Callable

    from sqlalchemy.orm import Session


class SqlUserRepository(UserRepository):
    """SQLAlchemy implementation of the UserRepository."""

    def __init__(self, session: Session) -> None:
        self._session = session

    async def create(self, *, username: str, email: str, password_hash: str) -> User:
        def _insert() -> UserRow:
            row = UserRow(
                username=username,
                email=email,
                password_hash=password_hash,
                created_at=utcnow(),
            )
            self._session.add(row)
            try:
                self._session.commit()
            except IntegrityError as err:
                # Lost the race against a concurrent registration with the same username/email
                self._session.rollback()
                logger.warning("User insert hit a uniqueness constraint", extra={"username": username})
                raise ConflictError() from err
            self._session.refresh(row)
            return row

        row = await self._run(_insert)
        return User.model_validate(row)

    async def get_by_email(self, email: str) -> User | None:
        row = await self._run(
            lambda: self._session.scalars(
                select(UserRow).where(UserRow.email == email).limit(1)
            ).first()
        )
        if row is None:
            return None
        return User.model_validate(row)

    async def exists(self, *, username: str, email: str) -> bool:
        row_id = await self._run(
            lambda: self._session.scalars(
                select(UserRow.id)
                .where(or_(UserRow.username == username, UserRow.email == email))
                .limit(1)
            ).first()
        )
        return row_id is not None

    async def delete(self, user_id: int) -> bool:
        def _delete() -> int:
            result = self._session.execute(delete(UserRow).where(UserRow.id == user_id))
            self._session.commit()
            return result.rowcount

        deleted = await self._run(_delete)
        return deleted > 0

    async def _run(self, func: Callable[[], Any]) -> Any:
        import asyncio
        try:
            return await asyncio.to_thread(func)
        except Exception:
            await asyncio.to_thread(self._session.rollback)
            raise
