from __future__ import annotations

from typing import TYPE_CHECKING, Any

from sqlalchemy import delete, or_, select, update

from notekeeper.core.models.base import utcnow
from notekeeper.core.models.note import Note
from notekeeper.core.repositories.note_repository import NoteRepository
from notekeeper.core.schemas.note import PATCHABLE_FIELDS
from notekeeper.db.tables import NoteRow
from notekeeper.utils.logging import get_logger

logger = get_logger(__name__)

if TYPE_CHECKING:
    from collections.abc import Callable, Sequence

    from sqlalchemy.orm import Session
    from sqlalchemy.sql import Select

    from notekeeper.core.schemas.note import NoteFilters

LIKE_ESCAPE = "\\"

# Ids outside SQLite's signed 64-bit INTEGER cannot name a row
MAX_ROW_ID = 2**63 - 1


def escape_like(term: str) -> str:
    """Escape LIKE wildcards so user input matches literally."""
    return (
        term.replace(LIKE_ESCAPE, LIKE_ESCAPE * 2)
        .replace("%", LIKE_ESCAPE + "%")
        .replace("_", LIKE_ESCAPE + "_")
    )


def _is_row_id(note_id: int) -> bool:
    return -MAX_ROW_ID - 1 <= note_id <= MAX_ROW_ID


class SqlNoteRepository(NoteRepository):
    """SQLAlchemy implementation of the NoteRepository.

    The session is synchronous; every call is pushed to a worker thread so
    the event loop never blocks on database I/O.
    """

    def __init__(self, session: Session) -> None:
        self._session = session

    async def create(
        self,
        *,
        user_id: int,
        title: str,
        content: str,
        color_tag: str | None,
    ) -> Note:
        def _insert() -> NoteRow:
            now = utcnow()
            row = NoteRow(
                user_id=user_id,
                title=title,
                content=content,
                color_tag=color_tag,
                is_pinned=False,
                is_archived=False,
                created_at=now,
                updated_at=now,
            )
            self._session.add(row)
            self._session.commit()
            self._session.refresh(row)
            return row

        row = await self._run(_insert)
        return self._row_to_note(row)

    async def get(self, note_id: int, *, user_id: int) -> Note | None:
        if not _is_row_id(note_id):
            return None
        row = await self._run(lambda: self._get_row(note_id, user_id))
        if row is None:
            return None
        return self._row_to_note(row)

    async def list(self, *, user_id: int, filters: NoteFilters) -> Sequence[Note]:
        def _query():
            q = select(NoteRow).where(NoteRow.user_id == user_id)
            if filters.archived is None:
                q = q.where(NoteRow.is_archived.is_(False))
            else:
                q = q.where(NoteRow.is_archived.is_(filters.archived))
            if filters.pinned is not None:
                q = q.where(NoteRow.is_pinned.is_(filters.pinned))
            if filters.color:
                q = q.where(NoteRow.color_tag == filters.color)
            return self._session.scalars(self._ordered(q)).all()

        rows = await self._run(_query)
        return [self._row_to_note(r) for r in rows]

    async def search(self, *, user_id: int, query: str) -> Sequence[Note]:
        pattern = f"%{escape_like(query)}%"

        def _query():
            q = (
                select(NoteRow)
                .where(NoteRow.user_id == user_id)
                .where(NoteRow.is_archived.is_(False))
                .where(
                    or_(
                        NoteRow.title.ilike(pattern, escape=LIKE_ESCAPE),
                        NoteRow.content.ilike(pattern, escape=LIKE_ESCAPE),
                    )
                )
            )
            return self._session.scalars(self._ordered(q)).all()

        rows = await self._run(_query)
        return [self._row_to_note(r) for r in rows]

    async def update_fields(
        self, note_id: int, changes: dict[str, Any], *, user_id: int
    ) -> Note | None:
        # Only whitelisted columns are ever written; id, user_id and timestamps are not patchable
        if not _is_row_id(note_id):
            return None
        sanitized = {k: v for k, v in (changes or {}).items() if k in PATCHABLE_FIELDS}
        if not sanitized:
            return await self.get(note_id, user_id=user_id)

        def _update() -> NoteRow | None:
            result = self._session.execute(
                update(NoteRow)
                .where(NoteRow.id == note_id, NoteRow.user_id == user_id)
                .values(**sanitized, updated_at=utcnow())
                .execution_options(synchronize_session=False)
            )
            self._session.commit()
            if result.rowcount == 0:
                return None
            return self._get_row(note_id, user_id)

        row = await self._run(_update)
        if row is None:
            return None
        return self._row_to_note(row)

    async def set_summary_if_absent(
        self, note_id: int, summary: str, *, user_id: int
    ) -> Note | None:
        if not _is_row_id(note_id):
            return None

        def _update() -> NoteRow | None:
            result = self._session.execute(
                update(NoteRow)
                .where(
                    NoteRow.id == note_id,
                    NoteRow.user_id == user_id,
                    NoteRow.summary.is_(None),
                )
                .values(summary=summary)
                .execution_options(synchronize_session=False)
            )
            self._session.commit()
            if result.rowcount == 0:
                logger.info("Summary already stored, keeping existing value", extra={"note_id": note_id})
            return self._get_row(note_id, user_id)

        row = await self._run(_update)
        if row is None:
            return None
        return self._row_to_note(row)

    async def delete(self, note_id: int, *, user_id: int) -> bool:
        if not _is_row_id(note_id):
            return False

        def _delete() -> int:
            result = self._session.execute(
                delete(NoteRow)
                .where(NoteRow.id == note_id, NoteRow.user_id == user_id)
                .execution_options(synchronize_session=False)
            )
            self._session.commit()
            return result.rowcount

        deleted = await self._run(_delete)
        return deleted > 0

    def _get_row(self, note_id: int, user_id: int) -> NoteRow | None:
        return self._session.scalars(
            select(NoteRow)
            .where(NoteRow.id == note_id, NoteRow.user_id == user_id)
            .limit(1)
            .execution_options(populate_existing=True)
        ).first()

    @staticmethod
    def _ordered(q: Select) -> Select:
        return q.order_by(
            NoteRow.is_pinned.desc(),
            NoteRow.updated_at.desc(),
            NoteRow.id.desc(),
        )

    async def _run(self, func: Callable[[], Any]) -> Any:
        import asyncio
        try:
            return await asyncio.to_thread(func)
        except Exception:
            await asyncio.to_thread(self._session.rollback)
            raise

    @staticmethod
    def _row_to_note(row: NoteRow) -> Note:
        return Note.model_validate(row)
