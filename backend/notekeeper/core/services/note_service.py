from __future__ import annotations

from typing import TYPE_CHECKING

from notekeeper.core.exceptions import NotFoundError
from notekeeper.core.schemas.note import NoteFilters, NotePatch
from notekeeper.utils.logging import get_logger

if TYPE_CHECKING:
    from collections.abc import Sequence

    from notekeeper.api.schemas.note import NoteCreate, NoteUpdate
    from notekeeper.core.models.note import Note
    from notekeeper.core.repositories.note_repository import NoteRepository

logger = get_logger(__name__)


class NoteService:
    """Service for managing notes with owner-scoped access."""

    def __init__(self, repo: NoteRepository) -> None:
        self._repo = repo

    async def create_note(self, create_dto: NoteCreate, user_id: int) -> Note:
        """Create a note for a specific user. Title and content are required."""
        title = (create_dto.title or "").strip()
        content = (create_dto.content or "").strip()
        if not title or not content:
            raise ValueError("Title and content are required")

        note = await self._repo.create(
            user_id=user_id,
            title=title,
            content=content,
            color_tag=(create_dto.color_tag or "").strip() or None,
        )
        logger.info("Note created", extra={"note_id": note.id, "user_id": user_id})
        return note

    async def get_note(self, note_id: int, user_id: int) -> Note:
        """Return the note if it exists and belongs to the user.

        Raises NotFoundError otherwise; another user's note looks missing.
        """
        note = await self._repo.get(note_id, user_id=user_id)
        if note is None:
            raise NotFoundError("Note not found")
        return note

    async def list_notes(self, user_id: int, filters: NoteFilters | None = None) -> Sequence[Note]:
        """List notes for the given user, pinned first, then newest-updated first."""
        return await self._repo.list(user_id=user_id, filters=filters or NoteFilters())

    async def update_note(self, note_id: int, update_dto: NoteUpdate, user_id: int) -> Note:
        """Apply the fields present in ``update_dto`` to a user's note.

        Ownership is checked before anything else. An update with no fields
        is rejected without touching the row, so ``updated_at`` stays put.
        """
        await self.get_note(note_id, user_id)

        patch = NotePatch.model_validate(update_dto.model_dump(exclude_unset=True))
        if patch.is_empty:
            raise ValueError("No fields to update")

        updated = await self._repo.update_fields(note_id, patch.changes(), user_id=user_id)
        if updated is None:
            # Deleted between the ownership check and the write
            raise NotFoundError("Note not found")
        return updated

    async def delete_note(self, note_id: int, user_id: int) -> None:
        """Delete a user's note if it exists and belongs to them."""
        deleted = await self._repo.delete(note_id, user_id=user_id)
        if not deleted:
            raise NotFoundError("Note not found")
        logger.info("Note deleted", extra={"note_id": note_id, "user_id": user_id})
