from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from collections.abc import Sequence

    from notekeeper.core.models.note import Note
    from notekeeper.core.schemas.note import NoteFilters


class NoteRepository(ABC):
    """Abstract repository interface for notes.

    Contract used by services and dependency injection. Every method is scoped
    by ``user_id``: a note owned by another user is indistinguishable from a
    missing one. Implementations perform I/O and therefore expose async methods.
    """

    @abstractmethod
    async def create(
        self,
        *,
        user_id: int,
        title: str,
        content: str,
        color_tag: str | None,
    ) -> Note:  # pragma: no cover - interface only
        """Persist a new note and return the stored entity."""

    @abstractmethod
    async def get(self, note_id: int, *, user_id: int) -> Note | None:  # pragma: no cover
        """Fetch an owned note by id or return None."""

    @abstractmethod
    async def list(self, *, user_id: int, filters: NoteFilters) -> Sequence[Note]:  # pragma: no cover
        """Return the user's notes, pinned first, then most recently updated first.

        Archived notes are excluded unless ``filters.archived`` is set.
        """

    @abstractmethod
    async def search(self, *, user_id: int, query: str) -> Sequence[Note]:  # pragma: no cover
        """Substring match on title or content over non-archived notes, list ordering."""

    @abstractmethod
    async def update_fields(
        self, note_id: int, changes: dict[str, Any], *, user_id: int
    ) -> Note | None:  # pragma: no cover
        """Write the given columns plus ``updated_at`` and return the fresh row, or None if missing."""

    @abstractmethod
    async def set_summary_if_absent(
        self, note_id: int, summary: str, *, user_id: int
    ) -> Note | None:  # pragma: no cover
        """Store ``summary`` only when none is stored yet; return the resulting note."""

    @abstractmethod
    async def delete(self, note_id: int, *, user_id: int) -> bool:  # pragma: no cover
        """Delete an owned note. Return True if a row was removed, False otherwise."""
