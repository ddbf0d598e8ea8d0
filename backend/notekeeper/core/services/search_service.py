from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Sequence

    from notekeeper.core.models.note import Note
    from notekeeper.core.repositories.note_repository import NoteRepository


class SearchService:
    """Service for searching notes.

    Keeps application logic (validation, defaults) outside transport layer.
    """

    def __init__(self, repo: NoteRepository) -> None:
        self._repo = repo

    async def search_notes(self, *, user_id: int, query: str | None) -> Sequence[Note]:
        """Case-insensitive substring search over title and content.

        A blank query matches nothing rather than everything.
        """
        if query is None or not query.strip():
            return []
        return await self._repo.search(user_id=user_id, query=query)
