from __future__ import annotations

from typing import TYPE_CHECKING, Protocol

from notekeeper.core.exceptions import FeatureUnavailableError, NotFoundError
from notekeeper.utils.logging import get_logger

if TYPE_CHECKING:
    from openai import AsyncOpenAI

    from notekeeper.core.repositories.note_repository import NoteRepository

logger = get_logger(__name__)

SYSTEM_PROMPT = "You are a helpful assistant that summarizes notes concisely."
SUMMARY_PROMPT_TEMPLATE = (
    "Please provide a concise summary of the following note in 2-3 sentences:"
    "\n\nTitle: {title}\n\nContent: {content}"
)


def build_summary_prompt(title: str, content: str) -> str:
    return SUMMARY_PROMPT_TEMPLATE.format(title=title, content=content)


class Summarizer(Protocol):
    async def summarize(self, *, title: str, content: str) -> str: ...


class OpenAISummarizer:
    """Summarizes a note through the OpenAI chat completions API."""

    def __init__(
        self,
        client: AsyncOpenAI,
        *,
        model: str = "gpt-3.5-turbo",
        max_tokens: int = 150,
        temperature: float = 0.7,
    ) -> None:
        self._client = client
        self._model = model
        self._max_tokens = max_tokens
        self._temperature = temperature

    async def summarize(self, *, title: str, content: str) -> str:
        logger.info("Requesting summary from OpenAI", extra={"model": self._model})
        completion = await self._client.chat.completions.create(
            model=self._model,
            messages=[
                {"role": "system", "content": SYSTEM_PROMPT},
                {"role": "user", "content": build_summary_prompt(title, content)},
            ],
            max_tokens=self._max_tokens,
            temperature=self._temperature,
        )
        text = (completion.choices[0].message.content or "").strip()
        if not text:
            raise RuntimeError("OpenAI returned an empty summary")
        return text


class SummaryService:
    """Get-or-generate note summaries, cached in the note row."""

    def __init__(self, repo: NoteRepository, summarizer: Summarizer | None) -> None:
        self._repo = repo
        self._summarizer = summarizer

    async def summarize_note(self, note_id: int, user_id: int) -> tuple[str, bool]:
        """Return ``(summary, cached)`` for an owned note.

        A stored summary is returned as-is. Otherwise one is generated, stored
        only if the row still has none, and the stored value is returned.
        """
        if self._summarizer is None:
            raise FeatureUnavailableError(
                "AI summarization is not available. Please configure APP_OPENAI_API_KEY."
            )

        note = await self._repo.get(note_id, user_id=user_id)
        if note is None:
            raise NotFoundError("Note not found")

        if note.summary:
            return note.summary, True

        summary = await self._summarizer.summarize(title=note.title, content=note.content)

        stored = await self._repo.set_summary_if_absent(note_id, summary, user_id=user_id)
        if stored is None:
            raise NotFoundError("Note not found")
        logger.info("Summary generated", extra={"note_id": note_id, "user_id": user_id})
        return stored.summary or summary, False
