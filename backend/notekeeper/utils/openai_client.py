from __future__ import annotations

from typing import TYPE_CHECKING

from openai import AsyncOpenAI

from notekeeper.utils.logging import get_logger

if TYPE_CHECKING:
    from notekeeper.config import Settings


def build_openai_client(settings: Settings) -> AsyncOpenAI | None:
    """Return an OpenAI client, or None when no API key is configured.

    Only ``APP_OPENAI_API_KEY`` enables the client; the bare OPENAI_API_KEY
    environment variable is not consulted so the feature stays opt-in.
    """
    logger = get_logger(__name__)
    if not settings.openai_api_key:
        logger.info("APP_OPENAI_API_KEY not set, AI summaries are disabled")
        return None
    logger.debug("Initializing OpenAI client with APP_OPENAI_API_KEY")
    return AsyncOpenAI(api_key=settings.openai_api_key)
