from __future__ import annotations

from typing import TYPE_CHECKING

from fastapi import APIRouter, Depends, HTTPException, status

from notekeeper.api.errors import to_http_exception
from notekeeper.api.schemas.note import SummaryResponse
from notekeeper.core.exceptions import NotekeeperError
from notekeeper.dependencies import get_current_user, get_summary_service
from notekeeper.utils.logging import get_logger

if TYPE_CHECKING:
    from notekeeper.core.schemas.auth import AuthUser
    from notekeeper.core.services.summary_service import SummaryService

logger = get_logger(__name__)

router = APIRouter()


@router.post("/notes/{note_id}/summarize", response_model=SummaryResponse)
async def summarize_note(
    note_id: int,
    current_user: AuthUser = Depends(get_current_user),
    service: SummaryService = Depends(get_summary_service),
):
    """Return the note's summary, generating and caching it on first request."""
    try:
        summary, cached = await service.summarize_note(note_id, current_user.id)
    except NotekeeperError as err:
        raise to_http_exception(err) from err
    except Exception as err:
        logger.error(
            "Error generating summary",
            extra={"note_id": note_id, "error_type": type(err).__name__, "error": str(err)},
        )
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Error generating summary",
        ) from err
    return SummaryResponse(summary=summary, cached=cached)
