from __future__ import annotations

from typing import TYPE_CHECKING

from fastapi import APIRouter, Depends, HTTPException, Query, status

from notekeeper.api.errors import to_http_exception
from notekeeper.api.schemas.note import (
    MessageResponse,
    NoteCreate,
    NoteListResponse,
    NoteRead,
    NoteResponse,
    NoteUpdate,
)
from notekeeper.core.exceptions import NotekeeperError
from notekeeper.core.schemas.note import NoteFilters
from notekeeper.dependencies import (
    get_current_user,
    get_note_service,
    get_search_service,
)
from notekeeper.utils.logging import get_logger
from notekeeper.utils.validation import parse_bool_flag

if TYPE_CHECKING:
    from notekeeper.core.schemas.auth import AuthUser
    from notekeeper.core.services.note_service import NoteService
    from notekeeper.core.services.search_service import SearchService

logger = get_logger(__name__)

router = APIRouter()


def _internal_error(message: str, err: Exception) -> HTTPException:
    logger.error(message, extra={"error_type": type(err).__name__, "error": str(err)})
    return HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=message)


@router.get("", response_model=NoteListResponse)
async def list_notes(
    color: str | None = Query(default=None, description="Only notes with this color tag"),
    archived: str | None = Query(default=None, description="true: only archived, false/omitted: only active"),
    pinned: str | None = Query(default=None, description="true/false: filter by pinned state"),
    current_user: AuthUser = Depends(get_current_user),
    service: NoteService = Depends(get_note_service),
):
    filters = NoteFilters(
        color=color or None,
        archived=parse_bool_flag(archived),
        pinned=parse_bool_flag(pinned),
    )
    try:
        notes = await service.list_notes(current_user.id, filters)
    except Exception as err:
        raise _internal_error("Error fetching notes", err) from err
    return NoteListResponse(notes=[NoteRead.model_validate(n) for n in notes])


# Registered before /{note_id} so "search" is never parsed as an id
@router.get("/search", response_model=NoteListResponse)
async def search_notes(
    q: str | None = Query(default=None, description="Substring to look for in title or content"),
    current_user: AuthUser = Depends(get_current_user),
    service: SearchService = Depends(get_search_service),
):
    """Search the user's active notes.

    Matching is a case-insensitive substring match on title or content.
    """
    try:
        notes = await service.search_notes(user_id=current_user.id, query=q)
    except Exception as err:
        raise _internal_error("Error searching notes", err) from err
    return NoteListResponse(notes=[NoteRead.model_validate(n) for n in notes])


@router.get("/{note_id}", response_model=NoteResponse)
async def get_note(
    note_id: int,
    current_user: AuthUser = Depends(get_current_user),
    service: NoteService = Depends(get_note_service),
):
    try:
        note = await service.get_note(note_id, current_user.id)
    except NotekeeperError as err:
        raise to_http_exception(err) from err
    except Exception as err:
        raise _internal_error("Error fetching note", err) from err
    return NoteResponse(note=NoteRead.model_validate(note))


@router.post("", response_model=NoteResponse, status_code=status.HTTP_201_CREATED)
async def create_note(
    payload: NoteCreate,
    current_user: AuthUser = Depends(get_current_user),
    service: NoteService = Depends(get_note_service),
):
    try:
        note = await service.create_note(payload, user_id=current_user.id)
    except (ValueError, NotekeeperError) as err:
        raise to_http_exception(err) from err
    except Exception as err:
        raise _internal_error("Error creating note", err) from err
    return NoteResponse(message="Note created successfully", note=NoteRead.model_validate(note))


@router.put("/{note_id}", response_model=NoteResponse)
async def update_note(
    note_id: int,
    payload: NoteUpdate,
    current_user: AuthUser = Depends(get_current_user),
    service: NoteService = Depends(get_note_service),
):
    try:
        note = await service.update_note(note_id, payload, user_id=current_user.id)
    except (ValueError, NotekeeperError) as err:
        raise to_http_exception(err) from err
    except Exception as err:
        raise _internal_error("Error updating note", err) from err
    return NoteResponse(message="Note updated successfully", note=NoteRead.model_validate(note))


@router.delete("/{note_id}", response_model=MessageResponse)
async def delete_note(
    note_id: int,
    current_user: AuthUser = Depends(get_current_user),
    service: NoteService = Depends(get_note_service),
):
    try:
        await service.delete_note(note_id, user_id=current_user.id)
    except NotekeeperError as err:
        raise to_http_exception(err) from err
    except Exception as err:
        raise _internal_error("Error deleting note", err) from err
    return MessageResponse(message="Note deleted successfully")
