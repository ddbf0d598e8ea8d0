from __future__ import annotations

from typing import TYPE_CHECKING

from fastapi import Depends, HTTPException, Request, status

from notekeeper.core.repositories.implementations.sql.note_repository import SqlNoteRepository
from notekeeper.core.repositories.implementations.sql.user_repository import SqlUserRepository
from notekeeper.core.schemas.auth import AuthUser
from notekeeper.core.services.auth_service import AuthService
from notekeeper.core.services.note_service import NoteService
from notekeeper.core.services.search_service import SearchService
from notekeeper.core.services.summary_service import SummaryService
from notekeeper.utils.logging import get_logger
from notekeeper.utils.security import InvalidTokenError, extract_bearer_token

logger = get_logger(__name__)

if TYPE_CHECKING:
    from collections.abc import Iterator

    from sqlalchemy.orm import Session

    from notekeeper.config import Settings
    from notekeeper.core.repositories.note_repository import NoteRepository
    from notekeeper.core.repositories.user_repository import UserRepository
    from notekeeper.core.services.summary_service import Summarizer
    from notekeeper.db.base import Database
    from notekeeper.utils.security import TokenCodec


def get_settings(request: Request) -> Settings:
    return request.app.state.settings


def get_token_codec(request: Request) -> TokenCodec:
    return request.app.state.token_codec


def get_summarizer(request: Request) -> Summarizer | None:
    """Return the configured summarizer, or None when AI summaries are disabled."""
    return request.app.state.summarizer


def get_database(request: Request) -> Database:
    """Return the database, answering 503 until its schema is in place."""
    database: Database = request.app.state.database
    if not database.is_ready:
        logger.warning("Request rejected, database not ready", extra={"path": request.url.path})
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="Database is not available. Please try again later.",
        )
    return database


def get_db_session(database: Database = Depends(get_database)) -> Iterator[Session]:
    """Yield a request-scoped session and close it after the response."""
    session = database.session()
    try:
        yield session
    finally:
        session.close()


def get_user_repository(session: Session = Depends(get_db_session)) -> UserRepository:
    return SqlUserRepository(session)


def get_note_repository(session: Session = Depends(get_db_session)) -> NoteRepository:
    """Get a request-scoped note repository instance using the request session."""
    return SqlNoteRepository(session)


def get_note_service(repo: NoteRepository = Depends(get_note_repository)) -> NoteService:
    """Get a request-scoped note service instance."""
    return NoteService(repo)


def get_search_service(repo: NoteRepository = Depends(get_note_repository)) -> SearchService:
    """Get a request-scoped search service instance."""
    return SearchService(repo)


def get_summary_service(
    repo: NoteRepository = Depends(get_note_repository),
    summarizer: Summarizer | None = Depends(get_summarizer),
) -> SummaryService:
    return SummaryService(repo, summarizer)


def get_auth_service(
    users: UserRepository = Depends(get_user_repository),
    tokens: TokenCodec = Depends(get_token_codec),
) -> AuthService:
    """Get a request-scoped auth service instance."""
    return AuthService(users, tokens)


async def get_current_user(
    request: Request,
    tokens: TokenCodec = Depends(get_token_codec),
) -> AuthUser:
    """Verify the bearer token and return the authenticated user."""
    token = extract_bearer_token(request.headers.get("authorization"))
    if not token:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Authentication required",
            headers={"WWW-Authenticate": "Bearer"},
        )
    try:
        claims = tokens.verify(token)
    except InvalidTokenError as err:
        logger.warning(
            "JWT validation failed",
            extra={
                "error_type": type(err.__cause__ or err).__name__,
                "jwt_length": len(token),
            }
        )
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=err.message,
            headers={"WWW-Authenticate": "Bearer"},
        ) from err
    return AuthUser.from_claims(claims)
