from __future__ import annotations

from typing import TYPE_CHECKING

from fastapi import APIRouter, Depends, HTTPException, status

from notekeeper.api.errors import to_http_exception
from notekeeper.api.schemas.auth import (
    AuthResponse,
    LoginRequest,
    RegisterRequest,
)
from notekeeper.core.exceptions import NotekeeperError
from notekeeper.dependencies import get_auth_service
from notekeeper.utils.logging import get_logger

if TYPE_CHECKING:
    from notekeeper.core.services.auth_service import AuthService

logger = get_logger(__name__)

# Configure router with authentication-specific settings
router = APIRouter(
    responses={
        400: {"description": "Invalid request"},
        401: {"description": "Invalid email or password"},
        409: {"description": "Username or email already exists"},
    }
)


@router.post("/register", response_model=AuthResponse, status_code=status.HTTP_201_CREATED)
async def register(
    payload: RegisterRequest,
    auth_service: AuthService = Depends(get_auth_service),
):
    """Register with username, email and password."""
    try:
        return await auth_service.register(payload)
    except HTTPException:
        raise
    except (ValueError, NotekeeperError) as err:
        raise to_http_exception(err) from err
    except Exception as err:
        logger.error("Unexpected error during registration", extra={"error": str(err)})
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Internal server error during registration",
        ) from err


@router.post("/login", response_model=AuthResponse)
async def login(
    payload: LoginRequest,
    auth_service: AuthService = Depends(get_auth_service),
):
    """Log in with email and password."""
    try:
        return await auth_service.login(payload)
    except HTTPException:
        raise
    except (ValueError, NotekeeperError) as err:
        raise to_http_exception(err) from err
    except Exception as err:
        logger.error("Unexpected error during login", extra={"error": str(err)})
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Internal server error during login",
        ) from err
