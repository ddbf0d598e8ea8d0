from __future__ import annotations

from fastapi import APIRouter, Request, status
from fastapi.responses import JSONResponse

from notekeeper import __version__

router = APIRouter()


@router.get("")
async def health_check():
    """Health check endpoint."""
    return JSONResponse(
        status_code=status.HTTP_200_OK,
        content={
            "success": True,
            "status": "healthy",
            "service": "notekeeper-api",
            "version": __version__,
        }
    )


@router.get("/ready")
async def readiness_check(request: Request):
    """Readiness check endpoint. 503 until the database schema exists."""
    database_ready = request.app.state.database.is_ready
    ai_available = request.app.state.summarizer is not None

    return JSONResponse(
        status_code=status.HTTP_200_OK if database_ready else status.HTTP_503_SERVICE_UNAVAILABLE,
        content={
            "success": database_ready,
            "status": "ready" if database_ready else "starting",
            "database": "connected" if database_ready else "initializing",
            "ai_service": "available" if ai_available else "unavailable",
            "api_prefix": request.app.state.settings.api_prefix,
        }
    )
