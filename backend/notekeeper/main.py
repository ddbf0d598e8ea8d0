from __future__ import annotations

from contextlib import asynccontextmanager
from datetime import timedelta

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from starlette.middleware.gzip import GZipMiddleware
from starlette.middleware.trustedhost import TrustedHostMiddleware
from uvicorn.middleware.proxy_headers import ProxyHeadersMiddleware

from . import __version__
from .api.errors import register_exception_handlers
from .api.middleware.security import SecurityMiddleware
from .api.router import api_router
from .config import DEFAULT_JWT_SECRET, Settings, settings as default_settings
from .core.services.summary_service import OpenAISummarizer
from .db.base import Database
from .utils.logging import get_logger, setup_logging
from .utils.openai_client import build_openai_client
from .utils.security import TokenCodec

logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    # Schema creation finishes before the server accepts traffic
    database: Database = app.state.database
    try:
        await database.initialize()
    except Exception as err:
        logger.error("Failed to initialize database", extra={"error": str(err)})
        raise
    try:
        yield
    finally:
        database.dispose()


def create_app(settings: Settings | None = None) -> FastAPI:
    settings = settings or default_settings
    setup_logging(settings)

    if settings.jwt_secret == DEFAULT_JWT_SECRET:
        logger.warning("Using the default JWT secret; set APP_JWT_SECRET in production")

    app = FastAPI(
        title="Notekeeper API",
        debug=settings.debug,
        version=__version__,
        root_path=settings.root_path or "",
        lifespan=lifespan,
    )

    app.state.settings = settings
    app.state.database = Database(settings.database_url, echo=settings.database_echo)
    app.state.token_codec = TokenCodec(
        settings.jwt_secret,
        algorithm=settings.jwt_algorithm,
        lifetime=timedelta(minutes=settings.jwt_expires_minutes),
    )
    openai_client = build_openai_client(settings)
    app.state.summarizer = (
        OpenAISummarizer(
            openai_client,
            model=settings.summary_model,
            max_tokens=settings.summary_max_tokens,
            temperature=settings.summary_temperature,
        )
        if openai_client is not None
        else None
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_origin_regex=settings.cors_origin_regex,
        allow_credentials=True,
        allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
        allow_headers=[
            "Accept",
            "Accept-Language",
            "Content-Language",
            "Content-Type",
            "Authorization",
            "X-Requested-With",
        ],
        max_age=600,  # Cache preflight requests for 10 minutes
    )

    # Proxy headers (X-Forwarded-*) when behind a reverse proxy
    app.add_middleware(ProxyHeadersMiddleware, trusted_hosts=["*"])

    # Trusted hosts (configure in env for production)
    app.add_middleware(TrustedHostMiddleware, allowed_hosts=settings.trusted_hosts)

    # GZip compression
    app.add_middleware(GZipMiddleware, minimum_size=1000)

    app.add_middleware(SecurityMiddleware, auth_path_prefix=f"{settings.api_prefix}/auth")

    register_exception_handlers(app)
    app.include_router(api_router, prefix=settings.api_prefix)
    return app


app = create_app()
