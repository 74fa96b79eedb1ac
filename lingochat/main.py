"""FastAPI application entrypoint.

REST routes are prefixed /api; the real-time channel is the WebSocket at /ws.
Auto-generated OpenAPI docs at /docs.

The translator, room broadcaster and message ingestion pipeline are created
once during the lifespan and stored on app.state for injection via Depends()
(REST) or ``websocket.app.state`` (real-time channel).
"""

import asyncio
from contextlib import asynccontextmanager
import logging
from typing import AsyncGenerator

import structlog
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from lingochat.api.v1.auth import router as auth_router
from lingochat.api.v1.health import router as health_router
from lingochat.api.v1.messages import router as messages_router
from lingochat.api.v1.realtime import router as realtime_router
from lingochat.api.v1.rooms import router as rooms_router
from lingochat.api.v1.users import router as users_router
from lingochat.core.config import DEFAULT_JWT_SECRET, settings
from lingochat.core.exceptions import InvalidPayloadError, LingoChatError
from lingochat.db.database import async_session_factory, close_database
from lingochat.db.redis import RedisClient, close_redis, get_redis
from lingochat.services.chat.broadcaster import RoomBroadcaster
from lingochat.services.chat.ingestion import MessageIngestionPipeline
from lingochat.services.language.orchestrator import AutoTranslator
from lingochat.services.language.translator import Translator, build_translator
from lingochat.services.llm.base import LLMProvider
from lingochat.services.llm.gemini import GeminiProvider


def _configure_logging() -> None:
    level = getattr(logging, settings.log_level.upper(), logging.INFO)
    structlog.configure(
        wrapper_class=structlog.make_filtering_bound_logger(level),
        cache_logger_on_first_use=True,
    )
    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)


_configure_logging()

logger = structlog.get_logger(__name__)


def create_app(
    *,
    session_factory: async_sessionmaker[AsyncSession] | None = None,
    translator: Translator | None = None,
    broadcaster: RoomBroadcaster | None = None,
) -> FastAPI:
    """Build the application.

    Arguments override the collaborators the lifespan would otherwise build
    from settings; tests pass an SQLite session factory and a lookup
    translator here.
    """

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
        """Application startup and shutdown lifecycle."""
        # --- Startup ---
        logger.info("app_startup", env=settings.app_env)
        if settings.is_production and settings.jwt_secret_key == DEFAULT_JWT_SECRET:
            logger.warning("jwt_secret_is_default")

        redis: RedisClient | None = None
        active_translator = translator
        if active_translator is None:
            llm: LLMProvider | None = None
            if settings.translator_backend == "llm":
                llm = GeminiProvider(
                    api_key=settings.gemini_api_key,
                    model=settings.gemini_model,
                    timeout_seconds=settings.llm_timeout_seconds,
                )
                if settings.translation_cache_enabled:
                    redis = get_redis()
            active_translator = build_translator(settings, llm=llm, redis=redis)

        app.state.session_factory = session_factory or async_session_factory
        app.state.broadcaster = broadcaster or RoomBroadcaster()
        app.state.ingest_tasks = set()
        app.state.ingestion_pipeline = MessageIngestionPipeline(
            translator=AutoTranslator(active_translator),
            session_factory=app.state.session_factory,
            broadcaster=app.state.broadcaster,
        )

        logger.info("app_services_ready", translator=type(active_translator).__name__)
        yield

        # --- Shutdown ---
        logger.info("app_shutdown", pending_messages=len(app.state.ingest_tasks))

        # In-flight messages run to completion.
        if app.state.ingest_tasks:
            await asyncio.gather(*app.state.ingest_tasks, return_exceptions=True)

        if redis is not None:
            await close_redis()
        if session_factory is None:
            await close_database()

    app = FastAPI(
        title="lingochat: Bilingual Chat API",
        description="Two-party real-time chat with automatic English/Tamil translation.",
        version="1.0.0",
        lifespan=lifespan,
    )

    # CORS: permissive in development, configured origins in production
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"] if not settings.is_production else settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.exception_handler(LingoChatError)
    async def lingochat_error_handler(request: Request, exc: LingoChatError) -> JSONResponse:
        """Structured error response for all lingochat exceptions."""
        return JSONResponse(
            status_code=exc.status_code,
            content=exc.to_dict(),
        )

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(
        request: Request, exc: RequestValidationError
    ) -> JSONResponse:
        """Malformed request bodies use the same error shape as everything else."""
        error = InvalidPayloadError(f"Invalid request: {len(exc.errors())} validation error(s)")
        return JSONResponse(status_code=error.status_code, content=error.to_dict())

    app.include_router(health_router, prefix="/api")
    app.include_router(auth_router, prefix="/api")
    app.include_router(users_router, prefix="/api")
    app.include_router(rooms_router, prefix="/api")
    app.include_router(messages_router, prefix="/api")
    app.include_router(realtime_router)

    return app


app = create_app()
