"""KOReader Sync Server - FastAPI app entry point."""
import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from fastapi.staticfiles import StaticFiles
from sqlalchemy.engine import make_url
from sqlalchemy.exc import SQLAlchemyError
from starlette.exceptions import HTTPException as StarletteHTTPException

from kosync.core.config import BASE_DIR, DEFAULT_PASSWORD_SALT, Settings, get_settings
from kosync.core.errors import Internal, InvalidInput, SyncError
from kosync.core.logging_config import setup_logging
from kosync.core.security import PasswordHasher
from kosync.db.base import Base
from kosync.db.session import create_engine, create_session_factory
from kosync.middleware.request_logging import RequestLoggingMiddleware, SecurityHeadersMiddleware
from kosync.routers import syncs, users, web
from kosync.services.progress_store import check_dialect

logger = logging.getLogger("kosync")


@asynccontextmanager
async def lifespan(app: FastAPI):
    engine = app.state.engine
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    logger.info("Database ready")

    yield

    await engine.dispose()


def _request_context(request: Request) -> dict:
    return {
        "request_id": getattr(request.state, "request_id", None),
        "method": request.method,
        "path": request.url.path,
        "username": getattr(request.state, "username", None),
        "user_id": getattr(request.state, "user_id", None),
    }


def _error_response(status_code: int, kind: str, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"error": kind, "message": message})


async def sync_error_handler(request: Request, exc: SyncError) -> JSONResponse:
    context = _request_context(request)
    if exc.status_code >= 500:
        logger.error("%s: %s", exc.kind, exc.message, extra=context)
        return _error_response(exc.status_code, exc.kind, SyncError.message)
    logger.info("%s: %s", exc.kind, exc.message, extra={**context, "status_code": exc.status_code})
    return _error_response(exc.status_code, exc.kind, exc.message)


async def validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    fields = sorted({".".join(str(p) for p in err["loc"][1:]) for err in exc.errors()})
    logger.info(
        "Invalid request body",
        extra={**_request_context(request), "status_code": 400, "error": ", ".join(fields)},
    )
    return _error_response(InvalidInput.status_code, InvalidInput.kind, InvalidInput.message)


async def database_error_handler(request: Request, exc: SQLAlchemyError) -> JSONResponse:
    logger.error("Database error", exc_info=exc, extra=_request_context(request))
    return _error_response(Internal.status_code, Internal.kind, Internal.message)


async def http_error_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    kind = "not_found" if exc.status_code == 404 else "http_error"
    return JSONResponse(
        status_code=exc.status_code,
        content={"error": kind, "message": str(exc.detail)},
        headers=getattr(exc, "headers", None),
    )


def create_app(settings: Settings | None = None) -> FastAPI:
    settings = settings or get_settings()
    setup_logging(settings.log_level, settings.log_format)

    if settings.password_salt == DEFAULT_PASSWORD_SALT:
        logger.warning("PASSWORD_SALT is not set, using the built-in default")

    app = FastAPI(
        title=settings.app_name,
        description="Reading progress synchronization for KOReader devices",
        debug=settings.debug,
        lifespan=lifespan,
    )

    check_dialect(make_url(settings.database_url).get_backend_name())
    engine = create_engine(settings.database_url)
    app.state.settings = settings
    app.state.engine = engine
    app.state.session_factory = create_session_factory(engine)
    app.state.password_hasher = PasswordHasher(settings.password_salt, settings.password_hash_rounds)

    app.add_exception_handler(SyncError, sync_error_handler)
    app.add_exception_handler(RequestValidationError, validation_error_handler)
    app.add_exception_handler(SQLAlchemyError, database_error_handler)
    app.add_exception_handler(StarletteHTTPException, http_error_handler)

    # last added runs first: security headers also land on the 500 fallback
    app.add_middleware(RequestLoggingMiddleware)
    app.add_middleware(SecurityHeadersMiddleware)

    # Mount static files at /static
    app.mount("/static", StaticFiles(directory=str(BASE_DIR / "static")), name="static")

    app.include_router(web.router)
    app.include_router(users.router)
    app.include_router(syncs.router)

    @app.get("/health")
    async def health():
        # no storage check: liveness only
        return {"status": "ok"}

    return app
