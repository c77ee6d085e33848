# Main application entry point
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import Depends, FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from .api import auth_router, health_router, notes_router, root_router, users_router
from .api.root import not_found_response
from .config import Settings, get_settings
from .core.exceptions import DatabaseError, TechNotesError
from .core.logging import LoggingMiddleware, get_logger, setup_logging
from .core.redis_client import RedisClient
from .core.schemas.common import ErrorResponse
from .database import Database
from .middleware import OriginAllowlistMiddleware, get_current_user_id

logger = get_logger("main")


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan events."""
    settings: Settings = app.state.settings
    setup_logging(settings)

    # Startup
    logger.info(
        "Starting technotes",
        extra={"version": settings.app_version, "environment": settings.environment},
    )

    database: Database = app.state.database
    try:
        await database.connect()
    except DatabaseError:
        logger.error("Database unreachable, refusing to start")
        raise

    if settings.database_create_tables:
        await database.create_tables()
        logger.info("Database tables created/verified")

    redis_client: Optional[RedisClient] = app.state.redis
    if redis_client is not None:
        try:
            await redis_client.connect()
            logger.info("Redis connection established")
        except Exception as e:
            logger.warning(f"Redis connection failed: {e}. Continuing without Redis...")

    yield

    # Shutdown
    logger.info("Shutting down technotes")
    if redis_client is not None:
        await redis_client.disconnect()
    await database.disconnect()


def error_response(status_code: int, message: str, details=None, headers=None) -> JSONResponse:
    body = ErrorResponse(message=message, details=details)
    return JSONResponse(
        status_code=status_code, content=body.model_dump(exclude_none=True), headers=headers
    )


def register_exception_handlers(app: FastAPI) -> None:
    """Map exceptions to ``{"message": ...}`` replies."""

    @app.exception_handler(TechNotesError)
    async def technotes_error_handler(request: Request, exc: TechNotesError):
        extra = {"path": request.url.path, "method": request.method, **exc.context}
        if exc.status_code >= 500:
            logger.error(f"{type(exc).__name__}: {exc.message}", extra=extra)
            message = "Server error"
        else:
            logger.warning(exc.message, extra=extra)
            message = exc.message
        return error_response(exc.status_code, message)

    @app.exception_handler(RequestValidationError)
    async def request_validation_handler(request: Request, exc: RequestValidationError):
        details = [
            {"loc": list(err.get("loc", ())), "msg": err.get("msg"), "type": err.get("type")}
            for err in exc.errors()
        ]
        logger.warning("Invalid request data", extra={"path": request.url.path, "details": details})
        return error_response(400, "Invalid request data", details)

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(request: Request, exc: StarletteHTTPException):
        if exc.status_code == 404:
            return not_found_response(request)
        return error_response(exc.status_code, exc.detail, headers=getattr(exc, "headers", None))

    @app.exception_handler(Exception)
    async def unhandled_exception_handler(request: Request, exc: Exception):
        logger.exception(
            "Unhandled error", extra={"path": request.url.path, "method": request.method}
        )
        return error_response(500, "Server error")


def create_app(
    settings: Optional[Settings] = None,
    database: Optional[Database] = None,
    redis_client: Optional[RedisClient] = None,
) -> FastAPI:
    """Build the application around explicitly supplied handles."""
    settings = settings or get_settings()
    if database is None:
        database = Database(settings.database_url, echo=settings.database_echo)
    if redis_client is None and settings.redis_enabled:
        redis_client = RedisClient(settings)

    app = FastAPI(
        title=settings.app_name,
        description="Users, notes and authentication for the technotes desk",
        version=settings.app_version,
        lifespan=lifespan,
    )
    app.state.settings = settings
    app.state.database = database
    app.state.redis = redis_client

    # Last added runs first: logging, then the origin check, then CORS headers
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=settings.cors_allow_credentials,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.add_middleware(OriginAllowlistMiddleware, allowed_origins=settings.cors_origins)
    app.add_middleware(LoggingMiddleware)

    register_exception_handlers(app)

    protected = [Depends(get_current_user_id)] if settings.require_auth else []

    app.include_router(root_router)
    app.include_router(auth_router, prefix="/api/v1")
    app.include_router(users_router, prefix="/api/v1", dependencies=protected)
    app.include_router(notes_router, prefix="/api/v1", dependencies=protected)
    app.include_router(health_router, prefix="/api/v1")

    return app


app = create_app()


def run() -> None:
    """Run the server with uvicorn."""
    import uvicorn

    settings = get_settings()
    uvicorn.run("technotes.main:app", host=settings.host, port=settings.port, reload=settings.reload)


if __name__ == "__main__":
    run()
