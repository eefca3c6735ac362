"""
Application factory.

``create_app`` wires settings, logging, the database session factory and the
store lock into a FastAPI app, and registers the handlers that turn every
GameRoomError, malformed request and unmatched route into the same
``{"error", "detail"}`` response. Serve the module-level app from
``gameroom.main`` with uvicorn (``pip install .[serve]``)::

    uvicorn gameroom.main:app
"""

import logging
import threading

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException
from sqlalchemy.orm import Session, sessionmaker

from gameroom.api.models import ErrorResponse
from gameroom.api.router import router
from gameroom.core.config import Settings, get_settings
from gameroom.core.exceptions import (
    AuthorizationError,
    ConflictError,
    GameRoomError,
    MissingIdentityError,
    NotFoundError,
    StoreError,
    ValidationError,
)
from gameroom.core.logging_config import setup_logging
from gameroom.db.database import build_engine, build_session_factory

logger = logging.getLogger(__name__)

# Most specific first.
ERROR_STATUS: list[tuple[type[GameRoomError], int]] = [
    (MissingIdentityError, 401),
    (ValidationError, 422),
    (NotFoundError, 404),
    (AuthorizationError, 403),
    (ConflictError, 409),
    (StoreError, 503),
]


def status_for(exc: GameRoomError) -> int:
    for error_type, status_code in ERROR_STATUS:
        if isinstance(exc, error_type):
            return status_code
    return 400


async def handle_game_room_error(request: Request, exc: GameRoomError) -> JSONResponse:
    """Every refusal leaves the API as an error value, never as an unhandled fault."""
    status_code = status_for(exc)
    if status_code >= 500:
        logger.error("%s %s failed: %s", request.method, request.url.path, exc)
    return error_response(status_code, type(exc).__name__, str(exc))


async def handle_request_validation_error(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    """Malformed bodies (missing or wrongly typed fields) are reported like any other ValidationError."""
    problems = "; ".join(
        f"{'.'.join(str(part) for part in error['loc'])}: {error['msg']}"
        for error in exc.errors()
    )
    return error_response(422, ValidationError.__name__, problems)


async def handle_http_exception(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    """Unmatched routes, wrong methods and the like."""
    error = NotFoundError.__name__ if exc.status_code == 404 else "HTTPError"
    return error_response(exc.status_code, error, str(exc.detail), headers=exc.headers)


def error_response(
    status_code: int, error: str, detail: str, headers: dict[str, str] | None = None
) -> JSONResponse:
    body = ErrorResponse(error=error, detail=detail)
    return JSONResponse(status_code=status_code, content=body.model_dump(), headers=headers)


def create_app(
    settings: Settings | None = None,
    session_factory: sessionmaker[Session] | None = None,
) -> FastAPI:
    """Create and configure the FastAPI application.

    Parameters
    ----------
    settings : Settings | None
        Defaults to values read from the environment.
    session_factory : sessionmaker[Session] | None
        Defaults to a factory bound to ``settings.database_url``.
    """
    settings = settings or get_settings()
    setup_logging(settings.log_level, settings.log_file)

    if session_factory is None:
        engine = build_engine(settings.database_url, echo=settings.sql_echo)
        session_factory = build_session_factory(engine)

    app = FastAPI(title=settings.project_name, version=settings.api_version)
    app.state.settings = settings
    app.state.session_factory = session_factory
    app.state.store_lock = threading.RLock()

    app.add_exception_handler(GameRoomError, handle_game_room_error)
    app.add_exception_handler(RequestValidationError, handle_request_validation_error)
    app.add_exception_handler(StarletteHTTPException, handle_http_exception)
    app.include_router(router)
    return app
