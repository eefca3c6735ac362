"""FastAPI dependencies: caller identity, database session and the per-request service."""

from typing import Annotated, Generator

from fastapi import Depends, Request
from sqlalchemy.orm import Session

from gameroom.core.exceptions import MissingIdentityError
from gameroom.core.shared_types import Principal
from gameroom.db.database import session_scope
from gameroom.db.sql_repository import SQLRecordRepository
from gameroom.services.room_service import RoomService


def get_caller(request: Request) -> Principal:
    """Identity of whoever issued the request, taken from the configured header."""
    header = request.app.state.settings.caller_header
    identity = request.headers.get(header, "").strip()
    if not identity:
        raise MissingIdentityError(f"Missing caller identity ({header} header).")
    return Principal(identity)


def get_db(request: Request) -> Generator[Session, None, None]:
    yield from session_scope(request.app.state.session_factory)


def get_service(request: Request, db: Annotated[Session, Depends(get_db)]) -> RoomService:
    # One lock per app: every request's service serializes on it.
    return RoomService(SQLRecordRepository(db), lock=request.app.state.store_lock)


Caller = Annotated[Principal, Depends(get_caller)]
Service = Annotated[RoomService, Depends(get_service)]
