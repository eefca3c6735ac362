"""Database tables / schema"""

from typing import Any, Optional

from sqlalchemy import JSON, String
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column

from gameroom.core.models import MAX_KEY_LENGTH


class Base(DeclarativeBase):
    pass


class DBRecord(Base):
    """A single entry in the ordered key-value store. `seq` fixes insertion order."""

    __tablename__ = "records"
    seq: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    key: Mapped[str] = mapped_column(String(MAX_KEY_LENGTH), unique=True)
    kind: Mapped[str] = mapped_column(String(16))
    # Back-reference for message records, None for games.
    game_id: Mapped[Optional[str]] = mapped_column(String(MAX_KEY_LENGTH), index=True)
    payload: Mapped[dict[str, Any]] = mapped_column(JSON)
