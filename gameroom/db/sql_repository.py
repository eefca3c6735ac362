"""Implementation of RecordRepository using SQLAlchemy"""

import logging
from datetime import datetime
from typing import Any, Callable, TypeVar

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from gameroom.core.exceptions import DuplicateKeyError, StoreError
from gameroom.core.models import GameModel, MessageModel
from gameroom.core.shared_types import Principal, RecordKind
from gameroom.db.schema import DBRecord

logger = logging.getLogger(__name__)

T = TypeVar("T")


class SQLRecordRepository:
    """Records stored as rows of one `records` table, payload kept as JSON."""

    def __init__(self, db_session: Session) -> None:
        self.db = db_session

    # -- games --
    def get_game(self, game_id: str) -> GameModel | None:
        """Get game by ID, if record exists."""
        record = self._fetch(game_id, RecordKind.GAME)
        if record:
            return self._to_game_model(record)
        return None

    def create_game(self, game: GameModel) -> GameModel:
        """Store a new game under its own ID. Raises DuplicateKeyError if the key is taken."""
        record = DBRecord(
            key=game.id,
            kind=RecordKind.GAME,
            game_id=None,
            payload=self._game_payload(game),
        )
        self._insert(record)
        return self._to_game_model(record)

    def update_game(self, game_id: str, game: GameModel) -> GameModel | None:
        """Overwrite an existing game record."""
        record = self._fetch(game_id, RecordKind.GAME)
        if not record:
            return None
        record.payload = self._game_payload(game)
        self._commit(f"update game {game_id!r}", lambda: self.db.refresh(record))
        return self._to_game_model(record)

    def delete_game(self, game_id: str) -> GameModel | None:
        """Remove a game's record together with every message that belongs to it."""
        record = self._fetch(game_id, RecordKind.GAME)
        if not record:
            return None
        game_model = self._to_game_model(record)
        for message in self._messages_of(game_id):
            self.db.delete(message)
        self.db.delete(record)
        self._commit(f"delete game {game_id!r}")
        return game_model

    # -- messages --
    def get_message(self, message_id: str) -> MessageModel | None:
        """Get message by ID, if record exists."""
        record = self._fetch(message_id, RecordKind.MESSAGE)
        if record:
            return self._to_message_model(record)
        return None

    def create_message(self, message: MessageModel) -> MessageModel:
        """Store a new message under its own ID. Raises DuplicateKeyError if the key is taken."""
        record = DBRecord(
            key=message.id,
            kind=RecordKind.MESSAGE,
            game_id=message.game_id,
            payload=self._message_payload(message),
        )
        self._insert(record)
        return self._to_message_model(record)

    def list_messages(self, game_id: str) -> list[MessageModel]:
        """All messages of a game, in insertion order."""
        return [self._to_message_model(record) for record in self._messages_of(game_id)]

    def delete_message(self, message_id: str) -> MessageModel | None:
        """Remove a message's record."""
        record = self._fetch(message_id, RecordKind.MESSAGE)
        if not record:
            return None
        message_model = self._to_message_model(record)
        self.db.delete(record)
        self._commit(f"delete message {message_id!r}")
        return message_model

    # -- Internal helpers --
    def _fetch(self, key: str, kind: RecordKind) -> DBRecord | None:
        query = select(DBRecord).where(DBRecord.key == key, DBRecord.kind == kind)
        return self._read(lambda: self.db.scalar(query))

    def _messages_of(self, game_id: str) -> list[DBRecord]:
        query = (
            select(DBRecord)
            .where(DBRecord.kind == RecordKind.MESSAGE, DBRecord.game_id == game_id)
            .order_by(DBRecord.seq)
        )
        return self._read(lambda: list(self.db.scalars(query)))

    def _insert(self, record: DBRecord) -> None:
        taken = self._read(
            lambda: self.db.scalar(select(DBRecord.seq).where(DBRecord.key == record.key))
        )
        if taken is not None:
            raise DuplicateKeyError(f"A record with id={record.key!r} already exists.")
        self.db.add(record)
        self._commit(f"insert {record.kind} {record.key!r}", lambda: self.db.refresh(record))

    def _read(self, query: Callable[[], T]) -> T:
        try:
            return query()
        except SQLAlchemyError as exc:
            logger.error("Store read failed: %s", exc)
            raise StoreError("Failed to read from the store.") from exc

    def _commit(self, action: str, after: Callable[[], None] | None = None) -> None:
        """Commit the pending change, rolling back and raising StoreError if the store rejects it."""
        try:
            self.db.commit()
            if after is not None:
                after()
        except IntegrityError as exc:
            self.db.rollback()
            raise DuplicateKeyError(f"Failed to {action}: key already exists.") from exc
        except SQLAlchemyError as exc:
            self.db.rollback()
            logger.error("Store write failed (%s): %s", action, exc)
            raise StoreError(f"Failed to {action}.") from exc

    @staticmethod
    def _game_payload(game: GameModel) -> dict[str, Any]:
        return {
            "title": game.title,
            "description": game.description,
            "avatar": game.avatar,
            "owner": game.owner.text,
            "members": [member.text for member in game.members],
            "created_at": game.created_at.isoformat(),
            "updated_at": game.updated_at.isoformat() if game.updated_at else None,
        }

    @staticmethod
    def _message_payload(message: MessageModel) -> dict[str, Any]:
        return {
            "sender": message.sender.text,
            "content": message.content,
            "created_at": message.created_at.isoformat(),
        }

    def _to_game_model(self, record: DBRecord) -> GameModel:
        """Convert SQLAlchemy model to data transfer model."""
        payload = record.payload
        return GameModel(
            id=record.key,
            title=payload["title"],
            description=payload["description"],
            avatar=payload["avatar"],
            owner=Principal(payload["owner"]),
            members=[Principal(member) for member in payload["members"]],
            created_at=datetime.fromisoformat(payload["created_at"]),
            updated_at=(
                datetime.fromisoformat(payload["updated_at"])
                if payload["updated_at"]
                else None
            ),
        )

    def _to_message_model(self, record: DBRecord) -> MessageModel:
        """Convert SQLAlchemy model to data transfer model."""
        payload = record.payload
        return MessageModel(
            id=record.key,
            game_id=record.game_id or "",
            sender=Principal(payload["sender"]),
            content=payload["content"],
            created_at=datetime.fromisoformat(payload["created_at"]),
        )
