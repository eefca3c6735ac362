"""In-memory implementation of RecordRepository. Nothing survives the process; meant for tests and local runs."""

from copy import deepcopy

from gameroom.core.exceptions import DuplicateKeyError
from gameroom.core.models import GameModel, MessageModel


class InMemoryRecordRepository:
    """Dict keyed by record ID. Dicts keep insertion order, which gives the store its ordering."""

    def __init__(self) -> None:
        self._records: dict[str, GameModel | MessageModel] = {}

    def get_game(self, game_id: str) -> GameModel | None:
        record = self._records.get(game_id)
        return deepcopy(record) if isinstance(record, GameModel) else None

    def create_game(self, game: GameModel) -> GameModel:
        self._insert(game.id, game)
        return deepcopy(game)

    def update_game(self, game_id: str, game: GameModel) -> GameModel | None:
        if not isinstance(self._records.get(game_id), GameModel):
            return None
        self._records[game_id] = deepcopy(game)
        return deepcopy(game)

    def delete_game(self, game_id: str) -> GameModel | None:
        record = self._records.get(game_id)
        if not isinstance(record, GameModel):
            return None
        for message in self.list_messages(game_id):
            del self._records[message.id]
        del self._records[game_id]
        return record

    def get_message(self, message_id: str) -> MessageModel | None:
        record = self._records.get(message_id)
        return deepcopy(record) if isinstance(record, MessageModel) else None

    def create_message(self, message: MessageModel) -> MessageModel:
        self._insert(message.id, message)
        return deepcopy(message)

    def list_messages(self, game_id: str) -> list[MessageModel]:
        return [
            deepcopy(record)
            for record in self._records.values()
            if isinstance(record, MessageModel) and record.game_id == game_id
        ]

    def delete_message(self, message_id: str) -> MessageModel | None:
        record = self._records.get(message_id)
        if not isinstance(record, MessageModel):
            return None
        del self._records[message_id]
        return record

    def clear(self) -> None:
        """Clear the repository (useful in between tests)"""
        self._records.clear()

    def _insert(self, key: str, record: GameModel | MessageModel) -> None:
        if key in self._records:
            raise DuplicateKeyError(f"A record with id={key!r} already exists.")
        self._records[key] = deepcopy(record)
