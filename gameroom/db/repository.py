"""Protocol repository: one ordered key-value space holding both game and message records."""

from typing import Protocol

from gameroom.core.models import GameModel, MessageModel


class RecordRepository(Protocol):
    """Persistence layer orchestration"""

    # -- games --
    def get_game(self, game_id: str) -> GameModel | None:
        """Get game by ID, if record exists."""
        ...

    def create_game(self, game: GameModel) -> GameModel:
        """Store a new game under its own ID. Raises DuplicateKeyError if the key is taken."""
        ...

    def update_game(self, game_id: str, game: GameModel) -> GameModel | None:
        """Overwrite an existing game record."""
        ...

    def delete_game(self, game_id: str) -> GameModel | None:
        """Remove a game's record together with every message that belongs to it."""
        ...

    # -- messages --
    def get_message(self, message_id: str) -> MessageModel | None:
        """Get message by ID, if record exists."""
        ...

    def create_message(self, message: MessageModel) -> MessageModel:
        """Store a new message under its own ID. Raises DuplicateKeyError if the key is taken."""
        ...

    def list_messages(self, game_id: str) -> list[MessageModel]:
        """All messages of a game, in insertion order."""
        ...

    def delete_message(self, message_id: str) -> MessageModel | None:
        """Remove a message's record."""
        ...
