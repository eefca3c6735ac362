"""Domain rules for messages posted into a game."""

from dataclasses import dataclass
from datetime import datetime
from typing import Self

from gameroom.core.exceptions import AuthorizationError, ValidationError
from gameroom.core.models import MessageModel
from gameroom.core.shared_types import Principal


@dataclass
class Message:
    id: str
    game_id: str
    sender: Principal
    content: str
    created_at: datetime

    @classmethod
    def new_message(
        cls, message_id: str, game_id: str, sender: Principal, content: str, now: datetime
    ) -> Self:
        if not content or not content.strip():
            raise ValidationError("Message content must not be empty.")
        return cls(
            id=message_id,
            game_id=game_id,
            sender=sender,
            content=content,
            created_at=now,
        )

    @classmethod
    def from_model(cls, model: MessageModel) -> Self:
        return cls(
            id=model.id,
            game_id=model.game_id,
            sender=model.sender,
            content=model.content,
            created_at=model.created_at,
        )

    def to_model(self) -> MessageModel:
        return MessageModel(
            id=self.id,
            game_id=self.game_id,
            sender=self.sender,
            content=self.content,
            created_at=self.created_at,
        )

    def require_sender(self, caller: Principal) -> None:
        """Only whoever sent the message may remove it."""
        if caller != self.sender:
            raise AuthorizationError(
                f"Only the sender may delete message {self.id!r}."
            )
