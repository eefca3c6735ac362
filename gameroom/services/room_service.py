"""Orchestration of communication from API router to domain logic and persistence layers (and the reverse direction)."""

import logging
import threading
from contextlib import AbstractContextManager
from datetime import datetime, timezone
from typing import Callable
from uuid import uuid4

from gameroom.api.models import (
    AddMemberRequest,
    CreateGameRequest,
    DeleteGameRequest,
    DeleteMessageRequest,
    DeletedResponse,
    GameResponse,
    GetGameRequest,
    ListMessagesRequest,
    MessageListResponse,
    MessageResponse,
    SendMessageRequest,
    UpdateGameRequest,
)
from gameroom.core.exceptions import AuthorizationError, NotFoundError
from gameroom.core.models import GameModel, MessageModel
from gameroom.core.shared_types import Principal
from gameroom.db.repository import RecordRepository
from gameroom.domain.game import Game
from gameroom.domain.message import Message

logger = logging.getLogger(__name__)


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def new_record_id() -> str:
    return str(uuid4())


class RoomService:
    """Orchestration of layers for games and their messages.

    Every public method runs under `lock`. Share one lock between all services
    that talk to the same store so read-modify-write sequences never interleave.
    """

    def __init__(
        self,
        repository: RecordRepository,
        lock: AbstractContextManager | None = None,
        clock: Callable[[], datetime] = utc_now,
        id_factory: Callable[[], str] = new_record_id,
    ) -> None:
        self.repo = repository
        self._lock = lock if lock is not None else threading.RLock()
        self._clock = clock
        self._new_id = id_factory

    # -- API routes logic ---
    def create_game(self, caller: Principal, request: CreateGameRequest) -> GameResponse:
        """Caller creates a game and becomes its owner (and first member)."""
        with self._lock:
            game = Game.new_game(
                game_id=request.game_id or self._new_id(),
                owner=caller,
                title=request.title,
                description=request.description,
                avatar=request.avatar,
                now=self._clock(),
            )
            stored = self.repo.create_game(game.to_model())
        logger.info("Game %s created by %s", stored.id, caller)
        return self._game_response(stored)

    def get_game(self, caller: Principal, request: GetGameRequest) -> GameResponse:
        """Look up a single game. Any caller may read it."""
        with self._lock:
            return self._game_response(self._fetch_game(request.game_id))

    def update_game(self, caller: Principal, request: UpdateGameRequest) -> GameResponse:
        """Owner replaces title, description and avatar."""
        with self._lock:
            game = Game.from_model(self._fetch_game(request.game_id))
            self._guard(
                game.update_details,
                caller,
                request.title,
                request.description,
                request.avatar,
                self._clock(),
            )
            return self._store_game(game)

    def add_member(self, caller: Principal, request: AddMemberRequest) -> GameResponse:
        """Owner adds another identity to the member list."""
        with self._lock:
            game = Game.from_model(self._fetch_game(request.game_id))
            self._guard(game.add_member, caller, Principal(request.member))
            response = self._store_game(game)
        logger.info("%s added to game %s", request.member, request.game_id)
        return response

    def delete_game(self, caller: Principal, request: DeleteGameRequest) -> DeletedResponse:
        """Owner removes the game. Its messages go with it."""
        with self._lock:
            game = Game.from_model(self._fetch_game(request.game_id))
            self._guard(game.require_owner, caller, "delete it")
            if self.repo.delete_game(game.id) is None:
                raise NotFoundError(f"Game with id={game.id!r} not found.")
        logger.info("Game %s deleted by %s", game.id, caller)
        return DeletedResponse(detail=f"Game {game.id} deleted successfully.")

    def send_message(self, caller: Principal, request: SendMessageRequest) -> MessageResponse:
        """A member posts a message into the game."""
        with self._lock:
            game = Game.from_model(self._fetch_game(request.game_id))
            self._guard(game.require_member, caller)
            message = Message.new_message(
                message_id=self._new_id(),
                game_id=game.id,
                sender=caller,
                content=request.content,
                now=self._clock(),
            )
            stored = self.repo.create_message(message.to_model())
        return self._message_response(stored)

    def list_messages(
        self, caller: Principal, request: ListMessagesRequest
    ) -> MessageListResponse:
        """Every message of the game in the order it was sent. Members only."""
        with self._lock:
            game = Game.from_model(self._fetch_game(request.game_id))
            self._guard(game.require_member, caller)
            messages = self.repo.list_messages(game.id)
        return MessageListResponse(
            game_id=game.id,
            messages=[self._message_response(message) for message in messages],
        )

    def delete_message(
        self, caller: Principal, request: DeleteMessageRequest
    ) -> DeletedResponse:
        """Sender removes their own message."""
        with self._lock:
            stored = self.repo.get_message(request.message_id)
            if stored is None:
                raise NotFoundError(f"Message with id={request.message_id!r} not found.")
            message = Message.from_model(stored)
            self._guard(message.require_sender, caller)
            if self.repo.delete_message(message.id) is None:
                raise NotFoundError(f"Message with id={message.id!r} not found.")
        return DeletedResponse(detail=f"Message {message.id} deleted successfully.")

    # -- Internal helpers --
    def _fetch_game(self, game_id: str) -> GameModel:
        """Attempt to find the game in the repository and raise error if it fails."""
        game_model = self.repo.get_game(game_id)
        if game_model is None:
            raise NotFoundError(f"Game with id={game_id!r} not found.")
        return game_model

    def _store_game(self, game: Game) -> GameResponse:
        stored = self.repo.update_game(game.id, game.to_model())
        if stored is None:
            raise NotFoundError(f"Game with id={game.id!r} not found.")
        return self._game_response(stored)

    def _guard(self, check: Callable[..., None], caller: Principal, *args: object) -> None:
        """Run a domain check/mutation on behalf of caller, logging refused attempts."""
        try:
            check(caller, *args)
        except AuthorizationError as exc:
            logger.warning("Refused %s: %s", caller, exc)
            raise

    @staticmethod
    def _game_response(model: GameModel) -> GameResponse:
        return GameResponse(
            id=model.id,
            title=model.title,
            description=model.description,
            avatar=model.avatar,
            owner=model.owner.text,
            members=[member.text for member in model.members],
            created_at=model.created_at,
            updated_at=model.updated_at,
        )

    @staticmethod
    def _message_response(model: MessageModel) -> MessageResponse:
        return MessageResponse(
            id=model.id,
            game_id=model.game_id,
            sender=model.sender.text,
            content=model.content,
            created_at=model.created_at,
        )
