"""HTTP routes. Each one builds the service request model and hands it to RoomService."""

from fastapi import APIRouter, status

from gameroom.api.dependencies import Caller, Service
from gameroom.api.models import (
    AddMemberBody,
    AddMemberRequest,
    CreateGameBody,
    CreateGameRequest,
    DeleteGameRequest,
    DeleteMessageRequest,
    DeletedResponse,
    GameDetailsBody,
    GameResponse,
    GetGameRequest,
    ListMessagesRequest,
    MessageListResponse,
    MessageResponse,
    SendMessageBody,
    SendMessageRequest,
    UpdateGameRequest,
)

router = APIRouter()


# --- GAMES ---
@router.post("/games", response_model=GameResponse, status_code=status.HTTP_201_CREATED)
def create_game(body: CreateGameBody, caller: Caller, service: Service) -> GameResponse:
    request = CreateGameRequest(**body.model_dump())
    return service.create_game(caller, request)


@router.get("/games/{game_id}", response_model=GameResponse)
def get_game(game_id: str, caller: Caller, service: Service) -> GameResponse:
    return service.get_game(caller, GetGameRequest(game_id=game_id))


@router.put("/games/{game_id}", response_model=GameResponse)
def update_game(
    game_id: str, body: GameDetailsBody, caller: Caller, service: Service
) -> GameResponse:
    request = UpdateGameRequest(game_id=game_id, **body.model_dump())
    return service.update_game(caller, request)


@router.post("/games/{game_id}/members", response_model=GameResponse)
def add_member(
    game_id: str, body: AddMemberBody, caller: Caller, service: Service
) -> GameResponse:
    request = AddMemberRequest(game_id=game_id, member=body.member)
    return service.add_member(caller, request)


@router.delete("/games/{game_id}", response_model=DeletedResponse)
def delete_game(game_id: str, caller: Caller, service: Service) -> DeletedResponse:
    return service.delete_game(caller, DeleteGameRequest(game_id=game_id))


# --- MESSAGES ---
@router.post(
    "/games/{game_id}/messages",
    response_model=MessageResponse,
    status_code=status.HTTP_201_CREATED,
)
def send_message(
    game_id: str, body: SendMessageBody, caller: Caller, service: Service
) -> MessageResponse:
    request = SendMessageRequest(game_id=game_id, content=body.content)
    return service.send_message(caller, request)


@router.get("/games/{game_id}/messages", response_model=MessageListResponse)
def list_messages(game_id: str, caller: Caller, service: Service) -> MessageListResponse:
    return service.list_messages(caller, ListMessagesRequest(game_id=game_id))


@router.delete("/messages/{message_id}", response_model=DeletedResponse)
def delete_message(message_id: str, caller: Caller, service: Service) -> DeletedResponse:
    return service.delete_message(caller, DeleteMessageRequest(message_id=message_id))
