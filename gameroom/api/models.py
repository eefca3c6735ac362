"""Requests and Response models"""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, field_validator

from gameroom.core.exceptions import ValidationError
from gameroom.core.models import MAX_KEY_LENGTH

MemberIdentity = str


# --- REQUEST MODELS ---
class CreateGameRequest(BaseModel):
    title: str
    description: str
    avatar: str
    game_id: Optional[str] = None

    @field_validator("game_id")
    @classmethod
    def validate_game_id(cls, value: Optional[str]) -> Optional[str]:
        if value is None:
            return value
        if not value.strip():
            raise ValidationError("An explicit game_id must not be blank.")
        # The id travels as a single path segment: /games/{game_id}
        if "/" in value:
            raise ValidationError(f"game_id must not contain '/': {value!r}.")
        if len(value) > MAX_KEY_LENGTH:
            raise ValidationError(
                f"game_id must be at most {MAX_KEY_LENGTH} characters long."
            )
        return value


class GetGameRequest(BaseModel):
    game_id: str


class UpdateGameRequest(BaseModel):
    game_id: str
    title: str
    description: str
    avatar: str


class AddMemberRequest(BaseModel):
    game_id: str
    member: MemberIdentity

    @field_validator("member")
    @classmethod
    def validate_member(cls, value: str) -> str:
        if not value.strip():
            raise ValidationError("Member identity must not be blank.")
        # Caller identities are compared stripped, see api/dependencies.get_caller
        return value.strip()


class DeleteGameRequest(BaseModel):
    game_id: str


class SendMessageRequest(BaseModel):
    game_id: str
    content: str


class ListMessagesRequest(BaseModel):
    game_id: str


class DeleteMessageRequest(BaseModel):
    message_id: str


# --- REQUEST BODIES (HTTP) ---
# Path parameters carry the IDs, so the bodies only hold the remaining fields.
class GameDetailsBody(BaseModel):
    title: str
    description: str
    avatar: str


class CreateGameBody(GameDetailsBody):
    game_id: Optional[str] = None


class AddMemberBody(BaseModel):
    member: MemberIdentity


class SendMessageBody(BaseModel):
    content: str


# --- RESPONSE MODELS ---
class GameResponse(BaseModel):
    id: str
    title: str
    description: str
    avatar: str
    owner: MemberIdentity
    members: list[MemberIdentity]
    created_at: datetime
    updated_at: Optional[datetime] = None


class MessageResponse(BaseModel):
    id: str
    game_id: str
    sender: MemberIdentity
    content: str
    created_at: datetime


class MessageListResponse(BaseModel):
    game_id: str
    messages: list[MessageResponse]


class DeletedResponse(BaseModel):
    detail: str


class ErrorResponse(BaseModel):
    error: str
    detail: str
