"""
The Game class is the entrypoint into the domain layer for the service layer.
It holds the rules about who may change a game and what a valid game looks like,
and converts from/to the GameModel the service exchanges with the repository.
"""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Optional, Self

from gameroom.core.exceptions import AuthorizationError, ConflictError, ValidationError
from gameroom.core.models import GameModel
from gameroom.core.shared_types import Principal


def require_filled(**fields: str) -> None:
    """Raise ValidationError naming every field that is empty or only whitespace."""
    missing = [name for name, value in fields.items() if not value or not value.strip()]
    if missing:
        raise ValidationError(f"Required field(s) empty: {', '.join(missing)}.")


@dataclass
class Game:
    # --- DOMAIN LAYER API CALLED BY SERVICE---

    id: str
    title: str
    description: str
    avatar: str
    owner: Principal
    created_at: datetime
    members: list[Principal] = field(default_factory=list)
    updated_at: Optional[datetime] = None

    @classmethod
    def new_game(
        cls,
        game_id: str,
        owner: Principal,
        title: str,
        description: str,
        avatar: str,
        now: datetime,
    ) -> Self:
        """Game created by `owner`, who is also its first and only member."""
        require_filled(title=title, description=description, avatar=avatar)
        return cls(
            id=game_id,
            title=title,
            description=description,
            avatar=avatar,
            owner=owner,
            members=[owner],
            created_at=now,
            updated_at=None,
        )

    @classmethod
    def from_model(cls, model: GameModel) -> Self:
        return cls(
            id=model.id,
            title=model.title,
            description=model.description,
            avatar=model.avatar,
            owner=model.owner,
            members=list(model.members),
            created_at=model.created_at,
            updated_at=model.updated_at,
        )

    def to_model(self) -> GameModel:
        return GameModel(
            id=self.id,
            title=self.title,
            description=self.description,
            avatar=self.avatar,
            owner=self.owner,
            members=list(self.members),
            created_at=self.created_at,
            updated_at=self.updated_at,
        )

    # --- Authorization ---
    def is_member(self, caller: Principal) -> bool:
        return caller in self.members

    def require_owner(self, caller: Principal, action: str) -> None:
        if caller != self.owner:
            raise AuthorizationError(
                f"Only the owner of game {self.id!r} may {action}."
            )

    def require_member(self, caller: Principal) -> None:
        if not self.is_member(caller):
            raise AuthorizationError(f"Caller does not belong to game {self.id!r}.")

    # --- Mutations ---
    def update_details(
        self, caller: Principal, title: str, description: str, avatar: str, now: datetime
    ) -> None:
        """Replace title/description/avatar. Owner, members and creation time stay as they are."""
        self.require_owner(caller, "update it")
        require_filled(title=title, description=description, avatar=avatar)
        self.title = title
        self.description = description
        self.avatar = avatar
        # Never step backwards if the clock does.
        self.updated_at = now if self.updated_at is None else max(now, self.updated_at)

    def add_member(self, caller: Principal, member: Principal) -> None:
        self.require_owner(caller, "add members")
        if self.is_member(member):
            raise ConflictError(f"{member} is already a member of game {self.id!r}.")
        self.members = [*self.members, member]
