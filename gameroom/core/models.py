"""
Boundary layer data model(s).

These objects are what the Service passes to the persistence layer and receives back from it.
(Decouples the data model specific to the DB layer, API layer, or domain layer from the information needed to send across boundaries)
"""

from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from gameroom.core.shared_types import Principal

# Type aliases to make the models easier to read
RecordKey = str

# Longest key the store accepts (width of the key column).
MAX_KEY_LENGTH = 64


@dataclass
class GameModel:
    """Transport-safe representation of a game used between API, Service, DB, and domain layers."""

    id: RecordKey
    title: str
    description: str
    avatar: str
    owner: Principal
    members: list[Principal]
    created_at: datetime
    updated_at: Optional[datetime] = None


@dataclass
class MessageModel:
    """Transport-safe representation of a single chat message within a game."""

    id: RecordKey
    game_id: RecordKey
    sender: Principal
    content: str
    created_at: datetime
