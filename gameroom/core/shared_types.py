"""
Type definitions used across layers
"""

from dataclasses import dataclass
from enum import StrEnum


class RecordKind(StrEnum):
    GAME = "game"
    MESSAGE = "message"


@dataclass(frozen=True, order=True)
class Principal:
    """Opaque caller identity. Two principals are the same caller iff their text is equal."""

    text: str

    def __str__(self) -> str:
        return self.text
