"""Unit tests for gameroom/domain/game.py"""

from datetime import datetime, timedelta, timezone

import pytest

from gameroom.core.exceptions import AuthorizationError, ConflictError, ValidationError
from gameroom.core.models import GameModel
from gameroom.core.shared_types import Principal
from gameroom.domain.game import Game

OWNER = Principal("owner")
OTHER = Principal("other")
NOW = datetime(2024, 5, 1, 9, 30, tzinfo=timezone.utc)


@pytest.fixture
def game() -> Game:
    return Game.new_game(
        game_id="g1",
        owner=OWNER,
        title="Chess Club",
        description="weekly matches",
        avatar="http://x/a.png",
        now=NOW,
    )


# -- Creation --
def test_new_game_owner_is_only_member(game: Game) -> None:
    assert game.owner == OWNER
    assert game.members == [OWNER]
    assert game.created_at == NOW
    assert game.updated_at is None


@pytest.mark.parametrize(
    "title, description, avatar",
    [
        ("", "weekly matches", "http://x/a.png"),
        ("Chess Club", "", "http://x/a.png"),
        ("Chess Club", "weekly matches", ""),
        ("   ", "weekly matches", "http://x/a.png"),  # whitespace only counts as empty
    ],
)
def test_new_game_requires_all_fields(title: str, description: str, avatar: str) -> None:
    with pytest.raises(ValidationError):
        Game.new_game("g1", OWNER, title, description, avatar, NOW)


def test_model_conversion_keeps_all_fields(game: Game) -> None:
    """from_model(to_model()) should give back an equal game, with its own member list."""
    model = game.to_model()
    assert isinstance(model, GameModel)
    rebuilt = Game.from_model(model)
    assert rebuilt == game
    rebuilt.members.append(OTHER)
    assert model.members == [OWNER]


# -- Update --
def test_owner_updates_details(game: Game) -> None:
    later = NOW + timedelta(hours=1)
    game.update_details(OWNER, "Go Club", "daily", "http://x/b.png", later)
    assert (game.title, game.description, game.avatar) == ("Go Club", "daily", "http://x/b.png")
    assert game.updated_at == later
    assert game.created_at == NOW
    assert game.owner == OWNER
    assert game.members == [OWNER]


def test_non_owner_cannot_update(game: Game) -> None:
    with pytest.raises(AuthorizationError):
        game.update_details(OTHER, "Go Club", "daily", "http://x/b.png", NOW)
    assert game.title == "Chess Club"
    assert game.updated_at is None


def test_authorization_checked_before_validation(game: Game) -> None:
    """A non-owner sending an empty title learns they are not allowed, not that the title is empty."""
    with pytest.raises(AuthorizationError):
        game.update_details(OTHER, "", "daily", "http://x/b.png", NOW)


def test_owner_update_with_empty_field(game: Game) -> None:
    with pytest.raises(ValidationError):
        game.update_details(OWNER, "Go Club", "", "http://x/b.png", NOW)
    assert game.description == "weekly matches"


def test_updated_at_never_moves_backwards(game: Game) -> None:
    later = NOW + timedelta(hours=2)
    game.update_details(OWNER, "A", "B", "C", later)
    game.update_details(OWNER, "D", "E", "F", NOW + timedelta(hours=1))
    assert game.updated_at == later
    assert game.title == "D"


# -- Membership --
def test_owner_adds_member(game: Game) -> None:
    game.add_member(OWNER, OTHER)
    assert game.members == [OWNER, OTHER]
    assert game.is_member(OTHER)


def test_non_owner_cannot_add_member(game: Game) -> None:
    with pytest.raises(AuthorizationError):
        game.add_member(OTHER, OTHER)
    assert game.members == [OWNER]


@pytest.mark.parametrize("member", [OWNER, Principal("owner")])
def test_adding_existing_member_conflicts(game: Game, member: Principal) -> None:
    """Identity compares by value: a fresh Principal with the same text is the same member."""
    with pytest.raises(ConflictError):
        game.add_member(OWNER, member)
    assert game.members == [OWNER]


def test_require_member(game: Game) -> None:
    game.require_member(OWNER)
    with pytest.raises(AuthorizationError):
        game.require_member(OTHER)
