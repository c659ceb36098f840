"""
Game State - Immutable snapshot of a Ludo game.

Design principles:
- Immutable: every transition returns a new GameState
- Serializable: to_dict() gives a JSON-safe view for the presentation layer
- Pawn order is stable and doubles as the tie-break order for captures
"""

from __future__ import annotations
from dataclasses import dataclass, replace
from enum import Enum
from typing import Any


PAWNS_PER_PLAYER = 4

BASE_POSITION = -1
TRACK_LENGTH = 52
HOME_STRETCH_START = 52
FINISH_POSITION = 58


class GameStatus(Enum):
    """High-level game status. Only moves forward."""
    WAITING = "waiting"
    PLAYING = "playing"
    FINISHED = "finished"


class TeamColor(Enum):
    """The four track colours."""
    RED = "red"
    BLUE = "blue"
    GREEN = "green"
    YELLOW = "yellow"


class Animal(Enum):
    """Avatar tags a player can pick."""
    LION = "Lion"
    ZEBRA = "Zebra"
    GIRAFFE = "Giraffe"
    ELEPHANT = "Elephant"
    MONKEY = "Monkey"
    HIPPO = "Hippo"


# Seat order used when colours are handed out automatically
COLOR_ORDER = (TeamColor.RED, TeamColor.BLUE, TeamColor.GREEN, TeamColor.YELLOW)


@dataclass(frozen=True)
class Player:
    """A seat at the table. Fixed for the whole game."""
    player_id: str
    name: str
    animal: Animal = Animal.LION
    color: TeamColor = TeamColor.RED

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.player_id,
            "name": self.name,
            "animal": self.animal.value,
            "color": self.color.value,
        }


@dataclass(frozen=True)
class Pawn:
    """
    A single pawn.

    position encodes four disjoint ranges:
    -1 base, 0..51 shared track (relative to the owner's entry),
    52..57 home stretch, 58 finished.
    """
    pawn_id: str
    owner_id: str
    color: TeamColor
    position: int = BASE_POSITION

    @property
    def in_base(self) -> bool:
        return self.position == BASE_POSITION

    @property
    def on_track(self) -> bool:
        return 0 <= self.position < TRACK_LENGTH

    @property
    def in_home_stretch(self) -> bool:
        return HOME_STRETCH_START <= self.position < FINISH_POSITION

    @property
    def finished(self) -> bool:
        return self.position == FINISH_POSITION

    def moved_to(self, position: int) -> Pawn:
        """Return a copy of this pawn at a new position."""
        return replace(self, position=position)

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.pawn_id,
            "owner_id": self.owner_id,
            "color": self.color.value,
            "position": self.position,
        }


def pawn_id_for(player_id: str, ordinal: int) -> str:
    return f"{player_id}-pawn-{ordinal}"


def initial_pawns(players: tuple[Player, ...] | list[Player]) -> tuple[Pawn, ...]:
    """Four pawns per player, all in base, grouped by player in seat order."""
    pawns = []
    for player in players:
        for ordinal in range(PAWNS_PER_PLAYER):
            pawns.append(
                Pawn(
                    pawn_id=pawn_id_for(player.player_id, ordinal),
                    owner_id=player.player_id,
                    color=player.color,
                )
            )
    return tuple(pawns)


@dataclass(frozen=True)
class GameState:
    """
    Complete game state at a point in time.

    This is the canonical state the engine operates on.
    All state changes go through the reducer.
    """
    players: tuple[Player, ...]
    pawns: tuple[Pawn, ...]
    current_player_idx: int = 0
    dice_value: int | None = None
    is_rolling: bool = False
    status: GameStatus = GameStatus.WAITING
    winner: str | None = None
    last_action: str | None = None

    @property
    def current_player(self) -> Player:
        """Get the player whose turn it is."""
        return self.players[self.current_player_idx]

    @property
    def num_players(self) -> int:
        return len(self.players)

    @property
    def awaiting_roll(self) -> bool:
        return self.dice_value is None

    def get_player(self, player_id: str) -> Player | None:
        """Get player by ID."""
        for p in self.players:
            if p.player_id == player_id:
                return p
        return None

    def get_pawn(self, pawn_id: str) -> Pawn | None:
        """Get pawn by ID."""
        for pawn in self.pawns:
            if pawn.pawn_id == pawn_id:
                return pawn
        return None

    def pawns_of(self, player_id: str) -> list[Pawn]:
        """All pawns owned by a player, in their stable order."""
        return [p for p in self.pawns if p.owner_id == player_id]

    def with_pawn(self, pawn: Pawn) -> GameState:
        """Return new state with one pawn replaced."""
        new_pawns = tuple(
            pawn if p.pawn_id == pawn.pawn_id else p
            for p in self.pawns
        )
        return self._copy_with(pawns=new_pawns)

    def next_player_idx(self) -> int:
        return (self.current_player_idx + 1) % self.num_players

    def _copy_with(self, **kwargs) -> GameState:
        """Create a copy with some fields replaced."""
        return replace(self, **kwargs)

    def to_dict(self) -> dict[str, Any]:
        return {
            "players": [p.to_dict() for p in self.players],
            "pawns": [p.to_dict() for p in self.pawns],
            "current_player_index": self.current_player_idx,
            "dice_value": self.dice_value,
            "is_rolling": self.is_rolling,
            "status": self.status.value,
            "winner": self.winner,
            "last_action": self.last_action,
        }
