"""
Engine Core - Deterministic Ludo state transitions.

The engine:
1. Builds the initial GameState for 2-4 players
2. Validates actions against the turn state machine
3. Applies rolls, pawn moves, captures and wins via the reducer
4. Maps pawns to board coordinates for the presentation layer

No I/O, no timers. Dice are injected.
"""

from .state import (
    Animal,
    GameState,
    GameStatus,
    Pawn,
    Player,
    TeamColor,
    FINISH_POSITION,
    PAWNS_PER_PLAYER,
)
from .action import Action, ActionType, ActionPayload, ActionResult, ErrorCode
from .dice import Dice, RandomDice, ScriptedDice
from .rules import can_move, find_capture, has_won, is_safe_cell, movable_pawns
from .board import Point, coordinates_for, pawn_coordinates, track_cell
from .reducer import (
    Reducer,
    apply_action,
    apply_wire_action,
    begin_roll,
    initialize,
    local_players,
    new_game,
    roll,
    select_pawn,
    skip_turn,
    start_game,
)
from .action_generator import legal_actions, movable_pawn_ids

__all__ = [
    "Animal",
    "GameState",
    "GameStatus",
    "Pawn",
    "Player",
    "TeamColor",
    "FINISH_POSITION",
    "PAWNS_PER_PLAYER",
    "Action",
    "ActionType",
    "ActionPayload",
    "ActionResult",
    "ErrorCode",
    "Dice",
    "RandomDice",
    "ScriptedDice",
    "can_move",
    "find_capture",
    "has_won",
    "is_safe_cell",
    "movable_pawns",
    "Point",
    "coordinates_for",
    "pawn_coordinates",
    "track_cell",
    "Reducer",
    "apply_action",
    "apply_wire_action",
    "begin_roll",
    "initialize",
    "local_players",
    "new_game",
    "roll",
    "select_pawn",
    "skip_turn",
    "start_game",
    "legal_actions",
    "movable_pawn_ids",
]
