"""
Rules - Move legality, capture and win detection.

All functions are pure and operate on Pawn / GameState snapshots.
"""

from __future__ import annotations
from typing import Iterable

from .board import SAFE_TRACK_CELLS, track_cell
from .state import GameState, Pawn, TeamColor, FINISH_POSITION


ENTRY_ROLL = 6
BONUS_ROLL = 6


def can_move(pawn: Pawn, dice_value: int) -> bool:
    """Can this pawn legally move by dice_value?"""
    if pawn.finished:
        return False
    if pawn.in_base:
        return dice_value == ENTRY_ROLL
    if pawn.in_home_stretch:
        return pawn.position + dice_value <= FINISH_POSITION
    return True


def move_target(pawn: Pawn, dice_value: int) -> int:
    """Position the pawn lands on. Assumes can_move() is true."""
    if pawn.in_base:
        return 0
    return pawn.position + dice_value


def is_safe_cell(color: TeamColor, position: int) -> bool:
    """True when a relative track position lands on one of the eight safe cells."""
    cell = track_cell(color, position)
    return cell is not None and cell in SAFE_TRACK_CELLS


def find_capture(pawns: Iterable[Pawn], mover: Pawn) -> Pawn | None:
    """
    First opponent pawn sharing the mover's track cell.

    Only the shared track can see captures, and never on a safe cell.
    When several opponents share the cell only the first in pawn order
    is returned.
    """
    cell = track_cell(mover.color, mover.position)
    if cell is None or cell in SAFE_TRACK_CELLS:
        return None
    for pawn in pawns:
        if pawn.owner_id == mover.owner_id:
            continue
        if track_cell(pawn.color, pawn.position) == cell:
            return pawn
    return None


def has_won(pawns: Iterable[Pawn], player_id: str) -> bool:
    """A player wins when every one of their pawns is finished."""
    owned = [p for p in pawns if p.owner_id == player_id]
    return bool(owned) and all(p.finished for p in owned)


def movable_pawns(state: GameState) -> list[Pawn]:
    """Pawns the current player may move with the pending dice value."""
    if state.dice_value is None:
        return []
    return [
        p for p in state.pawns_of(state.current_player.player_id)
        if can_move(p, state.dice_value)
    ]
