"""
Action Generator - Generates all legal actions from a game state.

The action generator is used by:
1. Drivers to decide between waiting for a pawn choice and skipping
2. UI to highlight movable pawns
3. Tests (every generated action must be accepted by the reducer)
"""

from __future__ import annotations

from .action import Action
from .rules import movable_pawns
from .state import GameState, GameStatus


def legal_actions(state: GameState) -> list[Action]:
    """
    Generate all legal actions for the current player.

    Returns fully-specified Action objects carrying the player id.
    """
    if state.status == GameStatus.FINISHED:
        return []

    if state.status == GameStatus.WAITING:
        return [Action.start_game()]

    player_id = state.current_player.player_id

    if state.dice_value is None:
        actions = [Action.roll(player_id)]
        if not state.is_rolling:
            actions.insert(0, Action.begin_roll(player_id))
        return actions

    pawns = movable_pawns(state)
    if not pawns:
        return [Action.skip_turn(player_id)]

    return [Action.select_pawn(p.pawn_id, player_id) for p in pawns]


def movable_pawn_ids(state: GameState) -> list[str]:
    """IDs of the pawns the UI should let the player click."""
    if state.status != GameStatus.PLAYING or state.is_rolling:
        return []
    return [p.pawn_id for p in movable_pawns(state)]
