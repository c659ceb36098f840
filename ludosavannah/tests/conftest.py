"""
Pytest fixtures for Ludo Savannah tests.
"""

import pytest

from ..engine_core.state import Animal, GameState, Player, TeamColor
from ..engine_core.reducer import initialize


def place(state: GameState, positions: dict[str, int]) -> GameState:
    """Move pawns straight to positions, bypassing the rules."""
    for pawn_id, position in positions.items():
        state = state.with_pawn(state.get_pawn(pawn_id).moved_to(position))
    return state


@pytest.fixture
def two_players() -> list[Player]:
    return [
        Player(player_id="p0", name="Ada", animal=Animal.LION, color=TeamColor.RED),
        Player(player_id="p1", name="Bo", animal=Animal.ZEBRA, color=TeamColor.GREEN),
    ]


@pytest.fixture
def four_players() -> list[Player]:
    return [
        Player(player_id="p0", name="Ada", animal=Animal.LION, color=TeamColor.RED),
        Player(player_id="p1", name="Bo", animal=Animal.ZEBRA, color=TeamColor.GREEN),
        Player(player_id="p2", name="Cy", animal=Animal.GIRAFFE, color=TeamColor.BLUE),
        Player(player_id="p3", name="Di", animal=Animal.HIPPO, color=TeamColor.YELLOW),
    ]


@pytest.fixture
def two_player_state(two_players) -> GameState:
    """A 2-player game that has just started: all pawns in base, Ada to roll."""
    return initialize(two_players)


@pytest.fixture
def four_player_state(four_players) -> GameState:
    return initialize(four_players)


@pytest.fixture
def rolled_state(two_player_state) -> GameState:
    """Ada has a pawn out on the track and a 3 pending."""
    state = place(two_player_state, {"p0-pawn-0": 10})
    return state._copy_with(dice_value=3)
