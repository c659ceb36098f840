"""
Tests for dice, the action wire form, and legal action generation.
"""

import pytest

from ..engine_core.action import Action, ActionPayload, ActionType
from ..engine_core.action_generator import legal_actions, movable_pawn_ids
from ..engine_core.dice import RandomDice, ScriptedDice
from ..engine_core.reducer import apply_action, new_game
from ..engine_core.state import GameStatus
from .conftest import place


class TestDice:
    """Tests for the injected dice."""

    def test_scripted_cycles(self):
        dice = ScriptedDice([6, 3])
        assert [dice.roll() for _ in range(5)] == [6, 3, 6, 3, 6]

    def test_scripted_rejects_empty(self):
        with pytest.raises(ValueError):
            ScriptedDice([])

    def test_scripted_rejects_out_of_range(self):
        with pytest.raises(ValueError, match="between 1 and 6"):
            ScriptedDice([1, 7])

    def test_seeded_random_repeats(self):
        first = RandomDice(seed=42)
        second = RandomDice(seed=42)
        assert [first.roll() for _ in range(20)] == [second.roll() for _ in range(20)]

    def test_random_in_range(self):
        dice = RandomDice(seed=1)
        assert all(1 <= dice.roll() <= 6 for _ in range(200))


class TestWireForm:
    """Tests for Action.to_dict() / Action.from_dict()."""

    def test_roll_carries_value(self):
        action = Action.roll("p0", dice_value=4)
        assert action.to_dict() == {"type": "roll", "player_id": "p0", "dice_value": 4}

    def test_none_fields_dropped(self):
        assert Action.start_game().to_dict() == {"type": "start_game"}

    def test_from_dict(self):
        action = Action.from_dict({"type": "select_pawn", "pawn_id": "p0-pawn-2", "player_id": "p0"})

        assert action.action_type == ActionType.SELECT_PAWN
        assert action.payload == ActionPayload(player_id="p0", pawn_id="p0-pawn-2")

    def test_wire_form_is_stable(self):
        action = Action.select_pawn("p1-pawn-0", "p1")
        assert Action.from_dict(action.to_dict()) == action

    @pytest.mark.parametrize("data", [
        None,
        "roll",
        [],
        {},
        {"type": "teleport"},
        {"type": "roll", "dice_value": "6"},
        {"type": "roll", "dice_value": True},
        {"type": "roll", "player_id": 3},
        {"type": "select_pawn"},
        {"type": "select_pawn", "pawn_id": 7},
    ])
    def test_malformed(self, data):
        with pytest.raises(ValueError):
            Action.from_dict(data)


class TestLegalActions:
    """Every generated action must be accepted by the reducer."""

    def test_waiting_game(self, two_players):
        state = new_game(two_players)
        assert legal_actions(state) == [Action.start_game()]

    def test_awaiting_roll(self, two_player_state):
        actions = legal_actions(two_player_state)

        assert [a.action_type for a in actions] == [ActionType.BEGIN_ROLL, ActionType.ROLL]
        for action in actions:
            assert apply_action(two_player_state, action).success

    def test_while_rolling_only_roll(self, two_player_state):
        state = two_player_state._copy_with(is_rolling=True)
        assert [a.action_type for a in legal_actions(state)] == [ActionType.ROLL]
        assert movable_pawn_ids(state) == []

    def test_select_choices(self, rolled_state):
        actions = legal_actions(rolled_state)

        assert actions == [Action.select_pawn("p0-pawn-0", "p0")]
        assert apply_action(rolled_state, actions[0]).success

    def test_skip_when_stuck(self, two_player_state):
        state = two_player_state._copy_with(dice_value=2)
        actions = legal_actions(state)

        assert actions == [Action.skip_turn("p0")]
        assert apply_action(state, actions[0]).success

    def test_finished_game(self, two_player_state):
        state = two_player_state._copy_with(status=GameStatus.FINISHED, winner="p0")

        assert legal_actions(state) == []
        assert movable_pawn_ids(state) == []

    def test_base_pawns_offered_on_six(self, two_player_state):
        state = place(two_player_state, {"p0-pawn-3": 58})._copy_with(dice_value=6)

        assert movable_pawn_ids(state) == ["p0-pawn-0", "p0-pawn-1", "p0-pawn-2"]
