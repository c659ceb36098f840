"""
Tests for the GameLoop driver.
"""

from ..engine_core.action import ErrorCode
from ..engine_core.dice import ScriptedDice
from ..engine_core.reducer import new_game
from ..session.game_loop import GameLoop, LoopState
from .conftest import place


class TestLocalTable:
    """Tests for a hot-seat table."""

    def test_local_starts_playing(self):
        loop = GameLoop.local(num_players=3)

        assert loop.loop_state == LoopState.AWAITING_ROLL
        assert [p.name for p in loop.state.players] == ["You", "Player 2", "Player 3"]
        assert loop.state.current_player.player_id == "local-0"

    def test_waiting_table_needs_start(self, two_players):
        loop = GameLoop(new_game(two_players))
        assert loop.loop_state == LoopState.WAITING_START

        result = loop.start()

        assert result.success
        assert result.loop_state == LoopState.AWAITING_ROLL
        assert loop.outbox == [{"type": "start_game"}]

    def test_start_twice_rejected(self):
        loop = GameLoop.local()

        result = loop.start()

        assert not result.success
        assert result.error_code == ErrorCode.INVALID_ACTION
        assert loop.outbox == []


class TestRolling:
    """Tests for roll() and skip()."""

    def test_no_move_goes_to_skip_pending(self):
        loop = GameLoop.local(dice=ScriptedDice([3]))

        result = loop.roll()

        assert result.success
        assert result.loop_state == LoopState.SKIP_PENDING
        assert result.message == "Rolled a 3. No moves possible!"

    def test_skip_passes_turn(self):
        loop = GameLoop.local(dice=ScriptedDice([3]))
        loop.roll()

        result = loop.skip()

        assert result.loop_state == LoopState.AWAITING_ROLL
        assert loop.state.current_player.player_id == "local-1"

    def test_skip_on_six_keeps_turn(self):
        loop = GameLoop.local(dice=ScriptedDice([6]))
        loop.state = place(loop.state, {f"local-0-pawn-{n}": 58 for n in range(3)})
        loop.state = place(loop.state, {"local-0-pawn-3": 55})

        assert loop.roll().loop_state == LoopState.SKIP_PENDING
        loop.skip()

        assert loop.state.current_player.player_id == "local-0"
        assert loop.loop_state == LoopState.AWAITING_ROLL

    def test_begin_roll_then_roll(self):
        loop = GameLoop.local(dice=ScriptedDice([2]))

        assert loop.begin_roll().success
        assert loop.state.is_rolling

        result = loop.roll()
        assert result.success
        assert not loop.state.is_rolling
        assert loop.state.dice_value == 2

    def test_stale_roll_does_not_burn_a_die(self):
        loop = GameLoop.local(dice=ScriptedDice([6, 2]))
        loop.roll()

        stale = loop.roll()
        assert not stale.success
        assert stale.error_code == ErrorCode.DICE_PENDING

        loop.select("local-0-pawn-0")
        loop.roll()
        assert loop.state.dice_value == 2

    def test_stale_skip_is_a_no_op(self):
        loop = GameLoop.local(dice=ScriptedDice([3]))
        loop.roll()
        loop.skip()
        before = loop.state

        result = loop.skip()

        assert not result.success
        assert result.error_code == ErrorCode.NO_DICE
        assert loop.state is before


class TestMoving:
    """Tests for select()."""

    def test_six_enters_and_rolls_again(self):
        loop = GameLoop.local(dice=ScriptedDice([6]))
        result = loop.roll()

        assert result.loop_state == LoopState.AWAITING_MOVE
        assert loop.movable_pawn_ids() == [f"local-0-pawn-{n}" for n in range(4)]

        result = loop.select("local-0-pawn-0")

        assert result.success
        assert loop.state.get_pawn("local-0-pawn-0").position == 0
        assert loop.state.current_player.player_id == "local-0"
        assert result.loop_state == LoopState.AWAITING_ROLL

    def test_illegal_pick_rejected(self):
        loop = GameLoop.local(dice=ScriptedDice([6]))
        loop.roll()

        result = loop.select("local-1-pawn-0")

        assert not result.success
        assert result.error_code == ErrorCode.NOT_YOUR_PAWN
        assert result.loop_state == LoopState.AWAITING_MOVE

    def test_winning_move(self):
        loop = GameLoop.local(dice=ScriptedDice([1]))
        loop.state = place(loop.state, {
            "local-0-pawn-0": 58,
            "local-0-pawn-1": 58,
            "local-0-pawn-2": 58,
            "local-0-pawn-3": 57,
        })
        loop.roll()

        result = loop.select("local-0-pawn-3")

        assert result.winner == "local-0"
        assert result.loop_state == LoopState.GAME_OVER
        assert not loop.roll().success


class TestRelaySync:
    """Tests for the outbox and apply_remote()."""

    def test_outbox_records_rolled_value(self):
        loop = GameLoop.local(dice=ScriptedDice([6]))
        loop.roll()
        loop.select("local-0-pawn-1")

        assert loop.drain_outbox() == [
            {"type": "roll", "player_id": "local-0", "dice_value": 6},
            {"type": "select_pawn", "player_id": "local-0", "pawn_id": "local-0-pawn-1"},
        ]
        assert loop.drain_outbox() == []

    def test_peer_replays_to_same_state(self):
        host = GameLoop.local(dice=ScriptedDice([6, 4, 3]))
        peer = GameLoop.local(dice=ScriptedDice([1]))

        host.roll()
        host.select("local-0-pawn-2")
        host.roll()
        host.select("local-0-pawn-2")
        host.roll()
        host.skip()

        for message in host.drain_outbox():
            assert peer.apply_remote(message).success

        assert peer.state == host.state
        assert peer.outbox == []

    def test_malformed_remote_is_ignored(self):
        loop = GameLoop.local()
        before = loop.state

        result = loop.apply_remote({"type": "teleport"})

        assert not result.success
        assert result.error_code == ErrorCode.MALFORMED_ACTION
        assert loop.state is before

    def test_remote_roll_without_value_is_ignored(self):
        """Peers never draw their own number for someone else's roll."""
        peers = [GameLoop.local(dice=ScriptedDice([value])) for value in (3, 6)]

        for peer in peers:
            before = peer.state
            result = peer.apply_remote({"type": "roll", "player_id": "local-0"})

            assert not result.success
            assert result.error_code == ErrorCode.MALFORMED_ACTION
            assert peer.state is before
            assert peer.state.dice_value is None

    def test_remote_roll_value_beats_local_dice(self):
        peer = GameLoop.local(dice=ScriptedDice([6]))

        result = peer.apply_remote({"type": "roll", "player_id": "local-0", "dice_value": 2})

        assert result.success
        assert peer.state.dice_value == 2
