"""
Game Loop - Client-side driver around the rules engine.

The loop:
1. Player asks to roll (the loop draws from its dice)
2. Engine reports the roll; if no pawn can move the loop enters SKIP_PENDING
3. Caller waits its skip delay, then calls skip()
4. Otherwise the player selects a pawn
5. Every locally applied action is queued in the outbox for the relay
6. Actions arriving from the relay are applied with apply_remote()

The loop owns no timers. Delays are the caller's business (see
Settings.roll_delay / skip_delay); stale or duplicate calls made after a
delay are absorbed because the engine rejects them as no-ops.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from enum import Enum
from typing import Any
import logging

from ..engine_core.action import Action, ActionResult
from ..engine_core.action_generator import movable_pawn_ids
from ..engine_core.dice import Dice, RandomDice
from ..engine_core.reducer import Reducer, apply_wire_action, initialize, local_players
from ..engine_core.rules import movable_pawns
from ..engine_core.state import Animal, GameState, GameStatus

logger = logging.getLogger(__name__)


class LoopState(Enum):
    """What the driver is waiting for."""
    WAITING_START = "waiting_start"
    AWAITING_ROLL = "awaiting_roll"
    AWAITING_MOVE = "awaiting_move"
    SKIP_PENDING = "skip_pending"
    GAME_OVER = "game_over"


@dataclass
class TurnResult:
    """
    Result of one driver step.

    Carries the engine's verdict plus what the UI needs next.
    """
    success: bool
    loop_state: LoopState
    message: str | None = None
    error_code: str | None = None
    action: Action | None = None
    changes: list[str] = field(default_factory=list)
    captured_pawn_id: str | None = None
    winner: str | None = None


class GameLoop:
    """
    The driver for one table.

    Usage:
        loop = GameLoop.local(num_players=2)

        result = loop.roll()
        if result.loop_state == LoopState.SKIP_PENDING:
            time.sleep(settings.skip_delay)
            result = loop.skip()
        elif result.loop_state == LoopState.AWAITING_MOVE:
            result = loop.select(loop.movable_pawn_ids()[0])

        send_to_relay(loop.drain_outbox())
    """

    def __init__(self, state: GameState, dice: Dice | None = None):
        self.state = state
        self.dice = dice or RandomDice()
        self.outbox: list[dict[str, Any]] = []

    @classmethod
    def local(
        cls,
        num_players: int = 2,
        animals: list[Animal] | None = None,
        dice: Dice | None = None,
    ) -> GameLoop:
        """Hot-seat game with generated local players, already started."""
        return cls(initialize(local_players(num_players, animals)), dice=dice)

    @property
    def loop_state(self) -> LoopState:
        state = self.state
        if state.status == GameStatus.FINISHED:
            return LoopState.GAME_OVER
        if state.status == GameStatus.WAITING:
            return LoopState.WAITING_START
        if state.dice_value is None:
            return LoopState.AWAITING_ROLL
        if movable_pawns(state):
            return LoopState.AWAITING_MOVE
        return LoopState.SKIP_PENDING

    def movable_pawn_ids(self) -> list[str]:
        return movable_pawn_ids(self.state)

    def start(self) -> TurnResult:
        return self._apply_local(Action.start_game())

    def begin_roll(self) -> TurnResult:
        """Mark the dice as rolling while the caller animates."""
        return self._apply_local(Action.begin_roll(self._current_player_id()))

    def roll(self) -> TurnResult:
        """
        Roll for the current player.

        The drawn value is baked into the action so peers replay the
        same number.
        """
        if self.loop_state != LoopState.AWAITING_ROLL:
            # Let the engine produce the rejection without burning a die
            return self._apply_local(Action.roll(self._current_player_id()))
        value = self.dice.roll()
        return self._apply_local(Action.roll(self._current_player_id(), dice_value=value))

    def select(self, pawn_id: str) -> TurnResult:
        return self._apply_local(Action.select_pawn(pawn_id, self._current_player_id()))

    def skip(self) -> TurnResult:
        """Pass on a roll with no legal move. Call after the skip delay."""
        return self._apply_local(Action.skip_turn(self._current_player_id()))

    def apply_remote(self, payload: Any) -> TurnResult:
        """Apply an action broadcast by the relay. Nothing is queued."""
        result = apply_wire_action(self.state, payload, self.dice, remote=True)
        action = Action.from_dict(payload) if result.success else None
        return self._absorb(result, action)

    def drain_outbox(self) -> list[dict[str, Any]]:
        """Hand over queued wire actions and clear the queue."""
        pending = self.outbox
        self.outbox = []
        return pending

    def _current_player_id(self) -> str | None:
        if self.state.status != GameStatus.PLAYING:
            return None
        return self.state.current_player.player_id

    def _apply_local(self, action: Action) -> TurnResult:
        result = Reducer(dice=self.dice).apply(self.state, action)
        turn = self._absorb(result, action)
        if result.success:
            self.outbox.append(action.to_dict())
        return turn

    def _absorb(self, result: ActionResult, action: Action | None) -> TurnResult:
        if not result.success:
            logger.debug("Driver action ignored: %s", result.error)
            return TurnResult(
                success=False,
                loop_state=self.loop_state,
                message=result.error,
                error_code=result.error_code,
                action=action,
            )

        self.state = result.new_state
        return TurnResult(
            success=True,
            loop_state=self.loop_state,
            message=self.state.last_action,
            action=action,
            changes=result.state_changes,
            captured_pawn_id=result.captured_pawn_id,
            winner=self.state.winner,
        )
