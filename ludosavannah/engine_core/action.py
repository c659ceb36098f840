"""
Action System - Actions, payloads, and results.

Actions represent:
1. Player actions (roll, select a pawn)
2. System actions (start game, skip a turn with no legal moves)
3. Presentation hints (rolling animation started)

All state changes flow through actions. Actions cross the relay as
plain dicts (to_dict / from_dict) so every peer replays the same roll.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from enum import Enum
from typing import Any


class ActionType(Enum):
    """Types of actions in the system."""
    # Player actions
    BEGIN_ROLL = "begin_roll"
    ROLL = "roll"
    SELECT_PAWN = "select_pawn"

    # System actions
    START_GAME = "start_game"
    SKIP_TURN = "skip_turn"


class ErrorCode:
    """Rejection reasons reported on failed ActionResults."""
    GAME_OVER = "GAME_OVER"
    NOT_STARTED = "NOT_STARTED"
    INVALID_ACTION = "INVALID_ACTION"
    NOT_YOUR_TURN = "NOT_YOUR_TURN"
    DICE_PENDING = "DICE_PENDING"
    NO_DICE = "NO_DICE"
    UNKNOWN_PAWN = "UNKNOWN_PAWN"
    NOT_YOUR_PAWN = "NOT_YOUR_PAWN"
    ILLEGAL_MOVE = "ILLEGAL_MOVE"
    MOVES_AVAILABLE = "MOVES_AVAILABLE"
    MALFORMED_ACTION = "MALFORMED_ACTION"
    HANDLER_ERROR = "HANDLER_ERROR"


@dataclass(frozen=True)
class ActionPayload:
    """
    Payload for an action - contains the action parameters.

    Different action types use different fields.
    Validation happens in the reducer.
    """
    # Acting player. Optional: local hot-seat drivers may leave it out.
    player_id: str | None = None

    # For pawn selection
    pawn_id: str | None = None

    # For rolls replayed from the network
    dice_value: int | None = None


@dataclass(frozen=True)
class Action:
    """
    A complete action to be applied to the game state.

    Actions are:
    - Validated before application
    - Applied atomically by the reducer
    - Serialized for the relay
    """
    action_type: ActionType
    payload: ActionPayload = field(default_factory=ActionPayload)

    @classmethod
    def start_game(cls) -> Action:
        return cls(action_type=ActionType.START_GAME)

    @classmethod
    def begin_roll(cls, player_id: str | None = None) -> Action:
        return cls(
            action_type=ActionType.BEGIN_ROLL,
            payload=ActionPayload(player_id=player_id),
        )

    @classmethod
    def roll(cls, player_id: str | None = None, dice_value: int | None = None) -> Action:
        """Factory for roll action. Without a dice_value the reducer draws from its dice."""
        return cls(
            action_type=ActionType.ROLL,
            payload=ActionPayload(player_id=player_id, dice_value=dice_value),
        )

    @classmethod
    def select_pawn(cls, pawn_id: str, player_id: str | None = None) -> Action:
        return cls(
            action_type=ActionType.SELECT_PAWN,
            payload=ActionPayload(player_id=player_id, pawn_id=pawn_id),
        )

    @classmethod
    def skip_turn(cls, player_id: str | None = None) -> Action:
        return cls(
            action_type=ActionType.SKIP_TURN,
            payload=ActionPayload(player_id=player_id),
        )

    def to_dict(self) -> dict[str, Any]:
        """Wire form. None fields are dropped."""
        data: dict[str, Any] = {"type": self.action_type.value}
        if self.payload.player_id is not None:
            data["player_id"] = self.payload.player_id
        if self.payload.pawn_id is not None:
            data["pawn_id"] = self.payload.pawn_id
        if self.payload.dice_value is not None:
            data["dice_value"] = self.payload.dice_value
        return data

    @classmethod
    def from_dict(cls, data: Any) -> Action:
        """
        Parse the wire form.

        Raises ValueError on anything malformed; the reducer turns that
        into a no-op result.
        """
        if not isinstance(data, dict):
            raise ValueError("Action must be an object")
        try:
            action_type = ActionType(data.get("type"))
        except ValueError:
            raise ValueError(f"Unknown action type: {data.get('type')!r}")

        player_id = data.get("player_id")
        pawn_id = data.get("pawn_id")
        dice_value = data.get("dice_value")

        if player_id is not None and not isinstance(player_id, str):
            raise ValueError("player_id must be a string")
        if pawn_id is not None and not isinstance(pawn_id, str):
            raise ValueError("pawn_id must be a string")
        if dice_value is not None and (
            isinstance(dice_value, bool) or not isinstance(dice_value, int)
        ):
            raise ValueError("dice_value must be an integer")
        if action_type == ActionType.SELECT_PAWN and pawn_id is None:
            raise ValueError("select_pawn requires pawn_id")

        return cls(
            action_type=action_type,
            payload=ActionPayload(
                player_id=player_id,
                pawn_id=pawn_id,
                dice_value=dice_value,
            ),
        )


@dataclass
class ActionResult:
    """
    Result of applying an action.

    Contains:
    - Whether action succeeded
    - The resulting state (unchanged on failure)
    - Error reason and code (if rejected)
    - Human-readable changes for the UI
    """
    success: bool
    new_state: Any | None = None  # GameState
    error: str | None = None
    error_code: str | None = None

    # For UI/presentation
    state_changes: list[str] = field(default_factory=list)

    # Set when a move sent an opponent pawn back to base
    captured_pawn_id: str | None = None

    @classmethod
    def failure(cls, error: str, error_code: str | None = None, state: Any = None) -> ActionResult:
        """Create a failure result. state is handed back untouched."""
        return cls(success=False, new_state=state, error=error, error_code=error_code)

    @classmethod
    def success_with_state(
        cls,
        state: Any,
        changes: list[str] | None = None,
        captured_pawn_id: str | None = None,
    ) -> ActionResult:
        """Create a success result with new state."""
        return cls(
            success=True,
            new_state=state,
            state_changes=changes or [],
            captured_pawn_id=captured_pawn_id,
        )
