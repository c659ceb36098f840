"""
Reducer - Applies actions to game state.

The reducer is the single point of state transition.
All state changes must go through apply_action().

Design principles:
- Pure function: (state, action) -> new state
- Validates before applying
- Returns ActionResult with success/failure, never raises on bad input
- Rejected actions hand back the original state untouched
- The only randomness is the injected Dice, consulted for rolls that
  do not already carry a value
"""

from __future__ import annotations
import logging
from dataclasses import dataclass, field
from typing import Any, Iterable

from .action import Action, ActionResult, ActionType, ErrorCode
from .dice import DICE_FACES, Dice, RandomDice
from .rules import BONUS_ROLL, can_move, find_capture, has_won, move_target, movable_pawns
from .state import (
    COLOR_ORDER,
    Animal,
    GameState,
    GameStatus,
    Player,
    initial_pawns,
)

logger = logging.getLogger(__name__)

MIN_PLAYERS = 2
MAX_PLAYERS = 4


@dataclass
class Reducer:
    """
    Reducer applies actions to game state.

    Stateless apart from the dice it draws from.
    """
    dice: Dice = field(default_factory=RandomDice)

    def apply(self, state: GameState, action: Action) -> ActionResult:
        """
        Apply an action to the game state.

        Returns ActionResult with new state or error.
        """
        # Validate action is legal
        rejection = self._validate_action(state, action)
        if rejection:
            error, code = rejection
            logger.debug("Rejected %s: %s", action.action_type.value, error)
            return ActionResult.failure(error, error_code=code, state=state)

        # Dispatch to handler based on action type
        handler = self._get_handler(action.action_type)

        try:
            return handler(state, action)
        except Exception as e:
            logger.exception("Handler for %s failed", action.action_type.value)
            return ActionResult.failure(str(e), error_code=ErrorCode.HANDLER_ERROR, state=state)

    def _validate_action(self, state: GameState, action: Action) -> tuple[str, str] | None:
        """
        Validate that an action is legal in the current state.

        Returns (error message, error code) if invalid, None if valid.
        """
        action_type = action.action_type
        payload = action.payload

        # Game status checks
        if state.status == GameStatus.FINISHED:
            return "Game is over - no actions allowed", ErrorCode.GAME_OVER

        if state.status == GameStatus.WAITING:
            if action_type != ActionType.START_GAME:
                return "Game not started - only start allowed", ErrorCode.NOT_STARTED
            return None

        if action_type == ActionType.START_GAME:
            return "Game already started", ErrorCode.INVALID_ACTION

        # Player turn checks
        if payload.player_id is not None and payload.player_id != state.current_player.player_id:
            return f"Not {payload.player_id}'s turn", ErrorCode.NOT_YOUR_TURN

        if action_type in {ActionType.BEGIN_ROLL, ActionType.ROLL}:
            if state.dice_value is not None:
                return "Dice already rolled - move or skip first", ErrorCode.DICE_PENDING
            if action_type == ActionType.BEGIN_ROLL and state.is_rolling:
                return "Dice are already rolling", ErrorCode.DICE_PENDING
            if payload.dice_value is not None and payload.dice_value not in DICE_FACES:
                return f"Invalid dice value: {payload.dice_value}", ErrorCode.MALFORMED_ACTION
            return None

        if state.dice_value is None:
            return "Roll the dice first", ErrorCode.NO_DICE

        if action_type == ActionType.SKIP_TURN:
            if movable_pawns(state):
                return "A pawn can still move", ErrorCode.MOVES_AVAILABLE
            return None

        if action_type == ActionType.SELECT_PAWN:
            pawn = state.get_pawn(payload.pawn_id) if payload.pawn_id else None
            if not pawn:
                return f"Pawn {payload.pawn_id} not found", ErrorCode.UNKNOWN_PAWN
            if pawn.owner_id != state.current_player.player_id:
                return f"Pawn {pawn.pawn_id} belongs to another player", ErrorCode.NOT_YOUR_PAWN
            if not can_move(pawn, state.dice_value):
                return f"Pawn {pawn.pawn_id} cannot move {state.dice_value}", ErrorCode.ILLEGAL_MOVE

        return None

    def _get_handler(self, action_type: ActionType):
        """Get the handler function for an action type."""
        handlers = {
            ActionType.START_GAME: self._handle_start_game,
            ActionType.BEGIN_ROLL: self._handle_begin_roll,
            ActionType.ROLL: self._handle_roll,
            ActionType.SELECT_PAWN: self._handle_select_pawn,
            ActionType.SKIP_TURN: self._handle_skip_turn,
        }
        return handlers[action_type]

    def _handle_start_game(self, state: GameState, action: Action) -> ActionResult:
        new_state = state._copy_with(
            status=GameStatus.PLAYING,
            last_action="Game Started! Roll the dice.",
        )
        return ActionResult.success_with_state(new_state, changes=[new_state.last_action])

    def _handle_begin_roll(self, state: GameState, action: Action) -> ActionResult:
        """Rolling animation started. Only the flag changes."""
        new_state = state._copy_with(
            is_rolling=True,
            last_action=f"{state.current_player.name} is rolling...",
        )
        return ActionResult.success_with_state(new_state)

    def _handle_roll(self, state: GameState, action: Action) -> ActionResult:
        """
        Handle a roll.

        A value carried in the payload wins over the dice so that peers
        replaying a broadcast roll land on the same state.
        """
        value = action.payload.dice_value
        if value is None:
            value = self.dice.roll()

        new_state = state._copy_with(
            dice_value=value,
            is_rolling=False,
            last_action=f"Rolled a {value}!",
        )
        if not movable_pawns(new_state):
            new_state = new_state._copy_with(
                last_action=f"Rolled a {value}. No moves possible!",
            )

        return ActionResult.success_with_state(new_state, changes=[new_state.last_action])

    def _handle_skip_turn(self, state: GameState, action: Action) -> ActionResult:
        """
        No legal move for the pending roll.

        A 6 still earns another roll; anything else passes the turn.
        """
        value = state.dice_value
        player = state.current_player

        if value == BONUS_ROLL:
            new_state = state._copy_with(
                dice_value=None,
                last_action=f"Rolled a {value}. No moves possible! {player.name} rolls again.",
            )
        else:
            next_idx = state.next_player_idx()
            new_state = state._copy_with(
                current_player_idx=next_idx,
                dice_value=None,
                last_action=(
                    f"Rolled a {value}. No moves possible! "
                    f"{state.players[next_idx].name}'s turn"
                ),
            )

        return ActionResult.success_with_state(new_state, changes=[new_state.last_action])

    def _handle_select_pawn(self, state: GameState, action: Action) -> ActionResult:
        """
        Move a pawn by the pending dice value.

        Order matters: capture, then win, then bonus turn, then pass.
        """
        value = state.dice_value
        player = state.current_player
        pawn = state.get_pawn(action.payload.pawn_id)

        moved = pawn.moved_to(move_target(pawn, value))
        new_state = state.with_pawn(moved)
        changes = [f"{player.name} moved {moved.pawn_id} to {moved.position}"]

        # Capture
        captured = find_capture(new_state.pawns, moved)
        if captured:
            new_state = new_state.with_pawn(captured.moved_to(-1))
            changes.append(f"{captured.pawn_id} sent back to base")

        # Win
        if has_won(new_state.pawns, player.player_id):
            new_state = new_state._copy_with(
                status=GameStatus.FINISHED,
                winner=player.player_id,
                dice_value=None,
                last_action=f"{player.name} WINS!",
            )
            changes.append(new_state.last_action)
            logger.info("Game finished, winner %s", player.player_id)
            return ActionResult.success_with_state(
                new_state,
                changes=changes,
                captured_pawn_id=captured.pawn_id if captured else None,
            )

        # Bonus turn
        if captured:
            new_state = new_state._copy_with(
                dice_value=None,
                last_action=f"BOOM! {player.name} killed a pawn!",
            )
        elif value == BONUS_ROLL:
            new_state = new_state._copy_with(
                dice_value=None,
                last_action="Rolled a 6! One more turn.",
            )
        else:
            next_idx = state.next_player_idx()
            new_state = new_state._copy_with(
                current_player_idx=next_idx,
                dice_value=None,
                last_action=f"{state.players[next_idx].name}'s turn",
            )

        changes.append(new_state.last_action)
        return ActionResult.success_with_state(
            new_state,
            changes=changes,
            captured_pawn_id=captured.pawn_id if captured else None,
        )


# =============================================================================
# Driver-facing functions
# =============================================================================

def new_game(players: Iterable[Player]) -> GameState:
    """
    Create a game in the waiting status.

    Raises ValueError for a bad table: 2-4 players with distinct ids
    and distinct colours.
    """
    players = tuple(players)
    if not MIN_PLAYERS <= len(players) <= MAX_PLAYERS:
        raise ValueError(f"Ludo needs {MIN_PLAYERS}-{MAX_PLAYERS} players, got {len(players)}")
    if len({p.player_id for p in players}) != len(players):
        raise ValueError("Player ids must be unique")
    if len({p.color for p in players}) != len(players):
        raise ValueError("Each player needs a different colour")

    return GameState(
        players=players,
        pawns=initial_pawns(players),
        status=GameStatus.WAITING,
        last_action="Waiting for players",
    )


def initialize(players: Iterable[Player]) -> GameState:
    """Create a game that is already playing, first player to roll."""
    state = new_game(players)
    return apply_action(state, Action.start_game()).new_state


def local_players(count: int, animals: list[Animal] | None = None) -> list[Player]:
    """Hot-seat seats: 'You', 'Player 2', ... with colours in seat order."""
    animals = animals or list(Animal)
    return [
        Player(
            player_id=f"local-{i}",
            name="You" if i == 0 else f"Player {i + 1}",
            animal=animals[i % len(animals)],
            color=COLOR_ORDER[i % len(COLOR_ORDER)],
        )
        for i in range(count)
    ]


def apply_action(state: GameState, action: Action, dice: Dice | None = None) -> ActionResult:
    """
    Convenience function to apply an action.

    Creates a Reducer and applies the action.
    """
    reducer = Reducer(dice=dice) if dice is not None else Reducer()
    return reducer.apply(state, action)


def apply_wire_action(
    state: GameState,
    data: Any,
    dice: Dice | None = None,
    remote: bool = False,
) -> ActionResult:
    """
    Apply an action received as a plain dict, treating malformed input as a no-op.

    With remote=True the action came from another peer and a roll must
    carry its value; the local dice are never consulted.
    """
    try:
        action = Action.from_dict(data)
    except ValueError as e:
        logger.debug("Malformed action %r: %s", data, e)
        return ActionResult.failure(str(e), error_code=ErrorCode.MALFORMED_ACTION, state=state)
    if remote and action.action_type == ActionType.ROLL and action.payload.dice_value is None:
        logger.debug("Remote roll without a dice value: %r", data)
        return ActionResult.failure(
            "Remote roll must carry dice_value",
            error_code=ErrorCode.MALFORMED_ACTION,
            state=state,
        )
    return apply_action(state, action, dice)


def start_game(state: GameState) -> ActionResult:
    return apply_action(state, Action.start_game())


def begin_roll(state: GameState) -> ActionResult:
    return apply_action(state, Action.begin_roll())


def roll(state: GameState, dice: Dice | None = None, value: int | None = None) -> ActionResult:
    """Roll for the current player, from dice or with a known value."""
    return apply_action(state, Action.roll(dice_value=value), dice)


def select_pawn(state: GameState, pawn_id: str) -> ActionResult:
    return apply_action(state, Action.select_pawn(pawn_id))


def skip_turn(state: GameState) -> ActionResult:
    """The pure 'rolled with no legal moves' transition a driver calls after its delay."""
    return apply_action(state, Action.skip_turn())
