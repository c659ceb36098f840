"""
Session Module - Room membership and the client-side game driver.

Rooms are EPHEMERAL:
- Held in relay process memory only
- Created on first join, reaped when the last member leaves
- Carry no game state; the relay never interprets actions

The GameLoop is what each client runs: it owns the dice and the
outbox of actions to relay, and feeds everything through the engine.
"""

from .manager import RoomManager, Room, RoomMember
from .game_loop import GameLoop, LoopState, TurnResult

__all__ = [
    "RoomManager",
    "Room",
    "RoomMember",
    "GameLoop",
    "LoopState",
    "TurnResult",
]
