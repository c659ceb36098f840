"""
API Module - Room relay for online play.

Exposes a WebSocket relay for browser clients:
1. Clients join named rooms
2. The relay broadcasts each room's player list
3. Clients send game actions, the relay fans them out unchanged
4. Each client applies them through its own engine

All state is process-scoped. No accounts, no persistence.
"""

from .schemas import (
    # Client messages
    JoinRoomMessage,
    GameActionMessage,
    UserData,
    # Relay messages
    RoomUpdate,
    GameEvent,
    ErrorMessage,
    # REST
    RoomResponse,
    RoomListResponse,
    ErrorResponse,
    HealthResponse,
    # Shared
    PlayerInfo,
    MessageType,
    ErrorCode,
)
from .service import RelayService
from .app import create_app

__all__ = [
    # Client messages
    "JoinRoomMessage",
    "GameActionMessage",
    "UserData",
    # Relay messages
    "RoomUpdate",
    "GameEvent",
    "ErrorMessage",
    # REST
    "RoomResponse",
    "RoomListResponse",
    "ErrorResponse",
    "HealthResponse",
    # Shared
    "PlayerInfo",
    "MessageType",
    "ErrorCode",
    # Service
    "RelayService",
    "create_app",
]
