"""
Pydantic Schemas for the relay - WebSocket messages and REST models.

These models define the exact contract between browser clients and
the relay. The relay validates envelopes only; the `action` inside a
game-action message is opaque and passed through untouched.

Error Codes:
- ROOM_NOT_FOUND: Room does not exist (or was reaped)
- INVALID_MESSAGE: Message failed schema validation
- INVALID_JSON: Message was not JSON
- UNKNOWN_MESSAGE_TYPE: Message type is not one the relay handles
"""

from enum import Enum
from typing import Any, Literal, Optional
from pydantic import AliasChoices, BaseModel, Field


# =============================================================================
# Enums
# =============================================================================

class MessageType(str, Enum):
    """WebSocket message types."""
    # Client -> relay
    JOIN_ROOM = "join-room"
    GAME_ACTION = "game-action"
    PING = "ping"

    # Relay -> client
    ROOM_UPDATE = "room-update"
    GAME_EVENT = "game-event"
    PONG = "pong"
    ERROR = "error"


class ErrorCode(str, Enum):
    """Structured error codes."""
    ROOM_NOT_FOUND = "ROOM_NOT_FOUND"
    INVALID_MESSAGE = "INVALID_MESSAGE"
    INVALID_JSON = "INVALID_JSON"
    UNKNOWN_MESSAGE_TYPE = "UNKNOWN_MESSAGE_TYPE"


# =============================================================================
# Shared Models
# =============================================================================

class UserData(BaseModel):
    """What a client says about itself when joining. Everything optional."""
    name: Optional[str] = None
    animal: Optional[str] = None
    color: Optional[str] = None


class PlayerInfo(BaseModel):
    """A room member as broadcast to clients."""
    id: str
    name: str
    animal: str
    color: str

    model_config = {"from_attributes": True}


# =============================================================================
# Client -> relay messages
# =============================================================================

class JoinRoomMessage(BaseModel):
    """Join (or re-join) a room."""
    type: Literal["join-room"] = "join-room"
    room_id: str = Field(
        min_length=1,
        validation_alias=AliasChoices("room_id", "roomId"),
        description="Room to join",
    )
    user: UserData = Field(default_factory=UserData, validation_alias=AliasChoices("user", "userData"))


class GameActionMessage(BaseModel):
    """Ask the relay to fan an action out to a room."""
    type: Literal["game-action"] = "game-action"
    room_id: str = Field(min_length=1, validation_alias=AliasChoices("room_id", "roomId"))
    action: Any = Field(description="Opaque action payload, never inspected by the relay")


# =============================================================================
# Relay -> client messages
# =============================================================================

class RoomUpdate(BaseModel):
    """Current player list of a room."""
    type: Literal["room-update"] = "room-update"
    room_id: str
    players: list[PlayerInfo] = Field(default_factory=list)


class GameEvent(BaseModel):
    """An action rebroadcast to every member of a room."""
    type: Literal["game-event"] = "game-event"
    room_id: str
    action: Any = None
    sender_id: Optional[str] = None


class ErrorPayload(BaseModel):
    message: str
    error_code: ErrorCode


class ErrorMessage(BaseModel):
    """Sent only to the connection whose message failed."""
    type: Literal["error"] = "error"
    payload: ErrorPayload


# =============================================================================
# REST models
# =============================================================================

class RoomResponse(BaseModel):
    """A room as seen over REST."""
    room_id: str
    players: list[PlayerInfo] = Field(default_factory=list)
    created_at: float


class RoomListResponse(BaseModel):
    rooms: list[RoomResponse] = Field(default_factory=list)
    count: int = 0


class ErrorResponse(BaseModel):
    """Standard error response."""
    error: str
    error_code: ErrorCode
    details: Optional[dict[str, Any]] = None


class HealthResponse(BaseModel):
    status: str = "healthy"
    service: str = "ludosavannah-relay"
    version: str
    rooms: int = 0
    connections: int = 0
