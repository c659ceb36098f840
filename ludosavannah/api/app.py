"""
FastAPI Application - Room relay for online games.

Endpoints:
    WS     /ws                       Relay socket (join-room, game-action, ping)
    GET    /api/v1/rooms             List rooms and their players
    GET    /api/v1/rooms/{room_id}   One room's players
    GET    /health                   Health check
    GET    /                         API info

Relay flow:
    1. Client connects to /ws and gets a connection id
    2. {"type": "join-room", "room_id": ..., "user": {...}}
       -> everyone in the room receives "room-update" with the player list
    3. {"type": "game-action", "room_id": ..., "action": {...}}
       -> everyone in the room, sender included, receives "game-event"
    4. Socket closes -> every room it was in receives a fresh "room-update"

All messages are JSON. The relay never validates actions against the
rules; each client runs its own engine.
"""

from typing import Optional, Union
import json
import logging

from fastapi import FastAPI, WebSocket, WebSocketDisconnect
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from pydantic import ValidationError

from .. import __version__
from ..config import Settings
from ..session import Room
from .service import RelayService
from .schemas import (
    # Client messages
    JoinRoomMessage,
    GameActionMessage,
    # Relay messages
    ErrorMessage,
    ErrorPayload,
    MessageType,
    # REST
    ErrorCode,
    ErrorResponse,
    HealthResponse,
    PlayerInfo,
    RoomListResponse,
    RoomResponse,
)

logger = logging.getLogger(__name__)


def create_app(service: Optional[RelayService] = None, settings: Optional[Settings] = None) -> FastAPI:
    """
    Create the FastAPI application.

    Args:
        service: Optional RelayService instance (creates new if not provided)
        settings: Optional Settings (read from the environment if not provided)

    Returns:
        FastAPI application instance
    """
    settings = settings or Settings.from_env()
    relay = service or RelayService()

    app = FastAPI(
        title="Ludo Savannah Relay",
        description="""
Room relay for Ludo Savannah.

Clients join named rooms over `/ws` and the relay fans out whatever
game actions they send. It holds no game rules and no game state.

## Error Codes

| Code | Description |
|------|-------------|
| `ROOM_NOT_FOUND` | Room does not exist |
| `INVALID_MESSAGE` | Message failed validation |
| `INVALID_JSON` | Message was not JSON |
| `UNKNOWN_MESSAGE_TYPE` | Message type not handled |
        """,
        version=__version__,
        docs_url=None if settings.is_production else "/api/docs",
        redoc_url=None if settings.is_production else "/api/redoc",
    )
    app.state.relay = relay

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.allowed_origins,
        allow_credentials=True,
        allow_methods=["GET", "POST"],
        allow_headers=["*"],
    )

    # =========================================================================
    # Error helpers
    # =========================================================================

    def make_error_response(
        error_code: ErrorCode,
        message: str,
        status_code: int = 400,
        details: Optional[dict] = None,
    ) -> JSONResponse:
        """Create a standardized error response."""
        return JSONResponse(
            status_code=status_code,
            content=ErrorResponse(
                error=message,
                error_code=error_code,
                details=details,
            ).model_dump(mode="json"),
        )

    async def send_error(websocket: WebSocket, error_code: ErrorCode, message: str):
        await websocket.send_json(
            ErrorMessage(payload=ErrorPayload(message=message, error_code=error_code)).model_dump(mode="json")
        )

    # =========================================================================
    # Relay WebSocket
    # =========================================================================

    @app.websocket("/ws")
    async def relay_socket(websocket: WebSocket):
        """
        Relay socket.

        Messages from client:
        - join-room: {"room_id", "user": {"name", "animal", "color"}}
        - game-action: {"room_id", "action": <opaque>}
        - ping: keep-alive

        Messages from relay:
        - room-update: player list of a room
        - game-event: an action sent by a room member
        - pong
        - error: the last message was rejected
        """
        await websocket.accept()
        connection_id = relay.connect(websocket)

        try:
            while True:
                data = await websocket.receive_text()
                try:
                    message = json.loads(data)
                except json.JSONDecodeError:
                    await send_error(websocket, ErrorCode.INVALID_JSON, "Invalid JSON")
                    continue

                if not isinstance(message, dict):
                    await send_error(websocket, ErrorCode.INVALID_MESSAGE, "Message must be an object")
                    continue

                message_type = message.get("type")
                try:
                    if message_type == MessageType.JOIN_ROOM.value:
                        join = JoinRoomMessage.model_validate(message)
                        await relay.join_room(
                            connection_id,
                            join.room_id,
                            join.user.model_dump(exclude_none=True),
                        )
                    elif message_type == MessageType.GAME_ACTION.value:
                        game_action = GameActionMessage.model_validate(message)
                        await relay.game_action(connection_id, game_action.room_id, game_action.action)
                    elif message_type == MessageType.PING.value:
                        await websocket.send_json({"type": MessageType.PONG.value})
                    else:
                        await send_error(
                            websocket,
                            ErrorCode.UNKNOWN_MESSAGE_TYPE,
                            f"Unknown message type: {message_type!r}",
                        )
                except ValidationError as e:
                    await send_error(websocket, ErrorCode.INVALID_MESSAGE, str(e))

        except WebSocketDisconnect:
            pass
        finally:
            await relay.disconnect(connection_id)

    # =========================================================================
    # Room Endpoints
    # =========================================================================

    @app.get(
        "/api/v1/rooms",
        response_model=RoomListResponse,
        tags=["Rooms"],
        summary="List rooms",
    )
    async def list_rooms() -> RoomListResponse:
        """All rooms that currently have members."""
        rooms = [_convert_room(room) for room in relay.rooms.list_rooms()]
        return RoomListResponse(rooms=rooms, count=len(rooms))

    @app.get(
        "/api/v1/rooms/{room_id}",
        response_model=RoomResponse,
        responses={404: {"model": ErrorResponse}},
        tags=["Rooms"],
        summary="Get a room",
    )
    async def get_room(room_id: str) -> Union[RoomResponse, JSONResponse]:
        room = relay.rooms.get_room(room_id)
        if room is None:
            return make_error_response(
                ErrorCode.ROOM_NOT_FOUND,
                f"Room {room_id} not found",
                status_code=404,
            )
        return _convert_room(room)

    # =========================================================================
    # Health Check
    # =========================================================================

    @app.get(
        "/health",
        response_model=HealthResponse,
        tags=["System"],
        summary="Health check",
    )
    async def health_check() -> HealthResponse:
        """Health check endpoint for load balancers."""
        return HealthResponse(
            status="healthy",
            version=__version__,
            rooms=len(relay.rooms.list_rooms()),
            connections=relay.connection_count,
        )

    @app.get("/", tags=["System"])
    async def root():
        """Root endpoint with API info."""
        return {
            "name": "Ludo Savannah Relay",
            "version": __version__,
            "docs": None if settings.is_production else "/api/docs",
            "health": "/health",
            "socket": "/ws",
        }

    # =========================================================================
    # Conversion Helpers
    # =========================================================================

    def _convert_room(room: Room) -> RoomResponse:
        return RoomResponse(
            room_id=room.room_id,
            players=[PlayerInfo(**p) for p in room.player_list()],
            created_at=room.created_at,
        )

    return app


# For running directly: uvicorn ludosavannah.api.app:app
app = create_app()
