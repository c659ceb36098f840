"""
Relay Service - Connection hub between WebSockets and room membership.

The service:
1. Assigns every connection an id
2. Upserts room membership on join-room and broadcasts the player list
3. Fans game-action payloads out to the whole room, sender included
4. Cleans up every room a connection was in when it closes

It never looks inside an action. Rule enforcement is each client's
engine; the relay only preserves per-room arrival order.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from typing import Any, Protocol
import logging
import uuid

from ..session import RoomManager, Room
from .schemas import GameEvent, PlayerInfo, RoomUpdate

logger = logging.getLogger(__name__)


class Connection(Protocol):
    """The slice of a WebSocket the hub needs."""

    async def send_json(self, data: Any) -> None:
        ...


@dataclass
class RelayService:
    """
    Relay state for one process.

    Usage:
        service = RelayService()
        conn_id = service.connect(websocket)
        await service.join_room(conn_id, "room-1", {"name": "Ada"})
        await service.game_action(conn_id, "room-1", {"type": "roll", "dice_value": 6})
        await service.disconnect(conn_id)
    """
    rooms: RoomManager = field(default_factory=RoomManager)
    _connections: dict[str, Connection] = field(default_factory=dict)

    @property
    def connection_count(self) -> int:
        return len(self._connections)

    def connect(self, websocket: Connection, connection_id: str | None = None) -> str:
        connection_id = connection_id or str(uuid.uuid4())
        self._connections[connection_id] = websocket
        logger.info("User connected: %s", connection_id)
        return connection_id

    async def join_room(self, connection_id: str, room_id: str, user_data: dict[str, Any] | None = None) -> Room:
        room = self.rooms.join(room_id, connection_id, user_data)
        await self.broadcast_room_update(room)
        return room

    async def game_action(self, connection_id: str, room_id: str, action: Any) -> int:
        """Rebroadcast an action. Returns how many members it reached."""
        event = GameEvent(room_id=room_id, action=action, sender_id=connection_id)
        return await self.broadcast(room_id, event.model_dump())

    async def disconnect(self, connection_id: str) -> list[Room]:
        """Forget a connection and refresh every room it was in."""
        self._connections.pop(connection_id, None)
        affected = self.rooms.leave(connection_id)
        logger.info("User disconnected: %s (%d room(s))", connection_id, len(affected))
        for room in affected:
            if not room.is_empty:
                await self.broadcast_room_update(room)
        return affected

    async def broadcast_room_update(self, room: Room) -> int:
        update = RoomUpdate(
            room_id=room.room_id,
            players=[PlayerInfo(**p) for p in room.player_list()],
        )
        return await self.broadcast(room.room_id, update.model_dump())

    async def broadcast(self, room_id: str, message: dict[str, Any]) -> int:
        """
        Send a message to every live connection in a room.

        Connections that fail to receive are dropped and removed from
        their rooms, which triggers further room updates.
        """
        delivered = 0
        dead_connections = []
        for member_id in self.rooms.member_ids(room_id):
            ws = self._connections.get(member_id)
            if ws is None:
                continue
            try:
                await ws.send_json(message)
                delivered += 1
            except Exception:
                logger.warning("Dropping connection %s after failed send", member_id)
                dead_connections.append(member_id)
        for member_id in dead_connections:
            await self.disconnect(member_id)
        return delivered
