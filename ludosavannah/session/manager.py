"""
Room Manager - In-memory room membership for the relay.

LIFECYCLE:
1. A connection joins a room -> room created on first join
2. The member record is upserted (defaults fill any missing fields)
3. A connection closes -> removed from every room it was in
4. A room left empty is reaped

PERSISTENCE RULES:
- NO database; membership lives in process memory and is lost on restart
- Identity is whatever the client asserts; the relay never checks it
- The relay knows nothing about game rules
"""

from __future__ import annotations
from dataclasses import dataclass, field
from typing import Any
import logging
import time

logger = logging.getLogger(__name__)

DEFAULT_ANIMAL = "Lion"
DEFAULT_COLOR = "red"


@dataclass
class RoomMember:
    """A player record in a room, keyed by the connection id."""
    member_id: str
    name: str
    animal: str = DEFAULT_ANIMAL
    color: str = DEFAULT_COLOR

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.member_id,
            "name": self.name,
            "animal": self.animal,
            "color": self.color,
        }


@dataclass
class Room:
    """A named room and its members, in join order."""
    room_id: str
    created_at: float
    members: list[RoomMember] = field(default_factory=list)

    @property
    def is_empty(self) -> bool:
        return len(self.members) == 0

    def get_member(self, member_id: str) -> RoomMember | None:
        for member in self.members:
            if member.member_id == member_id:
                return member
        return None

    def player_list(self) -> list[dict[str, Any]]:
        return [m.to_dict() for m in self.members]


class RoomManager:
    """
    Tracks which connections sit in which rooms.

    One instance per relay process; there is no module-level table.
    """

    def __init__(self):
        self._rooms: dict[str, Room] = {}

    def join(self, room_id: str, member_id: str, user_data: dict[str, Any] | None = None) -> Room:
        """
        Register member_id in room_id.

        New members get "Player N" / Lion / red for anything user_data
        leaves out. A member joining again keeps their record, with any
        fields they send now overriding the old ones.
        """
        user_data = user_data or {}
        room = self._rooms.get(room_id)
        if room is None:
            room = Room(room_id=room_id, created_at=time.time())
            self._rooms[room_id] = room
            logger.info("Room %s created", room_id)

        member = room.get_member(member_id)
        if member is None:
            member = RoomMember(
                member_id=member_id,
                name=user_data.get("name") or f"Player {len(room.members) + 1}",
                animal=user_data.get("animal") or DEFAULT_ANIMAL,
                color=user_data.get("color") or DEFAULT_COLOR,
            )
            room.members.append(member)
            logger.info("%s joined room %s as %s", member_id, room_id, member.name)
        else:
            for attr in ("name", "animal", "color"):
                if user_data.get(attr):
                    setattr(member, attr, user_data[attr])

        return room

    def leave(self, member_id: str) -> list[Room]:
        """
        Remove a member from every room.

        Returns the rooms that lost a member (including ones now reaped)
        so the caller can broadcast their updated player lists.
        """
        affected = []
        for room_id, room in list(self._rooms.items()):
            member = room.get_member(member_id)
            if member is None:
                continue
            room.members.remove(member)
            affected.append(room)
            if room.is_empty:
                del self._rooms[room_id]
                logger.info("Room %s reaped", room_id)
        return affected

    def get_room(self, room_id: str) -> Room | None:
        """Get a room by ID."""
        return self._rooms.get(room_id)

    def list_rooms(self) -> list[Room]:
        return list(self._rooms.values())

    def member_ids(self, room_id: str) -> list[str]:
        room = self._rooms.get(room_id)
        if room is None:
            return []
        return [m.member_id for m in room.members]
