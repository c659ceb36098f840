"""
Tests for relay room membership.
"""

import pytest

from ..session.manager import RoomManager


class TestJoin:
    """Tests for RoomManager.join()."""

    @pytest.fixture
    def manager(self):
        return RoomManager()

    def test_first_join_creates_room(self, manager):
        room = manager.join("savannah", "c1", {"name": "Ada", "animal": "Zebra", "color": "green"})

        assert manager.get_room("savannah") is room
        assert room.player_list() == [{"id": "c1", "name": "Ada", "animal": "Zebra", "color": "green"}]

    def test_defaults_fill_missing_fields(self, manager):
        manager.join("savannah", "c1", {"name": "Ada"})
        room = manager.join("savannah", "c2")

        assert room.player_list()[1] == {"id": "c2", "name": "Player 2", "animal": "Lion", "color": "red"}

    def test_rejoin_updates_only_sent_fields(self, manager):
        manager.join("savannah", "c1", {"name": "Ada", "animal": "Zebra"})
        room = manager.join("savannah", "c1", {"color": "blue"})

        assert room.player_list() == [{"id": "c1", "name": "Ada", "animal": "Zebra", "color": "blue"}]

    def test_join_order_kept(self, manager):
        for member_id in ("c3", "c1", "c2"):
            manager.join("savannah", member_id)

        assert manager.member_ids("savannah") == ["c3", "c1", "c2"]

    def test_member_in_several_rooms(self, manager):
        manager.join("a", "c1")
        manager.join("b", "c1")

        assert manager.member_ids("a") == ["c1"]
        assert manager.member_ids("b") == ["c1"]


class TestLeave:
    """Tests for RoomManager.leave()."""

    def test_leave_removes_from_every_room(self):
        manager = RoomManager()
        manager.join("a", "c1")
        manager.join("a", "c2")
        manager.join("b", "c1")
        manager.join("b", "c3")

        affected = manager.leave("c1")

        assert [room.room_id for room in affected] == ["a", "b"]
        assert manager.member_ids("a") == ["c2"]
        assert manager.member_ids("b") == ["c3"]

    def test_empty_room_reaped(self):
        manager = RoomManager()
        manager.join("a", "c1")

        affected = manager.leave("c1")

        assert affected[0].is_empty
        assert manager.get_room("a") is None
        assert manager.list_rooms() == []

    def test_unknown_member(self):
        manager = RoomManager()
        manager.join("a", "c1")

        assert manager.leave("ghost") == []
        assert manager.member_ids("a") == ["c1"]

    def test_member_ids_of_missing_room(self):
        assert RoomManager().member_ids("nowhere") == []
