"""
Board geometry - Maps logical pawn positions to board cells and pixels.

The board is a 15x15 grid with a four-arm cross. Cells are (row, col).
Every lookup here is a pure function of the pawn and its same-cell group.
"""

from __future__ import annotations
import math
from dataclasses import dataclass

from .state import GameState, Pawn, TeamColor, TRACK_LENGTH, HOME_STRETCH_START


BOARD_SIZE = 15
CELL_SIZE = 40
FAN_OUT_RADIUS = 8

Cell = tuple[int, int]

# Shared track, in travel order
TRACK_PATH: tuple[Cell, ...] = (
    (6, 1), (6, 2), (6, 3), (6, 4), (6, 5),
    (5, 6), (4, 6), (3, 6), (2, 6), (1, 6), (0, 6),
    (0, 7), (0, 8),
    (1, 8), (2, 8), (3, 8), (4, 8), (5, 8),
    (6, 9), (6, 10), (6, 11), (6, 12), (6, 13), (6, 14),
    (7, 14), (8, 14),
    (8, 13), (8, 12), (8, 11), (8, 10), (8, 9),
    (9, 8), (10, 8), (11, 8), (12, 8), (13, 8), (14, 8),
    (14, 7), (14, 6),
    (13, 6), (12, 6), (11, 6), (10, 6), (9, 6),
    (8, 5), (8, 4), (8, 3), (8, 2), (8, 1), (8, 0),
    (7, 0), (6, 0),
)

# Index into TRACK_PATH of each colour's position 0. Arms are 13 cells apart.
START_OFFSETS: dict[TeamColor, int] = {
    TeamColor.RED: 1,
    TeamColor.GREEN: 14,
    TeamColor.BLUE: 27,
    TeamColor.YELLOW: 40,
}

# Entry cells plus one star cell eight steps past each entry
SAFE_TRACK_CELLS: frozenset[int] = frozenset(
    cell
    for offset in START_OFFSETS.values()
    for cell in (offset, (offset + 8) % TRACK_LENGTH)
)

HOME_PATHS: dict[TeamColor, tuple[Cell, ...]] = {
    TeamColor.YELLOW: ((7, 1), (7, 2), (7, 3), (7, 4), (7, 5), (7, 6)),
    TeamColor.RED: ((1, 7), (2, 7), (3, 7), (4, 7), (5, 7), (6, 7)),
    TeamColor.GREEN: ((7, 13), (7, 12), (7, 11), (7, 10), (7, 9), (7, 8)),
    TeamColor.BLUE: ((13, 7), (12, 7), (11, 7), (10, 7), (9, 7), (8, 7)),
}

BASE_POSITIONS: dict[TeamColor, tuple[Cell, ...]] = {
    TeamColor.YELLOW: ((10, 1), (10, 4), (13, 1), (13, 4)),
    TeamColor.RED: ((1, 1), (1, 4), (4, 1), (4, 4)),
    TeamColor.GREEN: ((1, 10), (1, 13), (4, 10), (4, 13)),
    TeamColor.BLUE: ((10, 10), (10, 13), (13, 10), (13, 13)),
}

FINISH_CELL: Cell = (7, 7)


@dataclass(frozen=True)
class Point:
    """Pixel coordinates of a pawn's centre."""
    x: float
    y: float

    def to_dict(self) -> dict[str, float]:
        return {"x": self.x, "y": self.y}


def track_cell(color: TeamColor, position: int) -> int | None:
    """Absolute shared-track index for a relative position, None off the track."""
    if not 0 <= position < TRACK_LENGTH:
        return None
    return (position + START_OFFSETS[color]) % TRACK_LENGTH


def board_cell(pawn: Pawn, slot: int = 0) -> Cell:
    """
    Grid cell for a pawn.

    slot is the pawn's ordinal among its owner's pawns and only
    matters while the pawn sits in base.
    """
    if pawn.in_base:
        return BASE_POSITIONS[pawn.color][slot % len(BASE_POSITIONS[pawn.color])]
    if pawn.on_track:
        return TRACK_PATH[track_cell(pawn.color, pawn.position)]
    if pawn.in_home_stretch:
        return HOME_PATHS[pawn.color][pawn.position - HOME_STRETCH_START]
    if pawn.finished:
        return FINISH_CELL
    raise ValueError(f"Pawn {pawn.pawn_id} has invalid position {pawn.position}")


def pawn_coordinates(
    pawn: Pawn,
    slot: int = 0,
    group_index: int = 0,
    group_size: int = 1,
) -> Point:
    """
    Pixel centre of a pawn, fanned out on a small circle when
    group_size pawns share its cell.
    """
    row, col = board_cell(pawn, slot)
    offset_x = 0.0
    offset_y = 0.0
    if group_size > 1:
        angle = (group_index / group_size) * math.pi * 2
        offset_x = math.cos(angle) * FAN_OUT_RADIUS
        offset_y = math.sin(angle) * FAN_OUT_RADIUS
    return Point(
        x=col * CELL_SIZE + CELL_SIZE / 2 + offset_x,
        y=row * CELL_SIZE + CELL_SIZE / 2 + offset_y,
    )


def _groupable(pawn: Pawn) -> bool:
    return not (pawn.in_base or pawn.finished)


def same_cell_group(pawn: Pawn, state: GameState) -> list[Pawn]:
    """Pawns sharing this pawn's board cell, in state order. Base and finished pawns never group."""
    if not _groupable(pawn):
        return []
    cell = board_cell(pawn)
    return [p for p in state.pawns if _groupable(p) and board_cell(p) == cell]


def coordinates_for(pawn: Pawn, state: GameState) -> Point:
    """Resolve a pawn to pixel coordinates using the rest of the board for slot and fan-out."""
    owned = [p.pawn_id for p in state.pawns_of(pawn.owner_id)]
    slot = owned.index(pawn.pawn_id) if pawn.pawn_id in owned else 0

    group = same_cell_group(pawn, state)
    group_ids = [p.pawn_id for p in group]
    if len(group) > 1 and pawn.pawn_id in group_ids:
        return pawn_coordinates(pawn, slot, group_ids.index(pawn.pawn_id), len(group))
    return pawn_coordinates(pawn, slot)
