from __future__ import annotations

import weakref
from enum import Enum
from typing import List, Optional, Tuple

BOARD_SIZE = 10
COORDS = [chr(ord('A') + i) for i in range(BOARD_SIZE)]


class ShipName(Enum):
    TUG = ("Tug", 1)
    SUBMARINE = ("Submarine", 2)
    DESTROYER = ("Destroyer", 3)
    BATTLESHIP = ("Battleship", 4)
    AIRCRAFT_CARRIER = ("Aircraft Carrier", 5)

    def __init__(self, label: str, size: int) -> None:
        self.label = label
        self.size = size

    def __str__(self) -> str:
        return self.label


# deployment order, largest first
FLEET: List[ShipName] = sorted(ShipName, key=lambda n: n.size, reverse=True)


class Direction(Enum):
    LEFT_RIGHT = "horizontal"
    UP_DOWN = "vertical"

    @property
    def step(self) -> Tuple[int, int]:
        return (0, 1) if self is Direction.LEFT_RIGHT else (1, 0)

    def rotated(self) -> "Direction":
        return Direction.UP_DOWN if self is Direction.LEFT_RIGHT else Direction.LEFT_RIGHT


class TileView(Enum):
    SEA = "sea"
    SHIP = "ship"
    HIT = "hit"
    MISS = "miss"


class Tile:
    """One square of a sea grid.

    The ship back-reference is weak: ships are owned by the grid's ship
    mapping, tiles only point at them.
    """

    __slots__ = ("row", "col", "_shot", "_ship")

    def __init__(self, row: int, col: int) -> None:
        self.row = row
        self.col = col
        self._shot = False
        self._ship: Optional[weakref.ref] = None

    @property
    def shot(self) -> bool:
        return self._shot

    def shoot(self) -> None:
        # shot flags are never reset
        self._shot = True

    @property
    def ship(self) -> Optional["Ship"]:
        return self._ship() if self._ship is not None else None

    @ship.setter
    def ship(self, value: Optional["Ship"]) -> None:
        self._ship = weakref.ref(value) if value is not None else None

    @property
    def view(self) -> TileView:
        ship = self.ship
        if self._shot:
            return TileView.HIT if ship is not None else TileView.MISS
        if ship is not None:
            return TileView.SHIP
        return TileView.SEA

    def __repr__(self) -> str:
        return f"Tile({self.row}, {self.col}, shot={self._shot}, ship={self.ship!r})"


class Ship:
    def __init__(self, name: ShipName) -> None:
        self.name = name
        self.tiles: List[Tile] = []
        self.deployed = False
        self.origin: Optional[Tuple[int, int]] = None
        self.direction: Optional[Direction] = None

    @property
    def size(self) -> int:
        return self.name.size

    @property
    def hits(self) -> int:
        # counted from the footprint so a repeated shot can never count twice
        return sum(1 for tile in self.tiles if tile.shot)

    @property
    def is_destroyed(self) -> bool:
        return self.hits >= self.size

    def footprint(self, row: int, col: int, direction: Direction) -> List[Tuple[int, int]]:
        d_row, d_col = direction.step
        return [(row + d_row * i, col + d_col * i) for i in range(self.size)]

    def add_tile(self, tile: Tile) -> None:
        tile.ship = self
        self.tiles.append(tile)

    def deploy(self, direction: Direction, row: int, col: int) -> None:
        self.deployed = True
        self.direction = direction
        self.origin = (row, col)

    def remove(self) -> None:
        """Take the ship off the grid, leaving shot flags alone."""
        for tile in self.tiles:
            if tile.ship is self:
                tile.ship = None
        self.tiles = []
        self.deployed = False
        self.origin = None
        self.direction = None

    def __repr__(self) -> str:
        return f"Ship({self.name.label}, hits={self.hits}/{self.size}, deployed={self.deployed})"


def parse_coord(text: str) -> Optional[Tuple[int, int]]:
    t = text.strip().upper()
    if len(t) < 2 or len(t) > 3:
        return None
    letter = t[0]
    if letter not in COORDS:
        return None
    try:
        num = int(t[1:])
    except ValueError:
        return None
    if num < 1 or num > BOARD_SIZE:
        return None
    row = ord(letter) - ord('A')
    col = num - 1
    return row, col


def format_coord(row: int, col: int) -> str:
    return f"{COORDS[row]}{col + 1}"
