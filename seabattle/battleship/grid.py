"""Sea grids and the masked view an opponent gets of them."""

from __future__ import annotations

import logging
from types import MappingProxyType
from typing import Dict, Iterable, List, Mapping, Optional, Protocol, Tuple

from .attack import AttackResult, ResultOfAttack
from .errors import InvalidPlacement, PreconditionViolation
from .events import Event
from .game import BOARD_SIZE, FLEET, Direction, Ship, ShipName, Tile, TileView

logger = logging.getLogger(__name__)


class BoardView(Protocol):
    """What a player may see of, and do to, a grid."""

    changed: Event

    @property
    def width(self) -> int:
        ...

    @property
    def height(self) -> int:
        ...

    def tile_at(self, row: int, col: int) -> TileView:
        ...

    def hit_tile(self, row: int, col: int) -> AttackResult:
        ...


class SeaGrid:
    """The grid a fleet is deployed on.

    Sole owner of its tiles and ships. Every mutating call fires ``changed``
    before returning, including failed placements and repeated shots.
    """

    def __init__(
        self,
        ships: Optional[Iterable[ShipName]] = None,
        width: int = BOARD_SIZE,
        height: int = BOARD_SIZE,
        allow_adjacent: bool = True,
    ) -> None:
        self.width = width
        self.height = height
        self.allow_adjacent = allow_adjacent
        self.changed = Event()
        self._tiles: List[List[Tile]] = [[Tile(r, c) for c in range(width)] for r in range(height)]
        self._ships: Dict[ShipName, Ship] = {name: Ship(name) for name in (ships if ships is not None else FLEET)}

    # --------------------------- Queries ---------------------------
    @property
    def ships(self) -> Mapping[ShipName, Ship]:
        return MappingProxyType(self._ships)

    @property
    def ships_killed(self) -> int:
        # counted from the tiles so a ship placed over old shots is included
        return sum(1 for ship in self._ships.values() if ship.is_destroyed)

    @property
    def ships_remaining(self) -> int:
        return len(self._ships) - self.ships_killed

    @property
    def all_deployed(self) -> bool:
        return all(ship.deployed for ship in self._ships.values())

    @property
    def is_destroyed(self) -> bool:
        return bool(self._ships) and self.ships_killed == len(self._ships)

    def in_bounds(self, row: int, col: int) -> bool:
        return 0 <= row < self.height and 0 <= col < self.width

    def ship(self, name: ShipName) -> Ship:
        try:
            return self._ships[name]
        except KeyError:
            raise PreconditionViolation(f"no ship named {name!r} on this grid") from None

    def tile(self, row: int, col: int) -> Tile:
        self._check_bounds(row, col)
        return self._tiles[row][col]

    def tile_at(self, row: int, col: int) -> TileView:
        return self.tile(row, col).view

    def ship_at(self, row: int, col: int) -> Optional[Ship]:
        return self.tile(row, col).ship

    # --------------------------- Placement ---------------------------
    def place_ship(self, row: int, col: int, ship_name: ShipName, direction: Direction) -> Ship:
        """Deploy ``ship_name`` with its bow at (row, col).

        Raises InvalidPlacement if the footprint leaves the grid or touches
        another ship's tiles; the ship is then left exactly as it was.
        """
        ship = self.ship(ship_name)
        try:
            cells = self._validate(ship, row, col, direction)
            previous = (ship.origin, ship.direction) if ship.deployed else None
            self._write(ship, cells, direction, row, col, previous)
            logger.debug("placed %s at %s %s", ship.name, (row, col), direction.value)
            return ship
        finally:
            self.changed.emit(self)

    def move_ship(self, row: int, col: int, ship_name: ShipName, direction: Direction) -> Ship:
        """Lift the ship off the grid then place it again.

        The old position is not restored when the new one is rejected: the
        ship is simply left undeployed.
        """
        ship = self.ship(ship_name)
        ship.remove()
        return self.place_ship(row, col, ship_name, direction)

    def clear(self) -> None:
        for ship in self._ships.values():
            ship.remove()
        self.changed.emit(self)

    def _validate(self, ship: Ship, row: int, col: int, direction: Direction) -> List[Tuple[int, int]]:
        cells = ship.footprint(row, col, direction)
        for r, c in cells:
            if not self.in_bounds(r, c):
                raise InvalidPlacement(f"{ship.name} can't fit on the board")
            occupant = self._tiles[r][c].ship
            if occupant is not None and occupant is not ship:
                raise InvalidPlacement(f"there is already a ship at [{c}, {r}]")
            if not self.allow_adjacent and self._touches_other(ship, r, c):
                raise InvalidPlacement(f"{ship.name} would touch another ship at [{c}, {r}]")
        return cells

    def _touches_other(self, ship: Ship, row: int, col: int) -> bool:
        for dr in (-1, 0, 1):
            for dc in (-1, 0, 1):
                r, c = row + dr, col + dc
                if not self.in_bounds(r, c):
                    continue
                other = self._tiles[r][c].ship
                if other is not None and other is not ship:
                    return True
        return False

    def _write(
        self,
        ship: Ship,
        cells: List[Tuple[int, int]],
        direction: Direction,
        row: int,
        col: int,
        previous: Optional[Tuple[Optional[Tuple[int, int]], Optional[Direction]]],
    ) -> None:
        ship.remove()
        try:
            for r, c in cells:
                ship.add_tile(self._tiles[r][c])
            ship.deploy(direction, row, col)
        except Exception:
            # roll back so no partial footprint survives
            ship.remove()
            if previous is not None:
                (old_row, old_col), old_direction = previous
                for r, c in ship.footprint(old_row, old_col, old_direction):
                    ship.add_tile(self._tiles[r][c])
                ship.deploy(old_direction, old_row, old_col)
            raise

    # --------------------------- Attacks ---------------------------
    def hit_tile(self, row: int, col: int) -> AttackResult:
        """Shoot at (row, col) and classify the result."""
        self._check_bounds(row, col)
        try:
            tile = self._tiles[row][col]
            if tile.shot:
                return AttackResult(ResultOfAttack.SHOT_ALREADY, row, col, f"have already attacked [{col},{row}]!")

            tile.shoot()
            ship = tile.ship
            if ship is None:
                result = AttackResult(ResultOfAttack.MISS, row, col, "missed")
            elif ship.is_destroyed:
                result = AttackResult(ResultOfAttack.DESTROYED, row, col, "destroyed the enemy's", ship)
            else:
                result = AttackResult(ResultOfAttack.HIT, row, col, "hit something!")
            logger.debug("shot at %s: %s", (row, col), result.value.value)
            return result
        finally:
            self.changed.emit(self)

    def _check_bounds(self, row: int, col: int) -> None:
        if not self.in_bounds(row, col):
            raise PreconditionViolation(f"[{row}, {col}] is outside the {self.width}x{self.height} grid")


class SeaGridView:
    """Opponent's window onto a SeaGrid: ships read as open sea."""

    def __init__(self, grid: SeaGrid) -> None:
        self._grid = grid
        self.changed = Event()
        grid.changed.subscribe(self._grid_changed)

    def _grid_changed(self, _sender: object) -> None:
        self.changed.emit(self)

    def detach(self) -> None:
        self._grid.changed.unsubscribe(self._grid_changed)

    @property
    def width(self) -> int:
        return self._grid.width

    @property
    def height(self) -> int:
        return self._grid.height

    def tile_at(self, row: int, col: int) -> TileView:
        view = self._grid.tile_at(row, col)
        return TileView.SEA if view is TileView.SHIP else view

    def hit_tile(self, row: int, col: int) -> AttackResult:
        return self._grid.hit_tile(row, col)
