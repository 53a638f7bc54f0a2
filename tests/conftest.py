import pytest

from seabattle.battleship.game import Direction, ShipName
from seabattle.battleship.grid import SeaGrid
from seabattle.controller import MatchController
from seabattle.settings import Settings

# one ship per even row, bows on column 0
LAYOUT = {
    ShipName.AIRCRAFT_CARRIER: (0, 0),
    ShipName.BATTLESHIP: (2, 0),
    ShipName.DESTROYER: (4, 0),
    ShipName.SUBMARINE: (6, 0),
    ShipName.TUG: (8, 0),
}


def deploy_fixed(grid: SeaGrid) -> SeaGrid:
    for name, (row, col) in LAYOUT.items():
        grid.place_ship(row, col, name, Direction.LEFT_RIGHT)
    return grid


def ship_cells(grid: SeaGrid):
    return [(tile.row, tile.col) for ship in grid.ships.values() for tile in ship.tiles]


def empty_cell(grid: SeaGrid):
    for r in range(grid.height):
        for c in range(grid.width):
            if grid.ship_at(r, c) is None and not grid.tile(r, c).shot:
                return r, c
    raise AssertionError("no empty cell left")


@pytest.fixture
def grid():
    return SeaGrid()


@pytest.fixture
def deployed_grid():
    return deploy_fixed(SeaGrid())


@pytest.fixture
def settings(tmp_path):
    return Settings(scores_path=tmp_path / "scores.json")


@pytest.fixture
def controller(settings):
    return MatchController(settings, auto_computer=False)
