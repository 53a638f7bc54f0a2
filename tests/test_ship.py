from seabattle.battleship.game import (
    FLEET,
    Direction,
    Ship,
    ShipName,
    Tile,
    TileView,
    format_coord,
    parse_coord,
)


def test_fleet_sizes_and_order():
    assert [name.size for name in FLEET] == [5, 4, 3, 2, 1]
    assert sum(name.size for name in ShipName) == 15
    assert str(ShipName.AIRCRAFT_CARRIER) == "Aircraft Carrier"


def test_tile_views():
    ship = Ship(ShipName.SUBMARINE)
    sea = Tile(0, 0)
    assert sea.view is TileView.SEA
    sea.shoot()
    assert sea.view is TileView.MISS

    occupied = Tile(0, 1)
    ship.add_tile(occupied)
    assert occupied.ship is ship
    assert occupied.view is TileView.SHIP
    occupied.shoot()
    assert occupied.view is TileView.HIT


def test_shot_flag_is_monotonic():
    tile = Tile(3, 3)
    tile.shoot()
    tile.shoot()
    assert tile.shot


def test_hits_are_counted_from_shot_tiles():
    ship = Ship(ShipName.DESTROYER)
    tiles = [Tile(0, c) for c in range(3)]
    for tile in tiles:
        ship.add_tile(tile)
    tiles[0].shoot()
    tiles[0].shoot()
    assert ship.hits == 1
    assert not ship.is_destroyed
    tiles[1].shoot()
    tiles[2].shoot()
    assert ship.hits == 3
    assert ship.is_destroyed


def test_footprint_follows_direction():
    ship = Ship(ShipName.DESTROYER)
    assert ship.footprint(2, 3, Direction.LEFT_RIGHT) == [(2, 3), (2, 4), (2, 5)]
    assert ship.footprint(2, 3, Direction.UP_DOWN) == [(2, 3), (3, 3), (4, 3)]
    assert Direction.LEFT_RIGHT.rotated() is Direction.UP_DOWN


def test_remove_keeps_shot_flags():
    ship = Ship(ShipName.SUBMARINE)
    tiles = [Tile(0, 0), Tile(0, 1)]
    for tile in tiles:
        ship.add_tile(tile)
    ship.deploy(Direction.LEFT_RIGHT, 0, 0)
    tiles[0].shoot()

    ship.remove()

    assert not ship.deployed
    assert ship.origin is None
    assert ship.tiles == []
    assert all(tile.ship is None for tile in tiles)
    assert tiles[0].shot


def test_coordinates_round_trip_through_text():
    assert parse_coord("a1") == (0, 0)
    assert parse_coord(" J10 ") == (9, 9)
    assert parse_coord("K1") is None
    assert parse_coord("A11") is None
    assert parse_coord("B") is None
    assert format_coord(1, 6) == "B7"
