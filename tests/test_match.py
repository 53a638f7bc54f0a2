import random

import pytest

from seabattle.battleship.attack import ResultOfAttack
from seabattle.battleship.errors import PreconditionViolation
from seabattle.battleship.game import TileView
from seabattle.battleship.match import Match
from seabattle.battleship.players import ComputerPlayer, Player

from .conftest import deploy_fixed, empty_cell, ship_cells


@pytest.fixture
def players():
    first = Player("first")
    second = Player("second")
    deploy_fixed(first.grid)
    deploy_fixed(second.grid)
    return first, second


@pytest.fixture
def match(players):
    game = Match()
    for player in players:
        game.add_deployed_player(player)
    return game


def test_players_must_be_deployed():
    game = Match()
    with pytest.raises(PreconditionViolation):
        game.add_deployed_player(Player("undeployed"))
    with pytest.raises(PreconditionViolation):
        game.player


def test_only_two_players(match):
    extra = Player("extra")
    deploy_fixed(extra.grid)
    with pytest.raises(PreconditionViolation):
        match.add_deployed_player(extra)


def test_players_see_each_other_masked(match, players):
    first, second = players
    assert first.enemy_grid.tile_at(0, 0) is TileView.SEA
    assert second.grid.tile_at(0, 0) is TileView.SHIP


def test_hits_keep_the_turn_and_misses_pass_it(match, players):
    first, second = players
    assert match.player is first

    assert match.shoot(0, 0).value is ResultOfAttack.HIT
    assert match.player is first
    assert match.shoot(8, 0).value is ResultOfAttack.DESTROYED
    assert match.player is first

    assert match.shoot(*empty_cell(second.grid)).value is ResultOfAttack.MISS
    assert match.player is second
    assert match.opponent is first


def test_already_shot_passes_the_turn(match, players):
    first, second = players
    match.shoot(0, 0)
    result = match.shoot(0, 0)
    assert result.value is ResultOfAttack.SHOT_ALREADY
    assert match.player is second


def test_already_shot_can_keep_the_turn(players):
    game = Match(already_shot_passes_turn=False)
    for player in players:
        game.add_deployed_player(player)
    game.shoot(0, 0)
    game.shoot(0, 0)
    assert game.player is players[0]


def test_sinking_the_last_ship_is_game_over(match, players):
    first, second = players
    seen = []
    match.attack_completed.subscribe(lambda sender, result: seen.append(result.value))

    cells = ship_cells(second.grid)
    for r, c in cells[:-1]:
        assert match.shoot(r, c).value in (ResultOfAttack.HIT, ResultOfAttack.DESTROYED)
    last = match.shoot(*cells[-1])

    assert last.value is ResultOfAttack.GAME_OVER
    assert last.ship is not None
    assert seen[-1] is ResultOfAttack.GAME_OVER
    assert len(seen) == len(cells)
    assert match.is_over
    assert match.winner is first
    assert second.grid.ships_killed == 5


def test_shot_statistics_and_score(match, players):
    first, second = players
    match.shoot(0, 0)
    match.shoot(8, 0)
    match.shoot(0, 0)
    assert (first.shots, first.hits, first.missed) == (3, 2, 0)
    assert first.score == 2 * 12 - 3


def test_computer_only_targets_unknown_tiles(players):
    first, _ = players
    computer = ComputerPlayer("cpu", rng=random.Random(4))
    computer.randomize_deployment()
    game = Match()
    game.add_deployed_player(computer)
    game.add_deployed_player(first)

    shots = set()
    while not game.is_over:
        if game.player is computer:
            result = game.shoot(*computer.choose_target())
            assert result.value is not ResultOfAttack.SHOT_ALREADY
            shots.add((result.row, result.col))
        else:
            assert game.shoot(*empty_cell(computer.grid)).value is ResultOfAttack.MISS

    assert game.winner is computer
    assert first.is_destroyed
    assert first.score == 0
    assert computer.targets() == [
        (r, c) for r in range(10) for c in range(10) if (r, c) not in shots
    ]

