import io
import random
import sys

from seabattle import ui
from seabattle.battleship.game import format_coord
from seabattle.battleship.grid import SeaGridView
from seabattle.controller import MatchController
from seabattle.states import GameState


def test_own_board_shows_ships_enemy_view_does_not(deployed_grid):
    deployed_grid.hit_tile(0, 0)
    deployed_grid.hit_tile(9, 9)

    own = ui.draw_board(deployed_grid)
    masked = ui.draw_board(SeaGridView(deployed_grid))

    assert own.count("■") == 14
    assert "■" not in masked
    assert masked.count("✹") == 1
    assert masked.count("×") == 1


def test_quitting_mid_battle_surrenders(monkeypatch, capsys, settings):
    monkeypatch.setattr(sys, "stdin", io.StringIO("q\n"))
    controller = MatchController(settings)

    ui.run_terminal(controller, auto_deploy=True)

    assert controller.current_state is GameState.VIEWING_MAIN_MENU
    assert controller.session is None
    assert "You lose." in capsys.readouterr().out


def test_manual_deployment(monkeypatch, capsys, settings):
    lines = ["Z9", "J8", "A1", "R", "B1", "B2", "B3", "B4", "q"]
    monkeypatch.setattr(sys, "stdin", io.StringIO("\n".join(lines) + "\n"))
    controller = MatchController(settings)

    ui.run_terminal(controller)

    out = capsys.readouterr().out
    assert "Invalid coordinate." in out
    assert "Cannot place there" in out
    assert controller.current_state is GameState.VIEWING_MAIN_MENU


def test_end_of_input_says_goodbye(monkeypatch, capsys, settings):
    monkeypatch.setattr(sys, "stdin", io.StringIO(""))
    ui.run_terminal(MatchController(settings))
    assert "Bye." in capsys.readouterr().out


def test_print_scores(capsys, settings):
    controller = MatchController(settings)
    controller.high_scores().add("abc", 99)
    ui.print_scores(controller)
    out = capsys.readouterr().out
    assert "abc" in out and "99" in out


def test_manual_fleet_ends_up_where_typed(monkeypatch, settings):
    lines = ["A1", "R", "B1", "B2", "B3", "B4"]
    monkeypatch.setattr(sys, "stdin", io.StringIO("\n".join(lines) + "\n"))
    controller = MatchController(settings)
    controller.start_game()

    ui.place_ships_interactive(controller)

    grid = controller.human.grid
    assert grid.all_deployed
    assert [(s.name.size, s.origin) for s in grid.ships.values()] == [
        (5, (0, 0)), (4, (1, 0)), (3, (1, 1)), (2, (1, 2)), (1, (1, 3)),
    ]


def test_terminal_game_plays_to_the_end(monkeypatch, capsys, settings):
    every_cell = "".join(format_coord(r, c) + "\n" for r in range(10) for c in range(10))
    monkeypatch.setattr(sys, "stdin", io.StringIO(every_cell))
    controller = MatchController(settings, rng=random.Random(11))

    ui.run_terminal(controller, auto_deploy=True)

    out = capsys.readouterr().out
    assert "You win! Score:" in out or "You lose." in out
    assert "Bye." not in out
    assert controller.current_state is GameState.VIEWING_MAIN_MENU
    assert controller.session is None
