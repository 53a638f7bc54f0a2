import pygame
import pytest

from seabattle.battleship.attack import ResultOfAttack
from seabattle.controller import MatchController
from seabattle.gui import CELL_SIZE, GuiGame
from seabattle.states import GameState


@pytest.fixture
def game(monkeypatch, settings):
    monkeypatch.setenv("SDL_VIDEODRIVER", "dummy")
    monkeypatch.setenv("SDL_AUDIODRIVER", "dummy")
    gui = GuiGame(MatchController(settings))
    yield gui
    pygame.quit()


def click(game, pos, button=1):
    game.handle_click(pygame.event.Event(pygame.MOUSEBUTTONDOWN, button=button, pos=pos))


def key(game, code, char=""):
    game.handle_key(pygame.event.Event(pygame.KEYDOWN, key=code, unicode=char))


def test_menu_to_battle(game):
    game.draw()
    play_rect, _ = game.buttons[0]
    click(game, play_rect.center)
    assert game.controller.current_state is GameState.DEPLOYING
    assert game.controller.auto_computer is False

    key(game, pygame.K_RETURN)
    assert game.controller.current_state is GameState.DEPLOYING
    assert game.info_message == "Deploy every ship first."

    key(game, pygame.K_d, "d")
    key(game, pygame.K_RETURN)
    assert game.controller.current_state is GameState.DISCOVERING
    game.draw()

    _, right = game.get_board_rects()
    click(game, (right.x + CELL_SIZE // 2, right.y + CELL_SIZE // 2))
    assert game.controller.human.shots == 1


def test_manual_placement_by_clicking(game):
    game.start_game()
    left, _ = game.get_board_rects()
    click(game, (left.x + 1, left.y + 1))
    assert game.placing_index == 1

    # second ship would overlap the first
    click(game, (left.x + 1, left.y + 1))
    assert game.placing_index == 1
    assert game.info_message == "Cannot place there."

    click(game, (left.x + 1, left.y + 1), button=3)
    assert game.direction.value == "vertical"


def test_escape_opens_game_menu_and_volume(game):
    game.start_game()
    key(game, pygame.K_ESCAPE)
    assert game.controller.current_state is GameState.VIEWING_GAME_MENU
    game.controller.add_new_state(GameState.ALTERING_VOLUME)
    game.draw()

    key(game, pygame.K_EQUALS, "+")
    assert game.settings.volume == pytest.approx(0.6)
    key(game, pygame.K_ESCAPE)
    assert game.controller.current_state is GameState.VIEWING_GAME_MENU


def test_computer_turn_is_paced(game):
    controller = game.controller
    controller.start_game()
    controller.random_deploy()
    controller.end_deployment()

    grid = controller.computer.grid
    target = next(
        (r, c) for r in range(10) for c in range(10) if grid.ship_at(r, c) is None
    )
    result = controller.attack(*target)
    assert result.value is ResultOfAttack.MISS
    # nothing fires until the front-end decides to
    assert controller.computer_to_move
    assert game.next_computer_shot > 0
