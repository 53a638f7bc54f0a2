import pytest

from seabattle.states import GameState, StateStack


def test_starts_on_main_menu_above_quit_marker():
    stack = StateStack()
    assert stack.current is GameState.VIEWING_MAIN_MENU
    assert len(stack) == 2
    assert not stack.quitting


def test_popping_main_menu_quits():
    stack = StateStack()
    assert stack.pop() is GameState.VIEWING_MAIN_MENU
    assert stack.quitting
    with pytest.raises(IndexError):
        stack.pop()


def test_nested_navigation_returns_to_parent():
    stack = StateStack()
    stack.push(GameState.DEPLOYING)
    stack.push(GameState.VIEWING_GAME_MENU)
    stack.push(GameState.ALTERING_VOLUME)

    assert stack.return_to is GameState.VIEWING_GAME_MENU
    stack.pop()
    assert stack.current is GameState.VIEWING_GAME_MENU
    stack.pop()
    assert stack.current is GameState.DEPLOYING


def test_volume_opened_from_settings():
    stack = StateStack()
    stack.push(GameState.ALTERING_SETTINGS)
    stack.push(GameState.ALTERING_VOLUME)
    assert stack.return_to is GameState.ALTERING_SETTINGS


def test_explicit_return_to():
    stack = StateStack()
    stack.push(GameState.ALTERING_VOLUME, return_to=GameState.VIEWING_GAME_MENU)
    assert stack.return_to is GameState.VIEWING_GAME_MENU


def test_switch_replaces_top_only():
    stack = StateStack()
    stack.push(GameState.DEPLOYING)
    stack.switch(GameState.DISCOVERING)

    assert stack.current is GameState.DISCOVERING
    assert stack.return_to is GameState.VIEWING_MAIN_MENU
    assert list(stack) == [GameState.DISCOVERING, GameState.VIEWING_MAIN_MENU, GameState.QUITTING]
    assert GameState.DEPLOYING not in stack
