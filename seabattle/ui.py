from __future__ import annotations

import os
import sys
from typing import List, Optional, Tuple

from .battleship.errors import DeploymentIncomplete, InvalidPlacement
from .battleship.game import COORDS, FLEET, Direction, TileView, parse_coord
from .battleship.grid import BoardView
from .controller import MatchController
from .states import GameState

RESET = "\033[0m"
BOLD = "\033[1m"
DIM = "\033[2m"
RED = "\033[31m"
GREEN = "\033[32m"
YELLOW = "\033[33m"
BLUE = "\033[34m"

GLYPHS = {
    TileView.SEA: DIM + "." + RESET,
    TileView.SHIP: BLUE + "■" + RESET,
    TileView.MISS: YELLOW + "×" + RESET,
    TileView.HIT: RED + "✹" + RESET,
}


class QuitGame(Exception):
    pass


def clear_screen() -> None:
    if os.name == "nt":
        os.system("cls")
    else:
        sys.stdout.write("\033[2J\033[H")
        sys.stdout.flush()


def draw_board(board: BoardView) -> str:
    # whatever the view lets us see is what gets drawn
    lines: List[str] = []
    header = "   " + " ".join(f"{i+1:>2}" for i in range(board.width))
    lines.append(header)
    for r in range(board.height):
        row_cells: List[str] = [f"{COORDS[r]}  "]
        for c in range(board.width):
            row_cells.append(GLYPHS[board.tile_at(r, c)])
        lines.append(" ".join(row_cells))
    return "\n".join(lines)


def draw_dual(my_board: BoardView, opp_board: BoardView) -> str:
    my = draw_board(my_board).splitlines()
    opp = draw_board(opp_board).splitlines()
    width = max(len(s) for s in my)
    lines = []
    title = BOLD + "Your Board" + RESET
    title2 = BOLD + "Their Board" + RESET
    lines.append(f"{title:<{width}}    {title2}")
    for i in range(len(my)):
        left = my[i]
        right = opp[i] if i < len(opp) else ""
        lines.append(f"{left:<{width}}    {right}")
    return "\n".join(lines)


def prompt(text: str) -> str:
    sys.stdout.write(BOLD + text + RESET + " ")
    sys.stdout.flush()
    line = sys.stdin.readline()
    if not line:
        raise QuitGame()
    return line.strip()


def announce(text: str) -> None:
    print(BOLD + text + RESET)


def place_ships_interactive(controller: MatchController) -> None:
    grid = controller.human.grid
    direction = Direction.LEFT_RIGHT
    for name in FLEET:
        while True:
            clear_screen()
            print(BOLD + f"Placing {name} ({name.size})" + RESET + f"  [{direction.value}]")
            print(draw_board(grid))
            ans = prompt("Enter coordinate like A1 (R to rotate, * to place the rest randomly):").upper()
            if ans == "Q":
                raise QuitGame()
            if ans == "R":
                direction = direction.rotated()
                continue
            if ans == "*":
                controller.random_deploy()
                return
            coord = parse_coord(ans)
            if not coord:
                announce(RED + "Invalid coordinate." + RESET)
                continue
            r, c = coord
            try:
                controller.deploy_ship(r, c, name, direction)
            except InvalidPlacement as exc:
                announce(RED + f"Cannot place there: {exc}." + RESET)
                continue
            break


def read_target() -> Optional[Tuple[int, int]]:
    while True:
        ans = prompt("Fire at (e.g., B7) or 'q' to quit:")
        if ans.lower() == 'q':
            return None
        coord = parse_coord(ans)
        if coord:
            return coord
        announce(RED + "Invalid coordinate." + RESET)


def draw_turn(controller: MatchController) -> None:
    clear_screen()
    if controller.message:
        announce(controller.message)
    print(draw_dual(controller.human.grid, controller.human.enemy_grid))


def run_terminal(controller: MatchController, auto_deploy: bool = False) -> None:
    """Play one game against the computer on stdin/stdout."""
    controller.start_game()
    try:
        if auto_deploy:
            controller.random_deploy()
        else:
            place_ships_interactive(controller)
        try:
            controller.end_deployment()
        except DeploymentIncomplete as exc:
            announce(RED + str(exc) + RESET)
            return

        while controller.current_state is GameState.DISCOVERING:
            draw_turn(controller)
            target = read_target()
            if target is None:
                controller.surrender()
                break
            controller.attack(*target)

        draw_turn(controller)
        session = controller.session
        if session is not None and session.human_won:
            announce(GREEN + f"You win! Score: {session.human.score}" + RESET)
        else:
            announce(RED + "You lose." + RESET)
        if controller.end_game():
            announce("New high score!")
    except QuitGame:
        announce("Bye.")


def print_scores(controller: MatchController) -> None:
    scores = controller.high_scores()
    announce("High Scores")
    if not len(scores):
        print("  (none yet)")
    for i, score in enumerate(scores, start=1):
        print(f"{i:>3}. {score.name:<3} {score.value:>6}")
