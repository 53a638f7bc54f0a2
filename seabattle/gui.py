from __future__ import annotations

import time
from typing import Callable, List, Optional, Tuple

import pygame

from .battleship.attack import AttackResult, ResultOfAttack
from .battleship.errors import DeploymentIncomplete, InvalidPlacement
from .battleship.game import BOARD_SIZE, COORDS, FLEET, Direction, TileView
from .battleship.grid import BoardView
from .controller import MatchController
from .settings import Settings
from .states import GameState


# --------------------------- Pygame rendering ---------------------------

WINDOW_BG = (15, 18, 25)
GRID_BG = (23, 28, 38)
TEXT = (230, 235, 245)
SUBTEXT = (155, 165, 185)
ACCENT = (58, 123, 213)
HIT = (232, 93, 117)
MISS = (240, 190, 90)
SHIP = (60, 130, 200)
SHIP_OUTLINE = (40, 95, 160)
HOVER = (90, 160, 245)
INVALID = (210, 75, 90)
VICTORY = (90, 200, 120)
DEFEAT = (220, 60, 80)

CELL_SIZE = 40
PANEL_PADDING = 28
BOARD_GAP = 60
TOP_BAR = 84
BOTTOM_BAR = 60

RULES = [
    "Each side hides five ships on a 10x10 grid.",
    "Take turns firing at the enemy grid.",
    "A hit or a sunk ship earns another shot; a miss passes the turn.",
    "Firing at a square you already tried also passes the turn.",
    "Sink the whole enemy fleet to win.",
]

CONTROLS = [
    "Deploy: left click to place, right click or R to rotate.",
    "Deploy: D places the whole fleet at random, Enter starts the battle.",
    "Battle: left click on the right-hand grid to fire.",
    "+ / - change the volume, Esc opens the game menu.",
]

Button = Tuple[pygame.Rect, Callable[[], None]]


class GuiGame:
    def __init__(self, controller: MatchController) -> None:
        pygame.init()
        pygame.display.set_caption("Sea Battle")
        total_width = (CELL_SIZE * BOARD_SIZE) * 2 + BOARD_GAP + PANEL_PADDING * 2
        total_height = TOP_BAR + (CELL_SIZE * BOARD_SIZE) + BOTTOM_BAR
        self.screen = pygame.display.set_mode((total_width, total_height))
        self.clock = pygame.time.Clock()
        self.font = pygame.font.SysFont("Arial", 22)
        self.font_small = pygame.font.SysFont("Arial", 18)
        self.font_big = pygame.font.SysFont("Arial", 48, bold=True)

        self.controller = controller
        self.controller.auto_computer = False
        self.controller.grid_changed.subscribe(self._on_grid_changed)
        self.controller.attack_completed.subscribe(self._on_attack_completed)

        self.running = True
        self.dirty = True
        self.info_message = ""
        self.message_timer: float = 0.0
        self.buttons: List[Button] = []

        # deployment
        self.placing_index = 0
        self.direction = Direction.LEFT_RIGHT
        self.next_computer_shot = 0.0

    @property
    def settings(self) -> Settings:
        return self.controller.settings

    # --------------------------- Listeners ---------------------------
    def _on_grid_changed(self, _controller: MatchController) -> None:
        self.dirty = True

    def _on_attack_completed(self, controller: MatchController, result: AttackResult, by_human: bool) -> None:
        self.show_message(controller.message, 2.5)
        if result.value is ResultOfAttack.MISS or result.value is ResultOfAttack.SHOT_ALREADY:
            self.next_computer_shot = time.time() + self.settings.computer_delay

    # --------------------------- Utility ---------------------------
    def show_message(self, text: str, seconds: float = 2.0) -> None:
        self.info_message = text
        self.message_timer = time.time() + seconds
        self.dirty = True

    def get_board_rects(self) -> Tuple[pygame.Rect, pygame.Rect]:
        left_x = PANEL_PADDING
        right_x = PANEL_PADDING + CELL_SIZE * BOARD_SIZE + BOARD_GAP
        y = TOP_BAR
        left_rect = pygame.Rect(left_x, y, CELL_SIZE * BOARD_SIZE, CELL_SIZE * BOARD_SIZE)
        right_rect = pygame.Rect(right_x, y, CELL_SIZE * BOARD_SIZE, CELL_SIZE * BOARD_SIZE)
        return left_rect, right_rect

    def mouse_to_cell(self, rect: pygame.Rect, pos: Tuple[int, int]) -> Optional[Tuple[int, int]]:
        if not rect.collidepoint(pos):
            return None
        x, y = pos
        col = (x - rect.x) // CELL_SIZE
        row = (y - rect.y) // CELL_SIZE
        if 0 <= row < BOARD_SIZE and 0 <= col < BOARD_SIZE:
            return int(row), int(col)
        return None

    def change_volume(self, steps: int) -> None:
        volume = self.controller.change_volume(steps)
        if pygame.mixer.get_init():
            pygame.mixer.music.set_volume(volume)
        self.show_message(f"Volume {round(volume * 100)}%")

    # --------------------------- Draw ---------------------------
    def draw(self) -> None:
        self.screen.fill(WINDOW_BG)
        self.buttons = []
        state = self.controller.current_state

        if state is GameState.VIEWING_MAIN_MENU:
            self.draw_menu("Sea Battle", [
                ("Play", self.start_game),
                ("High Scores", lambda: self.controller.add_new_state(GameState.VIEWING_HIGH_SCORES)),
                ("Settings", lambda: self.controller.add_new_state(GameState.ALTERING_SETTINGS)),
                ("Quit", self.controller.end_current_state),
            ])
        elif state is GameState.VIEWING_GAME_MENU:
            self.draw_menu("Paused", [
                ("Return", self.controller.end_current_state),
                ("Volume", lambda: self.controller.add_new_state(GameState.ALTERING_VOLUME)),
                ("Surrender", self.controller.surrender),
            ])
        elif state is GameState.ALTERING_SETTINGS:
            self.draw_menu("Settings", [
                ("Volume", lambda: self.controller.add_new_state(GameState.ALTERING_VOLUME)),
                ("Rules", lambda: self.controller.add_new_state(GameState.VIEWING_RULES)),
                ("Controls", lambda: self.controller.add_new_state(GameState.VIEWING_CONTROLS)),
                ("Back", self.controller.end_current_state),
            ])
        elif state is GameState.ALTERING_VOLUME:
            self.draw_volume()
        elif state is GameState.VIEWING_RULES:
            self.draw_text_page("Rules", RULES)
        elif state is GameState.VIEWING_CONTROLS:
            self.draw_text_page("Controls", CONTROLS)
        elif state is GameState.VIEWING_HIGH_SCORES:
            scores = self.controller.high_scores()
            lines = [f"{i:>2}. {s.name:<3}  {s.value}" for i, s in enumerate(scores, start=1)] or ["No scores yet."]
            self.draw_text_page("High Scores", lines)
        elif state in (GameState.DEPLOYING, GameState.DISCOVERING, GameState.ENDING_GAME):
            self.draw_battle(state)

        pygame.display.flip()
        self.dirty = False

    def draw_menu(self, title: str, items: List[Tuple[str, Callable[[], None]]]) -> None:
        surf = self.font_big.render(title, True, TEXT)
        cx = self.screen.get_width() // 2
        self.screen.blit(surf, (cx - surf.get_width() // 2, 40))
        y = 150
        for label, action in items:
            rect = pygame.Rect(cx - 120, y, 240, 48)
            pygame.draw.rect(self.screen, GRID_BG, rect, border_radius=8)
            text = self.font.render(label, True, TEXT)
            self.screen.blit(text, (rect.centerx - text.get_width() // 2, rect.y + 12))
            self.buttons.append((rect, action))
            y += 70
        self.draw_status_bar(self.current_message())

    def draw_text_page(self, title: str, lines: List[str]) -> None:
        surf = self.font_big.render(title, True, TEXT)
        self.screen.blit(surf, (PANEL_PADDING, 24))
        y = TOP_BAR + 20
        for line in lines:
            self.screen.blit(self.font.render(line, True, SUBTEXT), (PANEL_PADDING, y))
            y += 34
        self.draw_status_bar("Esc or click to go back")

    def draw_volume(self) -> None:
        parent = self.controller.volume_parent
        back = "game menu" if parent is GameState.VIEWING_GAME_MENU else "settings"
        volume = self.settings.volume
        lines = [f"Volume: {round(volume * 100)}%", "Use + and - to adjust.", f"Esc returns to the {back}."]
        self.draw_text_page("Volume", lines)
        bar = pygame.Rect(PANEL_PADDING, TOP_BAR + 150, 400, 20)
        pygame.draw.rect(self.screen, GRID_BG, bar, border_radius=6)
        pygame.draw.rect(self.screen, ACCENT, (bar.x, bar.y, int(bar.width * volume), bar.height), border_radius=6)

    def draw_battle(self, state: GameState) -> None:
        left_rect, right_rect = self.get_board_rects()
        human = self.controller.human

        self.draw_title("Your Board", left_rect.x, 24)
        self.draw_title("Their Board", right_rect.x, 24)
        self.draw_board(left_rect, human.grid)
        if human.enemy_grid is not None:
            self.draw_board(right_rect, human.enemy_grid)
        else:
            self.draw_board(right_rect, None)

        if state is GameState.DEPLOYING:
            if self.placing_index < len(FLEET):
                ship = FLEET[self.placing_index]
                status = f"Place your {ship} ({ship.size}), {self.direction.value}"
                cell = self.mouse_to_cell(left_rect, pygame.mouse.get_pos())
                if cell:
                    self.draw_placement_preview(left_rect, cell)
            else:
                status = "Fleet ready: press Enter to start the battle."
            self.draw_status_bar(self.current_message() or status)
        elif state is GameState.DISCOVERING:
            if self.controller.human_to_move:
                cell = self.mouse_to_cell(right_rect, pygame.mouse.get_pos())
                if cell:
                    r, c = cell
                    rx = right_rect.x + c * CELL_SIZE
                    ry = right_rect.y + r * CELL_SIZE
                    pygame.draw.rect(self.screen, HOVER, (rx + 2, ry + 2, CELL_SIZE - 4, CELL_SIZE - 4), 2)
                status = "Your turn: click on the right board to fire."
            else:
                status = "The computer is aiming..."
            self.draw_status_bar(self.current_message() or status)
        else:
            won = self.controller.session is not None and self.controller.session.human_won
            banner = "You Win!" if won else "You Lose"
            surf = self.font_big.render(banner, True, VICTORY if won else DEFEAT)
            self.screen.blit(surf, (self.screen.get_width() // 2 - surf.get_width() // 2, 8))
            score = f"Score {human.score}. " if won else ""
            self.draw_status_bar(score + "Click or press Enter to continue.")

    def current_message(self) -> str:
        if self.message_timer and time.time() > self.message_timer:
            self.message_timer = 0
            self.info_message = ""
        return self.info_message

    def draw_title(self, text: str, x: int, y: int) -> None:
        txt = self.font.render(text, True, TEXT)
        self.screen.blit(txt, (x, y))

    def draw_status_bar(self, text: str) -> None:
        if not text:
            return
        surf = self.font.render(text, True, SUBTEXT)
        self.screen.blit(surf, (PANEL_PADDING, self.screen.get_height() - BOTTOM_BAR + 16))

    def draw_board(self, rect: pygame.Rect, board: Optional[BoardView]) -> None:
        pygame.draw.rect(self.screen, GRID_BG, rect, border_radius=8)
        # grid lines
        for i in range(BOARD_SIZE + 1):
            x = rect.x + i * CELL_SIZE
            y = rect.y + i * CELL_SIZE
            pygame.draw.line(self.screen, (50, 58, 72), (rect.x, y), (rect.right, y))
            pygame.draw.line(self.screen, (50, 58, 72), (x, rect.y), (x, rect.bottom))
        # labels
        for i in range(BOARD_SIZE):
            letter = self.font_small.render(COORDS[i], True, SUBTEXT)
            num = self.font_small.render(str(i + 1), True, SUBTEXT)
            self.screen.blit(letter, (rect.x - 18, rect.y + i * CELL_SIZE + CELL_SIZE // 2 - letter.get_height() // 2))
            self.screen.blit(num, (rect.x + i * CELL_SIZE + CELL_SIZE // 2 - num.get_width() // 2, rect.y - 22))
        if board is None:
            return
        # cells content, as far as this view reveals it
        for r in range(BOARD_SIZE):
            for c in range(BOARD_SIZE):
                view = board.tile_at(r, c)
                cx = rect.x + c * CELL_SIZE
                cy = rect.y + r * CELL_SIZE
                if view is TileView.SHIP:
                    pygame.draw.rect(self.screen, SHIP, (cx + 2, cy + 2, CELL_SIZE - 4, CELL_SIZE - 4))
                    pygame.draw.rect(self.screen, SHIP_OUTLINE, (cx + 2, cy + 2, CELL_SIZE - 4, CELL_SIZE - 4), 2)
                elif view is TileView.MISS:
                    pygame.draw.circle(self.screen, MISS, (cx + CELL_SIZE // 2, cy + CELL_SIZE // 2), CELL_SIZE // 6)
                elif view is TileView.HIT:
                    pygame.draw.circle(self.screen, HIT, (cx + CELL_SIZE // 2, cy + CELL_SIZE // 2), CELL_SIZE // 3)

    def draw_placement_preview(self, left_rect: pygame.Rect, start_cell: Tuple[int, int]) -> None:
        grid = self.controller.human.grid
        ship = grid.ship(FLEET[self.placing_index])
        r0, c0 = start_cell
        cells = ship.footprint(r0, c0, self.direction)
        valid = all(
            grid.in_bounds(r, c) and grid.ship_at(r, c) in (None, ship)
            for r, c in cells
        )
        for r, c in cells:
            if grid.in_bounds(r, c):
                cx = left_rect.x + c * CELL_SIZE
                cy = left_rect.y + r * CELL_SIZE
                color = HOVER if valid else INVALID
                pygame.draw.rect(self.screen, color, (cx + 2, cy + 2, CELL_SIZE - 4, CELL_SIZE - 4), 0 if valid else 2)

    # --------------------------- Interaction ---------------------------
    def start_game(self) -> None:
        self.controller.start_game()
        self.placing_index = 0
        self.direction = Direction.LEFT_RIGHT
        self.info_message = ""

    def place_ships_handle_click(self, pos: Tuple[int, int]) -> None:
        left_rect, _right_rect = self.get_board_rects()
        cell = self.mouse_to_cell(left_rect, pos)
        if cell is None or self.placing_index >= len(FLEET):
            return
        r0, c0 = cell
        try:
            self.controller.deploy_ship(r0, c0, FLEET[self.placing_index], self.direction)
        except InvalidPlacement:
            self.show_message("Cannot place there.")
            return
        self.placing_index += 1

    def finish_deployment(self) -> None:
        try:
            self.controller.end_deployment()
        except DeploymentIncomplete:
            self.show_message("Deploy every ship first.")
            return
        self.show_message("Battle stations!")

    def click_fire(self, pos: Tuple[int, int]) -> None:
        _left_rect, right_rect = self.get_board_rects()
        cell = self.mouse_to_cell(right_rect, pos)
        if cell is None or not self.controller.human_to_move:
            return
        self.controller.attack(*cell)

    def handle_click(self, event: pygame.event.Event) -> None:
        state = self.controller.current_state
        if state is GameState.DEPLOYING:
            if event.button == 1:
                self.place_ships_handle_click(event.pos)
            elif event.button == 3:
                self.direction = self.direction.rotated()
        elif state is GameState.DISCOVERING:
            if event.button == 1:
                self.click_fire(event.pos)
        elif state is GameState.ENDING_GAME:
            self.controller.end_game()
        elif state in (GameState.VIEWING_RULES, GameState.VIEWING_CONTROLS, GameState.VIEWING_HIGH_SCORES):
            self.controller.end_current_state()
        else:
            for rect, action in self.buttons:
                if rect.collidepoint(event.pos):
                    action()
                    break

    def handle_key(self, event: pygame.event.Event) -> None:
        state = self.controller.current_state
        if event.unicode in ("+", "="):
            self.change_volume(1)
            return
        if event.unicode in ("-", "_"):
            self.change_volume(-1)
            return
        if event.key == pygame.K_ESCAPE:
            if state in (GameState.DEPLOYING, GameState.DISCOVERING):
                self.controller.add_new_state(GameState.VIEWING_GAME_MENU)
            elif state is GameState.ENDING_GAME:
                self.controller.end_game()
            else:
                self.controller.end_current_state()
            return
        if state is GameState.DEPLOYING:
            if event.key == pygame.K_r:
                self.direction = self.direction.rotated()
            elif event.key == pygame.K_d:
                self.controller.random_deploy()
                self.placing_index = len(FLEET)
            elif event.key in (pygame.K_RETURN, pygame.K_KP_ENTER):
                self.finish_deployment()
        elif state is GameState.ENDING_GAME and event.key in (pygame.K_RETURN, pygame.K_KP_ENTER):
            self.controller.end_game()

    # --------------------------- Loop ---------------------------
    def run(self) -> None:
        while self.running and not self.controller.quitting:
            for event in pygame.event.get():
                if event.type == pygame.QUIT:
                    self.running = False
                elif event.type == pygame.MOUSEBUTTONDOWN:
                    self.handle_click(event)
                    self.dirty = True
                elif event.type == pygame.KEYDOWN:
                    self.handle_key(event)
                    self.dirty = True
                elif event.type == pygame.MOUSEMOTION:
                    self.dirty = True

            # computer shots are paced so the player can follow them
            if self.controller.computer_to_move and time.time() >= self.next_computer_shot:
                self.controller.computer_attack()
                self.next_computer_shot = time.time() + self.settings.computer_delay

            if self.dirty or self.message_timer:
                self.draw()
            self.clock.tick(60)
        pygame.quit()


# --------------------------- Entrypoints ---------------------------

def run_gui(settings: Settings) -> None:
    game = GuiGame(MatchController(settings))
    game.run()
