from __future__ import annotations

import logging
import random
from typing import List, Optional, Tuple

from .attack import AttackResult, ResultOfAttack
from .errors import InvalidPlacement, PreconditionViolation
from .game import Direction, TileView
from .grid import SeaGrid, SeaGridView

logger = logging.getLogger(__name__)


class Player:
    """One side of a match: its own grid plus a masked view of the enemy's."""

    def __init__(self, name: str, allow_adjacent: bool = True, rng: Optional[random.Random] = None) -> None:
        self.name = name
        self.grid = SeaGrid(allow_adjacent=allow_adjacent)
        self.enemy_grid: Optional[SeaGridView] = None
        self.rng = rng or random.Random()
        self.shots = 0
        self.hits = 0
        self.missed = 0

    @property
    def is_destroyed(self) -> bool:
        return self.grid.is_destroyed

    @property
    def ready_to_deploy(self) -> bool:
        return self.grid.all_deployed

    @property
    def score(self) -> int:
        if self.is_destroyed:
            return 0
        return self.hits * 12 - self.shots - self.grid.ships_killed * 20

    def shoot(self, row: int, col: int) -> AttackResult:
        if self.enemy_grid is None:
            raise PreconditionViolation(f"{self.name} has no opponent to shoot at")
        self.shots += 1
        result = self.enemy_grid.hit_tile(row, col)
        if result.value in (ResultOfAttack.HIT, ResultOfAttack.DESTROYED):
            self.hits += 1
        elif result.value is ResultOfAttack.MISS:
            self.missed += 1
        return result

    def randomize_deployment(self) -> None:
        for name in self.grid.ships:
            while True:
                direction = self.rng.choice(list(Direction))
                row = self.rng.randrange(self.grid.height)
                col = self.rng.randrange(self.grid.width)
                try:
                    self.grid.move_ship(row, col, name, direction)
                except InvalidPlacement:
                    continue
                break
        logger.debug("%s deployed randomly", self.name)

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.name!r})"


class ComputerPlayer(Player):
    """Fires at a random tile it has not tried yet.

    Targets are chosen from the masked view only, so hidden ships stay
    hidden from it. The shot itself goes through ``Match.shoot``.
    """

    def targets(self) -> List[Tuple[int, int]]:
        if self.enemy_grid is None:
            return []
        view = self.enemy_grid
        return [
            (r, c)
            for r in range(view.height)
            for c in range(view.width)
            if view.tile_at(r, c) is TileView.SEA
        ]

    def choose_target(self) -> Tuple[int, int]:
        options = self.targets()
        if not options:
            raise PreconditionViolation(f"{self.name} has nothing left to shoot at")
        return self.rng.choice(options)
