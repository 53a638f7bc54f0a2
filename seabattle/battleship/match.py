from __future__ import annotations

import logging
from typing import List, Optional

from .attack import AttackResult, ResultOfAttack
from .errors import PreconditionViolation
from .events import Event
from .grid import SeaGridView
from .players import Player

logger = logging.getLogger(__name__)


class Match:
    """Turn taking between two deployed players.

    The side to move only changes on a miss. Hits and kills earn another
    shot. A repeated shot passes the turn like a miss unless
    ``already_shot_passes_turn`` is turned off.
    """

    def __init__(self, already_shot_passes_turn: bool = True) -> None:
        self.players: List[Player] = []
        self.already_shot_passes_turn = already_shot_passes_turn
        self.attack_completed = Event()
        self._player_index = 0
        self._views: List[SeaGridView] = []

    @property
    def ready(self) -> bool:
        return len(self.players) == 2

    @property
    def player(self) -> Player:
        """The player whose turn it is."""
        self._require_ready()
        return self.players[self._player_index]

    @property
    def opponent(self) -> Player:
        self._require_ready()
        return self.players[1 - self._player_index]

    @property
    def winner(self) -> Optional[Player]:
        if not self.ready:
            return None
        for index, player in enumerate(self.players):
            if self.players[1 - index].is_destroyed:
                return player
        return None

    @property
    def is_over(self) -> bool:
        return self.winner is not None

    def add_deployed_player(self, player: Player) -> None:
        if self.ready:
            raise PreconditionViolation("a match only has two players")
        if not player.ready_to_deploy:
            raise PreconditionViolation(f"{player.name} has ships left to deploy")
        self.players.append(player)
        if self.ready:
            self._complete_deployment()

    def _complete_deployment(self) -> None:
        first, second = self.players
        first.enemy_grid = SeaGridView(second.grid)
        second.enemy_grid = SeaGridView(first.grid)
        self._views = [first.enemy_grid, second.enemy_grid]
        logger.info("match ready: %s vs %s", first.name, second.name)

    def shoot(self, row: int, col: int) -> AttackResult:
        """Current player fires at the opponent's grid."""
        player = self.player
        other_index = 1 - self._player_index
        result = player.shoot(row, col)

        if result.value is not ResultOfAttack.SHOT_ALREADY and self.players[other_index].is_destroyed:
            result = result.with_value(ResultOfAttack.GAME_OVER)
            logger.info("%s wins", player.name)

        self.attack_completed.emit(self, result)

        if result.value is ResultOfAttack.MISS or (
            result.value is ResultOfAttack.SHOT_ALREADY and self.already_shot_passes_turn
        ):
            self._player_index = other_index
        return result

    def close(self) -> None:
        for view in self._views:
            view.detach()
        self._views = []

    def _require_ready(self) -> None:
        if not self.ready:
            raise PreconditionViolation("both players must be deployed first")
