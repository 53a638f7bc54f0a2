from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional

from .game import Ship


class ResultOfAttack(Enum):
    MISS = "miss"
    HIT = "hit"
    DESTROYED = "destroyed"
    SHOT_ALREADY = "shot_already"
    GAME_OVER = "game_over"


@dataclass(frozen=True)
class AttackResult:
    value: ResultOfAttack
    row: int
    col: int
    text: str
    ship: Optional[Ship] = None

    @property
    def keeps_turn(self) -> bool:
        return self.value in (ResultOfAttack.HIT, ResultOfAttack.DESTROYED)

    def with_value(self, value: ResultOfAttack) -> "AttackResult":
        return AttackResult(value, self.row, self.col, self.text, self.ship)

    def __str__(self) -> str:
        if self.ship is not None:
            return f"{self.text} {self.ship.name}"
        return self.text
