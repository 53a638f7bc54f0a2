"""High-score table kept as a small JSON file.

File layout: a JSON list of ``{"name": str, "value": int}`` objects, best
score first.
"""

from __future__ import annotations

import json
import logging
from dataclasses import asdict, dataclass
from pathlib import Path
from typing import Iterator, List, Union

from .battleship.errors import SeaBattleError

logger = logging.getLogger(__name__)

NAME_WIDTH = 3
MAX_SCORES = 10


class ScoreFileError(SeaBattleError):
    """The high-score file exists but cannot be read as a score table."""


@dataclass(frozen=True)
class Score:
    name: str
    value: int


class HighScores:
    def __init__(self, path: Union[str, Path]) -> None:
        self.path = Path(path)
        self.scores: List[Score] = []

    def load(self) -> "HighScores":
        if not self.path.exists():
            self.scores = []
            return self
        try:
            raw = json.loads(self.path.read_text(encoding="utf-8"))
            scores = [Score(str(item["name"]), int(item["value"])) for item in raw]
        except (ValueError, KeyError, TypeError) as exc:
            raise ScoreFileError(f"unreadable score file {self.path}: {exc}") from exc
        self.scores = _ranked(scores)
        return self

    def save(self) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        data = [asdict(score) for score in self.scores]
        self.path.write_text(json.dumps(data, indent=2), encoding="utf-8")

    def qualifies(self, value: int) -> bool:
        return len(self.scores) < MAX_SCORES or value > self.scores[-1].value

    def add(self, name: str, value: int) -> bool:
        """Record a score; returns False when it did not make the table."""
        if not self.qualifies(value):
            return False
        name = (name.strip() or "???")[:NAME_WIDTH]
        self.scores = _ranked(self.scores + [Score(name, int(value))])
        logger.info("high score %s %d", name, value)
        return True

    def __iter__(self) -> Iterator[Score]:
        return iter(self.scores)

    def __len__(self) -> int:
        return len(self.scores)


def _ranked(scores: List[Score]) -> List[Score]:
    # stable: earlier entries win ties
    return sorted(scores, key=lambda s: s.value, reverse=True)[:MAX_SCORES]
