from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

DEFAULT_SCORES_PATH = Path.home() / ".seabattle" / "highscores.json"

VOLUME_STEP = 0.1


@dataclass
class Settings:
    volume: float = 0.5
    computer_delay: float = 0.35  # seconds between computer shots in the GUI
    allow_adjacent: bool = True
    already_shot_passes_turn: bool = True
    player_name: str = "You"
    scores_path: Path = field(default_factory=lambda: DEFAULT_SCORES_PATH)
    log_level: str = "WARNING"

    def __post_init__(self) -> None:
        self.volume = _clamp(self.volume)
        self.scores_path = Path(self.scores_path)

    def change_volume(self, steps: int) -> float:
        self.volume = _clamp(round(self.volume + steps * VOLUME_STEP, 2))
        return self.volume

    @classmethod
    def from_args(cls, args: Any) -> "Settings":
        settings = cls()
        if getattr(args, "volume", None) is not None:
            settings.volume = _clamp(args.volume)
        if getattr(args, "scores", None):
            settings.scores_path = Path(args.scores)
        if getattr(args, "no_touching", False):
            settings.allow_adjacent = False
        if getattr(args, "name", None):
            settings.player_name = args.name
        if getattr(args, "log_level", None):
            settings.log_level = args.log_level.upper()
        return settings


def _clamp(value: float) -> float:
    return max(0.0, min(1.0, float(value)))
