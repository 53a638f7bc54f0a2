from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, auto
from typing import Iterator, List, Optional


class GameState(Enum):
    QUITTING = auto()
    VIEWING_MAIN_MENU = auto()
    VIEWING_GAME_MENU = auto()
    ALTERING_SETTINGS = auto()
    VIEWING_RULES = auto()
    VIEWING_CONTROLS = auto()
    ALTERING_VOLUME = auto()
    VIEWING_HIGH_SCORES = auto()
    DEPLOYING = auto()
    DISCOVERING = auto()
    ENDING_GAME = auto()


@dataclass(frozen=True)
class Frame:
    state: GameState
    # the screen this one was opened from, e.g. which menu a volume dialog returns to
    return_to: Optional[GameState] = None


class StateStack:
    """Screens the player has drilled into, most recent on top.

    QUITTING sits at the bottom: popping the main menu lands on it.
    """

    def __init__(self) -> None:
        self._frames: List[Frame] = [Frame(GameState.QUITTING), Frame(GameState.VIEWING_MAIN_MENU, GameState.QUITTING)]

    @property
    def current(self) -> GameState:
        return self._frames[-1].state

    @property
    def return_to(self) -> Optional[GameState]:
        return self._frames[-1].return_to

    @property
    def quitting(self) -> bool:
        return self.current is GameState.QUITTING

    def push(self, state: GameState, return_to: Optional[GameState] = None) -> None:
        self._frames.append(Frame(state, return_to if return_to is not None else self.current))

    def pop(self) -> GameState:
        if len(self._frames) == 1:
            raise IndexError("nothing below the quit marker")
        return self._frames.pop().state

    def switch(self, state: GameState) -> None:
        """Replace the top screen, keeping what it was opened from."""
        frame = self._frames.pop()
        self._frames.append(Frame(state, frame.return_to))

    def __len__(self) -> int:
        return len(self._frames)

    def __iter__(self) -> Iterator[GameState]:
        return (frame.state for frame in reversed(self._frames))

    def __contains__(self, state: object) -> bool:
        return any(frame.state is state for frame in self._frames)
