"""Game flow: which screen is showing, whose turn it is, and when it ends."""

from __future__ import annotations

import logging
import random
from dataclasses import dataclass, field
from typing import Optional

from .battleship.attack import AttackResult, ResultOfAttack
from .battleship.errors import DeploymentIncomplete, PreconditionViolation
from .battleship.events import Event
from .battleship.game import Direction, ShipName
from .battleship.match import Match
from .battleship.players import ComputerPlayer, Player
from .scores import HighScores, ScoreFileError
from .settings import Settings
from .states import GameState, StateStack

logger = logging.getLogger(__name__)


@dataclass
class Session:
    """Everything that lives for exactly one match."""

    human: Player
    computer: ComputerPlayer
    match: Match
    surrendered: bool = False
    score_recorded: bool = field(default=False, repr=False)

    @property
    def human_won(self) -> bool:
        return not self.surrendered and self.match.winner is self.human


class MatchController:
    """Owns the state stack and the current session.

    Front-ends read ``current_state`` to decide what to draw and call the
    action methods in response to input. ``grid_changed`` fires after any
    grid mutation; ``attack_completed`` fires with ``(controller, result,
    by_human)`` after every shot.
    """

    def __init__(
        self,
        settings: Optional[Settings] = None,
        auto_computer: bool = True,
        rng: Optional[random.Random] = None,
    ) -> None:
        self.settings = settings or Settings()
        # when False the front-end paces the computer via computer_attack()
        self.auto_computer = auto_computer
        self.rng = rng
        self.states = StateStack()
        self.session: Optional[Session] = None
        self.message = ""
        self.grid_changed = Event()
        self.attack_completed = Event()
        self._scores: Optional[HighScores] = None

    # --------------------------- State stack ---------------------------
    @property
    def current_state(self) -> GameState:
        return self.states.current

    @property
    def quitting(self) -> bool:
        return self.states.quitting

    def add_new_state(self, state: GameState, return_to: Optional[GameState] = None) -> None:
        self.states.push(state, return_to)
        self.message = ""
        logger.debug("state -> %s", state.name)

    def switch_state(self, state: GameState) -> None:
        self.states.switch(state)
        self.message = ""
        logger.debug("state => %s", state.name)

    def end_current_state(self) -> None:
        left = self.states.pop()
        logger.debug("state <- %s (now %s)", left.name, self.states.current.name)

    @property
    def volume_parent(self) -> Optional[GameState]:
        """Menu the volume dialog was opened from."""
        if self.current_state is not GameState.ALTERING_VOLUME:
            return None
        return self.states.return_to

    def change_volume(self, steps: int) -> float:
        return self.settings.change_volume(steps)

    # --------------------------- Session ---------------------------
    @property
    def human(self) -> Player:
        return self._session().human

    @property
    def computer(self) -> ComputerPlayer:
        return self._session().computer

    @property
    def match(self) -> Match:
        return self._session().match

    def start_game(self) -> Session:
        if self.session is not None:
            self._close_session()

        human = Player(self.settings.player_name, allow_adjacent=self.settings.allow_adjacent, rng=self.rng)
        computer = ComputerPlayer("Computer", allow_adjacent=self.settings.allow_adjacent, rng=self.rng)
        computer.randomize_deployment()
        match = Match(already_shot_passes_turn=self.settings.already_shot_passes_turn)

        human.grid.changed.subscribe(self._grid_changed)
        computer.grid.changed.subscribe(self._grid_changed)
        match.attack_completed.subscribe(self._attack_completed)

        self.session = Session(human, computer, match)
        logger.info("new game started")
        self.add_new_state(GameState.DEPLOYING)
        return self.session

    def _close_session(self) -> None:
        session = self.session
        if session is None:
            return
        session.human.grid.changed.unsubscribe(self._grid_changed)
        session.computer.grid.changed.unsubscribe(self._grid_changed)
        session.match.attack_completed.unsubscribe(self._attack_completed)
        session.match.close()
        self.session = None

    def _session(self) -> Session:
        if self.session is None:
            raise PreconditionViolation("no game in progress")
        return self.session

    # --------------------------- Deployment ---------------------------
    def deploy_ship(self, row: int, col: int, ship: ShipName, direction: Direction) -> None:
        """Move one of the human's ships; InvalidPlacement propagates to the caller."""
        self._require_state(GameState.DEPLOYING)
        self.human.grid.move_ship(row, col, ship, direction)

    def random_deploy(self) -> None:
        self._require_state(GameState.DEPLOYING)
        self.human.randomize_deployment()

    def end_deployment(self) -> None:
        self._require_state(GameState.DEPLOYING)
        session = self._session()
        if not (session.human.grid.all_deployed and session.computer.grid.all_deployed):
            raise DeploymentIncomplete("every ship must be deployed before the battle starts")
        session.match.add_deployed_player(session.human)
        session.match.add_deployed_player(session.computer)
        logger.info("deployment complete, battle begins")
        self.switch_state(GameState.DISCOVERING)

    # --------------------------- Battle ---------------------------
    @property
    def human_to_move(self) -> bool:
        return self.current_state is GameState.DISCOVERING and self.match.player is self.human

    @property
    def computer_to_move(self) -> bool:
        return self.current_state is GameState.DISCOVERING and self.match.player is self.computer

    def attack(self, row: int, col: int) -> AttackResult:
        """The human fires at the computer's grid."""
        self._require_state(GameState.DISCOVERING)
        if self.match.player is not self.human:
            raise PreconditionViolation("it is not the human player's turn")
        result = self.match.shoot(row, col)
        self._check_attack_result(result)
        return result

    def computer_attack(self) -> AttackResult:
        self._require_state(GameState.DISCOVERING)
        if self.match.player is not self.computer:
            raise PreconditionViolation("it is not the computer's turn")
        row, col = self.computer.choose_target()
        result = self.match.shoot(row, col)
        self._check_attack_result(result)
        return result

    def _check_attack_result(self, result: AttackResult) -> None:
        if result.value is ResultOfAttack.GAME_OVER:
            self.switch_state(GameState.ENDING_GAME)
            return
        if self.auto_computer and self.computer_to_move:
            # the computer keeps shooting until it misses or wins
            self.computer_attack()

    def surrender(self) -> None:
        session = self._session()
        if self.current_state is GameState.VIEWING_GAME_MENU:
            self.end_current_state()
        session.surrendered = True
        logger.info("%s surrendered", session.human.name)
        self.switch_state(GameState.ENDING_GAME)

    def end_game(self) -> bool:
        """Leave the end-of-game screen; returns True when a high score was recorded."""
        self._require_state(GameState.ENDING_GAME)
        recorded = self.record_score()
        self.end_current_state()
        self._close_session()
        return recorded

    def record_score(self) -> bool:
        session = self._session()
        if session.score_recorded or not session.human_won:
            return False
        session.score_recorded = True
        scores = self.high_scores()
        if not scores.add(session.human.name, session.human.score):
            return False
        scores.save()
        return True

    def high_scores(self) -> HighScores:
        if self._scores is None:
            scores = HighScores(self.settings.scores_path)
            try:
                scores.load()
            except ScoreFileError as exc:
                logger.warning("%s; starting a new table", exc)
            self._scores = scores
        return self._scores

    # --------------------------- Listeners ---------------------------
    def _grid_changed(self, _grid: object) -> None:
        self.grid_changed.emit(self)

    def _attack_completed(self, match: Match, result: AttackResult) -> None:
        by_human = match.player is self.session.human if self.session else False
        self.message = ("You " if by_human else "The computer ") + str(result)
        self.attack_completed.emit(self, result, by_human)

    def _require_state(self, state: GameState) -> None:
        if self.current_state is not state:
            raise PreconditionViolation(f"expected {state.name}, currently {self.current_state.name}")
