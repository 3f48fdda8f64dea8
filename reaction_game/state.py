"""Session lifecycle: IDLE -> COUNTDOWN -> RUNNING -> ENDED -> IDLE."""
from __future__ import annotations

from typing import Callable, List

from reaction_game.common import GameState
from reaction_game.config import GameConfig
from reaction_game.scoring import ScoreKeeper, SessionTimer

TransitionListener = Callable[[GameState, GameState], None]


class GameStateMachine:
    """
    Owns the single ``GameState`` value.  Entry actions reset the score and
    timer and call ``clear_world`` so the owner can drop tracks and
    projectiles.  Inputs given in the wrong state are ignored and reported
    as ``False``.
    """

    def __init__(
        self,
        cfg: GameConfig,
        score: ScoreKeeper,
        timer: SessionTimer,
        clear_world: Callable[[], None],
    ) -> None:
        self.cfg = cfg
        self.score = score
        self.timer = timer
        self._clear_world = clear_world
        self._state = GameState.IDLE
        self._countdown_left = 0
        self._listeners: List[TransitionListener] = []

    # ------------------------------------------------------------------ #
    #   Q U E R I E S
    # ------------------------------------------------------------------ #
    @property
    def state(self) -> GameState:
        return self._state

    @property
    def countdown_left(self) -> int:
        return self._countdown_left

    @property
    def start_enabled(self) -> bool:
        return self._state is GameState.IDLE

    @property
    def firing(self) -> bool:
        return self._state is GameState.RUNNING

    def add_listener(self, listener: TransitionListener) -> None:
        self._listeners.append(listener)

    # ------------------------------------------------------------------ #
    #   I N P U T S
    # ------------------------------------------------------------------ #
    def start(self) -> bool:
        if self._state is not GameState.IDLE:
            return False
        self._countdown_left = self.cfg.countdown_ticks
        self._set(GameState.COUNTDOWN)
        if self._countdown_left == 0:
            self._enter_running()
        return True

    def restart(self) -> bool:
        if self._state is not GameState.ENDED:
            return False
        self.score.reset()
        self.timer.duration_s = self.cfg.session_s
        self.timer.reset()
        self._clear_world()
        self._set(GameState.IDLE)
        return True

    def tick(self) -> None:
        """One fixed time unit (1 s) elapsed."""
        if self._state is GameState.COUNTDOWN:
            self._countdown_left = max(0, self._countdown_left - 1)
            if self._countdown_left == 0:
                self._enter_running()
        elif self._state is GameState.RUNNING:
            if self.timer.tick():
                self._enter_ended()

    # ------------------------------------------------------------------ #
    #   E N T R Y   A C T I O N S
    # ------------------------------------------------------------------ #
    def _enter_running(self) -> None:
        self.score.reset()
        self._clear_world()
        self.timer.start(self.cfg.session_s)
        self._set(GameState.RUNNING)

    def _enter_ended(self) -> None:
        self.timer.stop()
        self._clear_world()
        self._set(GameState.ENDED)

    def _set(self, new: GameState) -> None:
        old, self._state = self._state, new
        print(f"[Game] {old.value} -> {new.value} (score={self.score.value})")
        for listener in list(self._listeners):
            listener(old, new)
