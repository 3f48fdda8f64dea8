"""Fixed-interval driver for ``GameEngine.tick``."""
from __future__ import annotations

import threading
import time
from typing import Optional

from reaction_game.common import GameState
from reaction_game.engine import GameEngine


class SessionTicker:
    """
    Calls ``engine.tick()`` every ``interval_s`` on a daemon thread.

    Entering COUNTDOWN re-phases the ticker, so the first countdown tick
    lands a full interval after ``start()`` no matter where in the current
    interval the player pressed start.
    """

    def __init__(self, engine: GameEngine, interval_s: float = 1.0) -> None:
        self.engine = engine
        self.interval_s = interval_s
        self._stop = threading.Event()
        self._wake = threading.Event()
        self._thread: Optional[threading.Thread] = None
        self._phase = 0
        self._phase_at = time.monotonic()
        engine.machine.add_listener(self._on_transition)

    def start(self) -> None:
        if self._thread and self._thread.is_alive():
            return
        self._stop.clear()
        self._thread = threading.Thread(target=self._run, name="session-ticker", daemon=True)
        self._thread.start()

    def stop(self) -> None:
        self._stop.set()
        self._wake.set()
        if self._thread:
            self._thread.join(timeout=2.0)
            self._thread = None

    def rephase(self) -> None:
        """Restart the interval from now. Called under the engine lock."""
        self._phase_at = time.monotonic()
        self._phase += 1
        self._wake.set()

    def _on_transition(self, old: GameState, new: GameState) -> None:
        if new is GameState.COUNTDOWN:
            self.rephase()

    def _run(self) -> None:
        phase = self._phase
        next_at = time.monotonic() + self.interval_s
        while not self._stop.is_set():
            woke = self._wake.wait(max(0.0, next_at - time.monotonic()))
            if self._stop.is_set():
                break
            if woke or phase != self._phase:
                self._wake.clear()
                phase = self._phase
                next_at = self._phase_at + self.interval_s
                continue
            next_at += self.interval_s
            # dropped if a rephase slipped in since the wait returned
            self.engine.tick(lambda p=phase: p == self._phase)
