"""The explicit game context and its per-frame update."""
from __future__ import annotations

import threading
from typing import Any, Callable, List, Optional, Sequence, Tuple

from reaction_game.clock import MonotonicClock
from reaction_game.collision import CollisionResolver
from reaction_game.common import DetectedSubject, DetectionSource, GameSnapshot, GameState
from reaction_game.config import GameConfig
from reaction_game.cooldown import CooldownGate
from reaction_game.projectiles import Projectile, ProjectileSimulator, launch_origin
from reaction_game.scoring import ScoreKeeper, SessionTimer
from reaction_game.state import GameStateMachine
from reaction_game.tracker import TargetTracker


def _coerce_subjects(raw: Any) -> List[DetectedSubject]:
    """Anything that is not an iterable of subjects counts as 'nobody'."""
    if raw is None:
        return []
    try:
        return [s for s in raw if s is not None]
    except TypeError:
        return []


def _frame_size_of(frame: Any) -> Optional[Tuple[int, int]]:
    shape = getattr(frame, "shape", None)
    if shape is None or len(shape) < 2:
        return None
    return (int(shape[1]), int(shape[0]))


class GameEngine:
    """
    Bundles tracks, projectiles, score, timer and state.

    Two entry points mutate it: ``update``/``process_frame`` from the frame
    loop and ``tick`` from a fixed-interval timer.  Both run under one lock.
    ``process_frame`` additionally refuses to start while another call is
    still waiting on the detector.
    """

    def __init__(
        self,
        cfg: GameConfig | None = None,
        clock=None,
        frame_size: Tuple[int, int] = (640, 480),
    ) -> None:
        self.cfg = cfg or GameConfig()
        self.clock = clock or MonotonicClock()
        self.frame_size = frame_size

        self.tracker = TargetTracker(self.cfg)
        self.gate = CooldownGate()
        self.simulator = ProjectileSimulator(self.cfg)
        self.resolver = CollisionResolver(self.cfg.linger_s)
        self.score = ScoreKeeper()
        self.timer = SessionTimer(self.cfg.session_s)
        self.machine = GameStateMachine(self.cfg, self.score, self.timer, self._clear_world)
        self.projectiles: List[Projectile] = []

        self._lock = threading.RLock()
        self._frame_guard = threading.Lock()
        self._message: Optional[str] = None
        self._message_until = 0.0
        self.shots_fired = 0
        self.skipped_frames = 0

    # ------------------------------------------------------------------ #
    #   C O N T R O L   I N P U T S
    # ------------------------------------------------------------------ #
    @property
    def state(self) -> GameState:
        return self.machine.state

    def start(self) -> bool:
        with self._lock:
            return self.machine.start()

    def restart(self) -> bool:
        with self._lock:
            if not self.machine.restart():
                return False
            self._message = None
            return True

    def tick(self, still_due: Optional[Callable[[], bool]] = None) -> bool:
        """
        One fixed time unit elapsed.  ``still_due`` is checked under the
        lock; a False answer drops the tick.  Returns whether it was applied.
        """
        with self._lock:
            if still_due is not None and not still_due():
                return False
            self.machine.tick()
            return True

    def apply_config(self, cfg: GameConfig) -> None:
        """Swap in a new configuration; takes effect on the next frame."""
        with self._lock:
            self.cfg = cfg
            self.tracker.cfg = cfg
            self.simulator.cfg = cfg
            self.resolver.linger_s = cfg.linger_s
            self.machine.cfg = cfg
            if self.machine.state is GameState.IDLE:
                self.timer.duration_s = cfg.session_s
                self.timer.reset()

    # ------------------------------------------------------------------ #
    #   P E R - F R A M E   U P D A T E
    # ------------------------------------------------------------------ #
    def process_frame(self, frame: Any, source: DetectionSource) -> Optional[GameSnapshot]:
        """
        Run the detector on ``frame`` and feed the result to ``update``.
        Returns None without touching any state if a previous call is
        still in progress.
        """
        if not self._frame_guard.acquire(blocking=False):
            with self._lock:
                self.skipped_frames += 1
            return None
        try:
            try:
                raw = source.estimate(frame)
            except Exception as exc:  # noqa: BLE001
                print(f"[Game] Detector error, treating frame as empty: {exc}")
                raw = None
            return self.update(raw, frame_size=_frame_size_of(frame))
        finally:
            self._frame_guard.release()

    def update(
        self,
        subjects: Sequence[DetectedSubject] | None,
        now: float | None = None,
        frame_size: Tuple[int, int] | None = None,
    ) -> GameSnapshot:
        with self._lock:
            if now is None:
                now = self.clock.now()
            if frame_size is not None:
                self.frame_size = frame_size

            tracks = self.tracker.update(_coerce_subjects(subjects), now)

            if self.machine.firing:
                origin = launch_origin(self.frame_size)
                for track in tracks:
                    if self.gate.can_fire(track, now, self.cfg.cooldown_s):
                        self.gate.mark_fired(track, now)
                        self.projectiles.append(
                            self.simulator.spawn(origin, track.position, now, track.track_id)
                        )
                        self.shots_fired += 1

                self.simulator.advance(self.projectiles, now)
                hits = self.resolver.resolve(self.projectiles, now)
                if hits:
                    self.score.increment(hits)
                    self._message = self.cfg.hit_message
                    self._message_until = now + self.cfg.message_s
            self.resolver.sweep(self.projectiles, now)

            return self.snapshot(now)

    # ------------------------------------------------------------------ #
    #   S N A P S H O T
    # ------------------------------------------------------------------ #
    def snapshot(self, now: float | None = None) -> GameSnapshot:
        with self._lock:
            if now is None:
                now = self.clock.now()
            message = self._message if self._message and now < self._message_until else None
            return GameSnapshot(
                state=self.machine.state,
                tracks=tuple(t.view() for t in self.tracker.tracks),
                projectiles=tuple(p.view() for p in self.projectiles),
                score=self.score.value,
                remaining_s=self.timer.remaining,
                countdown_left=self.machine.countdown_left,
                message=message,
                frame_size=self.frame_size,
            )

    def _clear_world(self) -> None:
        self.tracker.clear()
        self.projectiles.clear()
        self._message = None
