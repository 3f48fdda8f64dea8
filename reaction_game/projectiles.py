"""Projectile spawn and straight-line flight from the launcher to a target."""
from __future__ import annotations

from dataclasses import dataclass
from typing import List, Optional

import numpy as np

from reaction_game.common import Point, ProjectileView
from reaction_game.config import GameConfig


@dataclass
class Projectile:
    origin: Point
    target: Point
    spawned_at: float
    progress: float = 0.0
    hit_time: Optional[float] = None
    track_id: Optional[int] = None

    @property
    def position(self) -> Point:
        p = self.progress
        x, y = np.asarray(self.origin) * (1.0 - p) + np.asarray(self.target) * p
        return (float(x), float(y))

    @property
    def is_hit(self) -> bool:
        return self.hit_time is not None

    def view(self) -> ProjectileView:
        return ProjectileView(self.position, self.target, self.progress, self.is_hit, self.track_id)


def launch_origin(frame_size: tuple[int, int]) -> Point:
    """Bottom-centre of a (width, height) frame."""
    w, h = frame_size
    return (w / 2.0, float(h))


class ProjectileSimulator:
    """
    Two motion modes:

    * ``flight_time_s`` set  – progress is elapsed wall-clock time divided by
      the flight time, so flight duration does not depend on frame rate.
    * ``flight_time_s`` None – progress grows by ``progress_step`` per
      ``advance`` call (one call per processed frame).
    """

    def __init__(self, cfg: GameConfig) -> None:
        self.cfg = cfg

    def spawn(
        self,
        origin: Point,
        target: Point,
        now: float,
        track_id: Optional[int] = None,
    ) -> Projectile:
        dx, dy = self.cfg.aim_offset
        aim = (float(target[0]) + dx, float(target[1]) + dy)
        return Projectile(
            origin=(float(origin[0]), float(origin[1])),
            target=aim,
            spawned_at=now,
            track_id=track_id,
        )

    def advance(self, projectiles: List[Projectile], now: float) -> None:
        for proj in projectiles:
            if proj.is_hit:
                continue  # frozen once resolved
            if self.cfg.flight_time_s is not None:
                elapsed = max(0.0, now - proj.spawned_at)
                step_to = elapsed / self.cfg.flight_time_s
            else:
                step_to = proj.progress + self.cfg.progress_step
            proj.progress = float(np.clip(max(proj.progress, step_to), 0.0, 1.0))
