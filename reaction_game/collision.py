"""Hit detection and post-hit cleanup for in-flight projectiles."""
from typing import List

from reaction_game.projectiles import Projectile


class CollisionResolver:
    def __init__(self, linger_s: float = 1.0) -> None:
        self.linger_s = linger_s

    def resolve(self, projectiles: List[Projectile], now: float) -> int:
        """
        Mark every projectile that has arrived but is not yet hit.
        Returns how many were newly marked in this call.
        """
        hits = 0
        for proj in projectiles:
            if proj.progress >= 1.0 and proj.hit_time is None:
                proj.hit_time = now
                hits += 1
        return hits

    def expired(self, proj: Projectile, now: float) -> bool:
        if proj.hit_time is None or proj.progress < 1.0:
            return False
        return now - proj.hit_time > self.linger_s

    def sweep(self, projectiles: List[Projectile], now: float) -> int:
        """Drop lingered hits in place; returns how many were dropped."""
        keep = [p for p in projectiles if not self.expired(p, now)]
        dropped = len(projectiles) - len(keep)
        projectiles[:] = keep
        return dropped
