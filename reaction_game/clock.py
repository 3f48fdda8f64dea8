"""Time sources. Everything with cooldowns or timers reads one of these."""
import time


class MonotonicClock:
    def now(self) -> float:
        return time.monotonic()


class ManualClock:
    """Clock that only moves when told to. Used by fixtures and replays."""

    def __init__(self, start: float = 0.0) -> None:
        self.t = float(start)

    def now(self) -> float:
        return self.t

    def set(self, t: float) -> None:
        # May move backwards; consumers clamp negative elapsed time.
        self.t = float(t)

    def advance(self, dt: float) -> float:
        self.t += float(dt)
        return self.t
