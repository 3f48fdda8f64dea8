"""Running score and the session countdown timer."""
from __future__ import annotations


class ScoreKeeper:
    def __init__(self) -> None:
        self._value = 0

    @property
    def value(self) -> int:
        return self._value

    def increment(self, by: int = 1) -> None:
        if by > 0:
            self._value += by

    def reset(self) -> None:
        self._value = 0


class SessionTimer:
    """
    Whole-second countdown.  ``tick`` is called once per fixed time unit by
    the owner and returns True exactly once, on the tick that reaches zero.
    """

    def __init__(self, duration_s: int) -> None:
        self.duration_s = int(duration_s)
        self._remaining = self.duration_s
        self._running = False
        self._expired = False

    @property
    def remaining(self) -> int:
        return self._remaining

    @property
    def running(self) -> bool:
        return self._running

    def start(self, duration_s: int | None = None) -> None:
        if duration_s is not None:
            self.duration_s = int(duration_s)
        self._remaining = self.duration_s
        self._running = True
        self._expired = False

    def stop(self) -> None:
        self._running = False

    def reset(self) -> None:
        self._running = False
        self._expired = False
        self._remaining = self.duration_s

    def tick(self) -> bool:
        if not self._running or self._expired:
            return False
        self._remaining = max(0, self._remaining - 1)
        if self._remaining == 0:
            self._expired = True
            self._running = False
            return True
        return False
