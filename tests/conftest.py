from __future__ import annotations

import sys
from pathlib import Path

import pytest

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from reaction_game.clock import ManualClock  # noqa: E402
from reaction_game.common import DetectedSubject, GameState, Landmark  # noqa: E402
from reaction_game.config import GameConfig  # noqa: E402
from reaction_game.engine import GameEngine  # noqa: E402


@pytest.fixture()
def make_subject():
    """Subject whose confident landmarks average to (x, y)."""

    def _make(x: float, y: float, conf: float = 0.9) -> DetectedSubject:
        return DetectedSubject(
            conf,
            (
                Landmark(x - 10, y - 10, conf, "a"),
                Landmark(x + 10, y + 10, conf, "b"),
            ),
        )

    return _make


@pytest.fixture()
def clock() -> ManualClock:
    return ManualClock(0.0)


@pytest.fixture()
def running_engine(clock: ManualClock) -> GameEngine:
    engine = GameEngine(GameConfig(), clock=clock, frame_size=(640, 480))
    assert engine.start()
    for _ in range(engine.cfg.countdown_ticks):
        engine.tick()
    assert engine.state is GameState.RUNNING
    return engine
