from __future__ import annotations

import numpy as np

from reaction_game.adapters import StaticDetector
from reaction_game.common import GameState
from reaction_game.config import GameConfig
from reaction_game.engine import GameEngine


def test_single_subject_fires_on_cooldown_schedule(running_engine, make_subject) -> None:
    engine = running_engine
    fired_at = []
    for t in (0.0, 0.5, 1.0, 2.5):
        before = engine.shots_fired
        engine.update([make_subject(100, 100)], now=t)
        if engine.shots_fired > before:
            fired_at.append(t)
    assert fired_at == [0.0, 2.5]

    snap = engine.update([make_subject(100, 100)], now=3.2)
    assert engine.shots_fired == 2
    assert snap.score == 2


def test_two_subjects_fire_independently(running_engine, make_subject) -> None:
    engine = running_engine
    engine.update([make_subject(100, 100)], now=0.0)
    assert engine.shots_fired == 1

    # Second person shows up while the first is cooling down.
    engine.update([make_subject(100, 100), make_subject(400, 100)], now=1.0)
    assert engine.shots_fired == 2

    engine.update([make_subject(100, 100), make_subject(400, 100)], now=2.1)
    assert engine.shots_fired == 3
    engine.update([make_subject(100, 100), make_subject(400, 100)], now=3.1)
    assert engine.shots_fired == 4
    targets = {p.track_id for p in engine.projectiles}
    assert len(targets) == 2


def test_each_projectile_scores_once(running_engine, make_subject) -> None:
    engine = running_engine
    engine.update([make_subject(100, 100)], now=0.0)
    scores = [engine.update([], now=t).score for t in (0.7, 0.8, 0.9, 1.0)]
    assert scores == [1, 1, 1, 1]


def test_projectile_visible_until_linger_elapsed(running_engine, make_subject) -> None:
    engine = running_engine
    snap = engine.update([make_subject(100, 100)], now=0.0)
    assert len(snap.projectiles) == 1
    snap = engine.update([], now=0.6)  # arrives, hit_time = 0.6
    assert snap.projectiles[0].hit
    assert len(engine.update([], now=1.5).projectiles) == 1
    assert engine.update([], now=1.7).projectiles == ()


def test_projectile_flies_from_bottom_centre(running_engine, make_subject) -> None:
    snap = running_engine.update([make_subject(100, 200)], now=0.0)
    proj = snap.projectiles[0]
    assert proj.position == (320.0, 480.0)
    assert proj.target == (100.0, 120.0)


def test_no_shots_outside_running(clock, make_subject) -> None:
    engine = GameEngine(GameConfig(), clock=clock)
    snap = engine.update([make_subject(100, 100)], now=0.0)
    assert snap.state is GameState.IDLE
    assert len(snap.tracks) == 1  # still tracked for display
    assert snap.projectiles == ()

    engine.start()
    snap = engine.update([make_subject(100, 100)], now=1.0)
    assert snap.state is GameState.COUNTDOWN
    assert snap.countdown_left == 3
    assert engine.shots_fired == 0


def test_session_end_clears_in_flight_projectiles(running_engine, make_subject) -> None:
    engine = running_engine
    engine.update([make_subject(100, 100)], now=0.0)
    assert engine.projectiles
    for _ in range(engine.cfg.session_s):
        engine.tick()
    assert engine.state is GameState.ENDED
    assert engine.projectiles == []

    snap = engine.update([make_subject(100, 100)], now=5.0)
    assert snap.score == 0
    assert snap.projectiles == ()
    assert snap.remaining_s == 0


def test_restart_returns_to_idle_with_clean_slate(running_engine, make_subject) -> None:
    engine = running_engine
    engine.update([make_subject(100, 100)], now=0.0)
    engine.update([], now=1.0)
    assert engine.score.value == 1
    for _ in range(engine.cfg.session_s):
        engine.tick()
    assert engine.snapshot(now=1.0).score == 1

    assert engine.restart()
    snap = engine.snapshot(now=1.0)
    assert snap.state is GameState.IDLE
    assert snap.score == 0
    assert snap.remaining_s == engine.cfg.session_s
    assert snap.tracks == ()
    assert not engine.restart()


def test_hit_message_is_transient(running_engine, make_subject) -> None:
    engine = running_engine
    engine.update([make_subject(100, 100)], now=0.0)
    assert engine.update([], now=0.6).message == "Hit!"
    assert engine.snapshot(now=1.3).message == "Hit!"
    assert engine.snapshot(now=1.5).message is None


def test_process_frame_uses_detector_and_frame_size(running_engine, make_subject) -> None:
    frame = np.zeros((360, 480, 3), dtype=np.uint8)
    source = StaticDetector([[make_subject(100, 100)]])
    snap = running_engine.process_frame(frame, source)
    assert source.calls == 1
    assert snap.frame_size == (480, 360)
    assert snap.projectiles[0].position == (240.0, 360.0)


def test_detector_failure_is_an_empty_frame(running_engine) -> None:
    class Broken:
        def estimate(self, frame):
            raise RuntimeError("model crashed")

    snap = running_engine.process_frame(None, Broken())
    assert snap is not None
    assert snap.tracks == ()
    assert snap.state is GameState.RUNNING


def test_garbage_detections_are_ignored(running_engine) -> None:
    class Garbage:
        def estimate(self, frame):
            return 42

    snap = running_engine.process_frame(None, Garbage())
    assert snap.tracks == ()


def test_overlapping_frame_update_is_suppressed(running_engine, make_subject) -> None:
    engine = running_engine
    nested = []

    class Reentrant:
        def estimate(self, frame):
            nested.append(engine.process_frame(frame, StaticDetector([[make_subject(9, 9)]])))
            return [make_subject(100, 100)]

    snap = engine.process_frame(None, Reentrant())
    assert nested == [None]
    assert engine.skipped_frames == 1
    assert len(snap.tracks) == 1
    assert snap.tracks[0].position == (100.0, 100.0)


def test_apply_config_changes_cooldown(running_engine, make_subject) -> None:
    engine = running_engine
    engine.update([make_subject(100, 100)], now=0.0)
    engine.apply_config(GameConfig(cooldown_s=0.5))
    engine.update([make_subject(100, 100)], now=0.6)
    assert engine.shots_fired == 2
