from __future__ import annotations

import pytest

from reaction_game.collision import CollisionResolver
from reaction_game.config import GameConfig
from reaction_game.projectiles import ProjectileSimulator, launch_origin


def test_launch_origin_is_bottom_centre() -> None:
    assert launch_origin((640, 480)) == (320.0, 480.0)


def test_spawn_aims_above_the_anchor() -> None:
    sim = ProjectileSimulator(GameConfig(aim_offset=(0.0, -80.0)))
    proj = sim.spawn((320, 480), (100, 200), now=1.0, track_id=7)
    assert proj.target == (100.0, 120.0)
    assert proj.progress == 0.0
    assert proj.hit_time is None
    assert proj.track_id == 7
    assert proj.position == (320.0, 480.0)


def test_time_based_flight_interpolates_linearly() -> None:
    sim = ProjectileSimulator(GameConfig(flight_time_s=1.0, aim_offset=(0.0, 0.0)))
    proj = sim.spawn((0, 100), (100, 0), now=0.0)
    sim.advance([proj], now=0.25)
    assert proj.progress == pytest.approx(0.25)
    assert proj.position == pytest.approx((25.0, 75.0))

    sim.advance([proj], now=5.0)
    assert proj.progress == 1.0
    assert proj.position == pytest.approx((100.0, 0.0))


def test_flight_time_does_not_depend_on_frame_count() -> None:
    sim = ProjectileSimulator(GameConfig(flight_time_s=0.6))
    sparse = sim.spawn((0, 0), (10, 10), now=0.0)
    dense = sim.spawn((0, 0), (10, 10), now=0.0)
    sim.advance([sparse], now=0.3)
    for i in range(1, 31):
        sim.advance([dense], now=i * 0.01)
    assert sparse.progress == pytest.approx(dense.progress)


def test_step_mode_adds_fixed_increment_per_call() -> None:
    sim = ProjectileSimulator(GameConfig(flight_time_s=None, progress_step=0.05))
    proj = sim.spawn((0, 0), (10, 10), now=0.0)
    sim.advance([proj], now=0.0)
    assert proj.progress == pytest.approx(0.05)
    for _ in range(30):
        sim.advance([proj], now=0.0)
    assert proj.progress == 1.0


def test_progress_never_goes_backwards() -> None:
    sim = ProjectileSimulator(GameConfig(flight_time_s=1.0))
    proj = sim.spawn((0, 0), (10, 10), now=0.0)
    sim.advance([proj], now=0.5)
    sim.advance([proj], now=0.2)
    assert proj.progress == pytest.approx(0.5)
    sim.advance([proj], now=-3.0)
    assert proj.progress == pytest.approx(0.5)


def test_target_is_fixed_at_spawn() -> None:
    sim = ProjectileSimulator(GameConfig(aim_offset=(0.0, 0.0)))
    proj = sim.spawn((0, 0), (50, 50), now=0.0)
    sim.advance([proj], now=0.3)
    assert proj.target == (50.0, 50.0)


def test_hit_projectile_is_frozen() -> None:
    sim = ProjectileSimulator(GameConfig(flight_time_s=None, progress_step=0.5))
    proj = sim.spawn((0, 0), (10, 10), now=0.0)
    sim.advance([proj], now=0.0)
    sim.advance([proj], now=0.0)
    CollisionResolver().resolve([proj], now=0.0)
    sim.advance([proj], now=0.0)
    assert proj.progress == 1.0
    assert proj.is_hit


def test_hit_is_edge_triggered() -> None:
    sim = ProjectileSimulator(GameConfig(flight_time_s=0.5))
    resolver = CollisionResolver(linger_s=1.0)
    proj = sim.spawn((0, 0), (10, 10), now=0.0)
    projectiles = [proj]

    sim.advance(projectiles, now=0.4)
    assert resolver.resolve(projectiles, now=0.4) == 0

    sim.advance(projectiles, now=0.5)
    assert resolver.resolve(projectiles, now=0.5) == 1
    assert proj.hit_time == 0.5
    for t in (0.6, 0.7, 0.8):
        sim.advance(projectiles, now=t)
        assert resolver.resolve(projectiles, now=t) == 0
    assert proj.hit_time == 0.5


def test_projectile_lingers_then_is_swept() -> None:
    sim = ProjectileSimulator(GameConfig(flight_time_s=0.5))
    resolver = CollisionResolver(linger_s=1.0)
    projectiles = [sim.spawn((0, 0), (10, 10), now=0.0)]
    sim.advance(projectiles, now=0.5)
    resolver.resolve(projectiles, now=0.5)

    assert resolver.sweep(projectiles, now=1.5) == 0
    assert len(projectiles) == 1
    assert resolver.sweep(projectiles, now=1.51) == 1
    assert projectiles == []


def test_unresolved_projectile_is_never_swept() -> None:
    sim = ProjectileSimulator(GameConfig(flight_time_s=10.0))
    resolver = CollisionResolver(linger_s=0.0)
    projectiles = [sim.spawn((0, 0), (10, 10), now=0.0)]
    sim.advance(projectiles, now=5.0)
    assert resolver.sweep(projectiles, now=100.0) == 0
    assert len(projectiles) == 1


def test_clock_jump_back_does_not_expire_hit() -> None:
    resolver = CollisionResolver(linger_s=1.0)
    sim = ProjectileSimulator(GameConfig(flight_time_s=0.1))
    projectiles = [sim.spawn((0, 0), (10, 10), now=0.0)]
    sim.advance(projectiles, now=1.0)
    resolver.resolve(projectiles, now=10.0)
    assert resolver.sweep(projectiles, now=2.0) == 0
