from __future__ import annotations

from reaction_game.cooldown import CooldownGate
from reaction_game.tracker import Track


def test_never_fired_track_may_fire() -> None:
    assert CooldownGate.can_fire(Track(1, (0, 0), 0.0), now=0.0, cooldown_s=2.0)


def test_two_second_cooldown() -> None:
    track = Track(1, (0, 0), 0.0)
    assert CooldownGate.can_fire(track, 0.0, 2.0)
    CooldownGate.mark_fired(track, 0.0)

    assert not CooldownGate.can_fire(track, 1.0, 2.0)
    assert not CooldownGate.can_fire(track, 2.0, 2.0)
    assert CooldownGate.can_fire(track, 2.001, 2.0)


def test_cooldown_is_per_track() -> None:
    a = Track(1, (0, 0), 0.0, last_fire=0.0)
    b = Track(2, (400, 0), 0.0)
    assert not CooldownGate.can_fire(a, 0.5, 2.0)
    assert CooldownGate.can_fire(b, 0.5, 2.0)


def test_clock_jumping_back_is_not_eligible() -> None:
    track = Track(1, (0, 0), 0.0, last_fire=10.0)
    assert not CooldownGate.can_fire(track, 5.0, 0.0)
