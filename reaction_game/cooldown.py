"""Per-track fire-rate gate."""
from reaction_game.tracker import Track


class CooldownGate:
    @staticmethod
    def can_fire(track: Track, now: float, cooldown_s: float) -> bool:
        if track.last_fire is None:
            return True
        # A backwards clock gives a negative elapsed time: not eligible.
        return now - track.last_fire > cooldown_s

    @staticmethod
    def mark_fired(track: Track, now: float) -> None:
        track.last_fire = now
