"""Typed configuration blobs for the whole game."""
from dataclasses import dataclass
from typing import Optional, Tuple


class ConfigError(ValueError):
    """Raised when a configuration value is out of range."""


# ----------------------- Game -----------------------
@dataclass(frozen=True)
class GameConfig:
    # Tracking
    match_radius: float = 100.0            # px, same subject between frames
    stale_after_s: float = 3.0             # drop a track not seen for this long
    min_landmark_confidence: float = 0.5   # landmarks at or below are ignored

    # Firing
    cooldown_s: float = 2.0                # per track
    aim_offset: Tuple[float, float] = (0.0, -80.0)  # aim above the anchor

    # Projectile motion
    flight_time_s: Optional[float] = 0.6   # None -> fixed step per frame
    progress_step: float = 0.05
    linger_s: float = 1.0                  # hit stays visible this long

    # Session
    countdown_ticks: int = 3
    session_s: int = 30
    tick_interval_s: float = 1.0

    # HUD
    hit_message: str = "Hit!"
    message_s: float = 0.8

    def __post_init__(self) -> None:
        if self.match_radius <= 0:
            raise ConfigError(f"match_radius must be > 0, got {self.match_radius}")
        if self.stale_after_s <= 0:
            raise ConfigError(f"stale_after_s must be > 0, got {self.stale_after_s}")
        if not 0.0 <= self.min_landmark_confidence < 1.0:
            raise ConfigError(
                f"min_landmark_confidence must be in [0, 1), got {self.min_landmark_confidence}"
            )
        if self.cooldown_s < 0:
            raise ConfigError(f"cooldown_s must be >= 0, got {self.cooldown_s}")
        if self.flight_time_s is not None and self.flight_time_s <= 0:
            raise ConfigError(f"flight_time_s must be > 0, got {self.flight_time_s}")
        if self.progress_step <= 0:
            raise ConfigError(f"progress_step must be > 0, got {self.progress_step}")
        if self.linger_s < 0:
            raise ConfigError(f"linger_s must be >= 0, got {self.linger_s}")
        if self.countdown_ticks < 0:
            raise ConfigError(f"countdown_ticks must be >= 0, got {self.countdown_ticks}")
        if self.session_s <= 0:
            raise ConfigError(f"session_s must be > 0, got {self.session_s}")
        if self.tick_interval_s <= 0:
            raise ConfigError(f"tick_interval_s must be > 0, got {self.tick_interval_s}")
        if len(self.aim_offset) != 2:
            raise ConfigError(f"aim_offset must be (dx, dy), got {self.aim_offset!r}")


# ---------------------- Camera ----------------------
@dataclass
class CameraConfig:
    device_index: int = 0
    width: int = 640
    height: int = 480
    fps_request: int = 30
    use_v4l2: bool = False
    mirror: bool = True          # selfie view, players face the screen
    max_reopens: int = 5


# --------------------- Detector ---------------------
@dataclass
class DetectorConfig:
    kind: str = "pose"           # "pose" or "face"
    model_complexity: int = 0    # pose only
    model_selection: int = 0     # face only
    min_detection_confidence: float = 0.5
    min_tracking_confidence: float = 0.5
