"""Reaction game core – re-export high-level API."""
from .engine import GameEngine                    # noqa: F401
from .clock import ManualClock, MonotonicClock    # noqa: F401
from .common import (                             # noqa: F401
    DetectedSubject, GameSnapshot, GameState, Landmark,
)
from .config import (                             # noqa: F401
    CameraConfig, ConfigError, DetectorConfig, GameConfig,
)
