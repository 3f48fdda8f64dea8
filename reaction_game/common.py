"""Objects that are shared across multiple modules."""
from dataclasses import dataclass, field
from enum import Enum
from typing import Optional, Protocol, Sequence, Tuple

Point = Tuple[float, float]


class GameState(str, Enum):
    IDLE = "idle"
    COUNTDOWN = "countdown"
    RUNNING = "running"
    ENDED = "ended"


@dataclass(frozen=True)
class Landmark:
    x: float
    y: float
    confidence: float
    name: str = ""


@dataclass(frozen=True)
class DetectedSubject:
    """
    One person found in one frame, as reported by a detector adapter.
    Coordinates are in *pixel* space of the analysed frame.
    """
    confidence: float
    landmarks: Tuple[Landmark, ...] = field(default_factory=tuple)


class DetectionSource(Protocol):
    def estimate(self, frame) -> Sequence[DetectedSubject]:
        raise NotImplementedError


@dataclass(frozen=True)
class TrackView:
    track_id: int
    position: Point
    last_update: float
    last_fire: Optional[float]


@dataclass(frozen=True)
class ProjectileView:
    position: Point
    target: Point
    progress: float
    hit: bool
    track_id: Optional[int]


@dataclass(frozen=True)
class GameSnapshot:
    """
    A single-frame, read-only copy of the game context for the renderer.
    """
    state: GameState
    tracks: Tuple[TrackView, ...]
    projectiles: Tuple[ProjectileView, ...]
    score: int
    remaining_s: int
    countdown_left: int
    message: Optional[str]
    frame_size: Tuple[int, int]
