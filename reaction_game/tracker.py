"""Greedy nearest-neighbour tracker giving each detected person a stable ID."""
from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Iterable, List, Optional

import numpy as np

from reaction_game.common import DetectedSubject, Point, TrackView
from reaction_game.config import GameConfig


@dataclass
class Track:
    track_id: int
    position: Point
    last_update: float
    last_fire: Optional[float] = None

    def view(self) -> TrackView:
        return TrackView(self.track_id, self.position, self.last_update, self.last_fire)


def anchor_point(subject: DetectedSubject, min_confidence: float) -> Optional[Point]:
    """
    Mean x/y of the landmarks whose confidence is strictly above
    ``min_confidence``.  Returns None when no landmark qualifies or the
    subject is malformed.
    """
    landmarks = getattr(subject, "landmarks", None)
    if landmarks is None:
        return None
    try:
        # no truth test: ndarrays refuse bool()
        landmarks = list(landmarks)
    except TypeError:
        return None
    if len(landmarks) == 0:
        return None
    coords = []
    for lm in landmarks:
        try:
            conf = float(lm.confidence)
            x, y = float(lm.x), float(lm.y)
        except (AttributeError, TypeError, ValueError):
            continue
        if conf > min_confidence and math.isfinite(x) and math.isfinite(y):
            coords.append((x, y))
    if not coords:
        return None
    cx, cy = np.mean(np.asarray(coords, dtype=float), axis=0)
    return (float(cx), float(cy))


class TargetTracker:
    def __init__(self, cfg: GameConfig) -> None:
        self.cfg = cfg
        self._tracks: List[Track] = []
        self._next_id = 0

    # ------------------------------------------------------------------ #
    #   P U B L I C   A P I
    # ------------------------------------------------------------------ #
    @property
    def tracks(self) -> List[Track]:
        return list(self._tracks)

    def clear(self) -> None:
        self._tracks.clear()

    def update(self, subjects: Iterable[DetectedSubject] | None, now: float) -> List[Track]:
        self._prune(now)

        for subject in subjects or ():
            anchor = anchor_point(subject, self.cfg.min_landmark_confidence)
            if anchor is None:
                continue
            track = self._nearest(anchor)
            if track is None:
                self._tracks.append(Track(self._new_id(), anchor, now))
            else:
                # last_fire is kept, so the cooldown follows the person
                track.position = anchor
                track.last_update = now

        return list(self._tracks)

    # ------------------------------------------------------------------ #
    #   I N T E R N A L
    # ------------------------------------------------------------------ #
    def _new_id(self) -> int:
        self._next_id += 1
        return self._next_id

    def _nearest(self, anchor: Point) -> Optional[Track]:
        best: Optional[Track] = None
        best_dist = self.cfg.match_radius
        for track in self._tracks:
            dist = math.hypot(track.position[0] - anchor[0], track.position[1] - anchor[1])
            if dist < best_dist:
                best, best_dist = track, dist
        return best

    def _prune(self, now: float) -> None:
        stale = self.cfg.stale_after_s
        self._tracks = [t for t in self._tracks if now - t.last_update <= stale]
