"""
Conversion of raw detector output into ``DetectedSubject`` records.

Kept free of MediaPipe/OpenCV imports: the functions only read attributes
(``x``, ``y``, ``visibility``, ``score`` …) so they work on MediaPipe result
objects as well as on plain stand-ins.
"""
from __future__ import annotations

from typing import Any, Iterable, List, Optional, Tuple

from reaction_game.common import DetectedSubject, Landmark

POSE_LANDMARK_NAMES: Tuple[str, ...] = (
    "nose", "left_eye_inner", "left_eye", "left_eye_outer",
    "right_eye_inner", "right_eye", "right_eye_outer",
    "left_ear", "right_ear", "mouth_left", "mouth_right",
    "left_shoulder", "right_shoulder", "left_elbow", "right_elbow",
    "left_wrist", "right_wrist", "left_pinky", "right_pinky",
    "left_index", "right_index", "left_thumb", "right_thumb",
    "left_hip", "right_hip", "left_knee", "right_knee",
    "left_ankle", "right_ankle", "left_heel", "right_heel",
    "left_foot_index", "right_foot_index",
)

FACE_KEYPOINT_NAMES: Tuple[str, ...] = (
    "right_eye", "left_eye", "nose_tip", "mouth_center",
    "right_ear_tragion", "left_ear_tragion",
)


def _name(names: Tuple[str, ...], idx: int) -> str:
    return names[idx] if idx < len(names) else f"point_{idx}"


def subject_from_pose(
    landmarks: Iterable[Any], img_size: Tuple[int, int]
) -> Optional[DetectedSubject]:
    """
    Normalised pose landmarks (x, y in 0..1 plus ``visibility``) to a subject
    in pixel space.  Subject confidence is the best landmark visibility.
    """
    iw, ih = img_size
    points: List[Landmark] = []
    for idx, lm in enumerate(landmarks or ()):
        try:
            x = float(lm.x) * iw
            y = float(lm.y) * ih
            conf = float(getattr(lm, "visibility", getattr(lm, "score", 0.0)))
        except (AttributeError, TypeError, ValueError):
            continue
        points.append(Landmark(x, y, conf, _name(POSE_LANDMARK_NAMES, idx)))
    if not points:
        return None
    return DetectedSubject(max(p.confidence for p in points), tuple(points))


def subject_from_keypoints(
    keypoints: Iterable[Any], img_size: Optional[Tuple[int, int]] = None
) -> Optional[DetectedSubject]:
    """
    Keypoints already in pixel space with a per-point ``score`` (MoveNet
    style).  ``img_size`` is only needed when the points are normalised.

    No bundled detector emits this shape; it is for recorded keypoint
    fixtures fed through ``StaticDetector`` and for external detectors.
    """
    points: List[Landmark] = []
    for idx, kp in enumerate(keypoints or ()):
        try:
            x, y = float(kp.x), float(kp.y)
            conf = float(kp.score)
        except (AttributeError, TypeError, ValueError):
            continue
        if img_size is not None:
            x, y = x * img_size[0], y * img_size[1]
        name = getattr(kp, "name", None) or f"point_{idx}"
        points.append(Landmark(x, y, conf, str(name)))
    if not points:
        return None
    return DetectedSubject(max(p.confidence for p in points), tuple(points))


def subject_from_face(
    score: float,
    bbox_rel: Tuple[float, float, float, float],
    keypoints_rel: Iterable[Tuple[float, float]],
    img_size: Tuple[int, int],
) -> Optional[DetectedSubject]:
    """
    A face detection (relative bbox ``(xmin, ymin, w, h)`` and relative
    keypoints) to a subject.  Every keypoint inherits the detection score;
    without keypoints the bbox centre stands in.
    """
    iw, ih = img_size
    conf = float(score)
    points = [
        Landmark(float(kx) * iw, float(ky) * ih, conf, _name(FACE_KEYPOINT_NAMES, i))
        for i, (kx, ky) in enumerate(keypoints_rel or ())
    ]
    if not points:
        x, y, w, h = bbox_rel
        if w <= 0 or h <= 0:
            return None
        points = [Landmark((x + w / 2.0) * iw, (y + h / 2.0) * ih, conf, "bbox_center")]
    return DetectedSubject(conf, tuple(points))


# ---------------------------------------------------------------------------
#   Detector stand-ins (no model behind them)
# ---------------------------------------------------------------------------
class NullDetector:
    """Never sees anybody."""

    def estimate(self, frame: Any) -> List[DetectedSubject]:
        return []

    def close(self) -> None:
        pass


class StaticDetector:
    """Replays a fixed list of per-call results; empty once exhausted."""

    def __init__(self, per_call: Iterable[Iterable[DetectedSubject]]) -> None:
        self._queue = [list(subjects) for subjects in per_call]
        self.calls = 0

    def estimate(self, frame: Any) -> List[DetectedSubject]:
        self.calls += 1
        return self._queue.pop(0) if self._queue else []

    def close(self) -> None:
        self._queue.clear()
