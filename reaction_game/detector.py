"""MediaPipe pose / face detection adapters producing ``DetectedSubject``s."""
from typing import List

import cv2
import mediapipe as mp
import numpy as np
from mediapipe.framework.formats import location_data_pb2

from reaction_game.adapters import NullDetector, subject_from_face, subject_from_pose
from reaction_game.common import DetectedSubject
from reaction_game.config import DetectorConfig


def _to_rgb(frame_bgr: np.ndarray) -> np.ndarray:
    rgb = cv2.cvtColor(frame_bgr, cv2.COLOR_BGR2RGB)
    rgb.flags.writeable = False
    return rgb


class MediaPipePoseDetector:
    """Single-person body pose; one subject at most per frame."""

    def __init__(self, config: DetectorConfig):
        self.config = config
        self.detector = mp.solutions.pose.Pose(
            static_image_mode=False,
            model_complexity=config.model_complexity,
            min_detection_confidence=config.min_detection_confidence,
            min_tracking_confidence=config.min_tracking_confidence,
        )

    def estimate(self, frame_bgr: np.ndarray) -> List[DetectedSubject]:
        rgb = _to_rgb(frame_bgr)
        results = self.detector.process(rgb)
        ih, iw = rgb.shape[:2]
        if not results.pose_landmarks:
            return []
        subject = subject_from_pose(results.pose_landmarks.landmark, (iw, ih))
        return [subject] if subject else []

    def close(self) -> None:
        self.detector.close()


class MediaPipeFaceDetector:
    """Short-range face detector; every face becomes one subject."""

    def __init__(self, config: DetectorConfig):
        self.config = config
        self.detector = mp.solutions.face_detection.FaceDetection(
            model_selection=config.model_selection,
            min_detection_confidence=config.min_detection_confidence,
        )

    def estimate(self, frame_bgr: np.ndarray) -> List[DetectedSubject]:
        out: List[DetectedSubject] = []
        rgb = _to_rgb(frame_bgr)
        results = self.detector.process(rgb)
        ih, iw = rgb.shape[:2]

        for det in results.detections or ():
            ld = det.location_data
            if not ld or ld.format != location_data_pb2.LocationData.RELATIVE_BOUNDING_BOX:
                continue
            bb = ld.relative_bounding_box
            subject = subject_from_face(
                float(det.score[0]) if det.score else 0.0,
                (bb.xmin, bb.ymin, bb.width, bb.height),
                [(kp.x, kp.y) for kp in ld.relative_keypoints],
                (iw, ih),
            )
            if subject is not None:
                out.append(subject)

        out.sort(key=lambda s: s.confidence, reverse=True)
        return out

    def close(self) -> None:
        self.detector.close()


def build_detector(config: DetectorConfig):
    if config.kind == "pose":
        return MediaPipePoseDetector(config)
    if config.kind == "face":
        return MediaPipeFaceDetector(config)
    if config.kind == "none":
        return NullDetector()
    raise ValueError(f"Unknown detector kind {config.kind!r} (pose, face or none)")
