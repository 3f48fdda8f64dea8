"""cv2.VideoCapture wrapper with reopen-on-failure and selfie mirroring."""
from __future__ import annotations

import time
from typing import Optional, Tuple

import cv2
import numpy as np

from reaction_game.config import CameraConfig


class Camera:
    def __init__(self, config: CameraConfig) -> None:
        self.config = config
        self.cap: Optional[cv2.VideoCapture] = None
        self.reopens = 0

        # Filled in by open()
        self.actual_width: int = 0
        self.actual_height: int = 0
        self.actual_fps: float = 0.0

    # ------------------------------------------------------------------ #
    #   P U B L I C   A P I
    # ------------------------------------------------------------------ #
    def open(self) -> bool:
        backend = cv2.CAP_V4L2 if self.config.use_v4l2 else cv2.CAP_ANY
        self.cap = cv2.VideoCapture(self.config.device_index, backend)
        if not self.cap or not self.cap.isOpened():
            print(f"[Camera] Could not open device {self.config.device_index}")
            self.cap = None
            return False

        self.cap.set(cv2.CAP_PROP_FRAME_WIDTH, self.config.width)
        self.cap.set(cv2.CAP_PROP_FRAME_HEIGHT, self.config.height)
        if self.config.fps_request > 0:
            self.cap.set(cv2.CAP_PROP_FPS, self.config.fps_request)

        self.actual_width = int(self.cap.get(cv2.CAP_PROP_FRAME_WIDTH))
        self.actual_height = int(self.cap.get(cv2.CAP_PROP_FRAME_HEIGHT))
        self.actual_fps = self.cap.get(cv2.CAP_PROP_FPS)
        print(
            f"[Camera] {self.actual_width}x{self.actual_height}"
            f"@{self.actual_fps:.1f} FPS (mirror={self.config.mirror})"
        )
        if self.actual_width == 0 or self.actual_height == 0:
            print("[Camera] Error: camera returned zero resolution")
            self.release()
            return False
        return True

    def read(self) -> Tuple[float, Optional[np.ndarray]]:
        """(monotonic timestamp, BGR frame or None)."""
        ts = time.monotonic()
        if not self.is_opened():
            self._try_reopen()
            return ts, None
        ret, frame = self.cap.read()
        if not ret or frame is None:
            return ts, None
        return ts, self._to_bgr(frame)

    def is_opened(self) -> bool:
        return bool(self.cap and self.cap.isOpened())

    def release(self) -> None:
        if self.cap:
            print("[Camera] Releasing capture device")
            self.cap.release()
            self.cap = None

    @property
    def frame_size(self) -> Tuple[int, int]:
        return (self.actual_width, self.actual_height)

    # ------------------------------------------------------------------ #
    #   I N T E R N A L
    # ------------------------------------------------------------------ #
    def _try_reopen(self) -> None:
        if self.reopens >= self.config.max_reopens:
            return
        self.reopens += 1
        print(f"[Camera] Reopening ({self.reopens}/{self.config.max_reopens})")
        if self.open():
            self.reopens = 0

    def _to_bgr(self, frame: np.ndarray) -> np.ndarray:
        if frame.ndim == 2 or (frame.ndim == 3 and frame.shape[2] == 1):
            frame = cv2.cvtColor(frame, cv2.COLOR_GRAY2BGR)
        elif frame.ndim == 3 and frame.shape[2] == 4:
            frame = cv2.cvtColor(frame, cv2.COLOR_BGRA2BGR)
        if self.config.mirror:
            frame = cv2.flip(frame, 1)
        return frame
