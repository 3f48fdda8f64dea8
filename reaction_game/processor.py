"""Glue logic that wires camera → detector → game engine → screen."""
from __future__ import annotations

import time
import traceback
from typing import Optional

import cv2
import numpy as np

from reaction_game.camera import Camera
from reaction_game.config import CameraConfig, DetectorConfig, GameConfig
from reaction_game.detector import build_detector
from reaction_game.engine import GameEngine
from reaction_game.live_tuning import RuntimeParamWatcher
from reaction_game.render import draw_snapshot
from reaction_game.ticker import SessionTicker

WINDOW_NAME = "Reaction Game"


class GameProcessor:
    """The main high-level orchestrator."""

    def __init__(
        self,
        camera_cfg: CameraConfig,
        detector_cfg: DetectorConfig,
        game_cfg: GameConfig,
        params_path: Optional[str] = "runtime_params.json",
    ):
        self.camera_cfg = camera_cfg
        self.detector_cfg = detector_cfg

        # Build sub-systems
        self.watcher = RuntimeParamWatcher(params_path) if params_path else None
        self.base_cfg = game_cfg
        cfg = self.watcher.tuned(game_cfg) if self.watcher else game_cfg
        self.engine = GameEngine(cfg, frame_size=(camera_cfg.width, camera_cfg.height))
        self.ticker = SessionTicker(self.engine, cfg.tick_interval_s)
        self.camera = Camera(camera_cfg)
        self.detector = build_detector(detector_cfg)

        # Runtime metrics
        self.frame_count = 0
        self.fps_timer_start = time.monotonic()
        self.disp_fps = 0.0
        self.total_frames = 0
        self.last_valid_frame: Optional[np.ndarray] = None

    # ---------------------------------------------------------------------
    #                         Setup / teardown
    # ---------------------------------------------------------------------
    def setup(self) -> bool:
        if not self.camera.open():
            return False
        self.engine.frame_size = self.camera.frame_size
        cv2.namedWindow(WINDOW_NAME, cv2.WINDOW_NORMAL)
        self.ticker.start()
        print("[Processor] Setup complete – SPACE start, R restart, Q quit.")
        return True

    def cleanup(self) -> None:
        print("[Processor] Cleaning up...")
        self.ticker.stop()
        self.camera.release()
        self.detector.close()
        cv2.destroyAllWindows()
        print(
            f"[Processor] Exited. Total frames: {self.total_frames}, "
            f"shots: {self.engine.shots_fired}, final score: {self.engine.score.value}"
        )

    # ---------------------------------------------------------------------
    #                          Main per-frame loop
    # ---------------------------------------------------------------------
    def _maybe_retune(self) -> None:
        if self.watcher and self.watcher.maybe_reload():
            self.engine.apply_config(self.watcher.tuned(self.base_cfg))
            self.ticker.interval_s = self.engine.cfg.tick_interval_s

    def _update_fps(self) -> None:
        self.frame_count += 1
        now = time.monotonic()
        if now - self.fps_timer_start >= 1.0:
            self.disp_fps = self.frame_count / (now - self.fps_timer_start)
            self.frame_count = 0
            self.fps_timer_start = now

    def _process_frame(self) -> None:
        self._maybe_retune()

        _, frame = self.camera.read()
        if frame is None:
            if self.last_valid_frame is not None:
                disp = self.last_valid_frame.copy()
                cv2.putText(disp, "Cam Err", (50, 50), cv2.FONT_HERSHEY_SIMPLEX, 0.8, (0, 0, 255), 2)
                cv2.imshow(WINDOW_NAME, disp)
            time.sleep(0.05)
            return

        self.last_valid_frame = frame
        self.total_frames += 1

        snap = self.engine.process_frame(frame, self.detector)
        if snap is None:
            snap = self.engine.snapshot()
        self._update_fps()

        cv2.imshow(WINDOW_NAME, draw_snapshot(frame.copy(), snap, self.disp_fps))

    def _handle_key(self, key: int) -> bool:
        """Returns False if the caller should exit the main loop."""
        if key == ord("q"):
            return False
        if key == ord(" "):
            self.engine.start()
        elif key == ord("r"):
            self.engine.restart()
        return True

    # ---------------------------------------------------------------------
    #                             Public run()
    # ---------------------------------------------------------------------
    def run(self) -> None:
        if not self.setup():
            self.cleanup()
            return
        try:
            while True:
                self._process_frame()
                if not self._handle_key(cv2.waitKey(1) & 0xFF):
                    break
        except KeyboardInterrupt:
            print("\n[Processor] Stopped by user.")
        except Exception as exc:
            print(f"[Processor] Main loop error: {exc}")
            traceback.print_exc()
        finally:
            self.cleanup()
