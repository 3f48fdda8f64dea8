# main.py
"""
Entry-point for the reaction game.

Live-tuning
-----------
While the game is running you can edit ``runtime_params.json`` (any
``GameConfig`` field, e.g. ``{"cooldown_s": 1.5, "session_s": 45}``) and the
new values take effect on the very next frame.  See
``reaction_game/live_tuning.py`` for details.
"""
from __future__ import annotations

import argparse

from reaction_game.config import CameraConfig, DetectorConfig, GameConfig
from reaction_game.processor import GameProcessor


def _parse_args() -> argparse.Namespace:
    ap = argparse.ArgumentParser(description="Shoot the people the camera sees.")
    ap.add_argument("--detector", choices=("pose", "face"), default="pose")
    ap.add_argument("--device", type=int, default=0, help="camera index")
    ap.add_argument("--width", type=int, default=640)
    ap.add_argument("--height", type=int, default=480)
    ap.add_argument("--no-mirror", action="store_true", help="do not flip the image")
    ap.add_argument("--session", type=int, default=30, help="session length (s)")
    ap.add_argument("--cooldown", type=float, default=2.0, help="per-target cooldown (s)")
    ap.add_argument("--params", default="runtime_params.json", help="live-tuning JSON file")
    return ap.parse_args()


def main() -> None:
    args = _parse_args()

    # -------------------- Config blobs --------------------
    cam_cfg = CameraConfig(
        device_index=args.device,
        width=args.width,
        height=args.height,
        mirror=not args.no_mirror,
    )
    det_cfg = DetectorConfig(kind=args.detector)
    game_cfg = GameConfig(session_s=args.session, cooldown_s=args.cooldown)

    # ------------------------ Banner ----------------------
    print("Initializing Reaction Game…")
    print(
        f"Camera: idx={cam_cfg.device_index}, "
        f"{cam_cfg.width}x{cam_cfg.height}, mirror={cam_cfg.mirror}"
    )
    print(f"Detector: {det_cfg.kind}, conf={det_cfg.min_detection_confidence}")
    print(
        f"Game: session={game_cfg.session_s}s, cooldown={game_cfg.cooldown_s}s, "
        f"radius={game_cfg.match_radius}px, flight={game_cfg.flight_time_s}s"
    )

    # ------------------------ Run -------------------------
    GameProcessor(cam_cfg, det_cfg, game_cfg, params_path=args.params).run()
    print("Main program finished.")


if __name__ == "__main__":
    main()
