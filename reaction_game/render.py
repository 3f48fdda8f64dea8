"""OpenCV overlay for a ``GameSnapshot``. The game core never draws."""
from __future__ import annotations

from typing import Optional, Tuple

import cv2
import numpy as np

from reaction_game.common import GameSnapshot, GameState

GREEN = (0, 255, 0)
RED = (0, 0, 255)
ORANGE = (0, 165, 255)
YELLOW = (0, 255, 255)
WHITE = (255, 255, 255)

DEBUG_BOX_PX = 100
PROJECTILE_RADIUS_PX = 20
FONT = cv2.FONT_HERSHEY_SIMPLEX


def _centered_text(img: np.ndarray, text: str, y: int, scale: float, color, thickness: int = 3) -> None:
    (tw, _), _ = cv2.getTextSize(text, FONT, scale, thickness)
    x = max(0, (img.shape[1] - tw) // 2)
    cv2.putText(img, text, (x, y), FONT, scale, color, thickness)


def _ipt(p: Tuple[float, float]) -> Tuple[int, int]:
    return int(round(p[0])), int(round(p[1]))


def draw_snapshot(img: np.ndarray, snap: GameSnapshot, fps: Optional[float] = None) -> np.ndarray:
    """Draw tracks, projectiles and HUD onto ``img`` in place and return it."""
    h, w = img.shape[:2]
    half = DEBUG_BOX_PX // 2

    for trk in snap.tracks:
        cx, cy = _ipt(trk.position)
        cv2.rectangle(img, (cx - half, cy - half), (cx + half, cy + half), RED, 3)
        cv2.putText(img, f"ID:{trk.track_id}", (cx - half, cy - half - 8), FONT, 0.5, RED, 1)

    for proj in snap.projectiles:
        color = YELLOW if proj.hit else ORANGE
        cv2.circle(img, _ipt(proj.position), PROJECTILE_RADIUS_PX, color, -1)

    # -------- HUD --------
    cv2.putText(img, f"Score: {snap.score}", (10, 30), FONT, 0.8, GREEN, 2)
    cv2.putText(img, f"Time: {snap.remaining_s}", (w - 140, 30), FONT, 0.8, GREEN, 2)
    if fps is not None:
        cv2.putText(img, f"FPS:{fps:.1f}", (10, h - 10), FONT, 0.5, GREEN, 1)

    if snap.state is GameState.IDLE:
        _centered_text(img, "Press SPACE to start", h // 2, 1.0, WHITE)
    elif snap.state is GameState.COUNTDOWN:
        _centered_text(img, str(snap.countdown_left), h // 2, 3.0, YELLOW, 5)
    elif snap.state is GameState.ENDED:
        overlay = img.copy()
        cv2.rectangle(overlay, (0, 0), (w, h), (0, 0, 0), -1)
        cv2.addWeighted(overlay, 0.6, img, 0.4, 0, dst=img)
        _centered_text(img, f"Final Score: {snap.score}", h // 2 - 20, 1.4, WHITE)
        _centered_text(img, "Press R to restart", h // 2 + 30, 0.8, YELLOW, 2)

    if snap.message:
        _centered_text(img, snap.message, h // 4, 1.6, YELLOW, 4)
    return img
