"""
Headless numpy rasterizer: draws every visible entity as a filled box.
Used for the rgb_array render mode and for frame capture in tests.
"""

from __future__ import annotations

import math
from typing import Optional, Tuple

import numpy as np

from .lives import is_visible

BACKGROUND = (0, 0, 0)
ASTEROID_COLOR = (121, 85, 72)
HEART_COLOR = (255, 64, 129)
PARTICLE_COLOR = (255, 152, 0)


def fill_box(
    frame: np.ndarray,
    x: float,
    y: float,
    w: float,
    h: float,
    color: Tuple[int, int, int],
    alpha: float = 1.0,
) -> None:
    """Fill the part of the box that lies inside the frame"""
    height, width = frame.shape[:2]
    x0, x1 = max(0, math.floor(x)), min(width, math.ceil(x + w))
    y0, y1 = max(0, math.floor(y)), min(height, math.ceil(y + h))
    if x0 >= x1 or y0 >= y1 or alpha <= 0.0:
        return
    if alpha >= 1.0:
        frame[y0:y1, x0:x1] = color
        return
    region = frame[y0:y1, x0:x1].astype(np.float32)
    blended = region * (1.0 - alpha) + np.asarray(color, dtype=np.float32) * alpha
    frame[y0:y1, x0:x1] = blended.astype(np.uint8)


def rasterize(session, now: float) -> np.ndarray:
    """Render the session into an (height, width, 3) uint8 array"""
    c = session.config
    frame = np.zeros((c.height, c.width, 3), dtype=np.uint8)
    frame[:] = BACKGROUND

    for h in session.hearts:
        fill_box(frame, h.x, h.y, h.width, h.height, HEART_COLOR)
    for a in session.asteroids:
        fill_box(frame, a.x, a.y, a.width, a.height, ASTEROID_COLOR)
    for e in session.explosions:
        for p in e.particles:
            fill_box(frame, p.x - p.radius, p.y - p.radius, 2 * p.radius, 2 * p.radius,
                     PARTICLE_COLOR, p.alpha)

    game_time = session.game_time(now)
    for ship in session.active_ships:
        for b in ship.bullets:
            fill_box(frame, b.x, b.y, b.width, b.height, b.color)
        if is_visible(ship, game_time, now, c):
            fill_box(frame, ship.x, ship.y, ship.width, ship.height, ship.color)

    return frame


class RasterRenderSink:
    """Render sink that keeps the latest rasterized frame"""

    def __init__(self):
        self.frame: Optional[np.ndarray] = None
        self.frames_drawn = 0

    def present(self, session, now: float) -> None:
        self.frame = rasterize(session, now)
        self.frames_drawn += 1
