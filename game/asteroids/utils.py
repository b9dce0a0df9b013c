"""
Utility functions for game mechanics
"""

from __future__ import annotations

from typing import Optional

import numpy as np


def clamp(x: float, lo: float, hi: float) -> float:
    """Clamp value between low and high bounds"""
    return lo if x < lo else hi if x > hi else x


def aabb_overlap(a, b) -> bool:
    """Check if two axis-aligned boxes overlap (touching edges do not count)

    Works on anything with x, y, width and height attributes.
    """
    return (
        a.x < b.x + b.width
        and a.x + a.width > b.x
        and a.y < b.y + b.height
        and a.y + a.height > b.y
    )


def center_of(entity) -> tuple:
    """Center point of a box-shaped entity"""
    return entity.x + entity.width / 2, entity.y + entity.height / 2


def make_rng(seed: Optional[int] = None) -> np.random.Generator:
    """Create the random source used by the spawner"""
    return np.random.default_rng(seed)
