"""
Frame-counted generation of asteroids, hearts and explosion bursts.
All randomness comes from the injected numpy Generator so runs are reproducible.
"""

from __future__ import annotations

import math
from typing import List, Optional

import numpy as np

from .config import GameConfig
from .entities import Asteroid, Explosion, Heart, Particle, Star

HEART_MAX_ROTATION_SPEED = 0.05  # rad/frame
ASTEROID_MAX_ROTATION_SPEED = 0.03


def maybe_spawn_asteroid(
    frame_count: int,
    last_spawn_frame: int,
    config: GameConfig,
    rng: np.random.Generator,
) -> Optional[Asteroid]:
    """Spawn an asteroid at the right edge once more than
    `asteroid_spawn_rate` frames have passed since the last one."""
    if frame_count - last_spawn_frame <= config.asteroid_spawn_rate:
        return None

    size = float(rng.uniform(config.asteroid_min_size, config.asteroid_max_size))
    y = float(rng.uniform(0.0, config.height - size))
    speed = config.asteroid_speed * float(rng.uniform(0.5, 1.0))
    rotation = float(rng.uniform(0.0, 2 * math.pi))
    rotation_speed = float(rng.uniform(-ASTEROID_MAX_ROTATION_SPEED, ASTEROID_MAX_ROTATION_SPEED))

    return Asteroid(
        x=float(config.width),
        y=y,
        size=size,
        speed=speed,
        rotation=rotation,
        rotation_speed=rotation_speed,
    )


def maybe_spawn_heart(
    frame_count: int,
    config: GameConfig,
    rng: np.random.Generator,
) -> Optional[Heart]:
    """Every `heart_spawn_rate` frames, spawn a heart with `heart_spawn_chance`"""
    if frame_count % config.heart_spawn_rate != 0:
        return None
    if rng.random() >= config.heart_spawn_chance:
        return None

    y = float(rng.uniform(0.0, config.height - config.heart_size))
    rotation_speed = float(rng.uniform(-HEART_MAX_ROTATION_SPEED, HEART_MAX_ROTATION_SPEED))

    return Heart(
        x=float(config.width),
        y=y,
        width=config.heart_size,
        height=config.heart_size,
        speed=config.heart_speed,
        rotation_speed=rotation_speed,
    )


def spawn_explosion(
    x: float,
    y: float,
    size: float,
    config: GameConfig,
    rng: np.random.Generator,
) -> Explosion:
    """Particle burst centered on (x, y); particles fly out evenly with jitter"""
    particles: List[Particle] = []
    count = config.explosion_particles
    for i in range(count):
        angle = (2 * math.pi) * (i / max(1, count)) + float(rng.uniform(-0.3, 0.3))
        speed = float(rng.uniform(0.5, 2.5)) * size / 30.0
        particles.append(Particle(
            x=x,
            y=y,
            vx=math.cos(angle) * speed,
            vy=math.sin(angle) * speed,
            radius=float(rng.uniform(1.0, 3.0)) * size / 40.0,
        ))
    return Explosion(x=x, y=y, size=size, duration=config.explosion_duration, particles=particles)


def spawn_stars(config: GameConfig, rng: np.random.Generator) -> List[Star]:
    """Static background star field"""
    return [
        Star(
            x=float(rng.uniform(0, config.width)),
            y=float(rng.uniform(0, config.height)),
            size=float(rng.uniform(1.0, 3.0)),
            opacity=float(rng.random()),
        )
        for _ in range(config.star_count)
    ]
