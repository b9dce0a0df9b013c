"""
Per-frame position updates for all entity kinds.
Containers are filtered in place because the session owns them.
"""

from __future__ import annotations

from typing import List

from .config import GameConfig
from .controls import InputState, PLAYER_ACTIONS
from .entities import Asteroid, Explosion, Heart, Ship
from .utils import clamp


def move_ship(ship: Ship, input_state: InputState, config: GameConfig, invincible: bool = False) -> None:
    if not ship.alive:
        return
    if invincible and config.invincible_blocks_movement:
        return

    up, down, _ = PLAYER_ACTIONS[ship.player]
    if input_state.is_held(up) and ship.y > 0:
        ship.y -= ship.speed
    if input_state.is_held(down) and ship.y < config.height - ship.height:
        ship.y += ship.speed

    # Speeds that do not divide the field evenly may overshoot by less than one step
    ship.y = clamp(ship.y, 0.0, config.height - ship.height)


def move_bullets(ship: Ship, config: GameConfig) -> None:
    for b in ship.bullets:
        b.x += b.speed
        if b.x > config.width:
            b.alive = False
    ship.bullets[:] = [b for b in ship.bullets if b.alive]


def move_asteroids(asteroids: List[Asteroid]) -> None:
    for a in asteroids:
        a.x -= a.speed
        a.rotation += a.rotation_speed
        if a.x + a.width < 0:
            a.alive = False
    asteroids[:] = [a for a in asteroids if a.alive]


def move_hearts(hearts: List[Heart]) -> None:
    for h in hearts:
        h.x -= h.speed
        h.rotation += h.rotation_speed
        if h.x + h.width < 0:
            h.alive = False
    hearts[:] = [h for h in hearts if h.alive]


def advance_explosions(explosions: List[Explosion], elapsed_ms: float) -> None:
    """Move particles one frame and fade them by the elapsed game time"""
    for e in explosions:
        e.elapsed += max(0.0, elapsed_ms)
        fade = max(0.0, 1.0 - e.elapsed / e.duration) if e.duration > 0 else 0.0
        for p in e.particles:
            p.x += p.vx
            p.y += p.vy
            p.alpha = fade
    explosions[:] = [e for e in explosions if not e.done]
