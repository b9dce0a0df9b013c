"""
AABB collision resolution between ships, bullets, asteroids and hearts.

Per tick the order is fixed: ship-asteroid (P1, P2), bullet-asteroid (P1, P2),
heart collection (P1, P2). Score and removal results depend on it.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, List, Optional

import numpy as np

from .config import GameConfig
from .entities import Asteroid, Explosion, Heart, Ship
from .events import AsteroidDestroyed, HeartCollected, ShipHit
from .lives import grant_life, is_invincible, register_hit
from .spawner import spawn_explosion
from .utils import aabb_overlap, center_of

if TYPE_CHECKING:
    from .session import Session


def check_ship_asteroids(
    ship: Ship,
    asteroids: List[Asteroid],
    game_time: float,
    config: GameConfig,
) -> Optional[ShipHit]:
    """At most one hit per ship per tick; the asteroid is removed on impact.
    Asteroids are scanned newest first, so that one goes when several overlap."""
    if not ship.alive:
        return None
    if is_invincible(ship, game_time, config.invincibility_duration):
        return None

    for i in reversed(range(len(asteroids))):
        a = asteroids[i]
        if not a.alive:
            continue
        if aabb_overlap(ship, a):
            register_hit(ship, game_time)
            del asteroids[i]
            return ShipHit(player=ship.player, lives=ship.lives, time=game_time)
    return None


def check_bullet_asteroids(
    ship: Ship,
    asteroids: List[Asteroid],
    config: GameConfig,
    rng: Optional[np.random.Generator] = None,
    explosions: Optional[List[Explosion]] = None,
) -> List[AsteroidDestroyed]:
    """Each bullet destroys at most one asteroid and each asteroid falls to
    the first bullet that reaches it, scanning newest bullets and newest
    asteroids first. Spent bullets are dropped after the scan;
    destroyed asteroids stay in the list marked dead until the end of the tick,
    so later scans (the other ship's bullets) skip them.
    """
    events: List[AsteroidDestroyed] = []
    if not ship.alive:
        return events

    for b in reversed(ship.bullets):
        if not b.alive:
            continue
        for a in reversed(asteroids):
            if not a.alive:
                continue
            if aabb_overlap(b, a):
                a.alive = False
                b.alive = False
                cx, cy = center_of(a)
                size = max(a.width, a.height)
                events.append(AsteroidDestroyed(
                    player=ship.player, x=cx, y=cy, size=size,
                    points=config.points_per_asteroid,
                ))
                if explosions is not None and config.explosions and rng is not None:
                    explosions.append(spawn_explosion(cx, cy, size, config, rng))
                break

    ship.bullets[:] = [b for b in ship.bullets if b.alive]
    return events


def check_heart_collection(ship: Ship, hearts: List[Heart]) -> List[HeartCollected]:
    """Any live ship collects overlapping hearts, invincible or not"""
    events: List[HeartCollected] = []
    if not ship.alive:
        return events

    for h in hearts:
        if h.alive and aabb_overlap(ship, h):
            h.alive = False
            lives = grant_life(ship)
            cx, cy = center_of(h)
            events.append(HeartCollected(
                player=ship.player, x=cx, y=cy, lives=lives, color=ship.color,
            ))

    hearts[:] = [h for h in hearts if h.alive]
    return events


def resolve_collisions(session: "Session", game_time: float) -> list:
    """Run every collision check for one tick and apply score from kills.
    Returns the events in the order they happened."""
    config = session.config
    ships = session.active_ships
    events: list = []

    for ship in ships:
        hit = check_ship_asteroids(ship, session.asteroids, game_time, config)
        if hit is not None:
            events.append(hit)

    for ship in ships:
        kills = check_bullet_asteroids(
            ship, session.asteroids, config, session.rng, session.explosions,
        )
        for kill in kills:
            session.score += kill.points
        events.extend(kills)
    session.asteroids[:] = [a for a in session.asteroids if a.alive]

    for ship in ships:
        events.extend(check_heart_collection(ship, session.hearts))

    return events
