"""
Per-ship life and invincibility state machine.

VULNERABLE --hit--> INVINCIBLE --duration elapsed--> VULNERABLE
any alive state --lives reach 0--> DEAD (terminal)

All times are game time in ms, i.e. wall-clock time minus paused intervals,
except the flicker phase which follows the wall clock.
"""

from __future__ import annotations

import math
from enum import Enum

from .config import GameConfig
from .entities import Ship


class ShipState(str, Enum):
    VULNERABLE = "vulnerable"
    INVINCIBLE = "invincible"
    DEAD = "dead"


def is_invincible(ship: Ship, game_time: float, duration: float) -> bool:
    if ship.last_hit_time is None:
        return False
    return (game_time - ship.last_hit_time) < duration


def ship_state(ship: Ship, game_time: float, duration: float) -> ShipState:
    if not ship.alive:
        return ShipState.DEAD
    if is_invincible(ship, game_time, duration):
        return ShipState.INVINCIBLE
    return ShipState.VULNERABLE


def register_hit(ship: Ship, game_time: float) -> ShipState:
    """Take one life and start the invincibility window"""
    ship.lives = max(0, ship.lives - 1)
    ship.last_hit_time = game_time
    return ShipState.DEAD if ship.lives == 0 else ShipState.INVINCIBLE


def grant_life(ship: Ship) -> int:
    """Extra life from a heart; there is no upper bound"""
    ship.lives += 1
    return ship.lives


def is_visible(ship: Ship, game_time: float, now: float, config: GameConfig) -> bool:
    """Whether the ship body is drawn this frame (blinks while invincible)"""
    if not ship.alive:
        return False
    if not is_invincible(ship, game_time, config.invincibility_duration):
        return True
    return math.floor(now / config.flicker_interval) % 2 == 1
