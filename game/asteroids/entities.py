"""
Game entity dataclasses
"""

from dataclasses import dataclass, field
from typing import List, Optional, Tuple

Color = Tuple[int, int, int]

PLAYER1_COLOR: Color = (76, 175, 80)
PLAYER2_COLOR: Color = (33, 150, 243)


@dataclass
class Bullet:
    """Bullet fired by a ship, travels right"""
    x: float
    y: float
    width: float = 15.0
    height: float = 3.0
    speed: float = 10.0
    color: Color = PLAYER1_COLOR
    alive: bool = True


@dataclass
class Ship:
    """Player ship, moves vertically in a fixed lane"""
    player: int  # 1 or 2
    x: float
    y: float
    width: float = 60.0
    height: float = 30.0
    speed: float = 5.0
    lives: int = 3
    color: Color = PLAYER1_COLOR
    active: bool = True  # player 2 is inactive in single-player mode
    bullets: List[Bullet] = field(default_factory=list)
    last_hit_time: Optional[float] = None  # game time (ms) of the last asteroid hit

    @property
    def alive(self) -> bool:
        return self.active and self.lives > 0


@dataclass
class Asteroid:
    """Square rock drifting left"""
    x: float
    y: float
    size: float
    speed: float
    rotation: float = 0.0
    rotation_speed: float = 0.0
    alive: bool = True

    @property
    def width(self) -> float:
        return self.size

    @property
    def height(self) -> float:
        return self.size


@dataclass
class Heart:
    """Collectible extra life"""
    x: float
    y: float
    width: float = 30.0
    height: float = 30.0
    speed: float = 1.5
    rotation: float = 0.0
    rotation_speed: float = 0.0
    alive: bool = True


@dataclass
class Particle:
    """Single fragment of an explosion"""
    x: float
    y: float
    vx: float  # per frame
    vy: float
    radius: float
    alpha: float = 1.0


@dataclass
class Explosion:
    """Short-lived particle burst where an asteroid was shot"""
    x: float
    y: float
    size: float
    duration: float = 500.0  # ms
    elapsed: float = 0.0
    particles: List[Particle] = field(default_factory=list)

    @property
    def done(self) -> bool:
        return self.elapsed >= self.duration


@dataclass
class Star:
    """Background star (cosmetic only)"""
    x: float
    y: float
    size: float
    opacity: float
