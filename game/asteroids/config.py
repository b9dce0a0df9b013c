"""
Game configuration for the asteroids session.
Defaults mirror the original browser game (1000x600 field at ~60 FPS).
"""

from __future__ import annotations

from dataclasses import dataclass, asdict, fields
from typing import Any, Dict, Optional

from .errors import ConfigurationError

# Default parameters (units are per-frame unless stated otherwise)
GAME_CONFIG = {
    # Field
    "width": 1000,
    "height": 600,
    # Ships
    "player_speed": 5.0,
    "initial_lives": 3,
    "ship_x": 100.0,
    "ship_width": 60.0,
    "ship_height": 30.0,
    "two_player": True,
    # Bullets
    "bullet_speed": 10.0,
    "bullet_width": 15.0,
    "bullet_height": 3.0,
    # Asteroids
    "asteroid_speed": 2.0,
    "asteroid_spawn_rate": 100,  # frames
    "asteroid_min_size": 20.0,
    "asteroid_max_size": 50.0,
    # Hearts
    "heart_spawn_rate": 500,  # frames (higher = more rare)
    "heart_spawn_chance": 0.3,
    "heart_size": 30.0,
    "heart_speed": 1.5,
    # Scoring
    "points_per_asteroid": 10,
    "points_per_tick": 1,
    "score_increment_interval": 500,  # ms
    # Invincibility
    "invincibility_duration": 2000,  # ms
    "flicker_interval": 150,  # ms
    "invincible_blocks_movement": False,
    # Explosions
    "explosions": True,
    "explosion_duration": 500,  # ms
    "explosion_particles": 15,
    # Cosmetic
    "star_count": 100,
}


# Player 2 starts this far above player 1
PLAYER2_Y_OFFSET = 100.0


@dataclass
class GameConfig:
    """Typed view of GAME_CONFIG"""
    width: int = GAME_CONFIG["width"]
    height: int = GAME_CONFIG["height"]
    player_speed: float = GAME_CONFIG["player_speed"]
    initial_lives: int = GAME_CONFIG["initial_lives"]
    ship_x: float = GAME_CONFIG["ship_x"]
    ship_width: float = GAME_CONFIG["ship_width"]
    ship_height: float = GAME_CONFIG["ship_height"]
    two_player: bool = GAME_CONFIG["two_player"]
    bullet_speed: float = GAME_CONFIG["bullet_speed"]
    bullet_width: float = GAME_CONFIG["bullet_width"]
    bullet_height: float = GAME_CONFIG["bullet_height"]
    asteroid_speed: float = GAME_CONFIG["asteroid_speed"]
    asteroid_spawn_rate: int = GAME_CONFIG["asteroid_spawn_rate"]
    asteroid_min_size: float = GAME_CONFIG["asteroid_min_size"]
    asteroid_max_size: float = GAME_CONFIG["asteroid_max_size"]
    heart_spawn_rate: int = GAME_CONFIG["heart_spawn_rate"]
    heart_spawn_chance: float = GAME_CONFIG["heart_spawn_chance"]
    heart_size: float = GAME_CONFIG["heart_size"]
    heart_speed: float = GAME_CONFIG["heart_speed"]
    points_per_asteroid: int = GAME_CONFIG["points_per_asteroid"]
    points_per_tick: int = GAME_CONFIG["points_per_tick"]
    score_increment_interval: float = GAME_CONFIG["score_increment_interval"]
    invincibility_duration: float = GAME_CONFIG["invincibility_duration"]
    flicker_interval: float = GAME_CONFIG["flicker_interval"]
    invincible_blocks_movement: bool = GAME_CONFIG["invincible_blocks_movement"]
    explosions: bool = GAME_CONFIG["explosions"]
    explosion_duration: float = GAME_CONFIG["explosion_duration"]
    explosion_particles: int = GAME_CONFIG["explosion_particles"]
    star_count: int = GAME_CONFIG["star_count"]

    @classmethod
    def from_dict(cls, overrides: Optional[Dict[str, Any]] = None) -> "GameConfig":
        """Build a config from GAME_CONFIG updated with `overrides`"""
        overrides = dict(overrides or {})
        known = {f.name for f in fields(cls)}
        unknown = sorted(set(overrides) - known)
        if unknown:
            raise ConfigurationError(f"Unknown config keys: {', '.join(unknown)}")
        config = cls(**{**GAME_CONFIG, **overrides})
        config.validate()
        return config

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)

    def validate(self) -> None:
        """Raise ConfigurationError if any value is out of range"""
        if self.width <= 0 or self.height <= 0:
            raise ConfigurationError(f"Field size must be positive, got {self.width}x{self.height}")
        for name in ("asteroid_spawn_rate", "heart_spawn_rate",
                     "score_increment_interval", "flicker_interval"):
            if getattr(self, name) <= 0:
                raise ConfigurationError(f"{name} must be positive, got {getattr(self, name)}")
        for name in ("invincibility_duration", "explosion_duration", "explosion_particles",
                     "star_count", "player_speed", "bullet_speed", "asteroid_speed", "heart_speed"):
            if getattr(self, name) < 0:
                raise ConfigurationError(f"{name} must not be negative, got {getattr(self, name)}")
        if self.initial_lives < 1:
            raise ConfigurationError(f"initial_lives must be at least 1, got {self.initial_lives}")
        if not 0 < self.asteroid_min_size <= self.asteroid_max_size:
            raise ConfigurationError(
                f"Invalid asteroid size range [{self.asteroid_min_size}, {self.asteroid_max_size}]"
            )
        if self.asteroid_max_size > self.height or self.heart_size > self.height:
            raise ConfigurationError("Asteroids and hearts must fit the field height")
        if not 0.0 <= self.heart_spawn_chance <= 1.0:
            raise ConfigurationError(f"heart_spawn_chance must be in [0, 1], got {self.heart_spawn_chance}")
        if (self.height / 2 - PLAYER2_Y_OFFSET < 0
                or self.height / 2 + self.ship_height > self.height
                or self.ship_x + self.ship_width > self.width):
            raise ConfigurationError("Ships do not fit the field")
