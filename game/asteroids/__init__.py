"""Asteroid Dodge - frame-stepped simulation core, arcade host and Gymnasium environment"""

from .config import GameConfig, GAME_CONFIG
from .controls import Action, InputState
from .errors import ConfigurationError
from .events import AsteroidDestroyed, EventBus, GameOver, HeartCollected, ShipHit
from .interfaces import NullHudSink, NullRenderSink
from .lives import ShipState
from .session import ScoreTimer, Session
from .asteroids_env import AsteroidsEnv, run_random_episode

__all__ = [
    'GameConfig', 'GAME_CONFIG', 'Action', 'InputState', 'ConfigurationError',
    'AsteroidDestroyed', 'EventBus', 'GameOver', 'HeartCollected', 'ShipHit',
    'NullHudSink', 'NullRenderSink', 'ShipState', 'ScoreTimer', 'Session',
    'AsteroidsEnv', 'run_random_episode',
]
