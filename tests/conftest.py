import pytest

from game.asteroids import GameConfig, NullHudSink, Session
from game.asteroids.entities import Asteroid


class RecordingRenderSink:
    def __init__(self):
        self.calls = []

    def present(self, session, now):
        self.calls.append(now)


class RecordingHudSink:
    def __init__(self):
        self.updates = []

    def update_hud(self, score, lives):
        self.updates.append((score, tuple(lives)))


@pytest.fixture
def make_session():
    """Build a started, headless session at t=0"""
    def _make(seed=0, start=True, **overrides):
        config = GameConfig.from_dict(overrides)
        session = Session(config, render_sink=RecordingRenderSink(), hud_sink=RecordingHudSink(), seed=seed)
        if start:
            session.start(0.0)
        return session
    return _make


def rock_on(ship, size=40.0, speed=0.0):
    """Stationary asteroid sitting exactly on the ship's top-left corner"""
    return Asteroid(x=ship.x, y=ship.y, size=size, speed=speed)
