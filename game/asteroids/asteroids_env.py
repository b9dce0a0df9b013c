"""
AsteroidsEnv - single-player Asteroid Dodge as a Gymnasium environment
----------------------------------------------------------------------
- Wraps a headless Session; every step advances one 60 Hz frame of
  synthetic time, so runs are fully reproducible from the reset seed
- Discrete MultiDiscrete action space: [move(3), fire(2)]
- Vector observation: ship state + K nearest asteroids + nearest heart
- Reward built from the session's events (kills, hits, hearts, survival)

Quick test:
    python -m game.asteroids.asteroids_env
"""

from __future__ import annotations

from typing import Any, Dict, List, Optional

import numpy as np
import gymnasium as gym
from gymnasium import spaces

from .config import GameConfig
from .controls import Action
from .events import AsteroidDestroyed, GameOver, HeartCollected, ShipHit
from .interfaces import NullHudSink, NullRenderSink
from .lives import is_invincible
from .raster import RasterRenderSink
from .session import Session
from .utils import clamp

DEFAULT_REWARDS = {
    "R_KILL": 1.0,      # asteroid shot down
    "R_HIT": 1.0,       # penalty per life lost
    "R_HEART": 0.5,     # heart collected
    "R_SCORE": 0.01,    # per survival score point
    "R_SHOT": 0.01,     # penalty per bullet fired
    "R_DEATH": 5.0,     # game over penalty
}

# Size and speed of an empty asteroid slot; real asteroids encode above -1
PADDING = -1.0

# move: 0 stay, 1 up, 2 down
MOVE_ACTIONS = {0: (), 1: (Action.P1_UP,), 2: (Action.P1_DOWN,)}


class AsteroidsEnv(gym.Env):
    """Dodge-and-shoot environment driven by the game session"""

    metadata = {"render_modes": ["human", "rgb_array"], "render_fps": 60}

    def __init__(
        self,
        render_mode: Optional[str] = None,
        frame_ms: float = 1000 / 60,
        max_steps: int = 3600,  # 60s at 60 FPS
        k_asteroids: int = 5,
        shoot_cooldown_steps: int = 6,
        rewards: Optional[Dict[str, float]] = None,
        game_config: Optional[Dict[str, Any]] = None,
    ):
        super().__init__()

        assert render_mode is None or render_mode in self.metadata["render_modes"], render_mode
        self.render_mode = render_mode

        self.frame_ms = frame_ms
        self.max_steps = max_steps
        self.k_asteroids = k_asteroids
        self.shoot_cooldown_steps = shoot_cooldown_steps
        self.rewards = {**DEFAULT_REWARDS, **(rewards or {})}
        self.config = GameConfig.from_dict({**(game_config or {}), "two_player": False})

        self.action_space = spaces.MultiDiscrete([3, 2])

        # Ship: y(1) lives(1) invincible(1) cooldown(1)
        # Each asteroid: rel pos(2) size(1) speed(1), padded with [0, 0, -1, -1]
        # Nearest heart: rel pos(2) present(1)
        obs_dim = 4 + (self.k_asteroids * 4) + 3
        self.observation_space = spaces.Box(
            low=-1.0, high=1.0, shape=(obs_dim,), dtype=np.float32
        )

        self.session: Session = None  # type: ignore
        self._window = None
        self._now = 0.0
        self._step_count = 0
        self._cooldown = 0
        self._events: Dict[str, float] = {}

    # ----------------------------
    # Gym API
    # ----------------------------

    def reset(self, seed: Optional[int] = None, options: Optional[dict] = None):
        super().reset(seed=seed)

        render_sink = RasterRenderSink() if self.render_mode == "rgb_array" else NullRenderSink()
        self.session = Session(
            self.config, render_sink=render_sink, hud_sink=NullHudSink(), rng=self.np_random,
        )
        self.session.events.subscribe(AsteroidDestroyed, self._on_kill)
        self.session.events.subscribe(ShipHit, self._on_hit)
        self.session.events.subscribe(HeartCollected, self._on_heart)
        self.session.events.subscribe(GameOver, self._on_game_over)
        if self._window is not None:
            self._window.session = self.session

        self._now = 0.0
        self._step_count = 0
        self._cooldown = 0
        self._events = self._empty_events()
        self.session.start(self._now)
        self.session.render_sink.present(self.session, self._now)

        return self._get_obs(), self._get_info()

    def step(self, action):
        self._events = self._empty_events()
        move, shoot = int(action[0]), int(action[1])

        self.session.input.set_held(MOVE_ACTIONS[move])
        if shoot and self._cooldown == 0:
            if self.session.fire(1) is not None:
                self._events["shot"] += 1.0
                self._cooldown = self.shoot_cooldown_steps
        elif self._cooldown > 0:
            self._cooldown -= 1

        score_before = self.session.score
        self._now += self.frame_ms
        self.session.tick(self._now)
        kill_points = self._events["kill"] * self.config.points_per_asteroid
        self._events["score"] = self.session.score - score_before - kill_points

        reward = self._compute_reward()

        terminated = self.session.game_over
        self._step_count += 1
        truncated = self._step_count >= self.max_steps

        if self.render_mode == "human":
            self.render()

        return self._get_obs(), reward, terminated, truncated, self._get_info()

    # ----------------------------
    # Event hooks
    # ----------------------------

    @staticmethod
    def _empty_events() -> Dict[str, float]:
        return {"kill": 0.0, "hit": 0.0, "heart": 0.0, "score": 0.0, "shot": 0.0, "death": 0.0}

    def _on_kill(self, event: AsteroidDestroyed):
        self._events["kill"] += 1.0

    def _on_hit(self, event: ShipHit):
        self._events["hit"] += 1.0

    def _on_heart(self, event: HeartCollected):
        self._events["heart"] += 1.0

    def _on_game_over(self, event: GameOver):
        self._events["death"] = 1.0

    # ----------------------------
    # Observation / reward / info
    # ----------------------------

    def _get_obs(self) -> np.ndarray:
        c = self.config
        ship = self.session.player1
        sx, sy = ship.x + ship.width / 2, ship.y + ship.height / 2

        invincible = is_invincible(ship, self.session.game_time(self._now), c.invincibility_duration)
        obs_parts: List[float] = [
            (ship.y / max(1.0, c.height - ship.height)) * 2 - 1,
            clamp(ship.lives / (2.0 * c.initial_lives), 0, 1) * 2 - 1,
            1.0 if invincible else -1.0,
            clamp(self._cooldown / max(1, self.shoot_cooldown_steps), 0, 1) * 2 - 1,
        ]

        # Asteroids: top-K nearest to the ship center
        asteroids_sorted = sorted(
            self.session.asteroids,
            key=lambda a: (a.x + a.width / 2 - sx) ** 2 + (a.y + a.height / 2 - sy) ** 2
        )
        max_speed = max(1e-6, c.asteroid_speed)
        for i in range(self.k_asteroids):
            if i < len(asteroids_sorted):
                a = asteroids_sorted[i]
                dx = (a.x + a.width / 2 - sx) / c.width
                dy = (a.y + a.height / 2 - sy) / c.height
                obs_parts += [
                    clamp(dx, -1, 1),
                    clamp(dy, -1, 1),
                    clamp(a.size / c.asteroid_max_size, 0, 1) * 2 - 1,
                    clamp(a.speed / max_speed, 0, 1) * 2 - 1,
                ]
            else:
                obs_parts += [0.0, 0.0, PADDING, PADDING]

        if self.session.hearts:
            h = min(
                self.session.hearts,
                key=lambda h: (h.x + h.width / 2 - sx) ** 2 + (h.y + h.height / 2 - sy) ** 2
            )
            obs_parts += [
                clamp((h.x + h.width / 2 - sx) / c.width, -1, 1),
                clamp((h.y + h.height / 2 - sy) / c.height, -1, 1),
                1.0,
            ]
        else:
            obs_parts += [0.0, 0.0, -1.0]

        return np.array(obs_parts, dtype=np.float32)

    def _compute_reward(self) -> float:
        r = self.rewards
        reward = 0.0
        reward += r["R_KILL"] * self._events["kill"]
        reward += r["R_HEART"] * self._events["heart"]
        reward += r["R_SCORE"] * self._events["score"]
        reward -= r["R_HIT"] * self._events["hit"]
        reward -= r["R_SHOT"] * self._events["shot"]
        reward -= r["R_DEATH"] * self._events["death"]
        return float(reward)

    def _get_info(self) -> Dict[str, Any]:
        info = self.session.get_info()
        info.update({
            "step": self._step_count,
            "cooldown": self._cooldown,
            "kills": self._events.get("kill", 0.0),
            "hits": self._events.get("hit", 0.0),
            "hearts": self._events.get("heart", 0.0),
        })
        return info

    # ----------------------------
    # Rendering
    # ----------------------------

    def render(self):
        if self.render_mode is None:
            return None

        if self.render_mode == "rgb_array":
            return self.session.render_sink.frame

        if self._window is None:
            from .window import EnvWindow
            self._window = EnvWindow(self.session)
        self._window.now = self._now
        self._window.dispatch_events()
        self._window.on_draw()
        self._window.flip()
        return None

    def close(self):
        if self._window is not None:
            self._window.close()
            self._window = None


# ----------------------------
# Quick sanity test
# ----------------------------

def run_random_episode(render: bool = True, seed: int = 42) -> float:
    """Run a random episode for testing"""
    env = AsteroidsEnv(render_mode="human" if render else None)
    obs, info = env.reset(seed=seed)
    env.action_space.seed(seed)

    terminated = False
    truncated = False
    total = 0.0

    while not (terminated or truncated):
        action = env.action_space.sample()
        obs, reward, terminated, truncated, info = env.step(action)
        total += reward

    print(f"Random episode return: {total:.2f} (score {info['score']}, {info['frame']} frames)")
    env.close()
    return total


if __name__ == "__main__":
    run_random_episode(render=True)
