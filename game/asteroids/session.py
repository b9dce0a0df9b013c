"""
Session - owns all game state and drives one simulation tick per frame
----------------------------------------------------------------------
- The host calls `tick(now)` from its frame callback with a monotonically
  increasing timestamp in milliseconds
- Game time = wall-clock time since start minus every paused interval;
  invincibility windows, the score timer and explosions all run on game time
- Per tick: motion -> spawning -> collisions -> HUD -> game-over check -> redraw
- Presentation hooks in through the render/HUD sinks and the event bus
"""

from __future__ import annotations

from typing import Any, Dict, List, Optional, Tuple

import numpy as np

from .collision import resolve_collisions
from .config import GameConfig, PLAYER2_Y_OFFSET
from .controls import Action, FIRE_ACTIONS, InputState
from .entities import Asteroid, Bullet, Explosion, Heart, Ship, PLAYER1_COLOR, PLAYER2_COLOR
from .errors import ConfigurationError
from .events import EventBus, GameOver
from .interfaces import HudSink, RenderSink
from .lives import is_invincible
from .motion import advance_explosions, move_asteroids, move_bullets, move_hearts, move_ship
from .spawner import maybe_spawn_asteroid, maybe_spawn_heart
from .utils import make_rng


class ScoreTimer:
    """Fixed-interval score ticker running on game time.

    Polled by the session each frame; a poll returns how many intervals
    elapsed since the previous firing, so a slow frame never loses points.
    """

    def __init__(self, interval: float):
        self.interval = interval
        self.running = False
        self._next_fire: Optional[float] = None

    def start(self, game_time: float) -> None:
        self.running = True
        self._next_fire = game_time + self.interval

    def stop(self) -> None:
        self.running = False

    def resume(self) -> None:
        if self._next_fire is not None:
            self.running = True

    def poll(self, game_time: float) -> int:
        if not self.running or self._next_fire is None:
            return 0
        fired = 0
        while game_time >= self._next_fire:
            fired += 1
            self._next_fire += self.interval
        return fired


class Session:
    """One game from start to game over, with pause and reset"""

    def __init__(
        self,
        config: Optional[GameConfig] = None,
        render_sink: Optional[RenderSink] = None,
        hud_sink: Optional[HudSink] = None,
        rng: Optional[np.random.Generator] = None,
        seed: Optional[int] = None,
        verbose: int = 0,
    ):
        if render_sink is None:
            raise ConfigurationError("Session needs a render sink (use NullRenderSink when headless)")
        if hud_sink is None:
            raise ConfigurationError("Session needs a HUD sink (use NullHudSink when headless)")

        if config is None:
            config = GameConfig()
        config.validate()
        self.config = config

        self.render_sink = render_sink
        self.hud_sink = hud_sink
        self.rng = rng if rng is not None else make_rng(seed)
        self.verbose = verbose

        self.events = EventBus()
        self.input = InputState()
        self.score_timer = ScoreTimer(config.score_increment_interval)

        self._reset_state()

    # ----------------------------
    # State
    # ----------------------------

    def _make_ships(self) -> List[Ship]:
        c = self.config
        p1 = Ship(
            player=1, x=c.ship_x, y=c.height / 2,
            width=c.ship_width, height=c.ship_height, speed=c.player_speed,
            lives=c.initial_lives, color=PLAYER1_COLOR,
        )
        p2 = Ship(
            player=2, x=c.ship_x, y=c.height / 2 - PLAYER2_Y_OFFSET,
            width=c.ship_width, height=c.ship_height, speed=c.player_speed,
            lives=c.initial_lives, color=PLAYER2_COLOR, active=c.two_player,
        )
        return [p1, p2]

    def _reset_state(self) -> None:
        self.ships: List[Ship] = self._make_ships()
        self.asteroids: List[Asteroid] = []
        self.hearts: List[Heart] = []
        self.explosions: List[Explosion] = []

        self.score = 0
        self.frame_count = 0
        self.last_asteroid_spawn = 0
        self.game_over = False

        self.started = False
        self.paused = False
        self._start_time: Optional[float] = None
        self._pause_start: Optional[float] = None
        self.pause_offset = 0.0  # total ms spent paused
        self._last_game_time: Optional[float] = None
        self.last_elapsed = 0.0  # game ms between the last two ticks

        self.input.clear()
        self.score_timer.stop()

    @property
    def running(self) -> bool:
        """Whether ticks currently advance the simulation"""
        return self.started and not self.paused and not self.game_over

    @property
    def scheduled(self) -> bool:
        """Whether the host should keep calling tick; stays True while paused"""
        return self.started and not self.game_over

    @property
    def player1(self) -> Ship:
        return self.ships[0]

    @property
    def player2(self) -> Ship:
        return self.ships[1]

    @property
    def active_ships(self) -> List[Ship]:
        return [s for s in self.ships if s.active]

    @property
    def lives(self) -> Tuple[int, int]:
        return self.ships[0].lives, self.ships[1].lives

    @property
    def last_hit_times(self) -> Dict[int, Optional[float]]:
        return {s.player: s.last_hit_time for s in self.ships}

    def ship(self, player: int) -> Ship:
        return self.ships[player - 1]

    def game_time(self, now: float) -> float:
        """Milliseconds of unpaused play since start (frozen while paused)"""
        if self._start_time is None:
            return 0.0
        t = self._pause_start if self.paused else now
        return t - self._start_time - self.pause_offset

    def is_invincible(self, ship: Ship, now: float) -> bool:
        return is_invincible(ship, self.game_time(now), self.config.invincibility_duration)

    def get_info(self) -> Dict[str, Any]:
        return {
            "score": self.score,
            "frame": self.frame_count,
            "lives": self.lives,
            "game_over": self.game_over,
            "paused": self.paused,
            "num_asteroids": len(self.asteroids),
            "num_hearts": len(self.hearts),
            "num_bullets": sum(len(s.bullets) for s in self.ships),
            "num_explosions": len(self.explosions),
        }

    # ----------------------------
    # Lifecycle
    # ----------------------------

    def start(self, now: float) -> None:
        if self.started:
            return
        self.started = True
        self._start_time = now
        self._last_game_time = 0.0
        self.score_timer.start(0.0)
        if self.verbose > 0:
            mode = "two-player" if self.config.two_player else "single-player"
            print(f"[Session] Started {mode} game at t={now:.0f}ms")

    def reset(self, now: float) -> None:
        """Back to the initial state, then start ticking and scoring again"""
        self._reset_state()
        if self.verbose > 0:
            print("[Session] Reset")
        self.start(now)

    def pause(self, now: float) -> bool:
        if not self.running:
            return False
        self.paused = True
        self._pause_start = now
        self.score_timer.stop()
        if self.verbose > 0:
            print(f"[Session] Paused at frame {self.frame_count}")
        return True

    def resume(self, now: float) -> bool:
        if not self.paused:
            return False
        self.pause_offset += now - self._pause_start
        self.paused = False
        self._pause_start = None
        self.score_timer.resume()
        if self.verbose > 0:
            print(f"[Session] Resumed (paused {self.pause_offset:.0f}ms in total)")
        return True

    def toggle_pause(self, now: float) -> bool:
        """Returns the new paused flag"""
        if self.paused:
            self.resume(now)
        else:
            self.pause(now)
        return self.paused

    # ----------------------------
    # Input
    # ----------------------------

    def press(self, action: Action, now: float) -> None:
        if action == Action.PAUSE:
            self.toggle_pause(now)
        elif action in FIRE_ACTIONS:
            self.fire(FIRE_ACTIONS[action])
        else:
            self.input.press(action)

    def release(self, action: Action) -> None:
        self.input.release(action)

    def fire(self, player: int) -> Optional[Bullet]:
        """Shoot from the ship's nose; ignored when paused, over or dead"""
        if not self.running:
            return None
        ship = self.ship(player)
        if not ship.alive:
            return None
        c = self.config
        bullet = Bullet(
            x=ship.x + ship.width,
            y=ship.y + ship.height / 2 - c.bullet_height / 2,
            width=c.bullet_width,
            height=c.bullet_height,
            speed=c.bullet_speed,
            color=ship.color,
        )
        ship.bullets.append(bullet)
        return bullet

    # ----------------------------
    # Frame step
    # ----------------------------

    def tick(self, now: float) -> bool:
        """Advance one frame. Returns False when nothing was simulated."""
        if self.paused:
            self.render_sink.present(self, now)
            return False
        if not self.running:
            return False

        game_time = self.game_time(now)
        self.last_elapsed = max(0.0, game_time - self._last_game_time)
        self._last_game_time = game_time
        self.frame_count += 1

        self.score += self.score_timer.poll(game_time) * self.config.points_per_tick

        self._update_motion(game_time)
        self._spawn()
        for event in resolve_collisions(self, game_time):
            self.events.emit(event)

        self.hud_sink.update_hud(self.score, self.lives)
        self._check_game_over()
        self.render_sink.present(self, now)
        return True

    def _update_motion(self, game_time: float) -> None:
        duration = self.config.invincibility_duration
        for ship in self.ships:
            move_ship(ship, self.input, self.config, is_invincible(ship, game_time, duration))
            assert 0.0 <= ship.y <= self.config.height - ship.height, (
                f"ship {ship.player} out of field: y={ship.y}"
            )
        for ship in self.ships:
            move_bullets(ship, self.config)
        move_asteroids(self.asteroids)
        move_hearts(self.hearts)
        advance_explosions(self.explosions, self.last_elapsed)

    def _spawn(self) -> None:
        asteroid = maybe_spawn_asteroid(
            self.frame_count, self.last_asteroid_spawn, self.config, self.rng,
        )
        if asteroid is not None:
            self.asteroids.append(asteroid)
            self.last_asteroid_spawn = self.frame_count

        heart = maybe_spawn_heart(self.frame_count, self.config, self.rng)
        if heart is not None:
            self.hearts.append(heart)

    def _is_terminal(self) -> bool:
        p1, p2 = self.ships
        if self.config.two_player:
            return p1.lives <= 0 and p2.lives <= 0
        return p1.lives <= 0

    def _check_game_over(self) -> None:
        if self.game_over or not self._is_terminal():
            return
        self.game_over = True
        self.score_timer.stop()
        self.input.clear()
        if self.verbose > 0:
            print(f"[Session] Game over at frame {self.frame_count}, score {self.score}")
        self.events.emit(GameOver(score=self.score, frame=self.frame_count))
