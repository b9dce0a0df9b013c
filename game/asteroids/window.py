"""
Arcade presentation host: tick source, input source, render sink and HUD sink
for interactive play. Arcade's origin is bottom-left while the simulation's is
top-left, so every y is flipped on the way to the screen.
"""

from __future__ import annotations

import time
from typing import List, Optional, Sequence

import arcade

from .config import GameConfig
from .controls import Action
from .events import GameOver, HeartCollected, ShipHit
from .lives import is_visible
from .session import Session
from .spawner import spawn_stars
from .utils import make_rng

KEY_MAP = {
    arcade.key.UP: Action.P1_UP,
    arcade.key.DOWN: Action.P1_DOWN,
    arcade.key.ENTER: Action.P1_FIRE,
    arcade.key.W: Action.P2_UP,
    arcade.key.S: Action.P2_DOWN,
    arcade.key.SPACE: Action.P2_FIRE,
    arcade.key.P: Action.PAUSE,
}

ASTEROID_COLOR = (121, 85, 72)
HEART_COLOR = (255, 64, 129)
PARTICLE_COLOR = (255, 152, 0)
COCKPIT_COLOR = (135, 206, 235)
ENGINE_COLOR = (51, 51, 51)
HUD_COLOR = (220, 220, 220)
FLASH_COLORS = {1: (255, 0, 0), 2: (0, 0, 255)}

FLASH_SECONDS = 0.4
FLOAT_TEXT_SECONDS = 1.0


def now_ms() -> float:
    return time.monotonic() * 1000.0


def draw_session(session: Session, now: float, stars=()) -> None:
    """Draw stars, hearts, asteroids, explosions, bullets and ships"""
    c = session.config
    top = c.height

    for star in stars:
        arcade.draw_lrbt_rectangle_filled(
            star.x, star.x + star.size, top - star.y - star.size, top - star.y,
            (255, 255, 255, int(255 * star.opacity)),
        )

    for h in session.hearts:
        cx, cy = h.x + h.width / 2, top - (h.y + h.height / 2)
        r = h.width / 4
        arcade.draw_circle_filled(cx - r, cy + r / 2, r, HEART_COLOR)
        arcade.draw_circle_filled(cx + r, cy + r / 2, r, HEART_COLOR)
        arcade.draw_triangle_filled(
            cx - 2 * r, cy + r / 2, cx + 2 * r, cy + r / 2, cx, cy - h.height / 2, HEART_COLOR,
        )

    for a in session.asteroids:
        arcade.draw_lrbt_rectangle_filled(a.x, a.x + a.width, top - a.y - a.height, top - a.y, ASTEROID_COLOR)

    for e in session.explosions:
        for p in e.particles:
            arcade.draw_circle_filled(p.x, top - p.y, max(1.0, p.radius), (*PARTICLE_COLOR, int(255 * p.alpha)))

    game_time = session.game_time(now)
    for ship in session.active_ships:
        for b in ship.bullets:
            arcade.draw_lrbt_rectangle_filled(b.x, b.x + b.width, top - b.y - b.height, top - b.y, b.color)
        if not is_visible(ship, game_time, now, c):
            continue
        cx, cy = ship.x + ship.width / 2, top - (ship.y + ship.height / 2)
        arcade.draw_triangle_filled(
            ship.x, cy + ship.height * 0.15, ship.x - ship.width / 4, cy, ship.x, cy - ship.height * 0.15,
            ENGINE_COLOR,
        )
        arcade.draw_ellipse_filled(cx, cy, ship.width, ship.height, ship.color)
        arcade.draw_ellipse_filled(cx + ship.width * 0.15, cy, ship.width * 0.5, ship.height * 0.7, COCKPIT_COLOR)
        arcade.draw_text(f"P{ship.player}", cx, top - ship.y - ship.height - 15, ship.color, 12,
                         anchor_x="center", bold=True)


class AsteroidsWindow(arcade.Window):
    """Interactive game window; owns the session it drives"""

    def __init__(self, config: Optional[GameConfig] = None, seed: Optional[int] = None, verbose: int = 0):
        config = config or GameConfig()
        super().__init__(config.width, config.height, "Asteroid Dodge")
        self.background_color = (0, 0, 0)

        rng = make_rng(seed)
        self.stars = spawn_stars(config, rng)
        self.session = Session(config, render_sink=self, hud_sink=self, rng=rng, verbose=verbose)
        self.session.events.subscribe(ShipHit, self._on_ship_hit)
        self.session.events.subscribe(HeartCollected, self._on_heart_collected)
        self.session.events.subscribe(GameOver, self._on_game_over)

        self._frame_time = now_ms()
        self._score = 0
        self._lives: Sequence[int] = self.session.lives
        self._flash_color = None
        self._flash_left = 0.0
        self._float_texts: List[list] = []  # [x, y, text, color, age]

        self.session.start(self._frame_time)

    # Render / HUD sinks

    def present(self, session, now):
        self._frame_time = now

    def update_hud(self, score, lives):
        self._score = score
        self._lives = lives

    # Event handlers

    def _on_ship_hit(self, event: ShipHit):
        self._flash_color = FLASH_COLORS[event.player]
        self._flash_left = FLASH_SECONDS

    def _on_heart_collected(self, event: HeartCollected):
        self._float_texts.append([event.x, event.y - 20, "+1 LIFE", event.color, 0.0])

    def _on_game_over(self, event: GameOver):
        self._score = event.score

    # Arcade callbacks

    def on_update(self, delta_time: float):
        if not self.session.scheduled:
            return  # stopped until R restarts the game
        self.session.tick(now_ms())

        if self.session.paused:
            return
        self._flash_left = max(0.0, self._flash_left - delta_time)
        for item in self._float_texts:
            item[4] += delta_time
        self._float_texts = [t for t in self._float_texts if t[4] < FLOAT_TEXT_SECONDS]

    def on_key_press(self, symbol: int, modifiers: int):
        if symbol == arcade.key.R and self.session.game_over:
            self._float_texts = []
            self._flash_left = 0.0
            self.session.reset(now_ms())
            return
        if symbol == arcade.key.ESCAPE:
            self.close()
            return
        action = KEY_MAP.get(symbol)
        if action is not None:
            self.session.press(action, now_ms())

    def on_key_release(self, symbol: int, modifiers: int):
        action = KEY_MAP.get(symbol)
        if action is not None:
            self.session.release(action)

    def on_draw(self):
        self.clear()
        width, height = self.session.config.width, self.session.config.height
        draw_session(self.session, self._frame_time, self.stars)

        for x, y, text, color, age in self._float_texts:
            alpha = int(255 * (1.0 - age / FLOAT_TEXT_SECONDS))
            arcade.draw_text(text, x, height - y + 40 * age, (*color, alpha), 16,
                             anchor_x="center", bold=True)

        if self._flash_left > 0 and self._flash_color is not None:
            alpha = int(77 * self._flash_left / FLASH_SECONDS)
            arcade.draw_lrbt_rectangle_filled(0, width, 0, height, (*self._flash_color, alpha))

        # HUD
        p1_lives, p2_lives = self._lives
        hud = f"Score: {self._score}   P1 lives: {p1_lives}"
        if self.session.config.two_player:
            hud += f"   P2 lives: {p2_lives}"
        arcade.draw_text(hud, 12, height - 28, HUD_COLOR, 16)

        if self.session.paused:
            arcade.draw_lrbt_rectangle_filled(0, width, 0, height, (0, 0, 0, 150))
            arcade.draw_text("PAUSED - press P to resume", width / 2, height / 2, HUD_COLOR, 28,
                             anchor_x="center")
        elif self.session.game_over:
            arcade.draw_lrbt_rectangle_filled(0, width, 0, height, (0, 0, 0, 180))
            arcade.draw_text("GAME OVER", width / 2, height / 2 + 20, (255, 80, 80), 40, anchor_x="center")
            arcade.draw_text(f"Score: {self._score} - press R to restart", width / 2, height / 2 - 30,
                             HUD_COLOR, 18, anchor_x="center")


class EnvWindow(arcade.Window):
    """Passive window for watching an environment's session"""

    def __init__(self, session: Session):
        super().__init__(session.config.width, session.config.height, "AsteroidsEnv - Arcade")
        self.background_color = (0, 0, 0)
        self.session = session
        self.now = 0.0

    def on_draw(self):
        self.clear()
        draw_session(self.session, self.now)
        info = self.session.get_info()
        arcade.draw_text(
            f"Score: {info['score']}  Lives: {info['lives'][0]}  Frame: {info['frame']}",
            12, self.session.config.height - 28, HUD_COLOR, 14,
        )
