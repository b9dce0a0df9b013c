import pytest

from game.asteroids import (
    Action,
    AsteroidDestroyed,
    ConfigurationError,
    GameConfig,
    GameOver,
    NullHudSink,
    NullRenderSink,
    Session,
    ShipHit,
)
from game.asteroids.entities import Asteroid, Explosion, Heart

from conftest import rock_on

FRAME = 16.0


def run_frames(session, n, start=0.0):
    now = start
    for _ in range(n):
        now += FRAME
        session.tick(now)
    return now


def collect(session, event_type):
    seen = []
    session.events.subscribe(event_type, seen.append)
    return seen


def test_missing_sinks_are_configuration_errors():
    with pytest.raises(ConfigurationError, match="render sink"):
        Session(GameConfig(), render_sink=None, hud_sink=NullHudSink())
    with pytest.raises(ConfigurationError, match="HUD sink"):
        Session(GameConfig(), render_sink=NullRenderSink(), hud_sink=None)


def test_tick_before_start_does_nothing(make_session):
    session = make_session(start=False)
    assert session.tick(16.0) is False
    assert session.frame_count == 0
    assert session.render_sink.calls == []


def test_initial_layout(make_session):
    session = make_session()
    p1, p2 = session.ships
    assert (p1.x, p1.y) == (100.0, 300.0)
    assert (p2.x, p2.y) == (100.0, 200.0)
    assert session.lives == (3, 3)
    assert p2.active
    assert not make_session(two_player=False).player2.active


def test_first_asteroid_spawns_on_frame_101(make_session):
    session = make_session()
    now = run_frames(session, 100)
    assert session.asteroids == []

    session.tick(now + FRAME)
    assert session.frame_count == 101
    assert len(session.asteroids) == 1
    a = session.asteroids[0]
    assert a.x == 1000
    assert 0 <= a.y <= 600 - a.size
    assert session.last_asteroid_spawn == 101


def test_same_seed_same_game(make_session):
    a, b = make_session(seed=5), make_session(seed=5)
    run_frames(a, 600)
    run_frames(b, 600)
    assert [(r.x, r.y, r.size) for r in a.asteroids] == [(r.x, r.y, r.size) for r in b.asteroids]
    assert a.lives == b.lives
    assert a.score == b.score


def test_ship_hit_through_tick(make_session):
    session = make_session()
    p1 = session.player1
    hits = collect(session, ShipHit)
    session.asteroids = [rock_on(p1)]

    session.tick(FRAME)

    assert p1.lives == 2
    assert session.asteroids == []
    assert session.is_invincible(p1, FRAME)
    assert hits == [ShipHit(player=1, lives=2, time=FRAME)]
    assert session.hud_sink.updates[-1] == (0, (2, 3))


def test_invincibility_ignores_paused_time(make_session):
    session = make_session()
    p1 = session.player1
    session.asteroids = [rock_on(p1)]
    session.tick(16.0)
    assert p1.last_hit_time == 16.0

    assert session.pause(100.0)
    assert session.resume(5100.0)

    session.asteroids = [rock_on(p1)]
    session.tick(5200.0)  # 200ms of play
    session.tick(7015.0)  # 1999ms after the hit
    assert p1.lives == 2

    session.tick(7016.0)  # 2000ms after the hit
    assert p1.lives == 1


def test_score_timer_adds_a_point_every_500ms(make_session):
    session = make_session()
    session.tick(499.0)
    assert session.score == 0
    session.tick(500.0)
    assert session.score == 1
    session.tick(1000.0)
    assert session.score == 2


def test_score_timer_catches_up_after_slow_frame(make_session):
    session = make_session()
    session.tick(2600.0)
    assert session.score == 5


def test_score_timer_stops_while_paused(make_session):
    session = make_session()
    session.tick(1000.0)
    assert session.score == 2

    session.pause(1100.0)
    assert not session.score_timer.running
    session.resume(11100.0)
    assert session.score_timer.running

    session.tick(11200.0)  # 1200ms of play
    assert session.score == 2
    session.tick(11500.0)  # 1500ms of play
    assert session.score == 3


def test_elapsed_time_excludes_pause(make_session):
    session = make_session()
    session.tick(16.0)
    session.pause(20.0)
    session.resume(1020.0)
    session.tick(1032.0)
    assert session.last_elapsed == 16.0
    assert session.game_time(1032.0) == 32.0


def test_paused_tick_only_redraws(make_session):
    session = make_session()
    session.tick(16.0)
    session.pause(20.0)
    draws = len(session.render_sink.calls)
    hud = len(session.hud_sink.updates)

    assert session.tick(36.0) is False
    assert session.frame_count == 1
    assert len(session.render_sink.calls) == draws + 1
    assert len(session.hud_sink.updates) == hud
    # Game time is frozen while paused
    assert session.game_time(5000.0) == 20.0


def test_pause_key_toggles(make_session):
    session = make_session()
    session.press(Action.PAUSE, 10.0)
    assert session.paused
    session.press(Action.PAUSE, 20.0)
    assert not session.paused
    assert session.pause_offset == 10.0


def test_fire_spawns_bullet_at_ship_nose(make_session):
    session = make_session()
    bullet = session.fire(1)
    p1 = session.player1
    assert p1.bullets == [bullet]
    assert (bullet.x, bullet.y) == (160.0, 313.5)
    assert (bullet.width, bullet.height, bullet.speed) == (15.0, 3.0, 10.0)
    assert bullet.color == p1.color


def test_fire_ignored_when_paused_or_inactive(make_session):
    session = make_session(two_player=False)
    assert session.fire(2) is None
    session.pause(10.0)
    session.press(Action.P1_FIRE, 10.0)
    assert session.player1.bullets == []


def test_shooting_an_asteroid_scores_and_explodes(make_session):
    session = make_session()
    kills = collect(session, AsteroidDestroyed)
    session.press(Action.P1_FIRE, 0.0)
    session.asteroids = [Asteroid(x=165.0, y=305.0, size=40.0, speed=0.0)]

    session.tick(FRAME)

    assert session.score == 10
    assert len(kills) == 1 and kills[0].player == 1
    assert session.asteroids == []
    assert session.player1.bullets == []
    assert len(session.explosions) == 1

    run_frames(session, 40, start=FRAME)
    assert session.explosions == []


def test_held_keys_move_ships(make_session):
    session = make_session()
    session.press(Action.P1_UP, 0.0)
    session.press(Action.P2_DOWN, 0.0)
    run_frames(session, 2)
    assert session.player1.y == 290.0
    assert session.player2.y == 210.0

    session.release(Action.P1_UP)
    run_frames(session, 1, start=2 * FRAME)
    assert session.player1.y == 290.0


def test_dead_ship_never_moves(make_session):
    session = make_session()
    session.player1.lives = 0
    session.press(Action.P1_UP, 0.0)
    run_frames(session, 5)
    assert session.player1.y == 300.0
    assert not session.game_over


def test_two_player_game_over_needs_both_ships(make_session):
    session = make_session()
    over = collect(session, GameOver)
    p1, p2 = session.ships
    p1.lives = 0
    p2.lives = 2

    run_frames(session, 3)
    assert not session.game_over

    p2.lives = 1
    session.asteroids = [rock_on(p2)]
    now = run_frames(session, 1, start=3 * FRAME)
    assert session.game_over
    assert p2.lives == 0

    assert session.tick(now + FRAME) is False
    run_frames(session, 10, start=now)
    assert len(over) == 1
    assert over[0].frame == 4
    assert not session.score_timer.running
    assert not session.running


def test_single_player_game_over_on_player_one(make_session):
    session = make_session(two_player=False)
    over = collect(session, GameOver)
    session.player1.lives = 1
    session.asteroids = [rock_on(session.player1)]

    session.tick(FRAME)

    assert session.game_over
    assert len(over) == 1
    assert session.pause(2 * FRAME) is False
    assert session.fire(1) is None


def test_score_frozen_after_game_over(make_session):
    session = make_session(two_player=False)
    session.player1.lives = 1
    session.asteroids = [rock_on(session.player1)]
    session.tick(FRAME)
    score = session.score

    session.tick(10000.0)
    assert session.score == score


def test_reset_restores_initial_state(make_session):
    session = make_session()
    p1, p2 = session.ships
    session.press(Action.P1_UP, 0.0)
    session.fire(2)
    run_frames(session, 150)
    session.score = 1234
    session.hearts.append(Heart(x=10.0, y=10.0))
    session.explosions.append(Explosion(x=1.0, y=1.0, size=20.0))
    p1.lives = 0
    p2.lives = 0
    p2.last_hit_time = 99.0
    session.tick(5000.0)
    assert session.game_over

    session.reset(50000.0)

    p1, p2 = session.ships
    assert (p1.x, p1.y, p2.x, p2.y) == (100.0, 300.0, 100.0, 200.0)
    assert session.lives == (3, 3)
    assert p1.bullets == [] and p2.bullets == []
    assert session.asteroids == [] and session.hearts == [] and session.explosions == []
    assert session.score == 0
    assert session.frame_count == 0
    assert session.last_hit_times == {1: None, 2: None}
    assert session.input.held == frozenset()
    assert not session.game_over and not session.paused
    assert session.running
    assert session.score_timer.running
    assert session.game_time(50000.0) == 0.0

    assert session.tick(50016.0)
    assert session.frame_count == 1


def test_reset_while_paused_resumes_play(make_session):
    session = make_session()
    session.pause(100.0)
    session.reset(200.0)
    assert session.running
    assert session.pause_offset == 0.0


def test_verbose_session_logs_lifecycle(capsys):
    session = Session(GameConfig(), NullRenderSink(), NullHudSink(), seed=0, verbose=1)
    session.start(0.0)
    session.pause(10.0)
    session.resume(20.0)
    out = capsys.readouterr().out
    assert "[Session] Started two-player game" in out
    assert "[Session] Paused" in out
    assert "[Session] Resumed" in out


def test_invincible_ship_frozen_when_configured(make_session):
    session = make_session(invincible_blocks_movement=True)
    p1 = session.player1
    session.asteroids = [rock_on(p1)]
    session.tick(16.0)
    assert p1.lives == 2
    assert p1.y == 300.0

    session.press(Action.P1_UP, 16.0)
    for now in (32.0, 1000.0, 2015.0):
        session.tick(now)
        assert p1.y == 300.0

    session.tick(2016.0)  # 2000ms after the hit
    assert p1.y == 295.0


def test_scheduled_until_game_over(make_session):
    session = make_session(two_player=False, start=False)
    assert not session.scheduled

    session.start(0.0)
    assert session.scheduled
    session.pause(10.0)
    assert session.scheduled
    session.resume(20.0)

    session.player1.lives = 1
    session.asteroids = [rock_on(session.player1)]
    session.tick(36.0)
    assert session.game_over
    assert not session.scheduled

    session.reset(100.0)
    assert session.scheduled
