import numpy as np

from game.asteroids import GameConfig
from game.asteroids.collision import (
    check_bullet_asteroids,
    check_heart_collection,
    check_ship_asteroids,
    resolve_collisions,
)
from game.asteroids.entities import Asteroid, Bullet, Heart, Ship
from game.asteroids.events import AsteroidDestroyed, HeartCollected, ShipHit
from game.asteroids.utils import aabb_overlap

from conftest import rock_on


def test_touching_edges_do_not_overlap():
    a = Asteroid(x=0.0, y=0.0, size=10.0, speed=0.0)
    assert not aabb_overlap(a, Asteroid(x=10.0, y=0.0, size=10.0, speed=0.0))
    assert not aabb_overlap(a, Asteroid(x=0.0, y=10.0, size=10.0, speed=0.0))
    assert aabb_overlap(a, Asteroid(x=9.9, y=9.9, size=10.0, speed=0.0))


def test_full_overlap_costs_one_life():
    ship = Ship(player=1, x=100.0, y=300.0)
    asteroids = [Asteroid(x=100.0, y=300.0, size=40.0, speed=2.0)]
    hit = check_ship_asteroids(ship, asteroids, 16.0, GameConfig())
    assert hit == ShipHit(player=1, lives=2, time=16.0)
    assert ship.lives == 2
    assert ship.last_hit_time == 16.0
    assert asteroids == []


def test_at_most_one_hit_per_tick_newest_asteroid_first():
    ship = Ship(player=1, x=100.0, y=300.0)
    older = Asteroid(x=100.0, y=300.0, size=40.0, speed=0.0)
    newer = Asteroid(x=110.0, y=305.0, size=20.0, speed=0.0)
    asteroids = [older, newer]
    check_ship_asteroids(ship, asteroids, 0.0, GameConfig())
    assert ship.lives == 2
    assert asteroids == [older]


def test_invincible_ship_is_not_hit():
    config = GameConfig()
    ship = Ship(player=1, x=100.0, y=300.0, last_hit_time=0.0, lives=2)
    asteroids = [rock_on(ship)]
    assert check_ship_asteroids(ship, asteroids, 1999.0, config) is None
    assert ship.lives == 2
    assert check_ship_asteroids(ship, asteroids, 2000.0, config) is not None
    assert ship.lives == 1


def test_dead_ship_is_ignored():
    ship = Ship(player=1, x=100.0, y=300.0, lives=0)
    asteroids = [rock_on(ship)]
    assert check_ship_asteroids(ship, asteroids, 0.0, GameConfig()) is None
    assert check_heart_collection(ship, [Heart(x=100.0, y=300.0)]) == []
    assert len(asteroids) == 1


def test_one_asteroid_falls_to_one_bullet():
    ship = Ship(player=1, x=100.0, y=300.0)
    ship.bullets = [Bullet(x=500.0, y=310.0), Bullet(x=505.0, y=312.0)]
    asteroids = [Asteroid(x=500.0, y=300.0, size=40.0, speed=0.0)]

    events = check_bullet_asteroids(ship, asteroids, GameConfig())

    assert len(events) == 1
    assert not asteroids[0].alive
    # The newer bullet takes it, the older one flies on
    assert [b.x for b in ship.bullets] == [500.0]


def test_one_bullet_destroys_one_asteroid_newest_first():
    ship = Ship(player=1, x=100.0, y=300.0)
    ship.bullets = [Bullet(x=500.0, y=310.0)]
    older = Asteroid(x=500.0, y=300.0, size=40.0, speed=0.0)
    newer = Asteroid(x=495.0, y=305.0, size=40.0, speed=0.0)

    events = check_bullet_asteroids(ship, [older, newer], GameConfig())

    assert len(events) == 1
    assert older.alive
    assert not newer.alive
    assert ship.bullets == []


def test_kill_event_carries_asteroid_center_and_size():
    ship = Ship(player=2, x=100.0, y=300.0)
    ship.bullets = [Bullet(x=500.0, y=310.0)]
    asteroids = [Asteroid(x=490.0, y=300.0, size=40.0, speed=0.0)]
    explosions = []

    events = check_bullet_asteroids(ship, asteroids, GameConfig(), np.random.default_rng(0), explosions)

    assert events == [AsteroidDestroyed(player=2, x=510.0, y=320.0, size=40.0, points=10)]
    assert len(explosions) == 1
    assert (explosions[0].x, explosions[0].y, explosions[0].size) == (510.0, 320.0, 40.0)


def test_explosions_can_be_disabled():
    ship = Ship(player=1, x=100.0, y=300.0)
    ship.bullets = [Bullet(x=500.0, y=310.0)]
    explosions = []
    config = GameConfig.from_dict({"explosions": False})
    check_bullet_asteroids(ship, [Asteroid(x=490.0, y=300.0, size=40.0, speed=0.0)], config,
                           np.random.default_rng(0), explosions)
    assert explosions == []


def test_five_hearts_give_five_lives():
    ship = Ship(player=1, x=100.0, y=300.0)
    hearts = [Heart(x=100.0 + i, y=300.0) for i in range(5)]
    events = check_heart_collection(ship, hearts)
    assert ship.lives == 8
    assert hearts == []
    assert [e.lives for e in events] == [4, 5, 6, 7, 8]
    assert all(isinstance(e, HeartCollected) and e.color == ship.color for e in events)


def test_invincible_ship_still_collects_hearts():
    ship = Ship(player=1, x=100.0, y=300.0, last_hit_time=0.0, lives=2)
    check_heart_collection(ship, [Heart(x=120.0, y=310.0)])
    assert ship.lives == 3


def test_player_one_bullet_wins_shared_asteroid(make_session):
    session = make_session()
    p1, p2 = session.ships
    p1.bullets = [Bullet(x=500.0, y=310.0, color=p1.color)]
    p2.bullets = [Bullet(x=502.0, y=315.0, color=p2.color)]
    session.asteroids = [Asteroid(x=500.0, y=300.0, size=40.0, speed=0.0)]

    events = resolve_collisions(session, 0.0)

    kills = [e for e in events if isinstance(e, AsteroidDestroyed)]
    assert [k.player for k in kills] == [1]
    assert session.score == 10
    assert session.asteroids == []
    assert p1.bullets == []
    assert len(p2.bullets) == 1


def test_resolution_order_is_hits_then_kills_then_hearts(make_session):
    session = make_session()
    p1, p2 = session.ships
    session.asteroids = [rock_on(p2)]
    p1.bullets = [Bullet(x=700.0, y=100.0)]
    session.asteroids.append(Asteroid(x=700.0, y=95.0, size=20.0, speed=0.0))
    session.hearts = [Heart(x=p1.x, y=p1.y)]

    events = resolve_collisions(session, 0.0)

    assert [type(e) for e in events] == [ShipHit, AsteroidDestroyed, HeartCollected]
    assert session.lives == (4, 2)


def test_inactive_player_two_is_skipped(make_session):
    session = make_session(two_player=False)
    p2 = session.player2
    session.asteroids = [rock_on(p2)]
    p2.bullets = [Bullet(x=700.0, y=100.0)]
    session.asteroids.append(Asteroid(x=700.0, y=95.0, size=20.0, speed=0.0))

    assert resolve_collisions(session, 0.0) == []
    assert p2.lives == 3
    assert len(session.asteroids) == 2


def test_dead_ship_bullets_do_not_score(make_session):
    session = make_session()
    p1 = session.player1
    p1.lives = 0
    p1.bullets = [Bullet(x=700.0, y=100.0)]
    rock = Asteroid(x=700.0, y=95.0, size=20.0, speed=0.0)
    session.asteroids = [rock]

    events = resolve_collisions(session, 0.0)

    assert not any(isinstance(e, AsteroidDestroyed) for e in events)
    assert rock.alive
    assert session.asteroids == [rock]
    assert session.score == 0
