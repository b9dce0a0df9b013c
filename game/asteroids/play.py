"""
Play Asteroid Dodge in an Arcade window

Controls:
    Player 1: Up/Down to move, Enter to fire
    Player 2: W/S to move, Space to fire
    P pause, R restart after game over, Esc quit

Usage:
    python -m game.asteroids.play --single-player --seed 42
"""

import argparse

from .config import GameConfig


def parse_args(argv=None):
    parser = argparse.ArgumentParser(description="Play Asteroid Dodge")
    parser.add_argument("--single-player", action="store_true",
                        help="Only player 1 takes part")
    parser.add_argument("--seed", type=int, default=None,
                        help="Random seed for spawns and the star field")
    parser.add_argument("--invincible-blocks-movement", action="store_true",
                        help="Freeze ships while they are invincible after a hit")
    parser.add_argument("--no-explosions", action="store_true",
                        help="Disable explosion particle bursts")
    parser.add_argument("--verbose", type=int, default=1,
                        help="Verbosity level (0 = silent)")
    return parser.parse_args(argv)


def main(argv=None):
    args = parse_args(argv)
    config = GameConfig.from_dict({
        "two_player": not args.single_player,
        "invincible_blocks_movement": args.invincible_blocks_movement,
        "explosions": not args.no_explosions,
    })

    # Arcade needs a display, so it is only imported when a window is opened
    import arcade
    from .window import AsteroidsWindow

    AsteroidsWindow(config, seed=args.seed, verbose=args.verbose)
    arcade.run()


if __name__ == "__main__":
    main()
