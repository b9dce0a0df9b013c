"""
Evaluation script for baseline policies on the asteroids environment
Runs seeded episodes headlessly and writes per-episode metrics to CSV.
"""

import argparse
from typing import Callable, Dict, List, Optional, Sequence

import numpy as np

from game.asteroids import AsteroidsEnv
from rl.configs.asteroids_config import ENV_CONFIG, EVAL_CONFIG, reward_params
from rl.metrics import EpisodeRecorder

# Observation layout (see AsteroidsEnv._get_obs)
OBS_SHIP_Y = 0
OBS_FIRST_ASTEROID = 4
OBS_PADDING = -1.0  # size and speed of empty asteroid slots


def dodge_policy(obs: np.ndarray, k_asteroids: int = 5) -> np.ndarray:
    """
    Scripted baseline: shoot what is in the lane, step away from the
    nearest asteroid that is still ahead of the ship.
    """
    move, shoot = 0, 0
    ship_y = obs[OBS_SHIP_Y]

    for i in range(k_asteroids):
        dx, dy, size, _ = obs[OBS_FIRST_ASTEROID + 4 * i: OBS_FIRST_ASTEROID + 4 * i + 4]
        if size <= OBS_PADDING:
            break  # padding, no more asteroids
        if dx < 0:
            continue  # already behind the ship
        if abs(dy) < 0.05:
            shoot = 1
        if dx < 0.25 and abs(dy) < 0.1:
            # Move away, unless pinned against the edge
            if dy >= 0:
                move = 1 if ship_y > -0.95 else 2
            else:
                move = 2 if ship_y < 0.95 else 1
            break

    return np.array([move, shoot], dtype=np.int64)


def make_policy(name: str, env: AsteroidsEnv) -> Callable[[np.ndarray], np.ndarray]:
    if name == "random":
        return lambda obs: env.action_space.sample()
    if name == "dodge":
        return lambda obs: dodge_policy(obs, env.k_asteroids)
    raise ValueError(f"Unknown policy: {name}")


def evaluate_policy(
    policy_name: str = "dodge",
    n_episodes: int = 10,
    seed: Optional[int] = 42,
    reward_config: str = "baseline",
    log_dir: Optional[str] = None,
    render: bool = False,
    verbose: int = 1,
    run_name: Optional[str] = None,
) -> Dict[str, float]:
    """
    Evaluate a baseline policy

    Args:
        policy_name: 'random' or 'dodge'
        n_episodes: Number of episodes to evaluate
        seed: Seed of the first episode; episode i uses seed + i
        reward_config: Name of the reward shaping config
        log_dir: Directory for the CSV log (None to skip writing)
        render: Whether to open an Arcade window
        verbose: Verbosity level
        run_name: CSV file prefix (default: <policy>_<reward_config>)
    """
    env = AsteroidsEnv(
        render_mode="human" if render else None,
        rewards=reward_params(reward_config),
        **ENV_CONFIG,
    )
    policy = make_policy(policy_name, env)
    recorder = EpisodeRecorder(
        log_dir or ".", run_name or f"{policy_name}_{reward_config}", verbose=verbose
    )
    if log_dir is not None:
        recorder.open()

    for episode in range(n_episodes):
        ep_seed = seed + episode if seed is not None else None
        obs, info = env.reset(seed=ep_seed)
        if ep_seed is not None:
            env.action_space.seed(ep_seed)

        terminated = False
        truncated = False
        while not (terminated or truncated):
            obs, reward, terminated, truncated, info = env.step(policy(obs))
            recorder.record_step(reward, info)

        row = recorder.end_episode(ep_seed, info)
        if verbose > 0:
            print(f"Episode {episode + 1}/{n_episodes}: "
                  f"Reward = {row['reward']:.2f}, Length = {row['length']}, Score = {row['score']}")

    env.close()
    recorder.close()

    summary = recorder.get_summary()
    if verbose > 0:
        print("\n" + "=" * 50)
        print(f"Evaluation Results ({policy_name}, {n_episodes} episodes):")
        print(f"Mean Reward: {summary['mean_reward']:.2f} ± {summary['std_reward']:.2f}")
        print(f"Mean Episode Length: {summary['mean_length']:.1f}")
        print(f"Mean Score: {summary['mean_score']:.1f}")
        print("=" * 50)

    return summary


def evaluate_seeds(
    policy_name: str = "dodge",
    seeds: Sequence[int] = tuple(EVAL_CONFIG["seeds"]),
    n_episodes: int = EVAL_CONFIG["n_episodes"],
    reward_config: str = "baseline",
    log_dir: Optional[str] = None,
    verbose: int = 1,
) -> List[Dict[str, float]]:
    """Evaluate a policy once per base seed, one CSV per seed"""
    summaries = []
    for seed in seeds:
        summary = evaluate_policy(
            policy_name=policy_name,
            n_episodes=n_episodes,
            seed=seed,
            reward_config=reward_config,
            log_dir=log_dir,
            verbose=verbose,
            run_name=f"{policy_name}_{reward_config}_seed{seed}",
        )
        summaries.append(summary)

    if verbose > 0:
        means = [s["mean_reward"] for s in summaries]
        print(f"\nMean reward across seeds {list(seeds)}: {np.mean(means):.2f} ± {np.std(means):.2f}")

    return summaries


def main(argv=None):
    parser = argparse.ArgumentParser(description="Evaluate baseline policies on AsteroidsEnv")
    parser.add_argument(
        "--policy",
        type=str,
        default="dodge",
        choices=EVAL_CONFIG["policies"],
        help="Policy to evaluate (default: dodge)",
    )
    parser.add_argument(
        "--n-episodes",
        type=int,
        default=EVAL_CONFIG["n_episodes"],
        help="Number of evaluation episodes",
    )
    parser.add_argument(
        "--seed",
        type=int,
        default=42,
        help="Random seed (default: 42)",
    )
    parser.add_argument(
        "--all-seeds",
        action="store_true",
        help=f"Evaluate once per seed in {EVAL_CONFIG['seeds']} instead of --seed",
    )
    parser.add_argument(
        "--reward-config",
        type=str,
        default="baseline",
        choices=["baseline", "survival", "aggressive"],
        help="Reward shaping config (default: baseline)",
    )
    parser.add_argument(
        "--log-dir",
        type=str,
        default=EVAL_CONFIG["log_dir"],
        help="Directory for the episode CSV",
    )
    parser.add_argument(
        "--render",
        action="store_true",
        help="Watch the episodes in an Arcade window",
    )
    parser.add_argument(
        "--compare-random",
        action="store_true",
        help="Also evaluate the random policy for comparison",
    )

    args = parser.parse_args(argv)

    if args.all_seeds:
        evaluate_seeds(
            policy_name=args.policy,
            n_episodes=args.n_episodes,
            reward_config=args.reward_config,
            log_dir=args.log_dir,
        )
        return

    results = evaluate_policy(
        policy_name=args.policy,
        n_episodes=args.n_episodes,
        seed=args.seed,
        reward_config=args.reward_config,
        log_dir=args.log_dir,
        render=args.render,
    )

    if args.compare_random and args.policy != "random":
        print("\n")
        random_results = evaluate_policy(
            policy_name="random",
            n_episodes=args.n_episodes,
            seed=args.seed,
            reward_config=args.reward_config,
            log_dir=args.log_dir,
        )
        improvement = results["mean_reward"] - random_results["mean_reward"]
        print(f"\nImprovement over random: {improvement:.2f}")


if __name__ == "__main__":
    main()
