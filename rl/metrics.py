"""
Per-episode metrics recorder for environment evaluation.
Records: reward, length, score, asteroids shot, lives lost, hearts collected.
Saves to CSV for easy plotting.
"""

import os
import csv
from typing import Any, Dict, List, Optional

import numpy as np


class EpisodeRecorder:
    """Accumulates step infos into episode rows and writes them to CSV"""

    FIELDS = ["episode", "seed", "reward", "length", "score", "kills", "hits", "hearts", "game_over"]

    def __init__(self, log_dir: str, run_name: str, verbose: int = 1):
        self.log_dir = log_dir
        self.run_name = run_name
        self.verbose = verbose

        self.rows: List[Dict[str, Any]] = []

        # Current episode accumulators
        self._reward = 0.0
        self._length = 0
        self._kills = 0.0
        self._hits = 0.0
        self._hearts = 0.0

        self.csv_path: Optional[str] = None
        self.csv_file = None
        self.csv_writer = None

    def open(self) -> None:
        os.makedirs(self.log_dir, exist_ok=True)
        self.csv_path = os.path.join(self.log_dir, f"{self.run_name}_episodes.csv")
        self.csv_file = open(self.csv_path, "w", newline="")
        self.csv_writer = csv.DictWriter(self.csv_file, fieldnames=self.FIELDS)
        self.csv_writer.writeheader()
        self.csv_file.flush()

        if self.verbose > 0:
            print(f"[EpisodeRecorder] Logging to {self.csv_path}")

    def record_step(self, reward: float, info: Dict[str, Any]) -> None:
        self._reward += reward
        self._length += 1
        self._kills += info.get("kills", 0.0)
        self._hits += info.get("hits", 0.0)
        self._hearts += info.get("hearts", 0.0)

    def end_episode(self, seed: Optional[int], info: Dict[str, Any]) -> Dict[str, Any]:
        row = {
            "episode": len(self.rows) + 1,
            "seed": seed,
            "reward": round(self._reward, 4),
            "length": self._length,
            "score": info.get("score", 0),
            "kills": int(self._kills),
            "hits": int(self._hits),
            "hearts": int(self._hearts),
            "game_over": bool(info.get("game_over", False)),
        }
        self.rows.append(row)

        if self.csv_writer:
            self.csv_writer.writerow(row)
            self.csv_file.flush()

        self._reward = 0.0
        self._length = 0
        self._kills = self._hits = self._hearts = 0.0
        return row

    def close(self) -> None:
        if self.csv_file:
            self.csv_file.close()
            self.csv_file = None
            if self.verbose > 0:
                print(f"[EpisodeRecorder] Saved {len(self.rows)} episodes to {self.csv_path}")

    def get_summary(self) -> Dict[str, Any]:
        """Get summary statistics."""
        if not self.rows:
            return {}

        rewards = [r["reward"] for r in self.rows]
        return {
            "mean_reward": float(np.mean(rewards)),
            "std_reward": float(np.std(rewards)),
            "mean_length": float(np.mean([r["length"] for r in self.rows])),
            "mean_score": float(np.mean([r["score"] for r in self.rows])),
            "mean_kills": float(np.mean([r["kills"] for r in self.rows])),
            "total_episodes": len(self.rows),
        }
