"""Per-block episode statistics."""
from collections import deque

import numpy as np

from threes.fields.board import tile_value


class EpisodeStatistics:
    """Keeps the last ``block`` episodes and summarises them."""

    def __init__(self, block: int = 1000):
        self.block = block
        self.scores: deque[int] = deque(maxlen=block)
        self.max_tiles: deque[int] = deque(maxlen=block)
        self.steps: deque[int] = deque(maxlen=block)
        self.total_episodes = 0

    def record(self, score: int, max_tile: int, steps: int) -> None:
        self.scores.append(score)
        self.max_tiles.append(max_tile)
        self.steps.append(steps)
        self.total_episodes += 1

    def is_block_end(self) -> bool:
        return self.total_episodes > 0 and self.total_episodes % self.block == 0

    def summary(self) -> dict:
        if not self.scores:
            return {"episodes": self.total_episodes}
        scores = np.asarray(self.scores)
        tiles = np.asarray(self.max_tiles)
        # Fraction of episodes reaching at least each observed tile code
        reach = {
            tile_value(int(code)): float(np.mean(tiles >= code))
            for code in np.unique(tiles)
        }
        return {
            "episodes": self.total_episodes,
            "avg_score": float(scores.mean()),
            "max_score": int(scores.max()),
            "avg_steps": float(np.mean(self.steps)),
            "best_tile": tile_value(int(tiles.max())),
            "tile_rates": reach,
        }

    def format_summary(self) -> str:
        stats = self.summary()
        if "avg_score" not in stats:
            return f"Episode {stats['episodes']:6d} | no data"
        lines = [
            f"Episode {stats['episodes']:6d} | "
            f"Avg Score: {stats['avg_score']:10.1f} | "
            f"Max Score: {stats['max_score']:8d} | "
            f"Avg Steps: {stats['avg_steps']:7.1f}"
        ]
        for value, rate in sorted(stats["tile_rates"].items()):
            lines.append(f"         {value:6d}: {rate * 100:6.2f}%")
        return "\n".join(lines)
