"""Agent owning an n-tuple network."""
import os
from typing import Optional, Sequence

import numpy as np

from threes.agents.base import BaseAgent
from threes.fields.board import Board
from threes.networks.pattern import COUNT_DTYPE, Pattern


DEFAULT_PATTERNS = (
    (0, 1, 2, 3, 4, 5),
    (4, 5, 6, 7, 8, 9),
    (0, 1, 2, 4, 5, 6),
    (4, 5, 6, 8, 9, 10),
)


class WeightAgent(BaseAgent):
    """Base agent for agents with weight tables.

    Weights are loaded at construction when ``load=<path>`` is configured
    and written by ``close()`` when ``save=<path>`` is configured. The
    file holds the pattern count followed by each pattern's table.
    """

    def __init__(
        self,
        args: str = "",
        patterns: Optional[Sequence[Sequence[int]]] = None,
        **defaults,
    ):
        super().__init__(args, **defaults)
        self.net: list[Pattern] = [
            Pattern(positions) for positions in (patterns or DEFAULT_PATTERNS)
        ]
        self.alpha = self.config.alpha
        self.weights_loaded = False
        self.weights_saved = False
        if self.config.load is not None:
            self.weights_loaded = self.load_weights(self.config.load)

    def estimate(self, board: Board) -> float:
        """Accumulate the total value of a board."""
        return sum(p.estimate(board) for p in self.net)

    def update(self, board: Board, u: float) -> float:
        """Split u evenly over the net and return the board's new value."""
        u_split = u / len(self.net)
        return sum(p.update(board, u_split) for p in self.net)

    def load_weights(self, path: str) -> bool:
        """Load every table from a file.

        Returns:
            False, keeping the current weights, if the file is missing
            or does not match this net
        """
        try:
            with open(path, "rb") as f:
                header = f.read(COUNT_DTYPE.itemsize)
                if len(header) != COUNT_DTYPE.itemsize:
                    return False
                if int(np.frombuffer(header, dtype=COUNT_DTYPE)[0]) != len(self.net):
                    return False
                tables = [p.read(f) for p in self.net]
        except (OSError, ValueError):
            return False

        for p, table in zip(self.net, tables):
            p.weight = table
        return True

    def save_weights(self, path: str) -> bool:
        """Write every table to a file; returns False if it cannot be opened."""
        directory = os.path.dirname(path)
        try:
            if directory:
                os.makedirs(directory, exist_ok=True)
            with open(path, "wb") as f:
                f.write(np.array([len(self.net)], dtype=COUNT_DTYPE).tobytes())
                for p in self.net:
                    p.write(f)
        except OSError:
            return False
        return True

    def close(self) -> None:
        """Write the weights to the configured save path, if any."""
        if self.config.save is not None:
            self.weights_saved = self.save_weights(self.config.save)

    def get_memory_usage_mb(self) -> float:
        """Get approximate memory usage in MB."""
        return sum(p.weight.nbytes for p in self.net) / (1024 * 1024)
