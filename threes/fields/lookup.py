"""Precomputed row transform table.

Every 16-bit row (4 cells x 4 bits, cell j at bits 4j) is mapped to the
row obtained by sliding it left once, together with the reward earned.
A slide resolves at most one event per row, scanning from the left:

- an empty cell followed by a tile: the tile shifts into the gap
- a 1 next to a 2 (either order): they merge into a 3, reward 3
- two equal tiles with code > 2: they merge into code + 1, and the
  reward is the displayed value of the merged tile, 3 * 2^(code + 1 - 3)

Cells to the right of the event shift left by one position.
"""
import threading
from typing import Optional

import numpy as np


NUM_ROWS_VALUES = 1 << 16
MAX_TILE_CODE = 15


def _slide_rows_left(rows: np.ndarray) -> tuple[np.ndarray, np.ndarray]:
    """Slide a batch of packed rows left.

    Args:
        rows: 1-D array of packed 16-bit rows

    Returns:
        (slid rows, rewards)
    """
    rows = rows.astype(np.int64)
    cells = np.stack([(rows >> (4 * j)) & 0x0F for j in range(4)], axis=1)
    result = cells.copy()
    reward = np.zeros(len(rows), dtype=np.int64)
    # Column of the first event, 4 when nothing happens
    stop = np.full(len(rows), 4, dtype=np.int64)
    pending = np.ones(len(rows), dtype=bool)

    for c in range(3):
        cur, nxt = cells[:, c], cells[:, c + 1]
        shift = pending & (cur == 0) & (nxt != 0)
        small = pending & ~shift & (cur <= 2) & (cur + nxt == 3)
        big = pending & ~shift & ~small & (cur > 2) & (cur == nxt) & (cur < MAX_TILE_CODE)

        result[shift, c] = nxt[shift]
        result[small, c] = 3
        reward[small] = 3
        result[big, c] = cur[big] + 1
        reward[big] = 3 << (cur[big] - 2)

        hit = shift | small | big
        stop[hit] = c
        pending &= ~hit

    for c in range(1, 4):
        tail = stop < c
        result[tail, c] = cells[tail, c + 1] if c < 3 else 0

    packed = sum(result[:, j] << (4 * j) for j in range(4))
    return packed, reward


class RowTransformTable:
    """Slide-left result and reward for all 65536 rows.

    The table is immutable after construction and can be shared by any
    number of boards.
    """

    def __init__(self):
        left, reward = _slide_rows_left(np.arange(NUM_ROWS_VALUES, dtype=np.int64))
        self._left_array = left.astype(np.uint16)
        self._reward_array = reward.astype(np.int32)
        self._left_array.setflags(write=False)
        self._reward_array.setflags(write=False)
        # Python lists make single-row lookups much cheaper than numpy indexing
        self.left: list[int] = self._left_array.tolist()
        self.reward: list[int] = self._reward_array.tolist()

    def __len__(self) -> int:
        return len(self.left)

    def find(self, row: int) -> tuple[int, int]:
        """Return (slid row, reward) for a packed row."""
        return self.left[row], self.reward[row]

    @property
    def left_array(self) -> np.ndarray:
        return self._left_array

    @property
    def reward_array(self) -> np.ndarray:
        return self._reward_array


_table: Optional[RowTransformTable] = None
_table_lock = threading.Lock()


def get_row_table() -> RowTransformTable:
    """Return the process-wide table, building it on first use."""
    global _table
    if _table is None:
        with _table_lock:
            if _table is None:
                _table = RowTransformTable()
    return _table
