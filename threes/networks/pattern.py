"""N-tuple pattern with isomorphic (rotated/reflected) lookups.

Based on:
- "Temporal Difference Learning of N-Tuple Networks for the Game 2048" by Szubert & Jaskowski
- "Multi-Stage Temporal Difference Learning for 2048" by Wu et al.

Positions follow the board layout::

     0  1  2  3
     4  5  6  7
     8  9 10 11
    12 13 14 15

All isomorphic variants of a pattern index into the same weight table.
"""
from typing import BinaryIO, Sequence

import numpy as np

from threes.fields.board import Board


MAX_TILE_CODES = 16  # 4 bits per cell
IDENTITY_BOARD = 0xFEDCBA9876543210

COUNT_DTYPE = np.dtype("<u4")
WEIGHT_DTYPE = np.dtype("<f4")


class Pattern:
    """One n-tuple feature and its weight table.

    iso:
        1: no isomorphism
        4: rotations
        8: rotations and reflections (default)
    """

    def __init__(self, positions: Sequence[int], iso: int = 8):
        if not positions:
            raise ValueError("no pattern positions defined")
        self.positions = tuple(positions)
        self.weight = np.zeros(MAX_TILE_CODES ** len(self.positions), dtype=np.float32)

        # Reading the pattern positions off a transformed identity board gives
        # the positions each isomorphism samples on the original board.
        self.isom: list[tuple[int, ...]] = []
        for i in range(iso):
            idx = Board(IDENTITY_BOARD)
            if i >= 4:
                idx.mirror()
            idx.rotate(i)
            self.isom.append(tuple(idx.get(p) for p in self.positions))

    def __len__(self) -> int:
        return len(self.weight)

    def indexof(self, isom: Sequence[int], board: Board) -> int:
        raw = board.raw
        index = 0
        for i, pos in enumerate(isom):
            index |= ((raw >> (pos << 2)) & 0x0F) << (i << 2)
        return index

    def indices(self, board: Board) -> list[int]:
        """Weight index of every isomorphism for a board."""
        return [self.indexof(isom, board) for isom in self.isom]

    def estimate(self, board: Board) -> float:
        """Sum of the weights selected by every isomorphism."""
        return float(self.weight[self.indices(board)].sum(dtype=np.float64))

    def update(self, board: Board, delta: float) -> float:
        """Spread delta over the isomorphisms and return the new estimate."""
        np.add.at(self.weight, self.indices(board), delta / len(self.isom))
        return self.estimate(board)

    def name(self) -> str:
        return f"{len(self.positions)}-tuple pattern " + "".join(f"{p:x}" for p in self.positions)

    def write(self, output: BinaryIO) -> None:
        """Write the entry count followed by the weights."""
        output.write(np.array([len(self.weight)], dtype=COUNT_DTYPE).tobytes())
        output.write(self.weight.astype(WEIGHT_DTYPE).tobytes())

    def read(self, source: BinaryIO) -> np.ndarray:
        """Decode a weight table written by ``write`` without installing it."""
        header = source.read(COUNT_DTYPE.itemsize)
        if len(header) != COUNT_DTYPE.itemsize:
            raise ValueError(f"missing entry count for {self.name()}")
        size = int(np.frombuffer(header, dtype=COUNT_DTYPE)[0])
        if size != len(self.weight):
            raise ValueError(
                f"unexpected size {size} for {self.name()} ({len(self.weight)} expected)"
            )
        data = source.read(size * WEIGHT_DTYPE.itemsize)
        if len(data) != size * WEIGHT_DTYPE.itemsize:
            raise ValueError(f"unexpected end of weights for {self.name()}")
        return np.frombuffer(data, dtype=WEIGHT_DTYPE).astype(np.float32)

    def __repr__(self) -> str:
        return f"Pattern({list(self.positions)})"
