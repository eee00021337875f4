"""Tile-spawning environment agent."""
from typing import Optional

import numpy as np

from threes.fields.actions import Action, Direction
from threes.fields.board import NUM_SQUARES, Board


INITIAL_TILES = 9

# Edge that receives the new tile after a slide toward each direction
SPAWN_EDGES = {
    Direction.UP: (12, 13, 14, 15),
    Direction.RIGHT: (0, 4, 8, 12),
    Direction.DOWN: (0, 1, 2, 3),
    Direction.LEFT: (3, 7, 11, 15),
}


def empty_edge_cell(after: Board, direction: int, rng: np.random.Generator) -> Optional[int]:
    """A random empty cell on the edge opposite to a slide, or None."""
    edge = list(SPAWN_EDGES[Direction(direction)])
    rng.shuffle(edge)
    for pos in edge:
        if after.get(pos) == 0:
            return pos
    return None


class TileBag:
    """Draws tile codes 1, 2, 3 without replacement, refilling when empty."""

    def __init__(self, rng: np.random.Generator):
        self.rng = rng
        self._bag: list[int] = []

    def reset(self) -> None:
        self._bag = []

    def draw(self) -> int:
        if not self._bag:
            self._bag = [int(t) for t in self.rng.permutation([1, 2, 3])]
        return self._bag.pop()


class TileSpawner:
    """Places new tiles: 9 at the start, then one after every slide."""

    def __init__(self, seed: Optional[int] = None, rng: Optional[np.random.Generator] = None):
        self.rng = rng if rng is not None else np.random.default_rng(seed)
        self.bag = TileBag(self.rng)
        self._init_space: list[int] = list(range(NUM_SQUARES))

    def init_action(self, step: int) -> Action:
        """Placement for the given step of the opening phase."""
        if step == 0:
            self.bag.reset()
            self._init_space = [int(p) for p in self.rng.permutation(NUM_SQUARES)]
        return Action.place(self._init_space[step], self.bag.draw())

    def take_action(self, after: Board, direction: int) -> Action:
        """Placement on the edge opposite to the last slide, or a no-op."""
        pos = empty_edge_cell(after, direction, self.rng)
        if pos is None:
            return Action()
        return Action.place(pos, self.bag.draw())


class SearchSpawner:
    """Tile placement for lookahead search.

    Any tile still in the bag may appear; the bag is not consumed by
    placements, only by ``remove``.
    """

    def __init__(self, seed: Optional[int] = None, rng: Optional[np.random.Generator] = None):
        self.rng = rng if rng is not None else np.random.default_rng(seed)
        self.bag: list[int] = [1, 2, 3]

    def reset(self) -> None:
        self.bag = [1, 2, 3]

    def remove(self, tile: int) -> None:
        """Drop a tile known to be drawn already."""
        if not self.bag:
            self.reset()
        self.bag = [t for t in self.bag if t != tile]

    def take_action(self, after: Board, direction: int) -> Action:
        pos = empty_edge_cell(after, direction, self.rng)
        if pos is None:
            return Action()
        if not self.bag:
            self.reset()
        return Action.place(pos, int(self.rng.choice(self.bag)))
