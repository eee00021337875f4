"""Baseline players."""
import numpy as np

from threes.agents.base import BaseAgent
from threes.fields.actions import Action, Direction
from threes.fields.board import ILLEGAL, Board
from threes.fields.spawner import SearchSpawner


class RandomPlayer(BaseAgent):
    """Select a legal slide uniformly at random."""

    def __init__(self, args: str = "", **kwargs):
        kwargs.setdefault("name", "random")
        kwargs.setdefault("role", "player")
        super().__init__(args, **kwargs)
        self.rng = np.random.default_rng(self.config.seed)

    def take_action(self, board: Board) -> Action:
        for op in self.rng.permutation(len(Direction)):
            if board.copy().slide(int(op)) != ILLEGAL:
                return Action.slide(int(op))
        return Action()


class GreedyPlayer(BaseAgent):
    """Select the slide with the highest immediate reward."""

    def __init__(self, args: str = "", **kwargs):
        kwargs.setdefault("name", "greedy")
        kwargs.setdefault("role", "player")
        super().__init__(args, **kwargs)

    def take_action(self, board: Board) -> Action:
        rewards = [board.copy().slide(op) for op in Direction]
        best = max(range(len(rewards)), key=rewards.__getitem__)
        if rewards[best] == ILLEGAL:
            return Action()
        return Action.slide(best)


class DeepGreedyPlayer(BaseAgent):
    """Greedy player that scores each first slide by a short greedy rollout.

    After a first slide, the search spawner places a tile and the greedy
    player continues for ``depth`` more slides (``depth=3`` by default);
    the rollout's total reward ranks the first slide.
    """

    def __init__(self, args: str = "", **kwargs):
        kwargs.setdefault("name", "deep_greedy")
        kwargs.setdefault("role", "player")
        super().__init__(args, **kwargs)
        self.depth = int(self.config.extras.get("depth", 3))
        self.env = SearchSpawner(seed=self.config.seed)
        self.player = GreedyPlayer()

    def rollout(self, board: Board, op: int) -> int:
        """Total reward of slide op followed by a greedy rollout, or -1."""
        cur = board.copy()
        total = cur.slide(op)
        if total == ILLEGAL:
            return ILLEGAL
        self.env.reset()
        last = op
        for _ in range(self.depth):
            self.env.take_action(cur, last).apply(cur)
            move = self.player.take_action(cur)
            reward = move.apply(cur)
            if reward == ILLEGAL:
                break
            total += reward
            last = move.direction
        return total

    def take_action(self, board: Board) -> Action:
        rewards = [self.rollout(board, op) for op in Direction]
        best = max(range(len(rewards)), key=rewards.__getitem__)
        if rewards[best] == ILLEGAL:
            return Action()
        return Action.slide(best)
