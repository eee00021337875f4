"""Threes-style game logic on top of the packed board."""
from typing import Optional

from threes.fields.spawner import INITIAL_TILES, TileSpawner
from threes.fields.actions import Direction
from threes.fields.board import ILLEGAL, Board


class Game:
    """Board, cumulative score and tile spawning for one episode at a time."""

    def __init__(self, seed: Optional[int] = None, spawner: Optional[TileSpawner] = None):
        self.board: Board = Board()
        self.score: int = 0
        self.steps: int = 0
        self.spawner = spawner if spawner is not None else TileSpawner(seed)
        self._game_over: bool = False

    def reset(self) -> Board:
        """Reset the game and return the initial board."""
        self.board = Board()
        self.score = 0
        self.steps = 0
        for step in range(INITIAL_TILES):
            self.spawner.init_action(step).apply(self.board)
        self._game_over = self._check_game_over()
        return self.board.copy()

    def step(self, direction: Direction) -> tuple[int, bool]:
        """
        Execute a slide.

        Args:
            direction: The direction to slide

        Returns:
            tuple of (reward, game_over); reward is -1 for an illegal slide
        """
        if self._game_over:
            return ILLEGAL, True

        reward = self.board.slide(direction)
        if reward != ILLEGAL:
            self.score += reward
            self.steps += 1
            self.spawner.take_action(self.board, direction).apply(self.board)

        self._game_over = self._check_game_over()
        return reward, self._game_over

    def _check_game_over(self) -> bool:
        return not self.legal_actions()

    def is_game_over(self) -> bool:
        return self._game_over

    def legal_actions(self) -> list[Direction]:
        """Directions whose slide changes the board."""
        return [d for d in Direction if self.board.copy().slide(d) != ILLEGAL]

    def max_tile(self) -> int:
        """Highest tile code on the board."""
        return self.board.max_tile()

    def render(self) -> str:
        return f"{self.board}\nScore: {self.score}"
