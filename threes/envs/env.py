"""Threes Gym Environment."""
from typing import Any, Optional

import gymnasium as gym
import numpy as np
from gymnasium import spaces

from threes.fields.actions import Direction, NUM_ACTIONS
from threes.fields.board import ILLEGAL, NUM_COLUMNS, NUM_ROWS
from threes.fields.game import Game
from threes.fields.spawner import TileSpawner


class ThreesEnv(gym.Env):
    """
    Gymnasium environment for the packed-board Threes game.

    Observation:
        4x4 board of tile codes (0 for empty, 1-3 literal, >=4 doubled)

    Actions:
        0: UP
        1: RIGHT
        2: DOWN
        3: LEFT

    Reward:
        Merge reward of the slide. An illegal slide leaves the board
        unchanged, yields 0 and sets ``info["illegal"]``.
    """

    metadata = {"render_modes": ["human", "ansi"], "render_fps": 4}

    def __init__(self, render_mode: Optional[str] = None):
        super().__init__()

        self.game = Game()
        self.render_mode = render_mode

        self.observation_space = spaces.Box(
            low=0,
            high=15,
            shape=(NUM_ROWS, NUM_COLUMNS),
            dtype=np.int8,
        )
        self.action_space = spaces.Discrete(NUM_ACTIONS)

    def reset(
        self,
        *,
        seed: Optional[int] = None,
        options: Optional[dict[str, Any]] = None,
    ) -> tuple[np.ndarray, dict[str, Any]]:
        """Reset the environment."""
        super().reset(seed=seed)

        self.game.spawner = TileSpawner(rng=self.np_random)
        self.game.reset()
        observation = self._get_obs()
        info = self._get_info()

        if self.render_mode == "human":
            self._render_human()

        return observation, info

    def step(
        self, action: int
    ) -> tuple[np.ndarray, float, bool, bool, dict[str, Any]]:
        """
        Execute one step in the environment.

        Args:
            action: The action to take (0=UP, 1=RIGHT, 2=DOWN, 3=LEFT)

        Returns:
            observation: Current board state
            reward: Merge reward of this slide
            terminated: Whether no legal slide remains
            truncated: Always False (no time limit)
            info: Additional information
        """
        reward, game_over = self.game.step(Direction(action))

        info = self._get_info()
        info["illegal"] = reward == ILLEGAL

        if self.render_mode == "human":
            self._render_human()

        return self._get_obs(), float(max(reward, 0)), game_over, False, info

    def _get_obs(self) -> np.ndarray:
        return np.array(self.game.board.to_list(), dtype=np.int8)

    def _get_info(self) -> dict[str, Any]:
        return {
            "score": self.game.score,
            "max_tile": self.game.max_tile(),
            "legal_actions": [d.value for d in self.game.legal_actions()],
        }

    def render(self) -> Optional[str]:
        """Render the environment."""
        if self.render_mode == "ansi":
            return self.game.render()
        elif self.render_mode == "human":
            self._render_human()
        return None

    def _render_human(self) -> None:
        print("\033[2J\033[H")  # Clear screen
        print(self.game.render())

