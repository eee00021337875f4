"""Base agent class."""
from abc import ABC, abstractmethod

from threes.fields.actions import Action
from threes.fields.board import Board
from threes.utils.config import AgentConfig


class BaseAgent(ABC):
    """Abstract base class for players and environments."""

    def __init__(self, args: str = "", **defaults):
        self.config = AgentConfig.parse(args, **defaults)

    def open_episode(self) -> None:
        pass

    def close_episode(self) -> None:
        pass

    @abstractmethod
    def take_action(self, board: Board) -> Action:
        """
        Select an action.

        Args:
            board: Current board

        Returns:
            The chosen action, or ``Action()`` when nothing is legal
        """
        pass

    def close(self) -> None:
        """Release resources at the end of a session."""
        pass

    @property
    def name(self) -> str:
        return self.config.name

    @property
    def role(self) -> str:
        return self.config.role
