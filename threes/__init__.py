"""threes-tdl - TD-learning n-tuple player for a Threes-style sliding game."""

__version__ = "0.1.0"

from threes.fields import Action, Board, Direction, Game
from threes.agents import TDLAgent

__all__ = [
    "Action",
    "Board",
    "Direction",
    "Game",
    "TDLAgent",
]
