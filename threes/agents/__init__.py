from threes.agents.base import BaseAgent
from threes.agents.players import DeepGreedyPlayer, GreedyPlayer, RandomPlayer
from threes.agents.tdl import TDLAgent
from threes.agents.weight import DEFAULT_PATTERNS, WeightAgent

__all__ = [
    "BaseAgent",
    "DeepGreedyPlayer",
    "GreedyPlayer",
    "RandomPlayer",
    "TDLAgent",
    "DEFAULT_PATTERNS",
    "WeightAgent",
]
