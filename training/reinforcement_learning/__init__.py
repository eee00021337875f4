"""Reinforcement learning training modules."""

from .train import train, play_episode, main as train_main
from .test import test, main as test_main

__all__ = [
    "train",
    "play_episode",
    "train_main",
    "test",
    "test_main",
]
