"""Tests for the training and evaluation loops."""
import importlib

import numpy as np
import pytest

from training.reinforcement_learning.test import PLAYERS, make_player, test as evaluate
from training.reinforcement_learning.train import train
from threes.agents import DeepGreedyPlayer, GreedyPlayer, TDLAgent

SMALL_PATTERNS = [(0, 1, 2, 3), (0, 1, 4, 5)]

# the package re-exports train(), which hides the submodule attribute
train_module = importlib.import_module("training.reinforcement_learning.train")


@pytest.fixture
def small_players(monkeypatch):
    """Make train() build small-net players and collect them."""
    players = []

    def make(args=""):
        player = TDLAgent(args, patterns=SMALL_PATTERNS)
        players.append(player)
        return player

    monkeypatch.setattr(train_module, "TDLAgent", make)
    return players


class TestTrain:
    """Test the self-play training loop."""

    def test_train_runs_episodes(self):
        """Test training plays the requested number of episodes."""
        stats = train(total=3, evil_args="seed=1", block=3, verbose=False)
        assert stats.total_episodes == 3
        assert stats.summary()["avg_score"] >= 0

    def test_train_unwritable_save(self, tmp_path, capsys):
        """Test a failed save is reported, not raised."""
        train(total=1, play_args=f"save={tmp_path}", evil_args="seed=2", verbose=False)
        assert "Warning" in capsys.readouterr().out

    def test_train_saves_on_close(self, tmp_path, small_players):
        """Test the configured save path is written when training ends."""
        path = tmp_path / "weights.bin"
        train(total=2, play_args=f"save={path}", evil_args="seed=3", verbose=False)
        assert small_players[0].weights_saved
        loaded = TDLAgent(f"load={path}", patterns=SMALL_PATTERNS)
        assert loaded.weights_loaded
        for trained, restored in zip(small_players[0].net, loaded.net):
            assert np.array_equal(trained.weight, restored.weight)

    def test_train_values_stay_bounded(self, small_players):
        """Test a few hundred episodes at the default rate stay numerically sane."""
        stats = train(total=300, evil_args="seed=0", block=100, verbose=False)
        assert stats.total_episodes == 300
        player = small_players[0]
        for pattern in player.net:
            assert np.all(np.isfinite(pattern.weight))
            assert np.abs(pattern.weight).max() < 1e4
        assert np.any(player.net[0].weight)


class TestEvaluate:
    """Test the evaluation loop."""

    def test_make_player(self):
        """Test the TD player is frozen for evaluation."""
        player = make_player("tdl", "alpha=0.5")
        assert isinstance(player, TDLAgent)
        assert player.alpha == 0.0
        assert isinstance(make_player("greedy"), GreedyPlayer)
        assert isinstance(make_player("deep_greedy", "seed=1"), DeepGreedyPlayer)

    def test_player_registry(self):
        """Test every evaluation player kind is registered."""
        assert sorted(PLAYERS) == ["deep_greedy", "greedy", "random", "tdl"]

    def test_greedy_games(self):
        """Test evaluation statistics of a baseline player."""
        stats = evaluate(kind="greedy", evil_args="seed=4", num_games=2, verbose=False)
        assert stats["episodes"] == 2
        assert stats["max_score"] >= stats["avg_score"] >= 0

    def test_deep_greedy_games(self):
        """Test the rollout player completes evaluation games."""
        stats = evaluate(kind="deep_greedy", play_args="seed=5", evil_args="seed=5",
                         num_games=1, verbose=False)
        assert stats["episodes"] == 1


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
