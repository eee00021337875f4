"""Tests for weight agents, the TD learner and baseline players."""
import numpy as np
import pytest

from threes.agents import (
    DEFAULT_PATTERNS, DeepGreedyPlayer, GreedyPlayer, RandomPlayer, TDLAgent,
)
from threes.fields import Action, Board, Direction, Game
from threes.networks import Pattern
from training.reinforcement_learning.train import play_episode

SMALL_PATTERNS = [(0, 1, 2, 3), (0, 1, 4, 5)]


def board_from_rows(rows):
    board = Board()
    for r, cells in enumerate(rows):
        for c, code in enumerate(cells):
            board.set(r * 4 + c, code)
    return board


def blocked_board():
    return board_from_rows([
        [1, 3, 1, 3],
        [3, 1, 3, 1],
        [1, 3, 1, 3],
        [3, 1, 3, 1],
    ])


def sample_board():
    return board_from_rows([
        [1, 2, 0, 3],
        [0, 4, 0, 0],
        [2, 0, 5, 1],
        [0, 0, 0, 3],
    ])


class TestWeightAgent:
    """Test ensemble estimation, updates and persistence."""

    def test_default_net(self):
        """Test the default ensemble of four 6-tuples."""
        agent = TDLAgent()
        assert [p.positions for p in agent.net] == list(DEFAULT_PATTERNS)
        assert all(len(p) == 16 ** 6 for p in agent.net)
        assert agent.alpha == pytest.approx(0.1)

    def test_estimate_sums_patterns(self):
        """Test the value is the sum of pattern estimates."""
        agent = TDLAgent(patterns=SMALL_PATTERNS)
        board = sample_board()
        agent.net[0].update(board, 1.0)
        agent.net[1].update(board, 2.0)
        expected = agent.net[0].estimate(board) + agent.net[1].estimate(board)
        assert agent.estimate(board) == pytest.approx(expected)

    def test_update_splits_evenly(self):
        """Test the update is divided across the ensemble."""
        agent = TDLAgent(patterns=SMALL_PATTERNS)
        board = sample_board()
        value = agent.update(board, 4.0)

        reference = [Pattern(p) for p in SMALL_PATTERNS]
        for p in reference:
            p.update(board, 2.0)
        assert value == pytest.approx(sum(p.estimate(board) for p in reference))
        assert value == pytest.approx(agent.estimate(board))

    def test_positive_update_increases_estimate(self):
        """Test TD update sign property."""
        agent = TDLAgent(patterns=SMALL_PATTERNS)
        board = sample_board()
        before = agent.estimate(board)
        agent.update(board, 0.1)
        assert agent.estimate(board) > before

    def test_save_load_round_trip(self, tmp_path):
        """Test saved weights reproduce estimates."""
        path = tmp_path / "weights.bin"
        agent = TDLAgent(patterns=SMALL_PATTERNS)
        boards = [sample_board(), blocked_board()]
        agent.update(boards[0], 3.0)
        agent.update(boards[1], -1.5)
        assert agent.save_weights(str(path))

        loaded = TDLAgent(f"load={path}", patterns=SMALL_PATTERNS)
        assert loaded.weights_loaded
        for board in boards + [Board()]:
            assert loaded.estimate(board) == agent.estimate(board)

    def test_file_layout(self, tmp_path):
        """Test the pattern count header and per-pattern tables."""
        path = tmp_path / "weights.bin"
        agent = TDLAgent(patterns=SMALL_PATTERNS)
        agent.save_weights(str(path))
        data = path.read_bytes()
        assert int.from_bytes(data[:4], "little") == 2
        assert int.from_bytes(data[4:8], "little") == 16 ** 4
        assert len(data) == 4 + 2 * (4 + 4 * 16 ** 4)

    def test_close_saves_when_configured(self, tmp_path):
        """Test close() writes to the save path."""
        path = tmp_path / "out" / "weights.bin"
        agent = TDLAgent(f"save={path}", patterns=SMALL_PATTERNS)
        agent.update(sample_board(), 1.0)
        agent.close()
        assert agent.weights_saved
        assert path.exists()

        loaded = TDLAgent(f"load={path}", patterns=SMALL_PATTERNS)
        assert loaded.estimate(sample_board()) == agent.estimate(sample_board())

    def test_missing_file_keeps_zero_weights(self, tmp_path):
        """Test an absent weight file is ignored."""
        agent = TDLAgent(f"load={tmp_path / 'missing.bin'}", patterns=SMALL_PATTERNS)
        assert not agent.weights_loaded
        assert agent.estimate(sample_board()) == 0.0

    def test_malformed_file_keeps_zero_weights(self, tmp_path):
        """Test truncated or mismatched files leave defaults."""
        short = tmp_path / "short.bin"
        short.write_bytes(b"\x02\x00")
        agent = TDLAgent(f"load={short}", patterns=SMALL_PATTERNS)
        assert not agent.weights_loaded

        other = tmp_path / "other.bin"
        source = TDLAgent(patterns=SMALL_PATTERNS)
        source.update(sample_board(), 5.0)
        source.save_weights(str(other))
        bigger = TDLAgent(f"load={other}", patterns=SMALL_PATTERNS + [(0, 4, 8, 12)])
        assert not bigger.weights_loaded
        assert bigger.estimate(sample_board()) == 0.0

        truncated = tmp_path / "truncated.bin"
        truncated.write_bytes(other.read_bytes()[:-100])
        partial = TDLAgent(f"load={truncated}", patterns=SMALL_PATTERNS)
        assert not partial.weights_loaded
        assert partial.estimate(sample_board()) == 0.0

    def test_unwritable_save_is_skipped(self, tmp_path):
        """Test saving to a directory path fails quietly."""
        agent = TDLAgent(patterns=SMALL_PATTERNS)
        assert agent.save_weights(str(tmp_path)) is False

    def test_memory_usage(self):
        """Test table memory accounting."""
        agent = TDLAgent(patterns=SMALL_PATTERNS)
        assert agent.get_memory_usage_mb() == pytest.approx(2 * 16 ** 4 * 4 / (1024 * 1024))


class TestTDLAgent:
    """Test action selection and the backward TD pass."""

    def test_ties_break_in_direction_order(self):
        """Test the first maximal direction wins with zero weights."""
        agent = TDLAgent(patterns=SMALL_PATTERNS)
        board = Board()
        board.place(0, 1)
        # only RIGHT and DOWN are legal, both worth 0
        action = agent.take_action(board)
        assert action == Action.slide(Direction.RIGHT)
        assert len(agent.trajectory) == 1

        step = agent.trajectory[0]
        expected = board.copy()
        expected.slide(Direction.RIGHT)
        assert step.before == board
        assert step.after == expected
        assert step.op == Direction.RIGHT
        assert step.reward == 0.0
        assert step.value == 0.0

    def test_prefers_reward(self):
        """Test immediate reward drives the choice with zero weights."""
        agent = TDLAgent(patterns=SMALL_PATTERNS)
        board = Board()
        board.place(0, 1)
        board.place(1, 2)
        assert agent.take_action(board) == Action.slide(Direction.LEFT)
        assert agent.trajectory[0].reward == 3.0
        assert agent.trajectory[0].value == pytest.approx(3.0)

    def test_prefers_higher_valued_afterstate(self):
        """Test learned values steer the choice."""
        agent = TDLAgent(patterns=[(4,)])
        agent.net[0].isom = [(4,)]
        board = Board()
        board.place(0, 1)
        down = board.copy()
        down.slide(Direction.DOWN)
        agent.update(down, 10.0)
        assert agent.take_action(board) == Action.slide(Direction.DOWN)
        assert agent.trajectory[0].value == pytest.approx(agent.estimate(down))

    def test_does_not_mutate_input(self):
        """Test action selection works on copies."""
        agent = TDLAgent(patterns=SMALL_PATTERNS)
        board = sample_board()
        raw = board.raw
        agent.take_action(board)
        assert board.raw == raw

    def test_terminal_board(self):
        """Test a board without legal moves yields a no-op."""
        agent = TDLAgent(patterns=SMALL_PATTERNS)
        action = agent.take_action(blocked_board())
        assert action.is_none()
        assert len(agent.trajectory) == 1
        assert agent.trajectory[0].op is None

    def test_update_episode_propagates_reward(self):
        """Test the reward of a later step raises the earlier after-state."""
        agent = TDLAgent("alpha=0.5", patterns=SMALL_PATTERNS)
        first, second = Board(), Board()
        first.place(0, 1)
        first_after = first.copy()
        first_after.slide(Direction.RIGHT)
        second.place(4, 1)
        second.place(5, 2)
        second_after = second.copy()
        second_after.slide(Direction.LEFT)

        agent.trajectory.push(first, first_after, Direction.RIGHT, 0.0, 0.0)
        agent.trajectory.push(second, second_after, Direction.LEFT, 3.0, 3.0)
        agent.take_action(blocked_board())
        assert len(agent.trajectory) == 3

        agent.update_episode()

        assert len(agent.trajectory) == 0
        # first move: error = 3 - (0 - 0) = 3
        assert agent.estimate(first_after) > 0.0

    def test_update_episode_target_value(self):
        """Test the exact TD target chain on a single-pattern net."""
        agent = TDLAgent("alpha=1", patterns=[(0,)])
        agent.net[0].isom = agent.net[0].isom[:1]
        first, second = Board(), Board()
        first_after = Board()
        first_after.set(0, 1)
        second_after = Board()
        second_after.set(0, 2)

        # V(second_after) starts at 1, its step earned 2 and was valued at 3
        agent.update(second_after, 1.0)
        agent.trajectory.push(first, first_after, Direction.LEFT, 0.0, 0.0)
        agent.trajectory.push(second, second_after, Direction.LEFT, 2.0, 3.0)
        agent.trajectory.push(second_after, second_after, None, 0.0, 0.0)

        agent.update_episode()

        # error = 0 - (3 - 2) = -1, so V(second_after) becomes 0
        assert agent.estimate(second_after) == pytest.approx(0.0)
        # exact = 2 + 0; error = 2 - (0 - 0), so V(first_after) becomes 2
        assert agent.estimate(first_after) == pytest.approx(2.0)

    def test_close_episode_without_learning(self):
        """Test alpha=0 discards the trajectory without updates."""
        agent = TDLAgent("alpha=0", patterns=SMALL_PATTERNS)
        board = Board()
        board.place(0, 1)
        board.place(1, 2)
        agent.open_episode()
        agent.take_action(board)
        agent.take_action(blocked_board())
        agent.close_episode()
        assert len(agent.trajectory) == 0
        assert all(not np.any(p.weight) for p in agent.net)

    def test_open_episode_clears_stale_steps(self):
        """Test a new episode starts empty."""
        agent = TDLAgent(patterns=SMALL_PATTERNS)
        agent.take_action(sample_board())
        agent.open_episode()
        assert len(agent.trajectory) == 0

    def test_full_episode(self):
        """Test a self-play episode runs to the end and learns."""
        agent = TDLAgent(patterns=SMALL_PATTERNS)
        game = Game(seed=7)
        score, max_tile, steps = play_episode(agent, game)
        assert game.is_game_over()
        assert steps > 0
        assert score >= 0
        assert max_tile == game.board.max_tile()
        assert len(agent.trajectory) == 0

    def test_learning_stays_bounded(self):
        """Test self-play at the default rate keeps values finite and small."""
        agent = TDLAgent(patterns=SMALL_PATTERNS)
        game = Game(seed=0)
        for _ in range(200):
            play_episode(agent, game)
            value = agent.estimate(game.board)
            assert np.isfinite(value)
            assert abs(value) < 1e4
        for pattern in agent.net:
            assert np.all(np.isfinite(pattern.weight))
            assert np.abs(pattern.weight).max() < 1e4


class TestBaselinePlayers:
    """Test random and greedy players."""

    def test_greedy_picks_best_reward(self):
        """Test greedy chooses the merging slide."""
        board = Board()
        board.place(0, 1)
        board.place(1, 2)
        assert GreedyPlayer().take_action(board) == Action.slide(Direction.LEFT)

    def test_greedy_terminal(self):
        """Test greedy returns a no-op when stuck."""
        assert GreedyPlayer().take_action(blocked_board()).is_none()

    def test_random_picks_legal_slide(self):
        """Test random player only returns legal slides."""
        player = RandomPlayer("seed=3")
        board = Board()
        board.place(0, 1)
        for _ in range(20):
            action = player.take_action(board)
            assert action.direction in (Direction.RIGHT, Direction.DOWN)

    def test_random_terminal(self):
        """Test random player returns a no-op when stuck."""
        assert RandomPlayer("seed=3").take_action(blocked_board()).is_none()

    def test_deep_greedy_picks_legal_slide(self):
        """Test the rollout player returns a legal slide."""
        player = DeepGreedyPlayer("seed=5")
        board = sample_board()
        for _ in range(10):
            action = player.take_action(board)
            assert action.is_slide()
            assert board.copy().slide(action.direction) != -1

    def test_deep_greedy_terminal(self):
        """Test the rollout player returns a no-op when stuck."""
        assert DeepGreedyPlayer("seed=5").take_action(blocked_board()).is_none()

    def test_deep_greedy_without_lookahead_matches_greedy(self):
        """Test depth=0 ranks slides by immediate reward only."""
        player = DeepGreedyPlayer("depth=0")
        assert player.depth == 0
        board = Board()
        board.place(0, 1)
        board.place(1, 2)
        assert player.take_action(board) == Action.slide(Direction.LEFT)

    def test_deep_greedy_rollout_adds_rewards(self):
        """Test a rollout scores at least the first slide's reward."""
        player = DeepGreedyPlayer("seed=6")
        board = Board()
        board.place(0, 1)
        board.place(1, 2)
        assert player.rollout(board, Direction.LEFT) >= 3
        assert player.rollout(board, Direction.UP) == -1

    def test_deep_greedy_seeded(self):
        """Test equal seeds give equal choices."""
        first = DeepGreedyPlayer("seed=9")
        second = DeepGreedyPlayer("seed=9")
        for seed in range(5):
            board = sample_board()
            board.place(15, seed % 3 + 1)
            assert first.take_action(board) == second.take_action(board)

    def test_player_names(self):
        """Test default names and roles."""
        assert TDLAgent(patterns=SMALL_PATTERNS).name == "tdl"
        assert GreedyPlayer().name == "greedy"
        assert DeepGreedyPlayer().name == "deep_greedy"
        assert RandomPlayer().role == "player"


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
