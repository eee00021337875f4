#!/usr/bin/env python3
"""Evaluate a trained Threes player without learning."""
import argparse
import time

from threes.agents import BaseAgent, DeepGreedyPlayer, GreedyPlayer, RandomPlayer, TDLAgent
from threes.fields import Game, tile_value
from threes.utils import AgentConfig, EpisodeStatistics
from training.reinforcement_learning.train import play_episode

PLAYERS = {
    "tdl": TDLAgent,
    "greedy": GreedyPlayer,
    "deep_greedy": DeepGreedyPlayer,
    "random": RandomPlayer,
}


def make_player(kind: str, play_args: str = "") -> BaseAgent:
    """Build a player; the TD player is frozen (alpha=0) for evaluation."""
    if kind == "tdl":
        return TDLAgent(f"{play_args} alpha=0")
    return PLAYERS[kind](play_args)


def test(
    kind: str = "tdl",
    play_args: str = "",
    evil_args: str = "",
    num_games: int = 10,
    verbose: bool = True,
    delay: float = 0.0,
) -> dict:
    """Play evaluation games and return summary statistics."""
    player = make_player(kind, play_args)
    if verbose and isinstance(player, TDLAgent) and player.config.load is not None:
        if player.weights_loaded:
            print(f"Loaded weights from {player.config.load}")
        else:
            print(f"Warning: weights not loaded from {player.config.load}, using zero weights")

    game = Game(seed=AgentConfig.parse(evil_args).seed)
    stats = EpisodeStatistics(num_games)

    for game_num in range(num_games):
        if delay > 0:
            score, max_tile, steps = _play_visible(player, game, game_num, num_games, delay)
        else:
            score, max_tile, steps = play_episode(player, game)
        stats.record(score, max_tile, steps)
        if verbose:
            print(f"Game {game_num + 1}/{num_games} | Score: {score} | "
                  f"Max Tile: {tile_value(max_tile)} | Steps: {steps}")

    player.close()
    if verbose:
        print("\n=== Summary ===")
        print(stats.format_summary())

    return stats.summary()


def _play_visible(player: BaseAgent, game: Game, game_num: int, num_games: int, delay: float):
    player.open_episode()
    game.reset()
    while True:
        action = player.take_action(game.board)
        if action.is_none():
            break
        game.step(action.direction)
        print("\033[2J\033[H", end="")
        print(f"Game {game_num + 1}/{num_games} | Step {game.steps}")
        print(f"Action: {action.direction.name}")
        print(game.render())
        time.sleep(delay)
    player.close_episode()
    return game.score, game.max_tile(), game.steps


def main():
    parser = argparse.ArgumentParser(description="Evaluate a Threes player")
    parser.add_argument(
        "--player",
        type=str,
        choices=sorted(PLAYERS),
        default="tdl",
        help="Player type (default: tdl)",
    )
    parser.add_argument(
        "--play",
        type=str,
        default="",
        help='Player options, e.g. "load=weights.bin"',
    )
    parser.add_argument(
        "--evil",
        type=str,
        default="",
        help='Environment options, e.g. "seed=42"',
    )
    parser.add_argument(
        "--total",
        type=int,
        default=10,
        help="Number of games to play (default: 10)",
    )
    parser.add_argument(
        "--delay",
        type=float,
        default=0.0,
        help="Delay between moves in seconds for visualization (default: 0)",
    )
    parser.add_argument(
        "--quiet",
        action="store_true",
        help="Suppress output",
    )
    args = parser.parse_args()

    test(
        kind=args.player,
        play_args=args.play,
        evil_args=args.evil,
        num_games=args.total,
        verbose=not args.quiet,
        delay=args.delay,
    )


if __name__ == "__main__":
    main()
