#!/usr/bin/env python3
"""Train the n-tuple player with TD(0) self-play."""
import argparse

from tqdm import tqdm

from threes.agents import BaseAgent, TDLAgent
from threes.fields import Game
from threes.utils import AgentConfig, EpisodeStatistics


def play_episode(player: BaseAgent, game: Game) -> tuple[int, int, int]:
    """Play one episode to the end.

    Returns:
        (score, max tile code, number of slides)
    """
    player.open_episode()
    game.reset()
    while True:
        action = player.take_action(game.board)
        if action.is_none():
            break
        game.step(action.direction)
    player.close_episode()
    return game.score, game.max_tile(), game.steps


def train(
    total: int,
    play_args: str = "",
    evil_args: str = "",
    block: int = 1000,
    verbose: bool = True,
) -> EpisodeStatistics:
    """Train a TD learning player.

    Args:
        total: Number of training episodes
        play_args: Player options, e.g. "alpha=0.1 load=w.bin save=w.bin"
        evil_args: Environment options, e.g. "seed=42"
        block: Episodes per statistics block
        verbose: Whether to print progress

    Returns:
        Statistics of the last block
    """
    player = TDLAgent(play_args)
    game = Game(seed=AgentConfig.parse(evil_args).seed)
    stats = EpisodeStatistics(block)

    if verbose:
        if player.config.load is not None:
            if player.weights_loaded:
                print(f"Loaded weights from {player.config.load}")
            else:
                print(f"Warning: weights not loaded from {player.config.load}, using zero weights")
        print(f"N-tuple network memory usage: {player.get_memory_usage_mb():.1f} MB")

    for _ in tqdm(range(total), disable=not verbose, desc="train"):
        score, max_tile, steps = play_episode(player, game)
        stats.record(score, max_tile, steps)
        if verbose and stats.is_block_end():
            tqdm.write(stats.format_summary())

    player.close()
    if player.config.save is not None:
        if player.weights_saved:
            if verbose:
                print(f"Training complete. Weights saved to {player.config.save}")
        else:
            print(f"Warning: could not write weights to {player.config.save}")

    return stats


def main():
    parser = argparse.ArgumentParser(description="Train the Threes TD learning player")
    parser.add_argument(
        "--total",
        type=int,
        default=1000,
        help="Number of training episodes (default: 1000)",
    )
    parser.add_argument(
        "--block",
        type=int,
        default=1000,
        help="Episodes per statistics block (default: 1000)",
    )
    parser.add_argument(
        "--play",
        type=str,
        default="",
        help='Player options, e.g. "alpha=0.1 load=weights.bin save=weights.bin"',
    )
    parser.add_argument(
        "--evil",
        type=str,
        default="",
        help='Environment options, e.g. "seed=42"',
    )
    parser.add_argument(
        "--quiet",
        action="store_true",
        help="Suppress output",
    )
    args = parser.parse_args()

    if not args.quiet:
        print("=" * 60)
        print("N-tuple + TD Learning for Threes")
        print("=" * 60)
        print(f"Episodes: {args.total}")
        print(f"Player: {args.play or '(defaults)'}")
        print(f"Environment: {args.evil or '(defaults)'}")
        print("=" * 60)

    train(
        total=args.total,
        play_args=args.play,
        evil_args=args.evil,
        block=args.block,
        verbose=not args.quiet,
    )


if __name__ == "__main__":
    main()
