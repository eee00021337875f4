#!/usr/bin/env python3
"""Automatic Threes play with a baseline or trained player."""
import argparse
import time

from threes.agents import DeepGreedyPlayer, GreedyPlayer, RandomPlayer, TDLAgent
from threes.fields import Game, tile_value


def clear_screen():
    """Clear terminal screen."""
    print("\033[2J\033[H", end="")


def main():
    """Run automatic Threes games."""
    parser = argparse.ArgumentParser(description="Auto-play Threes")
    parser.add_argument(
        "--player",
        choices=["random", "greedy", "deep_greedy", "tdl"],
        default="random",
        help="Player type (default: random)",
    )
    parser.add_argument(
        "--weights",
        type=str,
        default=None,
        help="Weight file for the tdl player",
    )
    parser.add_argument(
        "--delay",
        type=int,
        default=100,
        help="Delay between moves in milliseconds (default: 100)",
    )
    parser.add_argument(
        "--seed",
        type=int,
        default=None,
        help="Random seed for reproducibility",
    )
    parser.add_argument(
        "--quiet",
        action="store_true",
        help="Suppress step-by-step output",
    )
    parser.add_argument(
        "--games",
        type=int,
        default=1,
        help="Number of games to play (default: 1)",
    )
    args = parser.parse_args()

    seed_args = f"seed={args.seed}" if args.seed is not None else ""
    if args.player == "tdl":
        load_args = f"load={args.weights}" if args.weights else ""
        player = TDLAgent(f"{load_args} alpha=0")
        if args.weights and not player.weights_loaded:
            print(f"Warning: weights not loaded from {args.weights}, using zero weights")
    elif args.player == "greedy":
        player = GreedyPlayer()
    elif args.player == "deep_greedy":
        player = DeepGreedyPlayer(seed_args)
    else:
        player = RandomPlayer(seed_args)

    delay_sec = args.delay / 1000.0
    game = Game(seed=args.seed)
    results = []

    for game_num in range(args.games):
        player.open_episode()
        game.reset()

        if not args.quiet:
            if args.games > 1:
                print(f"\n=== Game {game_num + 1}/{args.games} ===")
            else:
                print("=== Threes Auto-Play ===")
            print()

        while True:
            action = player.take_action(game.board)
            if action.is_none():
                break
            game.step(action.direction)

            if not args.quiet:
                clear_screen()
                print(f"Step: {game.steps}, Action: {action.direction.name}")
                print(game.render())
                time.sleep(delay_sec)

        player.close_episode()
        results.append({
            "score": game.score,
            "max_tile": tile_value(game.max_tile()),
            "steps": game.steps,
        })

        if not args.quiet:
            print("Game Over!")
            print(f"Final Score: {game.score}")
            print(f"Max Tile: {tile_value(game.max_tile())}")
            print(f"Total Steps: {game.steps}")

    if args.games > 1:
        print("\n=== Summary ===")
        scores = [r["score"] for r in results]
        max_tiles = [r["max_tile"] for r in results]
        steps_list = [r["steps"] for r in results]

        print(f"Games: {args.games}")
        print(f"Avg Score: {sum(scores) / len(scores):.1f}")
        print(f"Max Score: {max(scores)}")
        print(f"Min Score: {min(scores)}")
        print(f"Best Max Tile: {max(max_tiles)}")
        print(f"Avg Steps: {sum(steps_list) / len(steps_list):.1f}")

    player.close()


if __name__ == "__main__":
    main()
