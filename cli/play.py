#!/usr/bin/env python3
"""Interactive Threes game - play with keyboard (w/a/s/d)."""
import argparse

from threes.fields import Direction, Game, tile_value


def parse_direction(key: str) -> Direction | None:
    """Parse keyboard input to a direction."""
    key = key.lower().strip()
    mapping = {
        "w": Direction.UP,
        "d": Direction.RIGHT,
        "s": Direction.DOWN,
        "a": Direction.LEFT,
    }
    return mapping.get(key)


def main():
    """Run interactive Threes game."""
    parser = argparse.ArgumentParser(description="Play Threes in the terminal")
    parser.add_argument("--seed", type=int, default=None, help="Random seed for tile spawning")
    args = parser.parse_args()

    game = Game(seed=args.seed)
    game.reset()

    print("=== Threes ===")
    print("Controls: w=Up, s=Down, a=Left, d=Right, q=Quit")
    print()

    while True:
        print(game.render())

        if game.is_game_over():
            print("Game Over!")
            print(f"Final Score: {game.score}")
            print(f"Max Tile: {tile_value(game.max_tile())}")
            break

        try:
            user_input = input("Move: ").strip().lower()
        except (EOFError, KeyboardInterrupt):
            print("\nQuit.")
            break

        if user_input == "q":
            print("Quit.")
            break

        direction = parse_direction(user_input)
        if direction is None:
            print("Invalid input. Use w/a/s/d or q to quit.")
            continue

        if direction not in game.legal_actions():
            print("Cannot move in that direction.")
            continue

        game.step(direction)
        print()


if __name__ == "__main__":
    main()
