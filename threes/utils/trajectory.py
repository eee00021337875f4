"""Episode trajectory for TD learning."""
from collections import namedtuple
from typing import Iterator, Optional

from threes.fields.board import Board


Step = namedtuple("Step", ("before", "after", "op", "reward", "value"))


def terminal_step(board: Board) -> Step:
    """Record for a state without legal moves."""
    return Step(board.copy(), board.copy(), None, 0.0, 0.0)


class Trajectory:
    """Steps of the current episode, consumed newest first."""

    def __init__(self):
        self.steps: list[Step] = []

    def push(self, *args) -> None:
        """Save a step."""
        self.steps.append(Step(*args))

    def pop(self) -> Optional[Step]:
        return self.steps.pop() if self.steps else None

    def backward(self) -> Iterator[Step]:
        """Yield and remove steps from the last to the first."""
        while self.steps:
            yield self.steps.pop()

    def clear(self) -> None:
        self.steps.clear()

    def __len__(self) -> int:
        return len(self.steps)

    def __getitem__(self, i: int) -> Step:
        return self.steps[i]
