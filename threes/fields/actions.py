from enum import IntEnum
from typing import Optional

from threes.fields.board import ILLEGAL, Board


class Direction(IntEnum):
    """Slide directions, in the order used for tie-breaking."""
    UP = 0
    RIGHT = 1
    DOWN = 2
    LEFT = 3


NUM_ACTIONS = len(Direction)


class Action:
    """A player slide, an environment placement, or a no-op."""

    __slots__ = ("direction", "position", "tile")

    def __init__(
        self,
        direction: Optional[Direction] = None,
        position: Optional[int] = None,
        tile: int = 0,
    ):
        self.direction = direction
        self.position = position
        self.tile = tile

    @classmethod
    def slide(cls, direction: int) -> "Action":
        return cls(direction=Direction(direction))

    @classmethod
    def place(cls, position: int, tile: int) -> "Action":
        return cls(position=position, tile=tile)

    def is_slide(self) -> bool:
        return self.direction is not None

    def is_place(self) -> bool:
        return self.position is not None

    def is_none(self) -> bool:
        return not self.is_slide() and not self.is_place()

    def apply(self, board: Board) -> int:
        """Apply to a board in place; returns the reward or -1."""
        if self.is_slide():
            return board.slide(self.direction)
        if self.is_place():
            return board.place(self.position, self.tile)
        return ILLEGAL

    def __eq__(self, other) -> bool:
        return (
            isinstance(other, Action)
            and self.direction == other.direction
            and self.position == other.position
            and self.tile == other.tile
        )

    def __repr__(self) -> str:
        if self.is_slide():
            return f"Action.slide({self.direction.name})"
        if self.is_place():
            return f"Action.place({self.position}, {self.tile})"
        return "Action()"
