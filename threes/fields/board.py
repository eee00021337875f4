"""Bit-packed 4x4 board.

Cell index layout::

     0  1  2  3
     4  5  6  7
     8  9 10 11
    12 13 14 15

Cell i occupies bits 4i..4i+3 of a 64-bit integer, so row r is the
16-bit value at bits 16r..16r+15.
"""
from typing import Optional, Union

from threes.fields.lookup import RowTransformTable, get_row_table


NUM_ROWS = 4
NUM_COLUMNS = 4
NUM_SQUARES = NUM_ROWS * NUM_COLUMNS

ILLEGAL = -1

BOARD_MASK = (1 << 64) - 1


def tile_value(code: int) -> int:
    """Displayed value of a tile code (0, 1, 2, 3, 6, 12, 24, ...)."""
    if code <= 3:
        return code
    return (1 << (code - 1)) - (1 << (code - 3))


class Board:
    """64-bit board of 16 tile codes with table-driven slides.

    Slides mutate the board in place and return the reward, or ``ILLEGAL``
    (-1) when the board did not change.
    """

    __slots__ = ("raw", "table")

    def __init__(
        self,
        raw: Union[int, "Board"] = 0,
        table: Optional[RowTransformTable] = None,
    ):
        if isinstance(raw, Board):
            table = table or raw.table
            raw = raw.raw
        self.raw: int = int(raw) & BOARD_MASK
        self.table: RowTransformTable = table or get_row_table()

    def copy(self) -> "Board":
        return Board(self.raw, self.table)

    def __int__(self) -> int:
        return self.raw

    def __eq__(self, other) -> bool:
        return isinstance(other, Board) and self.raw == other.raw

    def __hash__(self) -> int:
        return hash(self.raw)

    def __repr__(self) -> str:
        return f"Board(0x{self.raw:016x})"

    def get(self, i: int) -> int:
        """Get a 4-bit tile code."""
        assert 0 <= i < NUM_SQUARES
        return (self.raw >> (i << 2)) & 0x0F

    def set(self, i: int, code: int) -> None:
        """Set a 4-bit tile code."""
        assert 0 <= i < NUM_SQUARES
        self.raw = (self.raw & ~(0x0F << (i << 2))) | ((code & 0x0F) << (i << 2))

    def __getitem__(self, i: int) -> int:
        return self.get(i)

    def __setitem__(self, i: int, code: int) -> None:
        self.set(i, code)

    def place(self, pos: int, tile: int) -> int:
        """Put a new tile on a cell; the caller picks an empty cell."""
        assert 0 < tile <= 15
        self.set(pos, tile)
        return 0

    def max_tile(self) -> int:
        return max(self.get(i) for i in range(NUM_SQUARES))

    def empty_cells(self) -> list[int]:
        return [i for i in range(NUM_SQUARES) if self.get(i) == 0]

    def to_list(self) -> list[list[int]]:
        """Tile codes as a 4x4 nested list."""
        return [
            [self.get(r * NUM_COLUMNS + c) for c in range(NUM_COLUMNS)]
            for r in range(NUM_ROWS)
        ]

    def slide(self, direction: int) -> int:
        """Slide toward a direction: 0=up, 1=right, 2=down, 3=left."""
        direction &= 0b11
        if direction == 0:
            return self.slide_up()
        elif direction == 1:
            return self.slide_right()
        elif direction == 2:
            return self.slide_down()
        return self.slide_left()

    def slide_left(self) -> int:
        left, reward = self.table.left, self.table.reward
        prev = self.raw
        cur = 0
        score = 0
        for i in range(NUM_ROWS):
            row = (prev >> (i << 4)) & 0xFFFF
            cur |= left[row] << (i << 4)
            score += reward[row]
        self.raw = cur
        return score if cur != prev else ILLEGAL

    def slide_right(self) -> int:
        self.mirror()
        score = self.slide_left()
        self.mirror()
        return score

    def slide_up(self) -> int:
        self.transpose()
        score = self.slide_left()
        self.mirror()
        self.transpose()
        self.flip()
        return score

    def slide_down(self) -> int:
        self.transpose()
        self.mirror()
        score = self.slide_left()
        self.transpose()
        self.flip()
        return score

    def transpose(self) -> None:
        """
        swap rows and columns
        +------------------------+       +------------------------+
        |     3     6     2     1|       |     3    12     2     1|
        |    12    24     1     2|       |     6    24     1     3|
        |     2     1    48     6|  -->  |     2     1    48     6|
        |     1     3     6    12|       |     1     2     6    12|
        +------------------------+       +------------------------+
        """
        raw = self.raw
        raw = (
            (raw & 0xF0F00F0FF0F00F0F)
            | ((raw & 0x0000F0F00000F0F0) << 12)
            | ((raw & 0x0F0F00000F0F0000) >> 12)
        )
        raw = (
            (raw & 0xFF00FF0000FF00FF)
            | ((raw & 0x00000000FF00FF00) << 24)
            | ((raw & 0x00FF00FF00000000) >> 24)
        )
        self.raw = raw

    def mirror(self) -> None:
        """Reflect horizontally, i.e. exchange columns."""
        raw = self.raw
        self.raw = (
            ((raw & 0x000F000F000F000F) << 12)
            | ((raw & 0x00F000F000F000F0) << 4)
            | ((raw & 0x0F000F000F000F00) >> 4)
            | ((raw & 0xF000F000F000F000) >> 12)
        )

    def flip(self) -> None:
        """Reflect vertically, i.e. exchange rows."""
        raw = self.raw
        self.raw = (
            ((raw & 0x000000000000FFFF) << 48)
            | ((raw & 0x00000000FFFF0000) << 16)
            | ((raw & 0x0000FFFF00000000) >> 16)
            | ((raw & 0xFFFF000000000000) >> 48)
        )

    def rotate(self, r: int = 1) -> None:
        """Rotate clockwise r times."""
        r %= 4
        if r == 1:
            self.rotate_clockwise()
        elif r == 2:
            self.reverse()
        elif r == 3:
            self.rotate_counterclockwise()

    def rotate_clockwise(self) -> None:
        self.transpose()
        self.mirror()

    def rotate_counterclockwise(self) -> None:
        self.transpose()
        self.flip()

    def reverse(self) -> None:
        self.mirror()
        self.flip()

    def __str__(self) -> str:
        lines = ["+" + "-" * 24 + "+"]
        for r in range(NUM_ROWS):
            cells = "".join(
                f"{tile_value(self.get(r * NUM_COLUMNS + c)):6d}"
                for c in range(NUM_COLUMNS)
            )
            lines.append(f"|{cells}|")
        lines.append("+" + "-" * 24 + "+")
        return "\n".join(lines)
