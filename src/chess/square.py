"""
A square on the board

(placed in its own module as multiple other modules need to import it)
"""

from __future__ import annotations

from dataclasses import dataclass

from src.core.exceptions import InvalidFormatError

# (files, ranks). The grid is fixed, rows and columns are 0-indexed.
BOARD_DIMENSIONS = (8, 8)

FILES = "abcdefgh"
RANKS = "12345678"


@dataclass(frozen=True)
class Square:
    row: int
    col: int

    def __post_init__(self):
        # a Square that exists is always on the board
        if not (isinstance(self.row, int) and isinstance(self.col, int)):
            raise InvalidFormatError()
        if not (0 <= self.row < BOARD_DIMENSIONS[1] and 0 <= self.col < BOARD_DIMENSIONS[0]):
            raise InvalidFormatError()

    @classmethod
    def from_chars(cls, file: str, rank: str) -> Square:
        """File letter 'a'-'h' becomes the column, rank digit '1'-'8' becomes the row: 'a1' -> (0, 0), 'h8' -> (7, 7)"""
        if len(file) != 1 or file not in FILES:
            raise InvalidFormatError()
        if len(rank) != 1 or rank not in RANKS:
            raise InvalidFormatError()
        return cls(row=RANKS.index(rank), col=FILES.index(file))

    @classmethod
    def from_algebraic(cls, sq: str) -> Square:
        """Algebraic notation: 'a1' - 'h8'"""
        if len(sq) != 2:
            raise InvalidFormatError()
        return cls.from_chars(sq[0], sq[1])

    def to_algebraic(self) -> str:
        return f"{FILES[self.col]}{RANKS[self.row]}"

    def __str__(self) -> str:
        return self.to_algebraic()
