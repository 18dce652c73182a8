"""
The Board is a placement ledger: it knows where pieces stand and whether a straight path between two squares is clear.

It does not know whose turn it is, nor how each piece is allowed to move. That is decided by the Game (see moves.py).
"""

from dataclasses import dataclass, field
from typing import Optional, Self

from src.chess.pieces import Color, Piece, PieceKind
from src.chess.square import BOARD_DIMENSIONS, Square
from src.core.exceptions import (
    InvalidFENError,
    InvalidFormatError,
    PieceNotFoundError,
    WrongPieceColorError,
    WrongPieceKindError,
)

Row = list[Optional[Piece]]

# a-file to h-file
BACK_RANK: tuple[PieceKind, ...] = (
    PieceKind.ROOK,
    PieceKind.KNIGHT,
    PieceKind.BISHOP,
    PieceKind.QUEEN,
    PieceKind.KING,
    PieceKind.BISHOP,
    PieceKind.KNIGHT,
    PieceKind.ROOK,
)

STARTING_PLACEMENT = "rnbqkbnr/pppppppp/8/8/8/8/PPPPPPPP/RNBQKBNR"

# only ASCII digits count empty squares
EMPTY_COUNTS = "12345678"


def empty_row() -> Row:
    return [None] * BOARD_DIMENSIONS[0]


def pawns_row(color: Color) -> Row:
    return [Piece(PieceKind.PAWN, color) for _ in range(BOARD_DIMENSIONS[0])]


def royals_row(color: Color) -> Row:
    return [Piece(kind, color) for kind in BACK_RANK]


def starting_grid() -> list[Row]:
    return [
        # row 0: white royals
        royals_row(Color.WHITE),
        # row 1: white pawns
        pawns_row(Color.WHITE),
        # rows 2-5: nobody
        *[empty_row() for _ in range(BOARD_DIMENSIONS[1] - 4)],
        # row 6: black pawns
        pawns_row(Color.BLACK),
        # row 7: black royals
        royals_row(Color.BLACK),
    ]


@dataclass
class Board:
    grid: list[Row] = field(default_factory=starting_grid)

    @classmethod
    def starting_position(cls) -> Self:
        return cls(starting_grid())

    @classmethod
    def empty(cls) -> Self:
        return cls([empty_row() for _ in range(BOARD_DIMENSIONS[1])])

    @classmethod
    def from_fen(cls, fen_str: str) -> Self:
        """Construct a board from the piece placement field of a FEN string.

        ex. standard starting position:
        rnbqkbnr/pppppppp/8/8/8/8/PPPPPPPP/RNBQKBNR
        means:
        * black pieces are on the 8th rank, read from the a-file to the h-file
        * pawns cover 7th rank entirely
        * ranks 6 through 3 have 8 consecutive empty squares
        * rank 2 are the white pawns (capital letters)
        * 1st rank are the white pieces
        """
        fen_by_ranks = fen_str.strip().split("/")
        if len(fen_by_ranks) != BOARD_DIMENSIONS[1]:
            raise InvalidFENError(
                f"Expected {BOARD_DIMENSIONS[1]} ranks in {fen_str!r}, found {len(fen_by_ranks)}"
            )

        board = cls.empty()
        for rank_idx, fen_one_rank in enumerate(fen_by_ranks):
            # FEN string is read from top rank (8th) to bottom rank (1st)
            row = BOARD_DIMENSIONS[1] - 1 - rank_idx
            col = 0
            for character in fen_one_rank:
                if character in EMPTY_COUNTS:
                    # A number denotes the amount of empty squares after each other
                    col += int(character)
                    continue
                if col >= BOARD_DIMENSIONS[0]:
                    raise InvalidFENError(
                        f"Rank {fen_one_rank!r} in {fen_str!r} runs off the board"
                    )
                try:
                    board.grid[row][col] = Piece.from_fen(character)
                except InvalidFormatError as e:
                    raise InvalidFENError(
                        f"Unknown piece {character!r} in {fen_str!r}"
                    ) from e
                col += 1

            if col != BOARD_DIMENSIONS[0]:
                raise InvalidFENError(
                    f"Rank {fen_one_rank!r} in {fen_str!r} does not describe {BOARD_DIMENSIONS[0]} squares"
                )
        return board

    def to_fen(self) -> str:
        """Ranks are separated by slashes in FEN string."""
        return "/".join(
            self._rank_to_fen(row) for row in range(BOARD_DIMENSIONS[1] - 1, -1, -1)
        )

    def _rank_to_fen(self, row: int) -> str:
        """FEN string of a single rank"""
        fen_characters: list[str] = []
        empty_count = 0
        for piece in self.grid[row]:
            if piece is None:
                empty_count += 1
                continue
            if empty_count > 0:
                fen_characters.append(str(empty_count))
                empty_count = 0
            fen_characters.append(piece.to_fen())

        # if the entire rank is empty, then we still place this number in the string
        if empty_count > 0:
            fen_characters.append(str(empty_count))
        return "".join(fen_characters)

    # --- LOOKUP ---
    def piece(self, square: Square) -> Optional[Piece]:
        return self.grid[square.row][square.col]

    def has_piece(self, square: Square) -> bool:
        return self.piece(square) is not None

    def has_opposing_piece(self, square: Square, color: Color) -> bool:
        """True if an enemy of `color` stands on the square"""
        piece = self.piece(square)
        return piece is not None and piece.color != color

    def pieces(self, color: Color) -> list[Piece]:
        return [piece for row in self.grid for piece in row if piece and piece.color == color]

    def count_pieces(self, color: Color) -> int:
        return len(self.pieces(color))

    # --- SETUP ---
    def place_piece(self, piece: Piece, square: Square) -> None:
        self.grid[square.row][square.col] = piece

    def remove_piece(self, square: Square) -> Optional[Piece]:
        piece = self.piece(square)
        self.grid[square.row][square.col] = None
        return piece

    # --- MOVING ---
    def move_piece(
        self, kind: PieceKind, color: Color, start: Square, end: Square
    ) -> Optional[Piece]:
        """
        Relocate the piece on `start` to `end`.
        ---

        The piece found on `start` must be exactly the one the caller claims is there.
        Nothing about the path or the destination is checked here.

        Returns whatever stood on `end` before (None when it was empty). That is the only capture signal.
        """
        piece = self.piece(start)
        if piece is None:
            raise PieceNotFoundError()
        if piece.kind != kind:
            raise WrongPieceKindError()
        if piece.color != color:
            raise WrongPieceColorError()

        captured = self.piece(end)
        self.grid[start.row][start.col] = None
        self.grid[end.row][end.col] = piece
        return captured

    # --- PATHS ---
    def path_is_free(self, start: Square, end: Square) -> bool:
        """
        Walk the squares strictly between start and end.
        ---

        Only horizontal, vertical and diagonal lines have a path. Any other pair (a knight jump, for instance)
        reports False, so knights must never be checked with this method.
        """
        d_row = end.row - start.row
        d_col = end.col - start.col
        is_straight = d_row == 0 or d_col == 0 or abs(d_row) == abs(d_col)
        if not is_straight:
            return False

        step_row = (d_row > 0) - (d_row < 0)
        step_col = (d_col > 0) - (d_col < 0)
        row, col = start.row + step_row, start.col + step_col
        while (row, col) != (end.row, end.col):
            if self.grid[row][col] is not None:
                return False
            row += step_row
            col += step_col
        return True
