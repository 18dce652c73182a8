"""
Geometry/Base movement rules

Key idea: Use strategy pattern to define the legality predicate for each piece kind.


The Game looks up the predicate for the moving piece and only touches the board if it agrees.
"""

from dataclasses import dataclass
from typing import Callable, Optional, Protocol, Self

from src.chess.pieces import Color, Piece, PieceKind
from src.chess.square import Square
from src.core.exceptions import InvalidFormatError


class Board(Protocol):
    """Just the parts the movement rules need"""

    def piece(self, square: Square) -> Optional[Piece]: ...
    def has_piece(self, square: Square) -> bool: ...
    def has_opposing_piece(self, square: Square, color: Color) -> bool: ...
    def path_is_free(self, start: Square, end: Square) -> bool: ...


NOTATION_LENGTH = 5


@dataclass(frozen=True)
class Move:
    """A single proposed move: which kind of piece goes from where to where"""

    piece: PieceKind
    start: Square
    end: Square

    @classmethod
    def from_notation(cls, text: str) -> Self:
        """
        Move notation
        ---
        ---
        Piece letter followed by the start and end squares, five characters in total.

        examples:
        * "Pe2e4": pawn from e2 to e4
        * "Ng1f3": knight from g1 to f3

        Only decodes: whether the move is allowed is for the Game to decide.
        """
        if len(text) != NOTATION_LENGTH:
            raise InvalidFormatError()
        piece = PieceKind.from_glyph(text[0])
        start = Square.from_chars(text[1], text[2])
        end = Square.from_chars(text[3], text[4])
        return cls(piece, start, end)

    def to_notation(self) -> str:
        return f"{self.piece.glyph}{self.start.to_algebraic()}{self.end.to_algebraic()}"

    def __str__(self) -> str:
        return self.to_notation()


# --- PATH GEOMETRY ---
def row_displacement(start: Square, end: Square) -> int:
    return abs(end.row - start.row)


def col_displacement(start: Square, end: Square) -> int:
    return abs(end.col - start.col)


def path_is_horizontal(start: Square, end: Square) -> bool:
    return start.row == end.row


def path_is_vertical(start: Square, end: Square) -> bool:
    return start.col == end.col


def path_is_diagonal(start: Square, end: Square) -> bool:
    return row_displacement(start, end) == col_displacement(start, end)


def path_is_straight(start: Square, end: Square) -> bool:
    """Exactly one direction: horizontal, vertical or diagonal"""
    return (
        path_is_horizontal(start, end)
        or path_is_vertical(start, end)
        or path_is_diagonal(start, end)
    )


# --- LEGALITY RULES ---
def is_legal_rook_move(start: Square, end: Square, board: Board, color: Color) -> bool:
    """Rooks move either horizontally or vertically, and cannot jump"""
    is_rook_line = path_is_horizontal(start, end) or path_is_vertical(start, end)
    return is_rook_line and board.path_is_free(start, end)


def is_legal_bishop_move(start: Square, end: Square, board: Board, color: Color) -> bool:
    """Bishops move diagonally: |delta_row| = |delta_col|"""
    return path_is_diagonal(start, end) and board.path_is_free(start, end)


def is_legal_queen_move(start: Square, end: Square, board: Board, color: Color) -> bool:
    """
    The Queen combines the rook moves (horizontal + vertical movements) and bishop moves (diagonal movement)
    """
    return path_is_straight(start, end) and board.path_is_free(start, end)


def is_legal_king_move(start: Square, end: Square, board: Board, color: Color) -> bool:
    """The king can move by a single square at the time, in any direction."""
    return max(row_displacement(start, end), col_displacement(start, end)) == 1


def is_legal_knight_move(start: Square, end: Square, board: Board, color: Color) -> bool:
    """Knights jump: one of the displacements is 2, the other 1. Whatever stands in between does not matter."""
    displacement = (row_displacement(start, end), col_displacement(start, end))
    return displacement in [(2, 1), (1, 2)]


# White moves UP the board (increasing rows), black moves DOWN
PAWN_DIRECTION: dict[Color, int] = {Color.WHITE: 1, Color.BLACK: -1}
PAWN_STARTING_ROW: dict[Color, int] = {Color.WHITE: 1, Color.BLACK: 6}


def is_legal_pawn_move(start: Square, end: Square, board: Board, color: Color) -> bool:
    """
    A pawn:
    - moves by a single square forward, onto an empty square
    - can move by two when it is still on its starting row (again onto an empty square)
    - takes diagonally, one square forward

    NOTE: The double step does not look at the square it passes over.
    NOTE: No en passant, no promotion.
    """
    forward = (end.row - start.row) * PAWN_DIRECTION[color]
    sideways = col_displacement(start, end)

    # pawn pushes
    if sideways == 0:
        if board.has_piece(end):
            return False
        if forward == 1:
            return True
        return forward == 2 and start.row == PAWN_STARTING_ROW[color]

    # pawn takes
    return forward == 1 and sideways == 1 and board.has_opposing_piece(end, color)


# -- STRATEGY PATTERN: LEGALITY RULES ---
LegalityFn = Callable[[Square, Square, Board, Color], bool]
LEGALITY_RULES: dict[PieceKind, LegalityFn] = {
    PieceKind.PAWN: is_legal_pawn_move,
    PieceKind.ROOK: is_legal_rook_move,
    PieceKind.KNIGHT: is_legal_knight_move,
    PieceKind.BISHOP: is_legal_bishop_move,
    PieceKind.QUEEN: is_legal_queen_move,
    PieceKind.KING: is_legal_king_move,
}
