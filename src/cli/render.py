"""Text rendering of the board for the terminal"""

from typing import Optional

from src.chess.board import Board
from src.chess.pieces import Color, Piece
from src.chess.square import BOARD_DIMENSIONS, FILES, RANKS
from src.core.config import Settings


def color_styles(settings: Settings) -> dict[Color, str]:
    return {Color.WHITE: settings.white_style, Color.BLACK: settings.black_style}


def render_square(piece: Optional[Piece], settings: Settings) -> str:
    if piece is None:
        return settings.empty_glyph
    if not settings.use_color:
        # without styling, black pieces are told apart by lower case
        return piece.to_fen()
    return f"{color_styles(settings)[piece.color]}{piece.glyph}{settings.reset_style}"


def render_board(board: Board, settings: Settings) -> str:
    """
    Rank 8 on top, rank 1 at the bottom (white's point of view).

    8 R N B Q K B N R
    7 P P P P P P P P
    ...
      a b c d e f g h
    """
    lines: list[str] = []
    for row in range(BOARD_DIMENSIONS[1] - 1, -1, -1):
        squares = " ".join(render_square(piece, settings) for piece in board.grid[row])
        lines.append(f"{RANKS[row]} {squares}")
    lines.append(f"  {' '.join(FILES)}")
    return "\n".join(lines)
