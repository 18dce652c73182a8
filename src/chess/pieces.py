"""Defines the types of chess pieces"""

from dataclasses import dataclass
from enum import Enum, auto
from typing import Self

from src.core.exceptions import InvalidFormatError


class PieceKind(Enum):
    PAWN = auto()
    ROOK = auto()
    KNIGHT = auto()
    BISHOP = auto()
    QUEEN = auto()
    KING = auto()

    @classmethod
    def from_glyph(cls, character: str) -> Self:
        """Case-sensitive: only the upper case letters name a piece kind"""
        if character not in GLYPH_TO_PIECE:
            raise InvalidFormatError()
        return GLYPH_TO_PIECE[character]

    @property
    def glyph(self) -> str:
        return PIECE_TO_GLYPH[self]


class Color(Enum):
    WHITE = auto()
    BLACK = auto()

    def opposite(self) -> "Color":
        return Color.BLACK if self == Color.WHITE else Color.WHITE

    @property
    def display_name(self) -> str:
        return self.name.capitalize()


# White always opens the game
DEFAULT_COLOR = Color.WHITE

GLYPH_TO_PIECE: dict[str, PieceKind] = {
    "P": PieceKind.PAWN,
    "R": PieceKind.ROOK,
    "N": PieceKind.KNIGHT,
    "B": PieceKind.BISHOP,
    "Q": PieceKind.QUEEN,
    "K": PieceKind.KING,
}

PIECE_TO_GLYPH: dict[PieceKind, str] = {value: key for key, value in GLYPH_TO_PIECE.items()}


@dataclass(frozen=True)
class Piece:
    kind: PieceKind
    color: Color

    @classmethod
    def from_fen(cls, character: str) -> Self:
        # lower case: Black pieces, upper case: White pieces
        color = Color.WHITE if character.isupper() else Color.BLACK
        kind = PieceKind.from_glyph(character.upper())
        return cls(kind, color)

    def to_fen(self) -> str:
        return self.glyph if self.color == Color.WHITE else self.glyph.lower()

    @property
    def glyph(self) -> str:
        return self.kind.glyph

    def __str__(self) -> str:
        return f"{self.color.display_name} {self.kind.name.lower()}"
