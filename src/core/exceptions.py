"""
Custom exceptions shared across layers.

Every reason a move can be refused is a `MoveError`. The CLI catches the base class, reports the message and asks the same
player for another move, so none of these are fatal.
"""


class MoveError(Exception):
    """Base class: the requested move was not made. Game state is unchanged."""

    message = "invalid move"

    def __init__(self, message: str | None = None) -> None:
        super().__init__(message or self.message)


class InvalidFormatError(MoveError):
    """Move text could not be decoded (wrong length, unknown piece letter, file/rank out of range)."""

    message = "invalid format"


class InvalidPathError(MoveError):
    """Decoded fine, but the piece is not allowed to move like that (geometry, blocked path, friendly target, null move)."""

    message = "piece cannot move along specified path"


class PieceNotFoundError(MoveError):
    message = "no piece at specified square"


class WrongPieceColorError(MoveError):
    message = "piece at specified square has wrong color"


class WrongPieceKindError(MoveError):
    message = "piece at specified square is wrong kind"


class InvalidFENError(ValueError):
    """The piece placement field of a FEN string could not be parsed."""


class ConfigError(Exception):
    """Settings taken from the environment did not validate."""
