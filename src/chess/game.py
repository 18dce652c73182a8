"""
The Game class is the entrypoint into the domain layer for the CLI.
It is responsible for deciding whether a requested move is allowed, applying it to the board and telling the caller
what happened: nothing special, a capture, or the end of the game.
"""

import logging
from dataclasses import dataclass, field
from typing import Optional, Self

from src.chess.board import Board
from src.chess.moves import LEGALITY_RULES, LegalityFn, Move
from src.chess.pieces import DEFAULT_COLOR, Color, Piece, PieceKind
from src.core.exceptions import InvalidPathError, MoveError

logger = logging.getLogger(__name__)


# --- TURN OUTCOMES ---
@dataclass(frozen=True)
class Continue:
    """Nothing was captured"""


@dataclass(frozen=True)
class Taken:
    """A piece other than the king was captured"""

    piece: Piece


@dataclass(frozen=True)
class Win:
    """The enemy king was captured by `color`. The game is over."""

    color: Color


TurnOutcome = Continue | Taken | Win


@dataclass
class Game:
    board: Board = field(default_factory=Board.starting_position)
    current_player: Color = DEFAULT_COLOR

    @classmethod
    def new_game(cls) -> Self:
        """Standard starting position, white to move"""
        return cls(Board.starting_position(), DEFAULT_COLOR)

    @classmethod
    def from_fen(cls, placement: str, to_move: Color = DEFAULT_COLOR) -> Self:
        """Start from a custom position (the piece placement field of a FEN string)"""
        return cls(Board.from_fen(placement), to_move)

    def make_move(self, move: Move) -> TurnOutcome:
        """
        Attempt to make a move
        -----

        1. refuse null moves and moves onto your own pieces
        2. check the move against the rule of the piece kind
        3. update the board (which checks the piece on the start square is what the move claims)
        4. hand the turn to the opponent
        5. classify the outcome

        Any refusal raises a MoveError before the board or the turn are touched.
        """
        mover = self.current_player
        try:
            self._assert_legal(move, mover)
            captured = self.board.move_piece(move.piece, mover, move.start, move.end)
        except MoveError as e:
            logger.debug("Rejected %s for %s: %s", move, mover.display_name, e)
            raise

        self._pass_turn()
        outcome = self._classify(captured, mover)
        logger.debug("%s played %s -> %s", mover.display_name, move, outcome)
        if isinstance(outcome, Win):
            logger.info("%s captured the king and wins", mover.display_name)
        return outcome

    # -- PRIVATE HELPERS ---
    def _assert_legal(self, move: Move, color: Color) -> None:
        if move.start == move.end:
            raise InvalidPathError()

        # cannot take your own pieces
        target = self.board.piece(move.end)
        if target is not None and target.color == color:
            raise InvalidPathError()

        movement_rule: LegalityFn = LEGALITY_RULES[move.piece]
        if not movement_rule(move.start, move.end, self.board, color):
            raise InvalidPathError()

    def _pass_turn(self) -> None:
        self.current_player = self.current_player.opposite()

    def _classify(self, captured: Optional[Piece], mover: Color) -> TurnOutcome:
        if captured is None:
            return Continue()
        if captured.kind == PieceKind.KING:
            return Win(mover)
        return Taken(captured)
