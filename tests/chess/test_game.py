"""Unit tests for /src/chess/game.py"""

import logging
from copy import deepcopy
from unittest.mock import Mock, patch

import pytest

from src.chess.game import Board, Color, Continue, Game, Move, Piece, PieceKind, Taken, Win
from src.chess.square import Square
from src.core.exceptions import (
    InvalidPathError,
    MoveError,
    PieceNotFoundError,
    WrongPieceColorError,
    WrongPieceKindError,
)

STARTING_POSITION = "rnbqkbnr/pppppppp/8/8/8/8/PPPPPPPP/RNBQKBNR"


def play(game: Game, *notations: str) -> list:
    """Convenience: play a sequence of moves, return the outcomes"""
    return [game.make_move(Move.from_notation(notation)) for notation in notations]


def assert_unchanged(game: Game, before: Game) -> None:
    assert game.board == before.board
    assert game.current_player == before.current_player


# -- CREATION LOGIC --
def test_creating_new_game() -> None:
    """Creating a new game with canonical starting position, white to move"""
    game = Game.new_game()
    assert game.board == Board.from_fen(STARTING_POSITION)
    assert game.current_player == Color.WHITE
    assert Game() == game


def test_creating_game_from_custom_position() -> None:
    game = Game.from_fen("4k3/8/8/8/8/8/8/4K3", Color.BLACK)
    assert game.current_player == Color.BLACK
    assert game.board.count_pieces(Color.WHITE) == 1
    assert game.board.piece(Square.from_algebraic("e8")) == Piece(PieceKind.KING, Color.BLACK)


# -- MAKING MOVES --
def test_first_pawn_push() -> None:
    """White plays e4: nothing taken, black to move"""
    game = Game.new_game()
    outcome = game.make_move(Move.from_notation("Pe2e4"))

    assert outcome == Continue()
    assert game.current_player == Color.BLACK
    assert game.board.piece(Square.from_algebraic("e4")) == Piece(PieceKind.PAWN, Color.WHITE)
    assert game.board.piece(Square.from_algebraic("e2")) is None


def test_turns_alternate() -> None:
    game = Game.new_game()
    play(game, "Pe2e4")
    assert game.current_player == Color.BLACK
    play(game, "Pe7e5")
    assert game.current_player == Color.WHITE
    play(game, "Ng1f3")
    assert game.current_player == Color.BLACK


def test_pawn_capture() -> None:
    """e4, d5, exd5"""
    game = Game.new_game()
    outcomes = play(game, "Pe2e4", "Pd7d5", "Pe4d5")
    assert outcomes == [Continue(), Continue(), Taken(Piece(PieceKind.PAWN, Color.BLACK))]
    assert game.board.count_pieces(Color.BLACK) == 15
    assert game.current_player == Color.BLACK


def test_queen_takes_rook() -> None:
    game = Game.from_fen("4k2r/8/8/8/8/8/8/Q3K3")
    outcome = game.make_move(Move.from_notation("Qa1h8"))
    assert outcome == Taken(Piece(PieceKind.ROOK, Color.BLACK))


@pytest.mark.parametrize("mover", [Color.WHITE, Color.BLACK])
def test_king_capture_wins(mover: Color) -> None:
    """Capturing the king ends the game in favor of the side that moved"""
    game = Game.from_fen("8/8/8/3k4/3K4/8/8/8", mover)
    notation = "Kd4d5" if mover == Color.WHITE else "Kd5d4"
    outcome = game.make_move(Move.from_notation(notation))
    assert outcome == Win(mover)
    assert game.board.count_pieces(mover.opposite()) == 0


def test_scholars_mate_ends_with_king_capture() -> None:
    """No checkmate detection: the game only ends once the king is actually taken"""
    game = Game.new_game()
    outcomes = play(
        game,
        "Pe2e4", "Pe7e5",
        "Bf1c4", "Nb8c6",
        "Qd1h5", "Ng8f6",
        "Qh5f7", "Pa7a6",
        "Qf7e8",
    )
    assert outcomes[6] == Taken(Piece(PieceKind.PAWN, Color.BLACK))
    assert outcomes[-1] == Win(Color.WHITE)


def test_king_may_be_left_capturable() -> None:
    """Moving next to the enemy king is allowed"""
    game = Game.from_fen("8/8/8/3k4/8/3K4/8/8")
    assert game.make_move(Move.from_notation("Kd3d4")) == Continue()


def test_knight_jumps_out_of_starting_position() -> None:
    game = Game.new_game()
    assert play(game, "Nb1c3", "Ng8f6") == [Continue(), Continue()]


# -- REJECTED MOVES --
@pytest.mark.parametrize(
    "notation",
    [
        "Ra1a8",  # blocked by own pawn
        "Ra1a2",  # onto own pawn
        "Bc1e3",  # blocked by own pawn
        "Qd1d3",  # blocked
        "Ke1e2",  # onto own pawn
        "Ke1e3",  # too far
        "Nb1b3",  # not a knight jump
        "Pe2e5",  # too far
        "Pe2d3",  # diagonal without a capture
        "Pe2e2",  # null move
    ],
)
def test_invalid_path_from_start(notation: str) -> None:
    game = Game.new_game()
    before = deepcopy(game)
    with pytest.raises(InvalidPathError):
        game.make_move(Move.from_notation(notation))
    assert_unchanged(game, before)


def test_null_move_is_rejected_before_the_board_is_asked() -> None:
    """Even for an empty square, a move to the same square is an invalid path"""
    game = Game.new_game()
    with pytest.raises(InvalidPathError):
        game.make_move(Move.from_notation("Qe4e4"))


def test_moving_from_empty_square() -> None:
    game = Game.new_game()
    before = deepcopy(game)
    with pytest.raises(PieceNotFoundError):
        game.make_move(Move.from_notation("Pe3e4"))
    assert_unchanged(game, before)


def test_moving_opponents_piece() -> None:
    """White asks to push the pawn on e7: the geometry works for white, but the pawn is black"""
    game = Game.from_fen("8/4p3/8/8/8/8/8/8")
    before = deepcopy(game)
    with pytest.raises(WrongPieceColorError):
        game.make_move(Move.from_notation("Pe7e8"))
    assert_unchanged(game, before)


def test_claiming_wrong_piece_kind() -> None:
    """The move says knight, but a pawn stands on e2 (pawn rules would allow e2-e3)"""
    game = Game.new_game()
    before = deepcopy(game)
    with pytest.raises(InvalidPathError):
        game.make_move(Move.from_notation("Ne2e3"))

    # knight geometry, pawn on the square
    with pytest.raises(WrongPieceKindError):
        game.make_move(Move.from_notation("Ne2f4"))
    assert_unchanged(game, before)


def test_black_cannot_move_first() -> None:
    game = Game.new_game()
    with pytest.raises(WrongPieceColorError):
        game.make_move(Move.from_notation("Ng8f6"))
    assert game.current_player == Color.WHITE


def test_all_rejections_are_move_errors() -> None:
    game = Game.new_game()
    for notation in ["Ra1a8", "Pe3e4", "Ne2f4"]:
        with pytest.raises(MoveError):
            game.make_move(Move.from_notation(notation))


def test_game_continues_after_rejected_move() -> None:
    game = Game.new_game()
    with pytest.raises(InvalidPathError):
        game.make_move(Move.from_notation("Ra1a8"))
    assert game.make_move(Move.from_notation("Pa2a4")) == Continue()
    assert game.current_player == Color.BLACK


def test_board_errors_propagate_unchanged() -> None:
    """Whatever the board refuses surfaces as is, and the turn stays with the mover"""
    game = Game.new_game()
    error = WrongPieceKindError()
    with patch.object(Board, "move_piece", Mock(side_effect=error)):
        with pytest.raises(WrongPieceKindError) as excinfo:
            game.make_move(Move.from_notation("Pe2e4"))
    assert excinfo.value is error
    assert game.current_player == Color.WHITE


def test_legality_rule_is_looked_up_per_kind() -> None:
    """The Game consults the rule registered for the moving piece kind"""
    rule = Mock(return_value=False)
    game = Game.new_game()
    with patch.dict("src.chess.game.LEGALITY_RULES", {PieceKind.PAWN: rule}):
        with pytest.raises(InvalidPathError):
            game.make_move(Move.from_notation("Pe2e4"))
    rule.assert_called_once_with(
        Square.from_algebraic("e2"), Square.from_algebraic("e4"), game.board, Color.WHITE
    )


def test_double_step_over_a_piece_is_allowed() -> None:
    """Known gap: the initial double step does not look at the square it passes"""
    game = Game.from_fen("4k3/8/8/8/8/4n3/4P3/4K3")
    assert game.make_move(Move.from_notation("Pe2e4")) == Continue()


# -- LOGGING --
def test_win_is_logged(caplog: pytest.LogCaptureFixture) -> None:
    game = Game.from_fen("8/8/8/3k4/3K4/8/8/8")
    with caplog.at_level(logging.INFO, logger="src.chess.game"):
        game.make_move(Move.from_notation("Kd4d5"))
    assert "White captured the king and wins" in caplog.text


def test_rejection_is_logged(caplog: pytest.LogCaptureFixture) -> None:
    game = Game.new_game()
    with caplog.at_level(logging.DEBUG, logger="src.chess.game"):
        with pytest.raises(InvalidPathError):
            game.make_move(Move.from_notation("Ra1a8"))
    assert "Rejected Ra1a8 for White" in caplog.text
