"""
Read-eval-print loop for two players sharing one terminal.

Reads one move per line, hands it to the Game and reports the outcome. Any MoveError is shown to the player, who is then
asked again (the game state is untouched by a refused move).
"""

import logging
import sys
from typing import Optional, TextIO

from src.chess.game import Continue, Game, Taken, TurnOutcome, Win
from src.chess.moves import Move
from src.cli.render import render_board
from src.core.config import Settings
from src.core.exceptions import ConfigError, InvalidFENError, MoveError

logger = logging.getLogger(__name__)

WELCOME = (
    "Welcome to Chess!\n"
    "Specify moves using standard notation (one character piece + start/end squares)\n"
)


def configure_logging(settings: Settings) -> None:
    # stderr only: stdout is the game transcript
    logging.basicConfig(
        level=settings.log_level,
        stream=sys.stderr,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


def create_game(settings: Settings) -> Game:
    if settings.starting_position:
        return Game.from_fen(settings.starting_position)
    return Game.new_game()


def read_move(stdin: TextIO) -> Optional[str]:
    """One trimmed line, or None once the input is exhausted"""
    line = stdin.readline()
    if not line:
        return None
    return line.strip()


def play_turn(game: Game, text: str) -> TurnOutcome:
    """Decode the text and make the move. Both steps raise MoveError on failure."""
    move = Move.from_notation(text)
    return game.make_move(move)


def report(outcome: TurnOutcome, out: TextIO) -> None:
    match outcome:
        case Taken(piece=piece):
            out.write(f"{piece} taken!\n")
        case Win(color=color):
            out.write(f"Game over, {color.display_name} wins!\n")
        case Continue():
            pass


def run(game: Game, settings: Settings, stdin: TextIO, stdout: TextIO) -> int:
    """Play until a king is captured or the input runs out."""
    stdout.write(WELCOME + "\n")

    while True:
        stdout.write(f"{render_board(game.board, settings)}\n\n")
        stdout.write(f"{game.current_player.display_name} to move: ")
        stdout.flush()

        # repeatedly try to both parse & execute the move, prompting for another on any kind of error
        while True:
            text = read_move(stdin)
            if text is None:
                logger.info("Input closed, ending the session")
                stdout.write("\n")
                return 0
            try:
                outcome = play_turn(game, text)
                break
            except MoveError as e:
                stdout.write(f"invalid move: {e}\n")
                stdout.write("try again: ")
                stdout.flush()

        report(outcome, stdout)
        if isinstance(outcome, Win):
            return 0


def main() -> int:
    try:
        settings = Settings.from_env()
    except ConfigError as e:
        sys.stderr.write(f"{e}\n")
        return 2

    configure_logging(settings)
    try:
        game = create_game(settings)
    except InvalidFENError as e:
        logger.error("Cannot start from the configured position: %s", e)
        return 2
    return run(game, settings, sys.stdin, sys.stdout)


if __name__ == "__main__":
    sys.exit(main())
