"""
Command loop for the terminal game.

Reads lines, drives the board engine, and prints the board and
outcome messages after every move.
"""
import argparse
import dataclasses
import sys
from typing import Callable, Iterable, Iterator, Optional, Sequence

from game import (
    Board,
    BoardConfig,
    GameState,
    MoveResult,
    PRESETS,
    render_board,
)

from .commands import (
    CheatCommand,
    HelpCommand,
    Move,
    parse_command,
    parse_dimensions,
    parse_int,
)


# ============================================================================
# Messages
# ============================================================================

WELCOME = "Welcome to minesweeper"
DIMENSIONS_PROMPT = "Please enter game dimensions: width height number_of_mines"
TOO_MANY_MINES = "Mine count too large, please enter a smaller number of mines"
MINES_PROMPT = "Please enter the desired number of mines"
MOVE_PROMPT = "Please enter a move: x y [action], or h to print out valid actions"
HELP_TEXT = (
    "flag: mark a space as mined.\n"
    "clear: clear a space, if no action is provided this is the default action.\n"
    "question: mark a space as maybe mined."
)
CONFIRM_PROMPT = (
    "You marked this tile, are you sure you want to change its marking? y/n"
)
WIN_MESSAGE = "Congratulations you won!"
LOSE_MESSAGE = "Unfortunately you lost."
OUT_OF_BOUNDS_MESSAGE = "Please enter an in bounds move"
ALREADY_REVEALED_MESSAGE = "This tile has already been clicked"
INPUT_CLOSED_MESSAGE = "Input closed, exiting."


# ============================================================================
# Game Session
# ============================================================================

class GameSession:
    """
    One interactive game, from the dimension prompt to win or loss.

    Input and output are injectable so the dialog can be scripted.
    """

    def __init__(
        self,
        lines: Optional[Iterable[str]] = None,
        output: Callable[[str], None] = print,
        config: Optional[BoardConfig] = None,
        seed: Optional[int] = None,
        exact_mine_counter: bool = False,
    ) -> None:
        """
        Initialize the session.

        Args:
            lines: Input lines (default: stdin).
            output: Sink for every printed line.
            config: Board configuration; prompts for one when None.
            seed: Seed for mine placement.
            exact_mine_counter: Counter mode for prompted configurations.
        """
        self._lines: Iterator[str] = iter(sys.stdin if lines is None else lines)
        self._output = output
        self._config = config
        self._seed = seed
        self._exact_mine_counter = exact_mine_counter
        self.board: Optional[Board] = None

    def run(self) -> Optional[GameState]:
        """
        Play the game to completion.

        Returns:
            Final game state, or None if input ran out first.
        """
        self._output(WELCOME)
        try:
            config = self._config or self._prompt_config()
            self.board = Board(config, seed=self._seed)
            return self._play()
        except EOFError:
            self._output(INPUT_CLOSED_MESSAGE)
            return None

    # ========================================================================
    # Input Helpers
    # ========================================================================

    def _read_line(self) -> str:
        try:
            return next(self._lines)
        except StopIteration:
            raise EOFError from None

    def _prompt_config(self) -> BoardConfig:
        """Ask for dimensions until a usable configuration is entered."""
        while True:
            self._output(DIMENSIONS_PROMPT)
            try:
                dimensions = parse_dimensions(self._read_line())
            except ValueError as error:
                self._output(str(error))
                continue
            if dimensions is not None:
                break

        width, height, mines = dimensions
        while mines >= width * height:
            self._output(TOO_MANY_MINES)
            mines = self._prompt_mine_count()
        return BoardConfig(
            width, height, mines, exact_mine_counter=self._exact_mine_counter
        )

    def _prompt_mine_count(self) -> int:
        while True:
            self._output(MINES_PROMPT)
            value = parse_int(self._read_line())
            if value is not None and value >= 0:
                return value

    def _confirm(self) -> bool:
        """Read tokens until the player answers y or n."""
        while True:
            for token in self._read_line().split():
                if token == "y":
                    return True
                if token == "n":
                    return False

    # ========================================================================
    # Turn Handling
    # ========================================================================

    def _show_board(self) -> None:
        self._output(render_board(self.board.snapshot()))

    def _play(self) -> GameState:
        while True:
            self._show_board()
            self._output(MOVE_PROMPT)
            command = parse_command(self._read_line())

            if isinstance(command, HelpCommand):
                self._output(HELP_TEXT)
                continue
            if isinstance(command, CheatCommand):
                return self._finish_won()
            if command is None:
                continue

            result = self._resolve(command)
            if result is None:
                continue
            if result == MoveResult.WIN:
                return self._finish_won()
            if result == MoveResult.LOSE:
                self._output(LOSE_MESSAGE)
                self._show_board()
                return self.board.game_state
            if result == MoveResult.REJECT_OUT_OF_BOUNDS:
                self._output(OUT_OF_BOUNDS_MESSAGE)
            elif result == MoveResult.REJECT_ALREADY_REVEALED:
                self._output(ALREADY_REVEALED_MESSAGE)

    def _resolve(self, move: Move) -> Optional[MoveResult]:
        """
        Apply a move, running the confirmation dialog if needed.

        Returns:
            The move result, or None if the player declined to
            overwrite a marked cell.
        """
        result = self.board.apply_move(move.x, move.y, move.action)
        if result != MoveResult.NEEDS_CONFIRMATION:
            return result
        self._output(CONFIRM_PROMPT)
        if not self._confirm():
            return None
        return self.board.apply_move(move.x, move.y, move.action, confirmed=True)

    def _finish_won(self) -> GameState:
        self._output(WIN_MESSAGE)
        self.board.win()
        self._show_board()
        return self.board.game_state


# ============================================================================
# Entry Point
# ============================================================================

def build_parser() -> argparse.ArgumentParser:
    """Create the command line parser."""
    parser = argparse.ArgumentParser(
        description="Minesweeper - play in the terminal"
    )
    parser.add_argument(
        "--seed", type=int, default=None, help="Seed for mine placement"
    )
    parser.add_argument(
        "--preset",
        choices=sorted(PRESETS),
        default=None,
        help="Start with a preset board instead of prompting",
    )
    parser.add_argument("--width", type=int, default=None, help="Board width")
    parser.add_argument("--height", type=int, default=None, help="Board height")
    parser.add_argument("--mines", type=int, default=None, help="Number of mines")
    parser.add_argument(
        "--exact-mine-counter",
        action="store_true",
        help="Restore the mine counter when a flagged mine is unflagged",
    )
    return parser


def config_from_args(
    parser: argparse.ArgumentParser, args: argparse.Namespace
) -> Optional[BoardConfig]:
    """Build a board configuration from arguments, or None to prompt."""
    dimensions = (args.width, args.height, args.mines)
    given = [value is not None for value in dimensions]

    if args.preset:
        if any(given):
            parser.error("--preset cannot be combined with --width/--height/--mines")
        return dataclasses.replace(
            PRESETS[args.preset], exact_mine_counter=args.exact_mine_counter
        )
    if not any(given):
        return None
    if not all(given):
        parser.error("--width, --height and --mines must be given together")
    try:
        return BoardConfig(
            *dimensions, exact_mine_counter=args.exact_mine_counter
        )
    except ValueError as error:
        parser.error(str(error))


def main(argv: Optional[Sequence[str]] = None) -> None:
    """Parse arguments and play one game on stdin/stdout."""
    parser = build_parser()
    args = parser.parse_args(argv)
    config = config_from_args(parser, args)

    session = GameSession(
        config=config,
        seed=args.seed,
        exact_mine_counter=args.exact_mine_counter,
    )
    session.run()


if __name__ == "__main__":
    main()
