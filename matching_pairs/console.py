"""Terminal frontend."""

from __future__ import annotations

import logging
import time
from typing import TYPE_CHECKING, Callable

from matching_pairs.game.board import CardBoard
from matching_pairs.session import change_number_of_pairs, show_best_scores
from matching_pairs.utils.logger import format_board

if TYPE_CHECKING:
    from matching_pairs.game.engine import GameEngine
    from matching_pairs.game.scheduler import EventLoop

logger = logging.getLogger(__name__)

HELP_TEXT = """Commands:
  <number>  flip the card with that number
  s         shuffle (new game)
  p         change the number of pairs
  l         show the leaderboard
  h         show this help
  q         exit"""


class ConsoleBoard(CardBoard):
    """Board drawn on stdout and driven by typed commands."""

    def __init__(
        self,
        num_pairs: int,
        input_fn: Callable[[str], str] = input,
        output_fn: Callable[[str], None] = print,
        sleep: Callable[[float], None] = time.sleep,
    ):
        """Initialize console board.

        Args:
            num_pairs: Number of pairs on the board
            input_fn: Reads one line of user input
            output_fn: Writes one block of text
            sleep: Waits while a reveal is pending (seconds)
        """
        super().__init__(num_pairs)
        self._input = input_fn
        self._output = output_fn
        self._sleep = sleep

        self.title = "Matching Pairs"
        self.matched_pairs_text = "Matched Pairs: 0"
        self.total_flips_text = "Total Flips: 0"
        self.running = False

    # Text and dialog surfaces

    def set_matched_pairs_text(self, text: str) -> None:
        self.matched_pairs_text = text

    def set_total_flips_text(self, text: str) -> None:
        self.total_flips_text = text

    def set_title(self, text: str) -> None:
        self.title = text

    def announce(self, text: str) -> None:
        self._output(text)

    def confirm(self, question: str) -> bool:
        answer = self._read(f"{question} [y/N] ")
        return answer is not None and answer.strip().lower() in ("y", "yes")

    def prompt_integer(self, question: str) -> int | None:
        """Ask for a number. Re-asks on non-numeric input, blank cancels."""
        while True:
            answer = self.prompt_string(question)
            if answer is None or not answer.strip():
                return None
            try:
                return int(answer.strip())
            except ValueError:
                self.report_error("Invalid input! Please enter a valid number.")

    def prompt_string(self, question: str) -> str | None:
        return self._read(f"{question} ")

    def report_error(self, text: str) -> None:
        self._output(f"Error: {text}")

    def close(self) -> None:
        self.running = False

    # Loop

    def render(self) -> None:
        """Draw title, labels and the card grid."""
        self._output(
            f"\n== {self.title} ==\n"
            f"Number of Pairs: {self.num_pairs}    "
            f"{self.matched_pairs_text}    {self.total_flips_text}\n"
            f"{format_board(self.cards)}"
        )

    def handle_command(self, command: str, engine: "GameEngine") -> None:
        """Dispatch one typed command."""
        command = command.strip().lower()
        if not command:
            return
        if command.isdigit():
            number = int(command)
            if not 1 <= number <= len(self.cards):
                self.report_error(f"No card {number}, pick 1-{len(self.cards)}.")
                return
            self.select(number - 1)
        elif command == "s":
            self.fire_shuffle()
        elif command == "p":
            change_number_of_pairs(self, engine)
        elif command == "l":
            show_best_scores(self, engine)
        elif command == "h":
            self._output(HELP_TEXT)
        elif command == "q":
            self.fire_exit()
        else:
            self.report_error(f"Unknown command: {command!r} (h for help)")

    def run(self, engine: "GameEngine", loop: "EventLoop") -> None:
        """Read and dispatch commands until exit or end of input."""
        self.running = True
        self._output(HELP_TEXT)
        while self.running:
            self.render()
            command = self._read("> ")
            if command is None:
                break
            self.handle_command(command, engine)

            loop.run_due()
            if loop.pending():
                # Keep the mismatched cards on screen until they are hidden
                self.render()
                loop.run_until_idle(self._sleep)

        logger.info("Console loop finished")

    def _read(self, prompt: str) -> str | None:
        try:
            return self._input(prompt)
        except EOFError:
            return None
