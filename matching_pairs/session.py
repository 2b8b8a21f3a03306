"""Player registration and board settings prompts.

Each helper re-asks until it gets valid input or the user cancels, and
reports invalid input through the board's error surface.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from matching_pairs.config import Config
from matching_pairs.models.player import Player

if TYPE_CHECKING:
    from matching_pairs.game.board import Board, CardBoard
    from matching_pairs.game.engine import GameEngine

logger = logging.getLogger(__name__)


def ask_player_count(board: "Board", max_players: int) -> int:
    """Ask how many players take part. Cancelling means one player."""
    while True:
        count = board.prompt_integer(f"Enter the number of players (1-{max_players}):")
        if count is None:
            return 1
        if 1 <= count <= max_players:
            return count
        board.report_error(
            f"Invalid input! Please enter a number between 1 and {max_players}."
        )


def register_players(board: "Board", config: Config | None = None) -> list[Player]:
    """Ask for the number of players and their names.

    Blank or cancelled names default to the configured guest name for a
    single player, and to "Player N" otherwise.
    """
    config = config or Config()
    count = ask_player_count(board, config.game.max_players)

    players = []
    for i in range(count):
        if count == 1:
            question = "Enter your name:"
            default = config.game.default_player_name
        else:
            question = f"Enter the name of player {i + 1}:"
            default = f"Player {i + 1}"

        name = board.prompt_string(question)
        if name is None or not name.strip():
            name = default
        players.append(Player(name=name.strip()))

    logger.info(f"Registered players: {', '.join(p.name for p in players)}")
    return players


def ask_number_of_pairs(board: "Board", current: int) -> int:
    """Ask for a new number of pairs (positive even). Cancel keeps current."""
    while True:
        pairs = board.prompt_integer(
            "Enter the number of pairs (must be an even positive number):"
        )
        if pairs is None:
            return current
        if pairs > 0 and pairs % 2 == 0:
            return pairs
        board.report_error("Invalid input! Please enter a positive even number.")


def change_number_of_pairs(board: "CardBoard", engine: "GameEngine") -> bool:
    """Rebuild the board with a new number of pairs and start a new game.

    Returns:
        True if the board was rebuilt.
    """
    if engine.is_timer_active:
        board.report_error("Cannot change the board while cards are being revealed.")
        return False

    pairs = ask_number_of_pairs(board, board.num_pairs)
    if pairs == board.num_pairs:
        return False

    logger.info(f"Changing number of pairs: {board.num_pairs} -> {pairs}")
    board.rebuild(pairs)
    engine.rebind(board)
    return True


def ask_board_size(board: "Board") -> int | None:
    """Ask which board size (number of pairs) to look up."""
    while True:
        size = board.prompt_integer("Enter the board size to view the leaderboard:")
        if size is None:
            return None
        if size > 0:
            return size
        board.report_error("Invalid board size entered!")


def show_best_scores(board: "Board", engine: "GameEngine") -> None:
    """Show the leaderboard for a board size chosen by the user."""
    size = ask_board_size(board)
    if size is None:
        return
    board.announce(engine.leaderboard.format_for_size(size))
