"""Logging utilities and board rendering."""

import logging
import math
import sys
from typing import TYPE_CHECKING, TextIO

if TYPE_CHECKING:
    from matching_pairs.models.card import Card


def setup_logging(level: str = "INFO", stream: TextIO | None = None) -> None:
    """Configure logging for the application.

    Args:
        level: Logging level (DEBUG, INFO, WARNING, ERROR)
        stream: Output stream (stdout if not provided)
    """
    logging.basicConfig(
        level=getattr(logging, level.upper()),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%H:%M:%S",
        stream=stream or sys.stdout,
    )


def grid_columns(num_cards: int) -> int:
    """Number of columns for a near-square grid of num_cards cells."""
    if num_cards <= 0:
        return 0
    rows = max(1, int(math.sqrt(num_cards)))
    return math.ceil(num_cards / rows)


def format_board(cards: list["Card"], columns: int | None = None) -> str:
    """Render cards as a grid of numbered cells.

    Cell numbers are 1-based. Face-down cards show "?", face-up cards their
    value, matched cards are blank.
    """
    if not cards:
        return ""
    columns = columns or grid_columns(len(cards))
    width = len(str(len(cards)))
    value_width = max((len(str(c.value)) for c in cards if c.value is not None), default=1)

    rows = []
    for start in range(0, len(cards), columns):
        cells = [
            f"[{card.index + 1:>{width}}:{card.face():>{value_width}}]"
            for card in cards[start:start + columns]
        ]
        rows.append(" ".join(cells))
    return "\n".join(rows)
