"""Game logic."""

from .board import Board, CardBoard
from .engine import ConsistencyError, GameEngine, generate_card_values
from .scheduler import EventLoop, ManualClock, ScheduledTask

__all__ = [
    "Board",
    "CardBoard",
    "ConsistencyError",
    "GameEngine",
    "generate_card_values",
    "EventLoop",
    "ManualClock",
    "ScheduledTask",
]
