"""Game models."""

from .card import Card, CardState, TransitionRejected
from .game_state import GameState
from .leaderboard import Leaderboard, LeaderboardEntry
from .player import Player

__all__ = [
    "Card",
    "CardState",
    "TransitionRejected",
    "GameState",
    "Leaderboard",
    "LeaderboardEntry",
    "Player",
]
