"""Game state model."""

from pydantic import BaseModel


class GameState(BaseModel):
    """Counters and flags owned by the game engine."""

    # Turn info
    current_player_index: int = 0

    # Bookkeeping for the running game
    global_matched_pairs: int = 0
    total_flips: int = 0  # Running total across all players

    # Control flags
    is_timer_active: bool = False  # Reveal delay pending, selections frozen
    bypass_veto: bool = False  # Engine-internal bulk reset in progress

    # Session
    games_completed: int = 0
    is_aborted: bool = False  # Set on a consistency violation

    def reset_for_new_game(self) -> None:
        """Reset state for a new game (called on every shuffle)."""
        self.current_player_index = 0
        self.global_matched_pairs = 0
        self.total_flips = 0
        self.is_timer_active = False
        self.bypass_veto = False

    def __str__(self) -> str:
        parts = [f"Player {self.current_player_index}'s turn"]
        parts.append(f"pairs={self.global_matched_pairs}")
        parts.append(f"flips={self.total_flips}")
        if self.is_timer_active:
            parts.append("[REVEAL]")
        if self.is_aborted:
            parts.append("[ABORTED]")
        return " ".join(parts)
