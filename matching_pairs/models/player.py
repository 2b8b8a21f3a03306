"""Player model."""

from pydantic import BaseModel, Field


class Player(BaseModel):
    """Player registered for a game session."""

    name: str = "Guest"

    # Per-game counters, reset on every shuffle
    total_flips: int = Field(default=0, ge=0)
    matched_pairs: int = Field(default=0, ge=0)

    def record_flip(self) -> None:
        """Count one card turned face up by this player."""
        self.total_flips += 1

    def record_match(self) -> None:
        """Count one matched pair found by this player."""
        self.matched_pairs += 1

    def reset_game_state(self) -> None:
        """Reset game-related counters (called on every shuffle)."""
        self.total_flips = 0
        self.matched_pairs = 0

    def __str__(self) -> str:
        return f"{self.name}: {self.matched_pairs} pairs, {self.total_flips} flips"

    def __repr__(self) -> str:
        return (
            f"Player(name={self.name!r}, matched_pairs={self.matched_pairs}, "
            f"total_flips={self.total_flips})"
        )
