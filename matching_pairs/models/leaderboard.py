"""Best scores per board size."""

from pydantic import BaseModel


class LeaderboardEntry(BaseModel, frozen=True):
    """Winner of one completed game."""

    player_name: str
    flips: int

    def __str__(self) -> str:
        return f"{self.player_name}: {self.flips} flips"


class Leaderboard:
    """In-memory leaderboard, one bucket per board size (number of pairs).

    Entries are only ever appended. Each bucket is kept sorted ascending by
    flips; entries with equal flips keep their recording order.
    """

    def __init__(self) -> None:
        self._buckets: dict[int, list[LeaderboardEntry]] = {}

    def record(self, pair_count: int, entry: LeaderboardEntry) -> None:
        """Append an entry to the bucket for pair_count and re-sort it."""
        bucket = self._buckets.setdefault(pair_count, [])
        bucket.append(entry)
        bucket.sort(key=lambda e: e.flips)

    def for_size(self, pair_count: int) -> list[LeaderboardEntry]:
        """Get the sorted entries for a board size (empty if none)."""
        return list(self._buckets.get(pair_count, []))

    def format_for_size(self, pair_count: int) -> str:
        """Render the leaderboard for a board size as text."""
        entries = self.for_size(pair_count)
        if not entries:
            return f"No games found for board size {pair_count}"
        lines = [f"Leaderboard for {pair_count} pairs:"]
        lines.extend(str(entry) for entry in entries)
        return "\n".join(lines)
