"""Game engine for the matching pairs game."""

from __future__ import annotations

import logging
import random
from typing import Callable

from matching_pairs.config import Config
from matching_pairs.models.card import Card, CardState, TransitionRejected
from matching_pairs.models.game_state import GameState
from matching_pairs.models.leaderboard import Leaderboard, LeaderboardEntry
from matching_pairs.models.player import Player

from .board import Board
from .scheduler import EventLoop

logger = logging.getLogger(__name__)


class ConsistencyError(RuntimeError):
    """Per-player matched pairs disagree with the global counter.

    Signals a defect in pair bookkeeping. The game session is aborted.
    """


def generate_card_values(num_pairs: int, rng: random.Random | None = None) -> list[int]:
    """Build a shuffled list holding each value 1..num_pairs exactly twice.

    Args:
        num_pairs: Number of pairs.
        rng: Random source (module-level generator if not provided).

    Returns:
        Shuffled list of 2 * num_pairs values.
    """
    values = [v for v in range(1, num_pairs + 1) for _ in range(2)]
    (rng or random).shuffle(values)
    return values


class GameEngine:
    """Turn, flip and scoring rules for a board of face-down cards."""

    def __init__(
        self,
        players: list[Player],
        config: Config | None = None,
        loop: EventLoop | None = None,
        leaderboard: Leaderboard | None = None,
        rng: random.Random | None = None,
    ):
        """Initialize game engine.

        Args:
            players: Players in turn order (at least one).
            config: Configuration (uses defaults if not provided)
            loop: Event loop running the delayed reveal reversal
            leaderboard: Leaderboard to record winners in (creates one if not provided)
            rng: Random source for shuffling
        """
        if not players:
            raise ValueError("At least one player is required")

        self.players = list(players)
        self.config = config or Config()
        self.loop = loop or EventLoop()
        self.leaderboard = leaderboard or Leaderboard()
        self.rng = rng or random.Random()

        self.state = GameState()
        self.board: Board | None = None
        self.cards: list[Card] = []
        self.first_selected_card: Card | None = None

        self._on_game_end: Callable[[Player, list[Player]], None] | None = None

    @property
    def current_player(self) -> Player:
        """Player whose turn it is."""
        return self.players[self.state.current_player_index]

    @property
    def is_timer_active(self) -> bool:
        return self.state.is_timer_active

    @property
    def total_pairs(self) -> int:
        """Number of pairs on the bound board."""
        return len(self.cards) // 2

    def set_callbacks(
        self,
        on_game_end: Callable[[Player, list[Player]], None] | None = None,
    ) -> None:
        """Set event callbacks.

        Args:
            on_game_end: Called when a game ends (winner, ranking)
        """
        self._on_game_end = on_game_end

    # Wiring

    def initialize(self, board: Board) -> bool:
        """Bind to a board, register on every card and start a game.

        Args:
            board: Board providing the cards and the display surfaces

        Returns:
            True if a new game was dealt on board, False if refused
            (reveal pending or session aborted).
        """
        if self.state.is_timer_active:
            logger.warning("Initialize refused: reveal timer active")
            board.report_error("Cannot change the board while cards are being revealed.")
            return False

        # Detach from cards of a previous board
        for card in self.cards:
            card.remove_change_listener(self.on_state_changed)
            card.set_veto_authority(None)

        self.board = board
        self.cards = board.get_cards()

        for card in self.cards:
            card.set_veto_authority(self.may_transition)
            card.add_change_listener(self.on_state_changed)

        board.on_shuffle(self.shuffle_cards)
        board.on_exit(self.exit_game)

        logger.info(
            f"Engine bound to board with {self.total_pairs} pairs, "
            f"{len(self.players)} player(s)"
        )
        return self.shuffle_cards()

    def rebind(self, board: Board) -> bool:
        """Re-wire after the board rebuilt its cards (new number of pairs)."""
        logger.info("Board rebuilt, re-initializing engine")
        return self.initialize(board)

    def may_transition(self, card: Card, old: CardState, new: CardState) -> None:
        """Veto authority for card state changes.

        Bypass mode suppresses both rules. It is only set by the engine for
        bulk resets and the reveal reversal, never for clicks.

        Raises:
            TransitionRejected: If the transition is not allowed
        """
        if self.state.bypass_veto:
            return

        if self.state.is_timer_active:
            raise TransitionRejected(card, old, new, "State change not allowed during timer")

        if old in (CardState.FACE_UP, CardState.EXCLUDED) and new == CardState.FACE_DOWN:
            raise TransitionRejected(card, old, new)

    def on_state_changed(self, card: Card, old: CardState, new: CardState) -> None:
        """Card change listener."""
        if new == CardState.FACE_UP:
            self.handle_selection(card)

    # Selection

    def handle_selection(self, card: Card) -> None:
        """Process a card that has just been turned face up.

        Args:
            card: The selected card
        """
        if self.state.is_aborted:
            logger.warning(f"Session aborted, ignoring selection of card {card.index}")
            return
        if self.state.is_timer_active or card.state != CardState.FACE_UP:
            return

        player = self.current_player
        player.record_flip()
        self.state.total_flips += 1
        self.board.set_total_flips_text(self._flips_text())
        logger.debug(f"{player.name} flipped card {card.index} (value {card.value})")

        first = self.first_selected_card
        if first is None:
            self.first_selected_card = card
            return

        if first.value == card.value:
            self._resolve_match(first, card)
        else:
            self._start_reveal_timer(first, card)

    def _resolve_match(self, first: Card, second: Card) -> None:
        player = self.current_player
        self.state.global_matched_pairs += 1
        player.record_match()
        logger.info(
            f"{player.name} matched pair {first.value} "
            f"({self.state.global_matched_pairs}/{self.total_pairs})"
        )

        first.set_state(CardState.EXCLUDED)
        second.set_state(CardState.EXCLUDED)
        self.board.set_matched_pairs_text(self._pairs_text())

        self.check_consistency()
        self.first_selected_card = None
        self._check_completion()

    def _start_reveal_timer(self, first: Card, second: Card) -> None:
        self.state.is_timer_active = True
        delay = self.config.game.reveal_delay_ms
        logger.debug(f"No match ({first.value} vs {second.value}), hiding in {delay}ms")
        self.loop.call_later(delay, lambda: self._conceal(first, second))

    def _conceal(self, first: Card, second: Card) -> None:
        """Reveal timer fired: hide both cards and pass the turn."""
        self.state.bypass_veto = True
        try:
            first.set_state(CardState.FACE_DOWN)
            second.set_state(CardState.FACE_DOWN)
        finally:
            self.state.bypass_veto = False

        self.first_selected_card = None
        self.next_player()
        self.update_ui()
        self.state.is_timer_active = False

    def next_player(self) -> None:
        """Pass the turn to the next player."""
        self.state.current_player_index = (
            self.state.current_player_index + 1
        ) % len(self.players)
        logger.debug(f"Turn passes to {self.current_player.name}")

    # Shuffle

    def shuffle_cards(self) -> bool:
        """Start a new game on the same board.

        Returns:
            True if the cards were shuffled, False if the request was rejected.
        """
        if self.state.is_aborted:
            self.board.report_error("Game session aborted after a scoring error.")
            return False
        if self.state.is_timer_active:
            logger.warning("Shuffle rejected: reveal timer active")
            self.board.report_error("Cannot shuffle while cards are being revealed.")
            return False

        self.state.reset_for_new_game()
        for player in self.players:
            player.reset_game_state()

        values = generate_card_values(self.total_pairs, self.rng)

        self.state.bypass_veto = True
        try:
            for card, value in zip(self.cards, values):
                card.set_value(value)
                card.set_state(CardState.FACE_DOWN)
        finally:
            self.state.bypass_veto = False

        self.first_selected_card = None
        self.state.is_timer_active = False
        logger.info(f"Cards shuffled ({self.total_pairs} pairs)")
        self.update_ui()
        return True

    # Scoring

    def check_consistency(self) -> None:
        """Verify per-player matched pairs add up to the global counter.

        Raises:
            ConsistencyError: If they do not. The session is marked aborted.
        """
        per_player = sum(p.matched_pairs for p in self.players)
        if per_player != self.state.global_matched_pairs:
            self.state.is_aborted = True
            logger.error(
                f"Matched pairs mismatch: players={per_player}, "
                f"global={self.state.global_matched_pairs}"
            )
            raise ConsistencyError(
                f"Players hold {per_player} pairs but "
                f"{self.state.global_matched_pairs} were matched"
            )

    def determine_winner(self) -> Player:
        """Player with most pairs, ties broken by fewest flips."""
        return max(self.players, key=lambda p: (p.matched_pairs, -p.total_flips))

    def ranking(self) -> list[Player]:
        """Players by matched pairs descending, then flips ascending."""
        return sorted(self.players, key=lambda p: (-p.matched_pairs, p.total_flips))

    def format_ranking(self) -> str:
        """Render the ranking as a 1-indexed list."""
        lines = ["Final ranking:"]
        for rank, player in enumerate(self.ranking(), 1):
            lines.append(f"{rank}. {player}")
        return "\n".join(lines)

    def _check_completion(self) -> None:
        if self.state.global_matched_pairs != self.total_pairs:
            return

        self.check_consistency()
        winner = self.determine_winner()
        ranking = self.ranking()

        if len(self.players) == 1:
            self.board.announce(
                f"Congratulations {winner.name}! You've matched all pairs "
                f"in {winner.total_flips} flips."
            )
        else:
            self.board.announce(
                f"{winner.name} wins with {winner.matched_pairs} pairs "
                f"in {winner.total_flips} flips!"
            )
            self.board.announce(self.format_ranking())

        self.leaderboard.record(
            self.total_pairs,
            LeaderboardEntry(player_name=winner.name, flips=winner.total_flips),
        )
        self.state.games_completed += 1
        logger.info(
            f"Game {self.state.games_completed} finished, winner {winner.name} "
            f"({winner.matched_pairs} pairs, {winner.total_flips} flips)"
        )

        if self._on_game_end:
            self._on_game_end(winner, ranking)

    def get_leaderboard_for_size(self, pair_count: int) -> list[LeaderboardEntry]:
        """Get sorted leaderboard entries for a board size (empty if none)."""
        return self.leaderboard.for_size(pair_count)

    # Display

    def _flips_text(self) -> str:
        player = self.current_player
        if len(self.players) > 1:
            return f"Total Flips ({player.name}): {player.total_flips}"
        return f"Total Flips: {player.total_flips}"

    def _pairs_text(self) -> str:
        player = self.current_player
        if len(self.players) > 1:
            return f"Matched Pairs ({player.name}): {player.matched_pairs}"
        return f"Matched Pairs: {player.matched_pairs}"

    def update_ui(self) -> None:
        """Refresh title and labels for the current player."""
        self.board.set_title(f"Matching Pairs: {self.current_player.name}")
        self.board.set_total_flips_text(self._flips_text())
        self.board.set_matched_pairs_text(self._pairs_text())

    def exit_game(self) -> None:
        """Exit command: close the board after confirmation."""
        if self.board.confirm("Are you sure you want to exit?"):
            logger.info("Exit confirmed")
            self.board.close()
