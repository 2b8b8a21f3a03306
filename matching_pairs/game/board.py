"""Board collaborator contract and the shared card board."""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from typing import Callable, Protocol

from matching_pairs.models.card import Card, CardState

logger = logging.getLogger(__name__)

CommandHandler = Callable[[], None]


class Board(Protocol):
    """What the game engine needs from the window it runs in."""

    def get_cards(self) -> list[Card]: ...

    def on_shuffle(self, handler: CommandHandler) -> None: ...

    def on_exit(self, handler: CommandHandler) -> None: ...

    def set_matched_pairs_text(self, text: str) -> None: ...

    def set_total_flips_text(self, text: str) -> None: ...

    def set_title(self, text: str) -> None: ...

    def announce(self, text: str) -> None: ...

    def confirm(self, question: str) -> bool: ...

    def prompt_integer(self, question: str) -> int | None: ...

    def prompt_string(self, question: str) -> str | None: ...

    def report_error(self, text: str) -> None: ...

    def close(self) -> None: ...


class CardBoard(ABC):
    """Board holding 2 * num_pairs cards and the shuffle/exit commands.

    Frontends subclass this and implement the text and dialog surfaces.
    """

    def __init__(self, num_pairs: int):
        """Initialize board.

        Args:
            num_pairs: Number of pairs on the board.
        """
        self._shuffle_handler: CommandHandler | None = None
        self._exit_handler: CommandHandler | None = None
        self.num_pairs = 0
        self.cards: list[Card] = []
        self.rebuild(num_pairs)

    def rebuild(self, num_pairs: int) -> None:
        """Replace all cards with a fresh set for num_pairs pairs."""
        if num_pairs < 1:
            raise ValueError(f"Board needs at least one pair, got {num_pairs}")
        for card in self.cards:
            card.remove_change_listener(self._on_card_changed)
            card.set_veto_authority(None)

        self.num_pairs = num_pairs
        self.cards = [Card(index=i) for i in range(num_pairs * 2)]
        for card in self.cards:
            card.add_change_listener(self._on_card_changed)
        logger.debug(f"Board built with {len(self.cards)} cards")

    def get_cards(self) -> list[Card]:
        return self.cards

    def on_shuffle(self, handler: CommandHandler) -> None:
        self._shuffle_handler = handler

    def on_exit(self, handler: CommandHandler) -> None:
        self._exit_handler = handler

    def fire_shuffle(self) -> None:
        """Deliver the shuffle command."""
        if self._shuffle_handler is not None:
            self._shuffle_handler()

    def fire_exit(self) -> None:
        """Deliver the exit command."""
        if self._exit_handler is not None:
            self._exit_handler()

    def select(self, index: int) -> bool:
        """Deliver a click on the card at index.

        Returns:
            True if the card was turned face up.
        """
        return self.cards[index].flip()

    def _on_card_changed(self, card: Card, old: CardState, new: CardState) -> None:
        self.refresh_card(card)

    def refresh_card(self, card: Card) -> None:
        """Update the appearance of a card after a state change."""

    # Text and dialog surfaces

    @abstractmethod
    def set_matched_pairs_text(self, text: str) -> None:
        pass

    @abstractmethod
    def set_total_flips_text(self, text: str) -> None:
        pass

    @abstractmethod
    def set_title(self, text: str) -> None:
        pass

    @abstractmethod
    def announce(self, text: str) -> None:
        pass

    @abstractmethod
    def confirm(self, question: str) -> bool:
        pass

    @abstractmethod
    def prompt_integer(self, question: str) -> int | None:
        pass

    @abstractmethod
    def prompt_string(self, question: str) -> str | None:
        pass

    @abstractmethod
    def report_error(self, text: str) -> None:
        pass

    @abstractmethod
    def close(self) -> None:
        pass
