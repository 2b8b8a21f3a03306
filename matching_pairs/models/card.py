"""Card model and its state machine."""

from __future__ import annotations

import logging
from enum import Enum
from typing import Callable

logger = logging.getLogger(__name__)


class CardState(str, Enum):
    """Visible state of a card on the board."""

    FACE_DOWN = "face_down"
    FACE_UP = "face_up"
    EXCLUDED = "excluded"  # Matched and removed from play


class TransitionRejected(Exception):
    """Raised by a veto authority to refuse a card state change."""

    def __init__(
        self,
        card: "Card",
        old_state: CardState,
        new_state: CardState,
        reason: str = "State transition not allowed",
    ):
        self.card = card
        self.old_state = old_state
        self.new_state = new_state
        self.reason = reason
        super().__init__(
            f"{reason}: card {card.index} {old_state.name} -> {new_state.name}"
        )


# (card, old_state, new_state). A veto hook raises TransitionRejected to refuse.
VetoHook = Callable[["Card", CardState, CardState], None]
ChangeHook = Callable[["Card", CardState, CardState], None]


class Card:
    """Single board cell holding a pair value and a visible state.

    The card enforces its own transitions through a single veto authority
    and announces accepted changes to its change listeners.
    """

    def __init__(self, index: int, value: int | None = None):
        """Initialize card.

        Args:
            index: Position of the card on the board (0-based).
            value: Pair identifier. None until the first shuffle.
        """
        self.index = index
        self.value = value
        self._state = CardState.FACE_DOWN
        self._veto_authority: VetoHook | None = None
        self._listeners: list[ChangeHook] = []

    @property
    def state(self) -> CardState:
        """Current state of the card."""
        return self._state

    def set_value(self, value: int) -> None:
        """Assign the pair identifier."""
        self.value = value

    def set_veto_authority(self, hook: VetoHook | None) -> None:
        """Register the hook consulted before every state change."""
        self._veto_authority = hook

    def add_change_listener(self, hook: ChangeHook) -> None:
        """Register a listener notified after every accepted state change."""
        if hook not in self._listeners:
            self._listeners.append(hook)

    def remove_change_listener(self, hook: ChangeHook) -> None:
        """Remove a change listener. No-op if not registered."""
        if hook in self._listeners:
            self._listeners.remove(hook)

    def set_state(self, new_state: CardState) -> bool:
        """Request a state transition.

        Args:
            new_state: Requested state.

        Returns:
            True if the state is now new_state, False if the change was vetoed.
        """
        old_state = self._state
        if new_state == old_state:
            return True

        if self._veto_authority is not None:
            try:
                self._veto_authority(self, old_state, new_state)
            except TransitionRejected as e:
                logger.warning(f"State change vetoed: {e}")
                return False

        self._state = new_state
        logger.debug(f"Card {self.index}: {old_state.name} -> {new_state.name}")

        for listener in list(self._listeners):
            listener(self, old_state, new_state)
        return True

    def flip(self) -> bool:
        """Click action: turn a face-down card face up.

        Returns:
            True if the card was turned face up.
        """
        if self._state != CardState.FACE_DOWN:
            return False
        return self.set_state(CardState.FACE_UP)

    def face(self) -> str:
        """Text shown on the card for its current state."""
        if self._state == CardState.FACE_UP:
            return str(self.value)
        if self._state == CardState.FACE_DOWN:
            return "?"
        return ""

    def __str__(self) -> str:
        return f"Card{self.index}[{self.face() or '-'}]"

    def __repr__(self) -> str:
        return f"Card(index={self.index}, value={self.value}, state={self._state.name})"
