"""Shared fixtures."""

import random

import pytest

from matching_pairs.config import Config
from matching_pairs.game.board import CardBoard
from matching_pairs.game.engine import GameEngine
from matching_pairs.game.scheduler import EventLoop, ManualClock
from matching_pairs.models.player import Player


class RecordingBoard(CardBoard):
    """Board that records display updates and answers prompts from a script."""

    def __init__(self, num_pairs: int, answers=None, confirm_answer: bool = True):
        super().__init__(num_pairs)
        self.answers = list(answers or [])
        self.confirm_answer = confirm_answer
        self.title = ""
        self.matched_pairs_text = ""
        self.total_flips_text = ""
        self.announcements: list[str] = []
        self.errors: list[str] = []
        self.questions: list[str] = []
        self.refreshed: list[int] = []
        self.closed = False

    def refresh_card(self, card) -> None:
        self.refreshed.append(card.index)

    def set_matched_pairs_text(self, text: str) -> None:
        self.matched_pairs_text = text

    def set_total_flips_text(self, text: str) -> None:
        self.total_flips_text = text

    def set_title(self, text: str) -> None:
        self.title = text

    def announce(self, text: str) -> None:
        self.announcements.append(text)

    def confirm(self, question: str) -> bool:
        self.questions.append(question)
        return self.confirm_answer

    def prompt_integer(self, question: str):
        self.questions.append(question)
        return self.answers.pop(0) if self.answers else None

    def prompt_string(self, question: str):
        self.questions.append(question)
        return self.answers.pop(0) if self.answers else None

    def report_error(self, text: str) -> None:
        self.errors.append(text)

    def close(self) -> None:
        self.closed = True


def assign_values(board: CardBoard, values: list[int]) -> None:
    """Override the shuffled values with a known layout."""
    for card, value in zip(board.cards, values):
        card.set_value(value)


@pytest.fixture
def recording_board():
    """Factory for RecordingBoard instances."""
    return RecordingBoard


@pytest.fixture
def set_values():
    """Override the shuffled card values of a board."""
    return assign_values


@pytest.fixture
def clock():
    return ManualClock()


@pytest.fixture
def loop(clock):
    return EventLoop(clock=clock)


@pytest.fixture
def config():
    return Config()


@pytest.fixture
def make_game(loop, config):
    """Build an initialized engine on a RecordingBoard."""

    def _make(num_pairs=2, names=("P1", "P2"), values=None, seed=0):
        board = RecordingBoard(num_pairs)
        players = [Player(name=name) for name in names]
        engine = GameEngine(players, config, loop, rng=random.Random(seed))
        engine.initialize(board)
        if values is not None:
            assign_values(board, values)
        return engine, board

    return _make
