"""Pytest fixtures for blackjack table tests."""

import pytest
from random import Random

from core.cards import Card, Deck
from core.hand import Hand
from core.counting import CountingTrainer, HiLoSystem


def _cards(*codes: str) -> list[Card]:
    return [Card.from_string(code) for code in codes]


@pytest.fixture
def make_cards():
    """Build cards from short codes like 'AS', '10H', 'K♣'."""
    return _cards


@pytest.fixture
def stacked_deck():
    """Deck factory builder: the first deals are the given cards, in order."""

    def build(*codes: str):
        top = _cards(*codes)
        return lambda: Deck.stacked(top)

    return build


@pytest.fixture
def rng():
    """Seeded random number generator for reproducible tests."""
    return Random(42)


@pytest.fixture
def deck(rng):
    """A shuffled deck."""
    return Deck(rng=rng)


@pytest.fixture
def empty_hand():
    """An empty player hand."""
    return Hand()


@pytest.fixture
def blackjack_hand():
    """A natural blackjack hand."""
    return Hand(_cards("AS", "KH"))


@pytest.fixture
def soft_17_hand():
    """A soft 17 hand (A-6)."""
    return Hand(_cards("AS", "6H"))


@pytest.fixture
def hard_16_hand():
    """A hard 16 hand (10-6)."""
    return Hand(_cards("10S", "6H"))


@pytest.fixture
def bust_hand():
    """A busted hand."""
    return Hand(_cards("10S", "6H", "KC"))


@pytest.fixture
def hilo():
    """Hi-Lo counting system."""
    return HiLoSystem()


@pytest.fixture
def trainer(rng):
    """A counting trainer with a seeded deck."""
    return CountingTrainer(rng=rng)
