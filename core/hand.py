"""Hand evaluation for blackjack."""

from dataclasses import dataclass, field
from typing import Iterator, Sequence

from core.cards import Card

BLACKJACK = 21


def hand_value(cards: Sequence[Card]) -> int:
    """
    Calculate the best blackjack total for a list of cards.

    Aces start at 11 and drop to 1 one at a time while the total is over 21.
    Returns the highest value that doesn't bust, or the lowest bust value.
    """
    total = 0
    aces = 0

    for card in cards:
        if card.is_ace:
            aces += 1
        total += card.value

    # Reduce aces from 11 to 1 as needed
    while total > BLACKJACK and aces > 0:
        total -= 10
        aces -= 1

    return total


def is_soft(cards: Sequence[Card]) -> bool:
    """Check if an ace is still counted as 11 in the best total."""
    if not any(card.is_ace for card in cards):
        return False
    total_hard = sum(1 if card.is_ace else card.value for card in cards)
    return total_hard + 10 <= BLACKJACK


def is_busted(cards: Sequence[Card]) -> bool:
    """Check if the cards total more than 21."""
    return hand_value(cards) > BLACKJACK


def is_blackjack(cards: Sequence[Card]) -> bool:
    """Check for a natural: exactly two cards totaling 21."""
    return len(cards) == 2 and hand_value(cards) == BLACKJACK


@dataclass
class Hand:
    """An append-only blackjack hand."""

    cards: list[Card] = field(default_factory=list)

    def add_card(self, card: Card) -> None:
        """Add a card to the hand."""
        self.cards.append(card)

    @property
    def value(self) -> int:
        return hand_value(self.cards)

    @property
    def is_soft(self) -> bool:
        return is_soft(self.cards)

    @property
    def is_busted(self) -> bool:
        return is_busted(self.cards)

    @property
    def is_blackjack(self) -> bool:
        return is_blackjack(self.cards)

    @property
    def num_cards(self) -> int:
        """Return the number of cards in the hand."""
        return len(self.cards)

    def __len__(self) -> int:
        return len(self.cards)

    def __iter__(self) -> Iterator[Card]:
        return iter(self.cards)

    def __str__(self) -> str:
        cards_str = " ".join(str(card) for card in self.cards)
        value_str = f"({self.value})"
        if self.is_soft:
            value_str = f"(soft {self.value})"
        if self.is_blackjack:
            value_str = "(BLACKJACK)"
        if self.is_busted:
            value_str = "(BUST)"
        return f"{cards_str} {value_str}"

    def __repr__(self) -> str:
        return f"Hand({self.cards!r}, value={self.value})"
