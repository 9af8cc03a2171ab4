"""Abstract base class for card counting systems."""

from abc import ABC, abstractmethod
from typing import Mapping

from core.cards import Card, Rank


class CountingSystem(ABC):
    """
    Abstract base class for card counting systems.

    Tracks a running count over every card shown to it since the last reset.
    """

    def __init__(self) -> None:
        """Initialize the counting system."""
        self._running_count: int = 0
        self._cards_seen: int = 0

    @property
    @abstractmethod
    def name(self) -> str:
        """Return the name of the counting system."""
        ...

    @property
    @abstractmethod
    def tag_values(self) -> Mapping[Rank, int]:
        """
        Return the tag value mapping for this system.

        Maps each Rank to its count value.
        """
        ...

    @property
    def full_deck_sum(self) -> int:
        """
        Sum of tag values over a complete 52-card deck.

        Balanced systems sum to 0.
        """
        # Each rank appears 4 times in a deck (once per suit)
        return sum(self.tag_values[rank] * 4 for rank in Rank)

    @property
    def is_balanced(self) -> bool:
        return self.full_deck_sum == 0

    def tag(self, card: Card) -> int:
        """Return a card's tag value without counting it."""
        return self.tag_values[card.rank]

    def count_card(self, card: Card) -> int:
        """
        Count a single card and update the running count.

        Args:
            card: The card to count

        Returns:
            The tag value of the card
        """
        tag_value = self.tag(card)
        self._running_count += tag_value
        self._cards_seen += 1
        return tag_value

    @property
    def running_count(self) -> int:
        """Return the current running count."""
        return self._running_count

    @property
    def cards_seen(self) -> int:
        """Return the number of cards seen."""
        return self._cards_seen

    def reset(self) -> None:
        """Reset the count to zero."""
        self._running_count = 0
        self._cards_seen = 0

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(running_count={self._running_count})"
