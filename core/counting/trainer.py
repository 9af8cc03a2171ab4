"""Hi-Lo running count trainer."""

from dataclasses import dataclass
from enum import Enum
from random import Random
from typing import Callable

from core.cards import Card, Deck
from core.counting.base import CountingSystem
from core.counting.hilo import HiLoSystem
from core.game.events import EventEmitter, EventType


class GuessResult(Enum):
    """How a guess compares to the true running count."""

    CORRECT = "correct"
    HIGHER = "higher"
    LOWER = "lower"
    INVALID = "invalid"


_MESSAGES = {
    GuessResult.CORRECT: "Correct!",
    GuessResult.HIGHER: "Not quite. Try higher.",
    GuessResult.LOWER: "Not quite. Try lower.",
    GuessResult.INVALID: "Invalid input. Enter a whole number like 3 or -2.",
}


@dataclass(frozen=True)
class GuessFeedback:
    """Verdict on a submitted running count."""

    result: GuessResult
    guess: int | None = None

    @property
    def message(self) -> str:
        return _MESSAGES[self.result]

    @property
    def is_correct(self) -> bool:
        return self.result is GuessResult.CORRECT


def parse_guess(text: str) -> int | None:
    """Parse a typed count; None if it is not a whole number."""
    try:
        return int(text.strip())
    except (AttributeError, ValueError):
        return None


class CountingTrainer:
    """
    Reveal cards one at a time and quiz the running count.

    The trainer owns its own deck, separate from any table round.
    """

    deck: Deck

    def __init__(
        self,
        rng: Random | None = None,
        system: CountingSystem | None = None,
        deck_factory: Callable[[], Deck] | None = None,
    ) -> None:
        """
        Initialize a trainer with a fresh shuffled deck.

        Args:
            rng: Random number generator for shuffling
            system: Counting system that tags each card (Hi-Lo by default)
            deck_factory: Builds the deck on every reset
        """
        self._rng = rng or Random()
        self._deck_factory = deck_factory or (lambda: Deck(rng=self._rng))
        self.system = system or HiLoSystem()
        self.events = EventEmitter()
        self.revealed: list[Card] = []
        self.last_guess: str | None = None
        self.feedback: GuessFeedback | None = None
        self.reset()

    def reset(self) -> None:
        """Start over with a new shuffled deck and a zero count."""
        self.deck = self._deck_factory()
        self.revealed = []
        self.system.reset()
        self.last_guess = None
        self.feedback = None
        self.events.emit_new(EventType.COUNT_RESET, cards_remaining=self.deck.cards_remaining)

    def reveal_next(self) -> Card | None:
        """Show the next card and add its tag to the running count."""
        card = self.deck.deal()
        if card is None:
            return None

        self.revealed.append(card)
        tag = self.system.count_card(card)
        self.events.emit_new(
            EventType.CARD_REVEALED,
            card=str(card),
            tag=tag,
            cards_remaining=self.deck.cards_remaining,
        )
        return card

    def check_guess(self, text: str) -> GuessFeedback:
        """
        Compare a typed guess with the true running count.

        Never raises; unparseable text yields INVALID feedback.
        """
        self.last_guess = text
        guess = parse_guess(text)

        if guess is None:
            feedback = GuessFeedback(GuessResult.INVALID)
        else:
            difference = self.running_count - guess
            if difference == 0:
                feedback = GuessFeedback(GuessResult.CORRECT, guess)
            elif difference > 0:
                feedback = GuessFeedback(GuessResult.HIGHER, guess)
            else:
                feedback = GuessFeedback(GuessResult.LOWER, guess)

        self.feedback = feedback
        self.events.emit_new(
            EventType.GUESS_CHECKED,
            guess=text,
            result=feedback.result.value,
        )
        return feedback

    @property
    def running_count(self) -> int:
        return self.system.running_count

    @property
    def last_card(self) -> Card | None:
        return self.revealed[-1] if self.revealed else None

    @property
    def cards_remaining(self) -> int:
        return self.deck.cards_remaining

    @property
    def deck_empty(self) -> bool:
        return self.deck.is_empty
