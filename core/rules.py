"""Dealer drawing policy and outcome resolution."""

from enum import Enum

from core.cards import Card, Deck
from core.hand import BLACKJACK, Hand, hand_value

DEALER_STANDS_ON = 17


class Outcome(Enum):
    """
    Terminal classification of a player hand against the dealer.

    NONE means the hand is still in play.
    """

    NONE = "none"
    PLAYER_BUST = "Player busts"
    DEALER_BUST = "Dealer busts"
    PLAYER_WINS = "Player wins"
    DEALER_WINS = "Dealer wins"
    PUSH = "Push"

    def __str__(self) -> str:
        return self.value

    @property
    def label(self) -> str:
        """Display text for a finished hand."""
        return "" if self is Outcome.NONE else self.value

    @property
    def is_final(self) -> bool:
        return self is not Outcome.NONE

    @property
    def winner(self) -> str | None:
        """Return 'player', 'dealer', or None for a push or unfinished hand."""
        if self in (Outcome.PLAYER_WINS, Outcome.DEALER_BUST):
            return "player"
        if self in (Outcome.DEALER_WINS, Outcome.PLAYER_BUST):
            return "dealer"
        return None


def dealer_should_draw(cards: list[Card]) -> bool:
    """Dealer draws below 17 and stands on every 17, soft or hard."""
    return hand_value(cards) < DEALER_STANDS_ON


def dealer_play(dealer_hand: Hand, deck: Deck) -> list[Card]:
    """
    Draw into the dealer hand until it reaches 17 or the deck runs out.

    Returns:
        The cards drawn, in order
    """
    drawn: list[Card] = []
    while dealer_should_draw(dealer_hand.cards):
        card = deck.deal()
        if card is None:
            break
        dealer_hand.add_card(card)
        drawn.append(card)
    return drawn


def resolve_outcome(player_cards: list[Card], dealer_cards: list[Card]) -> Outcome:
    """
    Compare two finished hands.

    A player bust loses regardless of the dealer total. Naturals are not
    paid differently, so only totals matter.
    """
    player_value = hand_value(player_cards)
    if player_value > BLACKJACK:
        return Outcome.PLAYER_BUST

    dealer_value = hand_value(dealer_cards)
    if dealer_value > BLACKJACK:
        return Outcome.DEALER_BUST

    if player_value > dealer_value:
        return Outcome.PLAYER_WINS
    if dealer_value > player_value:
        return Outcome.DEALER_WINS
    return Outcome.PUSH
