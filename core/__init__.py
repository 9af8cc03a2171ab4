"""Core blackjack engine - 100% UI-agnostic."""

from core.cards import Card, Color, Deck, Rank, Suit
from core.hand import Hand, hand_value, is_blackjack, is_busted, is_soft
from core.rules import Outcome, dealer_play, dealer_should_draw, resolve_outcome

__all__ = [
    "Card",
    "Color",
    "Deck",
    "Rank",
    "Suit",
    "Hand",
    "hand_value",
    "is_blackjack",
    "is_busted",
    "is_soft",
    "Outcome",
    "dealer_play",
    "dealer_should_draw",
    "resolve_outcome",
]
