"""Single player against an auto-playing dealer."""

from typing import Any

from core.game.base import Round
from core.game.events import EventType
from core.game.state import Mode
from core.hand import Hand
from core.rules import Outcome, resolve_outcome


class SoloRound(Round):
    """
    Player vs dealer.

    Standing plays the dealer out and settles the hand in the same action;
    the player never triggers dealer play separately.
    """

    MODE = Mode.SOLO
    STATES = ["player_turn", "resolved"]
    TRANSITIONS = [
        {"trigger": "settle", "source": "player_turn", "dest": "resolved"},
    ]

    def _reset_seats(self) -> None:
        self.player_hand = Hand()
        self.outcome = Outcome.NONE
        self.player_stood = False

    def _initial_deal_order(self) -> list[tuple[Hand, str]]:
        # Player, dealer, player, dealer (face down)
        return [
            (self.player_hand, "player"),
            (self.dealer_hand, "dealer"),
            (self.player_hand, "player"),
            (self.dealer_hand, "dealer"),
        ]

    def hit(self) -> bool:
        """Player takes another card."""
        if self.outcome.is_final:
            return self._reject("hit", "Round is over")

        if self._deal_card_to_hand(self.player_hand, "player") is None:
            return self._reject("hit", "Deck is empty")
        self.events.emit_new(EventType.PLAYER_HIT, hand_value=self.player_hand.value)

        if self.player_hand.is_busted:
            self.events.emit_new(EventType.PLAYER_BUSTS, hand="player")
            self.outcome = Outcome.PLAYER_BUST
            self.player_stood = True
            self._reveal_hole_card()
            self._finish()

        return True

    def stand(self) -> bool:
        """Player stands; the dealer plays and the round settles."""
        if self.outcome.is_final:
            return self._reject("stand", "Round is over")

        self.player_stood = True
        self.events.emit_new(EventType.PLAYER_STAND, hand_value=self.player_hand.value)

        self._play_dealer()
        self.outcome = resolve_outcome(self.player_hand.cards, self.dealer_hand.cards)
        self._finish()
        return True

    @property
    def can_hit(self) -> bool:
        return not self.outcome.is_final and not self.deck.is_empty

    @property
    def can_stand(self) -> bool:
        return not self.outcome.is_final

    @property
    def hole_card_hidden(self) -> bool:
        return self.outcome is Outcome.NONE and not self.player_stood

    @property
    def status_message(self) -> str:
        if self.outcome is Outcome.NONE:
            if self.player_hand.is_blackjack and not self.player_stood:
                return "Blackjack! Stand or Hit?"
            return "Your move"
        return self.outcome.label

    def _outcome_summary(self) -> dict[str, Any]:
        return {
            "outcome": self.outcome.name,
            "player_value": self.player_hand.value,
            "dealer_value": self.dealer_hand.value,
        }
