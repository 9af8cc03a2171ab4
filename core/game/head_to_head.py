"""Player against a manually driven dealer."""

from typing import Any

from core.game.base import Round
from core.game.events import EventType
from core.game.state import Mode, RoundState
from core.hand import Hand
from core.rules import Outcome, dealer_should_draw, resolve_outcome


class HeadToHeadRound(Round):
    """
    Alternating turns: the player acts, then whoever holds the dealer seat.

    The dealer is not automated. Hands are compared only after both sides
    stood; a bust on either side ends the round at once.
    """

    MODE = Mode.HEAD_TO_HEAD
    STATES = ["player_turn", "dealer_turn", "resolved"]
    TRANSITIONS = [
        {"trigger": "pass_turn", "source": "player_turn", "dest": "dealer_turn"},
        {"trigger": "settle", "source": ["player_turn", "dealer_turn"], "dest": "resolved"},
    ]

    def _reset_seats(self) -> None:
        self.player_hand = Hand()
        self.outcome = Outcome.NONE
        self.player_stood = False
        self.dealer_stood = False

    def _initial_deal_order(self) -> list[tuple[Hand, str]]:
        return [
            (self.player_hand, "player"),
            (self.dealer_hand, "dealer"),
            (self.player_hand, "player"),
            (self.dealer_hand, "dealer"),
        ]

    def hit(self) -> bool:
        """Player takes another card."""
        if self.state != RoundState.PLAYER_TURN:
            return self._reject("hit", "Not the player's turn")

        if self._deal_card_to_hand(self.player_hand, "player") is None:
            return self._reject("hit", "Deck is empty")
        self.events.emit_new(EventType.PLAYER_HIT, hand_value=self.player_hand.value)

        if self.player_hand.is_busted:
            self.events.emit_new(EventType.PLAYER_BUSTS, hand="player")
            self.outcome = Outcome.PLAYER_BUST
            self._reveal_hole_card()
            self._finish()

        return True

    def stand(self) -> bool:
        """Player stands and hands the turn to the dealer."""
        if self.state != RoundState.PLAYER_TURN:
            return self._reject("stand", "Not the player's turn")

        self.player_stood = True
        self.events.emit_new(EventType.PLAYER_STAND, hand_value=self.player_hand.value)
        self.pass_turn()  # Trigger state transition
        self.events.emit_new(EventType.TURN_CHANGED, seat="dealer")
        self._reveal_hole_card()
        return True

    def dealer_hit(self) -> bool:
        """Dealer takes another card."""
        if self.state != RoundState.DEALER_TURN:
            return self._reject("dealer_hit", "Not the dealer's turn")

        card = self._deal_card_to_hand(self.dealer_hand, "dealer")
        if card is None:
            return self._reject("dealer_hit", "Deck is empty")
        self.events.emit_new(EventType.DEALER_HITS, card=str(card), hand_value=self.dealer_hand.value)

        if self.dealer_hand.is_busted:
            self.events.emit_new(EventType.DEALER_BUSTS, hand_value=self.dealer_hand.value)
            self.outcome = Outcome.DEALER_BUST
            self._finish()

        return True

    def dealer_stand(self) -> bool:
        """Dealer stands; both hands are compared."""
        if self.state != RoundState.DEALER_TURN:
            return self._reject("dealer_stand", "Not the dealer's turn")

        self.dealer_stood = True
        self.events.emit_new(EventType.DEALER_STANDS, hand_value=self.dealer_hand.value)
        self.outcome = resolve_outcome(self.player_hand.cards, self.dealer_hand.cards)
        self._finish()
        return True

    @property
    def dealer_must_draw(self) -> bool:
        """House-rule hint for whoever plays the dealer: draw below 17."""
        return self.state == RoundState.DEALER_TURN and dealer_should_draw(self.dealer_hand.cards)

    @property
    def can_hit(self) -> bool:
        return self.state == RoundState.PLAYER_TURN and not self.deck.is_empty

    @property
    def can_stand(self) -> bool:
        return self.state == RoundState.PLAYER_TURN

    @property
    def can_dealer_hit(self) -> bool:
        return self.state == RoundState.DEALER_TURN and not self.deck.is_empty

    @property
    def can_dealer_stand(self) -> bool:
        return self.state == RoundState.DEALER_TURN

    @property
    def hole_card_hidden(self) -> bool:
        return (
            self.outcome is Outcome.NONE
            and self.state == RoundState.PLAYER_TURN
            and not self.dealer_stood
        )

    @property
    def status_message(self) -> str:
        if self.state == RoundState.PLAYER_TURN:
            return "Player's turn"
        if self.state == RoundState.DEALER_TURN:
            return "Dealer's turn"
        return self.outcome.label

    def _outcome_summary(self) -> dict[str, Any]:
        return {
            "outcome": self.outcome.name,
            "player_value": self.player_hand.value,
            "dealer_value": self.dealer_hand.value,
        }
