"""Shared round machinery for every table mode."""

from random import Random
from typing import Any, Callable, ClassVar

from transitions import Machine

from core.cards import Card, Deck
from core.game.events import EventEmitter, EventType, GameEvent
from core.game.state import OPENING_STATE, Mode, RoundState
from core.hand import Hand, hand_value
from core.rules import dealer_play

DeckFactory = Callable[[], Deck]


class Round:
    """
    One blackjack round driven by a state machine.

    Subclasses declare their states, transitions and deal order. Every
    round starts already dealt; ``new_round`` throws away the deck and hands
    and deals again from a fresh shuffled deck.

    Actions never raise on illegal input. They return False, emit an
    INVALID_ACTION event and leave the round untouched.
    """

    MODE: ClassVar[Mode]
    STATES: ClassVar[list[str]]
    TRANSITIONS: ClassVar[list[dict[str, Any]]]

    deck: Deck
    dealer_hand: Hand

    def __init__(
        self,
        rng: Random | None = None,
        deck_factory: DeckFactory | None = None,
    ) -> None:
        """
        Initialize and deal the first round.

        Args:
            rng: Random number generator for shuffling
            deck_factory: Builds the deck for each round (tests pass stacked decks)
        """
        self._rng = rng or Random()
        self._deck_factory = deck_factory or (lambda: Deck(rng=self._rng))
        self.events = EventEmitter()

        opening = OPENING_STATE[self.MODE].name.lower()
        self.machine = Machine(
            model=self,
            states=self.STATES,
            transitions=[
                {"trigger": "deal", "source": "*", "dest": opening},
                *self.TRANSITIONS,
            ],
            initial=opening,
            auto_transitions=False,
            model_attribute="_machine_state",
        )

        self.new_round()

    @property
    def state(self) -> RoundState:
        """Get current round state as enum."""
        return RoundState[self._machine_state.upper()]  # type: ignore

    def subscribe(
        self,
        handler: Callable[[GameEvent], None],
        event_type: EventType | None = None,
    ) -> None:
        """Subscribe to round events."""
        self.events.subscribe(handler, event_type)

    def new_round(self) -> None:
        """Discard the previous round and deal a new one."""
        self.deck = self._deck_factory()
        self.dealer_hand = Hand()
        self._reset_seats()
        self.deal()  # Trigger state transition

        for hand, owner in self._initial_deal_order():
            face_up = not (hand is self.dealer_hand and len(hand) == 1)
            self._deal_card_to_hand(hand, owner, face_up=face_up)

        self.events.emit_new(
            EventType.ROUND_STARTED,
            mode=self.MODE.value,
            cards_remaining=self.deck.cards_remaining,
        )

    def _reset_seats(self) -> None:
        raise NotImplementedError

    def _initial_deal_order(self) -> list[tuple[Hand, str]]:
        raise NotImplementedError

    def _outcome_summary(self) -> dict[str, Any]:
        raise NotImplementedError

    @property
    def hole_card_hidden(self) -> bool:
        raise NotImplementedError

    @property
    def status_message(self) -> str:
        raise NotImplementedError

    def _deal_card_to_hand(self, hand: Hand, owner: str, face_up: bool = True) -> Card | None:
        """Deal a card to a hand; None if the deck is exhausted."""
        card = self.deck.deal()
        if card is None:
            return None
        hand.add_card(card)
        self.events.emit_new(
            EventType.CARD_DEALT,
            card=str(card) if face_up else "??",
            hand=owner,
            hand_value=hand.value if face_up else None,
        )
        return card

    def _reject(self, action: str, message: str) -> bool:
        """Record an ignored action."""
        self.events.emit_new(
            EventType.INVALID_ACTION,
            action=action,
            message=message,
            state=self.state.name,
        )
        return False

    def _reveal_hole_card(self) -> None:
        if len(self.dealer_hand.cards) >= 2:
            self.events.emit_new(
                EventType.DEALER_REVEALS,
                card=str(self.dealer_hand.cards[1]),
                hand_value=self.dealer_hand.value,
            )

    def _play_dealer(self) -> None:
        """Reveal the hole card and let the dealer draw to 17."""
        self._reveal_hole_card()

        for card in dealer_play(self.dealer_hand, self.deck):
            self.events.emit_new(
                EventType.DEALER_HITS,
                card=str(card),
                hand_value=self.dealer_hand.value,
            )

        if self.dealer_hand.is_busted:
            self.events.emit_new(EventType.DEALER_BUSTS, hand_value=self.dealer_hand.value)
        else:
            self.events.emit_new(EventType.DEALER_STANDS, hand_value=self.dealer_hand.value)

    def _finish(self) -> None:
        """Move to RESOLVED and publish the outcomes."""
        self.settle()  # Trigger state transition
        self.events.emit_new(EventType.ROUND_RESOLVED, **self._outcome_summary())

    @property
    def is_finished(self) -> bool:
        """Check if every seat has a final outcome."""
        return self.state == RoundState.RESOLVED

    @property
    def visible_dealer_cards(self) -> list[Card]:
        """Dealer cards a viewer may see; the hole card is withheld while hidden."""
        cards = self.dealer_hand.cards
        if self.hole_card_hidden and len(cards) >= 2:
            return [cards[0], *cards[2:]]
        return list(cards)

    @property
    def dealer_visible_value(self) -> int:
        return hand_value(self.visible_dealer_cards)

    @property
    def deck_empty(self) -> bool:
        return self.deck.is_empty

    @property
    def cards_remaining(self) -> int:
        return self.deck.cards_remaining
