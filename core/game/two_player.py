"""Two local players sharing one dealer."""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from core.game.base import Round
from core.game.events import EventType
from core.game.state import Mode, RoundState
from core.hand import Hand
from core.rules import Outcome, resolve_outcome


class Seat(Enum):
    """Player seats, numbered as shown at the table."""

    ONE = 1
    TWO = 2

    def __str__(self) -> str:
        return f"Player {self.value}"


def _as_seat(seat: Seat | int) -> Seat | None:
    try:
        return Seat(seat)
    except ValueError:
        return None


@dataclass
class SeatState:
    """One seat's hand and progress during a round."""

    hand: Hand = field(default_factory=Hand)
    outcome: Outcome = Outcome.NONE
    stood: bool = False

    @property
    def finished(self) -> bool:
        """A seat is finished once it stood or busted."""
        return self.stood or self.outcome.is_final


class TwoPlayerRound(Round):
    """
    Two seats against a shared dealer.

    Seat one plays out its hand before seat two starts. When seat two is
    done the dealer plays once, unless both seats busted, and every seat
    without an outcome is settled against the final dealer hand.
    """

    MODE = Mode.TWO_PLAYER
    STATES = ["player_one_turn", "player_two_turn", "resolved"]
    TRANSITIONS = [
        {"trigger": "pass_turn", "source": "player_one_turn", "dest": "player_two_turn"},
        {"trigger": "settle", "source": "player_two_turn", "dest": "resolved"},
    ]

    def _reset_seats(self) -> None:
        self.seats = {seat: SeatState() for seat in Seat}

    def _initial_deal_order(self) -> list[tuple[Hand, str]]:
        one = self.seats[Seat.ONE].hand
        two = self.seats[Seat.TWO].hand
        return [
            (one, "player1"),
            (two, "player2"),
            (self.dealer_hand, "dealer"),
            (one, "player1"),
            (two, "player2"),
            (self.dealer_hand, "dealer"),
        ]

    @property
    def current_seat(self) -> Seat | None:
        """Seat whose turn it is, or None once the round is resolved."""
        return {
            RoundState.PLAYER_ONE_TURN: Seat.ONE,
            RoundState.PLAYER_TWO_TURN: Seat.TWO,
        }.get(self.state)

    def seat(self, seat: Seat | int) -> SeatState:
        return self.seats[Seat(seat)]

    def hand(self, seat: Seat | int) -> Hand:
        return self.seat(seat).hand

    def outcome(self, seat: Seat | int) -> Outcome:
        return self.seat(seat).outcome

    def hit(self, seat: Seat | int) -> bool:
        """Seat takes another card on its own turn."""
        seat = _as_seat(seat)
        if seat is None:
            return self._reject("hit", "No such seat")
        if seat is not self.current_seat:
            return self._reject("hit", f"Not {seat}'s turn")

        state = self.seats[seat]
        if state.outcome.is_final:
            return self._reject("hit", f"{seat} is finished")

        owner = f"player{seat.value}"
        if self._deal_card_to_hand(state.hand, owner) is None:
            return self._reject("hit", "Deck is empty")
        self.events.emit_new(EventType.PLAYER_HIT, seat=seat.value, hand_value=state.hand.value)

        if state.hand.is_busted:
            state.outcome = Outcome.PLAYER_BUST
            self.events.emit_new(EventType.PLAYER_BUSTS, seat=seat.value)
            self._advance()

        return True

    def stand(self, seat: Seat | int) -> bool:
        """Seat stands and passes the turn on."""
        seat = _as_seat(seat)
        if seat is None:
            return self._reject("stand", "No such seat")
        if seat is not self.current_seat:
            return self._reject("stand", f"Not {seat}'s turn")

        state = self.seats[seat]
        if state.outcome.is_final:
            return self._reject("stand", f"{seat} is finished")

        state.stood = True
        self.events.emit_new(EventType.PLAYER_STAND, seat=seat.value, hand_value=state.hand.value)
        self._advance()
        return True

    def _advance(self) -> None:
        """Pass the turn to seat two, or finish the round after seat two."""
        if self.current_seat is Seat.ONE:
            self.pass_turn()  # Trigger state transition
            self.events.emit_new(EventType.TURN_CHANGED, seat=Seat.TWO.value)
            return

        if all(s.outcome is Outcome.PLAYER_BUST for s in self.seats.values()):
            # Nobody left to beat; the dealer keeps its two cards
            self._reveal_hole_card()
        else:
            self._play_dealer()
            for state in self.seats.values():
                if state.outcome is Outcome.NONE:
                    state.outcome = resolve_outcome(state.hand.cards, self.dealer_hand.cards)

        self._finish()

    def can_hit(self, seat: Seat | int) -> bool:
        seat = _as_seat(seat)
        return (
            seat is not None
            and seat is self.current_seat
            and not self.seats[seat].outcome.is_final
            and not self.deck.is_empty
        )

    def can_stand(self, seat: Seat | int) -> bool:
        seat = _as_seat(seat)
        return (
            seat is not None
            and seat is self.current_seat
            and not self.seats[seat].outcome.is_final
        )

    @property
    def hole_card_hidden(self) -> bool:
        return not all(s.finished for s in self.seats.values())

    @property
    def status_message(self) -> str:
        current = self.current_seat
        if current is not None:
            return f"{current}'s turn"
        return " ".join(f"{seat}: {self.seats[seat].outcome.label}." for seat in Seat)

    def _outcome_summary(self) -> dict[str, Any]:
        return {
            "outcomes": {seat.value: self.seats[seat].outcome.name for seat in Seat},
            "dealer_value": self.dealer_hand.value,
        }
