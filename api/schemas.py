"""Pydantic schemas for API requests and responses."""

from pydantic import BaseModel, ConfigDict, Field
from typing import Literal

from core.cards import Card
from core.hand import Hand


# Table schemas
class NewTableRequest(BaseModel):
    """Request to open a table."""

    mode: Literal["solo", "two_player", "head_to_head"] | None = Field(
        default=None, description="Play mode; defaults to the configured mode"
    )


class ActionRequest(BaseModel):
    """Request for a table action."""

    action: Literal["hit", "stand", "dealer_hit", "dealer_stand"]
    seat: Literal[1, 2] | None = Field(
        default=None, description="Seat number, required in two-player mode"
    )


class CardResponse(BaseModel):
    """Card representation."""

    model_config = ConfigDict(from_attributes=True)

    rank: str
    suit: str
    color: Literal["red", "black"]
    value: int


class HandResponse(BaseModel):
    """Hand representation."""

    cards: list[CardResponse]
    value: int
    is_soft: bool
    is_blackjack: bool
    is_busted: bool


class DealerResponse(BaseModel):
    """Dealer hand as a viewer may see it."""

    cards: list[CardResponse]
    visible_value: int
    hole_card_hidden: bool
    num_cards: int


class SeatResponse(BaseModel):
    """One player seat."""

    seat: int
    hand: HandResponse
    outcome: str
    outcome_label: str
    stood: bool


class TableStateResponse(BaseModel):
    """Current round state for any mode."""

    mode: Literal["solo", "two_player", "head_to_head"]
    state: str
    status: str
    seats: list[SeatResponse]
    current_turn: str | None
    dealer: DealerResponse
    dealer_stood: bool = False
    dealer_must_draw: bool = False
    is_finished: bool
    deck_empty: bool
    cards_remaining: int
    available_actions: list[str]


class NewTableResponse(BaseModel):
    """A newly opened table."""

    session_id: str
    state: TableStateResponse


# Counting trainer schemas
class GuessRequest(BaseModel):
    """A typed running count guess."""

    guess: str = Field(..., max_length=32)


class FeedbackResponse(BaseModel):
    """Verdict on a guess."""

    result: Literal["correct", "higher", "lower", "invalid"]
    message: str
    guess: int | None


class CountingStateResponse(BaseModel):
    """Counting trainer state."""

    system: str
    revealed: list[CardResponse]
    last_card: CardResponse | None
    last_card_tag: int | None
    running_count: int
    cards_remaining: int
    deck_empty: bool
    last_guess: str | None
    feedback: FeedbackResponse | None


class NewCountingResponse(BaseModel):
    """A newly opened counting session."""

    session_id: str
    state: CountingStateResponse


def card_response(card: Card) -> CardResponse:
    """Convert a Card to CardResponse."""
    return CardResponse(
        rank=str(card.rank),
        suit=str(card.suit),
        color=str(card.color),  # type: ignore[arg-type]
        value=card.value,
    )


def hand_response(hand: Hand) -> HandResponse:
    """Convert a Hand to HandResponse."""
    return HandResponse(
        cards=[card_response(c) for c in hand.cards],
        value=hand.value,
        is_soft=hand.is_soft,
        is_blackjack=hand.is_blackjack,
        is_busted=hand.is_busted,
    )
