"""Table API endpoints."""

import time
from random import Random
from fastapi import APIRouter, HTTPException, Header
from typing import Annotated, Callable

from api.schemas import (
    ActionRequest,
    DealerResponse,
    NewTableRequest,
    NewTableResponse,
    SeatResponse,
    TableStateResponse,
    card_response,
    hand_response,
)
from api.session import create_session, touch_session
from config import config
from core.game import (
    HeadToHeadRound,
    Mode,
    Round,
    Seat,
    TwoPlayerRound,
    create_round,
)

router = APIRouter()

# Live tables keyed by session token; the session store tracks expiry
_tables: dict[str, Round] = {}

# Session data keys
SESSION_KEY_MODE = "table_mode"
SESSION_KEY_CREATED_AT = "created_at"
SESSION_KEY_LAST_ACTIVITY = "last_activity"


def release_table(session_id: str) -> None:
    """Forget the table of an expired session."""
    _tables.pop(session_id, None)


def _new_rng() -> Random:
    return Random(config.table.seed) if config.table.seed is not None else Random()


async def _get_table(session_id: str) -> Round:
    """Look up the session's table or fail with 404."""
    data = await touch_session(session_id, {SESSION_KEY_LAST_ACTIVITY: int(time.time())})
    table = _tables.get(session_id)
    if data is None or table is None:
        release_table(session_id)
        raise HTTPException(status_code=404, detail="Unknown or expired session")
    return table


def _seats(table: Round) -> list[SeatResponse]:
    if isinstance(table, TwoPlayerRound):
        return [
            SeatResponse(
                seat=seat.value,
                hand=hand_response(table.seats[seat].hand),
                outcome=table.seats[seat].outcome.name,
                outcome_label=table.seats[seat].outcome.label,
                stood=table.seats[seat].stood,
            )
            for seat in Seat
        ]

    return [
        SeatResponse(
            seat=1,
            hand=hand_response(table.player_hand),
            outcome=table.outcome.name,
            outcome_label=table.outcome.label,
            stood=table.player_stood,
        )
    ]


def _current_turn(table: Round) -> str | None:
    if table.is_finished:
        return None
    if isinstance(table, TwoPlayerRound):
        seat = table.current_seat
        return f"player{seat.value}" if seat else None
    if isinstance(table, HeadToHeadRound) and table.can_dealer_stand:
        return "dealer"
    return "player"


def _available_actions(table: Round) -> list[str]:
    if isinstance(table, TwoPlayerRound):
        seat = table.current_seat
        if seat is None:
            return []
        checks = {"hit": table.can_hit(seat), "stand": table.can_stand(seat)}
    elif isinstance(table, HeadToHeadRound):
        checks = {
            "hit": table.can_hit,
            "stand": table.can_stand,
            "dealer_hit": table.can_dealer_hit,
            "dealer_stand": table.can_dealer_stand,
        }
    else:
        checks = {"hit": table.can_hit, "stand": table.can_stand}
    return [action for action, allowed in checks.items() if allowed]


def _table_state_response(table: Round) -> TableStateResponse:
    """Convert round state to response; hidden hole cards never leave the core."""
    head_to_head = isinstance(table, HeadToHeadRound)
    return TableStateResponse(
        mode=table.MODE.value,
        state=table.state.name,
        status=table.status_message,
        seats=_seats(table),
        current_turn=_current_turn(table),
        dealer=DealerResponse(
            cards=[card_response(c) for c in table.visible_dealer_cards],
            visible_value=table.dealer_visible_value,
            hole_card_hidden=table.hole_card_hidden,
            num_cards=len(table.dealer_hand),
        ),
        dealer_stood=head_to_head and table.dealer_stood,
        dealer_must_draw=head_to_head and table.dealer_must_draw,
        is_finished=table.is_finished,
        deck_empty=table.deck_empty,
        cards_remaining=table.cards_remaining,
        available_actions=_available_actions(table),
    )


def _resolve_action(table: Round, request: ActionRequest) -> Callable[[], bool] | None:
    """Map an action request onto the table's method, if the mode has one."""
    if isinstance(table, TwoPlayerRound):
        if request.seat is None:
            raise HTTPException(status_code=400, detail="Seat is required in two-player mode")
        seat = Seat(request.seat)
        actions = {
            "hit": lambda: table.hit(seat),
            "stand": lambda: table.stand(seat),
        }
    elif isinstance(table, HeadToHeadRound):
        actions = {
            "hit": table.hit,
            "stand": table.stand,
            "dealer_hit": table.dealer_hit,
            "dealer_stand": table.dealer_stand,
        }
    else:
        actions = {"hit": table.hit, "stand": table.stand}
    return actions.get(request.action)


@router.post("/new")
async def new_table(
    request: NewTableRequest | None = None,
    session_id: Annotated[str | None, Header(alias="X-Session-ID")] = None,
) -> NewTableResponse:
    """Open a table and deal the first round."""
    mode = Mode((request.mode if request else None) or config.table.default_mode)

    now = int(time.time())
    updates = {SESSION_KEY_MODE: mode.value, SESSION_KEY_LAST_ACTIVITY: now}
    if session_id is None or await touch_session(session_id, updates) is None:
        session_id = await create_session({**updates, SESSION_KEY_CREATED_AT: now})

    table = create_round(mode, rng=_new_rng())
    _tables[session_id] = table

    return NewTableResponse(session_id=session_id, state=_table_state_response(table))


@router.get("/state")
async def get_state(
    session_id: Annotated[str, Header(alias="X-Session-ID")],
) -> TableStateResponse:
    """Get current round state."""
    table = await _get_table(session_id)
    return _table_state_response(table)


@router.post("/round")
async def new_round(
    session_id: Annotated[str, Header(alias="X-Session-ID")],
) -> TableStateResponse:
    """Discard the current round and deal a fresh one."""
    table = await _get_table(session_id)
    table.new_round()
    return _table_state_response(table)


@router.post("/action")
async def table_action(
    request: ActionRequest,
    session_id: Annotated[str, Header(alias="X-Session-ID")],
) -> TableStateResponse:
    """Execute a player or dealer action."""
    table = await _get_table(session_id)

    action_fn = _resolve_action(table, request)
    if action_fn is None:
        raise HTTPException(
            status_code=400,
            detail=f"Unknown action for {table.MODE.value}: {request.action}",
        )

    if not action_fn():
        raise HTTPException(status_code=400, detail=f"Cannot {request.action} now")

    return _table_state_response(table)
