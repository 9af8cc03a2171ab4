"""Counting trainer API endpoints."""

import time
from random import Random
from fastapi import APIRouter, HTTPException, Header
from typing import Annotated

from api.schemas import (
    CountingStateResponse,
    FeedbackResponse,
    GuessRequest,
    NewCountingResponse,
    card_response,
)
from api.session import create_session, touch_session
from config import config
from core.counting import CountingTrainer

router = APIRouter()

# Live trainers keyed by session token
_trainers: dict[str, CountingTrainer] = {}

SESSION_KEY_TRAINER = "counting_trainer"
SESSION_KEY_CREATED_AT = "created_at"
SESSION_KEY_LAST_ACTIVITY = "last_activity"


def release_trainer(session_id: str) -> None:
    """Forget the trainer of an expired session."""
    _trainers.pop(session_id, None)


async def _get_trainer(session_id: str) -> CountingTrainer:
    """Look up the session's trainer or fail with 404."""
    data = await touch_session(session_id, {SESSION_KEY_LAST_ACTIVITY: int(time.time())})
    trainer = _trainers.get(session_id)
    if data is None or trainer is None:
        release_trainer(session_id)
        raise HTTPException(status_code=404, detail="Unknown or expired session")
    return trainer


def _counting_state_response(trainer: CountingTrainer) -> CountingStateResponse:
    """Convert trainer state to response."""
    last_card = trainer.last_card
    feedback = None
    if trainer.feedback is not None:
        feedback = FeedbackResponse(
            result=trainer.feedback.result.value,  # type: ignore[arg-type]
            message=trainer.feedback.message,
            guess=trainer.feedback.guess,
        )

    return CountingStateResponse(
        system=trainer.system.name,
        revealed=[card_response(c) for c in trainer.revealed],
        last_card=card_response(last_card) if last_card else None,
        last_card_tag=trainer.system.tag(last_card) if last_card else None,
        running_count=trainer.running_count,
        cards_remaining=trainer.cards_remaining,
        deck_empty=trainer.deck_empty,
        last_guess=trainer.last_guess,
        feedback=feedback,
    )


@router.post("/counting/new")
async def new_counting_session(
    session_id: Annotated[str | None, Header(alias="X-Session-ID")] = None,
) -> NewCountingResponse:
    """Open a counting trainer with a fresh shuffled deck."""
    now = int(time.time())
    updates = {SESSION_KEY_TRAINER: True, SESSION_KEY_LAST_ACTIVITY: now}
    if session_id is None or await touch_session(session_id, updates) is None:
        session_id = await create_session({**updates, SESSION_KEY_CREATED_AT: now})

    seed = config.table.seed
    trainer = CountingTrainer(rng=Random(seed) if seed is not None else Random())
    _trainers[session_id] = trainer

    return NewCountingResponse(session_id=session_id, state=_counting_state_response(trainer))


@router.get("/counting/state")
async def counting_state(
    session_id: Annotated[str, Header(alias="X-Session-ID")],
) -> CountingStateResponse:
    """Get current trainer state."""
    trainer = await _get_trainer(session_id)
    return _counting_state_response(trainer)


@router.post("/counting/reset")
async def reset_counting(
    session_id: Annotated[str, Header(alias="X-Session-ID")],
) -> CountingStateResponse:
    """Start over with a new deck and a zero count."""
    trainer = await _get_trainer(session_id)
    trainer.reset()
    return _counting_state_response(trainer)


@router.post("/counting/reveal")
async def reveal_next_card(
    session_id: Annotated[str, Header(alias="X-Session-ID")],
) -> CountingStateResponse:
    """Reveal the next card; a no-op once the deck is empty."""
    trainer = await _get_trainer(session_id)
    trainer.reveal_next()
    return _counting_state_response(trainer)


@router.post("/counting/guess")
async def submit_guess(
    request: GuessRequest,
    session_id: Annotated[str, Header(alias="X-Session-ID")],
) -> CountingStateResponse:
    """Check a typed running count."""
    trainer = await _get_trainer(session_id)
    trainer.check_guess(request.guess)
    return _counting_state_response(trainer)
