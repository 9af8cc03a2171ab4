"""Tests for API endpoints."""

import time
import pytest
import pytest_asyncio
from datetime import datetime, timedelta
from unittest.mock import patch

from httpx import AsyncClient, ASGITransport
from itsdangerous.timed import TimestampSigner

from api.main import app
from api.routes import game, training
from api.session import get_session_store
from config import config


@pytest_asyncio.fixture
async def client():
    """Create test client."""
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client


async def _open_table(client, mode: str) -> tuple[str, dict]:
    response = await client.post("/api/game/new", json={"mode": mode})
    assert response.status_code == 200
    data = response.json()
    return data["session_id"], data["state"]


@pytest.mark.asyncio
async def test_health_check(client):
    """Test health check endpoint."""
    response = await client.get("/api/health")
    assert response.status_code == 200
    assert response.json() == {"status": "healthy"}


@pytest.mark.asyncio
async def test_new_solo_table(client):
    """A new table is dealt with the hole card withheld."""
    session_id, state = await _open_table(client, "solo")

    assert session_id
    assert state["mode"] == "solo"
    assert state["state"] == "PLAYER_TURN"
    assert len(state["seats"]) == 1
    assert len(state["seats"][0]["hand"]["cards"]) == 2
    assert state["dealer"]["hole_card_hidden"] is True
    assert state["dealer"]["num_cards"] == 2
    assert len(state["dealer"]["cards"]) == 1
    assert state["cards_remaining"] == 48
    assert state["current_turn"] == "player"
    assert set(state["available_actions"]) == {"hit", "stand"}


@pytest.mark.asyncio
async def test_new_table_without_body_uses_default_mode(client):
    response = await client.post("/api/game/new")
    assert response.status_code == 200
    assert response.json()["state"]["mode"] == "solo"


@pytest.mark.asyncio
async def test_new_table_invalid_mode(client):
    response = await client.post("/api/game/new", json={"mode": "baccarat"})
    assert response.status_code == 422


@pytest.mark.asyncio
async def test_game_state(client):
    session_id, _ = await _open_table(client, "solo")

    response = await client.get("/api/game/state", headers={"X-Session-ID": session_id})
    assert response.status_code == 200
    assert response.json()["state"] == "PLAYER_TURN"


@pytest.mark.asyncio
async def test_unknown_session(client):
    response = await client.get("/api/game/state", headers={"X-Session-ID": "not-a-session"})
    assert response.status_code == 404


@pytest.mark.asyncio
async def test_solo_stand_resolves(client):
    session_id, _ = await _open_table(client, "solo")

    response = await client.post(
        "/api/game/action",
        json={"action": "stand"},
        headers={"X-Session-ID": session_id},
    )
    assert response.status_code == 200
    data = response.json()

    assert data["is_finished"] is True
    assert data["state"] == "RESOLVED"
    assert data["seats"][0]["outcome"] != "NONE"
    assert data["seats"][0]["stood"] is True
    assert data["dealer"]["hole_card_hidden"] is False
    assert len(data["dealer"]["cards"]) == data["dealer"]["num_cards"]
    assert data["dealer"]["visible_value"] >= 17 or data["seats"][0]["outcome"] == "DEALER_BUST"
    assert data["available_actions"] == []


@pytest.mark.asyncio
async def test_action_after_resolution_rejected(client):
    session_id, _ = await _open_table(client, "solo")
    headers = {"X-Session-ID": session_id}
    await client.post("/api/game/action", json={"action": "stand"}, headers=headers)

    response = await client.post("/api/game/action", json={"action": "hit"}, headers=headers)
    assert response.status_code == 400
    assert response.json()["detail"] == "Cannot hit now"


@pytest.mark.asyncio
async def test_dealer_action_not_available_in_solo(client):
    session_id, _ = await _open_table(client, "solo")

    response = await client.post(
        "/api/game/action",
        json={"action": "dealer_hit"},
        headers={"X-Session-ID": session_id},
    )
    assert response.status_code == 400


@pytest.mark.asyncio
async def test_new_round(client):
    session_id, _ = await _open_table(client, "solo")
    headers = {"X-Session-ID": session_id}
    await client.post("/api/game/action", json={"action": "stand"}, headers=headers)

    response = await client.post("/api/game/round", headers=headers)
    assert response.status_code == 200
    data = response.json()
    assert data["is_finished"] is False
    assert data["cards_remaining"] == 48


@pytest.mark.asyncio
async def test_two_player_turns(client):
    session_id, state = await _open_table(client, "two_player")
    headers = {"X-Session-ID": session_id}

    assert [s["seat"] for s in state["seats"]] == [1, 2]
    assert state["current_turn"] == "player1"
    assert state["cards_remaining"] == 46

    missing_seat = await client.post("/api/game/action", json={"action": "stand"}, headers=headers)
    assert missing_seat.status_code == 400

    out_of_turn = await client.post(
        "/api/game/action", json={"action": "stand", "seat": 2}, headers=headers
    )
    assert out_of_turn.status_code == 400

    response = await client.post(
        "/api/game/action", json={"action": "stand", "seat": 1}, headers=headers
    )
    assert response.status_code == 200
    data = response.json()
    assert data["current_turn"] == "player2"
    assert data["dealer"]["hole_card_hidden"] is True

    response = await client.post(
        "/api/game/action", json={"action": "stand", "seat": 2}, headers=headers
    )
    data = response.json()
    assert data["is_finished"] is True
    assert data["dealer"]["hole_card_hidden"] is False
    assert all(s["outcome"] != "NONE" for s in data["seats"])


@pytest.mark.asyncio
async def test_invalid_seat_number(client):
    session_id, _ = await _open_table(client, "two_player")

    response = await client.post(
        "/api/game/action",
        json={"action": "hit", "seat": 3},
        headers={"X-Session-ID": session_id},
    )
    assert response.status_code == 422


@pytest.mark.asyncio
async def test_head_to_head_turns(client):
    session_id, state = await _open_table(client, "head_to_head")
    headers = {"X-Session-ID": session_id}

    assert set(state["available_actions"]) == {"hit", "stand"}

    early = await client.post("/api/game/action", json={"action": "dealer_hit"}, headers=headers)
    assert early.status_code == 400

    response = await client.post("/api/game/action", json={"action": "stand"}, headers=headers)
    data = response.json()
    assert data["state"] == "DEALER_TURN"
    assert data["current_turn"] == "dealer"
    assert data["dealer"]["hole_card_hidden"] is False
    assert data["dealer"]["num_cards"] == 2
    assert set(data["available_actions"]) == {"dealer_hit", "dealer_stand"}

    response = await client.post("/api/game/action", json={"action": "dealer_stand"}, headers=headers)
    data = response.json()
    assert data["is_finished"] is True
    assert data["dealer_stood"] is True


@pytest.mark.asyncio
async def test_counting_flow(client):
    response = await client.post("/api/training/counting/new")
    assert response.status_code == 200
    data = response.json()
    session_id = data["session_id"]
    headers = {"X-Session-ID": session_id}

    assert data["state"]["cards_remaining"] == 52
    assert data["state"]["running_count"] == 0
    assert data["state"]["system"] == "Hi-Lo"

    for _ in range(3):
        response = await client.post("/api/training/counting/reveal", headers=headers)
        assert response.status_code == 200
    state = response.json()
    assert len(state["revealed"]) == 3
    assert state["cards_remaining"] == 49
    assert state["last_card_tag"] in (-1, 0, 1)

    response = await client.post(
        "/api/training/counting/guess",
        json={"guess": str(state["running_count"])},
        headers=headers,
    )
    data = response.json()
    assert data["feedback"]["result"] == "correct"
    assert data["feedback"]["message"] == "Correct!"

    response = await client.post(
        "/api/training/counting/guess",
        json={"guess": str(state["running_count"] + 2)},
        headers=headers,
    )
    assert response.json()["feedback"]["result"] == "lower"


@pytest.mark.asyncio
async def test_counting_invalid_guess(client):
    session_id = (await client.post("/api/training/counting/new")).json()["session_id"]

    response = await client.post(
        "/api/training/counting/guess",
        json={"guess": "lots"},
        headers={"X-Session-ID": session_id},
    )
    assert response.status_code == 200
    feedback = response.json()["feedback"]
    assert feedback["result"] == "invalid"
    assert feedback["guess"] is None


@pytest.mark.asyncio
async def test_counting_reset(client):
    session_id = (await client.post("/api/training/counting/new")).json()["session_id"]
    headers = {"X-Session-ID": session_id}
    await client.post("/api/training/counting/reveal", headers=headers)

    response = await client.post("/api/training/counting/reset", headers=headers)
    data = response.json()
    assert data["revealed"] == []
    assert data["cards_remaining"] == 52
    assert data["running_count"] == 0
    assert data["feedback"] is None


@pytest.mark.asyncio
async def test_counting_reveal_empty_deck(client):
    session_id = (await client.post("/api/training/counting/new")).json()["session_id"]
    headers = {"X-Session-ID": session_id}
    for _ in range(52):
        await client.post("/api/training/counting/reveal", headers=headers)

    response = await client.post("/api/training/counting/reveal", headers=headers)
    assert response.status_code == 200
    data = response.json()
    assert data["deck_empty"] is True
    assert len(data["revealed"]) == 52
    assert data["running_count"] == 0


@pytest.mark.asyncio
async def test_table_and_trainer_share_session(client):
    session_id, _ = await _open_table(client, "solo")
    headers = {"X-Session-ID": session_id}

    response = await client.post("/api/training/counting/new", headers=headers)
    assert response.json()["session_id"] == session_id

    table = await client.get("/api/game/state", headers=headers)
    assert table.status_code == 200


@pytest.mark.asyncio
async def test_active_session_outlives_token_age(client):
    """Requests keep a session alive past the token's signing time plus the TTL."""
    session_id, _ = await _open_table(client, "solo")
    headers = {"X-Session-ID": session_id}
    later = int(time.time()) + config.session_ttl + 60

    with patch.object(TimestampSigner, "get_timestamp", lambda self: later):
        response = await client.get("/api/game/state", headers=headers)

    assert response.status_code == 200


@pytest.mark.asyncio
async def test_idle_session_expires(client):
    session_id, _ = await _open_table(client, "solo")
    store = await get_session_store()
    data, _ = store._sessions[session_id]
    store._sessions[session_id] = (data, datetime.now() - timedelta(seconds=1))

    response = await client.get("/api/game/state", headers={"X-Session-ID": session_id})

    assert response.status_code == 404
    assert session_id not in game._tables


@pytest.mark.asyncio
async def test_expired_sessions_release_tables_and_trainers(client):
    tables = [(await _open_table(client, "solo"))[0] for _ in range(5)]
    trainer = (await client.post("/api/training/counting/new")).json()["session_id"]
    store = await get_session_store()
    for token in [*tables, trainer]:
        data, _ = store._sessions[token]
        store._sessions[token] = (data, datetime.now() - timedelta(seconds=1))

    await client.get("/api/health")

    assert not any(token in game._tables for token in tables)
    assert trainer not in training._trainers
