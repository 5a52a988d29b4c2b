"""Tests for API endpoints."""

import pytest
import pytest_asyncio
from httpx import AsyncClient, ASGITransport

from api.main import app


@pytest_asyncio.fixture
async def client():
    """Create test client."""
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client


@pytest.mark.asyncio
async def test_health_check(client):
    """Test health check endpoint."""
    response = await client.get("/api/health")
    assert response.status_code == 200
    assert response.json() == {"status": "healthy"}


@pytest.mark.asyncio
async def test_action_evs_double_11(client):
    """Test 11 against a 6 recommends doubling."""
    response = await client.post(
        "/api/ev/actions",
        json={"player_total": 11, "dealer_upcard": 6},
    )
    assert response.status_code == 200
    data = response.json()

    assert data["best_action"] == "double"
    assert data["hint"] is None
    assert data["actions"][0]["action"] == "double"
    evs = [a["ev"] for a in data["actions"]]
    assert evs == sorted(evs, reverse=True)


@pytest.mark.asyncio
async def test_action_evs_with_rules(client):
    """Test rules sent with the request are applied and labelled."""
    response = await client.post(
        "/api/ev/actions",
        json={
            "player_total": 16,
            "dealer_upcard": 10,
            "rules": {"num_decks": 2, "dealer_hits_soft_17": False, "surrender": "none"},
        },
    )
    assert response.status_code == 200
    data = response.json()

    assert data["rules"].startswith("2D S17")
    assert "surrender" not in {a["action"] for a in data["actions"]}


@pytest.mark.asyncio
async def test_action_evs_garbled_surrender(client):
    """Test an unknown surrender mode means no surrender."""
    response = await client.post(
        "/api/ev/actions",
        json={"player_total": 16, "dealer_upcard": 10, "rules": {"surrender": "maybe"}},
    )
    assert response.status_code == 200
    assert "surrender" not in {a["action"] for a in response.json()["actions"]}


@pytest.mark.asyncio
async def test_action_evs_hint_filtered(client):
    """Test the hint falls back when the best action is not allowed."""
    response = await client.post(
        "/api/ev/actions",
        json={"player_total": 11, "dealer_upcard": 6, "legal_actions": ["stand", "hit"]},
    )
    assert response.status_code == 200
    data = response.json()

    assert data["best_action"] == "double"
    assert data["hint"] == "stand"


@pytest.mark.asyncio
async def test_action_evs_pair_split(client):
    """Test a pair of aces is split."""
    response = await client.post(
        "/api/ev/actions",
        json={
            "player_total": 12,
            "usable_aces": 1,
            "is_pair": True,
            "pair_rank": "A",
            "dealer_upcard": 6,
        },
    )
    assert response.status_code == 200
    assert response.json()["best_action"] == "split"


@pytest.mark.asyncio
async def test_action_evs_bad_pair_rank(client):
    """Test an unknown pair rank is rejected."""
    response = await client.post(
        "/api/ev/actions",
        json={"player_total": 12, "is_pair": True, "pair_rank": "Z", "dealer_upcard": 6},
    )
    assert response.status_code == 400


@pytest.mark.asyncio
async def test_action_evs_invalid_upcard(client):
    """Test an upcard outside 2-11 fails validation."""
    response = await client.post(
        "/api/ev/actions",
        json={"player_total": 12, "dealer_upcard": 12},
    )
    assert response.status_code == 422


@pytest.mark.asyncio
async def test_dealer_distribution(client):
    """Test dealer probabilities for an upcard sum to one."""
    response = await client.post("/api/ev/dealer", json={"dealer_upcard": 6})
    assert response.status_code == 200
    data = response.json()

    total = sum(data[k] for k in ("bust", "seventeen", "eighteen", "nineteen", "twenty", "twenty_one", "blackjack"))
    assert total == pytest.approx(1.0)
    assert data["blackjack"] == 0.0
    assert data["bust"] > 0.4


@pytest.mark.asyncio
async def test_evaluate_hand(client):
    """Test evaluating a blackjack."""
    response = await client.post("/api/hand/evaluate", json={"cards": ["AS", "KH"]})
    assert response.status_code == 200
    data = response.json()

    assert data["true_total"] == 21
    assert data["is_blackjack"] is True
    assert data["is_soft"] is True
    assert data["hand_type"] == "SOFT"


@pytest.mark.asyncio
async def test_evaluate_hand_hidden_card(client):
    """Test a face-down card is left out of the visible total."""
    response = await client.post(
        "/api/hand/evaluate",
        json={"cards": ["10S", "AH"], "hidden": [1]},
    )
    assert response.status_code == 200
    data = response.json()

    assert data["visible_total"] == 10
    assert data["true_total"] == 21
    assert data["is_soft"] is False


@pytest.mark.asyncio
async def test_evaluate_hand_bad_card(client):
    """Test a malformed card string is rejected."""
    response = await client.post("/api/hand/evaluate", json={"cards": ["XX"]})
    assert response.status_code == 400


@pytest.mark.asyncio
async def test_evaluate_hand_bad_hidden_index(client):
    response = await client.post(
        "/api/hand/evaluate",
        json={"cards": ["10S", "AH"], "hidden": [2]},
    )
    assert response.status_code == 400


@pytest.mark.asyncio
async def test_dealer_play_fixed_shoe(client):
    """Test dealer play draws from the given shoe in order."""
    response = await client.post(
        "/api/hand/dealer-play",
        json={"dealer_cards": ["6S", "5H"], "shoe": ["2C", "3D", "9H", "KC"]},
    )
    assert response.status_code == 200
    data = response.json()

    # 11 -> 13 -> 16 -> 25
    assert data["total"] == 25
    assert data["is_busted"] is True
    assert len(data["cards"]) == 5
    assert data["cards_remaining"] == 1
    assert data["events"][0]["event"] == "DEALER_REVEALS"
    assert data["events"][-1]["event"] == "DEALER_BUSTS"


@pytest.mark.asyncio
async def test_dealer_play_s17(client):
    """Test S17 rules stand on soft 17."""
    response = await client.post(
        "/api/hand/dealer-play",
        json={
            "dealer_cards": ["AS", "6H"],
            "shoe": ["5C"],
            "rules": {"dealer_hits_soft_17": False},
        },
    )
    assert response.status_code == 200
    data = response.json()

    assert data["total"] == 17
    assert data["cards_remaining"] == 1


@pytest.mark.asyncio
async def test_dealer_play_seeded_shoe(client):
    """Test a seeded random shoe gives repeatable results."""
    body = {"dealer_cards": ["4S", "2H"], "seed": 99}
    first = await client.post("/api/hand/dealer-play", json=body)
    second = await client.post("/api/hand/dealer-play", json=body)

    assert first.status_code == 200
    assert first.json()["cards"] == second.json()["cards"]
    assert first.json()["total"] >= 17


@pytest.mark.asyncio
async def test_dealer_play_bad_shoe_card(client):
    response = await client.post(
        "/api/hand/dealer-play",
        json={"dealer_cards": ["4S", "2H"], "shoe": ["2C", "??"]},
    )
    assert response.status_code == 400
