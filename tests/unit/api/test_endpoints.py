"""Unit tests for the pool HTTP endpoints."""

import pytest
from fastapi.testclient import TestClient

from logit_amm.api.endpoints import get_registry
from logit_amm.api.main import app
from logit_amm.api.registry import PoolRegistry

RESERVE = str(100_000 * 10**18)
TRADE = str(1_000 * 10**18)


def create_payload(**overrides) -> dict:
    payload = {
        "shortReserve": RESERVE,
        "underlyingReserve": RESERVE,
        "scalar": 100,
        "anchor": 1_010_000_000,
    }
    payload.update(overrides)
    return payload


@pytest.fixture
def client(registry: PoolRegistry):
    """Test client backed by a fresh registry."""
    app.dependency_overrides[get_registry] = lambda: registry
    yield TestClient(app)
    app.dependency_overrides.clear()


class TestHealth:
    def test_health(self, client):
        response = client.get("/health")
        assert response.status_code == 200
        assert response.json() == {"status": "ok"}


class TestCreatePool:
    def test_create_pool(self, client, registry):
        response = client.post("/pools", json=create_payload())

        assert response.status_code == 200
        data = response.json()
        assert data["poolId"] == "pool-1"
        assert data["shortCache"] == RESERVE
        assert data["underlyingCache"] == RESERVE
        assert data["spotExchangeRate"] == "1010000000"
        assert data["proportion"] == str(10**18 // 2)
        assert data["liquidityFee"] == "250000"
        assert int(data["spotRate"]) > 0
        assert len(registry) == 1

    def test_pools_get_distinct_addresses(self, client):
        first = client.post("/pools", json=create_payload()).json()
        second = client.post("/pools", json=create_payload()).json()
        assert first["poolId"] != second["poolId"]
        assert first["address"] != second["address"]

    def test_seed_too_small(self, client, registry):
        response = client.post(
            "/pools", json=create_payload(shortReserve="1000", underlyingReserve="1000")
        )
        assert response.status_code == 422
        assert len(registry) == 0

    def test_zero_scalar(self, client):
        response = client.post("/pools", json=create_payload(scalar=0))
        assert response.status_code == 422
        assert "scalar" in response.json()["detail"]

    def test_invalid_schema(self, client):
        response = client.post("/pools", json={"shortReserve": RESERVE})
        assert response.status_code == 422


class TestGetPool:
    def test_list_pools(self, client):
        client.post("/pools", json=create_payload())
        assert client.get("/pools").json() == ["pool-1"]

    def test_get_pool(self, client):
        client.post("/pools", json=create_payload())
        response = client.get("/pools/pool-1")
        assert response.status_code == 200
        assert response.json()["totalShares"] == RESERVE

    def test_unknown_pool(self, client):
        assert client.get("/pools/pool-9").status_code == 404


class TestQuote:
    @pytest.fixture(autouse=True)
    def _pool(self, client):
        client.post("/pools", json=create_payload())

    def test_buy_quote(self, client, registry):
        response = client.get("/pools/pool-1/quote", params={"side": "buy", "size": TRADE})

        assert response.status_code == 200
        data = response.json()
        pool = registry.get("pool-1")
        assert data["valid"] is True
        assert data["side"] == "buy"
        assert data["amount"] == str(pool.get_underlying_to_short_quote(int(TRADE)))
        assert data["rate"] == str(pool.get_exchange_rate_out(int(TRADE)))
        assert "error" not in data

    def test_sell_quote(self, client, registry):
        response = client.get("/pools/pool-1/quote", params={"side": "sell", "size": TRADE})
        data = response.json()
        pool = registry.get("pool-1")
        assert data["amount"] == str(pool.get_short_to_underlying_quote(int(TRADE)))

    def test_unavailable_quote_is_not_an_http_error(self, client):
        size = str(200_000 * 10**18)
        response = client.get("/pools/pool-1/quote", params={"side": "buy", "size": size})

        assert response.status_code == 200
        data = response.json()
        assert data["valid"] is False
        assert data["amount"] == "0"
        assert data["error"] == "insufficient_short"

    def test_zero_size_rejected(self, client):
        response = client.get("/pools/pool-1/quote", params={"side": "buy", "size": 0})
        assert response.status_code == 422

    def test_unknown_side_rejected(self, client):
        response = client.get("/pools/pool-1/quote", params={"side": "hold", "size": TRADE})
        assert response.status_code == 422

    def test_quote_unknown_pool(self, client):
        response = client.get("/pools/nope/quote", params={"side": "buy", "size": TRADE})
        assert response.status_code == 404
