"""Unit tests for API error handling."""

import pytest
from fastapi.testclient import TestClient

from cpamm.api.endpoints import get_exchange
from cpamm.api.main import app, status_for
from cpamm.errors import (
    AssetAlreadyRegistered,
    InvalidPair,
    InvariantViolated,
    PoolAlreadyExists,
    PoolNotFound,
    ReservedAssetType,
)
from cpamm.exchange import Exchange
from tests.helpers import fixed_clock

USDC = "0x1::coin::USDC"
WETH = "0x1::coin::WETH"


@pytest.fixture
def exchange():
    return Exchange(clock=fixed_clock)


@pytest.fixture
def client(exchange):
    """Create a test client wired to a fresh exchange."""
    app.dependency_overrides[get_exchange] = lambda: exchange
    yield TestClient(app)
    app.dependency_overrides.clear()


def register(client, asset_type, symbol):
    response = client.post("/assets", json={"assetType": asset_type, "name": symbol, "symbol": symbol})
    assert response.status_code == 201


class TestStatusMapping:
    def test_status_codes(self):
        assert status_for(PoolNotFound("x")) == 404
        assert status_for(PoolAlreadyExists("x")) == 409
        assert status_for(AssetAlreadyRegistered("x")) == 409
        assert status_for(InvalidPair("x")) == 400
        assert status_for(InvariantViolated("x")) == 400
        assert status_for(ReservedAssetType("x")) == 400


class TestAmmErrors:
    """Pool errors come back as {"error": code, "detail": message}."""

    def test_pool_not_found(self, client):
        register(client, USDC, "USDC")
        register(client, WETH, "WETH")
        response = client.get(f"/pools/{USDC}/{WETH}")
        assert response.status_code == 404
        assert response.json()["error"] == "PoolNotFound"

    def test_duplicate_pool(self, client):
        register(client, USDC, "USDC")
        register(client, WETH, "WETH")
        assert client.post("/pools", json={"coinA": USDC, "coinB": WETH}).status_code == 201
        response = client.post("/pools", json={"coinA": WETH, "coinB": USDC})
        assert response.status_code == 409
        assert response.json()["error"] == "PoolAlreadyExists"

    def test_duplicate_asset(self, client):
        register(client, USDC, "USDC")
        response = client.post("/assets", json={"assetType": USDC, "name": "again", "symbol": "USDC"})
        assert response.status_code == 409
        assert response.json()["error"] == "AssetAlreadyRegistered"

    def test_equal_pair(self, client):
        register(client, USDC, "USDC")
        response = client.post("/pools", json={"coinA": USDC, "coinB": USDC})
        assert response.status_code == 400
        assert response.json()["error"] == "InvalidPair"

    def test_uninitialized_asset(self, client):
        register(client, USDC, "USDC")
        response = client.post("/pools", json={"coinA": USDC, "coinB": "0x9::coin::NOPE"})
        assert response.status_code == 400
        assert response.json()["error"] == "UninitializedAsset"

    def test_insufficient_balance(self, client):
        register(client, USDC, "USDC")
        register(client, WETH, "WETH")
        client.post("/pools", json={"coinA": USDC, "coinB": WETH})
        response = client.post(
            "/pools/supply",
            json={"coinA": USDC, "coinB": WETH, "account": "alice", "amountA": "10000", "amountB": "10000"},
        )
        assert response.status_code == 400
        assert response.json()["error"] == "InsufficientBalance"

    def test_mint_of_pool_share_token_refused(self, client, exchange):
        """Only assets registered through the API have a faucet."""
        register(client, USDC, "USDC")
        register(client, WETH, "WETH")
        client.post("/pools", json={"coinA": USDC, "coinB": WETH})
        share_token = str(exchange.registry.pools()[0].share_token)

        response = client.post("/accounts/alice/mint", json={"assetType": share_token, "amount": "1"})
        assert response.status_code == 400
        assert response.json()["error"] == "UninitializedAsset"

    def test_share_token_address_is_reserved(self, client):
        share_token = f"0xa1::swap::LPToken<{USDC},{WETH}>"
        for asset_type in (share_token, "0x00a1::coin::FAKE"):
            response = client.post("/assets", json={"assetType": asset_type, "name": "LP", "symbol": "LP"})
            assert response.status_code == 400
            assert response.json()["error"] == "ReservedAssetType"

        register(client, USDC, "USDC")
        register(client, WETH, "WETH")
        assert client.post("/pools", json={"coinA": USDC, "coinB": WETH}).status_code == 201
        response = client.post("/accounts/alice/mint", json={"assetType": share_token, "amount": "1"})
        assert response.status_code == 400
        assert response.json()["error"] == "UninitializedAsset"

    def test_padded_address_is_the_same_asset(self, client):
        register(client, USDC, "USDC")
        response = client.post("/assets", json={"assetType": "0x01::coin::USDC", "name": "again", "symbol": "USDC"})
        assert response.status_code == 409
        assert response.json()["error"] == "AssetAlreadyRegistered"


class TestInvalidRequests:
    def test_malformed_asset_type(self, client):
        response = client.post("/pools", json={"coinA": "USDC", "coinB": WETH})
        assert response.status_code == 422

    def test_amount_overflow(self, client):
        response = client.post(
            "/pools/supply",
            json={"coinA": USDC, "coinB": WETH, "account": "alice", "amountA": str(2**64), "amountB": "1"},
        )
        assert response.status_code == 422

    def test_negative_amount(self, client):
        response = client.post(
            "/pools/swap",
            json={"coinA": USDC, "coinB": WETH, "account": "alice", "amountAIn": "-5"},
        )
        assert response.status_code == 422

    def test_bad_quote_amount(self, client):
        response = client.get(f"/pools/{USDC}/{WETH}/quote", params={"amount_in": "abc"})
        assert response.status_code == 422

    def test_malformed_path_type(self, client):
        response = client.get(f"/pools/USDC/{WETH}")
        assert response.status_code == 422
