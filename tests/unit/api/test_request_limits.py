"""Tests for API request size limits and health."""

import pytest
from fastapi.testclient import TestClient

from cpamm.api.endpoints import get_exchange
from cpamm.api.main import MAX_REQUEST_SIZE, app
from cpamm.exchange import Exchange


@pytest.fixture
def client():
    """Client whose exchange is a fresh, empty instance."""
    exchange = Exchange()
    app.dependency_overrides[get_exchange] = lambda: exchange
    yield TestClient(app)
    app.dependency_overrides.clear()


class TestRequestSizeLimits:
    def test_oversized_request_returns_413(self, client):
        """Request with Content-Length exceeding limit returns 413."""
        response = client.post(
            "/pools",
            json={"coinA": "0x1::coin::USDC", "coinB": "0x1::coin::WETH"},
            headers={"Content-Length": str(MAX_REQUEST_SIZE + 1)},
        )
        assert response.status_code == 413
        assert response.json()["detail"] == "Request too large"

    def test_normal_request_accepted(self, client):
        response = client.post(
            "/assets",
            json={"assetType": "0x1::coin::USDC", "name": "USD Coin", "symbol": "USDC", "decimals": 6},
        )
        assert response.status_code == 201


class TestHealthEndpoint:
    def test_health_returns_ok(self):
        response = TestClient(app).get("/health")
        assert response.status_code == 200
        assert response.json() == {"status": "ok"}
