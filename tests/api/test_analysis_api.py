"""
API tests for analysis endpoints.
"""

from fastapi.testclient import TestClient


class TestAllocationAPI:
    """Tests for GET /analysis/allocation."""

    def test_empty_portfolio(self, client: TestClient):
        response = client.get("/analysis/allocation")

        assert response.status_code == 200
        data = response.json()
        assert data["items"] == []
        assert data["total_value"] == 0

    def test_allocation_after_buys(self, client: TestClient):
        client.post("/portfolio/buy", json={
            "coin_id": "bitcoin", "symbol": "btc", "name": "Bitcoin", "quantity": 0.1, "price": 30000,
        })
        client.post("/portfolio/buy", json={
            "coin_id": "ethereum", "symbol": "eth", "name": "Ethereum", "quantity": 1, "price": 1000,
        })

        data = client.get("/analysis/allocation").json()

        assert [i["coin_id"] for i in data["items"]] == ["bitcoin", "ethereum"]
        assert data["items"][0]["percentage"] == 75.0
        assert data["total_value"] == 4000.0
