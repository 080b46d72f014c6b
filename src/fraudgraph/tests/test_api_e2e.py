"""
End-to-end API tests.

Exercises the HTTP endpoints via FastAPI TestClient against the in-memory
graph backend. Each test gets a fresh store from the application lifespan.
"""

from unittest.mock import AsyncMock

import pytest
from fastapi.testclient import TestClient

from fraudgraph.errors import UpstreamStoreError
from fraudgraph.sample_data import SAMPLE_TRANSACTIONS, SAMPLE_USERS


@pytest.fixture
def client():
    """Test client with the in-memory backend and a clean rate limit."""
    from fraudgraph.main import app, limiter

    limiter.reset()
    with TestClient(app, raise_server_exceptions=False) as client:
        yield client


@pytest.fixture
def seeded_client(client):
    """Test client whose store holds the sample users and transactions."""
    for user in SAMPLE_USERS:
        assert client.post("/api/v1/users", json=user).status_code == 201
    for tx in SAMPLE_TRANSACTIONS:
        assert client.post("/api/v1/transactions", json=tx).status_code == 201
    return client


class TestHealthEndpoint:
    """Tests for the health check and root endpoints."""

    def test_health(self, client):
        response = client.get("/health")

        assert response.status_code == 200
        data = response.json()
        assert data["status"] == "healthy"
        assert data["version"] == "0.1.0"
        assert data["services"]["graph"]["backend"] == "networkx"

    def test_health_degraded_when_store_fails(self, client):
        client.app.state.graph.backend.get_statistics = AsyncMock(
            side_effect=UpstreamStoreError("Query failed", "connection refused")
        )

        data = client.get("/health").json()

        assert data["status"] == "degraded"
        assert data["services"]["graph"]["status"] == "unhealthy"

    def test_root(self, client):
        data = client.get("/").json()
        assert data["name"] == "FraudGraph"
        assert data["health"] == "/health"

    def test_request_id_echoed(self, client):
        response = client.get("/health", headers={"X-Request-ID": "req-42"})
        assert response.headers["X-Request-ID"] == "req-42"
        assert "X-Process-Time" in response.headers


class TestUserEndpoints:
    """Tests for /api/v1/users."""

    def test_create_and_get(self, client):
        response = client.post("/api/v1/users", json={
            "id": "u1",
            "name": "Ann",
            "address": {"street": "1 Main St", "city": "Oslo", "country": "NO"},
        })

        assert response.status_code == 201
        assert response.json()["address"]["city"] == "Oslo"

        fetched = client.get("/api/v1/users/u1").json()
        assert fetched["name"] == "Ann"
        assert fetched["createdAt"]

    def test_missing_name(self, client):
        response = client.post("/api/v1/users", json={"id": "u1"})

        assert response.status_code == 400
        assert response.json()["details"] == {"field": "name"}
        assert client.get("/api/v1/users/u1").status_code == 404

    def test_list_with_filter(self, seeded_client):
        response = seeded_client.get("/api/v1/users", params={"phone": "+1234567890"})

        assert response.status_code == 200
        assert sorted(u["id"] for u in response.json()) == ["user1", "user5"]

    def test_not_found_body(self, client):
        response = client.get("/api/v1/users/ghost")

        assert response.status_code == 404
        assert response.json()["details"] == {"kind": "User", "id": "ghost"}

    def test_delete(self, seeded_client):
        response = seeded_client.delete("/api/v1/users/user1")

        assert response.status_code == 200
        assert response.json() == {"message": "User deleted successfully"}
        assert seeded_client.get("/api/v1/users/user1").status_code == 404
        assert seeded_client.delete("/api/v1/users/user1").status_code == 404

    def test_store_failure_maps_to_502(self, client):
        client.app.state.graph.backend.get_node = AsyncMock(
            side_effect=UpstreamStoreError("Query failed", "connection refused")
        )

        response = client.get("/api/v1/users/u1")

        assert response.status_code == 502
        assert response.json()["details"] == "connection refused"


class TestTransactionEndpoints:
    """Tests for /api/v1/transactions."""

    @pytest.mark.parametrize("amount", [0, -5, "abc"])
    def test_invalid_amount(self, client, amount):
        response = client.post(
            "/api/v1/transactions",
            json={"id": "t1", "amount": amount, "fromUserId": "u1"},
        )

        assert response.status_code == 400
        assert client.get("/api/v1/transactions/t1").status_code == 404

    def test_requires_a_user(self, client):
        response = client.post("/api/v1/transactions", json={"id": "t1", "amount": 10})
        assert response.status_code == 400

    def test_defaults(self, client):
        client.post("/api/v1/users", json={"id": "u1", "name": "Ann"})

        data = client.post(
            "/api/v1/transactions", json={"id": "t1", "amount": 10, "fromUserId": "u1"}
        ).json()

        assert data["currency"] == "USD"
        assert data["status"] == "completed"
        assert data["timestamp"]

    def test_list_amount_range(self, seeded_client):
        response = seeded_client.get(
            "/api/v1/transactions", params={"minAmount": 400, "maxAmount": 1000}
        )

        assert [t["id"] for t in response.json()] == ["tx10", "tx9"]

    def test_list_zero_lower_bound(self, seeded_client):
        response = seeded_client.get("/api/v1/transactions", params={"minAmount": 0})

        assert response.status_code == 200
        assert len(response.json()) == 10

    def test_delete(self, seeded_client):
        response = seeded_client.delete("/api/v1/transactions/tx1")

        assert response.json() == {"message": "Transaction deleted successfully"}
        assert seeded_client.get("/api/v1/transactions/tx1").status_code == 404


class TestRelationshipEndpoints:
    """Tests for /api/v1/relationships."""

    def test_user_connections(self, seeded_client):
        data = seeded_client.get("/api/v1/relationships/user/user5").json()

        assert data["user"]["id"] == "user5"
        assert ("user1", "SHARES_PHONE") in {
            (c["user"]["id"], c["relationship"]["type"]) for c in data["connectedUsers"]
        }
        assert {t["transaction"]["id"] for t in data["transactions"]} == {"tx4", "tx9"}

    def test_transaction_connections(self, seeded_client):
        data = seeded_client.get("/api/v1/relationships/transaction/tx10").json()

        assert data["involvedUsers"][0]["sender"]["id"] == "user3"
        assert data["involvedUsers"][0]["receiver"]["id"] == "user2"
        assert {r["transaction"]["id"] for r in data["relatedTransactions"]} == {"tx3"}

    def test_unknown(self, client):
        assert client.get("/api/v1/relationships/user/ghost").status_code == 404
        assert client.get("/api/v1/relationships/transaction/ghost").status_code == 404


class TestAnalyticsEndpoints:
    """Tests for /api/v1/analytics."""

    def test_shortest_path(self, seeded_client):
        response = seeded_client.get(
            "/api/v1/analytics/shortestPath",
            params={"sourceUserId": "user1", "targetUserId": "user5"},
        )

        data = response.json()
        assert data["pathExists"] is True
        assert data["pathLength"] == 1
        assert "message" not in data

    def test_shortest_path_no_path(self, client):
        client.post("/api/v1/users", json={"id": "a", "name": "A"})
        client.post("/api/v1/users", json={"id": "b", "name": "B"})

        data = client.get(
            "/api/v1/analytics/shortestPath",
            params={"sourceUserId": "a", "targetUserId": "b"},
        ).json()

        assert data == {"pathExists": False, "message": "No path found between the users"}

    def test_shortest_path_requires_ids(self, client):
        response = client.get("/api/v1/analytics/shortestPath", params={"sourceUserId": "a"})
        assert response.status_code == 400

    @pytest.mark.parametrize("depth", ["0", "abc"])
    def test_shortest_path_invalid_depth(self, seeded_client, depth):
        response = seeded_client.get(
            "/api/v1/analytics/shortestPath",
            params={"sourceUserId": "user1", "targetUserId": "user5", "maxDepth": depth},
        )
        assert response.status_code == 400

    def test_shortest_path_unknown_user(self, seeded_client):
        response = seeded_client.get(
            "/api/v1/analytics/shortestPath",
            params={"sourceUserId": "user1", "targetUserId": "ghost"},
        )

        assert response.status_code == 404
        assert response.json()["details"]["id"] == "ghost"

    def test_clusters(self, seeded_client):
        data = seeded_client.get(
            "/api/v1/analytics/clusters", params={"attribute": "deviceId"}
        ).json()

        assert data[0]["attribute"] == "deviceId"
        assert data[0]["value"] == "device123"
        assert data[0]["clusterSize"] == 3
        assert sorted(data[0]["transactionIds"]) == ["tx1", "tx4", "tx9"]
        assert [c["clusterSize"] for c in data] == [3, 2, 2]

    def test_clusters_invalid_attribute(self, client):
        response = client.get("/api/v1/analytics/clusters", params={"attribute": "email"})

        assert response.status_code == 400
        assert response.json()["details"] == {"field": "attribute"}


class TestExportEndpoints:
    """Tests for /api/v1/export."""

    def test_json(self, seeded_client):
        data = seeded_client.get("/api/v1/export/graph").json()

        assert data["format"] == "json"
        assert data["metadata"]["userCount"] == 7
        assert len(data["data"]["transactions"]) == 10

    def test_csv(self, seeded_client):
        data = seeded_client.get("/api/v1/export/graph", params={"format": "csv"}).json()

        assert data["data"]["users"].startswith("id,")

    def test_unsupported_format(self, client):
        assert client.get("/api/v1/export/graph", params={"format": "xml"}).status_code == 400

    def test_download(self, seeded_client, tmp_path, monkeypatch):
        from fraudgraph.config import settings

        monkeypatch.setattr(settings, "export_dir", tmp_path)

        data = seeded_client.get(
            "/api/v1/export/graph", params={"format": "csv", "download": "true"}
        ).json()

        assert data["success"] is True
        assert len(data["files"]) == 3
        assert len(list(tmp_path.iterdir())) == 3

    def test_download_writes_off_the_event_loop(self, seeded_client, tmp_path, monkeypatch):
        """Saving export files runs in the threadpool."""
        from fraudgraph.api.routes import export as export_routes
        from fraudgraph.config import settings

        calls = []
        original = export_routes.run_in_threadpool

        async def recording(func, *args, **kwargs):
            calls.append(func)
            return await original(func, *args, **kwargs)

        monkeypatch.setattr(settings, "export_dir", tmp_path)
        monkeypatch.setattr(export_routes, "run_in_threadpool", recording)

        response = seeded_client.get(
            "/api/v1/export/graph", params={"format": "json", "download": "true"}
        )

        assert response.status_code == 200
        assert [getattr(f, "__name__", None) for f in calls] == ["save_export"]
        assert len(list(tmp_path.iterdir())) == 1


class TestGraphEndpoint:
    """Tests for /api/v1/graph/full."""

    def test_full_graph(self, seeded_client):
        data = seeded_client.get("/api/v1/graph/full").json()

        assert data["stats"]["nodeCount"] == 17
        assert data["stats"]["failedFetches"] == 0
        node_ids = {n["id"] for n in data["nodes"]}
        assert all(e["source"] in node_ids and e["target"] in node_ids for e in data["edges"])
        assert len({e["id"] for e in data["edges"]}) == len(data["edges"])
