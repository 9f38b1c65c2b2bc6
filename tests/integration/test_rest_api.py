"""Integration tests for the REST API adapter."""

from __future__ import annotations

import pytest
from fastapi.testclient import TestClient

from text_db import __version__
from text_db.adapters.inbound.rest_api import create_app
from text_db.application import TextDatabase


@pytest.fixture
def client(db: TextDatabase) -> TestClient:
    return TestClient(create_app(db))


@pytest.fixture
def users_client(users_db: TextDatabase) -> TestClient:
    return TestClient(create_app(users_db))


@pytest.mark.integration
class TestHealthAndStats:
    def test_health(self, client: TestClient) -> None:
        response = client.get("/health")

        assert response.status_code == 200
        assert response.json() == {"status": "healthy", "version": __version__}

    def test_stats(self, users_client: TestClient) -> None:
        data = users_client.get("/stats").json()

        assert data["tables"] == 1
        assert data["in_transaction"] is False


@pytest.mark.integration
class TestTables:
    def test_create_and_describe(self, client: TestClient) -> None:
        response = client.post(
            "/tables",
            json={"name": "items", "columns": [{"name": "sku", "type": "int"}, {"name": "label", "type": "str"}]},
        )

        assert response.status_code == 201
        assert response.json() == {
            "name": "items",
            "columns": [{"name": "sku", "type": "Integer"}, {"name": "label", "type": "Text"}],
        }
        assert client.get("/tables").json() == ["items"]
        assert client.get("/tables/ITEMS").json()["name"] == "items"

    def test_create_duplicate(self, users_client: TestClient) -> None:
        response = users_client.post(
            "/tables", json={"name": "Users", "columns": [{"name": "x", "type": "Int"}]}
        )

        assert response.status_code == 400
        assert response.json()["error"] == "table_already_exists"

    def test_create_invalid_columns(self, client: TestClient) -> None:
        response = client.post("/tables", json={"name": "t", "columns": []})

        assert response.status_code == 400
        assert response.json()["error"] == "invalid_columns"

    def test_describe_missing(self, client: TestClient) -> None:
        response = client.get("/tables/ghost")

        assert response.status_code == 404
        assert response.json()["error"] == "table_not_found"

    def test_drop(self, users_client: TestClient) -> None:
        assert users_client.delete("/tables/users").status_code == 200
        assert users_client.get("/tables").json() == []
        assert users_client.delete("/tables/users").status_code == 404


@pytest.mark.integration
class TestRows:
    def test_insert_and_select(self, users_client: TestClient) -> None:
        response = users_client.post("/tables/users/rows", json={"values": ["3", "Carol", "TRUE"]})
        assert response.status_code == 201

        data = users_client.post("/tables/users/select", json={"order_by": "name"}).json()

        assert data["columns"] == ["id", "name", "active"]
        assert data["count"] == 3
        assert data["rows"] == [
            ["1", "Alice", "true"],
            ["2", "Bob", "false"],
            ["3", "Carol", "true"],
        ]

    def test_insert_type_mismatch(self, users_client: TestClient) -> None:
        response = users_client.post("/tables/users/rows", json={"values": ["x", "Carol", "true"]})

        assert response.status_code == 400
        assert response.json()["error"] == "type_mismatch"

    def test_select_where_and_projection(self, users_client: TestClient) -> None:
        data = users_client.post(
            "/tables/users/select",
            json={"columns": ["name", "active"], "where": {"ACTIVE": "false"}},
        ).json()

        assert data["rows"] == [["Bob", "false"]]
        assert data["count"] == 1

    def test_select_where_on_hidden_column(self, users_client: TestClient) -> None:
        response = users_client.post(
            "/tables/users/select", json={"columns": ["name"], "where": {"id": "1"}}
        )

        assert response.status_code == 400

    def test_select_typed(self, users_client: TestClient) -> None:
        data = users_client.post(
            "/tables/users/select", json={"columns": ["id", "active", "email"], "typed": True}
        ).json()

        assert data["columns"] == ["id", "active", None]
        assert data["rows"] == [[1, True, None], [2, False, None]]

    def test_select_typed_corrupt_store(self, users_client: TestClient, users_db: TextDatabase) -> None:
        users_db.path.write_text(users_db.path.read_text() + "three|Carol|maybe\n")

        response = users_client.post("/tables/users/select", json={"typed": True})

        assert response.status_code == 500
        assert response.json()["error"] == "malformed_value"

    def test_select_invalid_order(self, users_client: TestClient) -> None:
        response = users_client.post("/tables/users/select", json={"order_by": "email"})

        assert response.status_code == 400
        assert response.json()["error"] == "invalid_order_column"


@pytest.mark.integration
class TestTransactionEndpoints:
    def test_commit(self, users_client: TestClient, users_db: TextDatabase) -> None:
        before = users_db.path.read_bytes()

        assert users_client.post("/transaction/begin").status_code == 200
        users_client.post("/tables/users/rows", json={"values": ["3", "Carol", "true"]})
        assert users_db.path.read_bytes() == before

        assert users_client.post("/transaction/commit").status_code == 200
        assert users_db.path.read_bytes() != before

    def test_rollback(self, users_client: TestClient, users_db: TextDatabase) -> None:
        before = users_db.path.read_bytes()
        users_client.post("/transaction/begin")
        users_client.delete("/tables/users")

        users_client.post("/transaction/rollback")

        assert users_db.path.read_bytes() == before

    def test_state_errors(self, client: TestClient) -> None:
        response = client.post("/transaction/commit")
        assert response.status_code == 409
        assert response.json()["error"] == "no_active_transaction"

        client.post("/transaction/begin")
        assert client.post("/transaction/begin").status_code == 409
        assert client.delete("/database").status_code == 409

    def test_unknown_action(self, client: TestClient) -> None:
        assert client.post("/transaction/restart").status_code == 422

    def test_drop_database(self, users_client: TestClient) -> None:
        assert users_client.delete("/database").status_code == 200
        assert users_client.get("/tables").json() == []
