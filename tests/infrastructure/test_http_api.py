"""Tests for the HTTP API via FastAPI's TestClient."""

import logging

import pytest
from fastapi.testclient import TestClient

from catalog.application.product_service import ProductService
from catalog.infrastructure.http.app import create_app
from catalog.infrastructure.persistence.in_memory_product_repository import (
    InMemoryProductRepository,
)
from tests.fakes import SpyProductRepository, UnavailableProductRepository

WIDGET = {"id": "1", "name": "Widget", "price": 9.99}


@pytest.fixture
def client():
    app = create_app(ProductService(InMemoryProductRepository()))
    return TestClient(app)


class TestCreateProduct:

    def test_created(self, client):
        response = client.post("/products", json=WIDGET)
        assert response.status_code == 201
        body = response.json()
        assert {k: body[k] for k in ("id", "name", "price")} == WIDGET
        assert body["created_at"]

    def test_duplicate_is_conflict(self, client):
        client.post("/products", json=WIDGET)
        response = client.post("/products", json={**WIDGET, "name": "Impostor"})
        assert response.status_code == 409
        assert response.json() == {"error": "Product with ID '1' already exists"}

    def test_empty_id_is_bad_request(self, client):
        response = client.post("/products", json={"id": "", "name": "X", "price": 1.0})
        assert response.status_code == 400
        assert "ID cannot be empty" in response.json()["error"]
        assert client.get("/products").json() == []

    def test_missing_id_is_bad_request(self, client):
        response = client.post("/products", json={"name": "X", "price": 1.0})
        assert response.status_code == 400
        assert "ID cannot be empty" in response.json()["error"]

    def test_malformed_body(self, client):
        response = client.post(
            "/products",
            content="{not json",
            headers={"Content-Type": "application/json"},
        )
        assert response.status_code == 400
        assert response.json() == {"error": "invalid request body"}

    def test_wrong_price_type(self, client):
        response = client.post("/products", json={"id": "1", "name": "X", "price": "cheap"})
        assert response.status_code == 400
        assert response.json() == {"error": "invalid request body"}

    def test_quoted_price_not_coerced(self, client):
        response = client.post("/products", json={"id": "1", "name": "X", "price": "9.99"})
        assert response.status_code == 400
        assert response.json() == {"error": "invalid request body"}
        assert client.get("/products").json() == []

    def test_numeric_id_not_coerced(self, client):
        response = client.post("/products", json={"id": 1, "name": "X", "price": 1.0})
        assert response.status_code == 400

    def test_integer_price_accepted(self, client):
        response = client.post("/products", json={"id": "1", "name": "X", "price": 25})
        assert response.status_code == 201
        assert response.json()["price"] == 25.0


class TestReadProducts:

    def test_list_empty(self, client):
        response = client.get("/products")
        assert response.status_code == 200
        assert response.json() == []

    def test_list(self, client):
        client.post("/products", json=WIDGET)
        client.post("/products", json={"id": "2", "name": "Gadget", "price": 25.0})
        ids = sorted(p["id"] for p in client.get("/products").json())
        assert ids == ["1", "2"]

    def test_get(self, client):
        created = client.post("/products", json=WIDGET).json()
        response = client.get("/products/1")
        assert response.status_code == 200
        assert response.json() == created

    def test_get_unknown(self, client):
        response = client.get("/products/nope")
        assert response.status_code == 404
        assert response.json() == {"error": "Product with ID 'nope' not found"}


class TestUpdateProduct:

    def test_updated(self, client):
        created = client.post("/products", json=WIDGET).json()
        response = client.put(
            "/products/1", json={"id": "1", "name": "Widget XL", "price": 14.99}
        )
        assert response.status_code == 200
        body = response.json()
        assert (body["name"], body["price"]) == ("Widget XL", 14.99)
        assert body["created_at"] == created["created_at"]

    def test_client_created_at_ignored(self, client):
        created = client.post("/products", json=WIDGET).json()
        client.put(
            "/products/1",
            json={**WIDGET, "created_at": "1999-01-01T00:00:00Z"},
        )
        assert client.get("/products/1").json()["created_at"] == created["created_at"]

    def test_mismatched_ids(self, client):
        client.post("/products", json=WIDGET)
        response = client.put("/products/1", json={**WIDGET, "id": "2"})
        assert response.status_code == 400
        assert "does not match" in response.json()["error"]

    def test_unknown(self, client):
        response = client.put("/products/2", json={"id": "2", "name": "X", "price": 1.0})
        assert response.status_code == 404


class TestDeleteProduct:

    def test_deleted(self, client):
        client.post("/products", json=WIDGET)
        response = client.delete("/products/1")
        assert response.status_code == 204
        assert response.content == b""
        assert client.get("/products/1").status_code == 404

    def test_unknown(self, client):
        response = client.delete("/products/1")
        assert response.status_code == 404


class TestInfrastructureFailure:

    def test_opaque_error_is_internal_server_error(self):
        app = create_app(ProductService(UnavailableProductRepository()))
        client = TestClient(app, raise_server_exceptions=False)
        response = client.get("/products")
        assert response.status_code == 500
        assert response.json() == {"error": "internal server error"}

    def test_opaque_error_logged_once_without_traceback(self, caplog):
        app = create_app(ProductService(UnavailableProductRepository()))
        client = TestClient(app, raise_server_exceptions=False)
        with caplog.at_level(logging.ERROR, logger="catalog.infrastructure.http.app"):
            client.get("/products")
        records = [r for r in caplog.records if r.name == "catalog.infrastructure.http.app"]
        assert len(records) == 1
        assert records[0].exc_info is None
        assert "database unavailable" in records[0].getMessage()


class TestLifespan:

    def test_repository_closed_on_shutdown(self):
        repo = SpyProductRepository()
        app = create_app(ProductService(repo))
        with TestClient(app) as client:
            client.get("/products")
            assert not repo.closed
        assert repo.closed
