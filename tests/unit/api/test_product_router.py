"""Tests for the product HTTP endpoints."""

from decimal import Decimal

from fastapi.testclient import TestClient

from product_catalog.core.storage import InMemoryProductCache
from product_catalog.entities.product import ProductTable


class TestProductEndpoints:
    def test_create_product(self, client: TestClient, product_cache: InMemoryProductCache):
        response = client.post("/api/product", json={"name": "Laptop", "price": 1200})

        assert response.status_code == 201
        body = response.json()
        assert body["name"] == "Laptop"
        assert body["price"] == 1200
        assert isinstance(body["id"], int)
        assert product_cache.get(body["id"]).price == Decimal("1200")

    def test_create_ignores_body_id(self, client: TestClient, stored_product: ProductTable):
        response = client.post(
            "/api/product",
            json={"id": stored_product.id, "name": "Other", "price": 5},
        )

        assert response.status_code == 201
        assert response.json()["id"] != stored_product.id

    def test_create_rejects_invalid_body(self, client: TestClient):
        response = client.post("/api/product", json={"name": "No price"})
        assert response.status_code == 422

    def test_get_product(self, client: TestClient, stored_product: ProductTable):
        response = client.get(f"/api/product/{stored_product.id}")

        assert response.status_code == 200
        assert response.json() == {"id": stored_product.id, "name": "Phone", "price": 800}

    def test_price_is_json_number(self, client: TestClient):
        created = client.post("/api/product", json={"name": "Cable", "price": 19.99}).json()

        response = client.get(f"/api/product/{created['id']}")

        assert response.json()["price"] == 19.99

    def test_get_unknown_product_returns_404(self, client: TestClient):
        response = client.get("/api/product/9999")

        assert response.status_code == 404
        assert response.json()["detail"] == "Cannot find product with id 9999"

    def test_list_products(self, client: TestClient, stored_product: ProductTable):
        client.post("/api/product", json={"name": "Laptop", "price": 1200})

        response = client.get("/api/product")

        assert response.status_code == 200
        assert [p["name"] for p in response.json()] == ["Phone", "Laptop"]

    def test_list_products_empty(self, client: TestClient):
        response = client.get("/api/product")
        assert response.status_code == 200
        assert response.json() == []

    def test_update_product(
        self,
        client: TestClient,
        stored_product: ProductTable,
        product_cache: InMemoryProductCache,
    ):
        client.get(f"/api/product/{stored_product.id}")

        response = client.put(
            "/api/product",
            json={"id": stored_product.id, "name": "Updated Phone", "price": 850},
        )

        assert response.status_code == 200
        assert response.json() == {
            "id": stored_product.id,
            "name": "Updated Phone",
            "price": 850,
        }
        assert product_cache.get(stored_product.id).name == "Updated Phone"
        assert client.get(f"/api/product/{stored_product.id}").json()["name"] == "Updated Phone"

    def test_update_unknown_product_returns_404(self, client: TestClient):
        response = client.put("/api/product", json={"id": 4242, "name": "Ghost", "price": 1})

        assert response.status_code == 404
        assert response.json()["detail"] == "Cannot find product with id 4242"

    def test_update_without_id_returns_404(self, client: TestClient):
        response = client.put("/api/product", json={"name": "Ghost", "price": 1})
        assert response.status_code == 404

    def test_delete_product(
        self,
        client: TestClient,
        stored_product: ProductTable,
        product_cache: InMemoryProductCache,
    ):
        client.get(f"/api/product/{stored_product.id}")

        response = client.delete(f"/api/product/{stored_product.id}")

        assert response.status_code == 204
        assert response.content == b""
        assert product_cache.get(stored_product.id) is None
        assert client.get(f"/api/product/{stored_product.id}").status_code == 404

    def test_delete_unknown_product_returns_204(self, client: TestClient):
        assert client.delete("/api/product/31337").status_code == 204


class TestRequestMiddleware:
    def test_request_id_is_generated(self, client: TestClient):
        response = client.get("/api/product")
        assert response.headers.get("X-Request-ID")

    def test_request_id_is_propagated(self, client: TestClient):
        response = client.get("/api/product", headers={"X-Request-ID": "abc-123"})
        assert response.headers["X-Request-ID"] == "abc-123"

    def test_not_found_body_carries_request_id(self, client: TestClient):
        response = client.get("/api/product/1", headers={"X-Request-ID": "req-1"})

        assert response.status_code == 404
        assert response.json()["request_id"] == "req-1"

    def test_security_headers(self, client: TestClient):
        response = client.get("/api/product")

        assert response.headers["X-Content-Type-Options"] == "nosniff"
        assert response.headers["X-Frame-Options"] == "DENY"
