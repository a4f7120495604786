"""Tests for product API endpoints."""

import pytest
from fastapi.testclient import TestClient

from storefront.domain.value_objects import new_id


@pytest.fixture
def category_id(auth_client: TestClient) -> str:
    """Create a category and return its id."""
    response = auth_client.post("/categories", json={"name": "Tees", "slug": "tees"})
    assert response.status_code == 201
    return response.json()["category"]["id"]


def product_payload(category_id: str, **overrides) -> dict:
    """Create a product request body."""
    payload = {
        "name": "Classic Tee",
        "slug": "classic-tee",
        "price": 19.99,
        "category_id": category_id,
        "brand": "Acme",
        "variants": [
            {"size": " M ", "color": " Red ", "stock": 0},
            {"sku": "TEE-XL", "stock": 5, "price": 21.5, "available": False},
        ],
    }
    payload.update(overrides)
    return payload


class TestCreateProduct:
    """Tests for POST /products endpoint."""

    def test_create_success(self, auth_client: TestClient, category_id: str) -> None:
        """Should create product with normalized variants."""
        response = auth_client.post("/products", json=product_payload(category_id))

        assert response.status_code == 201
        data = response.json()
        assert data["message"] == "Product created successfully"

        product = data["product"]
        assert product["slug"] == "classic-tee"
        assert product["category"] == category_id
        assert len(product["variants"]) == 2

        first, second = product["variants"]
        assert first["size"] == "M"
        assert first["color"] == "Red"
        assert first["stock"] == 0
        assert first["available"] is True
        assert first["sku"] is None
        assert second["sku"] == "TEE-XL"
        assert second["price"] == 21.5
        assert second["available"] is False
        assert first["id"] != second["id"]

    def test_requires_auth(self, client: TestClient, category_id: str) -> None:
        """Should reject writes without a token."""
        response = client.post("/products", json=product_payload(category_id))

        assert response.status_code == 401
        assert response.json()["error_code"] == "UNAUTHORIZED"

    def test_duplicate_sku(self, auth_client: TestClient, category_id: str) -> None:
        """Should return 400 with the validator's reason."""
        response = auth_client.post(
            "/products",
            json=product_payload(
                category_id,
                variants=[{"sku": "A", "stock": 1}, {"sku": "A", "stock": 2}],
            ),
        )

        assert response.status_code == 400
        data = response.json()
        assert data["error_code"] == "INVALID_VARIANTS"
        assert data["message"] == "Duplicate SKU: A"
        assert "request_id" in data

    def test_duplicate_combo(self, auth_client: TestClient, category_id: str) -> None:
        response = auth_client.post(
            "/products",
            json=product_payload(
                category_id,
                variants=[
                    {"size": "M", "color": "Red", "stock": 1},
                    {"size": "M", "color": "Red", "stock": 2},
                ],
            ),
        )

        assert response.status_code == 400
        assert response.json()["message"] == (
            'Duplicate variant with size "M" and color "Red"'
        )

    def test_boolean_stock_rejected(self, auth_client: TestClient, category_id: str) -> None:
        """Booleans are not accepted as stock."""
        response = auth_client.post(
            "/products",
            json=product_payload(category_id, variants=[{"sku": "A", "stock": True}]),
        )

        assert response.status_code == 400
        assert response.json()["message"] == (
            "Invalid stock value for A. Stock must be a non-negative number"
        )

    @pytest.mark.parametrize(
        "field,message",
        [
            ("price", "Invalid price for A. Price must be a non-negative number"),
            ("available", "Invalid available flag for variant 1. Must be a boolean"),
        ],
    )
    def test_null_variant_field_rejected(
        self, auth_client: TestClient, category_id: str, field: str, message: str
    ) -> None:
        """A variant field sent as null is rejected, not defaulted."""
        response = auth_client.post(
            "/products",
            json=product_payload(category_id, variants=[{"sku": "A", "stock": 1, field: None}]),
        )

        assert response.status_code == 400
        assert response.json()["message"] == message
        assert auth_client.get("/products").json()["products"] == []

    def test_omitted_variant_fields_default(
        self, auth_client: TestClient, category_id: str
    ) -> None:
        response = auth_client.post(
            "/products",
            json=product_payload(category_id, variants=[{"sku": "A", "stock": 1}]),
        )

        assert response.status_code == 201
        variant = response.json()["product"]["variants"][0]
        assert variant["available"] is True
        assert variant.get("price") is None

    def test_unknown_category(self, auth_client: TestClient) -> None:
        response = auth_client.post("/products", json=product_payload(new_id()))

        assert response.status_code == 404
        assert response.json()["message"] == "Category not found"

    def test_malformed_category(self, auth_client: TestClient) -> None:
        response = auth_client.post("/products", json=product_payload("abc"))

        assert response.status_code == 400
        assert response.json()["message"] == "Invalid category ID"

    def test_duplicate_slug(self, auth_client: TestClient, category_id: str) -> None:
        auth_client.post("/products", json=product_payload(category_id))

        response = auth_client.post(
            "/products",
            json=product_payload(category_id, name="Other", variants=None),
        )

        assert response.status_code == 409
        assert response.json()["error_code"] == "CONFLICT"

    def test_missing_price(self, auth_client: TestClient, category_id: str) -> None:
        """Should reject bodies missing required fields."""
        payload = product_payload(category_id)
        del payload["price"]

        response = auth_client.post("/products", json=payload)

        assert response.status_code == 422
        assert response.json()["error_code"] == "VALIDATION_ERROR"


class TestListProducts:
    """Tests for GET /products endpoint."""

    @pytest.fixture
    def seeded(self, auth_client: TestClient, category_id: str) -> None:
        """Create three products."""
        for name, slug, price, brand in [
            ("Red Shirt", "red-shirt", 10, "Acme"),
            ("Blue Shirt", "blue-shirt", 20, "Globex"),
            ("Green Hat", "green-hat", 30, "acme outdoors"),
        ]:
            response = auth_client.post(
                "/products",
                json=product_payload(
                    category_id, name=name, slug=slug, price=price, brand=brand, variants=None
                ),
            )
            assert response.status_code == 201

    def test_list_is_public(self, client: TestClient, seeded) -> None:
        response = client.get("/products")

        assert response.status_code == 200
        data = response.json()
        assert [p["slug"] for p in data["products"]] == [
            "green-hat",
            "blue-shirt",
            "red-shirt",
        ]
        assert data["pagination"] == {
            "page": 1,
            "page_size": 10,
            "total": 3,
            "total_pages": 1,
        }

    def test_pagination(self, client: TestClient, seeded) -> None:
        response = client.get("/products?page=2&limit=2")

        data = response.json()
        assert [p["slug"] for p in data["products"]] == ["red-shirt"]
        assert data["pagination"]["total_pages"] == 2

    def test_search(self, client: TestClient, seeded) -> None:
        response = client.get("/products", params={"search": "SHIRT"})
        assert response.json()["pagination"]["total"] == 2

    def test_brand(self, client: TestClient, seeded) -> None:
        response = client.get("/products", params={"brand": "acme"})
        slugs = {p["slug"] for p in response.json()["products"]}
        assert slugs == {"red-shirt", "green-hat"}

    def test_price_range(self, client: TestClient, seeded) -> None:
        response = client.get("/products", params={"min_price": 15, "max_price": 30})
        slugs = {p["slug"] for p in response.json()["products"]}
        assert slugs == {"blue-shirt", "green-hat"}

    def test_category_filter(self, client: TestClient, seeded, category_id: str) -> None:
        response = client.get("/products", params={"category_id": category_id})
        assert response.json()["pagination"]["total"] == 3

        response = client.get("/products", params={"category_id": new_id()})
        assert response.json()["products"] == []

    def test_malformed_category_filter(self, client: TestClient) -> None:
        response = client.get("/products", params={"category_id": "oops"})

        assert response.status_code == 400
        assert response.json()["message"] == "Invalid category ID"


class TestSingleProduct:
    """Tests for GET, PUT, PATCH and DELETE /products/{id}."""

    @pytest.fixture
    def product_id(self, auth_client: TestClient, category_id: str) -> str:
        response = auth_client.post("/products", json=product_payload(category_id))
        return response.json()["product"]["id"]

    def test_get(self, client: TestClient, product_id: str) -> None:
        response = client.get(f"/products/{product_id}")

        assert response.status_code == 200
        assert response.json()["product"]["id"] == product_id

    def test_get_malformed(self, client: TestClient) -> None:
        response = client.get("/products/not-a-uuid")

        assert response.status_code == 400
        assert response.json()["message"] == "Invalid product ID"

    def test_get_missing(self, client: TestClient) -> None:
        response = client.get(f"/products/{new_id()}")

        assert response.status_code == 404
        assert response.json()["message"] == "Product not found"

    def test_patch_partial(self, auth_client: TestClient, product_id: str) -> None:
        response = auth_client.patch(f"/products/{product_id}", json={"price": 25})

        assert response.status_code == 200
        data = response.json()
        assert data["message"] == "Product updated successfully"
        assert data["product"]["price"] == 25
        assert data["product"]["name"] == "Classic Tee"
        assert len(data["product"]["variants"]) == 2

    def test_put_replaces_variants(self, auth_client: TestClient, product_id: str) -> None:
        response = auth_client.put(
            f"/products/{product_id}",
            json={"variants": [{"color": " Black ", "stock": 3}]},
        )

        assert response.status_code == 200
        variants = response.json()["product"]["variants"]
        assert len(variants) == 1
        assert variants[0]["color"] == "Black"
        assert variants[0]["stock"] == 3

    def test_update_invalid_variants(self, auth_client: TestClient, product_id: str) -> None:
        response = auth_client.patch(
            f"/products/{product_id}",
            json={"variants": [{"sku": "A", "stock": 1, "available": "yes"}]},
        )

        assert response.status_code == 400
        assert response.json()["message"] == (
            "Invalid available flag for variant 1. Must be a boolean"
        )

    @pytest.mark.parametrize(
        "body,message",
        [
            ({"name": "   "}, "Product name cannot be empty"),
            ({"slug": ""}, "Product slug cannot be empty"),
        ],
    )
    def test_update_blank_name_or_slug(
        self, auth_client: TestClient, product_id: str, body: dict, message: str
    ) -> None:
        response = auth_client.patch(f"/products/{product_id}", json=body)

        assert response.status_code == 400
        assert response.json()["message"] == message
        product = auth_client.get(f"/products/{product_id}").json()["product"]
        assert product["name"] == "Classic Tee"

    def test_update_requires_auth(self, client: TestClient, product_id: str) -> None:
        response = client.patch(f"/products/{product_id}", json={"price": 1})
        assert response.status_code == 401

    def test_delete(self, auth_client: TestClient, product_id: str) -> None:
        response = auth_client.delete(f"/products/{product_id}")

        assert response.status_code == 200
        assert response.json() == {"message": "Product deleted successfully"}
        assert auth_client.get(f"/products/{product_id}").status_code == 404
