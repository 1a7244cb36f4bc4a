import pytest
from fastapi.testclient import TestClient

from product_service.config import ProductSettings
from product_service.main import create_app

WIDGET = {"name": "Widget", "description": "A widget", "price": 9.99, "category": "Tools"}


@pytest.fixture
def products():
    with TestClient(create_app(ProductSettings(database_url="sqlite://"))) as client:
        yield client


def test_create_product(products):
    resp = products.post("/products", json=WIDGET)
    assert resp.status_code == 201
    body = resp.json()
    assert body["id"] == 1
    assert body["price"] == 9.99
    assert set(body) == {"id", "name", "description", "price", "category", "created_at", "updated_at"}


@pytest.mark.parametrize("change", [{"price": 0}, {"name": ""}, {"category": ""}])
def test_create_product_validation(products, change):
    resp = products.post("/products", json=dict(WIDGET, **change))
    assert resp.status_code == 422


def test_filter_by_category(products):
    products.post("/products", json=WIDGET)
    products.post("/products", json=dict(WIDGET, name="Hammer"))
    products.post("/products", json=dict(WIDGET, name="Apple", category="Food"))

    tools = products.get("/products", params={"category": "Tools"}).json()
    assert [p["name"] for p in tools] == ["Widget", "Hammer"]
    assert len(products.get("/products").json()) == 3


def test_get_update_delete_product(products):
    products.post("/products", json=WIDGET)

    assert products.get("/products", params={"id": 1}).json()["name"] == "Widget"
    assert products.get("/products", params={"id": 2}).status_code == 404
    assert products.get("/products", params={"id": str(2**64)}).status_code == 400

    resp = products.put("/products", params={"id": 1}, json=dict(WIDGET, price=12.5))
    assert resp.json()["price"] == 12.5

    assert products.delete("/products", params={"id": 1}).status_code == 204
    assert products.get("/products", params={"id": 1}).status_code == 404
