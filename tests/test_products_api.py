# tests/test_products_api.py
import logging

from fastapi.testclient import TestClient
from catalog.config import Settings
from catalog.database import InMemoryProductStore
from catalog.main import create_app

store = InMemoryProductStore()
client = TestClient(create_app(store=store, settings=Settings(SEED_PRODUCTS=False)))


def reset():
    client.delete("/products")


def seed(*rows):
    for pid, name, price in rows:
        r = client.post("/products", json={"id": pid, "name": name, "price": price})
        assert r.status_code == 201


def test_create_get_delete_scenario():
    reset()
    r = client.post("/products", json={"id": "1", "name": "Apple", "price": 1.5})
    assert r.status_code == 201
    assert r.json() == {"id": "1", "name": "Apple", "price": 1.5}

    r = client.get("/products/1")
    assert r.status_code == 200
    assert r.json() == {"id": "1", "name": "Apple", "price": 1.5}

    r = client.delete("/products/1")
    assert r.status_code == 200
    assert r.json() == {"message": "Product deleted"}

    r = client.get("/products/1")
    assert r.status_code == 404
    assert r.json() == {"error": "Product not found"}


def test_numeric_id_is_stored_as_string():
    reset()
    r = client.post("/products", json={"id": 7, "name": "Kiwi", "price": 3})
    assert r.status_code == 201
    assert r.json()["id"] == "7"
    assert client.get("/products/7").json()["name"] == "Kiwi"


def test_price_is_optional():
    reset()
    r = client.post("/products", json={"id": "p", "name": "Pear"})
    assert r.status_code == 201
    assert r.json() == {"id": "p", "name": "Pear", "price": None}


def test_upsert_replaces_without_growing_count():
    reset()
    seed(("1", "Apple", 1.0))
    seed(("1", "Apple", 2.5))
    assert client.get("/products/count").json() == {"count": 1}
    assert client.get("/products/1").json()["price"] == 2.5


def test_missing_fields_rejected_before_write():
    reset()
    r = client.post("/products", json={"id": "1", "price": 2})
    assert r.status_code == 400
    assert r.json() == {"error": "id and name are required"}

    r = client.post("/products", json={"name": "No id"})
    assert r.status_code == 400
    assert r.json() == {"error": "id and name are required"}

    r = client.post("/products", json={"id": "1", "name": "   "})
    assert r.status_code == 400

    assert client.get("/products/count").json() == {"count": 0}


def test_bad_price_and_bad_body():
    reset()
    r = client.post("/products", json={"id": "1", "name": "Apple", "price": "cheap"})
    assert r.status_code == 400
    assert "price" in r.json()["error"]

    r = client.post("/products", json=["not", "an", "object"])
    assert r.status_code == 400
    assert "error" in r.json()


def test_delete_unknown_is_404():
    reset()
    r = client.delete("/products/nope")
    assert r.status_code == 404
    assert r.json() == {"error": "Product not found"}


def test_delete_all_empties_collection():
    reset()
    seed(("1", "A", 1), ("2", "B", 2), ("3", "C", 3))
    r = client.delete("/products")
    assert r.status_code == 200
    assert r.json() == {"message": "All products deleted"}
    assert client.get("/products/count").json() == {"count": 0}

    # already empty still succeeds
    assert client.delete("/products").status_code == 200


def test_unknown_route_uses_error_payload():
    r = client.get("/nowhere")
    assert r.status_code == 404
    assert "error" in r.json()


def test_health_reports_backend():
    assert client.get("/health").json() == {"status": "ok", "backend": "memory"}


class BrokenStore(InMemoryProductStore):
    def count(self):
        raise RuntimeError("store unavailable")


def test_store_failure_is_500():
    broken = TestClient(create_app(store=BrokenStore(), settings=Settings(SEED_PRODUCTS=False)),
                        raise_server_exceptions=False)
    r = broken.get("/products/count")
    assert r.status_code == 500
    assert r.json() == {"error": "Internal server error"}


def test_seeded_app_has_demo_catalogue():
    seeded = TestClient(create_app(store=InMemoryProductStore(), settings=Settings(SEED_PRODUCTS=True)))
    assert seeded.get("/products/count").json() == {"count": 4}
    assert seeded.get("/products/expensivest").json()["name"] == "Orange"
    assert seeded.get("/products/cheapest").json()["name"] == "Strawberry"


def test_integer_price_round_trips():
    reset()
    r = client.post("/products", json={"id": "i", "name": "Int", "price": 3})
    assert r.status_code == 201
    assert isinstance(r.json()["price"], int)
    assert '"price":3}' in client.get("/products/i").text


def test_malformed_json_body_message():
    r = client.post("/products", content='{"id": "1", "name": ',
                    headers={"Content-Type": "application/json"})
    assert r.status_code == 400
    assert r.json() == {"error": "malformed JSON body"}


def test_failed_request_line_is_logged(caplog):
    broken = TestClient(create_app(store=BrokenStore(), settings=Settings(SEED_PRODUCTS=False)),
                        raise_server_exceptions=False)
    with caplog.at_level(logging.INFO, logger="catalog.main"):
        broken.get("/products/count")
    assert "GET /products/count -> 500" in caplog.text
