# tests/test_concurrency.py
import asyncio
import httpx
from fastapi.testclient import TestClient
from catalog.config import Settings
from catalog.database import InMemoryProductStore
from catalog.main import create_app

app = create_app(store=InMemoryProductStore(), settings=Settings(SEED_PRODUCTS=False))
client = TestClient(app)


async def _create_task(product_id, price):
    transport = httpx.ASGITransport(app=app)
    async with httpx.AsyncClient(transport=transport, base_url="http://test") as ac:
        return await ac.post("/products", json={"id": product_id, "name": "racer", "price": price})


async def _run_all(jobs):
    return await asyncio.gather(*(_create_task(pid, price) for pid, price in jobs))


def test_concurrent_upserts_of_one_id_leave_one_document():
    client.delete("/products")
    results = asyncio.run(_run_all([("same", float(i)) for i in range(20)]))
    assert all(r.status_code == 201 for r in results)
    assert client.get("/products/count").json() == {"count": 1}
    assert client.get("/products/same").json()["price"] in [float(i) for i in range(20)]


def test_concurrent_distinct_creates_all_land():
    client.delete("/products")
    results = asyncio.run(_run_all([(f"id-{i}", float(i)) for i in range(20)]))
    assert all(r.status_code == 201 for r in results)
    assert client.get("/products/count").json() == {"count": 20}
