from fastapi.testclient import TestClient
from catalog.config import Settings
from catalog.database import InMemoryProductStore
from catalog.main import create_app
from sdk.pycatalog import CatalogClient

app = create_app(store=InMemoryProductStore(), settings=Settings(SEED_PRODUCTS=False))
c = CatalogClient(base_url="http://testserver", session=TestClient(app))


def test_sdk_round_trip():
    c.delete_all()
    assert c.most_expensive() is None
    assert c.median() is None

    c.create_product("1", "Apple", 10)
    c.create_product("2", "Orange", 20)
    c.create_product("3", "Lime", 30)

    assert c.count() == 3
    assert c.get_product("2") == {"id": "2", "name": "Orange", "price": 20}
    assert c.get_product("404") is None
    assert c.most_expensive()["id"] == "3"
    assert c.cheapest()["id"] == "1"
    assert c.median()["id"] == "2"

    page = c.list_products(page_index=1, page_size=2, sort_field="price", sort="desc")
    assert [p["id"] for p in page["products"]] == ["3", "2"]

    assert c.delete_product("1") is True
    assert c.delete_product("1") is False
    assert [p["price"] for p in c.median()] == [20, 30]


def test_iter_products_walks_every_page():
    c.delete_all()
    for i in range(7):
        c.create_product(str(i), f"n{i}", i)
    assert [p["id"] for p in c.iter_products(page_size=3)] == [str(i) for i in range(7)]


def test_ids_with_reserved_characters():
    c.delete_all()
    c.create_product("a?b#c", "Odd", 1)
    assert c.get_product("a?b#c")["id"] == "a?b#c"
    assert c.delete_product("a?b#c") is True
    assert c.get_product("a?b#c") is None
