#!/usr/bin/env python
import os
from sdk.pycatalog import CatalogClient


def main():
    c = CatalogClient(base_url=os.getenv("CATALOG_URL", "http://127.0.0.1:8085"))

    # -----------------------------
    # Start from an empty catalog
    # -----------------------------
    print("Deleting all products...")
    print(c.delete_all())

    # -----------------------------
    # Create products
    # -----------------------------
    print("\nCreating products...")
    for pid, name, price in [("1", "Apple", 123.12), ("2", "Orange", 300.5),
                             ("3", "Lime", 200.1), ("11", "Strawberry", 100.13)]:
        print(c.create_product(pid, name, price))

    # -----------------------------
    # Upsert: same id replaces the document
    # -----------------------------
    print("\nRe-posting id 3 with a new price...")
    print(c.create_product("3", "Lime", 180.0))
    print("Count is still:", c.count())

    # -----------------------------
    # Listing, sorting, paging
    # -----------------------------
    print("\nFirst page by name:")
    print(c.list_products(page_index=1, page_size=2))
    print("\nSecond page by price, descending:")
    print(c.list_products(page_index=2, page_size=2, sort_field="price", sort="desc"))

    # -----------------------------
    # Aggregates
    # -----------------------------
    print("\nMost expensive:", c.most_expensive())
    print("Cheapest:", c.cheapest())
    print("Median (even count, two items):", c.median())

    # -----------------------------
    # Lookup and delete
    # -----------------------------
    print("\nGet product 1:", c.get_product("1"))
    print("Delete product 1:", c.delete_product("1"))
    print("Get product 1 again:", c.get_product("1"))
    print("Median (odd count):", c.median())


if __name__ == "__main__":
    main()
