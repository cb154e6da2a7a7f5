import asyncio
import os
from sdk.pycatalog import CatalogClient


async def writer(client, product_id, name, price):
    resp = await client.create_product_async(product_id, name, price)
    if resp.status_code == 201:
        print(f"✅ wrote {product_id} at {price}")
    else:
        print(f"❌ {product_id} rejected ({resp.status_code}): {resp.json()}")


async def main():
    c = CatalogClient(base_url=os.getenv("CATALOG_URL", "http://127.0.0.1:8085"))
    c.delete_all()

    # Ten writers race on the same id; the store keeps exactly one document
    print("\n⚡ Concurrent upserts of a single id...")
    await asyncio.gather(*(writer(c, "42", "Widget", float(price)) for price in range(10)))
    print("📦 Stored:", c.get_product("42"))
    print("🔢 Count:", c.count())

    # Distinct ids all land
    print("\n⚡ Concurrent creates of distinct ids...")
    await asyncio.gather(*(writer(c, f"w{i}", f"Widget {i}", i * 1.5) for i in range(10)))
    print("🔢 Count:", c.count())
    print("⚖️ Median:", c.median())


if __name__ == "__main__":
    asyncio.run(main())
