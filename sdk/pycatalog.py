# sdk/pycatalog.py
import httpx
import requests
from urllib.parse import quote
from typing import Optional, Dict, Any, List, Union
from rich import print


class CatalogClient:
    def __init__(self, base_url: str = "http://localhost:8085", api_key: Optional[str] = None,
                 timeout: int = 10, session=None):
        self.base_url = base_url.rstrip("/")
        # any requests.Session compatible object works here (e.g. a FastAPI TestClient)
        self.session = session if session is not None else requests.Session()
        self.timeout = timeout
        if api_key:
            self.session.headers.update({"Authorization": f"Bearer {api_key}"})

    def _get_or_none(self, path: str):
        r = self.session.get(f"{self.base_url}{path}", timeout=self.timeout)
        # 404 means "nothing there" for lookups and aggregates
        if r.status_code == 404:
            return None
        r.raise_for_status()
        return r.json()

    # Listing
    def list_products(self, page_index: int = 1, page_size: int = 10,
                      sort_field: str = "name", sort: str = "asc") -> Dict[str, Any]:
        params = {"pageIndex": page_index, "pageSize": page_size, "sortField": sort_field, "sort": sort}
        r = self.session.get(f"{self.base_url}/products", params=params, timeout=self.timeout)
        r.raise_for_status()
        return r.json()

    def iter_products(self, page_size: int = 50, sort_field: str = "name", sort: str = "asc"):
        page_index = 1
        while True:
            page = self.list_products(page_index, page_size, sort_field, sort)
            yield from page["products"]
            if page_index * page_size >= page["totalCount"] or not page["products"]:
                return
            page_index += 1

    def count(self) -> int:
        r = self.session.get(f"{self.base_url}/products/count", timeout=self.timeout)
        r.raise_for_status()
        return r.json()["count"]

    # Aggregates
    def most_expensive(self) -> Optional[Dict[str, Any]]:
        return self._get_or_none("/products/expensivest")

    def cheapest(self) -> Optional[Dict[str, Any]]:
        return self._get_or_none("/products/cheapest")

    def median(self) -> Union[Dict[str, Any], List[Dict[str, Any]], None]:
        return self._get_or_none("/products/median")

    # Single products
    def get_product(self, product_id: str) -> Optional[Dict[str, Any]]:
        return self._get_or_none(f"/products/{quote(str(product_id), safe='')}")

    def create_product(self, product_id: str, name: str, price: Optional[float] = None) -> Dict[str, Any]:
        payload = {"id": product_id, "name": name, "price": price}
        r = self.session.post(f"{self.base_url}/products", json=payload, timeout=self.timeout)
        r.raise_for_status()
        return r.json()

    async def create_product_async(self, product_id: str, name: str, price: Optional[float] = None):
        payload = {"id": product_id, "name": name, "price": price}
        async with httpx.AsyncClient(timeout=self.timeout) as client:
            r = await client.post(f"{self.base_url}/products", json=payload)
            # do not r.raise_for_status() -- callers may want to inspect 400s
            return r

    def delete_product(self, product_id: str) -> bool:
        r = self.session.delete(f"{self.base_url}/products/{quote(str(product_id), safe='')}", timeout=self.timeout)
        if r.status_code == 404:
            return False
        r.raise_for_status()
        return True

    def delete_all(self) -> Dict[str, Any]:
        r = self.session.delete(f"{self.base_url}/products", timeout=self.timeout)
        r.raise_for_status()
        return r.json()


if __name__ == "__main__":
    import argparse
    import os

    parser = argparse.ArgumentParser(description="PyCatalog CLI")
    parser.add_argument("--base-url", default=os.getenv("CATALOG_URL", "http://127.0.0.1:8085"))
    subparsers = parser.add_subparsers(dest="command", required=True)

    lp = subparsers.add_parser("list-products", help="List one page of products")
    lp.add_argument("--page", type=int, default=1, help="1-based page index")
    lp.add_argument("--size", type=int, default=10, help="Page size")
    lp.add_argument("--sort-field", choices=["name", "price"], default="name")
    lp.add_argument("--sort", choices=["asc", "desc"], default="asc")

    gp = subparsers.add_parser("get-product", help="Get a product by its ID")
    gp.add_argument("--product-id", required=True)

    cp = subparsers.add_parser("create-product", help="Create or replace a product")
    cp.add_argument("--product-id", required=True)
    cp.add_argument("--name", required=True)
    cp.add_argument("--price", type=float)

    dp = subparsers.add_parser("delete-product", help="Delete a product by its ID")
    dp.add_argument("--product-id", required=True)

    subparsers.add_parser("delete-all", help="Delete every product")
    subparsers.add_parser("count", help="Count products")
    subparsers.add_parser("expensivest", help="Most expensive product")
    subparsers.add_parser("cheapest", help="Cheapest product")
    subparsers.add_parser("median", help="Median product(s) by price")

    args = parser.parse_args()
    c = CatalogClient(base_url=args.base_url)

    if args.command == "list-products":
        print(c.list_products(args.page, args.size, args.sort_field, args.sort))
    elif args.command == "get-product":
        print(c.get_product(args.product_id) or "[red]Product not found[/red]")
    elif args.command == "create-product":
        print(c.create_product(args.product_id, args.name, args.price))
    elif args.command == "delete-product":
        print("deleted" if c.delete_product(args.product_id) else "[red]Product not found[/red]")
    elif args.command == "delete-all":
        print(c.delete_all())
    elif args.command == "count":
        print(c.count())
    elif args.command == "expensivest":
        print(c.most_expensive() or "[yellow]No products found[/yellow]")
    elif args.command == "cheapest":
        print(c.cheapest() or "[yellow]No products found[/yellow]")
    elif args.command == "median":
        print(c.median() or "[yellow]No products found[/yellow]")
