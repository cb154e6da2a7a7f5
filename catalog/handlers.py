from typing import Any, Dict, List, Union
from fastapi import HTTPException

from .core import page_offset, parse_product, pick_median
from .database import ProductStore
from .logging_config import get_logger

# This file contains the core logic for all product endpoints.
# Every function takes the store explicitly; nothing is kept between calls.

logger = get_logger(__name__)

NO_PRODUCTS_MSG = "No products found"
NOT_FOUND_MSG = "Product not found"


def list_products_logic(store: ProductStore, page_index: int, page_size: int,
                        sort_field: str, sort: str) -> Dict[str, Any]:
    offset = page_offset(page_index, page_size)
    # two separate reads; totalCount may lag the page under concurrent writes
    total = store.count()
    page = store.list_page(offset, page_size, sort_field, descending=(sort == "desc"))
    return {
        "totalCount": total,
        "pageIndex": page_index,
        "pageSize": page_size,
        "products": [p.to_dict() for p in page],
    }


def extreme_product_logic(store: ProductStore, most_expensive: bool) -> Dict[str, Any]:
    p = store.first_by_price(descending=most_expensive)
    if p is None:
        raise HTTPException(status_code=404, detail=NO_PRODUCTS_MSG)
    return p.to_dict()


def median_product_logic(store: ProductStore) -> Union[Dict[str, Any], List[Dict[str, Any]]]:
    ordered = store.all_by_price()
    if not ordered:
        raise HTTPException(status_code=404, detail=NO_PRODUCTS_MSG)
    median = pick_median(ordered)
    if isinstance(median, list):
        return [p.to_dict() for p in median]
    return median.to_dict()


def count_products_logic(store: ProductStore) -> Dict[str, int]:
    return {"count": store.count()}


def create_product_logic(store: ProductStore, payload: Any) -> Dict[str, Any]:
    product = parse_product(payload)
    stored = store.upsert(product)
    logger.info("Upserted product %s", stored.id)
    return stored.to_dict()


def get_product_logic(store: ProductStore, product_id: str) -> Dict[str, Any]:
    p = store.get(product_id)
    if p is None:
        raise HTTPException(status_code=404, detail=NOT_FOUND_MSG)
    return p.to_dict()


def delete_product_logic(store: ProductStore, product_id: str) -> Dict[str, str]:
    if store.get(product_id) is None:
        raise HTTPException(status_code=404, detail=NOT_FOUND_MSG)
    store.delete(product_id)
    logger.info("Deleted product %s", product_id)
    return {"message": "Product deleted"}


def delete_all_products_logic(store: ProductStore) -> Dict[str, str]:
    removed = store.delete_all()
    logger.info("Deleted all products (%d removed)", removed)
    return {"message": "All products deleted"}


def seed_products(store: ProductStore, rows: List[Dict[str, Any]]) -> int:
    for row in rows:
        store.upsert(parse_product(row))
    logger.info("Seeded %d products", len(rows))
    return len(rows)
