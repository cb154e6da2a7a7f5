from pydantic import ValidationError
from typing import Dict, Any, List, Union
from fastapi import HTTPException

from .models import Product

SORT_FIELDS = ("name", "price")
SORT_ORDERS = ("asc", "desc")

MISSING_FIELDS_MSG = "id and name are required"

# largest skip a document store accepts (signed 64-bit)
MAX_OFFSET = 2 ** 63 - 1

# Demo catalogue loaded when SEED_PRODUCTS is enabled
SEED_PRODUCTS: List[Dict[str, Any]] = [
    {"id": "1", "name": "Apple", "price": 123.12},
    {"id": "2", "name": "Orange", "price": 300.5},
    {"id": "3", "name": "Lime", "price": 200.1},
    {"id": "11", "name": "Strawberry", "price": 100.13},
]


def parse_product(payload: Any) -> Product:
    """
    Validate a raw JSON body into a Product.

    Raises HTTPException(400) before anything touches the store.
    """
    if not isinstance(payload, dict):
        raise HTTPException(status_code=400, detail="request body must be a JSON object")
    try:
        return Product(**payload)
    except ValidationError as e:
        errors = e.errors()
        if any(err["loc"] and err["loc"][0] in ("id", "name") for err in errors):
            raise HTTPException(status_code=400, detail=MISSING_FIELDS_MSG)
        first = errors[0]
        field = ".".join(str(p) for p in first["loc"]) or "body"
        raise HTTPException(status_code=400, detail=f"invalid {field}: {first['msg']}")


def page_offset(page_index: int, page_size: int) -> int:
    return (page_index - 1) * page_size


def pick_median(ordered: List[Product]) -> Union[Product, List[Product]]:
    """Middle element for odd counts, the two middle elements for even counts."""
    n = len(ordered)
    mid = n // 2
    if n % 2:
        return ordered[mid]
    return [ordered[mid - 1], ordered[mid]]


def price_sort_key(p: Product):
    # unpriced products sort first, like a null in the document store
    return (p.price is not None, p.price if p.price is not None else 0.0)
