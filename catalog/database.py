import threading
from abc import ABC, abstractmethod
from typing import Dict, Any, List, Optional

import certifi
from pymongo import MongoClient, ASCENDING, DESCENDING

from .config import Settings
from .core import price_sort_key
from .logging_config import get_logger
from .models import Product

# This file holds the storage backends behind the HTTP layer.

logger = get_logger(__name__)


class ProductStore(ABC):
    """Everything the route handlers need from a products collection."""

    name = "abstract"

    @abstractmethod
    def count(self) -> int:
        ...

    @abstractmethod
    def list_page(self, offset: int, limit: int, sort_field: str = "name", descending: bool = False) -> List[Product]:
        ...

    @abstractmethod
    def first_by_price(self, descending: bool = False) -> Optional[Product]:
        ...

    @abstractmethod
    def all_by_price(self) -> List[Product]:
        ...

    @abstractmethod
    def get(self, product_id: str) -> Optional[Product]:
        ...

    @abstractmethod
    def upsert(self, product: Product) -> Product:
        ...

    @abstractmethod
    def delete(self, product_id: str) -> bool:
        """Remove one product. Returns False when the id was unknown."""

    @abstractmethod
    def delete_all(self) -> int:
        ...


class InMemoryProductStore(ProductStore):
    name = "memory"

    def __init__(self, products: Optional[List[Product]] = None):
        self._products: Dict[str, Product] = {}
        self._lock = threading.Lock()
        for p in products or []:
            self._products[p.id] = p

    def _sorted(self, sort_field: str, descending: bool) -> List[Product]:
        # sort by id first so equal keys keep a stable id order
        out = sorted(self._products.values(), key=lambda p: p.id)
        if sort_field == "price":
            key = price_sort_key
        else:
            key = lambda p: p.name
        return sorted(out, key=key, reverse=descending)

    def count(self) -> int:
        with self._lock:
            return len(self._products)

    def list_page(self, offset, limit, sort_field="name", descending=False):
        with self._lock:
            ordered = self._sorted(sort_field, descending)
        return ordered[offset:offset + limit]

    def first_by_price(self, descending=False):
        with self._lock:
            ordered = self._sorted("price", descending)
        return ordered[0] if ordered else None

    def all_by_price(self):
        with self._lock:
            return self._sorted("price", False)

    def get(self, product_id):
        with self._lock:
            return self._products.get(product_id)

    def upsert(self, product):
        with self._lock:
            self._products[product.id] = product
        return product

    def delete(self, product_id):
        with self._lock:
            return self._products.pop(product_id, None) is not None

    def delete_all(self):
        with self._lock:
            removed = len(self._products)
            self._products.clear()
        return removed


def _to_document(product: Product) -> Dict[str, Any]:
    return {"_id": product.id, "name": product.name, "price": product.price}


def _from_document(doc: Dict[str, Any]) -> Product:
    return Product(id=str(doc["_id"]), name=doc["name"], price=doc.get("price"))


class MongoProductStore(ProductStore):
    """Products kept as documents keyed by `_id` in a MongoDB collection."""

    name = "mongo"

    def __init__(self, collection):
        self.collection = collection

    def count(self):
        return self.collection.count_documents({})

    def list_page(self, offset, limit, sort_field="name", descending=False):
        direction = DESCENDING if descending else ASCENDING
        cursor = (
            self.collection.find({})
            .sort([(sort_field, direction), ("_id", ASCENDING)])
            .skip(offset)
            .limit(limit)
        )
        return [_from_document(d) for d in cursor]

    def first_by_price(self, descending=False):
        direction = DESCENDING if descending else ASCENDING
        cursor = self.collection.find({}).sort([("price", direction), ("_id", ASCENDING)]).limit(1)
        docs = list(cursor)
        return _from_document(docs[0]) if docs else None

    def all_by_price(self):
        cursor = self.collection.find({}).sort([("price", ASCENDING), ("_id", ASCENDING)])
        return [_from_document(d) for d in cursor]

    def get(self, product_id):
        doc = self.collection.find_one({"_id": product_id})
        return _from_document(doc) if doc else None

    def upsert(self, product):
        self.collection.replace_one({"_id": product.id}, _to_document(product), upsert=True)
        return product

    def delete(self, product_id):
        if self.collection.find_one({"_id": product_id}, {"_id": 1}) is None:
            return False
        self.collection.delete_one({"_id": product_id})
        return True

    def delete_all(self):
        # one server-side command; no ids travel over the wire
        result = self.collection.delete_many({})
        return result.deleted_count


def build_mongo_client(settings: Settings) -> MongoClient:
    uri = settings.mongo_url()
    kwargs: Dict[str, Any] = {"serverSelectionTimeoutMS": settings.MONGO_TIMEOUT_MS}
    if uri.startswith("mongodb+srv://") or "tls=true" in uri:
        kwargs["tlsCAFile"] = certifi.where()
    logger.info("Connecting to MongoDB at %s", settings.DB_HOST or "configured URI")
    return MongoClient(uri, **kwargs)


def build_store(settings: Settings) -> ProductStore:
    if settings.STORE_BACKEND == "mongo":
        client = build_mongo_client(settings)
        collection = client[settings.DB_NAME][settings.MONGO_COLLECTION]
        return MongoProductStore(collection)
    return InMemoryProductStore()
