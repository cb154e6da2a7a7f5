# catalog/main.py
from typing import Any, Literal, Optional

import uvicorn
from fastapi import APIRouter, Body, Depends, FastAPI, HTTPException, Query, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from .config import Settings, get_settings
from .core import MAX_OFFSET, SEED_PRODUCTS, page_offset
from .database import ProductStore, build_store
from .handlers import (
    count_products_logic, create_product_logic, delete_all_products_logic,
    delete_product_logic, extreme_product_logic, get_product_logic,
    list_products_logic, median_product_logic, seed_products,
)
from .logging_config import configure_logging, get_logger

logger = get_logger(__name__)


def get_store(request: Request) -> ProductStore:
    return request.app.state.store


# ---------------------------
# Product endpoints
# ---------------------------
router = APIRouter(prefix="/products", tags=["products"])


@router.get("")
def list_products(
    request: Request,
    page_index: int = Query(1, alias="pageIndex", ge=1),
    page_size: int = Query(10, alias="pageSize", ge=1),
    sort_field: Literal["name", "price"] = Query("name", alias="sortField"),
    sort: Literal["asc", "desc"] = Query("asc"),
    store: ProductStore = Depends(get_store),
):
    max_size = request.app.state.settings.MAX_PAGE_SIZE
    if page_size > max_size:
        raise HTTPException(status_code=400, detail=f"pageSize must be at most {max_size}")
    if page_offset(page_index, page_size) > MAX_OFFSET:
        raise HTTPException(status_code=400, detail="pageIndex is out of range")
    return list_products_logic(store, page_index, page_size, sort_field, sort)


# fixed paths must be registered before /{product_id}
@router.get("/expensivest")
def most_expensive_product(store: ProductStore = Depends(get_store)):
    return extreme_product_logic(store, most_expensive=True)


@router.get("/cheapest")
def cheapest_product(store: ProductStore = Depends(get_store)):
    return extreme_product_logic(store, most_expensive=False)


@router.get("/median")
def median_product(store: ProductStore = Depends(get_store)):
    return median_product_logic(store)


@router.get("/count")
def count_products(store: ProductStore = Depends(get_store)):
    return count_products_logic(store)


@router.get("/{product_id}")
def get_product(product_id: str, store: ProductStore = Depends(get_store)):
    return get_product_logic(store, product_id)


@router.post("", status_code=201)
def create_product(payload: Any = Body(None), store: ProductStore = Depends(get_store)):
    return create_product_logic(store, payload)


@router.delete("/{product_id}")
def delete_product(product_id: str, store: ProductStore = Depends(get_store)):
    return delete_product_logic(store, product_id)


@router.delete("")
def delete_all_products(store: ProductStore = Depends(get_store)):
    return delete_all_products_logic(store)


# ---------------------------
# Error rendering: every failure is {"error": message}
# ---------------------------
async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    return JSONResponse(status_code=exc.status_code, content={"error": exc.detail},
                        headers=getattr(exc, "headers", None))


async def validation_exception_handler(request: Request, exc: RequestValidationError):
    err = exc.errors()[0]
    if err.get("type") == "json_invalid":
        return JSONResponse(status_code=400, content={"error": "malformed JSON body"})
    field = ".".join(
        str(p) for p in err.get("loc", ())
        if not isinstance(p, int) and p not in ("query", "body", "path")
    )
    msg = f"invalid {field}: {err['msg']}" if field else err["msg"]
    return JSONResponse(status_code=400, content={"error": msg})


async def unhandled_exception_handler(request: Request, exc: Exception):
    logger.exception("Unhandled error on %s %s", request.method, request.url.path)
    return JSONResponse(status_code=500, content={"error": "Internal server error"})


def create_app(store: Optional[ProductStore] = None, settings: Optional[Settings] = None) -> FastAPI:
    settings = settings or get_settings()
    configure_logging(settings.LOG_LEVEL)

    app = FastAPI(title="Product Catalog Service", version="1.0.0")
    app.state.settings = settings
    app.state.store = store if store is not None else build_store(settings)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.middleware("http")
    async def log_requests(request: Request, call_next):
        try:
            response = await call_next(request)
        except Exception:
            logger.info("%s %s -> 500", request.method, request.url.path)
            raise
        logger.info("%s %s -> %d", request.method, request.url.path, response.status_code)
        return response

    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(Exception, unhandled_exception_handler)

    app.include_router(router)

    @app.get("/health")
    def health():
        return {"status": "ok", "backend": app.state.store.name}

    if settings.SEED_PRODUCTS:
        seed_products(app.state.store, SEED_PRODUCTS)

    return app


app = create_app()

if __name__ == "__main__":
    settings = get_settings()
    uvicorn.run(app, host=settings.HOST, port=settings.PORT)
