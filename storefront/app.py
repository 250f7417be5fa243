from __future__ import annotations

import logging
from typing import Any

from fastapi import Depends, FastAPI, HTTPException, Query, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from .auth.dependencies import get_current_user, require_admin, require_user
from .catalog.models import ProductCreate, ProductQuery, ProductUpdate
from .catalog.service import (
    create_product,
    delete_product,
    fetch_products,
    get_product,
    list_products,
    update_product,
)
from .commerce.cart import add_item, clear_cart, get_cart, remove_item, set_quantity
from .commerce.models import CartAddRequest, CartUpdateRequest, WishlistAddRequest
from .commerce.orders import checkout, get_order, list_orders
from .commerce.users import ensure_profile, get_profile, record_view
from .commerce.wishlist import (
    add_to_wishlist,
    clear_wishlist,
    get_wishlist,
    remove_from_wishlist,
)
from .config import DEFAULT_SETTINGS
from .llm.groq_client import generate_description
from .recommendations.models import AssistantRequest, DescriptionRequest
from .recommendations.quiz import score_products
from .recommendations.retrieval import get_recommendations
from .store.base import DocumentNotFoundError, DocumentStore
from .store.provider import get_store

logging.basicConfig(level=DEFAULT_SETTINGS.log_level)
logger = logging.getLogger(__name__)

app = FastAPI(title="Storefront API", version="1.0.0")
app.add_middleware(
    CORSMiddleware,
    allow_origins=DEFAULT_SETTINGS.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


def _ok(data: Any = None, *, count: int | None = None, message: str | None = None) -> dict:
    body: dict[str, Any] = {"success": True}
    if message is not None:
        body["message"] = message
    if count is not None:
        body["count"] = count
    if data is not None:
        body["data"] = data
    return body


# ── Error envelope ───────────────────────────────────────────────────────


@app.exception_handler(StarletteHTTPException)
async def http_error(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    return JSONResponse(
        status_code=exc.status_code,
        content={"success": False, "message": exc.detail},
        headers=getattr(exc, "headers", None),
    )


@app.exception_handler(RequestValidationError)
async def validation_error(request: Request, exc: RequestValidationError) -> JSONResponse:
    fields = sorted({str(err["loc"][-1]) for err in exc.errors() if err.get("loc")})
    message = "Invalid request"
    if fields:
        message = f"Missing or invalid fields: {', '.join(fields)}"
    return JSONResponse(
        status_code=400,
        content={"success": False, "message": message, "errors": jsonable_encoder(exc.errors())},
    )


@app.exception_handler(DocumentNotFoundError)
async def not_found_error(request: Request, exc: DocumentNotFoundError) -> JSONResponse:
    return JSONResponse(status_code=404, content={"success": False, "message": str(exc)})


@app.exception_handler(Exception)
async def unhandled_error(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("Unhandled error on %s %s", request.method, request.url.path)
    content: dict[str, Any] = {"success": False, "message": "Internal server error"}
    if DEFAULT_SETTINGS.expose_error_details:
        content["error"] = str(exc)
    return JSONResponse(status_code=500, content=content)


# ── Public endpoints ─────────────────────────────────────────────────────


@app.get("/health")
def health() -> dict[str, str]:
    return {"status": "ok"}


@app.get("/products")
def products(
    category: str | None = None,
    search: str | None = None,
    sort: str = "newest",
    limit: int = Query(default=DEFAULT_SETTINGS.default_page_size, ge=1),
    min_price: float | None = Query(default=None, alias="minPrice"),
    max_price: float | None = Query(default=None, alias="maxPrice"),
    store: DocumentStore = Depends(get_store),
) -> dict:
    query = ProductQuery(
        category=category,
        search=search,
        sort=sort,
        limit=limit,
        min_price=min_price,
        max_price=max_price,
    )
    items = list_products(store, query)
    return _ok(items, count=len(items))


@app.get("/products/{product_id}")
def product_detail(product_id: str, store: DocumentStore = Depends(get_store)) -> dict:
    product = get_product(store, product_id)
    if product is None:
        raise HTTPException(status_code=404, detail="Product not found")
    return _ok(product)


@app.get("/ai/recommendations")
def recommendations(
    product_id: str | None = Query(default=None, alias="productId"),
    limit: int = Query(default=8, ge=1, le=50),
    category: str | None = None,
    user: dict | None = Depends(get_current_user),
    store: DocumentStore = Depends(get_store),
) -> dict:
    profile = None
    if user:
        try:
            profile = get_profile(store, user["uid"])
            if profile is not None and product_id:
                record_view(store, user["uid"], product_id)
                history = profile.setdefault("browsing_history", [])
                if product_id not in history:
                    history.append(product_id)
        except Exception:
            logger.warning("User profile unavailable, using general recommendations", exc_info=True)
            profile = None

    candidates = fetch_products(
        store, category, limit=DEFAULT_SETTINGS.recommendation_pool_size,
    )
    items = get_recommendations(candidates, profile, product_id, limit)
    return _ok(items, count=len(items))


@app.post("/ai/description")
def description(body: DescriptionRequest) -> dict:
    text = generate_description(body.name, body.category, body.shortDescription)
    return _ok({"description": text})


@app.post("/ai/assistant")
def assistant(body: AssistantRequest, store: DocumentStore = Depends(get_store)) -> dict:
    pool = list_products(store, ProductQuery(limit=DEFAULT_SETTINGS.assistant_pool_size))
    picks = score_products(pool, body)[: body.limit]
    return _ok([p.model_dump() for p in picks], count=len(picks))


# ── Admin endpoints ──────────────────────────────────────────────────────


@app.post("/products", status_code=201)
def product_create(
    body: ProductCreate,
    user: dict = Depends(require_admin),
    store: DocumentStore = Depends(get_store),
) -> dict:
    product = create_product(store, body)
    return _ok(product, message="Product created successfully")


@app.put("/products/{product_id}")
def product_update(
    product_id: str,
    body: ProductUpdate,
    user: dict = Depends(require_admin),
    store: DocumentStore = Depends(get_store),
) -> dict:
    product = update_product(store, product_id, body)
    if product is None:
        raise HTTPException(status_code=404, detail="Product not found")
    return _ok(product, message="Product updated successfully")


@app.delete("/products/{product_id}")
def product_delete(
    product_id: str,
    user: dict = Depends(require_admin),
    store: DocumentStore = Depends(get_store),
) -> dict:
    if not delete_product(store, product_id):
        raise HTTPException(status_code=404, detail="Product not found")
    return _ok(message="Product deleted successfully")


# ── User endpoints ───────────────────────────────────────────────────────


@app.get("/users/me")
def me(user: dict = Depends(require_user), store: DocumentStore = Depends(get_store)) -> dict:
    return _ok(ensure_profile(store, user))


@app.get("/cart")
def cart(user: dict = Depends(require_user), store: DocumentStore = Depends(get_store)) -> dict:
    return _ok({"items": get_cart(store, user["uid"])})


@app.post("/cart")
def cart_add(
    body: CartAddRequest,
    user: dict = Depends(require_user),
    store: DocumentStore = Depends(get_store),
) -> dict:
    items = add_item(store, user["uid"], body.productId, body.quantity)
    if items is None:
        raise HTTPException(status_code=404, detail="Product not found")
    return _ok({"items": items})


@app.put("/cart/{product_id}")
def cart_update(
    product_id: str,
    body: CartUpdateRequest,
    user: dict = Depends(require_user),
    store: DocumentStore = Depends(get_store),
) -> dict:
    items = set_quantity(store, user["uid"], product_id, body.quantity)
    if items is None:
        raise HTTPException(status_code=404, detail="Product not in cart")
    return _ok({"items": items})


@app.delete("/cart/{product_id}")
def cart_remove(
    product_id: str,
    user: dict = Depends(require_user),
    store: DocumentStore = Depends(get_store),
) -> dict:
    return _ok({"items": remove_item(store, user["uid"], product_id)})


@app.delete("/cart")
def cart_clear(user: dict = Depends(require_user), store: DocumentStore = Depends(get_store)) -> dict:
    clear_cart(store, user["uid"])
    return _ok({"items": []}, message="Cart cleared")


@app.get("/wishlist")
def wishlist(user: dict = Depends(require_user), store: DocumentStore = Depends(get_store)) -> dict:
    return _ok(get_wishlist(store, user["uid"]))


@app.post("/wishlist")
def wishlist_add(
    body: WishlistAddRequest,
    user: dict = Depends(require_user),
    store: DocumentStore = Depends(get_store),
) -> dict:
    data = add_to_wishlist(store, user["uid"], body.productId)
    if data is None:
        raise HTTPException(status_code=404, detail="Product not found")
    return _ok(data)


@app.delete("/wishlist/{product_id}")
def wishlist_remove(
    product_id: str,
    user: dict = Depends(require_user),
    store: DocumentStore = Depends(get_store),
) -> dict:
    return _ok(remove_from_wishlist(store, user["uid"], product_id))


@app.delete("/wishlist")
def wishlist_clear(user: dict = Depends(require_user), store: DocumentStore = Depends(get_store)) -> dict:
    clear_wishlist(store, user["uid"])
    return _ok(message="Wishlist cleared")


@app.get("/orders")
def orders(
    limit: int = Query(default=10, ge=1, le=100),
    user: dict = Depends(require_user),
    store: DocumentStore = Depends(get_store),
) -> dict:
    items = list_orders(store, user["uid"], limit)
    return _ok(items, count=len(items))


@app.post("/orders", status_code=201)
def order_create(user: dict = Depends(require_user), store: DocumentStore = Depends(get_store)) -> dict:
    order = checkout(store, user["uid"])
    if order is None:
        raise HTTPException(status_code=400, detail="Cart is empty")
    return _ok(order, message="Order placed")


@app.get("/orders/{order_id}")
def order_detail(
    order_id: str,
    user: dict = Depends(require_user),
    store: DocumentStore = Depends(get_store),
) -> dict:
    order = get_order(store, user["uid"], order_id)
    if order is None:
        raise HTTPException(status_code=404, detail="Order not found")
    return _ok(order)


if __name__ == "__main__":
    import os

    import uvicorn

    uvicorn.run(app, host="0.0.0.0", port=int(os.getenv("PORT", "8000")))
