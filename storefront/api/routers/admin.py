# storefront/api/routers/admin.py
from typing import List

from fastapi import APIRouter, Depends, Query, Request
from fastapi.concurrency import run_in_threadpool

from storefront.api.errors import http_errors
from storefront.api.state import AppState, get_state
from storefront.domain.schemas import (
    AdminOrderOut,
    DashboardStats,
    ImageIn,
    PriceIn,
    Product,
    ProductIn,
    ProductUpdate,
    StatusUpdateIn,
)

router = APIRouter(prefix="/admin", tags=["admin"])


def _with_actions(state: AppState, orders) -> List[dict]:
    return [
        {"order": o, "actions": state.admin.allowed_actions(o)}
        for o in orders
    ]


# =====================================================
# MENU
# =====================================================
@router.post("/menu", response_model=Product, status_code=201)
def create_menu_item(payload: ProductIn, state: AppState = Depends(get_state)):
    with http_errors():
        return state.menu.create_product(payload)


@router.put("/menu/{product_id}", response_model=Product)
def update_menu_item(product_id: str, payload: ProductUpdate, state: AppState = Depends(get_state)):
    with http_errors():
        return state.menu.update_product(product_id, payload)


@router.put("/menu/{product_id}/price", response_model=Product)
def update_menu_price(product_id: str, payload: PriceIn, state: AppState = Depends(get_state)):
    with http_errors():
        return state.menu.update_price(product_id, payload.price)


@router.delete("/menu/{product_id}", status_code=204)
def delete_menu_item(product_id: str, state: AppState = Depends(get_state)):
    with http_errors():
        state.menu.delete_product(product_id)


@router.post("/uploads", status_code=201)
async def upload_image(
    request: Request,
    filename: str = Query(..., min_length=1),
    state: AppState = Depends(get_state),
):
    """Raw image bytes in the body, forwarded to the asset host."""
    content = await request.body()
    content_type = request.headers.get("content-type", "application/octet-stream")
    with http_errors():
        url = await run_in_threadpool(state.menu.upload_image, filename, content, content_type)
    return {"url": url}


@router.post("/menu/{product_id}/images", status_code=201)
def add_menu_image(product_id: str, payload: ImageIn, state: AppState = Depends(get_state)):
    with http_errors():
        return state.menu.add_image(product_id, payload.url)


@router.delete("/menu/{product_id}/images/{image_index}")
def delete_menu_image(product_id: str, image_index: int, state: AppState = Depends(get_state)):
    with http_errors():
        return state.menu.delete_image(product_id, image_index)


# =====================================================
# ORDERS
# =====================================================
@router.get("/orders", response_model=List[AdminOrderOut])
def list_orders(
    page: int = Query(1, ge=1),
    limit: int = Query(100, ge=1, le=500),
    state: AppState = Depends(get_state),
):
    with http_errors():
        return _with_actions(state, state.admin.list_orders(page, limit))


@router.put("/orders/{order_id}/status", response_model=List[AdminOrderOut])
def update_order_status(order_id: str, payload: StatusUpdateIn, state: AppState = Depends(get_state)):
    """Returns the refetched order list, never a locally patched one."""
    with http_errors():
        return _with_actions(state, state.admin.update_status(order_id, payload.status))


@router.get("/dashboard", response_model=DashboardStats)
def dashboard(state: AppState = Depends(get_state)):
    with http_errors():
        return state.admin.dashboard()


@router.get("/pending")
def pending_orders(state: AppState = Depends(get_state)):
    with http_errors():
        state.auth.require_admin()
        if not state.poller.running:
            # polling disabled, count on demand
            return {"pending_orders": state.admin.pending_count()}
    return {"pending_orders": state.poller.pending_orders}
