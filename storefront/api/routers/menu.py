# storefront/api/routers/menu.py
from typing import List

from fastapi import APIRouter, Depends, Query

from storefront.api.errors import http_errors
from storefront.api.state import AppState, get_state
from storefront.domain.schemas import Product, ReviewIn

router = APIRouter(prefix="/menu", tags=["menu"])


@router.get("/", response_model=List[Product])
def list_menu(
    sort: str = Query("rating", pattern="^(rating|price_asc|price_desc)$"),
    state: AppState = Depends(get_state),
):
    with http_errors():
        return state.menu.list_products(sort)


@router.get("/{product_id}", response_model=Product)
def get_menu_item(product_id: str, state: AppState = Depends(get_state)):
    with http_errors():
        return state.menu.get_product(product_id)


@router.post("/{product_id}/reviews", status_code=201)
def add_review(product_id: str, payload: ReviewIn, state: AppState = Depends(get_state)):
    with http_errors():
        return state.menu.add_review(product_id, payload)


@router.delete("/{product_id}/reviews/{review_id}")
def delete_review(product_id: str, review_id: str, state: AppState = Depends(get_state)):
    with http_errors():
        return state.menu.delete_review(product_id, review_id)
