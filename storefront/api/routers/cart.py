# storefront/api/routers/cart.py
from fastapi import APIRouter, Depends

from storefront.api.errors import http_errors
from storefront.api.state import AppState, get_state
from storefront.domain.schemas import CartLine, CartOut, ItemIn, QuantityIn

router = APIRouter(prefix="/cart", tags=["cart"])


@router.get("/", response_model=CartOut)
def get_cart(state: AppState = Depends(get_state)):
    return state.cart.get_cart()


@router.post("/items", response_model=CartOut)
def add_item(payload: ItemIn, state: AppState = Depends(get_state)):
    with http_errors():
        # name and price always come from the menu, never from the caller
        product = state.menu.get_product(payload.product_id)
        return state.cart.add_product(CartLine.from_product(product), payload.quantity)


@router.put("/items/{product_id}", response_model=CartOut)
def update_item(product_id: str, payload: QuantityIn, state: AppState = Depends(get_state)):
    return state.cart.update_quantity(product_id, payload.quantity)


@router.delete("/items/{product_id}", response_model=CartOut)
def remove_item(product_id: str, state: AppState = Depends(get_state)):
    return state.cart.remove_product(product_id)


@router.delete("/", response_model=CartOut)
def clear_cart(state: AppState = Depends(get_state)):
    return state.cart.clear()
