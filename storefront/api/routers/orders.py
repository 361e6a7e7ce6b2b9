# storefront/api/routers/orders.py
from typing import List

from fastapi import APIRouter, Depends

from storefront.api.errors import http_errors
from storefront.api.state import AppState, get_state
from storefront.domain.schemas import CheckoutIn, Order, PlacedOrderOut

router = APIRouter(prefix="/orders", tags=["orders"])


@router.post("/", response_model=PlacedOrderOut, status_code=201)
def place_order(payload: CheckoutIn | None = None, state: AppState = Depends(get_state)):
    """
    Submits the cart. On failure the cart stays as it was and the
    error message is meant to be shown to the user.
    """
    payload = payload or CheckoutIn()
    with http_errors():
        return state.orders.place_order(payload.payment_method, payload.shipping_address)


@router.get("/mine", response_model=List[Order])
def my_orders(state: AppState = Depends(get_state)):
    with http_errors():
        return state.orders.my_orders()
