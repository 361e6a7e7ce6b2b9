# storefront/services/order_service.py
from typing import Any, Dict, List

from storefront.domain.schemas import (
    CartLine,
    Order,
    OrderCreate,
    OrderItem,
    OrderTotals,
    ShippingAddress,
)
from storefront.services.api_client import StorefrontClient, REMOTE_ERRORS
from storefront.services.auth_service import AuthService
from storefront.services.cart_service import CartService
from storefront.utils.logging import get_logger

logger = get_logger(__name__)

DEFAULT_PAYMENT_METHOD = "PayPal"


class OrderSubmissionError(RuntimeError):
    """Shown to the user as-is. The cart is left alone so they can retry."""


def build_order_payload(
    lines: List[CartLine],
    totals: OrderTotals,
    payment_method: str,
    shipping_address: ShippingAddress,
) -> Dict[str, Any]:
    order = OrderCreate(
        order_items=[
            OrderItem(
                name=l.name,
                qty=l.quantity,
                image=l.image,
                price=l.unit_price,
                product=l.product_id,
            )
            for l in lines
        ],
        items_price=totals.items_price,
        tax_price=totals.tax_price,
        shipping_price=totals.shipping_price,
        total_price=totals.total_price,
        payment_method=payment_method,
        shipping_address=shipping_address,
    )
    return order.model_dump(mode="json", by_alias=True)


class OrderService:
    """
    Checkout and the customer's own order history.
    """

    def __init__(self, client: StorefrontClient, auth: AuthService, cart: CartService):
        self.client = client
        self.auth = auth
        self.cart = cart

    def place_order(
        self,
        payment_method: str = DEFAULT_PAYMENT_METHOD,
        shipping_address: ShippingAddress | None = None,
    ) -> Dict[str, Any]:
        """
        Use Case: submit the cart as an order.

        1. Needs a logged in user and a non-empty cart
        2. Sends lines + totals to the remote API (no retry)
        3. Removes the ordered lines only after the API confirmed the order
        """
        token = self.auth.require_token()

        lines, totals = self.cart.snapshot()
        if not lines:
            raise ValueError("Cart is empty")

        payload = build_order_payload(
            lines,
            totals,
            payment_method,
            shipping_address or ShippingAddress(),
        )

        try:
            created = self.client.create_order(payload, token)
        except REMOTE_ERRORS as e:
            logger.error(f"Order submission failed: {e}")
            raise OrderSubmissionError(f"Error placing order: {e}") from e

        order_id = None
        if isinstance(created, dict):
            order_id = created.get("_id") or created.get("id")

        if not order_id:
            logger.error(f"Order response without id: {created}")
            raise OrderSubmissionError("Error placing order: no order id in response")

        # only what was sent, lines added meanwhile stay for the next order
        self.cart.remove_ordered(lines)
        logger.info(f"Order {order_id} placed, total {payload['totalPrice']}")

        return {"order_id": str(order_id), "order": created}

    def my_orders(self) -> List[Order]:
        token = self.auth.require_token()
        orders = [Order.model_validate(o) for o in self.client.get_my_orders(token)]
        # newest first
        return list(reversed(orders))
