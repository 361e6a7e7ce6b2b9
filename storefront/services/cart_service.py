# storefront/services/cart_service.py
import threading
from typing import Any, Dict, List, Tuple

from storefront.domain.cart import Cart, format_money
from storefront.domain.schemas import CartLine, OrderTotals
from storefront.repos.cart_repo import CartRepo
from storefront.utils.logging import get_logger

logger = get_logger(__name__)


class CartService:
    """
    Cart use cases on top of the Cart aggregator.
    Every command saves the whole line list, query (get_cart) only reads.
    """

    def __init__(self, repo: CartRepo):
        self.repo = repo
        self._lock = threading.Lock()
        self.cart = Cart(repo.load_lines())

    # =====================================================
    # QUERY
    # =====================================================
    def get_cart(self) -> Dict[str, Any]:
        with self._lock:
            return self._view()

    def lines(self):
        with self._lock:
            return self.cart.lines

    def totals(self):
        with self._lock:
            return self.cart.totals()

    def snapshot(self) -> Tuple[List[CartLine], OrderTotals]:
        """Lines and totals read under one lock, so they always match."""
        with self._lock:
            return self.cart.lines, self.cart.totals()

    def is_empty(self) -> bool:
        with self._lock:
            return len(self.cart) == 0

    # =====================================================
    # COMMANDS
    # =====================================================
    def add_product(self, product: Dict[str, Any] | CartLine, quantity: int = 1) -> Dict[str, Any]:
        with self._lock:
            line = self.cart.add(product, quantity)
            self._save()
            logger.info(f"Added {quantity} x {line.product_id} to cart, now {line.quantity}")
            return self._view()

    def remove_product(self, product_id: str) -> Dict[str, Any]:
        with self._lock:
            self.cart.remove(product_id)
            self._save()
            logger.info(f"Removed {product_id} from cart")
            return self._view()

    def update_quantity(self, product_id: str, quantity: int) -> Dict[str, Any]:
        with self._lock:
            self.cart.update_quantity(product_id, quantity)
            self._save()
            return self._view()

    def clear(self) -> Dict[str, Any]:
        with self._lock:
            self.cart.clear()
            self._save()
            logger.info("Cart cleared")
            return self._view()

    def remove_ordered(self, lines: List[CartLine]) -> Dict[str, Any]:
        with self._lock:
            self.cart.subtract(lines)
            self._save()
            logger.info(f"Removed {len(lines)} ordered line(s) from cart")
            return self._view()

    def _save(self) -> None:
        self.repo.save_lines(self.cart.lines)

    def _view(self) -> Dict[str, Any]:
        totals = self.cart.totals()
        return {
            "items": [
                {
                    "product_id": l.product_id,
                    "name": l.name,
                    "image": l.image,
                    "unit_price": l.unit_price,
                    "quantity": l.quantity,
                    "line_total": l.unit_price * l.quantity,
                }
                for l in self.cart.lines
            ],
            "item_count": self.cart.item_count(),
            "totals": totals,
            "display": {
                "items_price": format_money(totals.items_price),
                "tax_price": format_money(totals.tax_price),
                "shipping_price": format_money(totals.shipping_price),
                "total_price": format_money(totals.total_price),
            },
        }
