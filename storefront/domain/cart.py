# storefront/domain/cart.py
from decimal import Decimal, ROUND_HALF_UP
from typing import Any, Dict, Iterable, List

from storefront.domain.schemas import CartLine, OrderTotals

TAX_RATE = Decimal("0.15")
FREE_SHIPPING_THRESHOLD = Decimal("100")
SHIPPING_FEE = Decimal("10")

_CENT = Decimal("0.01")


def compute_totals(lines: Iterable[CartLine]) -> OrderTotals:
    """
    itemsPrice = sum(price * qty), tax 15%, shipping free above 100.
    Full precision, rounding only in format_money.
    """
    lines = list(lines)
    items_price = sum((l.unit_price * l.quantity for l in lines), Decimal("0.00"))

    if not lines:
        return OrderTotals(
            items_price=items_price,
            tax_price=Decimal("0.00"),
            shipping_price=Decimal("0.00"),
            total_price=Decimal("0.00"),
        )

    tax_price = items_price * TAX_RATE
    shipping_price = Decimal("0.00") if items_price > FREE_SHIPPING_THRESHOLD else SHIPPING_FEE

    return OrderTotals(
        items_price=items_price,
        tax_price=tax_price,
        shipping_price=shipping_price,
        total_price=items_price + tax_price + shipping_price,
    )


def format_money(value: Decimal) -> str:
    return f"${Decimal(value).quantize(_CENT, rounding=ROUND_HALF_UP)}"


class Cart:
    """
    In-memory list of cart lines, at most one line per product id.
    No I/O here, persistence is CartService + CartRepo.
    """

    def __init__(self, lines: Iterable[CartLine] | None = None):
        self._lines: List[CartLine] = []
        for line in lines or []:
            self._merge(line.product_id, line, line.quantity)

    @property
    def lines(self) -> List[CartLine]:
        # copies, changes go through add/update_quantity
        return [l.model_copy() for l in self._lines]

    def __len__(self) -> int:
        return len(self._lines)

    def find(self, product_id: str) -> CartLine | None:
        for line in self._lines:
            if line.product_id == product_id:
                return line
        return None

    def add(self, product: Dict[str, Any] | CartLine, qty: int = 1) -> CartLine:
        if isinstance(qty, bool) or not isinstance(qty, (int, float, Decimal)) or qty <= 0:
            raise ValueError("Quantity must be a positive number")
        if int(qty) != qty:
            raise ValueError("Quantity must be a whole number")

        if isinstance(product, CartLine):
            template = product
        else:
            template = CartLine.from_product(product)

        return self._merge(template.product_id, template, int(qty))

    def _merge(self, product_id: str, template: CartLine, qty: int) -> CartLine:
        existing = self.find(product_id)
        if existing:
            existing.quantity += qty
            return existing

        line = template.model_copy(update={"quantity": qty})
        self._lines.append(line)
        return line

    def remove(self, product_id: str) -> None:
        self._lines = [l for l in self._lines if l.product_id != product_id]

    def update_quantity(self, product_id: str, qty: int) -> None:
        if qty <= 0:
            self.remove(product_id)
            return

        line = self.find(product_id)
        if line:
            line.quantity = int(qty)

    def clear(self) -> None:
        self._lines = []

    def subtract(self, lines: Iterable[CartLine]) -> None:
        """Take ordered lines out of the cart, keep anything added since."""
        for ordered in lines:
            line = self.find(ordered.product_id)
            if line is None:
                continue
            self.update_quantity(line.product_id, line.quantity - ordered.quantity)

    def item_count(self) -> int:
        return sum(l.quantity for l in self._lines)

    def totals(self) -> OrderTotals:
        return compute_totals(self._lines)
