# storefront/domain/order_status.py
"""
Order fulfilment states and the operator actions allowed from each one.

The backend owns every transition. Everything here only decides which
action buttons the operator gets to see, so a passing check is advisory.
"""
from enum import Enum
from typing import Any, Dict, List, Set


class OrderStatus(str, Enum):
    PLACED = "Placed"
    ACCEPTED = "Accepted"
    IN_KITCHEN = "In Kitchen"
    OUT_FOR_DELIVERY = "Out for Delivery"
    DELIVERED = "Delivered"
    REJECTED = "Rejected"
    CANCELLED = "Cancelled"


class InvalidTransitionError(ValueError):
    def __init__(self, current: OrderStatus, requested: OrderStatus):
        self.current = current
        self.requested = requested
        super().__init__(
            f"Order in status '{current.value}' cannot move to '{requested.value}'"
        )


FORWARD_SEQUENCE = (
    OrderStatus.PLACED,
    OrderStatus.ACCEPTED,
    OrderStatus.IN_KITCHEN,
    OrderStatus.OUT_FOR_DELIVERY,
    OrderStatus.DELIVERED,
)

# Rejected and Cancelled are both absorbing, shown and gated the same way
TERMINAL_STATUSES = frozenset(
    {OrderStatus.DELIVERED, OrderStatus.REJECTED, OrderStatus.CANCELLED}
)

ACTION_LABELS: Dict[OrderStatus, str] = {
    OrderStatus.ACCEPTED: "Accept",
    OrderStatus.REJECTED: "Reject",
    OrderStatus.IN_KITCHEN: "Send to Kitchen",
    OrderStatus.OUT_FOR_DELIVERY: "Out for Delivery",
    OrderStatus.DELIVERED: "Mark Delivered",
}


def is_terminal(status: OrderStatus) -> bool:
    return status in TERMINAL_STATUSES


def allowed_next_actions(current: OrderStatus) -> Set[OrderStatus]:
    """One forward step, plus Rejected only while the order is still Placed."""
    if is_terminal(current):
        return set()

    idx = FORWARD_SEQUENCE.index(current)
    allowed = {FORWARD_SEQUENCE[idx + 1]}

    if current is OrderStatus.PLACED:
        allowed.add(OrderStatus.REJECTED)

    return allowed


def apply(order: Any, next_status: OrderStatus) -> OrderStatus:
    """
    Check that `order` may move to `next_status`. Does not touch the order,
    the new status only exists once the backend has confirmed it.
    """
    current = order.status
    if next_status not in allowed_next_actions(current):
        raise InvalidTransitionError(current, next_status)
    return next_status


def parse_status(raw: Any, is_delivered: bool = False) -> OrderStatus:
    """
    Legacy orders were stored without a status field. Those count as
    Delivered when their isDelivered flag is set, otherwise as Placed.
    Anything else that is not a known status is rejected.
    """
    if isinstance(raw, OrderStatus):
        return raw

    if raw is None or (isinstance(raw, str) and not raw.strip()):
        return OrderStatus.DELIVERED if is_delivered else OrderStatus.PLACED

    if isinstance(raw, str):
        wanted = raw.strip().casefold()
        for status in OrderStatus:
            if status.value.casefold() == wanted:
                return status

    raise ValueError(f"Unknown order status: {raw!r}")


def is_pending(order: Any) -> bool:
    """New order waiting for the operator (drives the admin badge)."""
    return order.status is OrderStatus.PLACED and not order.is_delivered


def describe_actions(current: OrderStatus) -> List[dict]:
    # forward action first, reject last
    ordered = sorted(
        allowed_next_actions(current),
        key=lambda s: (s is OrderStatus.REJECTED, s.value),
    )
    return [{"status": s.value, "label": ACTION_LABELS[s]} for s in ordered]
