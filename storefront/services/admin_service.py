# storefront/services/admin_service.py
from typing import Any, Dict, List

from storefront.domain import order_status
from storefront.domain.order_status import OrderStatus
from storefront.domain.schemas import DashboardStats, Order
from storefront.services.api_client import StorefrontClient
from storefront.services.auth_service import AuthService
from storefront.utils.logging import get_logger

logger = get_logger(__name__)


class AdminService:
    """
    Operator view of orders. The server is the only source of truth:
    nothing is patched locally, every change is followed by a full refetch.
    """

    def __init__(self, client: StorefrontClient, auth: AuthService):
        self.client = client
        self.auth = auth

    def list_orders(self, page: int = 1, limit: int = 100) -> List[Order]:
        token = self.auth.require_admin()
        return [Order.model_validate(o) for o in self.client.get_orders(token, page, limit)]

    def get_order(self, order_id: str) -> Order:
        for order in self.list_orders():
            if order.id == order_id:
                return order
        raise LookupError(f"Order {order_id} not found")

    def allowed_actions(self, order: Order) -> List[Dict[str, str]]:
        return order_status.describe_actions(order.status)

    def update_status(self, order_id: str, next_status: OrderStatus) -> List[Order]:
        """
        Fire-and-confirm: check the move locally (advisory only), send it,
        then refetch the whole list.
        """
        order = self.get_order(order_id)
        order_status.apply(order, next_status)

        token = self.auth.require_admin()
        self.client.update_order_status(order_id, next_status.value, token)
        logger.info(f"Order {order_id}: {order.status.value} -> {next_status.value}")

        return self.list_orders()

    def dashboard(self) -> DashboardStats:
        token = self.auth.require_admin()
        return DashboardStats.model_validate(self.client.get_dashboard_stats(token))

    def pending_count(self, orders: List[Order] | None = None) -> int:
        if orders is None:
            orders = self.list_orders()
        return sum(1 for o in orders if order_status.is_pending(o))
