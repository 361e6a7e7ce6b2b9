# storefront/api/state.py
from dataclasses import dataclass

from fastapi import Request

from storefront.repos.cart_repo import CartRepo
from storefront.repos.session_repo import SessionRepo
from storefront.repos.store import KeyValueStore, build_store
from storefront.services.admin_service import AdminService
from storefront.services.api_client import StorefrontClient
from storefront.services.auth_service import AuthService
from storefront.services.cart_service import CartService
from storefront.services.menu_service import MenuService
from storefront.services.order_poller import OrderPoller
from storefront.services.order_service import OrderService
from storefront.services.response_cache import ResponseCache


@dataclass
class AppState:
    """
    Everything the views share, built once per app and handed to the
    routers through get_state. No module-level globals.
    """

    store: KeyValueStore
    client: StorefrontClient
    auth: AuthService
    cart: CartService
    menu: MenuService
    orders: OrderService
    admin: AdminService
    poller: OrderPoller


def build_state(
    store: KeyValueStore | None = None,
    client: StorefrontClient | None = None,
    cache_ttl: int | None = None,
    poll_interval: float | None = None,
) -> AppState:
    store = store or build_store()
    client = client or StorefrontClient()

    auth = AuthService(client, SessionRepo(store))
    cart = CartService(CartRepo(store))
    admin = AdminService(client, auth)

    return AppState(
        store=store,
        client=client,
        auth=auth,
        cart=cart,
        menu=MenuService(client, auth, ResponseCache(store, ttl=cache_ttl)),
        orders=OrderService(client, auth, cart),
        admin=admin,
        poller=OrderPoller(admin, is_active=auth.is_admin, interval=poll_interval),
    )


def get_state(request: Request) -> AppState:
    return request.app.state.storefront
