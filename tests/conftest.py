import base64
import json
from copy import deepcopy

import pytest
from fastapi.testclient import TestClient

from storefront.api.state import build_state
from storefront.main import create_app
from storefront.repos.store import MemoryStore
from storefront.services.api_client import ApiError


def make_token(payload: dict) -> str:
    def enc(obj) -> str:
        raw = json.dumps(obj).encode()
        return base64.urlsafe_b64encode(raw).decode().rstrip("=")

    return f"{enc({'alg': 'HS256', 'typ': 'JWT'})}.{enc(payload)}.signature"


ADMIN_TOKEN = make_token({"id": "u-admin", "role": "admin"})
USER_TOKEN = make_token({"id": "u-1"})


class FakeStorefrontClient:
    """In-memory stand-in for the remote storefront API."""

    base_url = "http://fake-api"

    def __init__(self):
        self.products = {
            "p1": {"_id": "p1", "name": "Margherita", "price": 10, "image": "/img/p1.jpg", "rating": 4.5, "reviews": []},
            "p2": {"_id": "p2", "name": "Tiramisu", "price": 6.5, "image": "/img/p2.jpg", "reviews": []},
            "p3": {"_id": "p3", "name": "Lobster", "price": 75, "image": "/img/p3.jpg", "rating": 4.9, "reviews": []},
        }
        self.orders = []
        self.calls = []
        self.fail_create_order = None
        self.users = {
            "admin@example.com": {"_id": "u-admin", "name": "admin", "email": "admin@example.com", "role": "admin", "token": ADMIN_TOKEN},
            "jan@example.com": {"_id": "u-1", "name": "jan", "email": "jan@example.com", "role": "user", "token": USER_TOKEN},
        }

    # auth
    def register(self, user_data):
        self.calls.append(("register", user_data))
        if user_data["email"] in self.users:
            raise ApiError("User already exists", 400)
        user = {"_id": f"u-{len(self.users) + 1}", "name": user_data["name"], "email": user_data["email"], "role": "user", "token": USER_TOKEN}
        self.users[user_data["email"]] = user
        return dict(user)

    def login(self, credentials):
        self.calls.append(("login", credentials))
        user = self.users.get(credentials["email"])
        if not user or credentials["password"] != "secret":
            raise ApiError("Invalid email or password", 401)
        return dict(user)

    # products
    def get_products(self):
        self.calls.append(("get_products",))
        return deepcopy(list(self.products.values()))

    def get_product(self, product_id):
        self.calls.append(("get_product", product_id))
        if product_id not in self.products:
            raise ApiError("Product not found", 404)
        return deepcopy(self.products[product_id])

    def create_product(self, product_data, token):
        self.calls.append(("create_product", product_data, token))
        pid = f"p{len(self.products) + 1}"
        self.products[pid] = {"_id": pid, "reviews": [], **product_data}
        return deepcopy(self.products[pid])

    def update_product(self, product_id, updates, token):
        self.calls.append(("update_product", product_id, updates, token))
        self.products[product_id].update(updates)
        return deepcopy(self.products[product_id])

    def update_product_price(self, product_id, price, token):
        self.calls.append(("update_product_price", product_id, price, token))
        self.products[product_id]["price"] = price
        return deepcopy(self.products[product_id])

    def delete_product(self, product_id, token):
        self.calls.append(("delete_product", product_id, token))
        self.products.pop(product_id)
        return {"message": "Product removed"}

    def upload_image(self, filename, content, content_type, token=None):
        self.calls.append(("upload_image", filename, len(content), content_type))
        return {"url": f"https://assets.example.com/{filename}"}

    def add_image_to_product(self, product_id, image_url, token):
        self.calls.append(("add_image_to_product", product_id, image_url))
        self.products[product_id].setdefault("images", []).append(image_url)
        return deepcopy(self.products[product_id])

    def delete_image_from_product(self, product_id, image_index, token):
        self.calls.append(("delete_image_from_product", product_id, image_index))
        self.products[product_id].setdefault("images", []).pop(image_index)
        return deepcopy(self.products[product_id])

    # reviews
    def add_review(self, product_id, review_data, token):
        self.calls.append(("add_review", product_id, review_data, token))
        review = {"_id": f"r{len(self.products[product_id]['reviews']) + 1}", **review_data}
        self.products[product_id]["reviews"].append(review)
        return {"message": "Review added"}

    def delete_review(self, product_id, review_id, token):
        self.calls.append(("delete_review", product_id, review_id, token))
        reviews = self.products[product_id]["reviews"]
        self.products[product_id]["reviews"] = [r for r in reviews if r["_id"] != review_id]
        return {"message": "Review removed"}

    # orders
    def create_order(self, order_data, token):
        self.calls.append(("create_order", order_data, token))
        if self.fail_create_order:
            raise self.fail_create_order
        order = {"_id": f"o{len(self.orders) + 1}", "status": "Placed", "isPaid": False, "isDelivered": False, **order_data}
        self.orders.append(order)
        return deepcopy(order)

    def get_orders(self, token, page=1, limit=100):
        self.calls.append(("get_orders", page, limit))
        return deepcopy(self.orders)

    def get_my_orders(self, token):
        self.calls.append(("get_my_orders",))
        return deepcopy(self.orders)

    def update_order_status(self, order_id, status, token):
        self.calls.append(("update_order_status", order_id, status))
        for order in self.orders:
            if order["_id"] == order_id:
                order["status"] = status
                if status == "Delivered":
                    order["isDelivered"] = True
                return deepcopy(order)
        raise ApiError("Order not found", 404)

    def get_dashboard_stats(self, token):
        self.calls.append(("get_dashboard_stats",))
        return {
            "totalOrders": len(self.orders),
            "totalDelivered": sum(1 for o in self.orders if o.get("isDelivered")),
            "totalRevenue": sum(o.get("totalPrice", 0) for o in self.orders),
            "dateStats": [{"_id": "2026-10-19", "count": len(self.orders), "totalSales": 33.0}],
        }


@pytest.fixture()
def store():
    return MemoryStore()


@pytest.fixture()
def fake_api():
    return FakeStorefrontClient()


@pytest.fixture()
def state(store, fake_api):
    return build_state(store=store, client=fake_api, cache_ttl=60, poll_interval=0)


@pytest.fixture()
def login_as(state):
    def _login(email="jan@example.com"):
        return state.auth.login(email, "secret")

    return _login


@pytest.fixture()
def client(state):
    with TestClient(create_app(state)) as c:
        yield c
