# storefront/services/api_client.py
from typing import Any, Dict, List

import requests
from requests import RequestException

from storefront.utils.retry import http_retry
from storefront.utils.settings import STOREFRONT_API_URL, HTTP_TIMEOUT_SECONDS
from storefront.utils.logging import get_logger

logger = get_logger(__name__)


class ApiError(RuntimeError):
    """Remote storefront API answered with an error (or not at all)."""

    def __init__(self, message: str, status_code: int | None = None):
        super().__init__(message)
        self.message = message
        self.status_code = status_code


# transport errors surface as-is once the retries are used up
REMOTE_ERRORS = (ApiError, RequestException)


def _unwrap_list(data: Any, key: str) -> List[Dict[str, Any]]:
    # some endpoints return a bare list, others {"products": [...]}
    if isinstance(data, list):
        return data
    if isinstance(data, dict) and isinstance(data.get(key), list):
        return data[key]
    return []


class StorefrontClient:
    """
    Thin wrapper around the remote storefront REST API.
    One method per endpoint, no business logic.
    """

    def __init__(self, base_url: str | None = None, timeout: float | None = None):
        self.base_url = (base_url or STOREFRONT_API_URL).rstrip("/")
        self.timeout = timeout or HTTP_TIMEOUT_SECONDS

    def _request(
        self,
        method: str,
        path: str,
        error_message: str,
        token: str | None = None,
        **kwargs: Any,
    ) -> Any:
        url = f"{self.base_url}{path}"
        headers = kwargs.pop("headers", {})
        if token:
            headers["Authorization"] = f"Bearer {token}"

        logger.info(f"StorefrontClient {method} {url}")

        try:
            resp = requests.request(method, url, headers=headers, timeout=self.timeout, **kwargs)
        except (requests.ConnectionError, requests.Timeout):
            raise
        except RequestException as e:
            raise ApiError(f"{error_message}: {e}") from e

        if not resp.ok:
            raise ApiError(self._error_message(resp, error_message), resp.status_code)

        if not resp.content:
            return {}

        try:
            return resp.json()
        except ValueError as e:
            raise ApiError(f"{error_message}: response is not JSON", resp.status_code) from e

    @staticmethod
    def _error_message(resp: requests.Response, default: str) -> str:
        try:
            body = resp.json()
        except ValueError:
            return default
        if isinstance(body, dict) and body.get("message"):
            return str(body["message"])
        return default

    # =====================================================
    # AUTH
    # =====================================================
    def register(self, user_data: Dict[str, Any]) -> Dict[str, Any]:
        return self._request("POST", "/auth/register", "Registration failed", json=user_data)

    def login(self, credentials: Dict[str, Any]) -> Dict[str, Any]:
        return self._request("POST", "/auth/login", "Login failed", json=credentials)

    # =====================================================
    # PRODUCTS
    # =====================================================
    @http_retry()
    def get_products(self) -> List[Dict[str, Any]]:
        data = self._request("GET", "/api/products", "Failed to fetch products")
        return _unwrap_list(data, "products")

    @http_retry()
    def get_product(self, product_id: str) -> Dict[str, Any]:
        return self._request("GET", f"/api/products/{product_id}", "Failed to fetch product")

    def create_product(self, product_data: Dict[str, Any], token: str) -> Dict[str, Any]:
        return self._request(
            "POST", "/api/products", "Failed to create product", token=token, json=product_data
        )

    def update_product(self, product_id: str, updates: Dict[str, Any], token: str) -> Dict[str, Any]:
        return self._request(
            "PUT", f"/api/products/{product_id}", "Failed to update product", token=token, json=updates
        )

    def update_product_price(self, product_id: str, price: float, token: str) -> Dict[str, Any]:
        return self._request(
            "PUT",
            f"/api/products/{product_id}/price",
            "Failed to update price",
            token=token,
            json={"price": price},
        )

    def delete_product(self, product_id: str, token: str) -> Dict[str, Any]:
        return self._request(
            "DELETE", f"/api/products/{product_id}", "Failed to delete product", token=token
        )

    def upload_image(self, filename: str, content: bytes, content_type: str, token: str | None = None) -> Dict[str, Any]:
        return self._request(
            "POST",
            "/api/upload",
            "Image upload failed",
            token=token,
            files={"image": (filename, content, content_type)},
        )

    def add_image_to_product(self, product_id: str, image_url: str, token: str) -> Dict[str, Any]:
        return self._request(
            "POST",
            f"/api/products/{product_id}/images",
            "Failed to add image",
            token=token,
            json={"url": image_url},
        )

    def delete_image_from_product(self, product_id: str, image_index: int, token: str) -> Dict[str, Any]:
        return self._request(
            "DELETE",
            f"/api/products/{product_id}/images/{image_index}",
            "Failed to delete image",
            token=token,
        )

    # =====================================================
    # REVIEWS
    # =====================================================
    def add_review(self, product_id: str, review_data: Dict[str, Any], token: str | None) -> Dict[str, Any]:
        return self._request(
            "POST",
            f"/api/products/{product_id}/reviews",
            "Failed to add review",
            token=token,
            json=review_data,
        )

    def delete_review(self, product_id: str, review_id: str, token: str) -> Dict[str, Any]:
        return self._request(
            "DELETE",
            f"/api/products/{product_id}/reviews/{review_id}",
            "Failed to delete review",
            token=token,
        )

    # =====================================================
    # ORDERS
    # =====================================================
    def create_order(self, order_data: Dict[str, Any], token: str) -> Dict[str, Any]:
        # no retry here
        return self._request("POST", "/api/orders", "Failed to create order", token=token, json=order_data)

    @http_retry()
    def get_orders(self, token: str, page: int = 1, limit: int = 100) -> List[Dict[str, Any]]:
        data = self._request(
            "GET",
            "/api/orders",
            "Failed to fetch orders",
            token=token,
            params={"page": page, "limit": limit},
        )
        return _unwrap_list(data, "orders")

    @http_retry()
    def get_my_orders(self, token: str) -> List[Dict[str, Any]]:
        data = self._request("GET", "/api/orders/myorders", "Failed to fetch my orders", token=token)
        return _unwrap_list(data, "orders")

    def update_order_status(self, order_id: str, status: str, token: str) -> Dict[str, Any]:
        return self._request(
            "PUT",
            f"/api/orders/{order_id}/status",
            "Failed to update order status",
            token=token,
            json={"status": status},
        )

    @http_retry()
    def get_dashboard_stats(self, token: str) -> Dict[str, Any]:
        return self._request("GET", "/api/orders/stats", "Failed to fetch dashboard stats", token=token)
