# storefront/services/menu_service.py
from typing import Any, Dict, List

from storefront.domain.schemas import Product, ProductIn, ProductUpdate, ReviewIn
from storefront.services.api_client import StorefrontClient
from storefront.services.auth_service import AuthService
from storefront.services.response_cache import ResponseCache
from storefront.utils.logging import get_logger

logger = get_logger(__name__)

PRODUCTS_CACHE = "products"

SORT_KEYS = {
    "rating": (lambda p: p.rating or 0, True),
    "price_asc": (lambda p: p.price, False),
    "price_desc": (lambda p: p.price, True),
}


class MenuService:
    """Menu browsing, reviews and (for admins) menu management."""

    def __init__(self, client: StorefrontClient, auth: AuthService, cache: ResponseCache):
        self.client = client
        self.auth = auth
        self.cache = cache

    # =====================================================
    # QUERY
    # =====================================================
    def list_products(self, sort: str = "rating") -> List[Product]:
        if sort not in SORT_KEYS:
            raise ValueError(f"Unknown sort: {sort}")

        raw = self.cache.get_or_fetch(PRODUCTS_CACHE, self.client.get_products)
        products = [Product.model_validate(p) for p in raw]

        key, reverse = SORT_KEYS[sort]
        return sorted(products, key=key, reverse=reverse)

    def get_product(self, product_id: str) -> Product:
        return Product.model_validate(self.client.get_product(product_id))

    # =====================================================
    # REVIEWS
    # =====================================================
    def add_review(self, product_id: str, review: ReviewIn) -> Dict[str, Any]:
        # guests may post, the backend decides
        result = self.client.add_review(product_id, review.model_dump(), self.auth.token or "")
        self._invalidate()
        logger.info(f"Review ({review.rating}*) added to product {product_id}")
        return result

    def delete_review(self, product_id: str, review_id: str) -> Dict[str, Any]:
        token = self.auth.require_token()
        result = self.client.delete_review(product_id, review_id, token)
        self._invalidate()
        return result

    # =====================================================
    # ADMIN COMMANDS
    # =====================================================
    def create_product(self, payload: ProductIn) -> Product:
        token = self.auth.require_admin()
        created = self.client.create_product(payload.model_dump(mode="json", exclude_none=True), token)
        self._invalidate()
        logger.info(f"Menu item '{payload.name}' created")
        return Product.model_validate(created)

    def update_product(self, product_id: str, payload: ProductUpdate) -> Product:
        token = self.auth.require_admin()
        updates = payload.model_dump(mode="json", exclude_none=True)
        if not updates:
            raise ValueError("Nothing to update")

        updated = self.client.update_product(product_id, updates, token)
        self._invalidate()
        return Product.model_validate(updated)

    def update_price(self, product_id: str, price) -> Product:
        token = self.auth.require_admin()
        updated = self.client.update_product_price(product_id, float(price), token)
        self._invalidate()
        logger.info(f"Price of {product_id} set to {price}")
        return Product.model_validate(updated)

    def delete_product(self, product_id: str) -> None:
        token = self.auth.require_admin()
        self.client.delete_product(product_id, token)
        self._invalidate()
        logger.info(f"Menu item {product_id} deleted")

    def upload_image(self, filename: str, content: bytes, content_type: str) -> str:
        token = self.auth.require_admin()
        if not content:
            raise ValueError("Empty image")

        result = self.client.upload_image(filename, content, content_type, token)
        url = result.get("url") or result.get("imageUrl")
        if not url:
            raise ValueError("Upload response did not contain an image url")
        return url

    def add_image(self, product_id: str, image_url: str) -> Dict[str, Any]:
        token = self.auth.require_admin()
        result = self.client.add_image_to_product(product_id, image_url, token)
        self._invalidate()
        return result

    def delete_image(self, product_id: str, image_index: int) -> Dict[str, Any]:
        token = self.auth.require_admin()
        if image_index < 0:
            raise ValueError("Image index must be >= 0")

        result = self.client.delete_image_from_product(product_id, image_index, token)
        self._invalidate()
        return result

    def _invalidate(self) -> None:
        self.cache.invalidate(PRODUCTS_CACHE)
