# storefront/repos/cart_repo.py
from typing import List

from pydantic import ValidationError

from storefront.domain.schemas import CartLine
from storefront.repos.store import KeyValueStore
from storefront.utils.logging import get_logger

logger = get_logger(__name__)

CART_KEY = "cart"


class CartRepo:
    def __init__(self, store: KeyValueStore):
        self.store = store

    def load_lines(self) -> List[CartLine]:
        try:
            raw = self.store.get(CART_KEY)
            if not raw:
                return []
            return [CartLine.model_validate(item) for item in raw]
        except (ValidationError, ValueError, TypeError) as e:
            # corrupt or old format, start over with an empty cart
            logger.warning(f"Discarding unreadable stored cart: {e}")
            self.store.delete(CART_KEY)
            return []

    def save_lines(self, lines: List[CartLine]) -> None:
        self.store.set(CART_KEY, [l.model_dump(mode="json") for l in lines])
