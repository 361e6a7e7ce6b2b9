# storefront/repos/session_repo.py
from typing import Any, Dict

from storefront.repos.store import KeyValueStore
from storefront.utils.logging import get_logger

logger = get_logger(__name__)

TOKEN_KEY = "token"
USER_KEY = "user"


class SessionRepo:
    """Auth token and user record, kept side by side in the local store."""

    def __init__(self, store: KeyValueStore):
        self.store = store

    def get_token(self) -> str | None:
        token = self.store.get(TOKEN_KEY)
        return token if isinstance(token, str) and token else None

    def get_user(self) -> Dict[str, Any] | None:
        try:
            user = self.store.get(USER_KEY)
        except ValueError as e:
            logger.warning(f"Stored user record is not valid JSON ({e}), clearing session")
            self.clear()
            return None

        if user is None:
            return None

        if not isinstance(user, dict):
            logger.warning("Stored user record is not an object, clearing session")
            self.clear()
            return None

        return user

    def save(self, token: str, user: Dict[str, Any]) -> None:
        self.store.set(TOKEN_KEY, token)
        self.store.set(USER_KEY, user)

    def clear(self) -> None:
        self.store.delete(TOKEN_KEY)
        self.store.delete(USER_KEY)
