# storefront/services/auth_service.py
import base64
import json
from typing import Any, Dict

from storefront.repos.session_repo import SessionRepo
from storefront.services.api_client import StorefrontClient
from storefront.utils.logging import get_logger

logger = get_logger(__name__)

DEFAULT_ROLE = "user"
ADMIN_ROLE = "admin"


class NotAuthenticatedError(PermissionError):
    pass


def decode_token(token: str) -> Dict[str, Any] | None:
    """
    Read the JWT payload without verifying it. Only used to pick a role
    for the UI, the backend verifies the token on every call.
    """
    parts = token.split(".")
    if len(parts) != 3:
        return None

    payload = parts[1] + "=" * (-len(parts[1]) % 4)
    try:
        decoded = json.loads(base64.urlsafe_b64decode(payload))
    except (ValueError, TypeError) as e:
        logger.warning(f"Error decoding token: {e}")
        return None

    return decoded if isinstance(decoded, dict) else None


class AuthService:
    def __init__(self, client: StorefrontClient, repo: SessionRepo):
        self.client = client
        self.repo = repo

    def register(self, email: str, password: str, name: str) -> Dict[str, Any]:
        data = self.client.register({"name": name, "email": email, "password": password})
        return self._start_session(data)

    def login(self, email: str, password: str) -> Dict[str, Any]:
        data = self.client.login({"email": email, "password": password})
        return self._start_session(data)

    def logout(self) -> None:
        self.repo.clear()
        logger.info("Session cleared")

    def _start_session(self, data: Dict[str, Any]) -> Dict[str, Any]:
        token = data.get("token")
        if not token:
            raise ValueError("Auth response did not contain a token")

        user = {k: v for k, v in data.items() if k != "token"}
        self.repo.save(token, user)
        logger.info(f"Logged in as {user.get('email', user.get('name', '?'))}")
        return self.current_user()

    # =====================================================
    # QUERY
    # =====================================================
    @property
    def token(self) -> str | None:
        return self.repo.get_token()

    def role(self) -> str:
        user = self.repo.get_user()
        if user and user.get("role"):
            return user["role"]

        token = self.token
        if token:
            decoded = decode_token(token) or {}
            return decoded.get("role") or DEFAULT_ROLE

        return DEFAULT_ROLE

    def is_admin(self) -> bool:
        return self.token is not None and self.role() == ADMIN_ROLE

    def current_user(self) -> Dict[str, Any]:
        token = self.token
        user = self.repo.get_user() if token else None
        return {
            "authenticated": token is not None and user is not None,
            "user": user,
            "role": self.role() if token else DEFAULT_ROLE,
        }

    def require_token(self) -> str:
        token = self.token
        if not token:
            raise NotAuthenticatedError("Please log in first")
        return token

    def require_admin(self) -> str:
        token = self.require_token()
        if self.role() != ADMIN_ROLE:
            raise PermissionError("Admin access required")
        return token
