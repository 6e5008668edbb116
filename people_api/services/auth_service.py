# type: ignore
# pyright: reportMissingImports=false, reportGeneralTypeErrors=false
"""Authentication service — registration, credential checks and token issuance."""
from typing import Any, Dict, Optional

from people_api.core.config import settings
from people_api.core.logging import get_logger
from people_api.core.security import TokenService, hash_password, verify_password
from people_api.metrics import LOGIN_ATTEMPTS
from people_api.repositories.user_repository import UserRepository

logger = get_logger(__name__)


class AuthService:
    def __init__(self, repo: UserRepository, tokens: TokenService):
        self._repo = repo
        self._tokens = tokens

    def register(self, username: str, password: str, role: str) -> Dict[str, Any]:
        if self._repo.get_by_username(username) is not None:
            raise ValueError(f"Username '{username}' is already taken")
        user = self._repo.create(username, hash_password(password), role)
        logger.info("User registered username=%s role=%s", username, role)
        return {"id": user["id"], "username": user["username"], "role": user["role"]}

    def provision_admin(self, username: str, password: str) -> Dict[str, Any]:
        """Create the bootstrap Admin if it does not exist yet; an existing account is left alone."""
        existing = self._repo.get_by_username(username)
        if existing is not None:
            return {"id": existing["id"], "username": existing["username"], "role": existing["role"]}
        user = self._repo.create(username, hash_password(password), settings.ADMIN_ROLE)
        logger.info("Bootstrap admin provisioned username=%s", username)
        return {"id": user["id"], "username": user["username"], "role": user["role"]}

    def login(self, username: str, password: str) -> Optional[str]:
        """Return a signed access token, or ``None`` for bad credentials."""
        user = self._repo.get_by_username(username)
        if user is None or not verify_password(password, user["password_hash"]):
            LOGIN_ATTEMPTS.labels(result="rejected").inc()
            logger.warning("Rejected login for username=%s", username)
            return None
        LOGIN_ATTEMPTS.labels(result="accepted").inc()
        return self._tokens.create_access_token(user["username"], user["role"])
