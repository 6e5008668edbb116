# type: ignore
# pyright: reportMissingImports=false, reportGeneralTypeErrors=false
"""FastAPI dependency injection wiring and auth guards."""
from typing import Any, Callable, Dict, Optional

from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from people_api.core.config import settings
from people_api.core.database import SessionLocal
from people_api.core.security import InvalidTokenError, TokenService
from people_api.repositories.person_repository import PersonRepository
from people_api.repositories.user_repository import UserRepository
from people_api.services.auth_service import AuthService
from people_api.services.person_service import PersonService

_person_repo = PersonRepository(SessionLocal)
_user_repo = UserRepository(SessionLocal)
_token_service = TokenService(settings)
_person_service = PersonService(_person_repo)
_auth_service = AuthService(_user_repo, _token_service)

_bearer = HTTPBearer(auto_error=False)


def get_person_repo() -> PersonRepository:
    return _person_repo


def get_person_service() -> PersonService:
    return _person_service


def get_auth_service() -> AuthService:
    return _auth_service


def get_token_service() -> TokenService:
    return _token_service


def get_optional_user(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(_bearer),
    tokens: TokenService = Depends(get_token_service),
) -> Optional[Dict[str, Any]]:
    """Claims of the bearer token when one is sent, else ``None``; a bad token is still a 401."""
    if credentials is None:
        return None
    return get_current_user(credentials, tokens)


def get_current_user(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(_bearer),
    tokens: TokenService = Depends(get_token_service),
) -> Dict[str, Any]:
    if credentials is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Not authenticated",
            headers={"WWW-Authenticate": "Bearer"},
        )
    try:
        return tokens.decode_access_token(credentials.credentials)
    except InvalidTokenError as exc:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=str(exc),
            headers={"WWW-Authenticate": "Bearer"},
        )


def require_role(role: str) -> Callable[..., Dict[str, Any]]:
    """Dependency factory: the caller's token must carry ``role``."""

    def _role_dependency(current_user: Dict[str, Any] = Depends(get_current_user)) -> Dict[str, Any]:
        if current_user.get("role") != role:
            raise HTTPException(
                status_code=status.HTTP_403_FORBIDDEN,
                detail="Insufficient permissions",
            )
        return current_user

    return _role_dependency
