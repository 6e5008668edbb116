# type: ignore
# pyright: reportMissingImports=false, reportGeneralTypeErrors=false
"""Controller: Authentication — registration and login."""
from typing import Any, Dict, Optional

from fastapi import APIRouter, Depends, HTTPException

from people_api.core.config import settings
from people_api.core.dependencies import get_auth_service, get_optional_user
from people_api.schemas import LoginRequest, RegisterRequest, TokenOut, UserOut
from people_api.services.auth_service import AuthService

router = APIRouter(prefix="/api/v1", tags=["Auth"])


@router.post("/auth/register", status_code=201, response_model=UserOut)
def register(body: RegisterRequest, auth: AuthService = Depends(get_auth_service),
             caller: Optional[Dict[str, Any]] = Depends(get_optional_user)):
    """Self-registration creates ``User`` accounts; only an Admin may create another Admin."""
    if body.role == settings.ADMIN_ROLE:
        if caller is None:
            raise HTTPException(
                status_code=401,
                detail="Admin accounts can only be created by an authenticated Admin",
                headers={"WWW-Authenticate": "Bearer"},
            )
        if caller.get("role") != settings.ADMIN_ROLE:
            raise HTTPException(status_code=403, detail="Insufficient permissions")
    try:
        return UserOut(**auth.register(body.username, body.password, body.role))
    except ValueError as exc:
        raise HTTPException(status_code=409, detail=str(exc))


@router.post("/auth/login", response_model=TokenOut)
def login(body: LoginRequest, auth: AuthService = Depends(get_auth_service)):
    token = auth.login(body.username, body.password)
    if token is None:
        raise HTTPException(
            status_code=401,
            detail="Invalid credentials",
            headers={"WWW-Authenticate": "Bearer"},
        )
    return TokenOut(access_token=token)
