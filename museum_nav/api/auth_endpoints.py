"""Authentication endpoints: register, login, logout and current user."""

from typing import Any, Dict, Optional

from fastapi import APIRouter, Body, Depends, Request, Response, status

from museum_nav.core.dependencies import (
    ServiceContainer,
    extract_token,
    get_current_principal,
    get_service_container,
)
from museum_nav.core.security import Principal
from museum_nav.schemas.base import Envelope
from museum_nav.schemas.user import LoginResult, UserRead

router = APIRouter(prefix="/auth", tags=["auth"])


@router.post("/register", response_model=Envelope[UserRead], status_code=status.HTTP_201_CREATED)
async def register_user(
    payload: Optional[Dict[str, Any]] = Body(None),
    container: ServiceContainer = Depends(get_service_container),
):
    user = await container.auth_service.register(payload or {})
    return Envelope(success=True, data=UserRead.model_validate(user), message="User created successfully")


@router.post("/login", response_model=Envelope[LoginResult])
async def login_user(
    response: Response,
    payload: Optional[Dict[str, Any]] = Body(None),
    container: ServiceContainer = Depends(get_service_container),
):
    """
    Exchange username/password for a session token.

    The token is returned in the body and also set as an HTTP-only cookie.
    """
    result = await container.auth_service.login(payload or {})
    settings = container.settings
    response.set_cookie(
        key=settings.auth.cookie_name,
        value=result["token"],
        max_age=settings.auth.token_ttl_seconds,
        httponly=True,
        samesite="lax",
        secure=settings.is_production(),
    )
    return Envelope(
        success=True,
        data=LoginResult(user=UserRead.model_validate(result["user"]), token=result["token"]),
        message="Login successful",
    )


@router.post("/logout", response_model=Envelope)
async def logout_user(
    request: Request,
    response: Response,
    container: ServiceContainer = Depends(get_service_container),
):
    await container.auth_service.logout(extract_token(request))
    response.delete_cookie(container.settings.auth.cookie_name)
    return Envelope(success=True, message="Logout successful")


@router.get("/me", response_model=Envelope[UserRead])
async def get_current_user(
    principal: Principal = Depends(get_current_principal),
    container: ServiceContainer = Depends(get_service_container),
):
    user = await container.auth_service.get_user(principal.user_id)
    return Envelope(success=True, data=UserRead.model_validate(user), message="User retrieved successfully")
