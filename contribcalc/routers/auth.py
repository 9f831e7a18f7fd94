"""Authentication routes issuing and clearing access tokens."""
from __future__ import annotations

from fastapi import APIRouter, Depends, Form, HTTPException, status
from fastapi.responses import JSONResponse, Response

from contribcalc.core.log import get_logger
from contribcalc.core.security import (
    AuthenticatedUser,
    SecurityProvider,
    get_authenticated_user,
    get_security_provider,
)

LOGGER = get_logger(__name__)
router = APIRouter(prefix="/auth", tags=["auth"])


def get_security() -> SecurityProvider:
    return get_security_provider()


@router.post("/login")
async def login(
    username: str = Form(...),
    password: str = Form(...),
    security: SecurityProvider = Depends(get_security),
) -> Response:
    """Exchange credentials for a bearer token, also set as a cookie."""

    user = security.authenticate(username, password)
    if user is None:
        LOGGER.info("Invalid login attempt for %s", username)
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid username or password",
        )

    token = security.create_access_token(user)
    response = JSONResponse(
        {
            "access_token": token,
            "token_type": "bearer",
            "expires_in": security.token_ttl_seconds,
            "company_id": user.company_id,
        }
    )
    response.set_cookie(
        security.cookie_name,
        token,
        max_age=security.token_ttl_seconds,
        httponly=True,
        samesite="lax",
    )
    LOGGER.info("User %s logged in for company %s", user.username, user.company_id)
    return response


@router.get("/logout")
async def logout(security: SecurityProvider = Depends(get_security)) -> Response:
    """Clear the access token cookie."""

    response = JSONResponse({"success": True})
    response.delete_cookie(security.cookie_name)
    return response


@router.get("/me")
async def me(user: AuthenticatedUser = Depends(get_authenticated_user)) -> dict[str, str]:
    return {"username": user.username, "company_id": user.company_id}


__all__ = ["router"]
