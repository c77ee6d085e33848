"""Authentication API endpoints."""

from typing import Optional

from fastapi import APIRouter, Depends, Request, Response, status
from sqlalchemy.ext.asyncio import AsyncSession

from ..config import Settings
from ..core.redis_client import RedisClient
from ..core.schemas.auth import LoginRequest, TokenResponse
from ..core.schemas.common import MessageResponse
from ..core.services import AuthService
from ..database import get_db_session
from ..dependencies import get_app_settings, get_redis

router = APIRouter(prefix="/auth", tags=["authentication"])


def _set_refresh_cookie(response: Response, token: str, settings: Settings) -> None:
    response.set_cookie(
        key=settings.refresh_cookie_name,
        value=token,
        max_age=settings.refresh_token_expire_days * 24 * 3600,
        httponly=True,
        secure=settings.refresh_cookie_secure,
        samesite="none" if settings.refresh_cookie_secure else "lax",
    )


def _bearer_token(request: Request) -> Optional[str]:
    scheme, _, token = request.headers.get("authorization", "").partition(" ")
    return token if scheme.lower() == "bearer" and token else None


@router.post("", response_model=TokenResponse)
async def login(
    credentials: LoginRequest,
    response: Response,
    session: AsyncSession = Depends(get_db_session),
    settings: Settings = Depends(get_app_settings),
):
    """Login and get an access token; the refresh token is set as a cookie."""
    issue = await AuthService(session, settings=settings).login(credentials)
    _set_refresh_cookie(response, issue.refresh_token, settings)
    return issue.response


@router.get("/refresh", response_model=TokenResponse)
async def refresh(
    request: Request,
    response: Response,
    session: AsyncSession = Depends(get_db_session),
    settings: Settings = Depends(get_app_settings),
):
    """Exchange the refresh cookie for a new access token."""
    token = request.cookies.get(settings.refresh_cookie_name)
    issue = await AuthService(session, settings=settings).refresh(token)
    _set_refresh_cookie(response, issue.refresh_token, settings)
    return issue.response


@router.post("/logout", response_model=MessageResponse)
async def logout(
    request: Request,
    session: AsyncSession = Depends(get_db_session),
    settings: Settings = Depends(get_app_settings),
    redis_client: Optional[RedisClient] = Depends(get_redis),
):
    """Logout: revoke the refresh token and clear the cookie."""
    token = request.cookies.get(settings.refresh_cookie_name)
    service = AuthService(session, redis_client=redis_client, settings=settings)
    had_session = await service.logout(token, _bearer_token(request))
    if not had_session:
        return Response(status_code=status.HTTP_204_NO_CONTENT)

    response = Response(
        content=MessageResponse(message="Cookie cleared").model_dump_json(),
        media_type="application/json",
    )
    response.delete_cookie(
        key=settings.refresh_cookie_name,
        httponly=True,
        secure=settings.refresh_cookie_secure,
        samesite="none" if settings.refresh_cookie_secure else "lax",
    )
    return response
