"""공통 FastAPI 의존성: 현재 사용자, 게이트웨이, 내부 API 키."""

from __future__ import annotations

import secrets

from fastapi import Depends, Header, HTTPException, Request
from sqlalchemy.ext.asyncio import AsyncSession

from signalist.config import settings
from signalist.database import get_session
from signalist.gateway.base import AbstractMarketDataGateway
from signalist.gateway.factory import get_gateway
from signalist.services.session_service import SessionService


def _session_token(request: Request) -> str | None:
    token = request.cookies.get(settings.session_cookie_name)
    if token:
        return token
    auth = request.headers.get("authorization", "")
    scheme, _, value = auth.partition(" ")
    if scheme.lower() == "bearer" and value.strip():
        return value.strip()
    return None


async def get_current_user_id(
    request: Request,
    session: AsyncSession = Depends(get_session),
) -> str | None:
    """세션이 없거나 만료되었으면 None (에러 아님)."""
    return await SessionService(session).resolve_user_id(_session_token(request))


async def get_market_gateway() -> AbstractMarketDataGateway:
    return await get_gateway()


async def require_internal_key(x_internal_key: str = Header("")) -> None:
    if not settings.internal_api_key or not secrets.compare_digest(
        x_internal_key, settings.internal_api_key
    ):
        raise HTTPException(status_code=403, detail="Forbidden")
