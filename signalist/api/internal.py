"""세션 없이 호출되는 내부 협력자(알림 작업 등)용 엔드포인트."""

from __future__ import annotations

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from signalist.api.deps import require_internal_key
from signalist.database import get_session
from signalist.services.membership_service import WatchlistMembershipService

router = APIRouter(
    prefix="/internal",
    tags=["internal"],
    dependencies=[Depends(require_internal_key)],
)


@router.get(
    "/watchlist-symbols",
    response_model=list[str],
    summary="이메일로 관심종목 심볼 조회",
    description="X-Internal-Key 헤더가 필요합니다. 알 수 없는 이메일이면 빈 목록을 반환합니다.",
)
async def get_watchlist_symbols_by_email(
    email: str,
    session: AsyncSession = Depends(get_session),
):
    svc = WatchlistMembershipService(session, None)
    return await svc.list_symbols_by_email(email)
