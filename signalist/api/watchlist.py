from __future__ import annotations

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from signalist.api.deps import get_current_user_id, get_market_gateway
from signalist.database import get_session
from signalist.gateway.base import AbstractMarketDataGateway
from signalist.schemas.common import ActionResult
from signalist.schemas.watchlist import (
    EnrichedWatchlistItem,
    StockWithWatchlistStatus,
    WatchlistItemCreate,
    WatchlistStatusResponse,
)
from signalist.services.enrichment_service import WatchlistEnrichmentService
from signalist.services.membership_service import WatchlistMembershipService
from signalist.services.watchlist_service import normalize_symbol

router = APIRouter(prefix="/watchlist", tags=["watchlist"])


@router.get(
    "",
    response_model=list[EnrichedWatchlistItem],
    summary="관심종목 목록 (실시간 시세 포함)",
    description="최근 추가 순으로 관심종목을 반환하며, 각 종목에 현재가·변동률·시가총액을 붙입니다. "
                "시세 조회에 실패한 종목은 빠지지 않고 N/A 값으로 표시됩니다. 미인증 시 빈 목록입니다.",
)
async def get_user_watchlist(
    user_id: str | None = Depends(get_current_user_id),
    session: AsyncSession = Depends(get_session),
    gateway: AbstractMarketDataGateway = Depends(get_market_gateway),
):
    svc = WatchlistEnrichmentService(session, gateway)
    return await svc.get_user_watchlist(user_id)


@router.post(
    "",
    response_model=ActionResult,
    response_model_exclude_none=True,
    summary="관심종목 추가",
    description="이미 추가된 종목이면 변경 없이 성공을 반환합니다.",
)
async def add_to_watchlist(
    req: WatchlistItemCreate,
    user_id: str | None = Depends(get_current_user_id),
    session: AsyncSession = Depends(get_session),
):
    svc = WatchlistMembershipService(session, user_id)
    return await svc.add(req.symbol, req.company)


@router.post(
    "/status",
    response_model=list[StockWithWatchlistStatus],
    summary="종목 목록에 관심종목 여부 표시",
    description="입력 종목마다 is_in_watchlist를 채워 반환합니다. 미인증이거나 빈 목록이면 입력을 그대로 돌려줍니다.",
)
async def enrich_stocks_with_watchlist_status(
    stocks: list[StockWithWatchlistStatus],
    user_id: str | None = Depends(get_current_user_id),
    session: AsyncSession = Depends(get_session),
):
    svc = WatchlistMembershipService(session, user_id)
    return await svc.bulk_status(stocks)


@router.get(
    "/{symbol}/status",
    response_model=WatchlistStatusResponse,
    summary="관심종목 포함 여부",
)
async def is_stock_in_watchlist(
    symbol: str,
    user_id: str | None = Depends(get_current_user_id),
    session: AsyncSession = Depends(get_session),
):
    svc = WatchlistMembershipService(session, user_id)
    return WatchlistStatusResponse(
        symbol=normalize_symbol(symbol),
        is_in_watchlist=await svc.is_member(symbol),
    )


@router.delete(
    "/{symbol}",
    response_model=ActionResult,
    response_model_exclude_none=True,
    summary="관심종목 삭제",
    description="목록에 없는 종목이어도 성공을 반환합니다.",
)
async def remove_from_watchlist(
    symbol: str,
    user_id: str | None = Depends(get_current_user_id),
    session: AsyncSession = Depends(get_session),
):
    svc = WatchlistMembershipService(session, user_id)
    return await svc.remove(symbol)
