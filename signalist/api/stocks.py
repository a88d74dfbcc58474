from __future__ import annotations

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from signalist.api.deps import get_current_user_id, get_market_gateway
from signalist.database import get_session
from signalist.gateway.base import AbstractMarketDataGateway
from signalist.schemas.watchlist import StockWithWatchlistStatus
from signalist.services.membership_service import WatchlistMembershipService
from signalist.services.search_service import StockSearchService

router = APIRouter(prefix="/stocks", tags=["stocks"])


@router.get(
    "/search",
    response_model=list[StockWithWatchlistStatus],
    summary="종목 검색",
    description="검색어가 비어 있으면 인기 종목 10개를, 아니면 Finnhub 심볼 검색 결과를 반환합니다. "
                "로그인 상태라면 각 종목의 관심종목 여부가 함께 표시됩니다.",
)
async def search_stocks(
    q: str = "",
    user_id: str | None = Depends(get_current_user_id),
    session: AsyncSession = Depends(get_session),
    gateway: AbstractMarketDataGateway = Depends(get_market_gateway),
):
    stocks = await StockSearchService(gateway).search(q)
    return await WatchlistMembershipService(session, user_id).bulk_status(stocks)
