"""종목 검색 서비스 (Finnhub 검색 + 인기 종목 기본 목록)."""

from __future__ import annotations

import asyncio
import logging

from signalist.config import settings
from signalist.gateway.base import AbstractMarketDataGateway
from signalist.schemas.watchlist import StockWithWatchlistStatus
from signalist.web.stock_list import DEFAULT_LIST_SIZE, POPULAR_STOCK_SYMBOLS

logger = logging.getLogger(__name__)


class StockSearchService:

    def __init__(self, gateway: AbstractMarketDataGateway, limit: int | None = None):
        self.gateway = gateway
        self.limit = limit or settings.search_limit

    async def search(self, query: str | None = None) -> list[StockWithWatchlistStatus]:
        """검색어가 없으면 인기 종목, 있으면 Finnhub 검색 결과를 반환한다."""
        query = (query or "").strip()
        try:
            if not query:
                return await self._popular_stocks()
            hits = await self.gateway.search(query)
        except Exception as e:
            logger.warning("종목 검색 실패 q=%r: %s", query, e)
            return []

        return [
            StockWithWatchlistStatus(
                symbol=hit.symbol, name=hit.name, exchange=hit.exchange, type=hit.type,
            )
            for hit in hits[: self.limit]
        ]

    async def _popular_stocks(self) -> list[StockWithWatchlistStatus]:
        symbols = POPULAR_STOCK_SYMBOLS[:DEFAULT_LIST_SIZE]
        profiles = await asyncio.gather(
            *(self.gateway.get_profile(s) for s in symbols),
            return_exceptions=True,
        )

        stocks = []
        for symbol, profile in zip(symbols, profiles):
            if isinstance(profile, BaseException):
                logger.warning("인기 종목 프로필 조회 실패 %s: %s", symbol, profile)
                continue
            stocks.append(StockWithWatchlistStatus(
                symbol=symbol,
                name=profile.name or symbol,
                exchange=profile.exchange or "US",
                type="Common Stock",
            ))
        return stocks
