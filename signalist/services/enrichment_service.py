"""관심종목 시세 보강 서비스.

저장된 관심종목마다 시세/기업 프로필을 동시에 조회해 표시용 레코드로 합친다.
한 종목의 조회 실패는 해당 종목만 기본값으로 대체하고 나머지는 계속 처리한다.
"""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass
from datetime import datetime, timezone

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from signalist.config import settings
from signalist.gateway.base import AbstractMarketDataGateway, SymbolNotFoundError
from signalist.models.watchlist import WatchlistItem
from signalist.schemas.common import DataStatus
from signalist.schemas.watchlist import EnrichedWatchlistItem
from signalist.services.watchlist_service import WatchlistService
from signalist.web.formatters import (
    NOT_AVAILABLE,
    format_change,
    format_market_cap,
    format_price,
)

logger = logging.getLogger(__name__)


@dataclass
class MarketSnapshot:
    """종목별 시세 조회 결과. status가 LIVE가 아니면 수치는 모두 0."""

    status: DataStatus
    current_price: float = 0.0
    change_percent: float = 0.0
    market_cap: float = 0.0

    @property
    def is_live(self) -> bool:
        return self.status == DataStatus.LIVE


class WatchlistEnrichmentService:

    def __init__(
        self,
        session: AsyncSession,
        gateway: AbstractMarketDataGateway,
        concurrency: int | None = None,
    ):
        self.session = session
        self.gateway = gateway
        self.concurrency = max(1, concurrency or settings.enrichment_concurrency)

    async def get_user_watchlist(self, user_id: str | None) -> list[EnrichedWatchlistItem]:
        if not user_id:
            return []

        try:
            items = await WatchlistService(self.session).list_for_user(user_id)
        except SQLAlchemyError:
            logger.exception("관심종목 목록 조회 실패 user=%s", user_id)
            return []
        if not items:
            return []

        semaphore = asyncio.Semaphore(self.concurrency)
        snapshots = await asyncio.gather(
            *(self._fetch_snapshot(item.symbol, semaphore) for item in items)
        )
        # gather 결과는 입력 순서를 유지하므로 added_at 내림차순이 그대로 보존된다
        return [_build_item(item, snap) for item, snap in zip(items, snapshots)]

    async def _fetch_snapshot(self, symbol: str, semaphore: asyncio.Semaphore) -> MarketSnapshot:
        # 두 요청이 모두 끝난 뒤에 세마포어를 반납해야 동시 요청 수 제한이 지켜진다
        async with semaphore:
            quote, profile = await asyncio.gather(
                self.gateway.get_quote(symbol),
                self.gateway.get_profile(symbol),
                return_exceptions=True,
            )

        if isinstance(quote, SymbolNotFoundError):
            logger.warning("시세 없음 (미상장 또는 잘못된 티커): %s", symbol)
            return MarketSnapshot(status=DataStatus.NOT_FOUND)
        for result in (quote, profile):
            if isinstance(result, BaseException):
                logger.warning("시세 조회 실패 %s: %s", symbol, result)
                return MarketSnapshot(status=DataStatus.UNAVAILABLE)

        return MarketSnapshot(
            status=DataStatus.LIVE,
            current_price=quote.current_price,
            change_percent=quote.change_percent,
            market_cap=profile.market_cap,
        )


def _build_item(item: WatchlistItem, snap: MarketSnapshot) -> EnrichedWatchlistItem:
    if snap.is_live:
        displays = {
            "price_display": format_price(snap.current_price),
            "change_display": format_change(snap.change_percent),
            "market_cap_display": format_market_cap(snap.market_cap),
        }
    else:
        displays = {
            "price_display": NOT_AVAILABLE,
            "change_display": NOT_AVAILABLE,
            "market_cap_display": NOT_AVAILABLE,
        }
    return EnrichedWatchlistItem(
        user_id=item.user_id,
        symbol=item.symbol,
        company=item.company,
        added_at=_as_utc(item.added_at),
        current_price=snap.current_price,
        change_percent=snap.change_percent,
        market_cap=snap.market_cap,
        data_status=snap.status,
        **displays,
    )


def _as_utc(dt: datetime) -> datetime:
    # SQLite는 tz 정보를 저장하지 않는다
    if dt.tzinfo is None:
        return dt.replace(tzinfo=timezone.utc)
    return dt
