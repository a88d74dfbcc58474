"""관심종목 추가/삭제/포함 여부 서비스.

모든 연산은 예외를 밖으로 던지지 않는다. 미인증은 정상 결과(실패 응답,
False, 입력 그대로)로, 저장소 오류는 로그 후 안전한 기본값으로 변환한다.
"""

from __future__ import annotations

import logging

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from signalist.schemas.common import ActionResult
from signalist.schemas.watchlist import StockWithWatchlistStatus
from signalist.services.watchlist_service import WatchlistService, normalize_symbol

logger = logging.getLogger(__name__)

NOT_AUTHENTICATED = "Not authenticated"


class WatchlistMembershipService:

    def __init__(self, session: AsyncSession, user_id: str | None):
        self.session = session
        self.user_id = user_id
        self.store = WatchlistService(session)

    async def add(self, symbol: str, company: str) -> ActionResult:
        if not self.user_id:
            return ActionResult.fail(NOT_AUTHENTICATED)
        try:
            _, created = await self.store.add(self.user_id, symbol, company)
        except SQLAlchemyError:
            logger.exception("관심종목 추가 실패 user=%s symbol=%s", self.user_id, symbol)
            await self._rollback()
            return ActionResult.fail("Failed to add to watchlist")

        if not created:
            return ActionResult.ok("Already in watchlist")
        logger.info("관심종목 추가 user=%s symbol=%s", self.user_id, normalize_symbol(symbol))
        return ActionResult.ok("Added to watchlist")

    async def remove(self, symbol: str) -> ActionResult:
        if not self.user_id:
            return ActionResult.fail(NOT_AUTHENTICATED)
        try:
            await self.store.remove(self.user_id, symbol)
        except SQLAlchemyError:
            logger.exception("관심종목 삭제 실패 user=%s symbol=%s", self.user_id, symbol)
            await self._rollback()
            return ActionResult.fail("Failed to remove from watchlist")
        return ActionResult.ok("Removed from watchlist")

    async def is_member(self, symbol: str) -> bool:
        if not self.user_id:
            return False
        try:
            return await self.store.get(self.user_id, symbol) is not None
        except SQLAlchemyError:
            logger.exception("관심종목 조회 실패 user=%s symbol=%s", self.user_id, symbol)
            return False

    async def bulk_status(
        self, stocks: list[StockWithWatchlistStatus]
    ) -> list[StockWithWatchlistStatus]:
        """검색 결과에 is_in_watchlist 플래그를 붙인다. 미인증/빈 입력은 그대로 반환."""
        if not self.user_id or not stocks:
            return stocks
        try:
            owned = set(await self.store.symbols_for_user(self.user_id))
        except SQLAlchemyError:
            logger.exception("관심종목 상태 조회 실패 user=%s", self.user_id)
            return stocks
        return [
            stock.model_copy(update={"is_in_watchlist": normalize_symbol(stock.symbol) in owned})
            for stock in stocks
        ]

    async def list_symbols_by_email(self, email: str) -> list[str]:
        """세션 없이 이메일만 가진 외부 작업(알림 등)용 심볼 목록 조회."""
        if not email or not email.strip():
            return []
        try:
            user_id = await self.store.find_user_id_by_email(email)
            if not user_id:
                return []
            return await self.store.symbols_for_user(user_id)
        except SQLAlchemyError:
            logger.exception("이메일 기준 관심종목 조회 실패: %s", email)
            return []

    async def _rollback(self) -> None:
        try:
            await self.session.rollback()
        except SQLAlchemyError as e:
            logger.debug("롤백 실패: %s", e)
