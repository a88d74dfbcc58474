"""관심종목(watchlist) 저장소 서비스."""

from __future__ import annotations

from sqlalchemy import delete, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from signalist.models.base import utcnow
from signalist.models.user import User
from signalist.models.watchlist import WatchlistItem


def normalize_symbol(symbol: str) -> str:
    return symbol.strip().upper()


class WatchlistService:

    def __init__(self, session: AsyncSession):
        self.session = session

    async def get(self, user_id: str, symbol: str) -> WatchlistItem | None:
        result = await self.session.execute(
            select(WatchlistItem).where(
                WatchlistItem.user_id == user_id,
                WatchlistItem.symbol == normalize_symbol(symbol),
            )
        )
        return result.scalar_one_or_none()

    async def add(self, user_id: str, symbol: str, company: str) -> tuple[WatchlistItem, bool]:
        """종목 추가. (항목, 신규 생성 여부) 반환 — 이미 있으면 기존 항목을 그대로 돌려준다."""
        symbol = normalize_symbol(symbol)
        existing = await self.get(user_id, symbol)
        if existing is not None:
            return existing, False

        item = WatchlistItem(
            user_id=user_id,
            symbol=symbol,
            company=company.strip(),
            added_at=utcnow(),
        )
        self.session.add(item)
        try:
            await self.session.commit()
        except IntegrityError:
            # 동시 요청이 먼저 삽입한 경우 (user_id, symbol) 유니크 제약 위반
            await self.session.rollback()
            existing = await self.get(user_id, symbol)
            if existing is None:
                raise
            return existing, False
        return item, True

    async def remove(self, user_id: str, symbol: str) -> int:
        """종목 삭제. 삭제된 행 수 반환 (없으면 0)."""
        result = await self.session.execute(
            delete(WatchlistItem).where(
                WatchlistItem.user_id == user_id,
                WatchlistItem.symbol == normalize_symbol(symbol),
            )
        )
        await self.session.commit()
        return result.rowcount or 0

    async def list_for_user(self, user_id: str) -> list[WatchlistItem]:
        """최근 추가 순으로 정렬된 관심종목 목록."""
        result = await self.session.execute(
            select(WatchlistItem)
            .where(WatchlistItem.user_id == user_id)
            .order_by(WatchlistItem.added_at.desc(), WatchlistItem.id.desc())
        )
        return list(result.scalars().all())

    async def symbols_for_user(self, user_id: str) -> list[str]:
        result = await self.session.execute(
            select(WatchlistItem.symbol).where(WatchlistItem.user_id == user_id)
        )
        return list(result.scalars().all())

    async def find_user_id_by_email(self, email: str) -> str | None:
        result = await self.session.execute(
            select(User.id).where(User.email == email.strip())
        )
        return result.scalar_one_or_none()
