"""테스트 공통 설정: 인메모리 SQLite 세션, 로그인 사용자, 가짜 시세 게이트웨이."""

from __future__ import annotations

import asyncio
from datetime import timedelta

import pytest
from sqlalchemy import event
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine

from signalist.gateway.base import (
    AbstractMarketDataGateway,
    CompanyProfile,
    Quote,
    SearchHit,
    SymbolNotFoundError,
)
from signalist.models.base import Base, utcnow
from signalist.models.user import User, UserSession

SESSION_TOKEN = "tok-alice"


@pytest.fixture
async def session():
    """각 테스트마다 독립적인 인메모리 DB 세션 제공."""
    engine = create_async_engine("sqlite+aiosqlite://", echo=False)

    @event.listens_for(engine.sync_engine, "connect")
    def _set_pragmas(dbapi_conn, _):
        cursor = dbapi_conn.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    factory = async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)
    async with factory() as sess:
        yield sess

    await engine.dispose()


@pytest.fixture
async def user(session: AsyncSession) -> User:
    """유효한 세션 토큰을 가진 사용자 생성."""
    u = User(id="user-alice", email="alice@example.com", name="Alice")
    session.add(u)
    session.add(UserSession(
        token=SESSION_TOKEN,
        user_id=u.id,
        expires_at=utcnow() + timedelta(days=1),
    ))
    await session.commit()
    return u


class FakeGateway(AbstractMarketDataGateway):
    """심볼별 응답/실패/지연을 지정할 수 있는 테스트용 게이트웨이."""

    def __init__(
        self,
        quotes: dict[str, tuple[float, float]] | None = None,
        caps: dict[str, float] | None = None,
        failing: set[str] | None = None,
        missing: set[str] | None = None,
        delays: dict[str, float] | None = None,
        profile_delays: dict[str, float] | None = None,
        hits: list[SearchHit] | None = None,
    ):
        self.quotes = quotes or {}
        self.caps = caps or {}
        self.failing = failing or set()
        self.missing = missing or set()
        self.delays = delays or {}
        self.profile_delays = profile_delays or {}
        self.hits = hits or []
        self.calls: list[tuple[str, str]] = []
        # 진행 중인 심볼 수 (quote/profile 중 하나라도 대기 중이면 포함)
        self._in_flight: dict[str, int] = {}
        self.max_symbols_in_flight = 0

    async def connect(self) -> None:
        pass

    async def disconnect(self) -> None:
        pass

    async def _enter(self, kind: str, symbol: str, delay: float = 0.0) -> None:
        self.calls.append((kind, symbol))
        self._in_flight[symbol] = self._in_flight.get(symbol, 0) + 1
        self.max_symbols_in_flight = max(self.max_symbols_in_flight, len(self._in_flight))
        try:
            if delay:
                await asyncio.sleep(delay)
        finally:
            self._in_flight[symbol] -= 1
            if not self._in_flight[symbol]:
                del self._in_flight[symbol]
        if symbol in self.failing:
            raise ConnectionError(f"upstream down for {symbol}")

    async def get_quote(self, symbol: str) -> Quote:
        await self._enter("quote", symbol, self.delays.get(symbol, 0.0))
        if symbol in self.missing:
            raise SymbolNotFoundError(symbol)
        price, pct = self.quotes.get(symbol, (0.0, 0.0))
        return Quote(symbol=symbol, current_price=price, change_percent=pct)

    async def get_profile(self, symbol: str) -> CompanyProfile:
        delay = self.profile_delays.get(symbol, self.delays.get(symbol, 0.0))
        await self._enter("profile", symbol, delay)
        return CompanyProfile(
            symbol=symbol,
            name=f"{symbol} Inc",
            exchange="NASDAQ",
            market_cap=self.caps.get(symbol, 0.0),
        )

    async def search(self, query: str) -> list[SearchHit]:
        self.calls.append(("search", query))
        return list(self.hits)


@pytest.fixture
def gateway() -> FakeGateway:
    return FakeGateway()


@pytest.fixture
def make_gateway():
    return FakeGateway


@pytest.fixture
def session_token() -> str:
    return SESSION_TOKEN
