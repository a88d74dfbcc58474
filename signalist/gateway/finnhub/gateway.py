"""Finnhub market data gateway."""

from __future__ import annotations

import logging

from signalist.config import settings
from signalist.gateway.base import (
    AbstractMarketDataGateway,
    CompanyProfile,
    Quote,
    SearchHit,
    SymbolNotFoundError,
)
from signalist.gateway.finnhub import endpoints as ep
from signalist.gateway.finnhub.client import FinnhubClient

logger = logging.getLogger(__name__)


def _to_float(value) -> float:
    # Finnhub은 값이 없을 때 null을 내려준다
    try:
        return float(value) if value is not None else 0.0
    except (TypeError, ValueError):
        return 0.0


class FinnhubGateway(AbstractMarketDataGateway):

    def __init__(self, client: FinnhubClient | None = None):
        self._client = client or FinnhubClient()

    async def connect(self) -> None:
        await self._client.open()
        logger.info("Finnhub gateway connected")

    async def disconnect(self) -> None:
        await self._client.close()

    async def get_quote(self, symbol: str) -> Quote:
        symbol = symbol.upper()
        data = await self._client.get(
            ep.QUOTE_PATH, {"symbol": symbol}, ttl=settings.quote_cache_ttl
        )
        if not isinstance(data, dict):
            raise ValueError(f"unexpected quote payload for {symbol}")
        price = _to_float(data.get("c"))
        # 미상장/오타 티커는 모든 필드가 0으로 온다
        if price == 0 and _to_float(data.get("pc")) == 0 and not data.get("t"):
            raise SymbolNotFoundError(symbol)
        return Quote(
            symbol=symbol,
            current_price=price,
            change_percent=_to_float(data.get("dp")),
        )

    async def get_profile(self, symbol: str) -> CompanyProfile:
        symbol = symbol.upper()
        data = await self._client.get(
            ep.PROFILE_PATH, {"symbol": symbol}, ttl=settings.profile_cache_ttl
        )
        if not isinstance(data, dict):
            raise ValueError(f"unexpected profile payload for {symbol}")
        return CompanyProfile(
            symbol=data.get("ticker") or symbol,
            name=data.get("name") or "",
            exchange=data.get("exchange") or "",
            market_cap=_to_float(data.get("marketCapitalization")),
        )

    async def search(self, query: str) -> list[SearchHit]:
        data = await self._client.get(
            ep.SEARCH_PATH, {"q": query}, ttl=settings.search_cache_ttl
        )
        results = data.get("result", []) if isinstance(data, dict) else []
        return [
            SearchHit(
                symbol=item["symbol"].upper(),
                name=item.get("description") or item["symbol"],
                exchange=item.get("displaySymbol") or "US",
                type=item.get("type") or "Stock",
            )
            for item in results
            if item.get("symbol")
        ]
