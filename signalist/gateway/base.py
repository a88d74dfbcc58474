from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass


class SymbolNotFoundError(LookupError):
    """게이트웨이가 해당 티커의 시세를 알지 못할 때."""


@dataclass
class Quote:
    symbol: str
    current_price: float = 0.0
    change_percent: float = 0.0


@dataclass
class CompanyProfile:
    symbol: str
    name: str = ""
    exchange: str = ""
    market_cap: float = 0.0  # millions


@dataclass
class SearchHit:
    symbol: str
    name: str
    exchange: str = ""
    type: str = ""


class AbstractMarketDataGateway(ABC):
    """Market data abstraction over the external quote provider."""

    @abstractmethod
    async def connect(self) -> None:
        """Open the underlying HTTP client."""

    @abstractmethod
    async def disconnect(self) -> None:
        """Clean up resources."""

    @abstractmethod
    async def get_quote(self, symbol: str) -> Quote:
        """Point-in-time quote. Raises SymbolNotFoundError for unknown symbols."""

    @abstractmethod
    async def get_profile(self, symbol: str) -> CompanyProfile:
        """Company profile (market capitalization in millions)."""

    @abstractmethod
    async def search(self, query: str) -> list[SearchHit]:
        """Symbol lookup by free-text query."""
