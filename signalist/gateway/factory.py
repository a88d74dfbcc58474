"""Gateway factory - a single shared market data gateway per process."""

from __future__ import annotations

from signalist.gateway.base import AbstractMarketDataGateway

_gateway: AbstractMarketDataGateway | None = None


async def get_gateway() -> AbstractMarketDataGateway:
    """Get or create the shared gateway instance."""
    global _gateway
    if _gateway is None:
        from signalist.gateway.finnhub.gateway import FinnhubGateway
        gateway = FinnhubGateway()
        await gateway.connect()
        _gateway = gateway
    return _gateway


async def close_gateway():
    global _gateway
    if _gateway is not None:
        await _gateway.disconnect()
        _gateway = None
