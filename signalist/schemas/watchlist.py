from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, Field

from signalist.schemas.common import DataStatus


class WatchlistItemCreate(BaseModel):
    symbol: str = Field(..., min_length=1, max_length=20)
    company: str = Field(..., max_length=200)


class EnrichedWatchlistItem(BaseModel):
    user_id: str
    symbol: str = Field(..., description="티커 (대문자)")
    company: str = Field(..., description="추가 시점의 회사명")
    added_at: datetime
    current_price: float = Field(0.0, description="현재가 (USD)")
    change_percent: float = Field(0.0, description="전일 대비 변동률 (%)")
    market_cap: float = Field(0.0, description="시가총액 (백만 USD)")
    price_display: str = "N/A"
    change_display: str = "N/A"
    market_cap_display: str = "N/A"
    data_status: DataStatus = Field(DataStatus.UNAVAILABLE, description="시세 데이터 가용 상태")


class StockWithWatchlistStatus(BaseModel):
    symbol: str
    name: str
    exchange: str = ""
    type: str = ""
    is_in_watchlist: bool = False


class WatchlistStatusResponse(BaseModel):
    symbol: str
    is_in_watchlist: bool
