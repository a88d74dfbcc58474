"""관심종목 표시용 문자열 포맷터.

값이 0이면 데이터 없음으로 보고 "N/A"를 반환한다.
"""

from __future__ import annotations

NOT_AVAILABLE = "N/A"


def format_price(price: float) -> str:
    if price > 0:
        return f"${price:.2f}"
    return NOT_AVAILABLE


def format_change(change_percent: float) -> str:
    if change_percent != 0:
        sign = "+" if change_percent > 0 else ""
        return f"{sign}{change_percent:.2f}%"
    return NOT_AVAILABLE


def format_market_cap(market_cap: float) -> str:
    """시가총액(백만 USD)을 십억 단위 문자열로 변환."""
    if market_cap > 0:
        return f"${market_cap / 1000:.2f}B"
    return NOT_AVAILABLE
