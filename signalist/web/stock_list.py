"""인기 종목 하드코딩 리스트 — 검색어가 없을 때 기본 목록으로 사용.

그 외 종목 검색은 Finnhub /search를 사용한다.
"""

POPULAR_STOCK_SYMBOLS = [
    # Tech giants
    "AAPL",
    "MSFT",
    "GOOGL",
    "AMZN",
    "TSLA",
    "META",
    "NVDA",
    "NFLX",
    "ORCL",
    "CRM",
    # Growth / semis
    "ADBE",
    "INTC",
    "AMD",
    "PYPL",
    "UBER",
    "SHOP",
    "SPOT",
    "SNOW",
    "PLTR",
    "COIN",
]

# 기본 목록에 표시할 종목 수
DEFAULT_LIST_SIZE = 10
