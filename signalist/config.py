from __future__ import annotations

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    model_config = {"env_file": ".env", "env_file_encoding": "utf-8"}

    # Finnhub
    finnhub_api_key: str = ""
    finnhub_base_url: str = "https://finnhub.io/api/v1"
    finnhub_timeout: float = 10.0

    # 게이트웨이 클라이언트 TTL 캐시 (초)
    quote_cache_ttl: int = 60
    profile_cache_ttl: int = 3600
    search_cache_ttl: int = 1800
    gateway_cache_max_entries: int = 1024

    # Watchlist / search
    enrichment_concurrency: int = 8
    search_limit: int = 15

    # Auth (외부 인증 라이브러리가 발급한 세션 토큰)
    session_cookie_name: str = "signalist.session_token"
    internal_api_key: str = ""

    # Database
    database_url: str = "sqlite+aiosqlite:///./signalist.db"

    # Server
    host: str = "0.0.0.0"
    port: int = 8000


settings = Settings()
