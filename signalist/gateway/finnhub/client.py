"""Finnhub HTTP client with bounded in-memory TTL cache."""

from __future__ import annotations

import logging
import time
from typing import Any

import httpx

from signalist.config import settings

logger = logging.getLogger(__name__)

_CacheKey = tuple[str, tuple[tuple[str, str], ...]]


class FinnhubClient:
    """Low-level HTTP client for the Finnhub REST API."""

    def __init__(
        self,
        api_key: str | None = None,
        base_url: str | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
        cache_size: int | None = None,
    ):
        self._api_key = api_key if api_key is not None else settings.finnhub_api_key
        self._base_url = base_url or settings.finnhub_base_url
        self._transport = transport
        self._client: httpx.AsyncClient | None = None
        self._cache_size = max(1, cache_size or settings.gateway_cache_max_entries)
        # {(path, params): (payload, timestamp, ttl)}, 삽입 순서가 곧 오래된 순
        self._cache: dict[_CacheKey, tuple[Any, float, int]] = {}

    async def open(self):
        self._client = httpx.AsyncClient(
            base_url=self._base_url,
            timeout=settings.finnhub_timeout,
            transport=self._transport,
        )

    async def close(self):
        if self._client:
            await self._client.aclose()
            self._client = None

    async def get(self, path: str, params: dict[str, str], ttl: int = 0) -> Any:
        """GET 요청. ttl > 0이면 만료 전까지 캐시된 응답을 반환한다."""
        key = (path, tuple(sorted(params.items())))
        now = time.monotonic()

        cached = self._cache.get(key)
        if ttl > 0 and cached and (now - cached[1]) < ttl:
            return cached[0]

        if not self._api_key:
            raise RuntimeError("FINNHUB_API_KEY is not configured")
        if not self._client:
            await self.open()

        resp = await self._client.get(path, params={**params, "token": self._api_key})
        if not resp.is_success:
            logger.error("Finnhub GET 오류 [%s] %s: %s", resp.status_code, path, resp.text)
        resp.raise_for_status()
        data = resp.json()

        if ttl > 0:
            self._store(key, data, now, ttl)
        return data

    def _store(self, key: _CacheKey, data: Any, now: float, ttl: int) -> None:
        """만료 항목을 정리한 뒤 저장. 최대 개수를 넘으면 가장 오래된 항목부터 제거."""
        expired = [k for k, (_, ts, k_ttl) in self._cache.items() if now - ts >= k_ttl]
        for k in expired:
            del self._cache[k]

        self._cache.pop(key, None)
        while len(self._cache) >= self._cache_size:
            del self._cache[next(iter(self._cache))]
        self._cache[key] = (data, now, ttl)
