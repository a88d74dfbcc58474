from __future__ import annotations

from fastapi import APIRouter

from signalist.api.system import router as system_router
from signalist.api.watchlist import router as watchlist_router
from signalist.api.stocks import router as stocks_router
from signalist.api.internal import router as internal_router

api_router = APIRouter()
api_router.include_router(system_router)
api_router.include_router(watchlist_router)
api_router.include_router(stocks_router)
api_router.include_router(internal_router)
