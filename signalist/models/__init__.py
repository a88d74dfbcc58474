from signalist.models.user import User, UserSession
from signalist.models.watchlist import WatchlistItem
from signalist.models.base import Base

__all__ = [
    "Base",
    "User",
    "UserSession",
    "WatchlistItem",
]
