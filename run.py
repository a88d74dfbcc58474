"""Entry point for the signalist watchlist service."""

import uvicorn

from signalist.config import settings

if __name__ == "__main__":
    uvicorn.run(
        "signalist.main:app",
        host=settings.host,
        port=settings.port,
        workers=1,
        log_level="info",
    )
