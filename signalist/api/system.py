from __future__ import annotations

from fastapi import APIRouter

from signalist import __version__

router = APIRouter(tags=["system"])


@router.get(
    "/health",
    summary="헬스 체크",
    description="서버 구동 상태와 버전을 반환합니다.",
)
async def health():
    return {
        "status": "ok",
        "version": __version__,
    }
