"""세션 토큰 → 사용자 ID 해석.

세션 발급/갱신은 외부 인증 라이브러리의 몫이고, 여기서는 조회만 한다.
"""

from __future__ import annotations

import logging
from datetime import timezone

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from signalist.models.base import utcnow
from signalist.models.user import UserSession

logger = logging.getLogger(__name__)


class SessionService:

    def __init__(self, session: AsyncSession):
        self.session = session

    async def resolve_user_id(self, token: str | None) -> str | None:
        """유효한 세션이면 사용자 ID, 아니면 None."""
        if not token:
            return None
        try:
            result = await self.session.execute(
                select(UserSession).where(UserSession.token == token)
            )
            user_session = result.scalar_one_or_none()
        except SQLAlchemyError:
            logger.exception("세션 조회 실패")
            return None

        if user_session is None:
            return None
        expires_at = user_session.expires_at
        # SQLite는 tz 정보를 저장하지 않는다
        if expires_at.tzinfo is None:
            expires_at = expires_at.replace(tzinfo=timezone.utc)
        if expires_at <= utcnow():
            return None
        return user_session.user_id
