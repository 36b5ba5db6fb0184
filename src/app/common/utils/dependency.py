import logging
from typing import AsyncGenerator

from fastapi import Depends
from fastapi.security import OAuth2PasswordBearer
from sqlalchemy.ext.asyncio import AsyncSession

from src.app.common.exceptions import Unauthenticated
from src.app.common.utils.security import verify_access_token
from src.config.database.postgresql import SessionLocal

logger = logging.getLogger(__name__)

# 세션 발급은 외부 인증 서비스 담당, 여기서는 Bearer 토큰 검증만 수행
oauth2_scheme = OAuth2PasswordBearer(tokenUrl="/api/auth/login", auto_error=False)


# DB 세션 의존성
async def get_session() -> AsyncGenerator[AsyncSession, None]:
    async with SessionLocal() as session:
        yield session


def _user_from_token(token: str) -> dict:
    payload = verify_access_token(token)

    user_id = payload.get("sub")
    if not user_id or not str(user_id).isdigit():
        logger.warning("Token payload without a valid subject")
        raise Unauthenticated()

    return {
        "access_token": token,
        "user_id": int(user_id),
    }


async def get_current_user(
    token: str | None = Depends(oauth2_scheme),
) -> dict:
    if not token:
        raise Unauthenticated()

    user = _user_from_token(token)
    logger.debug(f"User authenticated: user_id={user['user_id']}")
    return user


async def get_optional_user(
    token: str | None = Depends(oauth2_scheme),
) -> dict | None:
    """토큰이 없으면 익명 사용자(None)"""
    if not token:
        return None
    return _user_from_token(token)


def get_viewer_id(user: dict | None) -> int | None:
    return user.get("user_id") if user else None
