import logging
from typing import Iterable

from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.future import select

from src.app.v1.user.entity.user import User

logger = logging.getLogger(__name__)


class UserRepository:

    async def get_user_by_id(self, session: AsyncSession, user_id: int) -> User | None:
        return await session.get(User, user_id)

    async def get_users_by_ids(self, session: AsyncSession, user_ids: Iterable[int]) -> dict[int, User]:
        ids = set(user_ids)
        if not ids:
            return {}

        result = await session.execute(select(User).where(User.id.in_(ids)))
        users = {user.id: user for user in result.scalars().all()}

        missing = ids - users.keys()
        if missing:
            logger.warning(f"No user found for ids: {sorted(missing)}")
        return users
