import logging

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from src.app.common.exceptions import StorageFailure
from src.app.common.utils.consts import InteractionKind, SubjectType
from src.app.v1.interaction.repository.interaction_repository import InteractionRepository

logger = logging.getLogger(__name__)


class FeedService:
    def __init__(self, interaction_repository: InteractionRepository | None = None):
        self.interaction_repository = interaction_repository or InteractionRepository()

    async def annotate(
        self,
        session: AsyncSession,
        subject_type: SubjectType,
        items: list[dict],
        viewer_id: int | None,
    ) -> list[dict]:
        """각 item(dict, "id" 포함)에 is_liked / is_saved 추가

        익명 사용자는 쿼리 없이 모두 False, 로그인 사용자는 페이지 전체를
        IN (...) 쿼리 한 번으로 조회한 뒤 메모리에서 매핑한다.
        """
        if viewer_id is None or not items:
            for item in items:
                item["is_liked"] = False
                item["is_saved"] = False
            return items

        try:
            found = await self.interaction_repository.find_viewer_interactions(
                session, viewer_id, subject_type, {item["id"] for item in items}
            )
        except SQLAlchemyError as e:
            logger.exception(f"Failed to annotate {len(items)} {subject_type.value} items for user {viewer_id}")
            raise StorageFailure() from e

        for item in items:
            item["is_liked"] = (item["id"], InteractionKind.LIKE) in found
            item["is_saved"] = (item["id"], InteractionKind.SAVE) in found
        return items
