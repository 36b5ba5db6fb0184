import logging

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from src.app.common.exceptions import StorageFailure
from src.app.common.utils.consts import InteractionKind, SubjectType
from src.app.v1.comment.schema.responseDto import CommentResponse
from src.app.v1.interaction.entity.interaction import Interaction
from src.app.v1.interaction.service.feed_service import FeedService
from src.app.v1.interaction.service.interaction_service import InteractionService, ToggleResult
from src.app.v1.user.entity.user import User
from src.app.v1.user.repository.user_repository import UserRepository

logger = logging.getLogger(__name__)


class CommentService:
    def __init__(self):
        self.interaction_service = InteractionService()
        self.feed_service = FeedService(self.interaction_service.interaction_repository)
        self.user_repository = UserRepository()

    async def get_comments(
        self,
        session: AsyncSession,
        subject_type: SubjectType,
        subject_id: int,
        viewer_id: int | None,
    ) -> list[CommentResponse]:
        """댓글 조회 (최신순)"""
        comments = await self.interaction_service.list_for_subject(
            session, subject_type, subject_id, InteractionKind.COMMENT
        )
        if not comments:
            return []

        comment_ids = [comment.id for comment in comments]
        try:
            users = await self.user_repository.get_users_by_ids(session, {c.user_id for c in comments})
            likes = await self.interaction_service.interaction_repository.count_interactions_by_subject(
                session, SubjectType.COMMENT, comment_ids, InteractionKind.LIKE
            )
        except SQLAlchemyError as e:
            logger.exception(f"Failed to load comments of {subject_type.value} {subject_id}")
            raise StorageFailure() from e

        rows = [{"id": comment.id} for comment in comments]
        rows = await self.feed_service.annotate(session, SubjectType.COMMENT, rows, viewer_id)

        return [
            self._convert_to_response(comment, users.get(comment.user_id), likes.get(comment.id, 0), row["is_liked"])
            for comment, row in zip(comments, rows)
        ]

    async def create_comment(
        self,
        session: AsyncSession,
        user_id: int,
        subject_type: SubjectType,
        subject_id: int,
        content: str,
    ) -> CommentResponse:
        """댓글 생성"""
        comment = await self.interaction_service.add_comment(session, user_id, subject_type, subject_id, content)

        try:
            user = await self.user_repository.get_user_by_id(session, user_id)
        except SQLAlchemyError as e:
            logger.exception(f"Failed to load author of comment {comment.id}")
            raise StorageFailure() from e

        return self._convert_to_response(comment, user, 0, False)

    async def toggle_comment_like(self, session: AsyncSession, user_id: int, comment_id: int) -> ToggleResult:
        return await self.interaction_service.toggle(
            session, user_id, SubjectType.COMMENT, comment_id, InteractionKind.LIKE
        )

    def _convert_to_response(
        self,
        comment: Interaction,
        user: User | None,
        likes_count: int,
        is_liked: bool,
    ) -> CommentResponse:
        """댓글 데이터 변환"""
        return CommentResponse(
            id=comment.id,
            content=comment.payload,
            username=user.username if user else "Usuário",
            user_photo_url=user.profile_image if user else None,
            created_at=comment.created_at,
            user_id=comment.user_id,
            likes_count=likes_count,
            is_liked=is_liked,
        )
