import logging
import os

from dotenv import load_dotenv
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from src.app.common.exceptions import NotFound, StorageFailure
from src.app.common.utils.consts import InteractionKind, SubjectType
from src.app.v1.interaction.service.feed_service import FeedService
from src.app.v1.interaction.service.interaction_service import InteractionService, ToggleResult
from src.app.v1.post.repository.post import PostRepository
from src.app.v1.post.schema.post import PostCreateRequest, PostListResponse, PostResponse

load_dotenv()

logger = logging.getLogger(__name__)

PAGE_SIZE = 10
HOST = os.getenv("HOST", "127.0.0.1:8000")


class PostService:
    def __init__(self):
        self.post_repository = PostRepository()
        self.interaction_service = InteractionService()
        self.feed_service = FeedService()

    async def create_post(self, session: AsyncSession, user_id: int, post: PostCreateRequest) -> PostResponse:
        try:
            new_post = await self.post_repository.create_post(session, user_id, post)
            row = await self.post_repository.get_post(session, new_post.id)
        except SQLAlchemyError as e:
            await session.rollback()
            logger.exception(f"Failed to create post for user {user_id}")
            raise StorageFailure() from e

        logger.info(f"User {user_id} created post {new_post.id}")
        return PostResponse(**row)

    async def get_post(self, session: AsyncSession, post_id: int, viewer_id: int | None) -> PostResponse:
        try:
            row = await self.post_repository.get_post(session, post_id)
        except SQLAlchemyError as e:
            logger.exception(f"Failed to load post {post_id}")
            raise StorageFailure() from e

        if row is None:
            raise NotFound("Post não encontrado")

        [row] = await self.feed_service.annotate(session, SubjectType.POST, [row], viewer_id)
        return PostResponse(**row)

    async def get_posts(self, session: AsyncSession, page: int, viewer_id: int | None) -> PostListResponse:
        try:
            rows, total_count = await self.post_repository.get_posts(session, page, PAGE_SIZE)
        except SQLAlchemyError as e:
            logger.exception(f"Failed to load feed page {page}")
            raise StorageFailure() from e

        rows = await self.feed_service.annotate(session, SubjectType.POST, rows, viewer_id)

        base_url = f"http://{HOST}/api/posts"

        # 페이지네이션 정보
        next_page = f"{base_url}?page={page + 1}" if (page * PAGE_SIZE) < total_count else None
        previous_page = f"{base_url}?page={page - 1}" if page > 1 else None

        return PostListResponse(next=next_page, previous=previous_page, posts=[PostResponse(**row) for row in rows])

    async def get_user_posts_by_kind(
        self, session: AsyncSession, user_id: int, kind: InteractionKind
    ) -> list[PostResponse]:
        """사용자가 좋아요/저장한 게시글 목록"""
        interactions = await self.interaction_service.list_for_user(session, user_id, kind)
        post_ids = list(
            dict.fromkeys(i.subject_id for i in interactions if i.subject_type is SubjectType.POST)
        )

        try:
            rows = await self.post_repository.get_posts_by_ids(session, post_ids)
        except SQLAlchemyError as e:
            logger.exception(f"Failed to load {kind.value} posts of user {user_id}")
            raise StorageFailure() from e

        rows = await self.feed_service.annotate(session, SubjectType.POST, rows, user_id)
        return [PostResponse(**row) for row in rows]

    async def like_post(
        self, session: AsyncSession, user_id: int, post_id: int, like: bool | None = None
    ) -> ToggleResult:
        if like is None:
            return await self.interaction_service.toggle(session, user_id, SubjectType.POST, post_id, InteractionKind.LIKE)

        return await self.interaction_service.set_state(
            session, user_id, SubjectType.POST, post_id, InteractionKind.LIKE, present=like
        )

    async def save_post(
        self, session: AsyncSession, user_id: int, post_id: int, save: bool | None = None
    ) -> ToggleResult:
        if save is None:
            return await self.interaction_service.toggle(session, user_id, SubjectType.POST, post_id, InteractionKind.SAVE)

        return await self.interaction_service.set_state(
            session, user_id, SubjectType.POST, post_id, InteractionKind.SAVE, present=save
        )
